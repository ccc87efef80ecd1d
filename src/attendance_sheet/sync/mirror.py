from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from ..attendance.document import AttendanceDocument
from ..core.constants import MIRROR_FILENAME
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class LocalMirror:
    """Best-effort JSON snapshot of the last known document.

    Only read when the network load fails; never authoritative otherwise.
    """

    def __init__(self, path: Union[str, Path]):
        path = Path(path)
        self._path = path / MIRROR_FILENAME if path.is_dir() else path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, document: Union[AttendanceDocument, dict]) -> bool:
        payload = document.to_dict() if isinstance(document, AttendanceDocument) else document
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
            tmp.replace(self._path)
            return True
        except OSError as e:
            logger.warning("Could not write local mirror %s: %s", self._path, e)
            return False

    def read(self) -> Optional[AttendanceDocument]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Could not read local mirror %s: %s", self._path, e)
            return None

        try:
            return AttendanceDocument.from_dict(raw)
        except ValidationError as e:
            logger.warning("Ignoring invalid local mirror %s: %s", self._path, e)
            return None

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
