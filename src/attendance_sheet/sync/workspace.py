from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..attendance.document import AttendanceDocument
from ..core.constants import AUTOSAVE_DELAY_SECONDS
from ..core.exceptions import DomainError, NotFoundError
from .client import AttendanceApiClient
from .controller import SyncController
from .mirror import LocalMirror

logger = logging.getLogger(__name__)


class AttendanceWorkspace:
    """Client-side state of one signed-in user.

    Holds the in-memory document, auto-saves it through the API client and
    keeps the local mirror up to date. Network calls run in worker threads so
    the event loop stays responsive.
    """

    def __init__(
        self,
        client: AttendanceApiClient,
        mirror: Optional[LocalMirror] = None,
        *,
        delay: float = AUTOSAVE_DELAY_SECONDS,
    ):
        self._client = client
        self._mirror = mirror
        self._sync = SyncController(
            self._push,
            delay=delay,
            on_success=self._record_success,
            on_failure=self._record_failure,
        )

        self.document = AttendanceDocument()
        self.session_id: Optional[str] = None
        self.email = ""
        self.last_error: Optional[Exception] = None
        self.loaded_from_mirror = False

    @property
    def sync(self) -> SyncController:
        return self._sync

    @property
    def is_authenticated(self) -> bool:
        return self.session_id is not None

    def _open(self, payload: dict, document: AttendanceDocument) -> None:
        self.session_id = payload["sessionId"]
        self.email = payload.get("email", "")
        self._use(document)

    def _use(self, document: AttendanceDocument) -> None:
        self.document = document
        self._sync.bind(document)

    def _record_success(self) -> None:
        self.last_error = None

    def _record_failure(self, error: Exception) -> None:
        self.last_error = error

    async def sign_up(self, email: str, password: str) -> None:
        payload = await asyncio.to_thread(self._client.create_account, email, password)
        self._open(payload, AttendanceDocument())

    async def sign_in(self, email: str, password: str) -> None:
        payload = await asyncio.to_thread(self._client.login, email, password)
        self._open(payload, AttendanceDocument.from_dict(payload))
        if self._mirror:
            self._mirror.write(self.document)

    async def reload(self) -> bool:
        """Fetch the document; on failure fall back to the local mirror.

        Returns True when the network copy was used.
        """
        if not self.session_id:
            raise NotFoundError("Not signed in")
        try:
            payload = await asyncio.to_thread(self._client.load, self.session_id)
            document = AttendanceDocument.from_dict(payload)
        except DomainError as e:
            logger.warning("Load failed, falling back to local mirror: %s", e)
            self.last_error = e
            mirrored = self._mirror.read() if self._mirror else None
            if mirrored is not None:
                self.loaded_from_mirror = True
                self._use(mirrored)
            return False

        self.loaded_from_mirror = False
        self._use(document)
        if self._mirror:
            self._mirror.write(document)
        return True

    async def _push(self, snapshot: dict) -> None:
        if not self.session_id:
            raise NotFoundError("Not signed in")
        # Mirror first: a failed save must not lose the latest edits.
        if self._mirror:
            self._mirror.write(snapshot)
        await asyncio.to_thread(self._client.save, self.session_id, snapshot)

    async def save_now(self) -> bool:
        return await self._sync.save_now()

    async def sign_out(self) -> None:
        if not self.session_id:
            return
        await self._sync.flush()
        self._sync.close()
        try:
            await asyncio.to_thread(self._client.logout, self.session_id)
        except DomainError as e:
            logger.warning("Logout request failed: %s", e)
        self.session_id = None
        self.email = ""
        self._use(AttendanceDocument())
