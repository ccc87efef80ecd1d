from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..accounts.repository import AccountRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_date_key
from ..core.constants import ALL_MEMBERS
from ..core.exceptions import NotFoundError
from .document import AttendanceDocument
from .export import export_filename, render_csv
from .model import DayStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: bytes


class AttendanceService:
    """Use case: load/save the roster + attendance document of one account."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def load_document(self, account_id: str) -> AttendanceDocument:
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account not found")
        return AttendanceDocument(roster=account.roster, attendance=account.attendance)

    def save_document(self, account_id: str, roster: Any, attendance: Any) -> AttendanceDocument:
        """Whole-document replace; no field-level merge with what is stored."""

        document = AttendanceDocument.from_dict({"roster": roster, "attendance": attendance})
        payload = document.to_dict()
        ok = self._accounts.replace_document(
            account_id,
            roster=payload["roster"],
            attendance=payload["attendance"],
            updated_at=now_local().replace(microsecond=0),
        )
        if not ok:
            raise NotFoundError("Account not found")
        logger.debug("Saved document for %s (%d names, %d dates)", account_id, len(payload["roster"]), len(payload["attendance"]))
        return document

    def stats_for(self, account_id: str, date_key: str) -> DayStats:
        require_date_key(date_key)
        return self.load_document(account_id).stats(date_key)

    def analytics_for(self, account_id: str, member: str = ALL_MEMBERS) -> dict:
        document = self.load_document(account_id)
        return {
            "member": member,
            "chart": [p.to_dict() for p in document.chart_series(member)],
            "members": [s.to_dict() for s in document.per_member_stats()],
        }

    def export_csv(self, account_id: str, *, today: Optional[date] = None) -> CsvExport:
        document = self.load_document(account_id)
        # utf-8-sig so spreadsheet apps detect the encoding.
        return CsvExport(filename=export_filename(today), content=render_csv(document).encode("utf-8-sig"))
