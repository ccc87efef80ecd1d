from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Thực thể miền (domain): Account.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    `attendance` giữ nguyên dạng JSON đã lưu; chuẩn hoá nằm ở AttendanceDocument.
    """

    account_id: str
    email: str
    password_hash: str
    roster: list = field(default_factory=list)
    attendance: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Session:
    session_id: str
    account_id: str
    created_at: datetime
