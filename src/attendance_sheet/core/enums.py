from __future__ import annotations

from enum import Enum


class MarkStatus(str, Enum):
    """Trạng thái điểm danh của một người trong một ngày.

    UNMARKED chỉ là kết quả tra cứu, không bao giờ được lưu.
    """

    PRESENT = "present"
    ABSENT = "absent"
    UNMARKED = "unmarked"


class SyncState(str, Enum):
    """Trạng thái của bộ đồng bộ tự động."""

    IDLE = "idle"
    PENDING = "pending"
    FAILED = "failed"
