from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import MarkStatus
from ..core.exceptions import ValidationError

_STORABLE = (MarkStatus.PRESENT, MarkStatus.ABSENT)


def parse_status(value: Any) -> MarkStatus:
    """Accept "present"/"absent" (or the enum) and reject everything else."""
    try:
        status = MarkStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")
    if status not in _STORABLE:
        raise ValidationError(f"Invalid attendance status: {value!r}")
    return status


@dataclass(frozen=True)
class Mark:
    """Thực thể miền (domain): điểm danh của một người trong một ngày.

    Hai dạng dữ liệu cũ được chấp nhận khi đọc (chuỗi "present"/"absent" hoặc
    object {status, note}); khi ghi luôn dùng dạng object.
    """

    status: MarkStatus
    note: str = ""

    @classmethod
    def parse(cls, raw: Any) -> "Mark":
        if isinstance(raw, Mark):
            return raw
        if isinstance(raw, str):
            return cls(status=parse_status(raw))
        if isinstance(raw, dict):
            note = raw.get("note")
            if note is None:
                note = ""
            if not isinstance(note, str):
                raise ValidationError("Attendance note must be a string")
            return cls(status=parse_status(raw.get("status")), note=note)
        raise ValidationError(f"Invalid attendance mark: {raw!r}")

    def with_status(self, status: MarkStatus) -> "Mark":
        return Mark(status=status, note=self.note)

    def with_note(self, note: str) -> "Mark":
        return Mark(status=self.status, note=note)

    def to_dict(self) -> dict:
        return {"status": self.status.value, "note": self.note}


@dataclass(frozen=True)
class DayStats:
    """Read-model: thống kê một ngày trên danh sách hiện tại."""

    total: int
    present: int
    absent: int
    unmarked: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "unmarked": self.unmarked,
        }


@dataclass(frozen=True)
class MemberStats:
    name: str
    present: int
    absent: int
    total: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "present": self.present,
            "absent": self.absent,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class ChartPoint:
    """One bar of the attendance chart.

    `total` is only meaningful for the all-members series; the per-member
    series leaves it at present + absent (always 1).
    """

    date: str
    label: str
    present: int
    absent: int
    total: int

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "label": self.label,
            "present": self.present,
            "absent": self.absent,
            "total": self.total,
        }
