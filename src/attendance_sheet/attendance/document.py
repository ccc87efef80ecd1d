from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_date_key
from ..core.constants import ALL_MEMBERS, CHART_LABEL_FORMAT
from ..core.enums import MarkStatus
from ..core.exceptions import ValidationError
from .model import ChartPoint, DayStats, Mark, MemberStats, parse_status

Listener = Callable[["AttendanceDocument"], None]


def attendance_percentage(present: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when nothing is marked."""
    if total <= 0:
        return 0
    return int(math.floor(present * 100 / total + 0.5))


def format_percentage(present: int, total: int) -> str:
    if total <= 0:
        return "0%"
    return f"{present * 100 / total:.1f}%"


class AttendanceDocument:
    """In-memory roster + date-indexed attendance map.

    All reads go through `from_dict`, which is the only place legacy mark
    shapes are handled. Every mutation that changes state notifies the
    subscribed listeners (the sync controller hooks in here).
    """

    def __init__(self, roster: Optional[Iterable[str]] = None, attendance: Optional[dict] = None):
        self._roster: list[str] = []
        self._attendance: dict[str, dict[str, Mark]] = {}
        self._listeners: list[Listener] = []

        for name in roster or []:
            if not isinstance(name, str):
                raise ValidationError("Roster names must be strings")
            if name not in self._roster:
                self._roster.append(name)

        if attendance is not None and not isinstance(attendance, dict):
            raise ValidationError("Attendance must be an object")
        for date_key, bucket in (attendance or {}).items():
            require_date_key(date_key)
            if not isinstance(bucket, dict):
                raise ValidationError(f"Attendance for {date_key} must be an object")
            self._attendance[date_key] = {str(name): Mark.parse(raw) for name, raw in bucket.items()}

    # ------------------------------------------------------------------
    # serialization
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Any) -> "AttendanceDocument":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("Document must be an object")
        roster = data.get("roster")
        if roster is None:
            roster = data.get("names")
        if roster is not None and not isinstance(roster, list):
            raise ValidationError("Roster must be a list")
        return cls(roster=roster, attendance=data.get("attendance"))

    def to_dict(self) -> dict:
        return {
            "roster": list(self._roster),
            "attendance": {
                date_key: {name: mark.to_dict() for name, mark in bucket.items()}
                for date_key, bucket in self._attendance.items()
            },
        }

    @property
    def roster(self) -> list[str]:
        return list(self._roster)

    @property
    def dates(self) -> list[str]:
        """Every date with a bucket, chronological."""
        return sorted(self._attendance)

    # ------------------------------------------------------------------
    # change notification
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # roster
    # ------------------------------------------------------------------
    def add_names(self, bulk_text: str) -> list[str]:
        added: list[str] = []
        for line in (bulk_text or "").splitlines():
            name = line.strip()
            if name and name not in self._roster:
                self._roster.append(name)
                added.append(name)
        if added:
            self._changed()
        return added

    def add_name(self, name: str) -> bool:
        name = (name or "").strip()
        if not name or name in self._roster:
            return False
        self._roster.append(name)
        self._changed()
        return True

    def remove_name(self, name: str) -> bool:
        if name not in self._roster:
            return False
        self._roster.remove(name)
        # Buckets stay even when they become empty.
        for bucket in self._attendance.values():
            bucket.pop(name, None)
        self._changed()
        return True

    # ------------------------------------------------------------------
    # marks
    # ------------------------------------------------------------------
    def set_mark(self, date_key: str, name: str, status) -> None:
        require_date_key(date_key)
        status = parse_status(status)
        bucket = self._attendance.setdefault(date_key, {})
        current = bucket.get(name)
        bucket[name] = current.with_status(status) if current else Mark(status=status)
        self._changed()

    def set_note(self, date_key: str, name: str, note: str) -> bool:
        current = self._attendance.get(date_key, {}).get(name)
        if current is None:
            return False
        self._attendance[date_key][name] = current.with_note((note or "").strip())
        self._changed()
        return True

    def mark_of(self, date_key: str, name: str) -> Optional[Mark]:
        return self._attendance.get(date_key, {}).get(name)

    def status_of(self, date_key: str, name: str) -> MarkStatus:
        mark = self.mark_of(date_key, name)
        return mark.status if mark else MarkStatus.UNMARKED

    def note_of(self, date_key: str, name: str) -> str:
        mark = self.mark_of(date_key, name)
        return mark.note if mark else ""

    # ------------------------------------------------------------------
    # derivations
    # ------------------------------------------------------------------
    def stats(self, date_key: str) -> DayStats:
        total = len(self._roster)
        present = sum(1 for n in self._roster if self.status_of(date_key, n) == MarkStatus.PRESENT)
        absent = sum(1 for n in self._roster if self.status_of(date_key, n) == MarkStatus.ABSENT)
        return DayStats(total=total, present=present, absent=absent, unmarked=total - present - absent)

    def _totals_for(self, name: str) -> tuple[int, int]:
        present = absent = 0
        for bucket in self._attendance.values():
            mark = bucket.get(name)
            if mark is None:
                continue
            if mark.status == MarkStatus.PRESENT:
                present += 1
            elif mark.status == MarkStatus.ABSENT:
                absent += 1
        return present, absent

    def per_member_stats(self) -> list[MemberStats]:
        out: list[MemberStats] = []
        for name in self._roster:
            present, absent = self._totals_for(name)
            total = present + absent
            out.append(
                MemberStats(
                    name=name,
                    present=present,
                    absent=absent,
                    total=total,
                    percentage=attendance_percentage(present, total),
                )
            )
        # sorted() is stable: ties keep roster order.
        return sorted(out, key=lambda s: s.percentage, reverse=True)

    def chart_series(self, member: str = ALL_MEMBERS) -> list[ChartPoint]:
        points: list[ChartPoint] = []
        for date_key in self.dates:
            label = parse_iso_date(date_key).strftime(CHART_LABEL_FORMAT)
            if member == ALL_MEMBERS:
                day = self.stats(date_key)
                points.append(
                    ChartPoint(
                        date=date_key,
                        label=label,
                        present=day.present,
                        absent=day.absent,
                        total=day.present + day.absent,
                    )
                )
                continue

            status = self.status_of(date_key, member)
            if status == MarkStatus.UNMARKED:
                continue
            present = 1 if status == MarkStatus.PRESENT else 0
            absent = 1 if status == MarkStatus.ABSENT else 0
            points.append(ChartPoint(date=date_key, label=label, present=present, absent=absent, total=1))
        return points

    def csv_header(self) -> list[str]:
        header = ["Name"]
        for date_key in self.dates:
            header.extend([date_key, f"{date_key} Note"])
        header.extend(["Total Present", "Total Absent", "Attendance %"])
        return header

    def to_csv_rows(self) -> list[list[str]]:
        dates = self.dates
        rows: list[list[str]] = []
        for name in self._roster:
            row = [name]
            present = absent = 0
            for date_key in dates:
                status = self.status_of(date_key, name)
                row.extend([status.value, self.note_of(date_key, name)])
                if status == MarkStatus.PRESENT:
                    present += 1
                elif status == MarkStatus.ABSENT:
                    absent += 1
            row.extend([str(present), str(absent), format_percentage(present, present + absent)])
            rows.append(row)
        return rows
