from __future__ import annotations

import csv
import io
from datetime import date

from attendance_sheet.attendance.document import AttendanceDocument
from attendance_sheet.attendance.export import export_filename, render_csv


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_filename_pattern():
    assert export_filename(date(2024, 3, 9)) == "attendance-with-notes-2024-03-09.csv"


def test_rows_columns_and_totals():
    doc = AttendanceDocument(roster=["Alice", "Bob"])
    doc.set_mark("2024-01-02", "Alice", "present")
    doc.set_mark("2024-01-01", "Alice", "absent")
    doc.set_mark("2024-01-03", "Alice", "present")

    assert doc.csv_header() == [
        "Name",
        "2024-01-01", "2024-01-01 Note",
        "2024-01-02", "2024-01-02 Note",
        "2024-01-03", "2024-01-03 Note",
        "Total Present", "Total Absent", "Attendance %",
    ]
    alice, bob = doc.to_csv_rows()
    assert alice == ["Alice", "absent", "", "present", "", "present", "", "2", "1", "66.7%"]
    assert bob == ["Bob", "unmarked", "", "unmarked", "", "unmarked", "", "0", "0", "0%"]


def test_notes_with_quotes_survive_csv_round_trip():
    doc = AttendanceDocument(roster=["Alice", "Bob"])
    doc.set_mark("2024-01-01", "Alice", "absent")
    doc.set_note("2024-01-01", "Alice", 'said "be right back", then left')
    doc.set_mark("2024-01-02", "Bob", "present")
    doc.set_note("2024-01-02", "Bob", '""')

    text = render_csv(doc)

    assert '""be right back""' in text
    header, *rows = _parse(text)
    dates = [h for h in header[1:-3] if not h.endswith(" Note")]
    recovered = set()
    for row in rows:
        for i, day in enumerate(dates):
            status, note = row[1 + 2 * i], row[2 + 2 * i]
            if status != "unmarked":
                recovered.add((row[0], day, status, note))

    expected = set()
    for name in doc.roster:
        for day in doc.dates:
            mark = doc.mark_of(day, name)
            if mark:
                expected.add((name, day, mark.status.value, mark.note))
    assert recovered == expected
