from __future__ import annotations

from attendance_sheet.attendance.document import AttendanceDocument
from attendance_sheet.sync.mirror import LocalMirror


def test_write_then_read(tmp_path):
    mirror = LocalMirror(tmp_path / "backup.json")
    doc = AttendanceDocument(roster=["Alice"])
    doc.set_mark("2024-01-01", "Alice", "present")

    assert mirror.write(doc) is True

    restored = mirror.read()
    assert restored is not None
    assert restored.to_dict() == doc.to_dict()


def test_directory_path_uses_default_filename(tmp_path):
    mirror = LocalMirror(tmp_path)

    mirror.write({"roster": [], "attendance": {}})

    assert mirror.path == tmp_path / "attendance-backup.json"
    assert mirror.path.exists()


def test_missing_or_invalid_mirror_reads_as_none(tmp_path):
    path = tmp_path / "backup.json"
    mirror = LocalMirror(path)
    assert mirror.read() is None

    path.write_text("{not json", encoding="utf-8")
    assert mirror.read() is None

    path.write_text('{"roster": "Alice", "attendance": {}}', encoding="utf-8")
    assert mirror.read() is None


def test_legacy_mirror_is_normalized(tmp_path):
    path = tmp_path / "backup.json"
    path.write_text('{"names": ["Alice"], "attendance": {"2024-01-01": {"Alice": "absent"}}}', encoding="utf-8")

    restored = LocalMirror(path).read()

    assert restored.to_dict()["attendance"]["2024-01-01"]["Alice"] == {"status": "absent", "note": ""}


def test_clear(tmp_path):
    mirror = LocalMirror(tmp_path / "backup.json")
    mirror.write({"roster": [], "attendance": {}})

    mirror.clear()
    mirror.clear()

    assert mirror.read() is None
