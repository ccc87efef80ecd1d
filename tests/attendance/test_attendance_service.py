from __future__ import annotations

from datetime import date

import pytest

from attendance_sheet.attendance.service import AttendanceService
from attendance_sheet.core.exceptions import NotFoundError, ValidationError


def test_load_missing_account(accounts_repo):
    with pytest.raises(NotFoundError):
        AttendanceService(accounts_repo).load_document("missing")


def test_save_replaces_whole_document_and_normalizes(accounts_repo):
    account = accounts_repo.create_account(email="a@b.com", password_hash="x")
    svc = AttendanceService(accounts_repo)
    svc.save_document(account.account_id, ["Alice", "Bob"], {"2024-01-01": {"Alice": "present", "Bob": "absent"}})

    svc.save_document(account.account_id, ["Carol"], {})

    stored = accounts_repo.get_by_id(account.account_id)
    assert stored.roster == ["Carol"]
    assert stored.attendance == {}
    assert stored.updated_at != account.updated_at


def test_save_writes_current_mark_form(accounts_repo):
    account = accounts_repo.create_account(email="a@b.com", password_hash="x")
    svc = AttendanceService(accounts_repo)

    svc.save_document(account.account_id, ["Alice"], {"2024-01-01": {"Alice": "present"}})

    stored = accounts_repo.get_by_id(account.account_id)
    assert stored.attendance == {"2024-01-01": {"Alice": {"status": "present", "note": ""}}}


def test_save_missing_account(accounts_repo):
    with pytest.raises(NotFoundError):
        AttendanceService(accounts_repo).save_document("missing", [], {})


def test_save_rejects_bad_payload(accounts_repo):
    account = accounts_repo.create_account(email="a@b.com", password_hash="x")

    with pytest.raises(ValidationError):
        AttendanceService(accounts_repo).save_document(account.account_id, ["Alice"], {"2024-01-01": {"Alice": "late"}})
    assert accounts_repo.saves == 0


def test_stats_analytics_and_export(accounts_repo):
    account = accounts_repo.create_account(email="a@b.com", password_hash="x")
    svc = AttendanceService(accounts_repo)
    svc.save_document(account.account_id, ["Alice", "Bob"], {"2024-01-01": {"Alice": "present", "Bob": "absent"}})

    assert svc.stats_for(account.account_id, "2024-01-01").to_dict() == {
        "total": 2,
        "present": 1,
        "absent": 1,
        "unmarked": 0,
    }

    analytics = svc.analytics_for(account.account_id, "Bob")
    assert analytics["chart"] == [{"date": "2024-01-01", "label": "Jan 01", "present": 0, "absent": 1, "total": 1}]
    assert [m["name"] for m in analytics["members"]] == ["Alice", "Bob"]

    export = svc.export_csv(account.account_id, today=date(2024, 1, 5))
    assert export.filename == "attendance-with-notes-2024-01-05.csv"
    text = export.content.decode("utf-8-sig")
    assert text.splitlines() == [
        "Name,2024-01-01,2024-01-01 Note,Total Present,Total Absent,Attendance %",
        "Alice,present,,1,0,100.0%",
        "Bob,absent,,0,1,0.0%",
    ]
