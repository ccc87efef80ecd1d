from __future__ import annotations

import copy
import uuid
from datetime import datetime
from typing import Optional

import pytest

from attendance_sheet import create_app
from attendance_sheet.accounts.model import Account, Session
from attendance_sheet.container import build_services

FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryAccounts:
    def __init__(self):
        self.by_id: dict[str, Account] = {}
        self.saves = 0

    def get_by_id(self, account_id: str) -> Optional[Account]:
        return self.by_id.get(account_id)

    def get_by_email(self, email: str) -> Optional[Account]:
        for account in self.by_id.values():
            if account.email == email.lower():
                return account
        return None

    def create_account(self, *, email: str, password_hash: str) -> Account:
        now = datetime(2024, 1, 1, 9, 0, 0)
        account = Account(
            account_id=str(uuid.uuid4()),
            email=email.lower(),
            password_hash=password_hash,
            roster=[],
            attendance={},
            created_at=now,
            updated_at=now,
        )
        self.by_id[account.account_id] = account
        return account

    def replace_document(self, account_id: str, *, roster: list, attendance: dict, updated_at: datetime) -> bool:
        current = self.by_id.get(account_id)
        if not current:
            return False
        self.saves += 1
        self.by_id[account_id] = Account(
            account_id=current.account_id,
            email=current.email,
            password_hash=current.password_hash,
            roster=copy.deepcopy(roster),
            attendance=copy.deepcopy(attendance),
            created_at=current.created_at,
            updated_at=updated_at,
        )
        return True


class InMemorySessions:
    def __init__(self):
        self.by_id: dict[str, Session] = {}

    def create_session(self, *, session_id: str, account_id: str, created_at: datetime) -> None:
        self.by_id[session_id] = Session(session_id=session_id, account_id=account_id, created_at=created_at)

    def get_session(self, session_id: str) -> Optional[Session]:
        return self.by_id.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        return self.by_id.pop(session_id, None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 8, 30, 0)


@pytest.fixture
def accounts_repo() -> InMemoryAccounts:
    return InMemoryAccounts()


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def container(accounts_repo, sessions_repo):
    return build_services(accounts_repo, sessions_repo, hash_method=FAST_HASH)


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="attendance_sheet.config.testing")
    return app.test_client()
