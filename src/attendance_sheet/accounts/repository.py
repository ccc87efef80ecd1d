from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Account, Session


class AccountRepository(Protocol):
    """Giao diện repository cho Account.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create_account(self, *, email: str, password_hash: str) -> Account:
        raise NotImplementedError

    def replace_document(self, account_id: str, *, roster: list, attendance: dict, updated_at: datetime) -> bool:
        """Whole-document replace. Returns False when the account does not exist."""

        raise NotImplementedError


class SessionRepository(Protocol):
    def create_session(self, *, session_id: str, account_id: str, created_at: datetime) -> None:
        raise NotImplementedError

    def get_session(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def delete_session(self, session_id: str) -> bool:
        raise NotImplementedError
