from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import normalize_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_SESSION_DAYS, MIN_PASSWORD_LENGTH, PASSWORD_HASH_METHOD
from ..core.exceptions import (
    CorruptCredentialError,
    EmailTakenError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .credentials import hash_password, new_session_id, verify_password
from .model import Account
from .repository import AccountRepository, SessionRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AccountService:
    """Use case: sign up + login."""

    def __init__(self, accounts: AccountRepository, *, hash_method: str = PASSWORD_HASH_METHOD):
        self._accounts = accounts
        self._hash_method = hash_method

    def create(self, email: str, password: str) -> Account:
        if not email or not password:
            raise ValidationError("Email and password are required")
        email = normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._accounts.get_by_email(email):
            raise EmailTakenError("Email already registered")

        account = self._accounts.create_account(
            email=email,
            password_hash=hash_password(password, method=self._hash_method),
        )
        logger.info("Created account %s", account.account_id)
        return account

    def authenticate(self, email: str, password: str) -> Account:
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not isinstance(password, str):
            raise ValidationError("Password must be a string")
        email = normalize_email(email)

        account = self._accounts.get_by_email(email)
        if not account:
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        try:
            ok = verify_password(password, account.password_hash)
        except CorruptCredentialError:
            logger.warning("Account %s has a malformed password hash", account.account_id)
            ok = False

        if not ok:
            raise InvalidCredentialsError(INVALID_CREDENTIALS)
        return account


class SessionService:
    """Use case: opaque session ids handed to the client after login."""

    def __init__(self, sessions: SessionRepository, *, lifetime_days: int = DEFAULT_SESSION_DAYS):
        self._sessions = sessions
        self._lifetime = timedelta(days=int(lifetime_days))

    def open(self, account: Account, *, now: Optional[datetime] = None) -> str:
        session_id = new_session_id()
        self._sessions.create_session(
            session_id=session_id,
            account_id=account.account_id,
            created_at=now or now_local(),
        )
        return session_id

    def resolve(self, session_id: str, *, now: Optional[datetime] = None) -> str:
        session_id = require_non_empty(session_id, "Session ID")
        session = self._sessions.get_session(session_id)
        if not session:
            raise NotFoundError("Session not found")
        if (now or now_local()) - session.created_at > self._lifetime:
            raise NotFoundError("Session expired")
        return session.account_id

    def close(self, session_id: str) -> None:
        session_id = require_non_empty(session_id, "Session ID")
        self._sessions.delete_session(session_id)
