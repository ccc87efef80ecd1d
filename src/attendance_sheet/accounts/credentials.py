"""Password hashing and session tokens."""
from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import PASSWORD_HASH_METHOD, SESSION_TOKEN_BYTES
from ..core.exceptions import CorruptCredentialError


def hash_password(password: str, *, method: str = PASSWORD_HASH_METHOD) -> str:
    # werkzeug generates a fresh random salt on every call.
    return generate_password_hash(password, method=method)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash or password_hash.count("$") < 2:
        raise CorruptCredentialError("Stored password hash is malformed")
    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError) as e:
        raise CorruptCredentialError("Stored password hash is malformed") from e


def new_session_id() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
