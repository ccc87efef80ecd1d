from __future__ import annotations

import re
from datetime import datetime

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import InvalidEmailError, ValidationError, WeakPasswordError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if len(value) < min_len:
        raise WeakPasswordError(f"{field_name} must be at least {min_len} characters long")
    return value


def normalize_email(value: str) -> str:
    """Trim + lowercase, then check the local@domain.tld shape."""
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise InvalidEmailError("Invalid email format")
    return email


def require_date_key(value: str) -> str:
    if not isinstance(value, str) or not _DATE_KEY_RE.match(value):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        datetime.strptime(value, DATE_KEY_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")
    return value
