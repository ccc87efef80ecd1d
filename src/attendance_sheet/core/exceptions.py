class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidEmailError(ValidationError):
    """Raised when an email does not look like local@domain.tld."""


class WeakPasswordError(ValidationError):
    """Raised when a password is shorter than the allowed minimum."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. Both cases share one message."""


class EmailTakenError(DomainError):
    """Raised when an account already exists for an email."""


class NotFoundError(DomainError):
    """Raised when a session or account does not exist."""


class StorageUnavailableError(DomainError):
    """Raised when the backing store (or the remote API) cannot be reached."""


class CorruptCredentialError(DomainError):
    """Raised when a stored password hash cannot be parsed."""
