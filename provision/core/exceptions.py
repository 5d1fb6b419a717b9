"""Error types raised by the credential and authentication services."""


class ProvisionError(Exception):
    """Base class for user-service failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class WeakCredentialError(ProvisionError):
    """Raised when a supplied password does not meet the length policy."""


class StoreUnavailableError(ProvisionError):
    """Raised when the user store is unreachable or answers with a server error. Safe to retry."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class HashingFailureError(ProvisionError):
    """Raised when the password hashing primitive fails."""
