"""Password hashing and verification for stored user credentials."""

import bcrypt

from provision.core.config import BCRYPT_MAX_PASSWORD_BYTES
from provision.core.exceptions import HashingFailureError

# Bcrypt cost (rounds) used when no setting overrides it.
BCRYPT_ROUNDS = 12

# Sent in place of the stored hash whenever a user record leaves the service.
REDACTION_PLACEHOLDER = "REDACTED"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")
    # bcrypt ignores everything past 72 bytes; refuse instead of truncating.
    if len(pw_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HashingFailureError(
            f"password exceeds {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )
    try:
        hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as e:
        raise HashingFailureError(f"password hashing failed: {e}") from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Empty or malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")
    if not hashed or len(pw_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
