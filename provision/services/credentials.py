"""Credential resolution for user writes: keep, validate and hash passwords."""

import asyncio
from typing import TYPE_CHECKING

from provision.core.config import BCRYPT_MAX_PASSWORD_BYTES
from provision.core.exceptions import StoreUnavailableError, WeakCredentialError
from provision.core.security import hash_password
from provision.core.store import StoreStatus, UserStore
from provision.schemas.user import User, UserUpsert

if TYPE_CHECKING:
    from provision.core.config import Settings


async def resolve_credential(
    user: UserUpsert,
    store: UserStore,
    settings: "Settings",
) -> User:
    """
    Return the document to persist for a write request, with its password resolved.

    When the request keeps the password, the stored hash of the existing user is
    carried forward (puts replace the whole document). A user that does not exist
    yet must supply a password. A supplied password must be between
    PASSWORD_MIN_LEN and 72 UTF-8 bytes and is bcrypt-hashed with BCRYPT_ROUNDS.

    Reads from the store at most once and never writes.
    Raises WeakCredentialError, StoreUnavailableError or HashingFailureError.
    """
    secret = user.password.get_secret_value() if user.password is not None else ""

    if user.keeps_password:
        existing = await store.get(user.id)
        if existing.status is StoreStatus.SERVER_ERROR:
            raise StoreUnavailableError(
                f"store returned {existing.status_code} while looking up user",
                status_code=existing.status_code,
            )
        if existing.document is not None:
            return user.to_user(existing.document.get("password") or "")
        if not secret:
            raise WeakCredentialError("a password is required for new users")

    # Length policy is in UTF-8 bytes, the unit bcrypt consumes.
    secret_len = len(secret.encode("utf-8"))
    if secret_len < settings.PASSWORD_MIN_LEN:
        raise WeakCredentialError(
            f"password must be at least {settings.PASSWORD_MIN_LEN} bytes"
        )
    if secret_len > BCRYPT_MAX_PASSWORD_BYTES:
        raise WeakCredentialError(
            f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
        )

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await asyncio.to_thread(hash_password, secret, settings.BCRYPT_ROUNDS)
    return user.to_user(password_hash)
