"""Authenticate a user id and password against the stored bcrypt hash."""

import asyncio

from provision.core.exceptions import StoreUnavailableError
from provision.core.security import verify_password
from provision.core.store import StoreStatus, UserStore
from provision.schemas.user import AuthOutcome, AuthRequest


async def authenticate(auth: AuthRequest, store: UserStore) -> AuthOutcome:
    """
    Check auth.password against the stored hash for auth.id.

    Returns found=False for an unknown id, found=True/valid=False for a wrong
    password and found=True/valid=True on a match. Raises StoreUnavailableError
    when the store fails. Read-only.
    """
    resp = await store.get(auth.id)
    if resp.status is StoreStatus.SERVER_ERROR:
        raise StoreUnavailableError(
            f"store returned {resp.status_code} while looking up user",
            status_code=resp.status_code,
        )
    if resp.document is None:
        return AuthOutcome(found=False, valid=False)

    stored_hash = resp.document.get("password") or ""
    valid = await asyncio.to_thread(
        verify_password, auth.password.get_secret_value(), stored_hash
    )
    return AuthOutcome(found=True, valid=valid)
