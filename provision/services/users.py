"""User upsert and lookup on top of the credential resolver and the store port."""

from typing import TYPE_CHECKING

from pydantic import ValidationError

from provision.core.exceptions import StoreUnavailableError
from provision.core.store import StoreResponse, StoreStatus, UserStore
from provision.schemas.user import UserResult, UserUpsert
from provision.services.credentials import resolve_credential

if TYPE_CHECKING:
    from provision.core.config import Settings


async def upsert_user(
    user: UserUpsert,
    store: UserStore,
    settings: "Settings",
) -> StoreResponse:
    """Resolve the password, then replace the user document. Nothing is written if resolution fails."""
    document = await resolve_credential(user, store, settings)
    return await store.put(document.id, document.model_dump())


async def get_user(user_id: str, store: UserStore) -> UserResult | None:
    """Fetch a user with the password hash replaced by the redaction placeholder; None if not found."""
    resp = await store.get(user_id)
    if resp.status is StoreStatus.SERVER_ERROR:
        raise StoreUnavailableError(
            f"store returned {resp.status_code} while looking up user",
            status_code=resp.status_code,
        )
    if resp.document is None:
        return None
    try:
        result = UserResult.model_validate(resp.body)
    except ValidationError as e:
        raise StoreUnavailableError(
            f"stored user document is malformed: {e.error_count()} validation error(s)",
            status_code=resp.status_code,
        ) from e
    result.source = result.source.redacted()
    return result
