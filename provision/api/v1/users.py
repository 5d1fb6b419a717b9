"""User endpoints: upsert, fetch (password redacted) and password authentication."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from provision.core.config import Settings, get_settings
from provision.core.elastic import get_user_store
from provision.core.exceptions import (
    HashingFailureError,
    StoreUnavailableError,
    WeakCredentialError,
)
from provision.core.store import StoreStatus, UserStore
from provision.schemas.user import AuthRequest, StoreResult, UserResult, UserUpsert
from provision.services.authenticator import authenticate
from provision.services.users import get_user, upsert_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=StoreResult)
async def post_user(
    body: UserUpsert,
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> StoreResult:
    """
    Create or replace a user record.

    A missing password, the redaction placeholder or keep_password=true keeps
    the stored password; otherwise the password is validated and hashed.
    """
    logger.info(
        "Upsert user record",
        extra={"user_id": body.id, "display_name": body.display_name},
    )
    try:
        resp = await upsert_user(body, store, settings)
    except WeakCredentialError as e:
        logger.warning("Upsert rejected", extra={"user_id": body.id, "reason": e.message})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except (StoreUnavailableError, HashingFailureError) as e:
        logger.error("Upsert failure", extra={"user_id": body.id, "reason": e.message[:500]})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="there was a problem upserting the user",
        ) from e

    if resp.status is not StoreStatus.SUCCESS:
        logger.error(
            "Store returned a non 2xx on upsert",
            extra={"user_id": body.id, "status_code": resp.status_code},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="store returned a non 2xx status",
        )
    return StoreResult.model_validate(resp.body)


@router.post("/auth", response_model=bool)
async def post_user_auth(
    body: AuthRequest,
    store: Annotated[UserStore, Depends(get_user_store)],
) -> bool:
    """Check a user id and password. 404 for an unknown user, 400 for a bad password."""
    try:
        outcome = await authenticate(body, store)
    except StoreUnavailableError as e:
        logger.error("Auth error", extra={"user_id": body.id, "reason": e.message[:500]})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        ) from e

    if not outcome.found:
        logger.warning("User %s not found", body.id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User account not found.",
        )
    if not outcome.valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad password.")
    return True


@router.get("/{user_id}", response_model=UserResult)
async def get_user_by_id(
    user_id: str,
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UserResult:
    """Return the stored user envelope with the password hash redacted."""
    try:
        result = await get_user(user_id, store)
    except StoreUnavailableError as e:
        logger.error("Store error", extra={"user_id": user_id, "reason": e.message[:500]})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error communicating with database.",
        ) from e
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found.",
        )
    return result
