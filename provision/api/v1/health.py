"""Health check endpoint with user store connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from provision.core.config import Settings, get_settings
from provision.core.elastic import get_user_store
from provision.core.store import UserStore
from provision.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
async def get_health(
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status and store connectivity.
    Used by load balancers and monitoring.
    """
    store_status = "connected" if await store.ping() else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        store=store_status,
    )
