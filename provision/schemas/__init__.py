"""Pydantic request/response schemas."""

from provision.schemas.health import HealthResponse
from provision.schemas.user import (
    AccessCheck,
    AuthOutcome,
    AuthRequest,
    StoreResult,
    User,
    UserResult,
    UserUpsert,
)

__all__ = [
    "AccessCheck",
    "AuthOutcome",
    "AuthRequest",
    "HealthResponse",
    "StoreResult",
    "User",
    "UserResult",
    "UserUpsert",
]
