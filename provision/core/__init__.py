"""Core configuration, security primitives and the user store port."""

from provision.core.config import get_settings, settings
from provision.core.elastic import get_user_store

__all__ = ["get_settings", "settings", "get_user_store"]
