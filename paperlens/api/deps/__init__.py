"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    SessionRegistry,
    get_conversation,
    get_service_cache,
    get_session_registry,
)

__all__ = [
    "ServiceCache",
    "SessionRegistry",
    "get_conversation",
    "get_service_cache",
    "get_session_registry",
]
