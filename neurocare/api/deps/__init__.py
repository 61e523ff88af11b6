"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_context,
    get_current_user,
    get_device_channel,
    get_live_session_registry,
    get_service_cache,
    get_session_controller,
    get_session_repository,
    get_therapy_session_service,
)

__all__ = [
    "get_auth_context",
    "get_current_user",
    "get_device_channel",
    "get_live_session_registry",
    "get_service_cache",
    "get_session_controller",
    "get_session_repository",
    "get_therapy_session_service",
]
