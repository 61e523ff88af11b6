"""API routers."""

from .device import router as device_router
from .health import router as health_router
from .live_session import router as live_session_router
from .recommendations import router as recommendations_router
from .sessions import router as sessions_router

__all__ = [
    "device_router",
    "health_router",
    "live_session_router",
    "recommendations_router",
    "sessions_router",
]
