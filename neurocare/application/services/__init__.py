"""Service orchestrators."""

from .live_session_registry import LiveSessionRegistry
from .session_repository import SqlSessionRepository
from .therapy_session_service import TherapySessionService

__all__ = [
    "LiveSessionRegistry",
    "SqlSessionRepository",
    "TherapySessionService",
]
