"""
Therapy session service orchestrator.

Coordinates history, deletion, recommendation and progress use cases over
a SessionRepository.

Dependencies: neurocare.core
System role: Session history use case orchestration
"""

import logging
from uuid import UUID

from neurocare.core.exceptions import SessionNotFoundError
from neurocare.core.interfaces import SessionRepository
from neurocare.core.progress import summarize_progress
from neurocare.core.recommendation_engine import RecommendationEngine
from neurocare.models.recommendation import RecommendationReport
from neurocare.models.session import ProgressSummary, SessionRecord
from neurocare.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class TherapySessionService:
    """Session history service orchestrator."""

    def __init__(
        self,
        repository: SessionRepository,
        engine: RecommendationEngine | None = None,
    ) -> None:
        """
        Initialize service.

        Args:
            repository: Store of completed session records
            engine: Recommendation engine (a default one is created if omitted)
        """
        self.repository = repository
        self.engine = engine or RecommendationEngine()

    async def list_sessions(self, user_id: str, limit: int | None = None) -> list[SessionRecord]:
        """
        Get a user's session history.

        Args:
            user_id: Owning user
            limit: Maximum number of sessions (newest kept)

        Returns:
            list[SessionRecord]: Newest first
        """
        return list(await self.repository.list_by_user(user_id, limit=limit))

    async def delete_session(self, user_id: str, record_id: UUID) -> None:
        """
        Delete one of the user's sessions.

        Raises:
            SessionNotFoundError: No such session owned by this user
        """
        deleted = await self.repository.delete_one(record_id, user_id)
        if not deleted:
            raise SessionNotFoundError(str(record_id))
        log_with_context(logger, logging.INFO, "Session deleted", record_id=record_id)

    async def delete_all_sessions(self, user_id: str) -> int:
        """
        Delete the user's entire history.

        Returns:
            int: Number of sessions removed
        """
        deleted = await self.repository.delete_all_for_user(user_id)
        log_with_context(logger, logging.INFO, "Session history cleared", deleted=deleted)
        return deleted

    async def get_recommendations(self, user_id: str) -> RecommendationReport:
        """
        Build recommendations from the user's full history.

        Returns:
            RecommendationReport: One recommendation per past session
        """
        sessions = await self.repository.list_by_user(user_id)
        return self.engine.build_report(sessions)

    async def get_progress(self, user_id: str, window: str = "weekly") -> ProgressSummary:
        """
        Summarize the user's sessions inside a window.

        Raises:
            ValueError: Unknown window name
        """
        sessions = await self.repository.list_by_user(user_id)
        return summarize_progress(sessions, window=window)
