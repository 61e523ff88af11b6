"""
Therapy session CRUD operations.

Extends the generic CRUD with per-user history queries and owner-scoped
deletes.

Dependencies: sqlalchemy, neurocare.boundary.db.models
System role: Session history persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from neurocare.boundary.db.models.therapy_session_model import TherapySessionModel
from neurocare.boundary.db.CRUD.base_crud import BaseCRUD


class TherapySessionCRUD(BaseCRUD[TherapySessionModel]):
    """
    CRUD operations for TherapySessionModel.

    All user-facing reads and deletes are filtered by user_id so one user
    can never see or remove another user's sessions.
    """

    def __init__(self) -> None:
        """Initialize TherapySessionCRUD with TherapySessionModel."""
        super().__init__(TherapySessionModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = None,
        since: datetime | None = None,
    ) -> Sequence[TherapySessionModel]:
        """
        Retrieve a user's sessions, newest first.

        Args:
            session: Async database session
            user_id: Owning user identifier
            limit: Maximum number of sessions to return
            since: Only sessions completed at or after this instant

        Returns:
            Sequence of TherapySessionModels ordered by timestamp descending
        """
        stmt = (
            select(TherapySessionModel)
            .where(TherapySessionModel.user_id == user_id)
            .order_by(TherapySessionModel.timestamp.desc())
        )
        if since is not None:
            stmt = stmt.where(TherapySessionModel.timestamp >= since)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: str,
    ) -> bool:
        """
        Delete one session if it belongs to user_id.

        Args:
            session: Async database session
            id: Session UUID
            user_id: Requesting user identifier

        Returns:
            True if a row was deleted, False if missing or owned by someone else
        """
        stmt = delete(TherapySessionModel).where(
            TherapySessionModel.id == id,
            TherapySessionModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete_all_for_user(self, session: AsyncSession, user_id: str) -> int:
        """
        Delete every session owned by user_id.

        Args:
            session: Async database session
            user_id: Owning user identifier

        Returns:
            Number of rows deleted
        """
        stmt = delete(TherapySessionModel).where(TherapySessionModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.rowcount


therapy_session_crud = TherapySessionCRUD()
