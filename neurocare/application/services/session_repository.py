"""
SQL-backed session repository.

Implements the SessionRepository contract on top of the async CRUD layer.
Each call runs in its own database session and transaction, so the
repository can be shared by long-lived session controllers.

Dependencies: sqlalchemy, neurocare.boundary.db
System role: Persistence adapter for therapy session records
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from neurocare.boundary.db.CRUD.therapy_session_crud import therapy_session_crud
from neurocare.core.exceptions import PersistenceError
from neurocare.models.session import SessionRecord
from neurocare.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class SqlSessionRepository:
    """SessionRepository backed by the therapy_sessions table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize repository with a session factory.

        Args:
            session_factory: Factory producing async database sessions
        """
        self._session_factory = session_factory

    async def save(self, record: SessionRecord) -> UUID:
        """
        Insert a completed session.

        Args:
            record: Session to persist; any id on it is ignored

        Returns:
            UUID: Identifier assigned by the database

        Raises:
            PersistenceError: If the insert or commit fails
        """
        try:
            async with self._session_factory() as db:
                row = await therapy_session_crud.create(
                    db,
                    user_id=record.user_id,
                    timestamp=record.timestamp,
                    duration=record.duration,
                    vibration_intensity=record.vibration_intensity,
                    average_temperature=record.average_temperature,
                    average_heart_rate=record.average_heart_rate,
                )
                await db.commit()
                return row.id
        except SQLAlchemyError as exc:
            log_exception_with_context(
                logger, "Failed to save session", exc, user_id=record.user_id
            )
            raise PersistenceError(
                "save session failed: session store unavailable",
                operation="save",
                details={"error": str(exc)},
            ) from exc

    async def list_by_user(
        self,
        user_id: str,
        limit: int | None = None,
        since: datetime | None = None,
    ) -> list[SessionRecord]:
        """
        Fetch a user's sessions, newest first.

        Raises:
            PersistenceError: If the query fails
        """
        try:
            async with self._session_factory() as db:
                rows = await therapy_session_crud.get_by_user(
                    db, user_id, limit=limit, since=since
                )
                return [SessionRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            log_exception_with_context(
                logger, "Failed to list sessions", exc, user_id=user_id
            )
            raise PersistenceError(
                "list sessions failed: session store unavailable",
                operation="list",
                details={"error": str(exc)},
            ) from exc

    async def delete_one(self, record_id: UUID, user_id: str) -> bool:
        """
        Delete one session owned by user_id.

        Returns:
            bool: False if no matching session exists for this user

        Raises:
            PersistenceError: If the delete fails
        """
        try:
            async with self._session_factory() as db:
                deleted = await therapy_session_crud.delete_for_user(db, record_id, user_id)
                await db.commit()
                return deleted
        except SQLAlchemyError as exc:
            log_exception_with_context(
                logger, "Failed to delete session", exc, record_id=record_id, user_id=user_id
            )
            raise PersistenceError(
                "delete session failed: session store unavailable",
                operation="delete",
                details={"error": str(exc)},
            ) from exc

    async def delete_all_for_user(self, user_id: str) -> int:
        """
        Delete every session owned by user_id.

        Returns:
            int: Number of sessions removed

        Raises:
            PersistenceError: If the delete fails
        """
        try:
            async with self._session_factory() as db:
                deleted = await therapy_session_crud.delete_all_for_user(db, user_id)
                await db.commit()
                return deleted
        except SQLAlchemyError as exc:
            log_exception_with_context(
                logger, "Failed to delete sessions", exc, user_id=user_id
            )
            raise PersistenceError(
                "delete all sessions failed: session store unavailable",
                operation="delete_all",
                details={"error": str(exc)},
            ) from exc
