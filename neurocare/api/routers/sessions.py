"""
Session history API endpoints.

Routes:
- GET /sessions - List the user's sessions, newest first
- GET /sessions/progress - Progress summary for a window
- DELETE /sessions/{id} - Delete one session
- DELETE /sessions - Delete the user's entire history

Dependencies: neurocare.application.services, neurocare.models
System role: Session history HTTP API
"""

import logging
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from neurocare.api.deps import get_current_user, get_therapy_session_service
from neurocare.application.services import TherapySessionService
from neurocare.core.formatting import format_duration
from neurocare.models.common import DeleteResult
from neurocare.models.session import ProgressSummary, SessionResponse

from .error_handling import handle_domain_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[SessionResponse])
@handle_domain_errors("list sessions")
async def list_sessions(
    limit: int | None = Query(default=None, ge=1, le=500),
    user_id: str = Depends(get_current_user),
    service: TherapySessionService = Depends(get_therapy_session_service),
) -> list[SessionResponse]:
    """
    List the user's sessions.

    Args:
        limit: Maximum number of sessions (newest kept)
        user_id: Authenticated user (injected)
        service: Injected TherapySessionService

    Returns:
        list[SessionResponse]: Newest first

    Raises:
        HTTPException(503): Session store unavailable
    """
    sessions = await service.list_sessions(user_id, limit=limit)
    return [
        SessionResponse(
            **session.model_dump(),
            duration_display=format_duration(session.duration),
        )
        for session in sessions
    ]


@router.get("/progress", response_model=ProgressSummary)
@handle_domain_errors("get progress")
async def get_progress(
    window: Literal["weekly", "monthly", "all"] = "weekly",
    user_id: str = Depends(get_current_user),
    service: TherapySessionService = Depends(get_therapy_session_service),
) -> ProgressSummary:
    """
    Summarize the user's sessions over a window.

    Raises:
        HTTPException(503): Session store unavailable
    """
    return await service.get_progress(user_id, window=window)


@router.delete("/{session_id}", status_code=204)
@handle_domain_errors("delete session")
async def delete_session(
    session_id: UUID,
    user_id: str = Depends(get_current_user),
    service: TherapySessionService = Depends(get_therapy_session_service),
) -> None:
    """
    Delete one of the user's sessions.

    Returns:
        204 No Content on success

    Raises:
        HTTPException(404): Session not found for this user
        HTTPException(503): Session store unavailable
    """
    await service.delete_session(user_id, session_id)


@router.delete("", response_model=DeleteResult)
@handle_domain_errors("delete all sessions")
async def delete_all_sessions(
    user_id: str = Depends(get_current_user),
    service: TherapySessionService = Depends(get_therapy_session_service),
) -> DeleteResult:
    """
    Delete the user's entire history.

    The client is responsible for confirming this destructive action.

    Returns:
        DeleteResult: Number of sessions removed
    """
    deleted = await service.delete_all_sessions(user_id)
    return DeleteResult(deleted=deleted)
