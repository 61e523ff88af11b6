"""
Live session API endpoints.

Routes:
- GET /live-session - Current controller status
- POST /live-session/start - Start a session
- PUT /live-session/intensity - Change vibration intensity
- POST /live-session/stop - Stop and save
- POST /live-session/emergency-stop - Immediate stop and save
- POST /live-session/acknowledge - Reset the timer after a completed session
- POST /live-session/retry-save - Retry saving a record whose save failed
- POST /live-session/discard - Drop a record whose save failed

Dependencies: neurocare.core.session_controller, neurocare.models
System role: Session control HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from neurocare.api.deps import get_session_controller
from neurocare.core.session_controller import SessionLifecycleController
from neurocare.models.live_session import IntensityRequest, LiveSessionStatus, SessionCompleted

from .error_handling import handle_domain_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/live-session", tags=["live-session"])


@router.get("", response_model=LiveSessionStatus)
async def get_status(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> LiveSessionStatus:
    """Current state, timer, intensity and temperature readings."""
    return controller.status()


@router.post("/start", response_model=LiveSessionStatus)
@handle_domain_errors("start session")
async def start_session(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> LiveSessionStatus:
    """
    Start a therapy session.

    Raises:
        HTTPException(409): Device not connected or session already running
    """
    await controller.start()
    return controller.status()


@router.put("/intensity", response_model=LiveSessionStatus)
@handle_domain_errors("adjust intensity")
async def adjust_intensity(
    request: IntensityRequest,
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> LiveSessionStatus:
    """
    Change vibration intensity.

    Raises:
        HTTPException(400): Value outside 0-100
    """
    await controller.adjust_intensity(request.value)
    return controller.status()


@router.post("/stop", response_model=SessionCompleted)
@handle_domain_errors("stop session")
async def stop_session(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> SessionCompleted:
    """
    Stop the session and save its record.

    Raises:
        HTTPException(409): No active session
        HTTPException(503): Save failed; the session is stopped and the
            record can be retried or discarded
    """
    return await controller.stop()


@router.post("/emergency-stop", response_model=SessionCompleted)
@handle_domain_errors("emergency stop")
async def emergency_stop(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> SessionCompleted:
    """Immediate stop; the client confirms with the user beforehand."""
    return await controller.emergency_stop()


@router.post("/acknowledge", response_model=LiveSessionStatus)
@handle_domain_errors("acknowledge session")
async def acknowledge(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> LiveSessionStatus:
    """Reset the elapsed timer after the completion result was shown."""
    controller.acknowledge()
    return controller.status()


@router.post("/retry-save", response_model=SessionCompleted)
@handle_domain_errors("retry save")
async def retry_save(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> SessionCompleted:
    """
    Retry saving the pending record.

    Raises:
        HTTPException(409): Nothing pending
        HTTPException(503): Save failed again
    """
    return await controller.retry_save()


@router.post("/discard", response_model=LiveSessionStatus)
async def discard_pending(
    controller: SessionLifecycleController = Depends(get_session_controller),
) -> LiveSessionStatus:
    """Drop the pending record without saving it."""
    controller.discard_pending()
    return controller.status()
