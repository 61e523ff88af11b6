"""
Live session schemas.

State snapshot and results exposed by the session lifecycle controller.

Dependencies: pydantic
System role: Live session API contracts
"""

import enum

from pydantic import BaseModel, Field

from neurocare.models.session import SessionRecord


class SessionState(str, enum.Enum):
    """
    Lifecycle states of a live therapy session.

    IDLE: No session running
    ACTIVE: Session running, elapsed time accruing
    STOPPING: Session ended, record being persisted
    """

    IDLE = "idle"
    ACTIVE = "active"
    STOPPING = "stopping"


class LiveSessionStatus(BaseModel):
    """Point-in-time view of the controller."""

    state: SessionState
    is_active: bool
    elapsed_seconds: int
    elapsed_display: str
    vibration_intensity: int
    last_temperature: float
    recent_temperatures: list[float]
    device_connected: bool
    pending_record: SessionRecord | None = None


class SessionCompleted(BaseModel):
    """Result of a successful stop."""

    record: SessionRecord
    message: str


class IntensityRequest(BaseModel):
    """Request schema for changing vibration intensity."""

    value: int = Field(description="Vibration intensity, 0-100")
