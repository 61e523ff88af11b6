"""
Session domain models and schemas.

SessionRecord is the shared shape between the live session controller
(which creates it at stop) and the recommendation engine (which reads it).

Dependencies: pydantic
System role: Therapy session data contracts
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SessionRecord(BaseModel):
    """A completed therapy session."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID | None = Field(
        default=None,
        description="Assigned by the repository at save time",
    )
    user_id: str = Field(min_length=1, description="Owning user identifier")
    timestamp: datetime = Field(description="Session completion instant (UTC)")
    duration: int = Field(ge=0, description="Elapsed session time in seconds")
    vibration_intensity: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Intensity in effect at session end",
    )
    average_temperature: float | None = Field(
        default=None,
        description="Last device temperature observed at stop time (Celsius)",
    )
    average_heart_rate: float | None = Field(
        default=None,
        ge=0,
        description="Average heart rate, absent without sensor data",
    )

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("vibration_intensity", mode="before")
    @classmethod
    def _default_missing_intensity(cls, value: int | None) -> int:
        return 0 if value is None else value


class SessionResponse(SessionRecord):
    """Response schema for a persisted session."""

    id: uuid.UUID
    duration_display: str = Field(description="Duration formatted as MM:SS")


class ProgressSummary(BaseModel):
    """Aggregate statistics over a window of sessions."""

    window: str
    session_count: int
    total_minutes: int
    average_intensity: float | None
    average_temperature: float | None
    last_session_at: datetime | None
