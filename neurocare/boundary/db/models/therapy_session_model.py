"""
Therapy session ORM model.

One row per completed therapy session. Rows are written once, when the
session stops, and are only ever deleted afterwards.

Dependencies: sqlalchemy, neurocare.boundary.db.base
System role: Session history persistence
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from neurocare.boundary.db.base import Base, UUIDMixin, TimestampMixin


class TherapySessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Therapy session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user identifier (indexed)
        timestamp: Session completion instant (UTC)
        duration: Elapsed seconds, >= 0
        vibration_intensity: Intensity at session end, 0-100
        average_temperature: Last temperature reading at stop (nullable)
        average_heart_rate: Average heart rate (nullable, no sensor)
        created_at: Row insert timestamp (UTC)

    Constraints:
        duration >= 0
        vibration_intensity BETWEEN 0 AND 100
    """

    __tablename__ = "therapy_sessions"
    __table_args__ = (
        CheckConstraint("duration >= 0", name="ck_therapy_sessions_duration"),
        CheckConstraint(
            "vibration_intensity >= 0 AND vibration_intensity <= 100",
            name="ck_therapy_sessions_intensity",
        ),
        Index("ix_therapy_sessions_user_timestamp", "user_id", "timestamp"),
    )

    user_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        doc="Owning user identifier",
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        doc="Session completion instant",
    )

    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Session length in seconds",
    )

    vibration_intensity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Vibration intensity (0-100)",
    )

    average_temperature: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        doc="Last observed device temperature in Celsius",
    )

    average_heart_rate: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
        doc="Average heart rate, when a sensor was present",
    )
