"""
Progress statistics over session history.

Backs the weekly / monthly / all-time stats cards: session count, total
therapy time, and average settings.

Dependencies: neurocare.models
System role: Progress tracking business logic
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from neurocare.models.session import ProgressSummary, SessionRecord

WINDOWS: dict[str, timedelta | None] = {
    "weekly": timedelta(days=7),
    "monthly": timedelta(days=30),
    "all": None,
}


def window_start(window: str, now: datetime | None = None) -> datetime | None:
    """
    Start instant of a named window.

    Raises:
        ValueError: If window is not one of weekly, monthly, all
    """
    if window not in WINDOWS:
        raise ValueError(f"Unknown progress window: {window}")
    span = WINDOWS[window]
    if span is None:
        return None
    return (now or datetime.now(timezone.utc)) - span


def summarize_progress(
    sessions: Sequence[SessionRecord],
    window: str = "all",
    now: datetime | None = None,
) -> ProgressSummary:
    """
    Aggregate the sessions that fall inside a window.

    Args:
        sessions: Session records in any order
        window: weekly, monthly or all
        now: Reference instant (defaults to current UTC time)

    Returns:
        ProgressSummary: Counts and averages; averages are None with no data
    """
    since = window_start(window, now)
    selected = [s for s in sessions if since is None or s.timestamp >= since]

    temperatures = [s.average_temperature for s in selected if s.average_temperature is not None]
    total_seconds = sum(s.duration for s in selected)

    return ProgressSummary(
        window=window,
        session_count=len(selected),
        total_minutes=total_seconds // 60,
        average_intensity=(
            round(sum(s.vibration_intensity for s in selected) / len(selected), 1)
            if selected
            else None
        ),
        average_temperature=(
            round(sum(temperatures) / len(temperatures), 1) if temperatures else None
        ),
        last_session_at=max((s.timestamp for s in selected), default=None),
    )
