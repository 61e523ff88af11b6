"""Display helpers for session durations and dates."""

from datetime import datetime


def format_duration(seconds: int) -> str:
    """Format elapsed seconds as zero-padded MM:SS."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_session_date(timestamp: datetime) -> str:
    """Calendar date such as 'Oct 19, 2026'."""
    return f"{timestamp:%b} {timestamp.day}, {timestamp.year}"
