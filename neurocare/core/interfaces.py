"""
Collaborator interfaces consumed by the core.

SessionRepository persists completed sessions; DeviceChannel is the
real-time link to the therapy device. Both are structural protocols so that
any store or transport satisfying the contract can be injected.

Dependencies: typing
System role: Boundary contracts for the session controller and services
"""

from collections.abc import Callable, Sequence
from typing import Protocol
from uuid import UUID

from neurocare.models.session import SessionRecord

Unsubscribe = Callable[[], None]


class SessionRepository(Protocol):
    """
    Persistence contract for therapy session records.

    Every method raises PersistenceError on any underlying I/O failure.
    Callers must not assume partial writes.
    """

    async def save(self, record: SessionRecord) -> UUID:
        """Persist a record and return its newly assigned identifier."""
        ...

    async def list_by_user(
        self,
        user_id: str,
        limit: int | None = None,
    ) -> Sequence[SessionRecord]:
        """Return the user's records, newest first."""
        ...

    async def delete_one(self, record_id: UUID, user_id: str) -> bool:
        """Delete one record owned by user_id; False when nothing matched."""
        ...

    async def delete_all_for_user(self, user_id: str) -> int:
        """Delete every record owned by user_id and return the count."""
        ...


class DeviceChannel(Protocol):
    """
    Real-time link to the physical therapy device.

    Control notifications are fire-and-forget from the caller's point of
    view: implementations may raise, and callers log instead of propagating.
    Feed callbacks are invoked on the event loop thread.
    """

    async def set_session_active(self, active: bool, intensity: int) -> None:
        ...

    async def set_intensity(self, value: int) -> None:
        ...

    def subscribe_temperature(
        self,
        callback: Callable[[float], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> Unsubscribe:
        ...

    def subscribe_intensity(self, callback: Callable[[int], None]) -> Unsubscribe:
        ...

    def is_connected(self) -> bool:
        ...
