"""
Live therapy session lifecycle.

Owns the session-active flag, the elapsed-time counter, the current
vibration intensity and the latest device temperature. Mirrors intensity
and activity to the device channel and hands the finished session to the
repository exactly once.

State machine:
    IDLE --start()--> ACTIVE --stop()/emergency_stop()--> STOPPING --> IDLE

Everything runs on a single asyncio event loop. The only awaits are device
notifications and the repository save; state is always updated before an
await so a concurrent stop() never observes a half-started session.

Dependencies: asyncio, neurocare.configs, neurocare.models
System role: Session control business logic
"""

import asyncio
import logging
import math
from collections import deque
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from neurocare.configs.therapy import TherapySettings
from neurocare.core.context import AuthContext, DeviceContext
from neurocare.core.exceptions import (
    DeviceNotConnectedError,
    InvalidSessionStateError,
    PersistenceError,
    ValidationError,
)
from neurocare.core.formatting import format_duration
from neurocare.core.interfaces import SessionRepository, Unsubscribe
from neurocare.models.live_session import LiveSessionStatus, SessionCompleted, SessionState
from neurocare.models.session import SessionRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionLifecycleController:
    """
    Controller for one user's live therapy session.

    Use as an async context manager so feed subscriptions and the timer are
    always released:

    Example:
        >>> async with SessionLifecycleController(auth, device, repository) as ctrl:
        ...     await ctrl.start()
        ...     await ctrl.adjust_intensity(60)
        ...     completed = await ctrl.stop()
        ...     ctrl.acknowledge()
    """

    def __init__(
        self,
        auth: AuthContext,
        device: DeviceContext,
        repository: SessionRepository,
        settings: TherapySettings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the controller in the IDLE state.

        Args:
            auth: Current user context (owner of saved records)
            device: Device context wrapping the device channel
            repository: Store for completed session records
            settings: Timer, buffer and default values
            clock: Source of completion timestamps
        """
        self._auth = auth
        self._device = device
        self._repository = repository
        self._settings = settings or TherapySettings()
        self._clock = clock

        self._state = SessionState.IDLE
        self._elapsed_seconds = 0
        self._intensity = self._settings.default_intensity
        self._last_temperature = self._settings.initial_temperature
        self._samples: deque[float] = deque(maxlen=self._settings.temperature_buffer_size)

        self._tick_task: asyncio.Task | None = None
        self._unsubscribers: list[Unsubscribe] = []
        self._pending_record: SessionRecord | None = None

    async def __aenter__(self) -> "SessionLifecycleController":
        self.attach()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def vibration_intensity(self) -> int:
        return self._intensity

    @property
    def last_temperature(self) -> float:
        return self._last_temperature

    @property
    def recent_temperatures(self) -> list[float]:
        """Buffered samples, oldest first."""
        return list(self._samples)

    @property
    def pending_record(self) -> SessionRecord | None:
        """Record whose save failed, kept until retried or discarded."""
        return self._pending_record

    @property
    def timer_running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    @property
    def is_attached(self) -> bool:
        return bool(self._unsubscribers)

    def attach(self) -> None:
        """Subscribe to the device temperature and intensity feeds (idempotent)."""
        if self._unsubscribers:
            return
        channel = self._device.channel
        self._unsubscribers.append(
            channel.subscribe_temperature(self.on_temperature, self.on_temperature_error)
        )
        self._unsubscribers.append(channel.subscribe_intensity(self.on_remote_intensity))
        logger.debug("Subscribed to device feeds for user %s", self._auth.user_id)

    async def start(self) -> None:
        """
        Start a session.

        Raises:
            DeviceNotConnectedError: Device offline; nothing changes
            InvalidSessionStateError: A session is already running or stopping,
                or an unsaved record is waiting for retry_save or discard_pending
        """
        if not self._device.is_connected():
            raise DeviceNotConnectedError("start session")
        if self._state is not SessionState.IDLE:
            raise InvalidSessionStateError("start session", self._state.value)
        if self._pending_record is not None:
            raise InvalidSessionStateError(
                "start session",
                "unsaved",
                details={"reason": "previous session record awaiting retry or discard"},
            )

        self._state = SessionState.ACTIVE
        self._elapsed_seconds = 0
        self._tick_task = asyncio.create_task(self._run_timer())
        logger.info(
            "Session started",
            extra={"user_id": self._auth.user_id, "intensity": self._intensity},
        )

        await self._notify(
            "start session",
            self._device.channel.set_session_active,
            True,
            self._intensity,
        )

    def tick(self) -> None:
        """Advance elapsed time by one second; ignored unless ACTIVE."""
        if self._state is SessionState.ACTIVE:
            self._elapsed_seconds += 1

    async def adjust_intensity(self, value: int) -> None:
        """
        Change vibration intensity and forward it to the device.

        Raises:
            ValidationError: Value not an integer in 0-100; nothing changes
            InvalidSessionStateError: No active session while
                require_active_for_intensity is configured
        """
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            raise ValidationError(
                f"adjust intensity failed: {value!r} is outside 0-100",
                field="vibration_intensity",
            )
        if self._settings.require_active_for_intensity and self._state is not SessionState.ACTIVE:
            raise InvalidSessionStateError("adjust intensity", self._state.value)

        self._intensity = value
        logger.info("Intensity set to %d", value)
        await self._notify("adjust intensity", self._device.channel.set_intensity, value)

    async def stop(self) -> SessionCompleted:
        """
        Stop the session and persist its record.

        Returns:
            SessionCompleted: The saved record and a completion message

        Raises:
            InvalidSessionStateError: No active session
            PersistenceError: Save failed; the session is stopped anyway and
                the record is kept as pending_record
        """
        return await self._finish("stop session")

    async def emergency_stop(self) -> SessionCompleted:
        """Immediate stop; same effect and errors as stop()."""
        if self._state is SessionState.ACTIVE:
            logger.warning("Emergency stop requested", extra={"user_id": self._auth.user_id})
        return await self._finish("emergency stop")

    def acknowledge(self) -> None:
        """Reset the elapsed counter once the caller has shown the result."""
        if self._state is not SessionState.IDLE:
            raise InvalidSessionStateError("acknowledge session", self._state.value)
        self._elapsed_seconds = 0

    async def retry_save(self) -> SessionCompleted:
        """
        Make one more save attempt for the pending record.

        Raises:
            InvalidSessionStateError: Nothing is pending
            PersistenceError: Save failed again; record stays pending
        """
        record = self._pending_record
        if record is None:
            raise InvalidSessionStateError(
                "retry save", self._state.value, details={"reason": "no pending record"}
            )
        return await self._persist(record, "retry save")

    def discard_pending(self) -> bool:
        """Drop the pending record; True if there was one."""
        had_pending = self._pending_record is not None
        if had_pending:
            logger.info("Discarding unsaved session record")
        self._pending_record = None
        return had_pending

    def on_temperature(self, reading: float) -> None:
        """Temperature feed callback."""
        try:
            value = float(reading)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric temperature reading: %r", reading)
            return
        if not math.isfinite(value):
            logger.warning("Ignoring non-finite temperature reading: %r", reading)
            return
        self._last_temperature = value
        self._samples.append(value)

    def on_temperature_error(self, exc: Exception) -> None:
        """Feed errors are transient; the subscription stays in place."""
        logger.warning("Temperature feed error: %s", exc, exc_info=exc)

    def on_remote_intensity(self, value: int) -> None:
        """Intensity pushed by another client or the device itself; last write wins."""
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
            logger.warning("Ignoring invalid remote intensity: %r", value)
            return
        self._intensity = value

    def status(self) -> LiveSessionStatus:
        return LiveSessionStatus(
            state=self._state,
            is_active=self.is_active,
            elapsed_seconds=self._elapsed_seconds,
            elapsed_display=format_duration(self._elapsed_seconds),
            vibration_intensity=self._intensity,
            last_temperature=self._last_temperature,
            recent_temperatures=self.recent_temperatures,
            device_connected=self._device.is_connected(),
            pending_record=self._pending_record,
        )

    async def close(self) -> None:
        """Cancel the timer and release every feed subscription (idempotent)."""
        if self._state is SessionState.ACTIVE:
            logger.warning("Controller closed with an active session; session not saved")
            self._state = SessionState.IDLE
            await self._notify(
                "close controller",
                self._device.channel.set_session_active,
                False,
                self._intensity,
            )
        await self._cancel_timer()

        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            try:
                unsubscribe()
            except Exception:
                logger.warning("Failed to release device feed subscription", exc_info=True)

    async def _finish(self, operation: str) -> SessionCompleted:
        if self._state is not SessionState.ACTIVE:
            raise InvalidSessionStateError(operation, self._state.value)

        self._state = SessionState.STOPPING
        timer = self._tick_task
        self._tick_task = None
        if timer is not None:
            timer.cancel()
        duration = self._elapsed_seconds
        intensity = self._intensity
        temperature = self._last_temperature
        logger.info("Session stopped after %s (%s)", format_duration(duration), operation)

        try:
            if timer is not None:
                await asyncio.wait([timer])
            await self._notify(
                operation, self._device.channel.set_session_active, False, intensity
            )

            if not self._auth.is_authenticated:
                raise PersistenceError(
                    f"{operation} failed: no authenticated user to own the session record",
                    operation="save",
                )
            record = SessionRecord(
                user_id=self._auth.user_id,
                timestamp=self._clock(),
                duration=duration,
                vibration_intensity=intensity,
                average_temperature=temperature,
            )
            return await self._persist(record, operation)
        finally:
            self._state = SessionState.IDLE

    async def _persist(self, record: SessionRecord, operation: str) -> SessionCompleted:
        # Exactly one save attempt per call
        try:
            record_id = await self._repository.save(record)
        except PersistenceError:
            self._pending_record = record
            logger.error("%s: session record not saved", operation, exc_info=True)
            raise
        except Exception as exc:
            self._pending_record = record
            logger.error("%s: session record not saved", operation, exc_info=True)
            raise PersistenceError(
                f"{operation} failed: could not save session record",
                operation="save",
                details={"error": str(exc)},
            ) from exc

        if self._pending_record is record:
            self._pending_record = None
        saved = record.model_copy(update={"id": record_id})
        logger.info("Session record saved", extra={"record_id": str(record_id)})
        return SessionCompleted(
            record=saved,
            message=(
                "Your therapy session has been saved. "
                f"Duration: {format_duration(saved.duration)}"
            ),
        )

    async def _run_timer(self) -> None:
        interval = self._settings.tick_interval_seconds
        while True:
            await asyncio.sleep(interval)
            self.tick()

    async def _cancel_timer(self) -> None:
        task, self._tick_task = self._tick_task, None
        if task is None:
            return
        task.cancel()
        await asyncio.wait([task])

    async def _notify(
        self,
        operation: str,
        send: Callable[..., Awaitable[None]],
        *args,
    ) -> None:
        # Device control is fire-and-forget: failures are logged, state stays as is
        try:
            await send(*args)
        except Exception:
            logger.warning("%s: device notification failed", operation, exc_info=True)
