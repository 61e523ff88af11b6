"""
In-process device channel.

Holds the device's connection flag and actuator state in memory and fans
out temperature and intensity pushes to subscribers. Control commands are
kept in an append-only log, one entry per command, in the order sent.

Dependencies: asyncio, dataclasses
System role: DeviceChannel implementation for the simulated device
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from neurocare.core.interfaces import Unsubscribe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceCommand:
    """
    Control command sent to the device.

    Attributes:
        type: "session" or "vibration"
        action: "start"/"stop" for session commands, None otherwise
        value: Intensity carried by the command
        timestamp: When the command was sent (UTC)
    """

    type: str
    action: str | None = None
    value: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _Subscription:
    """Removable entry in a subscriber list."""

    def __init__(self, subscribers: list, entry) -> None:
        self._subscribers = subscribers
        self._entry = entry

    def __call__(self) -> None:
        # Unsubscribing twice is a no-op
        if self._entry in self._subscribers:
            self._subscribers.remove(self._entry)


class InMemoryDeviceChannel:
    """
    DeviceChannel backed by process memory.

    Example:
        >>> channel = InMemoryDeviceChannel(connected=True)
        >>> unsubscribe = channel.subscribe_temperature(print)
        >>> channel.publish_temperature(36.8)
        36.8
        >>> unsubscribe()
    """

    def __init__(self, connected: bool = False) -> None:
        self._connected = connected
        self.session_active = False
        self.intensity: int | None = None
        self.commands: list[DeviceCommand] = []
        self._temperature_subscribers: list[tuple[Callable, Callable | None]] = []
        self._intensity_subscribers: list[Callable[[int], None]] = []

    def is_connected(self) -> bool:
        return self._connected

    def set_connected(self, connected: bool) -> None:
        if connected != self._connected:
            logger.info("Device %s", "connected" if connected else "disconnected")
        self._connected = connected

    async def set_session_active(self, active: bool, intensity: int) -> None:
        self.session_active = active
        if active:
            self.intensity = intensity
        self.commands.append(
            DeviceCommand(
                type="session",
                action="start" if active else "stop",
                value=intensity if active else None,
            )
        )

    async def set_intensity(self, value: int) -> None:
        self.intensity = value
        self.commands.append(DeviceCommand(type="vibration", value=value))

    def subscribe_temperature(
        self,
        callback: Callable[[float], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> Unsubscribe:
        entry = (callback, on_error)
        self._temperature_subscribers.append(entry)
        return _Subscription(self._temperature_subscribers, entry)

    def subscribe_intensity(self, callback: Callable[[int], None]) -> Unsubscribe:
        self._intensity_subscribers.append(callback)
        return _Subscription(self._intensity_subscribers, callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._temperature_subscribers) + len(self._intensity_subscribers)

    def publish_temperature(self, reading: float) -> None:
        """Deliver a reading to every temperature subscriber, in subscription order."""
        for callback, _ in list(self._temperature_subscribers):
            callback(reading)

    def publish_error(self, exc: Exception) -> None:
        """Report a feed failure; subscribers without an error handler only get a log line."""
        logger.warning("Temperature feed error: %s", exc)
        for _, on_error in list(self._temperature_subscribers):
            if on_error is not None:
                on_error(exc)

    def publish_intensity(self, value: int) -> None:
        """Push an intensity change made outside this process."""
        self.intensity = value
        for callback in list(self._intensity_subscribers):
            callback(value)
