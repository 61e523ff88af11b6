"""
Device API endpoints.

Routes:
- GET /device - Connection and actuator state
- PUT /device/connection - Mark the device connected or disconnected
- POST /device/temperature - Push a temperature reading into the live feed

Dependencies: neurocare.boundary.device, neurocare.models
System role: Device link HTTP API
"""

from fastapi import APIRouter, Depends

from neurocare.api.deps import get_device_channel, get_live_session_registry
from neurocare.application.services import LiveSessionRegistry
from neurocare.boundary.device import InMemoryDeviceChannel
from neurocare.models.device import ConnectionRequest, DeviceStatus, TemperatureReading

router = APIRouter(prefix="/device", tags=["device"])


def _status(channel: InMemoryDeviceChannel, registry: LiveSessionRegistry) -> DeviceStatus:
    return DeviceStatus(
        connected=channel.is_connected(),
        battery_level=registry.device.battery_level,
        session_active=channel.session_active,
        intensity=channel.intensity if channel.intensity is not None else registry.settings.default_intensity,
    )


@router.get("", response_model=DeviceStatus)
async def get_device(
    channel: InMemoryDeviceChannel = Depends(get_device_channel),
    registry: LiveSessionRegistry = Depends(get_live_session_registry),
) -> DeviceStatus:
    """Current device state."""
    return _status(channel, registry)


@router.put("/connection", response_model=DeviceStatus)
async def set_connection(
    request: ConnectionRequest,
    channel: InMemoryDeviceChannel = Depends(get_device_channel),
    registry: LiveSessionRegistry = Depends(get_live_session_registry),
) -> DeviceStatus:
    """Record a connect or disconnect reported by the device link."""
    channel.set_connected(request.connected)
    return _status(channel, registry)


@router.post("/temperature", status_code=202)
async def push_temperature(
    request: TemperatureReading,
    channel: InMemoryDeviceChannel = Depends(get_device_channel),
) -> None:
    """Deliver a temperature reading to every live session."""
    channel.publish_temperature(request.reading)
