"""
Device schemas.

Dependencies: pydantic
System role: Device API contracts
"""

from pydantic import BaseModel, Field


class DeviceStatus(BaseModel):
    """Connection and actuator state of the therapy device."""

    connected: bool
    battery_level: int
    session_active: bool
    intensity: int


class ConnectionRequest(BaseModel):
    """Request schema for toggling the device connection."""

    connected: bool


class TemperatureReading(BaseModel):
    """Request schema for pushing a temperature sample."""

    reading: float = Field(description="Skin temperature in Celsius")
