"""
Therapy session configuration settings.

Timer cadence, temperature buffer capacity and device defaults used by the
live session controller.

Dependencies: pydantic, pydantic_settings
System role: Session controller tuning
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from neurocare.configs.base import BaseSettings


class TherapySettings(BaseSettings):
    """Live therapy session configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="THERAPY_",
        case_sensitive=False,
        extra="ignore",
    )

    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Period of the elapsed-time tick in seconds",
    )
    temperature_buffer_size: int = Field(
        default=30,
        ge=1,
        description="Number of recent temperature samples retained",
    )
    default_intensity: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Vibration intensity a new controller starts with",
    )
    initial_temperature: float = Field(
        default=37.0,
        description="Temperature reported before the first device reading",
    )
    require_active_for_intensity: bool = Field(
        default=False,
        description="Reject intensity changes while no session is active",
    )
    default_battery_level: int = Field(
        default=75,
        ge=0,
        le=100,
        description="Battery level reported for the simulated device",
    )
