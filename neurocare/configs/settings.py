"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from neurocare.configs.base import BaseSettings
from neurocare.configs.database import DatabaseSettings
from neurocare.configs.observability import ObservabilitySettings
from neurocare.configs.therapy import TherapySettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    therapy: TherapySettings = Field(default_factory=TherapySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from neurocare.configs import get_settings
        settings = get_settings()
    """
    return Settings()
