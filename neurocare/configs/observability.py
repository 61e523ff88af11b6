"""
Observability configuration settings.

Settings for log formatting and third-party logger noise reduction.

Dependencies: pydantic_settings
System role: Logging configuration
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s",
        description="Log record format",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Timestamp format for log records",
    )
    quiet_loggers: list[str] = Field(
        default_factory=lambda: ["sqlalchemy.engine", "uvicorn.access", "asyncio"],
        description="Third-party loggers capped at WARNING",
    )
