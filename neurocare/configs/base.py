"""
Shared settings base.

Every settings section reads the same .env file, ignores unknown keys and
matches environment variables case-insensitively.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Settings base with deployment-wide flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment; API docs are hidden in production",
    )
    debug: bool = Field(
        default=False,
        description="FastAPI debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level used by configure_logging()",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
