"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from neurocare.configs.settings import Settings, get_settings
from neurocare.configs.therapy import TherapySettings

__all__ = ["Settings", "TherapySettings", "get_settings"]
