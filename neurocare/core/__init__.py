"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from neurocare.core.exceptions import (
    NeuroCareException,
    ValidationError,
    AuthenticationRequiredError,
    DeviceNotConnectedError,
    InvalidSessionStateError,
    PersistenceError,
    SessionNotFoundError,
)

# Business logic modules
from neurocare.core.recommendation_engine import RecommendationEngine
from neurocare.core.session_controller import SessionLifecycleController

__all__ = [
    # Exceptions
    "NeuroCareException",
    "ValidationError",
    "AuthenticationRequiredError",
    "DeviceNotConnectedError",
    "InvalidSessionStateError",
    "PersistenceError",
    "SessionNotFoundError",
    # Business logic
    "RecommendationEngine",
    "SessionLifecycleController",
]
