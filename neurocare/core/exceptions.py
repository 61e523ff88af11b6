"""
Exception hierarchy for the NeuroCare therapy backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, and every
message names the operation that failed so it can be shown to the user.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NeuroCareException(Exception):
    """Base exception for all NeuroCare application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(NeuroCareException):
    """Raised when input to a public operation is out of range."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthenticationRequiredError(NeuroCareException):
    """Raised when an operation needs a signed-in user and none is present."""

    def __init__(self, operation: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["operation"] = operation
        super().__init__(f"{operation} failed: no authenticated user", details)


class DeviceNotConnectedError(NeuroCareException):
    """Raised when a session is started while the therapy device is offline."""

    def __init__(self, operation: str = "start session", details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["operation"] = operation
        super().__init__(
            f"{operation} failed: therapy device is not connected",
            details,
        )


class InvalidSessionStateError(NeuroCareException):
    """Raised when a session operation is not allowed in the current state."""

    def __init__(
        self,
        operation: str,
        state: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid state error.

        Args:
            operation: Operation that was attempted
            state: Controller state at the time of the attempt
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        details["state"] = state
        super().__init__(f"{operation} failed: not allowed while session is {state}", details)


class PersistenceError(NeuroCareException):
    """Raised when the session store cannot complete an operation."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            operation: Repository operation that failed (save, list, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class SessionNotFoundError(NeuroCareException):
    """Raised when a session record cannot be found for the requesting user."""

    def __init__(self, record_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            record_id: ID of the missing session record
            details: Additional context
        """
        details = details or {}
        details["record_id"] = record_id
        super().__init__(f"Session not found: {record_id}", details)
