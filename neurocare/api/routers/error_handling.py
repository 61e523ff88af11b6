"""
Domain error to HTTP translation.

Provides a decorator mapping the NeuroCare exception hierarchy onto HTTP
status codes so every endpoint reports failures the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from neurocare.core.exceptions import (
    AuthenticationRequiredError,
    DeviceNotConnectedError,
    InvalidSessionStateError,
    NeuroCareException,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: list[tuple[type[NeuroCareException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (SessionNotFoundError, status.HTTP_404_NOT_FOUND),
    (DeviceNotConnectedError, status.HTTP_409_CONFLICT),
    (InvalidSessionStateError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: NeuroCareException) -> int:
    """HTTP status code for a domain exception."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_domain_errors(operation: str) -> Callable[[F], F]:
    """
    Decorator to transform domain errors into HTTPExceptions.

    This centralizes:
    - Logging of errors with the operation name
    - Mapping specific exceptions to HTTP status codes
    - Ensuring every failure message names the failed operation

    Args:
        operation: Human-readable operation name used in 500 responses
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except NeuroCareException as e:
                status_code = status_for(e)
                logger.warning(
                    f"{operation} rejected",
                    extra={"status_code": status_code, "error": str(e)},
                )
                raise HTTPException(status_code=status_code, detail=e.message)

            except ValueError as e:
                logger.warning(f"{operation}: invalid request", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

            except Exception as e:
                logger.exception(f"Unexpected failure in {operation}", extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=f"{operation} failed: {str(e)}",
                )

        return wrapper  # type: ignore

    return decorator
