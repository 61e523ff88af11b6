"""
Structured logging helpers.

Values passed as log context (record ids, users, counts, whole records) are
rendered to short strings up front so a bad value can never break the
logging call itself.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

MAX_VALUE_LENGTH = 200


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Collections are summarized by size, models by type and id, and long
    strings are truncated.

    Args:
        value: Value to render
        max_length: Longest string kept intact

    Returns:
        str: Printable representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, (UUID, int, float, bool)):
            text = str(value)
        elif isinstance(value, datetime):
            text = value.isoformat()
        elif isinstance(value, BaseModel):
            record_id = getattr(value, "id", None)
            text = f"{type(value).__name__}(id={record_id})"
        elif isinstance(value, (list, tuple, set)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unrenderable {type(value).__name__}: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _render(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log message at level with context rendered into the record's extra fields."""
    logger.log(level, message, extra=_render(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log a failure at ERROR with its traceback and context.

    The exception type and text are added as error_type and error_msg.
    """
    extra = _render(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = str(exc)
    logger.error(message, exc_info=exc, extra=extra)
