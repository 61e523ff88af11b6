"""
Logger configuration.

Provides configured logger with ISO timestamps and correlation ID injection.

Dependencies: logging (stdlib), neurocare.configs
System role: Centralized logging configuration
"""

import logging
import sys

from neurocare.configs import get_settings
from neurocare.observability.correlation import get_correlation_id


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str | None = None) -> None:
    """
    Configure Python logging with ISO timestamp and structured format.

    Args:
        level: Root log level; defaults to the LOG_LEVEL setting
    """
    settings = get_settings()
    obs = settings.observability

    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(obs.format, datefmt=obs.date_format))

    root_logger.setLevel((level or settings.log_level).upper())
    root_logger.addHandler(handler)

    # Reduce noise from verbose third-party libraries
    for name in obs.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

