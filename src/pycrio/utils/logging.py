"""Logging setup for pycrio.

Library modules only emit records through :func:`get_logger`. Nothing is
configured until an application (or the ``pycrio`` CLI) calls
:func:`configure_logging`.
"""

import logging
import sys


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``key=value`` context fields to each record."""

    def format(self, record: logging.LogRecord) -> str:
        extra = ""
        fields = getattr(record, "extra_fields", None)
        if fields:
            extra = " " + " ".join(f"{k}={v}" for k, v in fields.items())

        message = super().format(record)
        return f"{message}{extra}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
) -> None:
    """Configure the ``pycrio`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Use structured logging format
    """
    if format_string is None:
        if structured:
            format_string = "%(asctime)s %(levelname)s %(name)s %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    handler = logging.StreamHandler(sys.stderr)

    if structured:
        handler.setFormatter(StructuredFormatter(format_string))
    else:
        handler.setFormatter(logging.Formatter(format_string))

    logger = logging.getLogger("pycrio")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a pycrio module.

    Args:
        name: Module name (will be prefixed with pycrio)

    Returns:
        Logger instance
    """
    if not name.startswith("pycrio"):
        name = f"pycrio.{name}"
    return logging.getLogger(name)
