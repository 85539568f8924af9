"""Utility functions for pycrio."""

from pycrio.utils.logging import configure_logging, get_logger
from pycrio.utils.errors import (
    CrioError,
    SpawnError,
    StreamReadError,
    StderrNotEmptyError,
    DecodeError,
    EmptyResultError,
    ConfigurationError,
    ImageCommandParseError,
    format_args,
)
from pycrio.utils.config import Settings, get_settings_paths, load_settings

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "CrioError",
    "SpawnError",
    "StreamReadError",
    "StderrNotEmptyError",
    "DecodeError",
    "EmptyResultError",
    "ConfigurationError",
    "ImageCommandParseError",
    "format_args",
    # Settings
    "Settings",
    "get_settings_paths",
    "load_settings",
]
