"""Data models for pycrio."""

from pycrio.models.config import DEFAULT_BIN_PATH, ClientConfig, ImageCommand

__all__ = [
    "DEFAULT_BIN_PATH",
    "ClientConfig",
    "ImageCommand",
]
