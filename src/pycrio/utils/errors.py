"""Error types raised by pycrio."""

from __future__ import annotations

import json
from typing import Any, Sequence


def format_args(args: Sequence[str]) -> str:
    """Render an argument vector the way it appears in error messages.

    Arguments are JSON strings, so control characters use JSON escapes
    (``\\u001b``), not the ``\\u{1b}`` form some other tools print.

    Example:
        format_args(["pods", "--name", "tests"]) == '["pods", "--name", "tests"]'
    """
    return json.dumps(list(args), ensure_ascii=False)


class CrioError(Exception):
    """Base exception for pycrio."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class SpawnError(CrioError):
    """crictl could not be started or waited on."""

    def __init__(self, args: Sequence[str], reason: str):
        super().__init__(
            f"failed to execute crictl {format_args(args)} {reason}",
            code="SPAWN_ERROR",
            details={"args": list(args), "reason": reason},
        )


class StreamReadError(CrioError):
    """stdout or stderr could not be read back as text."""

    def __init__(self, args: Sequence[str], stream: str, reason: str):
        prefix = "stderr read error" if stream == "stderr" else "stdout error"
        super().__init__(
            f"{prefix} - failed to execute crictl {format_args(args)} {reason}",
            code="STREAM_READ_ERROR",
            details={"args": list(args), "stream": stream, "reason": reason},
        )


class StderrNotEmptyError(CrioError):
    """crictl wrote to stderr."""

    def __init__(self, args: Sequence[str], stderr: str):
        super().__init__(
            f"stderr not empty - failed to execute crictl {format_args(args)} {stderr}",
            code="STDERR_NOT_EMPTY",
            details={"args": list(args), "stderr": stderr},
        )


class DecodeError(CrioError):
    """stdout was not valid JSON."""

    def __init__(self, args: Sequence[str], diagnostic: str):
        super().__init__(
            f"failed to create output from slice for {format_args(args)} {diagnostic}",
            code="DECODE_ERROR",
            details={"args": list(args), "diagnostic": diagnostic},
        )


class EmptyResultError(CrioError):
    """Output decoded fine but did not contain what the query expects."""

    def __init__(self, message: str, args: Sequence[str] | None = None):
        details = {"args": list(args)} if args is not None else {}
        super().__init__(message, code="EMPTY_RESULT", details=details)


class ConfigurationError(CrioError):
    """Settings could not be loaded."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class ImageCommandParseError(ValueError):
    """Text did not name a known image sub-command.

    Carries no message.
    """

    def __init__(self) -> None:
        super().__init__()
