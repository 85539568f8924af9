"""Decoding crictl's JSON output."""

from __future__ import annotations

import json
from typing import Any, Sequence

from pycrio.utils.errors import DecodeError


def _eof_position(text: str) -> tuple[int, int]:
    """Line (1-based) and column of the end of ``text``."""
    lines = text.split("\n")
    return len(lines), len(lines[-1])


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid number {name}")


def describe_decode_error(text: str, error: json.JSONDecodeError) -> str:
    """Build a parse diagnostic with line and column.

    Input that runs out before a complete value is reported as an EOF
    condition at the end of the text rather than where the parser stopped.
    """
    if not text[error.pos:].strip():
        line, column = _eof_position(text)
        return f"EOF while parsing a value at line {line} column {column}"
    return f"{error.msg} at line {error.lineno} column {error.colno}"


def decode_output(text: str, args: Sequence[str]) -> Any:
    """Parse validated stdout as JSON.

    Args:
        text: stdout text
        args: Argument list of the invocation, used in the error message

    Returns:
        The decoded value

    Raises:
        DecodeError: If the text is not valid JSON, nests too deeply or
            holds a number that cannot be represented
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DecodeError(args, describe_decode_error(text, e)) from e
    except RecursionError as e:
        raise DecodeError(args, "recursion limit exceeded") from e
    except ValueError as e:
        raise DecodeError(args, str(e)) from e
