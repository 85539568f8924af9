"""Argument vectors for crictl queries."""

from __future__ import annotations

CONFIG_FLAG = "-c"


def build_args(operation: str, config_path: str | None = None, *args: str) -> list[str]:
    """Build the argument list for one crictl invocation.

    The config flag and path lead when a config path is given, otherwise the
    operation name does. Argument contents are not validated.

    Args:
        operation: crictl sub-command (e.g. "pods", "inspectp")
        config_path: Optional crictl config file
        *args: Operation specific arguments

    Returns:
        Ordered argument list, without the executable name
    """
    prefix = [CONFIG_FLAG, config_path] if config_path is not None else []
    return [*prefix, operation, *args]


def tail_flag(line_count: int) -> str:
    """Format the flag limiting log output to the last ``line_count`` lines."""
    return f"--tail={line_count}"
