"""Core crictl invocation and query logic."""

from pycrio.core.client import CriClient, match_image
from pycrio.core.command import build_args, tail_flag
from pycrio.core.decoder import decode_output
from pycrio.core.runner import (
    EXECUTABLE,
    Executor,
    ProcessOutput,
    SubprocessExecutor,
    run_command_text,
    validate_output,
)

__all__ = [
    "CriClient",
    "match_image",
    "build_args",
    "tail_flag",
    "decode_output",
    "EXECUTABLE",
    "Executor",
    "ProcessOutput",
    "SubprocessExecutor",
    "run_command_text",
    "validate_output",
]
