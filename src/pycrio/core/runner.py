"""Running crictl and validating what it writes."""

from __future__ import annotations

import os
import subprocess
from typing import NamedTuple, Protocol, Sequence, runtime_checkable

from pycrio.utils.errors import (
    SpawnError,
    StderrNotEmptyError,
    StreamReadError,
    format_args,
)
from pycrio.utils.logging import get_logger

logger = get_logger(__name__)

EXECUTABLE = "crictl"


class ProcessOutput(NamedTuple):
    """Raw bytes captured from one crictl run."""

    stdout: bytes
    stderr: bytes


@runtime_checkable
class Executor(Protocol):
    """Protocol for whatever actually runs crictl.

    Implementations spawn the executable with ``PATH`` set to ``bin_path``,
    wait for it to exit and return both captured streams. The exit status is
    not part of the result.

    Example:
        class CannedExecutor:
            def execute(self, args, bin_path):
                return ProcessOutput(b'{"items": []}', b"")
    """

    def execute(self, args: Sequence[str], bin_path: str) -> ProcessOutput:
        """Run crictl with ``args``.

        Raises:
            SpawnError: If the process could not be started or waited on
        """
        ...


class SubprocessExecutor:
    """Run the real crictl binary as a child process."""

    def __init__(self, executable: str = EXECUTABLE) -> None:
        self._executable = executable

    def execute(self, args: Sequence[str], bin_path: str) -> ProcessOutput:
        env = dict(os.environ)
        env["PATH"] = bin_path

        try:
            process = subprocess.Popen(
                [self._executable, *args],
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError: NUL bytes in an argument or in PATH
            raise SpawnError(args, str(e)) from e

        try:
            stdout, stderr = process.communicate()
        except OSError as e:
            process.kill()
            process.wait()
            raise SpawnError(args, str(e)) from e

        # crictl's exit status is not treated as a failure signal; stderr is.
        logger.debug("%s exited with status %s", self._executable, process.returncode)
        return ProcessOutput(stdout=stdout, stderr=stderr)


def _decode_stream(raw: bytes, args: Sequence[str], stream: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise StreamReadError(args, stream, str(e)) from e


def validate_output(output: ProcessOutput, args: Sequence[str]) -> str:
    """Check captured streams and return stdout as text.

    Raises:
        StreamReadError: If either stream is not valid UTF-8
        StderrNotEmptyError: If anything was written to stderr
    """
    err_text = _decode_stream(output.stderr, args, "stderr")
    if err_text:
        raise StderrNotEmptyError(args, err_text)
    return _decode_stream(output.stdout, args, "stdout")


def run_command_text(
    args: Sequence[str],
    bin_path: str,
    executor: Executor | None = None,
) -> str:
    """Run crictl and return its validated stdout.

    Args:
        args: Argument list from :func:`pycrio.core.command.build_args`
        bin_path: Search path placed in the child's ``PATH``
        executor: Executor to use, defaults to :class:`SubprocessExecutor`

    Returns:
        stdout decoded as UTF-8
    """
    if executor is None:
        executor = SubprocessExecutor()
    logger.debug(
        "running %s %s",
        list(args),
        bin_path,
        extra={"extra_fields": {"args": format_args(args), "bin_path": bin_path}},
    )
    output = executor.execute(args, bin_path)
    return validate_output(output, args)
