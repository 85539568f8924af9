"""Shared test fixtures for pycrio tests."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from pycrio.core.runner import ProcessOutput
from pycrio.models.config import ClientConfig

IKS_POD_ID = "51cd8bdaa13a65518e790d307359d33f9288fc82664879c609029b1a83862db6"
IKS_CONTAINER_ID = "765312810c818bca4836c3598e21471bfd96be8ca84ca952290a9900b7c055a7"
IKS_FIRST_CONTAINER_ID = "4bd48d7c6a03cd94a0e95e97011ed5d2ca72045723a5ed55da06fd54eff32b0a"
IKS_IMAGE_ID = "sha256:3b8adc6c30f4e7e4afb57daef9d1c8af783a4a647a4670780e9df085c0525efa"

OPENSHIFT_POD_ID = "134b58ab2e0cfd7432a9db818b1b4ec52fdc747333f0ba2c9342860dc2ea7c50"
OPENSHIFT_FIRST_CONTAINER_ID = "0e04af54d9273f5bb37eddbe8ace750275d7939612dd4864c792168cce2cff82"
OPENSHIFT_IMAGE_DIGEST = (
    "quay.io/icdh/segfaulter@sha256:0630afbcfebb45059794b9a9f160f57f50062d28351c49bb568a3f7e206855bd"
)


def _pods(pod_id: str, name: str) -> dict[str, Any]:
    return {
        "items": [
            {
                "id": pod_id,
                "metadata": {
                    "name": name,
                    "uid": "b6b1e3a3-6d0f-4a1a-9f0b-3c1d2a1f9e11",
                    "namespace": "default",
                    "attempt": 0,
                },
                "state": "SANDBOX_READY",
                "createdAt": "1618746959894040481",
                "labels": {"io.kubernetes.pod.name": name},
                "annotations": {},
                "runtimeHandler": "",
            }
        ]
    }


def _inspectp(pod_id: str, pid: int) -> dict[str, Any]:
    return {
        "status": {"id": pod_id, "state": "SANDBOX_READY"},
        "info": {"pid": pid, "processStatus": "running", "netNamespaceClosed": False},
    }


def _ps(pod_id: str, first_id: str, image_ref: str) -> dict[str, Any]:
    return {
        "containers": [
            {
                "id": first_id,
                "podSandboxId": pod_id,
                "metadata": {"name": "app", "attempt": 0},
                "image": {"image": image_ref, "annotations": {}},
                "imageRef": image_ref,
                "state": "CONTAINER_RUNNING",
                "createdAt": "1618746960391785124",
                "labels": {},
                "annotations": {},
            },
            {
                "id": "9f2c1e7b3a4d5c6e7f8091a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6",
                "podSandboxId": pod_id,
                "metadata": {"name": "sidecar", "attempt": 1},
                "image": {"image": image_ref, "annotations": {}},
                "imageRef": image_ref,
                "state": "CONTAINER_EXITED",
                "createdAt": "1618746961391785124",
                "labels": {},
                "annotations": {},
            },
        ]
    }


def _inspect(container_id: str, pid: int) -> dict[str, Any]:
    return {
        "status": {"id": container_id, "state": "CONTAINER_RUNNING", "exitCode": 0},
        "info": {"sandboxID": IKS_POD_ID, "pid": pid},
    }


IKS_OUTPUTS: dict[str, Any] = {
    "pods": _pods(IKS_POD_ID, "tests"),
    "inspectp": _inspectp(IKS_POD_ID, 14017),
    "ps": _ps(IKS_POD_ID, IKS_FIRST_CONTAINER_ID, IKS_IMAGE_ID),
    "inspect": _inspect(IKS_CONTAINER_ID, 254405),
    "img": {
        "images": [
            {
                "id": "sha256:1111111111111111111111111111111111111111111111111111111111111111",
                "repoTags": ["registry.example.com/pause:3.2"],
                "repoDigests": [],
                "size": "299513",
                "uid": None,
                "username": "",
            },
            {
                "id": IKS_IMAGE_ID,
                "repoTags": ["registry.example.com/app:1.0"],
                "repoDigests": [
                    "registry.example.com/app@sha256:9d8f1b2c3a4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f60718293a4b5c6d7e8"
                ],
                "size": "338054458",
                "uid": None,
                "username": "",
            },
        ]
    },
    "logs": "A LOG\n",
}

OPENSHIFT_OUTPUTS: dict[str, Any] = {
    "pods": _pods(OPENSHIFT_POD_ID, "tests"),
    "inspectp": _inspectp(OPENSHIFT_POD_ID, 38091),
    "ps": _ps(OPENSHIFT_POD_ID, OPENSHIFT_FIRST_CONTAINER_ID, OPENSHIFT_IMAGE_DIGEST),
    "inspect": _inspect(OPENSHIFT_FIRST_CONTAINER_ID, 38200),
    "img": {
        "images": [
            {
                "id": "sha256:a6b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b9c8d7e6f5a4b3",
                "repoTags": [],
                "repoDigests": [
                    "quay.io/openshift/origin-pod@sha256:1f0e2d3c4b5a69788796a5b4c3d2e1f0a9b8c7d6e5f4a3b2c1d0e9f8a7b6c5d4"
                ],
                "size": "262144",
                "uid": None,
                "username": "",
            },
            {
                "id": "sha256:5f1c4e7ab8d3c2e9f0a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6e7f8a9b0c1d2e3",
                "repoTags": ["quay.io/icdh/segfaulter:latest"],
                "repoDigests": [
                    "quay.io/icdh/segfaulter@sha256:0000000000000000000000000000000000000000000000000000000000000000",
                    OPENSHIFT_IMAGE_DIGEST,
                ],
                "size": "10229047",
                "uid": None,
                "username": "",
            },
        ]
    },
    "logs": "A LOG\n",
}

LONG_LOG_LINES = [f"early entry {i}" for i in range(1, 251)] + [
    f"logging {i}" for i in range(1, 501)
]


@pytest.fixture(autouse=True)
def reset_pycrio_logger():
    """Undo configure_logging calls made by CLI tests."""
    yield
    logger = logging.getLogger("pycrio")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class FakeExecutor:
    """In-process stand-in for crictl.

    Replies are keyed by the crictl sub-command (the argument after any
    ``-c <path>`` prefix). Every call is recorded.
    """

    def __init__(
        self,
        replies: dict[str, ProcessOutput] | None = None,
        default: ProcessOutput | None = None,
        error: Exception | None = None,
    ) -> None:
        self.replies = replies or {}
        self.default = default or ProcessOutput(b"", b"")
        self.error = error
        self.calls: list[tuple[list[str], str]] = []

    def execute(self, args: Sequence[str], bin_path: str) -> ProcessOutput:
        self.calls.append((list(args), bin_path))
        if self.error is not None:
            raise self.error
        command_args = list(args)
        if command_args[:1] == ["-c"]:
            command_args = command_args[2:]
        return self.replies.get(command_args[0], self.default)


def _encode(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value).encode("utf-8")


@pytest.fixture
def make_executor() -> Callable[..., FakeExecutor]:
    """Factory for fake executors.

    ``outputs`` maps sub-commands to JSON values or raw text for stdout.
    """

    def factory(
        outputs: dict[str, Any] | None = None,
        stderr: str = "",
        error: Exception | None = None,
    ) -> FakeExecutor:
        replies = {
            command: ProcessOutput(_encode(value), stderr.encode("utf-8"))
            for command, value in (outputs or {}).items()
        }
        return FakeExecutor(
            replies=replies,
            default=ProcessOutput(b"", stderr.encode("utf-8")),
            error=error,
        )

    return factory


@pytest.fixture
def iks_executor(make_executor) -> FakeExecutor:
    """Fake executor replying like crictl on an IKS worker."""
    return make_executor(IKS_OUTPUTS)


@pytest.fixture
def openshift_executor(make_executor) -> FakeExecutor:
    """Fake executor replying like crictl on an OpenShift node."""
    return make_executor(OPENSHIFT_OUTPUTS)


MOCK_CRICTL = """#!{python}
import json
import os
import sys

here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, "crictl.json")) as f:
    spec = json.load(f)
with open(os.path.join(here, "calls.jsonl"), "a") as f:
    f.write(json.dumps({{"argv": sys.argv[1:], "path": os.environ.get("PATH")}}) + "\\n")

args = sys.argv[1:]
if args[:1] == ["-c"]:
    args = args[2:]
command = args[0] if args else ""
reply = spec["commands"].get(command, spec["default"])
stdout = reply["stdout"]
if command == "logs" and spec["log_lines"] is not None:
    lines = spec["log_lines"]
    for arg in args[1:]:
        if arg.startswith("--tail="):
            count = int(arg.split("=", 1)[1])
            lines = lines[-count:] if count else []
    stdout = "".join(line + "\\n" for line in lines)
sys.stdout.write(stdout)
sys.stdout.flush()
sys.stderr.write(reply["stderr"])
sys.exit(reply["exit"])
"""


class MockCrictl:
    """A generated crictl executable living in its own directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    @property
    def bin_path(self) -> str:
        return str(self.directory)

    def calls(self) -> list[dict[str, Any]]:
        """Arguments and PATH of every invocation so far."""
        log = self.directory / "calls.jsonl"
        if not log.exists():
            return []
        return [json.loads(line) for line in log.read_text().splitlines()]

    def config(self, **kwargs: Any) -> ClientConfig:
        """Client configuration pointing at this mock."""
        return ClientConfig(bin_path=self.bin_path, **kwargs)


@pytest.fixture
def make_mock_crictl(tmp_path) -> Callable[..., MockCrictl]:
    """Factory writing mock crictl executables under ``tmp_path``.

    Args (of the returned factory):
        name: Directory name for this mock
        outputs: Sub-command to stdout (JSON value or raw text)
        stderr: Text written to stderr by every sub-command
        exit_code: Exit status of every invocation
        default_stdout: stdout for sub-commands not in ``outputs``
        log_lines: When set, ``logs`` prints these lines honouring ``--tail=N``
    """
    if sys.platform == "win32":
        pytest.skip("mock crictl executables need a POSIX shebang")

    def factory(
        name: str,
        outputs: dict[str, Any] | None = None,
        stderr: str = "",
        exit_code: int = 0,
        default_stdout: str = "",
        log_lines: list[str] | None = None,
    ) -> MockCrictl:
        directory = tmp_path / name
        directory.mkdir()

        commands = {}
        for command, value in (outputs or {}).items():
            stdout = value if isinstance(value, str) else json.dumps(value, indent=2) + "\n"
            commands[command] = {"stdout": stdout, "stderr": stderr, "exit": exit_code}
        spec = {
            "commands": commands,
            "default": {"stdout": default_stdout, "stderr": stderr, "exit": exit_code},
            "log_lines": log_lines,
        }
        (directory / "crictl.json").write_text(json.dumps(spec))

        script = directory / "crictl"
        script.write_text(MOCK_CRICTL.format(python=sys.executable))
        os.chmod(script, 0o755)
        return MockCrictl(directory)

    return factory


@pytest.fixture
def iks_crictl(make_mock_crictl) -> MockCrictl:
    return make_mock_crictl("iks", IKS_OUTPUTS)


@pytest.fixture
def openshift_crictl(make_mock_crictl) -> MockCrictl:
    return make_mock_crictl("openshift", OPENSHIFT_OUTPUTS)


@pytest.fixture
def only_errors_crictl(make_mock_crictl) -> MockCrictl:
    """crictl that prints a bare newline and exits non-zero."""
    return make_mock_crictl("only_errors", default_stdout="\n", exit_code=1)


@pytest.fixture
def nonzero_exit_crictl(make_mock_crictl) -> MockCrictl:
    """crictl that prints valid output, leaves stderr empty and exits 3."""
    return make_mock_crictl("nonzero_exit", IKS_OUTPUTS, exit_code=3)


@pytest.fixture
def mixed_errors_crictl(make_mock_crictl) -> MockCrictl:
    """crictl that prints valid output but also writes to stderr."""
    return make_mock_crictl("mixed_errors", IKS_OUTPUTS, stderr="An error message\n")


@pytest.fixture
def bad_json_crictl(make_mock_crictl) -> MockCrictl:
    """crictl that prints truncated JSON."""
    return make_mock_crictl("bad_json", default_stdout='{"items": [\n')


@pytest.fixture
def big_data_crictl(make_mock_crictl) -> MockCrictl:
    """crictl whose logs are larger than a pipe buffer."""
    return make_mock_crictl("big_data", {"logs": "a" * 65536 + "\n"})


@pytest.fixture
def long_logs_crictl(make_mock_crictl) -> MockCrictl:
    return make_mock_crictl("long_logs", IKS_OUTPUTS, log_lines=LONG_LOG_LINES)
