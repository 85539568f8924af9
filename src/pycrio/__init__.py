"""pycrio: structured access to crictl.

Wraps the CRI inspection CLI (``crictl``) and turns its output into Python
values:

- **Pods**: look up a pod by hostname, inspect it, list its containers
- **Containers**: inspect a container, read its logs
- **Images**: find the image record behind a container's image reference

Usage:
    from pycrio import ClientConfig, CriClient

    client = CriClient(ClientConfig(config_path="/etc/crictl.yaml"))
    pod = client.pod("worker-1")
    containers = client.pod_containers(pod["id"])
    print(client.tail_logs(containers["containers"][0]["id"], 100))

CLI:
    pycrio pod <hostname>
    pycrio ps <pod-id>
    pycrio image <image-ref>
    pycrio logs --tail 100 <container-id>
"""

__version__ = "0.1.0"

# Core classes
from pycrio.core.client import CriClient
from pycrio.core.command import build_args
from pycrio.core.decoder import decode_output
from pycrio.core.runner import Executor, ProcessOutput, SubprocessExecutor

# Models
from pycrio.models.config import DEFAULT_BIN_PATH, ClientConfig, ImageCommand

# Errors
from pycrio.utils.errors import (
    ConfigurationError,
    CrioError,
    DecodeError,
    EmptyResultError,
    ImageCommandParseError,
    SpawnError,
    StderrNotEmptyError,
    StreamReadError,
)

# Settings and logging
from pycrio.utils.config import Settings, load_settings
from pycrio.utils.logging import configure_logging

__all__ = [
    # Version
    "__version__",
    # Core
    "CriClient",
    "build_args",
    "decode_output",
    "Executor",
    "ProcessOutput",
    "SubprocessExecutor",
    # Models
    "DEFAULT_BIN_PATH",
    "ClientConfig",
    "ImageCommand",
    # Errors
    "CrioError",
    "SpawnError",
    "StreamReadError",
    "StderrNotEmptyError",
    "DecodeError",
    "EmptyResultError",
    "ConfigurationError",
    "ImageCommandParseError",
    # Settings and logging
    "Settings",
    "load_settings",
    "configure_logging",
]
