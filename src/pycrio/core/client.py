"""Query facade over crictl."""

from __future__ import annotations

import warnings
from typing import Any, Sequence

from pycrio.core.command import build_args, tail_flag
from pycrio.core.decoder import decode_output
from pycrio.core.runner import Executor, SubprocessExecutor, run_command_text
from pycrio.models.config import ClientConfig
from pycrio.utils.errors import EmptyResultError, format_args
from pycrio.utils.logging import get_logger

logger = get_logger(__name__)


def _field(record: Any, key: str) -> Any:
    return record.get(key) if isinstance(record, dict) else None


def match_image(images: list[Any], image_ref: str) -> Any | None:
    """Find the first image record referenced by ``image_ref``.

    Each record is matched on its ``id`` first and only then on its
    ``repoDigests`` entries. Comparison is exact and case-sensitive.

    Args:
        images: The ``images`` array from ``crictl img -o json``
        image_ref: Image id or repository digest

    Returns:
        The first matching record, or None
    """
    for record in images:
        record_id = _field(record, "id")
        if not isinstance(record_id, str):
            record_id = ""

        logger.debug("Matching %s using %s", record_id, image_ref)
        if record_id == image_ref:
            logger.debug("MATCHED %s using %s", record_id, image_ref)
            return record

        digests = _field(record, "repoDigests")
        if not isinstance(digests, list):
            continue
        logger.debug("Matching inspecting repoDigests %s", digests)
        for digest in digests:
            digest_str = digest if isinstance(digest, str) else ""
            logger.debug("Matching repoDigests %s to %s", digest_str, image_ref)
            if digest_str == image_ref:
                logger.debug("MATCHED %s to %s", record_id, image_ref)
                return record
    return None


class CriClient:
    """Run crictl queries and return their decoded output.

    Every query spawns one crictl process, blocks until it exits and either
    returns the complete result or raises a single
    :class:`~pycrio.utils.errors.CrioError`.

    Example:
        client = CriClient(ClientConfig(bin_path="/usr/local/bin"))
        pod = client.pod("worker-1")
        info = client.inspect_pod(pod["id"])
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        executor: Executor | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration, defaults to :class:`ClientConfig`
            executor: Process executor, defaults to :class:`SubprocessExecutor`
        """
        self.config = config if config is not None else ClientConfig()
        self._executor = executor if executor is not None else SubprocessExecutor()

    def _args(self, operation: str, *args: str) -> list[str]:
        return build_args(operation, self.config.config_path, *args)

    def _run_text(self, args: Sequence[str]) -> str:
        return run_command_text(args, self.config.bin_path, self._executor)

    def _run_json(self, args: Sequence[str]) -> Any:
        return decode_output(self._run_text(args), args)

    def pod(self, hostname: str) -> Any:
        """Get the first pod whose name matches ``hostname``.

        Args:
            hostname: The hostname of the pod

        Returns:
            The first entry of the ``items`` array

        Raises:
            EmptyResultError: If crictl reported no pods
        """
        args = self._args("pods", "--name", hostname, "-o", "json")
        pod_list = self._run_json(args)

        items = _field(pod_list, "items")
        if not isinstance(items, list) or not items:
            raise EmptyResultError("failed to create pod at index 0", args)
        return items[0]

    def inspect_pod(self, pod_id: str) -> Any:
        """Get ``crictl inspectp`` output for a pod."""
        return self._run_json(self._args("inspectp", pod_id))

    def pod_containers(self, pod_id: str) -> Any:
        """Get the containers belonging to a pod."""
        return self._run_json(self._args("ps", "-o", "json", "-p", pod_id))

    def inspect_container(self, container_id: str) -> Any:
        """Get ``crictl inspect`` output for a container."""
        return self._run_json(self._args("inspect", container_id))

    def image(self, image_ref: str) -> Any:
        """Find the image record for an image reference.

        Lists images with the configured sub-command and returns the first
        record whose ``id`` equals ``image_ref`` or whose ``repoDigests``
        contains it.

        Args:
            image_ref: Image reference, usually a container's ``imageRef``

        Returns:
            The matching image record

        Raises:
            EmptyResultError: If there is no ``images`` array or nothing matches
        """
        args = self._args(str(self.config.image_command), "-o", "json")
        image_list = self._run_json(args)

        images = _field(image_list, "images")
        if not isinstance(images, list):
            raise EmptyResultError(f"no images found in crictl img {format_args(args)}", args)

        logger.debug("Found %d images", len(images))
        record = match_image(images, image_ref)
        if record is None:
            raise EmptyResultError(f"no images matched in crictl img {format_args(args)}", args)
        return record

    def logs(self, container_id: str) -> str:
        """Get the complete log of a container.

        Deprecated: the whole log is read into memory. Use :meth:`tail_logs`.
        """
        warnings.warn(
            "CriClient.logs is deprecated, use CriClient.tail_logs",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._run_text(self._args("logs", container_id))

    def tail_logs(self, container_id: str, line_count: int) -> str:
        """Get the last ``line_count`` lines of a container's log.

        Args:
            container_id: The container id
            line_count: Number of lines to take from the end of the log

        Returns:
            Log text as written by crictl
        """
        if isinstance(line_count, bool) or not isinstance(line_count, int) or line_count < 0:
            raise ValueError(f"line_count must be a non-negative integer, got {line_count!r}")
        return self._run_text(self._args("logs", tail_flag(line_count), container_id))

    def append_bin_path(self, path: str) -> None:
        """Append a directory to the configured search path."""
        self.config.append_bin_path(path)
