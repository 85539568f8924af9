"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from pycrio.core.client import CriClient
from pycrio.models.config import ClientConfig
from pycrio.utils.errors import CrioError

T = TypeVar("T")

# Shared console instances
console = Console()
err_console = Console(stderr=True)


def get_client(ctx: typer.Context) -> CriClient:
    """Build a client from the configuration stored by the main callback."""
    config = ctx.obj if isinstance(ctx.obj, ClientConfig) else ClientConfig()
    return CriClient(config)


def run_query(query: Callable[[], T]) -> T:
    """Run a query and exit with status 1 if it raises a pycrio error.

    Args:
        query: Zero-argument callable performing the query

    Returns:
        Whatever the query returned
    """
    try:
        return query()
    except CrioError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def output_json(data: Any) -> None:
    """Print a decoded crictl value as indented JSON."""
    console.out(json.dumps(data, indent=2), highlight=False)


def output_text(text: str) -> None:
    """Print text exactly as crictl produced it."""
    console.out(text, end="", highlight=False)
