"""Main CLI entry point for pycrio."""

import warnings
from pathlib import Path
from typing import List, Optional

import typer

from pycrio.cli.utils import console, get_client, output_json, output_text, run_query
from pycrio.models.config import ClientConfig, ImageCommand
from pycrio.utils.errors import ImageCommandParseError

app = typer.Typer(
    name="pycrio",
    help="Query pods, containers, images and logs through crictl.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    ctx: typer.Context,
    bin_path: Optional[str] = typer.Option(
        None, "--bin-path", help="Search path used to locate crictl"
    ),
    append_path: Optional[List[str]] = typer.Option(
        None, "--append-path", help="Directory appended to the search path (repeatable)"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="crictl config file passed through with -c"
    ),
    image_command: Optional[str] = typer.Option(
        None, "--image-command", help="Sub-command used to list images (img, images)"
    ),
    settings: Optional[Path] = typer.Option(
        None, "--settings", help="pycrio settings file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    structured_logs: bool = typer.Option(
        False, "--structured-logs", help="Append key=value context to log records"
    ),
) -> None:
    """
    pycrio: structured access to crictl.

    - [bold]pod[/bold]: Find a pod by hostname
    - [bold]inspectp[/bold]: Inspect a pod
    - [bold]ps[/bold]: List the containers of a pod
    - [bold]inspect[/bold]: Inspect a container
    - [bold]image[/bold]: Find an image by id or repo digest
    - [bold]logs[/bold]: Print container logs
    """
    from pycrio.utils.config import load_settings
    from pycrio.utils.logging import configure_logging

    if ctx.invoked_subcommand == "version":
        return

    command = None
    if image_command is not None:
        try:
            command = ImageCommand.parse(image_command)
        except ImageCommandParseError:
            raise typer.BadParameter(
                f"unknown image command {image_command!r}, expected img or images",
                param_hint="--image-command",
            )

    loaded = run_query(lambda: load_settings(settings))

    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = loaded.log_level
    configure_logging(level=level, structured=structured_logs)

    values = loaded.to_client_config().model_dump()
    if bin_path is not None:
        values["bin_path"] = bin_path
    if config is not None:
        values["config_path"] = config
    if command is not None:
        values["image_command"] = command

    client_config = ClientConfig(**values)
    for path in append_path or []:
        client_config.append_bin_path(path)

    ctx.obj = client_config


@app.command()
def pod(
    ctx: typer.Context,
    hostname: str = typer.Argument(..., help="Pod hostname"),
) -> None:
    """Find the first pod matching a hostname."""
    client = get_client(ctx)
    output_json(run_query(lambda: client.pod(hostname)))


@app.command()
def inspectp(
    ctx: typer.Context,
    pod_id: str = typer.Argument(..., help="Pod id"),
) -> None:
    """Inspect a pod."""
    client = get_client(ctx)
    output_json(run_query(lambda: client.inspect_pod(pod_id)))


@app.command()
def ps(
    ctx: typer.Context,
    pod_id: str = typer.Argument(..., help="Pod id"),
) -> None:
    """List the containers of a pod."""
    client = get_client(ctx)
    output_json(run_query(lambda: client.pod_containers(pod_id)))


@app.command()
def inspect(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., help="Container id"),
) -> None:
    """Inspect a container."""
    client = get_client(ctx)
    output_json(run_query(lambda: client.inspect_container(container_id)))


@app.command()
def image(
    ctx: typer.Context,
    image_ref: str = typer.Argument(..., help="Image id or repository digest"),
) -> None:
    """Find an image by id or repository digest."""
    client = get_client(ctx)
    output_json(run_query(lambda: client.image(image_ref)))


@app.command()
def logs(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., help="Container id"),
    tail: Optional[int] = typer.Option(
        None, "--tail", "-t", min=0, help="Only print the last N lines"
    ),
) -> None:
    """Print the logs of a container."""
    client = get_client(ctx)
    if tail is not None:
        output_text(run_query(lambda: client.tail_logs(container_id, tail)))
        return

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DeprecationWarning)
        output_text(run_query(lambda: client.logs(container_id)))


@app.command()
def version() -> None:
    """Show the pycrio version."""
    from pycrio import __version__

    console.print(f"pycrio version {__version__}")


if __name__ == "__main__":
    app()
