"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from tcp_client import __version__
from tcp_client.core.session import DownloadSession
from tcp_client.exceptions import (
    ConfigurationError,
    ConnectError,
    DownloadError,
    LogFileError,
    ValidationError,
)
from tcp_client.models.config import ClientConfig

from .formatters import print_transfer_summary

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=False,
        )
    ],
)
log = logging.getLogger("tcp_client")

DEFAULT_FILENAME = "test.txt"

app = typer.Typer(
    name="tcp-client",
    help="Download a file from a TCP file server with a 'GET <filename>' request.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]tcp-client[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


@app.command()
def get(
    filename: str = typer.Argument(
        DEFAULT_FILENAME, help="Name of the file to request from the server."
    ),
    host: str | None = typer.Option(
        None, "--host", help="Server address (default 127.0.0.1)."
    ),
    port: int | None = typer.Option(
        None, "-p", "--port", help="Server port (default 8000)."
    ),
    buffer_size: int | None = typer.Option(
        None, "-b", "--buffer-size", help="Read buffer size in bytes (default 8192)."
    ),
    timeout: float | None = typer.Option(
        None,
        "-t",
        "--timeout",
        help="Connect timeout and per-chunk read timeout in seconds (default 30).",
    ),
    log_file: str | None = typer.Option(
        None, "--log-file", help="Outcome log file (default tcp-client.log)."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show debug output on the console.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Request FILENAME from the server and save it in the current directory."""
    logging.getLogger("tcp_client").setLevel("DEBUG" if verbose else "INFO")

    try:
        config = ClientConfig.build(
            {
                "host": host,
                "port": port,
                "buffer_size": buffer_size,
                "connect_timeout": timeout,
                "read_timeout": timeout,
                "log_filename": log_file,
            }
        )
    except ConfigurationError as e:
        console.print(f"✗ {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(code=1) from e

    session = DownloadSession(config)
    try:
        stats = asyncio.run(session.run(filename))
    except (ConnectError, LogFileError) as e:
        console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from e
    except (ValidationError, DownloadError) as e:
        log.debug(f"Download of '{filename}' failed: {e}")
        raise typer.Exit(code=1) from e

    print_transfer_summary(console, stats)
