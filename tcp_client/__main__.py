"""
Main entry point for the tcp-client application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import logging
import sys

import typer
from rich.console import Console

from tcp_client.cli.app import app
from tcp_client.cli.formatters import format_error_with_suggestions
from tcp_client.exceptions import TcpClientError


def main() -> None:
    """Main entry point function."""
    log = logging.getLogger("tcp_client")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Download cancelled by user.[/yellow]")
        sys.exit(1)
    except TcpClientError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
