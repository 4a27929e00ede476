"""
Functions for formatting and displaying results in the console using Rich.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tcp_client.models.stats import TransferStats
from tcp_client.utils.formatting import format_duration, format_size, format_speed


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConnectError": [
            "• Check that the server is running and listening on the given port.",
            "• Use --host and --port to point at a different server.",
        ],
        "ConfigurationError": [
            "• Ports must be 1-65535, buffer sizes and timeouts must be positive.",
        ],
        "LogFileError": [
            "• Check that the working directory is writable.",
            "• Use --log-file to write the log somewhere else.",
        ],
        "ReadTimeoutError": [
            "• The server stopped sending data before closing the connection.",
            "• Raise --timeout if the server is slow between chunks.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_transfer_summary(console: Console, stats: TransferStats) -> None:
    """Prints a one-line summary of a completed download."""
    console.print(
        f"[green]✓[/green] Downloaded [cyan]{stats.filename}[/cyan] "
        f"({format_size(stats.bytes_received)} in "
        f"{format_duration(stats.duration_s)}, "
        f"{format_speed(stats.avg_speed_bps)})"
    )
