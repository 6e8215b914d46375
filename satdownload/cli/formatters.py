"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from satdownload.models.config import RunConfig
from satdownload.models.stats import RunStats
from satdownload.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check that the --config path points to your properties file.",
            "• orgID, localFilePath, username and password are required.",
            "• Run with --init to write a starter config file.",
        ],
        "InvalidDateError": [
            "• Use the YYYYMMDD format, e.g. --date=20240115.",
        ],
        "InvalidFileNumberError": [
            "• --filenum must be a whole number, 0 or greater.",
        ],
        "CounterLockedError": [
            "• Another download run is still in progress.",
            "• If no run is active, delete the stale '.lock' file next to the counter file.",
        ],
        "AuthenticationError": [
            "• Verify the username and password in the configuration file.",
            "• Check your account status on the College Board reporting portal.",
        ],
        "ClientConnectorCertificateError": [
            "• The server certificate could not be verified.",
            "• Use --insecure only if you trust the network path to the service.",
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


def print_config(config_path: Path, config: RunConfig):
    """Displays the resolved configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in config.model_dump().items():
        if key == "password":
            value = "********"
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            Text(content.strip()),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(stats: RunStats):
    """Displays a summary of a finished run."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Files Downloaded:", f"[green]{stats.files_downloaded}[/green]")
    table.add_row("Total Size:", format_size(stats.total_size_downloaded))
    table.add_row("Duration:", format_duration(stats.duration))
    if stats.last_saved_counter is not None:
        table.add_row("Last Saved Counter:", str(stats.last_saved_counter))
    if stats.files_failed and stats.last_file_name:
        table.add_row("Stopped At:", f"[dim]{stats.last_file_name}[/dim]")

    border = "green" if stats.files_downloaded else "yellow"
    console.print(
        Panel(table, title="[bold]Download Summary[/bold]", border_style=border)
    )
