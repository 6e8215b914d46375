"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from satdownload import __version__
from satdownload.api.client import ScoresDownloadClient
from satdownload.core.sequence import SequenceController
from satdownload.exceptions import SatDownloadError
from satdownload.models.config import RunConfig
from satdownload.models.stats import RunStats
from satdownload.storage.config_manager import DEFAULT_CONFIG_FILE, ConfigManager
from satdownload.utils.formatting import (
    normalize_date_string,
    parse_file_number,
    remove_quotes,
)

from .formatters import print_config, print_summary_panel

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    ],
)
log = logging.getLogger("satdownload")

app = typer.Typer(
    name="satdownload",
    help=(
        "Download SAT score files from the College Board scores download service,"
        " resuming from the last file recorded in the counter file."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def build_cli_options(
    date: Optional[str],
    file_num: Optional[int],
    file_name: Optional[str],
    insecure: Optional[bool],
) -> dict:
    """Translates command-line flags into RunConfig overrides."""
    cli_options = {"date_string": normalize_date_string(date)}
    if file_num is not None or file_name:
        cli_options["save_counter"] = False
    if file_name:
        cli_options["download_consecutive_files"] = False
    if insecure is not None:
        cli_options["insecure_skip_verify"] = insecure
    return cli_options


async def run_sequence(
    config: RunConfig, file_num: Optional[int], file_name: Optional[str]
) -> RunStats:
    """Runs the download sequence and always closes the HTTP session."""
    api_client = ScoresDownloadClient(
        config.scoredwnld_url_root, config.insecure_skip_verify
    )
    try:
        controller = SequenceController(config, api_client)
        return await controller.run(file_num=file_num, file_name=file_name)
    finally:
        await api_client.close()


@app.command()
def download(
    config_file: str = typer.Option(
        DEFAULT_CONFIG_FILE,
        "--config",
        help="Path and file name of the config file.",
    ),
    date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Date of the files to download (YYYYMMDD). Default is today's date.",
    ),
    filenum: Optional[str] = typer.Option(
        None,
        "--filenum",
        help=(
            "File number to start searching from (last part of the file name)."
            " Default is the next number in the counter file."
        ),
    ),
    filename: Optional[str] = typer.Option(
        None, "--filename", help="Exact file name to download."
    ),
    insecure: Optional[bool] = typer.Option(
        None,
        "--insecure/--verify-tls",
        help="Skip TLS certificate and hostname verification (overrides config).",
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the resolved configuration and exit."
    ),
    init_config: bool = typer.Option(
        False, "--init", help="Write a starter config file at the --config path and exit."
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Enable debug logging."
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Download consecutive score files for a date."""
    if version:
        console.print(f"[bold]satdownload[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    if verbose:
        logging.getLogger("satdownload").setLevel("DEBUG")

    config_manager = ConfigManager(Path(remove_quotes(config_file)))

    if init_config:
        try:
            config_manager.save_template()
        except SatDownloadError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=e.exit_code) from e
        console.print(
            f"[green]✓ Config template written to '{config_manager.config_file_path}'."
            "[/green]"
        )
        raise typer.Exit()

    try:
        file_num = parse_file_number(filenum) if filenum is not None else None
        file_name = remove_quotes(filename).strip() if filename else None
        cli_options = build_cli_options(date, file_num, file_name, insecure)
        config = config_manager.load_config(cli_options)
    except SatDownloadError as e:
        log.error(f"[red]{e}[/red]")
        raise typer.Exit(code=e.exit_code) from e

    if show_config:
        print_config(config_manager.config_file_path, config)
        raise typer.Exit()

    try:
        stats = asyncio.run(run_sequence(config, file_num, file_name))
    except SatDownloadError as e:
        log.error(f"[red]{e}[/red]")
        raise typer.Exit(code=e.exit_code) from e

    print_summary_panel(stats)
