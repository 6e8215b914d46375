"""
Main entry point for the satdownload application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from click.exceptions import UsageError
from rich.console import Console

from satdownload.cli.app import app
from satdownload.cli.formatters import format_error_with_suggestions
from satdownload.exceptions import ExitStatus, SatDownloadError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("satdownload")
    console = Console()

    try:
        exit_code = app(standalone_mode=False)
    except UsageError as e:
        console.print(f"[red]{e.format_message()}[/red]")
        console.print("Run [cyan]satdownload --help[/cyan] for usage.")
        sys.exit(ExitStatus.UNKNOWN_OPTION)
    except (typer.Abort, KeyboardInterrupt, asyncio.CancelledError):
        # Click reports Ctrl-C as Abort when not in standalone mode
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(ExitStatus.SUCCESS)
    except SatDownloadError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(e.exit_code)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(ExitStatus.UNKNOWN_OPTION)

    sys.exit(exit_code if isinstance(exit_code, int) else ExitStatus.SUCCESS)


if __name__ == "__main__":
    main()
