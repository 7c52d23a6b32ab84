# filehound/cli/console_output.py
"""
Handles printing warnings and summary information to the console (stderr).
"""
from typing import List

import click
import structlog
from rich.console import Console as RichConsole
from rich.table import Table

from filehound.config.settings import SearchOptions
from filehound.core.search import SearchOutcome
from filehound.exceptions import SubdirectoryUnreadableError

log = structlog.get_logger(__name__)

def print_warnings(warnings: List[SubdirectoryUnreadableError]):
    for warning in warnings:
        click.secho(f"Warning: {warning}", fg="yellow", err=True)

def print_cli_summary_output(options: SearchOptions, outcome: SearchOutcome, console: RichConsole):
    """
    Prints a summary table of the search to stderr.
    'console' should be a rich Console bound to stderr.
    """
    log.debug("console_summary_output_requested")
    table = Table(title="search summary", show_header=False, title_justify="left")
    table.add_column("item", style="cyan")
    table.add_column("value")
    table.add_row("roots", str(len(options.paths) or 1))
    table.add_row("mode", "directories" if options.directories_only else "files")
    table.add_row("matches", f"{len(outcome.matches):,}")
    table.add_row("unreadable directories", str(len(outcome.warnings)))
    if outcome.error is not None:
        table.add_row("error", str(outcome.error), style="red")
    console.print(table)
