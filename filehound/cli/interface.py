# filehound/cli/interface.py
import asyncio
import sys
from dataclasses import fields as dataclass_fields, MISSING
from pathlib import Path
from typing import Any, Dict

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
import structlog

from filehound import __version__ as app_version
from filehound.cli.console_output import print_cli_summary_output, print_warnings
from filehound.config.loader import LIST_ATTRS, load_and_merge_configs, resolve_config_values, save_options_to_profile
from filehound.config.settings import SearchOptions
from filehound.core.output import format_matches, write_to_file, write_to_stdout
from filehound.core.search import SearchOutcome
from filehound.exceptions import FileHoundError
from filehound.hound import FileHound
from filehound.logging_setup import configure_logging

log = structlog.get_logger(__name__)

def _default_options() -> Dict[str, Any]:
    defaults: Dict[str, Any] = {}
    for fd in dataclass_fields(SearchOptions):
        defaults[fd.name] = fd.default_factory() if fd.default_factory is not MISSING else fd.default
    return defaults

def _build_effective_options(ctx: click.Context, cli_params: Dict[str, Any]) -> SearchOptions:
    # precedence: dataclass defaults < config files < profile < command line.
    effective_options = _default_options()
    raw_configs_from_toml_files = load_and_merge_configs()
    effective_options.update(
        resolve_config_values(raw_configs_from_toml_files, cli_params.get("active_config_profile_name"))
    )

    for attr in effective_options:
        if attr not in cli_params:
            continue
        if ctx.get_parameter_source(attr) != click.core.ParameterSource.COMMANDLINE:
            continue
        value = cli_params[attr]
        if attr in LIST_ATTRS:
            if not value:
                continue
            value = list(value)
        effective_options[attr] = value

    return SearchOptions(**effective_options)

def _run_search(options: SearchOptions) -> SearchOutcome:
    hound = FileHound.from_options(options)
    if options.sync:
        return hound.find_outcome_sync()
    return asyncio.run(hound.find_outcome())

def _run_search_flow(options: SearchOptions) -> int:
    log.info("search_flow_started", paths=options.paths, sync=options.sync)
    stderr_console = RichConsole(stderr=True)

    if stderr_console.is_terminal:
        with stderr_console.status("searching...", spinner="dots"):
            outcome = _run_search(options)
    else:
        outcome = _run_search(options)

    print_warnings(outcome.warnings)

    if outcome.ok:
        rendered = format_matches(outcome.matches, options.null_separated)
        if options.output_file:
            write_to_file(options.output_file, rendered)
            click.echo(f"Info: {len(outcome.matches)} matches written to: {options.output_file}", err=True)
        else:
            write_to_stdout(rendered)

    if options.summary:
        print_cli_summary_output(options, outcome, stderr_console)

    if not outcome.ok:
        click.secho(f"Error: {outcome.error}", fg="red", err=True)
        return 1
    return 0


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("paths", nargs=-1, type=click.Path(path_type=str))
@optgroup.group("Filtering Options", help="Control which entries are reported.")
@optgroup.option("-e", "--ext", "extensions", multiple=True, help="File extension to match (repeatable), e.g. 'json' or '.json'.")
@optgroup.option("-g", "--glob", "--match", "globs", multiple=True, help="Glob matched against the entry name (repeatable).")
@optgroup.option("--discard", "discard_patterns", multiple=True, help="Regex; entries whose path matches are dropped (repeatable).")
@optgroup.option("--size", "size", default=None, help="Size expression, e.g. '<10kb' or '>= 2mb'.")
@optgroup.option("--empty", "empty", is_flag=True, default=False, help="Only zero-length entries.")
@optgroup.option("--modified", "modified", default=None, help="Modification age expression, e.g. '< 2 days'.")
@optgroup.option("--accessed", "accessed", default=None, help="Access age expression, e.g. '< 10 minutes'.")
@optgroup.option("--changed", "changed", default=None, help="Status-change age expression, e.g. '> 1 week'.")
@optgroup.option("--socket", "socket", is_flag=True, default=False, help="Only sockets.")
@optgroup.option("--ignore-hidden-files", "ignore_hidden_files", is_flag=True, default=False, help="Drop entries whose name starts with a dot.")
@optgroup.option("--ignore-hidden-dirs", "ignore_hidden_directories", is_flag=True, default=False, help="Do not descend into hidden directories.")
@optgroup.option("--not", "negate", is_flag=True, default=False, help="Negate the combined filters.")
@optgroup.group("Traversal Options", help="Control how directories are walked.")
@optgroup.option("--depth", "max_depth", type=click.IntRange(min=0), default=None, help="Maximum depth below each root. 0 disables recursion.")
@optgroup.option("-d", "--directory", "directories_only", is_flag=True, default=False, help="Report directories instead of files.")
@optgroup.option("-L", "--follow-symlinks/--no-follow-symlinks", "follow_symlinks", default=True, help="Descend into symlinked directories (default). With --no-follow-symlinks they are reported as plain entries.")
@optgroup.option("--sync", "sync", is_flag=True, default=False, help="Walk roots one after another instead of concurrently.")
@optgroup.group("Output Options", help="Where and how matches are written.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Write matches to a file instead of stdout.")
@optgroup.option("-0", "--null", "null_separated", is_flag=True, default=False, help="Terminate each path with NUL instead of newline.")
@optgroup.option("--summary", "summary", is_flag=True, default=False, help="Print a summary table on stderr.")
@optgroup.group("Application Behavior", help="Configuration profiles, saving, and logging.")
@optgroup.option("--config-profile", "active_config_profile_name", default=None, help="Load a profile from config file(s).")
@optgroup.option("--save", "save_profile_name", type=str, metavar="PROFILE_NAME", default=None, help="Save options to a profile in the project's .filehound.toml. Exits after saving.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, prog_name="filehound", help="Show version and exit.")
@click.pass_context
def main_cli(ctx: click.Context, **cli_params: Any):
    """filehound: find files and directories under one or more PATHS
    (default: current directory) using composable filters."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs_cli", False))

    log.debug("cli_command_invoked", params=cli_params)

    try:
        options = _build_effective_options(ctx, cli_params)

        if options.save_profile_name:
            if save_options_to_profile(options, options.save_profile_name):
                click.echo(f"Info: profile '{options.save_profile_name}' saved.", err=True)
            else:
                click.echo("Info: no non-default options to save.", err=True)
            ctx.exit(0)

        exit_code = _run_search_flow(options)

    except click.exceptions.Exit as e: raise e
    except FileHoundError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)

    sys.exit(exit_code)
