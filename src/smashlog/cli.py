"""
smashlog CLI - Command Line Interface for battle log analysis

Provides commands for:
- Analyzing a battle log file
- Listing the action-code taxonomy
- Generating a default configuration file
"""

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smashlog import __version__
from smashlog.analysis.analyzer import analyze as analyze_log
from smashlog.core.config import generate_default_config, load_config
from smashlog.core.errors import BattleLogError
from smashlog.core.logging_setup import setup_logging
from smashlog.core.parser import read_battle_log
from smashlog.core.taxonomy import iter_taxonomy
from smashlog.export import export_result
from smashlog.report import format_compact, render_report

app = typer.Typer(
    name="smashlog",
    help="Battle action-log analyzer - category counts, ratios and action frequencies",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]smashlog[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging"
    )
) -> None:
    """smashlog - Battle Action-Log Analyzer"""
    ctx.obj = {"verbose": verbose}


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(1)


@app.command()
def analyze(
    ctx: typer.Context,
    log_file: Path = typer.Argument(
        ...,
        help="Path to the battle log file (student_id,match_number then timestamp,action_code lines)",
        dir_okay=False,
    ),
    compact: bool = typer.Option(
        False,
        "--compact",
        "-c",
        help="Print a one-line summary instead of the full report"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Export results to a file (format detected from extension: .json, .csv)"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (.yaml, .toml, .json)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """
    Analyze a battle log and display action statistics.

    Shows Attack / Shield / Dodge counts and ratios, a bar chart of every
    action code, and the most frequent action.
    """
    try:
        config = load_config(config_file)
    except (yaml.YAMLError, ValueError, OSError) as e:
        # ValueError covers ConfigError and the JSON/TOML decode errors
        _fail(f"invalid configuration: {e}")

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    try:
        setup_logging(config.logging, verbose=verbose)
    except OSError as e:
        _fail(f"cannot open log file: {e}")

    try:
        battle_log = read_battle_log(log_file, encoding=config.parser.encoding)
    except BattleLogError as e:
        logger.debug(f"Failed to parse {log_file}", exc_info=True)
        _fail(str(e))

    result = analyze_log(battle_log)

    if compact:
        console.print(
            escape(format_compact(result, precision=config.display.ratio_precision)),
            soft_wrap=True,
        )
    else:
        console.print(
            f"[dim]Loaded {len(battle_log)} action records from {escape(str(log_file))}[/dim]",
            soft_wrap=True,
        )
        render_report(result, console=console, config=config.display)

    if output:
        try:
            export_result(result, output, config.export)
        except (ValueError, OSError) as e:
            _fail(f"could not export results: {e}")
        console.print(f"[green]Results exported to:[/green] {escape(str(output))}", soft_wrap=True)


@app.command()
def codes() -> None:
    """
    List every known action code with its name and category.

    Codes not in this list are counted as attacks.
    """
    table = Table(title="Action Codes")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Category")

    for code, name, category in iter_taxonomy():
        table.add_row(code, name, category.label)

    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("smashlog.yaml"),
        help="Where to write the configuration file (.yaml, .yml or .json)",
        dir_okay=False,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file"
    ),
) -> None:
    """
    Write a default configuration file.
    """
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")

    try:
        generate_default_config(path)
    except (ValueError, OSError) as e:
        _fail(str(e))

    console.print(f"[green]Wrote default config to:[/green] {escape(str(path))}", soft_wrap=True)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
