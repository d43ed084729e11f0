"""
Console report for battle log analysis.

Renders an AnalysisResult with rich:
- player information
- category counts and total
- per-code frequency bar chart
- category ratios
- most frequent action
"""

import math

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smashlog.core.config import DisplayConfig
from smashlog.core.constants import BAR_CHAR, BAR_MAX_WIDTH, ActionCategory
from smashlog.core.models import AnalysisResult
from smashlog.core.taxonomy import display_name, is_known_code

NO_DATA = "No data"


def bar_length(count: int, max_count: int, width: int = BAR_MAX_WIDTH) -> int:
    """
    Length of a proportional bar.

    round(count / max_count * width), rounding halves up, with a minimum of
    one character for any nonzero count.
    """
    if count <= 0 or max_count <= 0:
        return 0
    return max(1, math.floor(count / max_count * width + 0.5))


def render_bar(count: int, max_count: int, width: int = BAR_MAX_WIDTH, char: str = BAR_CHAR) -> str:
    return char * bar_length(count, max_count, width)


def format_top_action(result: AnalysisResult) -> str:
    """Describe the most frequent raw code, e.g. "Forward smash (ss) - 2 times"."""
    top = result.top_action
    if top is None:
        return NO_DATA
    return f"{display_name(top.raw_code)} ({top.raw_code}) - {top.count} times"


def format_compact(result: AnalysisResult, precision: int = 1) -> str:
    """One-line summary of a result."""
    counts = result.counts
    ratios = ", ".join(
        f"{category.label}:{counts.ratio(category):.{precision}f}%" for category in ActionCategory
    )
    top = format_top_action(result) if result.top_action else "no data"
    return (
        f"{result.header.student_id} (match {result.header.match_number}) - "
        f"{ratios} -> top: {top}"
    )


def unknown_codes(result: AnalysisResult) -> list[str]:
    """Raw codes in the result that are not in the action tables."""
    return [freq.raw_code for freq in result.frequencies if not is_known_code(freq.raw_code)]


# ============================================================================
# Sections
# ============================================================================


def _render_player_info(console: Console, result: AnalysisResult) -> None:
    table = Table(title="Player", show_header=False, title_justify="left")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Student ID", escape(result.header.student_id))
    table.add_row("Match", str(result.header.match_number))
    console.print(table)


def _render_counts(console: Console, result: AnalysisResult) -> None:
    counts = result.counts
    table = Table(title="Action Counts", title_justify="left")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    for category in ActionCategory:
        table.add_row(category.label, str(counts.count(category)))
    table.add_row("Total", str(counts.total), style="bold")
    console.print(table)


def _render_frequencies(console: Console, result: AnalysisResult, config: DisplayConfig) -> None:
    if not result.frequencies:
        console.print(f"[yellow]{NO_DATA}[/yellow]")
        return

    max_count = max(freq.count for freq in result.frequencies)
    table = Table(title="Actions by Code", title_justify="left")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Bar", style="magenta", no_wrap=True)
    table.add_column("Count", justify="right")
    for freq in result.frequencies:
        bar = render_bar(freq.count, max_count, config.bar_width, config.bar_char)
        table.add_row(escape(freq.raw_code), escape(bar), str(freq.count))
    console.print(table)


def _render_ratios(console: Console, result: AnalysisResult, config: DisplayConfig) -> None:
    counts = result.counts
    precision = config.ratio_precision
    table = Table(title="Action Ratios", title_justify="left")
    table.add_column("Category", style="cyan")
    table.add_column("Ratio", justify="right")
    for category in ActionCategory:
        table.add_row(category.label, f"{counts.ratio(category):.{precision}f}%")
    console.print(table)
    console.print(f"Most frequent category: [bold]{counts.most_frequent.label}[/bold]")


def _render_most_frequent(console: Console, result: AnalysisResult) -> None:
    console.print(f"Most frequent action: [bold]{escape(format_top_action(result))}[/bold]")


def render_report(
    result: AnalysisResult,
    console: Console | None = None,
    config: DisplayConfig | None = None,
) -> None:
    """
    Print the full analysis report.

    Args:
        result: Analysis result to render
        console: Console to print to (a new stdout console if None)
        config: Display settings (defaults if None)
    """
    console = console or Console()
    config = config or DisplayConfig()

    console.rule("[bold blue]Battle Log Analysis[/bold blue]")
    _render_player_info(console, result)
    console.print()
    _render_counts(console, result)
    console.print()
    _render_frequencies(console, result, config)
    console.print()
    _render_ratios(console, result, config)
    console.print()
    _render_most_frequent(console, result)

    if config.show_unknown_codes:
        unknown = unknown_codes(result)
        if unknown:
            codes = ", ".join(escape(code) for code in unknown)
            console.print(
                f"[yellow]Note:[/yellow] {len(unknown)} unrecognized code(s) counted as "
                f"{ActionCategory.ATTACK.label}: {codes}"
            )

    console.rule()
