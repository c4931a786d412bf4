"""
Console report generator for backtrack.

Renders a history buffer with Rich: a header panel with the buffer state,
a table of recorded items showing where each live cursor stands, and a
summary of source usage.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backtrack.record import HistoryBuffer
from backtrack.schema import CursorInfo, CursorMode, HistoryStats


ICON_COPYING = "[cyan]C[/cyan]"
ICON_REFERENCING = "[magenta]R[/magenta]"

# Items shown when verbose is off
DEFAULT_ITEM_LIMIT = 20


def generate_console_report(
    buffer: HistoryBuffer[Any],
    console: Console | None = None,
    verbose: bool = False,
) -> None:
    """
    Print a console report for a history buffer.

    Args:
        buffer: The buffer to report on
        console: Rich Console instance (creates one if not provided)
        verbose: Show every recorded item instead of the newest ones
    """
    if console is None:
        console = Console()

    stats = buffer.stats()
    cursors = buffer.cursor_infos()

    _print_header(console, stats)
    console.print()

    _print_items(console, buffer, cursors, verbose)
    console.print()

    _print_summary(console, stats, cursors)


def _print_header(console: Console, stats: HistoryStats) -> None:
    """Print the buffer header with its state."""
    header = Text()
    header.append(" History ", style="bold")
    header.append(f"{stats.length} items", style="bold cyan")
    header.append(" │ ", style="dim")
    if stats.exhausted:
        header.append("EXHAUSTED", style="bold dim")
        header.append(" ■", style="dim")
    else:
        header.append("LIVE", style="bold green")
        header.append(" ►", style="green")

    console.print(Panel(header, expand=False))


def _print_items(
    console: Console,
    buffer: HistoryBuffer[Any],
    cursors: list[CursorInfo],
    verbose: bool,
) -> None:
    """Print the recorded items with cursor marks."""
    console.print("[bold]Recorded Items[/bold]")
    console.print()

    length = len(buffer)
    start = 0 if verbose else max(0, length - DEFAULT_ITEM_LIMIT)
    if start > 0:
        console.print(f"  [dim]... {start} older items hidden[/dim]")

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("#", style="dim", width=6, justify="right")
    table.add_column("Cursors", width=10)
    table.add_column("Item", overflow="fold")

    for index in range(start, length):
        table.add_row(
            str(index),
            _cursor_marks(cursors, index),
            escape(_truncate(repr(buffer[index]), 200 if verbose else 60)),
        )

    # The live edge row shows cursors waiting for the next pull
    edge_marks = _cursor_marks(cursors, length)
    if edge_marks:
        table.add_row(str(length), edge_marks, "[dim]live edge[/dim]")

    console.print(table)


def _cursor_marks(cursors: list[CursorInfo], position: int) -> str:
    """Icons for the cursors standing at a position."""
    return " ".join(
        ICON_COPYING if c.mode == CursorMode.COPYING else ICON_REFERENCING
        for c in cursors
        if c.position == position
    )


def _truncate(s: str, max_len: int) -> str:
    """Truncate string with ellipsis."""
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


def _print_summary(
    console: Console,
    stats: HistoryStats,
    cursors: list[CursorInfo],
) -> None:
    """Print summary statistics."""
    console.print("[bold]Summary[/bold]")
    console.print()

    copying = sum(1 for c in cursors if c.mode == CursorMode.COPYING)
    referencing = len(cursors) - copying

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column("Metric", style="dim")
    stats_table.add_column("Value")

    stats_table.add_row("Recorded", str(stats.length))
    stats_table.add_row("Source Pulls", str(stats.source_pulls))
    stats_table.add_row(
        "Failed Pulls",
        f"[red]{stats.failed_pulls}[/red]" if stats.failed_pulls > 0 else "0",
    )
    stats_table.add_row("Copying Cursors", str(copying))
    stats_table.add_row("Referencing Cursors", str(referencing))

    console.print(stats_table)
