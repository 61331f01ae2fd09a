"""Rich formatting helpers for the cutover CLI.

Provides functions that format tuning results and search progress for
terminal display. Rich auto-detects TTY and degrades gracefully when piped
(no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cutover.engine.search import SearchState
from cutover.models.result import TuneStatus

if TYPE_CHECKING:
    from cutover.algorithms import AlgorithmPair
    from cutover.models.result import TuneResult

_STATE_HEADERS: dict[SearchState, str] = {
    SearchState.BRACKETING: "Searching for next interval...",
    SearchState.REFINING: "Searching for cutover:",
    SearchState.FRONTIER_ADVANCE: "Checking past the interval:",
}


def get_console(*, stderr: bool = False) -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=stderr)


class ProgressPrinter:
    """Probe callback that prints each probed size as the search runs.

    Sizes where the fast operation won are green. A new line with a header
    starts whenever the search changes state.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._state: SearchState | None = None

    def __call__(self, state: SearchState, size_bits: int, fast_wins: bool) -> None:
        if state is not self._state:
            if self._state is not None:
                self._console.print()
            self._console.print(f"  {_STATE_HEADERS[state]}", end="")
            self._state = state
        style = "green" if fast_wins else "dim"
        self._console.print(f" [{style}]{size_bits}[/{style}]", end="", highlight=False)

    def finish(self) -> None:
        if self._state is not None:
            self._console.print()
            self._state = None


def format_pairs(pairs: list[AlgorithmPair], console: Console) -> None:
    """Display the registered algorithm pairs."""
    if not pairs:
        console.print("[dim]No algorithm pairs registered.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Pair", style="cyan")
    table.add_column("Slow")
    table.add_column("Fast")
    table.add_column("Margin", justify="right", style="yellow")

    for pair in pairs:
        table.add_row(pair.name, pair.slow.name, pair.fast.name, str(pair.margin))

    console.print(table)


def format_result(result: TuneResult, console: Console) -> None:
    """Display the intervals found by a tuning run, in bits and 32-bit words."""
    slow = escape(result.slow_name)
    fast = escape(result.fast_name)

    if result.status is TuneStatus.START_TOO_HIGH:
        format_error(result.message or "Start size too high, decrease it and try again.", console)
        return

    if not result.intervals:
        console.print(f"[yellow]No crossover:[/yellow] {escape(result.message or '')}")
        return

    console.print(f"Intervals for which [bold]{fast}[/bold] is faster than [bold]{slow}[/bold]:")
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Bits", justify="right", style="green")
    table.add_column("Words", justify="right")
    for interval in result.intervals:
        end_bits = "infinity" if interval.end_bits is None else str(interval.end_bits)
        end_words = "infinity" if interval.end_words is None else str(interval.end_words)
        table.add_row(
            f"{interval.start_bits}..{end_bits}",
            f"{interval.start_words}..{end_words}",
        )
    console.print(table)

    if result.status is TuneStatus.CEILING_REACHED:
        console.print(f"[yellow]Note:[/yellow] {escape(result.message or '')}")


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {message}", highlight=False)
