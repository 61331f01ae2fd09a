"""Crossover search: exponential bracketing, binary refinement, multi-interval driver.

The search only asks a Judge whether the fast operation wins at a size, so
it can be exercised without any timing at all.

Sizes are bit counts. A round of the search works like this:

- bracket(): starting from a frontier L where the slow operation is still
  competitive, probe U = 2*(L-1) - margin, doubling L until the fast
  operation wins at U.
- refine(): bisect [L, U] until narrower than the accuracy; the last
  midpoint starts a crossover interval.
- CrossoverSearch: after each interval, probe once past the bracket. A fast
  win there ends the search; a slow win means performance oscillates, so
  the closing edge of the interval is located and another round begins.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from cutover.exceptions import ConfigurationError, InvocationError, StartTooHighError
from cutover.models.result import CrossoverInterval, TuneStatus

if TYPE_CHECKING:
    from cutover.protocols import Judge

logger = logging.getLogger(__name__)

ProbeCallback = Callable[["SearchState", int, bool], None]


class SearchState(str, enum.Enum):
    """States of the multi-interval driver."""

    BRACKETING = "bracketing"
    REFINING = "refining"
    FRONTIER_ADVANCE = "frontier_advance"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bracket:
    """Size range known to contain a crossover.

    The slow operation was competitive just below ``lower`` and the fast
    operation won at ``upper``.
    """

    lower: int
    upper: int


def _probe(
    judge: Judge,
    size_bits: int,
    state: SearchState,
    on_probe: ProbeCallback | None,
) -> bool:
    fast_wins = judge.fast_wins(size_bits)
    logger.debug("%s probe at %d bits: fast %s", state, size_bits, "wins" if fast_wins else "loses")
    if on_probe is not None:
        on_probe(state, size_bits, fast_wins)
    return fast_wins


def check_margin(start_bits: int, margin: int) -> None:
    """Reject a margin that pulls the first bracket probe down to the start.

    Later probes only move further above their frontier, so checking the
    first one is enough.

    Raises:
        ConfigurationError: If 2*(start_bits-1) - margin <= start_bits.
    """
    first_probe = 2 * (start_bits - 1) - margin
    if first_probe <= start_bits:
        raise ConfigurationError(
            f"Margin {margin} is too large for a {start_bits}-bit start: the first "
            f"probe would be at {first_probe} bits. Increase the start exponent "
            f"or lower the margin."
        )


def bracket(
    judge: Judge,
    lower: int,
    *,
    margin: int = 0,
    max_bits: int = 1 << 24,
    initial: bool = False,
    on_probe: ProbeCallback | None = None,
) -> Bracket | None:
    """Exponential search for a size where the fast operation wins.

    Args:
        judge: Decides who wins at a size.
        lower: Current frontier.
        margin: Subtracted from each probe size.
        max_bits: Probes beyond this size are not attempted.
        initial: True for the first round of a run. A win on its first
            probe means the starting size is already past the crossover.
        on_probe: Optional progress callback.

    Returns:
        The bracket, or None if no fast win was found up to max_bits.

    Raises:
        ConfigurationError: If the margin leaves no room above ``lower``.
        StartTooHighError: If ``initial`` and the first probe already wins.
    """
    check_margin(lower, margin)
    first = True
    while True:
        upper = 2 * (lower - 1) - margin
        if upper > max_bits:
            logger.info("Bracketing stopped at the %d-bit ceiling", max_bits)
            return None
        if _probe(judge, upper, SearchState.BRACKETING, on_probe):
            if initial and first:
                raise StartTooHighError(lower, upper)
            return Bracket(lower=lower, upper=upper)
        lower = 2 * lower - 1
        first = False


def refine(
    judge: Judge,
    start: int,
    end: int,
    *,
    accuracy: int,
    on_probe: ProbeCallback | None = None,
) -> int:
    """Bisect [start, end] for the size where the fast operation starts winning.

    The slow operation wins at ``start`` and the fast one at ``end``. At
    least one probe is made; the loop stops once the width drops below
    ``accuracy`` or down to a single bit. Returns the last probed midpoint.
    """
    while True:
        mid = (start + end) // 2
        if _probe(judge, mid, SearchState.REFINING, on_probe):
            end = mid
        else:
            start = mid
        if end - start < accuracy or end - start <= 1:
            return mid


def refine_end(
    judge: Judge,
    start: int,
    end: int,
    *,
    accuracy: int,
    on_probe: ProbeCallback | None = None,
) -> int:
    """Bisect [start, end] for the size where the fast operation stops winning.

    Mirror of refine(): the fast operation wins at ``start`` and the slow
    one at ``end``.
    """
    while True:
        mid = (start + end) // 2
        if _probe(judge, mid, SearchState.REFINING, on_probe):
            start = mid
        else:
            end = mid
        if end - start < accuracy or end - start <= 1:
            return mid


class CrossoverSearch:
    """Finds every disjoint size range where the fast operation wins.

    A state machine over SearchState. Each BRACKETING -> REFINING round
    records one interval; FRONTIER_ADVANCE probes once past it and either
    finishes (fast keeps winning) or closes the interval and brackets again.

    Usage::

        search = CrossoverSearch(comparator, start_bits=257, accuracy=64)
        intervals = search.run()
        print(search.status, intervals)
    """

    def __init__(
        self,
        judge: Judge,
        *,
        start_bits: int,
        accuracy: int,
        margin: int = 0,
        max_bits: int = 1 << 24,
        on_probe: ProbeCallback | None = None,
    ) -> None:
        check_margin(start_bits, margin)
        self._judge = judge
        self._accuracy = accuracy
        self._margin = margin
        self._max_bits = max_bits
        self._on_probe = on_probe

        self._state = SearchState.BRACKETING
        self._frontier = start_bits
        self._bracket: Bracket | None = None
        self._starts: list[int] = []
        self._ends: list[int] = []
        self.status: TuneStatus | None = None

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def frontier(self) -> int:
        return self._frontier

    @property
    def intervals(self) -> list[CrossoverInterval]:
        """Intervals recorded so far; the last is open-ended once COMPLETE."""
        result: list[CrossoverInterval] = []
        for i, start in enumerate(self._starts):
            last = i == len(self._starts) - 1
            end = None if last and self.status is TuneStatus.COMPLETE else self._ends[i]
            result.append(CrossoverInterval(start_bits=start, end_bits=end))
        return result

    def run(self) -> list[CrossoverInterval]:
        """Drive the state machine to DONE and return the intervals.

        Raises:
            StartTooHighError: If the very first probe favours the fast operation.
            InvocationError: If an operation fails; ``exc.intervals`` holds
                the intervals found before the failure.
        """
        try:
            while self._state is not SearchState.DONE:
                if self._state is SearchState.BRACKETING:
                    self._step_bracketing()
                elif self._state is SearchState.REFINING:
                    self._step_refining()
                elif self._state is SearchState.FRONTIER_ADVANCE:
                    self._step_frontier_advance()
        except InvocationError as exc:
            exc.intervals = self.intervals
            raise
        return self.intervals

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _step_bracketing(self) -> None:
        found = bracket(
            self._judge,
            self._frontier,
            margin=self._margin,
            max_bits=self._max_bits,
            initial=not self._starts,
            on_probe=self._on_probe,
        )
        if found is None:
            self.status = TuneStatus.CEILING_REACHED if self._starts else TuneStatus.NO_CROSSOVER
            self._state = SearchState.DONE
            return
        self._bracket = found
        self._frontier = found.lower
        self._state = SearchState.REFINING

    def _step_refining(self) -> None:
        assert self._bracket is not None
        lower, upper = self._bracket.lower, self._bracket.upper
        logger.info("Searching for cutover in [%d..%d]", lower, upper)
        start = refine(
            self._judge,
            lower,
            upper,
            accuracy=self._accuracy,
            on_probe=self._on_probe,
        )
        # The bracket's upper bound is a provisional end, revised if the
        # slow operation turns out to win again past it.
        self._starts.append(start)
        self._ends.append(upper)
        self._frontier = upper
        self._state = SearchState.FRONTIER_ADVANCE

    def _step_frontier_advance(self) -> None:
        last_win = self._frontier
        if 2 * last_win - 1 > self._max_bits:
            logger.info("Frontier advance stopped at the %d-bit ceiling", self._max_bits)
            self.status = TuneStatus.CEILING_REACHED
            self._state = SearchState.DONE
            return
        self._frontier = 2 * last_win - 1
        if _probe(self._judge, self._frontier, SearchState.FRONTIER_ADVANCE, self._on_probe):
            self.status = TuneStatus.COMPLETE
            self._state = SearchState.DONE
            return
        logger.info(
            "Slow operation wins again at %d bits; locating end of interval %d",
            self._frontier,
            len(self._starts),
        )
        self._ends[-1] = refine_end(
            self._judge,
            last_win,
            self._frontier,
            accuracy=self._accuracy,
            on_probe=self._on_probe,
        )
        self._state = SearchState.BRACKETING
