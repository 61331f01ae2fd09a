"""Tuning facade: bind two operations, search, and produce a TuneResult.

tune() wires a TimedComparator into a CrossoverSearch using a TuneConfig,
and turns the start-too-high configuration outcome into a reportable
result instead of an exception. Generator and invocation failures still
propagate: they abort the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from cutover.engine.search import CrossoverSearch
from cutover.engine.timing import TimedComparator
from cutover.exceptions import StartTooHighError
from cutover.models.config import TuneConfig
from cutover.models.result import TuneResult, TuneStatus

if TYPE_CHECKING:
    from cutover.algorithms import AlgorithmPair
    from cutover.engine.search import ProbeCallback
    from cutover.protocols import Judge, Operation

logger = logging.getLogger(__name__)


def search_intervals(
    judge: Judge,
    *,
    slow_name: str,
    fast_name: str,
    config: TuneConfig,
    margin: int = 0,
    on_probe: ProbeCallback | None = None,
) -> TuneResult:
    """Run the multi-interval search against any Judge.

    Separated from tune() so the search can be driven by something other
    than wall-clock timing.
    """
    search = CrossoverSearch(
        judge,
        start_bits=config.start_bits,
        accuracy=config.accuracy,
        margin=margin,
        max_bits=config.max_bits,
        on_probe=on_probe,
    )
    try:
        intervals = search.run()
    except StartTooHighError as exc:
        logger.warning("Tuning %s vs %s failed: %s", slow_name, fast_name, exc)
        return TuneResult(
            slow_name=slow_name,
            fast_name=fast_name,
            margin=margin,
            status=TuneStatus.START_TOO_HIGH,
            message=str(exc),
        )

    assert search.status is not None
    message = None
    if search.status is TuneStatus.NO_CROSSOVER:
        message = f"{fast_name} never beat {slow_name} below {config.max_bits} bits"
    elif search.status is TuneStatus.CEILING_REACHED:
        message = (
            f"Search stopped at the {config.max_bits}-bit ceiling before "
            f"{fast_name} was seen winning for good"
        )
    logger.info(
        "Tuned %s vs %s: %s, %d interval(s)", slow_name, fast_name, search.status, len(intervals)
    )
    return TuneResult(
        slow_name=slow_name,
        fast_name=fast_name,
        margin=margin,
        status=search.status,
        intervals=intervals,
        message=message,
    )


def tune(
    slow: Operation,
    fast: Operation,
    config: TuneConfig | None = None,
    *,
    margin: int = 0,
    on_probe: ProbeCallback | None = None,
    clock: Callable[[], int] | None = None,
) -> TuneResult:
    """Locate every size range where ``fast`` beats ``slow``.

    Args:
        slow: Low-overhead, asymptotically slower operation.
        fast: High-overhead, asymptotically faster operation.
        config: Tuning constants; defaults to TuneConfig().
        margin: Bracketer margin used unless config.margin overrides it.
        on_probe: Optional progress callback (state, size_bits, fast_wins).
        clock: Nanosecond clock for the comparator (tests inject a fake one).

    Returns:
        TuneResult. A start size above the crossover yields status
        START_TOO_HIGH rather than an exception.

    Raises:
        ConfigurationError: If the operations cannot be compared, or the
            margin leaves no room above the start size.
        GeneratorExhaustedError: If operands cannot be generated.
        InvocationError: If an operation fails while being timed.
    """
    config = config or TuneConfig()
    margin = config.resolve_margin(margin)
    comparator = TimedComparator(
        slow,
        fast,
        min_duration_ns=config.min_duration_ns,
        fixed_value=config.fixed_value,
        calibrate=config.calibrate,
        max_attempts=config.max_generate_attempts,
        seed=config.seed,
        clock=clock,
    )
    logger.info("Timing %s vs %s", slow.name, fast.name)
    return search_intervals(
        comparator,
        slow_name=slow.name,
        fast_name=fast.name,
        config=config,
        margin=margin,
        on_probe=on_probe,
    )


def tune_pair(
    pair: AlgorithmPair,
    config: TuneConfig | None = None,
    *,
    on_probe: ProbeCallback | None = None,
    clock: Callable[[], int] | None = None,
) -> TuneResult:
    """Tune a registered algorithm pair with its own default margin."""
    return tune(
        pair.slow,
        pair.fast,
        config,
        margin=pair.margin,
        on_probe=on_probe,
        clock=clock,
    )
