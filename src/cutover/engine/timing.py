"""Noise-resistant timing comparison of a slow and a fast operation.

TimedComparator decides, for one size at a time, whether the fast operation
beats the slow one. Each comparison runs in two phases:

1. Calibration: paired invocations (slow then fast) are repeated from a
   fresh seed until their accumulated time reaches a duration floor. The
   iteration count amortises timer resolution and fixed overhead.
2. Measurement: the random stream is re-seeded to the calibration seed and
   all iterations of the slow operation run back to back; then the stream
   is re-seeded again and all iterations of the fast operation run. Both
   operations therefore see the identical operand sequence, and each batch
   runs without the other operation disturbing caches in between.

Only the invocation itself is timed, never operand generation.
"""

from __future__ import annotations

import logging
import random
from time import perf_counter_ns
from typing import TYPE_CHECKING, Any, Callable

from cutover.engine.operands import DEFAULT_MAX_ATTEMPTS, build_arguments
from cutover.exceptions import ConfigurationError, GeneratorExhaustedError, InvocationError
from cutover.models.config import DEFAULT_MIN_DURATION_NS
from cutover.protocols import Comparison, TimingSample

if TYPE_CHECKING:
    from cutover.protocols import Operation

logger = logging.getLogger(__name__)

PHASE_CALIBRATION = "calibration"
PHASE_MEASUREMENT = "measurement"


class TimedComparator:
    """Times a slow and a fast operation against each other on matched inputs.

    Implements the ``Judge`` protocol, so it can drive the crossover search
    directly.

    Usage::

        comparator = TimedComparator(slow_op, fast_op, min_duration_ns=10**9)
        if comparator.fast_wins(4096):
            ...
    """

    def __init__(
        self,
        slow: Operation,
        fast: Operation,
        *,
        min_duration_ns: int = DEFAULT_MIN_DURATION_NS,
        fixed_value: Any = 1,
        calibrate: bool = True,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        seed: int | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if slow.operand_shape != fast.operand_shape:
            raise ConfigurationError(
                f"Operations '{slow.name}' and '{fast.name}' take differently "
                f"shaped operands {slow.operand_shape} vs {fast.operand_shape}; "
                f"they cannot be compared on identical inputs"
            )
        self.slow = slow
        self.fast = fast
        self._min_duration_ns = min_duration_ns
        self._fixed_value = fixed_value
        self._calibrate = calibrate
        self._max_attempts = max_attempts
        self._seeds = random.Random(seed)
        self._clock = clock or perf_counter_ns
        self.last: Comparison | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fast_wins(self, size_bits: int) -> bool:
        """Return True if the fast operation strictly beats the slow one."""
        return self.compare(size_bits).fast_wins

    def compare(self, size_bits: int, *, calibrate: bool | None = None) -> Comparison:
        """Run one full comparison at ``size_bits``.

        Args:
            size_bits: Comparison size; sized operands get this many bits
                times their role scale.
            calibrate: Override the comparator's calibration mode for this
                call. Without calibration a single iteration is measured.

        Raises:
            InvocationError: If either operation raises.
            GeneratorExhaustedError: If operands cannot be generated.
        """
        if calibrate is None:
            calibrate = self._calibrate
        seed = self._seeds.getrandbits(64)

        iterations = self._calibrate_iterations(size_bits, seed) if calibrate else 1
        slow_ns = self._measure(self.slow, size_bits, seed, iterations)
        fast_ns = self._measure(self.fast, size_bits, seed, iterations)

        comparison = Comparison(
            size_bits=size_bits,
            seed=seed,
            iterations=iterations,
            slow_ns=slow_ns,
            fast_ns=fast_ns,
        )
        self.last = comparison
        logger.debug(
            "%d bits x%d: %s=%dns %s=%dns -> %s",
            size_bits,
            iterations,
            self.slow.name,
            slow_ns,
            self.fast.name,
            fast_ns,
            self.fast.name if comparison.fast_wins else self.slow.name,
        )
        return comparison

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _calibrate_iterations(self, size_bits: int, seed: int) -> int:
        """Count paired iterations until their total time reaches the floor."""
        rng = random.Random(seed)
        iterations = 0
        total_ns = 0
        while True:
            total_ns += self._time_once(self.slow, size_bits, rng, PHASE_CALIBRATION).elapsed_ns
            total_ns += self._time_once(self.fast, size_bits, rng, PHASE_CALIBRATION).elapsed_ns
            iterations += 1
            if total_ns >= self._min_duration_ns:
                return iterations

    def _measure(self, operation: Operation, size_bits: int, seed: int, iterations: int) -> int:
        """Sum the elapsed time of ``iterations`` back-to-back invocations."""
        rng = random.Random(seed)
        total_ns = 0
        for _ in range(iterations):
            total_ns += self._time_once(operation, size_bits, rng, PHASE_MEASUREMENT).elapsed_ns
        return total_ns

    def _time_once(
        self,
        operation: Operation,
        size_bits: int,
        rng: random.Random,
        phase: str,
    ) -> TimingSample:
        try:
            args = build_arguments(
                operation,
                size_bits,
                rng,
                fixed_value=self._fixed_value,
                max_attempts=self._max_attempts,
            )
        except GeneratorExhaustedError as exc:
            raise GeneratorExhaustedError(exc.size_bits, exc.attempts, phase) from exc
        try:
            t1 = self._clock()
            operation.invoke(args)
            t2 = self._clock()
        except Exception as exc:
            raise InvocationError(operation.name, size_bits, phase) from exc
        return TimingSample(operation=operation.name, size_bits=size_bits, elapsed_ns=t2 - t1)
