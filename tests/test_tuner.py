"""End-to-end tuning tests with synthetic operations and a fake clock."""

from __future__ import annotations

import pytest

from cutover import AlgorithmPair, TuneConfig, TuneStatus, search_intervals, tune, tune_pair
from cutover.exceptions import ConfigurationError, InvocationError
from cutover.protocols import ArgRole, Operation
from tests.conftest import PredicateJudge, make_synthetic_pair, oscillating, step_at

FAST_CONFIG = TuneConfig(start_exponent=4, accuracy=4, min_duration_ns=1000, margin=0, seed=3)


class TestTune:
    """Tests for tune()."""

    def test_single_crossover(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        result = tune(slow, fast, FAST_CONFIG, clock=clock)

        assert result.status is TuneStatus.COMPLETE
        assert result.ok
        assert result.slow_name == "slow"
        assert result.fast_name == "fast"
        assert len(result.intervals) == 1
        assert 97 <= result.intervals[0].start_bits <= 103
        assert result.intervals[0].unbounded
        assert result.threshold_bits == result.intervals[0].start_bits

    def test_oscillating(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, oscillating)
        result = tune(slow, fast, FAST_CONFIG, clock=clock)

        assert result.status is TuneStatus.COMPLETE
        assert [i.unbounded for i in result.intervals] == [False, True]
        assert 196 <= result.intervals[0].end_bits <= 204
        assert 396 <= result.intervals[1].start_bits <= 404

    def test_start_too_high_reported_not_raised(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, lambda n: True)
        result = tune(slow, fast, FAST_CONFIG, clock=clock)

        assert result.status is TuneStatus.START_TOO_HIGH
        assert not result.ok
        assert result.intervals == []
        assert "Decrease the start exponent" in result.message

    def test_no_crossover(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, lambda n: False)
        config = FAST_CONFIG.model_copy(update={"max_bits": 2000})
        result = tune(slow, fast, config, clock=clock)

        assert result.status is TuneStatus.NO_CROSSOVER
        assert result.threshold_bits is None
        assert "never beat" in result.message

    def test_ceiling_during_frontier_advance(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        config = FAST_CONFIG.model_copy(update={"max_bits": 200})
        result = tune(slow, fast, config, clock=clock)

        assert result.status is TuneStatus.CEILING_REACHED
        assert not result.ok
        assert result.intervals[0].end_bits == 128
        assert "200-bit ceiling" in result.message

    def test_uncalibrated_mode(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        config = FAST_CONFIG.model_copy(update={"calibrate": False})
        result = tune(slow, fast, config, clock=clock)
        assert result.status is TuneStatus.COMPLETE

    def test_margin_argument_and_override(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        default = TuneConfig(start_exponent=4, accuracy=4, min_duration_ns=100)
        assert tune(slow, fast, default, margin=10, clock=clock).margin == 10

        override = default.model_copy(update={"margin": 0})
        assert tune(slow, fast, override, margin=10, clock=clock).margin == 0

    def test_oversized_margin_is_configuration_error(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        config = TuneConfig(start_exponent=2, min_duration_ns=100)
        with pytest.raises(ConfigurationError, match="Margin 10 is too large for a 5-bit start"):
            tune(slow, fast, config, margin=10, clock=clock)

    def test_invocation_failure_propagates(self, clock) -> None:
        def fail_when_large(a, b):
            if a.bit_length() > 200:
                raise RuntimeError("out of memory")
            clock.advance(9 if a.bit_length() >= 100 else 11)

        slow, _ = make_synthetic_pair(clock, step_at(100))
        fast = Operation("fragile", (ArgRole.sized(), ArgRole.sized()), fail_when_large)
        with pytest.raises(InvocationError) as exc_info:
            tune(slow, fast, FAST_CONFIG, clock=clock)
        assert exc_info.value.operation == "fragile"
        assert exc_info.value.size_bits > 200
        assert len(exc_info.value.intervals) == 1

    def test_progress_callback(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        sizes: list[int] = []
        tune(slow, fast, FAST_CONFIG, clock=clock, on_probe=lambda state, size, won: sizes.append(size))
        assert sizes[:3] == [32, 64, 128]


class TestTunePair:
    """Tests for tune_pair()."""

    def test_uses_pair_margin(self, clock) -> None:
        slow, fast = make_synthetic_pair(clock, step_at(100))
        pair = AlgorithmPair(name="synthetic", slow=slow, fast=fast, margin=2)
        config = TuneConfig(start_exponent=4, accuracy=4, min_duration_ns=100)
        result = tune_pair(pair, config, clock=clock)
        assert result.margin == 2
        assert result.status is TuneStatus.COMPLETE


class TestSearchIntervals:
    """search_intervals() accepts any Judge."""

    def test_with_predicate_judge(self) -> None:
        result = search_intervals(
            PredicateJudge(step_at(100)),
            slow_name="a",
            fast_name="b",
            config=FAST_CONFIG,
        )
        assert result.status is TuneStatus.COMPLETE
        assert result.intervals[0].start_bits == 98
