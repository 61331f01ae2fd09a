"""CLI tests for cutover -- exercises both commands via Click's CliRunner.

Timing runs against synthetic pairs registered for the duration of a test,
with the comparator's clock replaced by a FakeClock.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import cutover.algorithms
import cutover.engine.timing
from cutover.algorithms import AlgorithmPair
from cutover.cli import cli
from cutover.protocols import ArgRole, Operation
from tests.conftest import FakeClock, make_synthetic_pair, oscillating, step_at

QUICK_ARGS = ["--start-exponent", "4", "--accuracy", "4", "--min-duration", "0.000001", "--margin", "0"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    """Create a Click test runner with a wide terminal so lines never wrap."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    """Replace the comparator's default clock."""
    fake = FakeClock()
    monkeypatch.setattr(cutover.engine.timing, "perf_counter_ns", fake)
    return fake


@pytest.fixture
def register(monkeypatch):
    """Register a synthetic pair under a name for one test."""

    def _register(name: str, slow: Operation, fast: Operation) -> None:
        monkeypatch.setitem(cutover.algorithms.PAIRS, name, AlgorithmPair(name=name, slow=slow, fast=fast))

    return _register


# ---------------------------------------------------------------------------
# cutover pairs
# ---------------------------------------------------------------------------

class TestPairsCommand:

    def test_lists_builtin_pairs(self, runner) -> None:
        result = runner.invoke(cli, ["pairs"])
        assert result.exit_code == 0, result.output
        assert "multiply" in result.output
        assert "karatsuba_multiply" in result.output
        assert "divide" in result.output
        assert "newton_divide" in result.output


# ---------------------------------------------------------------------------
# cutover tune
# ---------------------------------------------------------------------------

class TestTuneCommand:

    def test_single_crossover_report(self, runner, fake_clock, register) -> None:
        register("synthetic", *make_synthetic_pair(fake_clock, step_at(100)))
        result = runner.invoke(cli, ["tune", "synthetic", *QUICK_ARGS])
        assert result.exit_code == 0, result.output
        assert "Intervals for which fast is faster than slow" in result.output
        assert "98..infinity" in result.output
        assert "3..infinity" in result.output

    def test_oscillating_report(self, runner, fake_clock, register) -> None:
        register("wobbly", *make_synthetic_pair(fake_clock, oscillating))
        result = runner.invoke(cli, ["tune", "wobbly", *QUICK_ARGS])
        assert result.exit_code == 0, result.output
        assert "98..201" in result.output
        assert "..infinity" in result.output

    def test_json_output(self, runner, fake_clock, register) -> None:
        register("synthetic", *make_synthetic_pair(fake_clock, step_at(100)))
        result = runner.invoke(cli, ["tune", "synthetic", *QUICK_ARGS, "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert len(payload) == 1
        assert payload[0]["status"] == "complete"
        assert payload[0]["intervals"] == [{"start_bits": 98, "end_bits": None}]

    def test_start_too_high(self, runner, fake_clock, register) -> None:
        register("eager", *make_synthetic_pair(fake_clock, lambda n: True))
        result = runner.invoke(cli, ["tune", "eager", *QUICK_ARGS])
        assert result.exit_code == 1
        assert "Decrease the start exponent" in result.output

    def test_invocation_failure(self, runner, fake_clock, register) -> None:
        def fragile(a, b):
            if a.bit_length() > 200:
                raise RuntimeError("boom")
            fake_clock.advance(9 if a.bit_length() >= 100 else 11)

        slow, _ = make_synthetic_pair(fake_clock, step_at(100))
        register("fragile", slow, Operation("fragile", (ArgRole.sized(), ArgRole.sized()), fragile))
        result = runner.invoke(cli, ["tune", "fragile", *QUICK_ARGS])
        assert result.exit_code == 1
        assert "failed at" in result.output
        assert "boom" in result.output

    def test_margin_too_large_for_start(self, runner) -> None:
        result = runner.invoke(cli, ["tune", "divide", "--start-exponent", "2", "--quick"])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Margin 10 is too large for a 5-bit start" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_unknown_pair(self, runner) -> None:
        result = runner.invoke(cli, ["tune", "sqrt"])
        assert result.exit_code == 1
        assert "Unknown algorithm pair" in result.output

    def test_invalid_accuracy(self, runner) -> None:
        result = runner.invoke(cli, ["tune", "multiply", "--accuracy", "0"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_verbose_flag_accepted(self, runner, fake_clock, register) -> None:
        register("synthetic", *make_synthetic_pair(fake_clock, step_at(100)))
        result = runner.invoke(cli, ["-v", "tune", "synthetic", *QUICK_ARGS])
        assert result.exit_code == 0, result.output
