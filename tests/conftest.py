"""Shared test fixtures for cutover.

Provides a fake nanosecond clock, synthetic operations whose cost is a
function of operand size, and a predicate-driven Judge for search tests.
"""

from __future__ import annotations

from typing import Callable

import pytest

from cutover.protocols import ArgRole, Operation


class FakeClock:
    """Deterministic clock that only moves when an operation advances it."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


class PredicateJudge:
    """Judge whose verdict comes from a plain predicate; records every probe."""

    def __init__(self, predicate: Callable[[int], bool]) -> None:
        self.predicate = predicate
        self.probes: list[int] = []

    def fast_wins(self, size_bits: int) -> bool:
        self.probes.append(size_bits)
        return self.predicate(size_bits)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------

def step_at(threshold: int) -> Callable[[int], bool]:
    """Fast wins from ``threshold`` bits upward."""
    return lambda n: n >= threshold


def oscillating(n: int) -> bool:
    """Fast wins on [100, 200) and from 400 upward."""
    return 100 <= n < 200 or n >= 400


def make_cost_operation(
    name: str,
    clock: FakeClock,
    cost: Callable[[int], int],
    roles: tuple[ArgRole, ...] | None = None,
    calls: list | None = None,
) -> Operation:
    """Operation that advances ``clock`` by ``cost(bit length of first operand)``.

    If ``calls`` is given, every argument list is appended to it.
    """

    def fn(*args):
        if calls is not None:
            calls.append(args)
        clock.advance(cost(args[0].bit_length()))

    return Operation(name, roles or (ArgRole.sized(), ArgRole.sized()), fn)


def make_synthetic_pair(
    clock: FakeClock,
    fast_region: Callable[[int], bool],
) -> tuple[Operation, Operation]:
    """Slow costs 10ns per call; fast costs 9ns inside ``fast_region``, 11ns outside."""
    slow = make_cost_operation("slow", clock, lambda n: 10)
    fast = make_cost_operation("fast", clock, lambda n: 9 if fast_region(n) else 11)
    return slow, fast
