"""Protocol definitions for cutover.

Defines the pluggable Judge interface used by the search engine and the
frozen dataclasses that describe timeable operations (ArgRole, Operation)
and measurement output (TimingSample, Comparison).

No timing or randomness lives in this module -- pure domain types.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable


class ArgKind(str, enum.Enum):
    """How an operation argument is supplied."""

    SIZED = "sized-operand"
    FIXED = "fixed-constant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ArgRole:
    """One argument slot of an Operation.

    Attributes:
        kind: SIZED slots receive a fresh random operand, FIXED slots a
            constant.
        scale: For SIZED slots, the operand bit length as a multiple of the
            comparison size (2 for a dividend against a 1x divisor).
        value: For FIXED slots, the constant to pass. None means the run's
            configured fixed value.
    """

    kind: ArgKind
    scale: int = 1
    value: Any = None

    def __post_init__(self) -> None:
        if self.kind is ArgKind.SIZED and self.scale < 1:
            raise ValueError(f"Sized argument scale must be >= 1, got {self.scale}")

    @classmethod
    def sized(cls, scale: int = 1) -> ArgRole:
        return cls(ArgKind.SIZED, scale=scale)

    @classmethod
    def fixed(cls, value: Any = None) -> ArgRole:
        return cls(ArgKind.FIXED, value=value)


@dataclass(frozen=True)
class Operation:
    """An opaque, timeable unit of work with a declared argument shape.

    The role tuple is fixed for the lifetime of the operation, so the
    shape is known before any comparison runs.

    Example::

        from cutover import ArgRole, Operation
        op = Operation("mul", (ArgRole.sized(), ArgRole.sized()), lambda a, b: a * b)
    """

    name: str
    roles: tuple[ArgRole, ...]
    fn: Callable[..., Any] = field(compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.roles, tuple):
            object.__setattr__(self, "roles", tuple(self.roles))

    @property
    def operand_shape(self) -> tuple[int, ...]:
        """Scales of the sized arguments, in order."""
        return tuple(r.scale for r in self.roles if r.kind is ArgKind.SIZED)

    def invoke(self, args: list[Any]) -> Any:
        return self.fn(*args)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TimingSample:
    """Elapsed time of a single invocation."""

    operation: str
    size_bits: int
    elapsed_ns: int


@dataclass(frozen=True)
class Comparison:
    """Outcome of one slow-vs-fast comparison at a fixed size.

    Ties favour the slow operation: a crossover is only claimed on a
    strict win.
    """

    size_bits: int
    seed: int
    iterations: int
    slow_ns: int
    fast_ns: int

    @property
    def fast_wins(self) -> bool:
        return self.fast_ns < self.slow_ns


@runtime_checkable
class Judge(Protocol):
    """Protocol for deciding which operation wins at a given size.

    The search engine only needs this decision; timing, calibration and
    operand generation stay behind it.
    """

    def fast_wins(self, size_bits: int) -> bool:
        """Return True if the fast operation beats the slow one at size_bits."""
        ...
