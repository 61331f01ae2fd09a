"""Cutover exception hierarchy.

All cutover-specific exceptions inherit from CutoverError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cutover.models.result import CrossoverInterval


class CutoverError(Exception):
    """Base exception for all cutover errors."""


class ConfigurationError(CutoverError):
    """Raised when the tuning run is wired or configured in a way that cannot work."""


class StartTooHighError(ConfigurationError):
    """Raised when the first bracket probe already favours the fast operation.

    The slow-favoured regime was never observed, so no crossover can be
    located. The starting size has to be lowered.
    """

    def __init__(self, start_bits: int, probe_bits: int) -> None:
        self.start_bits = start_bits
        self.probe_bits = probe_bits
        super().__init__(
            f"Fast operation already wins at {probe_bits} bits "
            f"(search started at {start_bits} bits). "
            f"Decrease the start exponent and try again."
        )


class GeneratorExhaustedError(ConfigurationError):
    """Raised when no operand of the requested bit length could be generated."""

    def __init__(self, size_bits: int, attempts: int, phase: str | None = None) -> None:
        self.size_bits = size_bits
        self.attempts = attempts
        self.phase = phase
        during = f" during {phase}" if phase else ""
        super().__init__(
            f"Could not generate a {size_bits}-bit operand "
            f"in {attempts} attempts{during}; the random source looks broken"
        )


class InvocationError(CutoverError):
    """Raised when a timed operation fails during a comparison.

    Carries the intervals discovered before the failure. They are kept for
    diagnostics only; a clean rerun is required for usable thresholds.
    """

    def __init__(self, operation: str, size_bits: int, phase: str) -> None:
        self.operation = operation
        self.size_bits = size_bits
        self.phase = phase
        self.intervals: list[CrossoverInterval] = []
        super().__init__(
            f"Operation '{operation}' failed at {size_bits} bits "
            f"during {phase}"
        )


class UnknownPairError(CutoverError):
    """Raised when an algorithm pair lookup fails."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown algorithm pair: {name} "
            f"(available: {', '.join(available) or 'none'})"
        )
