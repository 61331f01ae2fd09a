"""Result models for cutover.

CrossoverInterval is a size range where the fast operation wins.
TuneResult is what a tuning run hands to the report consumer.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, model_validator

# Reports give boundaries in bits and in machine words of this width.
WORD_BITS = 32


class TuneStatus(str, enum.Enum):
    """How a tuning run ended."""

    COMPLETE = "complete"
    START_TOO_HIGH = "start_too_high"
    NO_CROSSOVER = "no_crossover"
    CEILING_REACHED = "ceiling_reached"

    def __str__(self) -> str:
        return self.value


class CrossoverInterval(BaseModel):
    """Size range [start_bits, end_bits) in which the fast operation wins.

    ``end_bits`` of None means the range is open-ended.
    """

    model_config = {"frozen": True}

    start_bits: int
    end_bits: Optional[int] = None

    @model_validator(mode="after")
    def _check_bounds(self) -> CrossoverInterval:
        if self.end_bits is not None and self.end_bits < self.start_bits:
            raise ValueError(
                f"Interval end {self.end_bits} precedes start {self.start_bits}"
            )
        return self

    @property
    def unbounded(self) -> bool:
        return self.end_bits is None

    @property
    def start_words(self) -> int:
        return self.start_bits // WORD_BITS

    @property
    def end_words(self) -> int | None:
        return None if self.end_bits is None else self.end_bits // WORD_BITS

    def __str__(self) -> str:
        end = "infinity" if self.end_bits is None else str(self.end_bits)
        return f"{self.start_bits}..{end}"


class TuneResult(BaseModel):
    """Outcome of tuning one slow/fast operation pair.

    Intervals are ordered by start, disjoint, and only the last one may be
    open-ended (and is, when ``status`` is COMPLETE).
    """

    slow_name: str
    fast_name: str
    margin: int = 0
    status: TuneStatus
    intervals: list[CrossoverInterval] = []
    message: Optional[str] = None

    @model_validator(mode="after")
    def _check_ordering(self) -> TuneResult:
        for prev, cur in zip(self.intervals, self.intervals[1:]):
            if prev.end_bits is None:
                raise ValueError("Only the last interval may be unbounded")
            if cur.start_bits < prev.end_bits:
                raise ValueError(
                    f"Intervals overlap or are out of order: {prev} then {cur}"
                )
        return self

    @property
    def ok(self) -> bool:
        return self.status is TuneStatus.COMPLETE

    @property
    def threshold_bits(self) -> int | None:
        """Start of the open-ended interval, i.e. the permanent cutover."""
        if self.intervals and self.intervals[-1].unbounded:
            return self.intervals[-1].start_bits
        return None
