"""Configuration model for cutover.

TuneConfig holds the start-up constants consumed by the search engine:
where the search starts, how long calibration runs, how precisely
boundaries are located, and the sanity limits that stop a degenerate run.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

# 2 seconds of accumulated wall time per calibrated comparison.
DEFAULT_MIN_DURATION_NS = 2_000_000_000


class TuneConfig(BaseModel):
    """Per-run tuning configuration.

    Example::

        from cutover import TuneConfig
        config = TuneConfig(start_exponent=10, accuracy=128, seed=42)
    """

    model_config = {"frozen": True}

    start_exponent: int = 8
    min_duration_ns: int = DEFAULT_MIN_DURATION_NS
    accuracy: int = 64
    margin: Optional[int] = None  # None = use the pair's own margin
    fixed_value: int = 1
    calibrate: bool = True
    max_bits: int = 1 << 24
    max_generate_attempts: int = 10_000
    seed: Optional[int] = None

    @field_validator("start_exponent")
    @classmethod
    def _check_start_exponent(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"start_exponent must be >= 1, got {v}")
        return v

    @field_validator("accuracy", "max_bits", "max_generate_attempts")
    @classmethod
    def _check_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    @field_validator("min_duration_ns", "margin")
    @classmethod
    def _check_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"must be >= 0, got {v}")
        return v

    @property
    def start_bits(self) -> int:
        """First search frontier: one bit past 2**start_exponent."""
        return (1 << self.start_exponent) + 1

    def resolve_margin(self, pair_margin: int) -> int:
        """Return the configured margin override, or the pair's own margin."""
        return pair_margin if self.margin is None else self.margin
