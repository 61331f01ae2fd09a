"""Cutover: empirical crossover thresholds between two algorithms.

Times a low-overhead slow algorithm against a high-overhead fast one on
matched random operands and searches for every size range where the fast
one wins, producing cutover constants for a production dispatcher.
"""

from cutover._version import __version__

# Core entry points
from cutover.tuner import search_intervals, tune, tune_pair

# Operation binding and measurement types
from cutover.protocols import ArgKind, ArgRole, Comparison, Judge, Operation, TimingSample

# Configuration and results
from cutover.models.config import TuneConfig
from cutover.models.result import CrossoverInterval, TuneResult, TuneStatus

# Engine
from cutover.engine.operands import build_arguments, random_operand
from cutover.engine.search import Bracket, CrossoverSearch, SearchState, bracket, refine, refine_end
from cutover.engine.timing import TimedComparator

# Built-in pairs
from cutover.algorithms import AlgorithmPair, PAIRS, get_pair

# Exceptions
from cutover.exceptions import (
    ConfigurationError,
    CutoverError,
    GeneratorExhaustedError,
    InvocationError,
    StartTooHighError,
    UnknownPairError,
)

__all__ = [
    "__version__",
    "search_intervals",
    "tune",
    "tune_pair",
    "ArgKind",
    "ArgRole",
    "Comparison",
    "Judge",
    "Operation",
    "TimingSample",
    "TuneConfig",
    "CrossoverInterval",
    "TuneResult",
    "TuneStatus",
    "build_arguments",
    "random_operand",
    "Bracket",
    "CrossoverSearch",
    "SearchState",
    "bracket",
    "refine",
    "refine_end",
    "TimedComparator",
    "AlgorithmPair",
    "PAIRS",
    "get_pair",
    "ConfigurationError",
    "CutoverError",
    "GeneratorExhaustedError",
    "InvocationError",
    "StartTooHighError",
    "UnknownPairError",
]
