"""Built-in algorithm pairs for tuning.

Each AlgorithmPair binds a low-overhead slow Operation and a high-overhead
fast Operation with the same operand shape. The engine never imports this
package; it only exists so the CLI has something real to time.
"""

from __future__ import annotations

from dataclasses import dataclass

from cutover.algorithms.divide import newton_divide, schoolbook_divide
from cutover.algorithms.multiply import karatsuba_multiply, schoolbook_multiply
from cutover.exceptions import UnknownPairError
from cutover.protocols import ArgRole, Operation

# Division probes run slightly below each doubling point.
DIVISION_MARGIN = 10


@dataclass(frozen=True)
class AlgorithmPair:
    """A slow/fast operation pair tuned together."""

    name: str
    slow: Operation
    fast: Operation
    margin: int = 0
    note: str = ""


MULTIPLY = AlgorithmPair(
    name="multiply",
    slow=Operation(
        "schoolbook_multiply",
        (ArgRole.sized(), ArgRole.sized()),
        schoolbook_multiply,
    ),
    fast=Operation(
        "karatsuba_multiply",
        (ArgRole.sized(), ArgRole.sized(), ArgRole.fixed()),
        karatsuba_multiply,
    ),
)

DIVIDE = AlgorithmPair(
    name="divide",
    slow=Operation(
        "schoolbook_divide",
        (ArgRole.sized(scale=2), ArgRole.sized()),
        schoolbook_divide,
    ),
    fast=Operation(
        "newton_divide",
        (ArgRole.sized(scale=2), ArgRole.sized()),
        newton_divide,
    ),
    margin=DIVISION_MARGIN,
    note=(
        "Division thresholds are only meaningful once the multiplication "
        "thresholds are up to date"
    ),
)

PAIRS: dict[str, AlgorithmPair] = {p.name: p for p in (MULTIPLY, DIVIDE)}


def get_pair(name: str) -> AlgorithmPair:
    """Look up a registered pair by name.

    Raises:
        UnknownPairError: If no pair has that name.
    """
    try:
        return PAIRS[name]
    except KeyError:
        raise UnknownPairError(name, sorted(PAIRS)) from None


__all__ = [
    "AlgorithmPair",
    "DIVIDE",
    "DIVISION_MARGIN",
    "MULTIPLY",
    "PAIRS",
    "get_pair",
    "karatsuba_multiply",
    "newton_divide",
    "schoolbook_divide",
    "schoolbook_multiply",
]
