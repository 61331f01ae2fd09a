"""Random operand generation with an exact bit-length contract.

Every generated value has its leading bit set, so ``value.bit_length()``
equals the requested size. Generation draws only from the random stream it
is handed; two streams seeded alike produce identical operands.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from cutover.exceptions import GeneratorExhaustedError
from cutover.protocols import ArgKind

if TYPE_CHECKING:
    from cutover.protocols import Operation

DEFAULT_MAX_ATTEMPTS = 10_000


def random_operand(
    size_bits: int,
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> int:
    """Return a random integer whose bit length is exactly ``size_bits``.

    Uses rejection sampling: draws ``size_bits`` random bits until the top
    bit is set. Each draw succeeds with probability 1/2, so the attempt cap
    is only reached when the random source is broken.

    Raises:
        ValueError: If size_bits < 1.
        GeneratorExhaustedError: If no qualifying value appears within
            max_attempts draws.
    """
    if size_bits < 1:
        raise ValueError(f"Operand size must be >= 1 bit, got {size_bits}")
    for _ in range(max_attempts):
        value = rng.getrandbits(size_bits)
        if value.bit_length() == size_bits:
            return value
    raise GeneratorExhaustedError(size_bits, max_attempts)


def build_arguments(
    operation: Operation,
    size_bits: int,
    rng: random.Random,
    *,
    fixed_value: Any = 1,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[Any]:
    """Materialise an operation's argument list for one invocation.

    Sized roles consume the stream in declaration order; fixed roles do not
    touch it, so operations with the same sized shape see the same operands.
    """
    args: list[Any] = []
    for role in operation.roles:
        if role.kind is ArgKind.SIZED:
            args.append(random_operand(size_bits * role.scale, rng, max_attempts=max_attempts))
        else:
            args.append(fixed_value if role.value is None else role.value)
    return args
