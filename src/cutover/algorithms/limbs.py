"""Conversion between Python ints and little-endian 32-bit limb lists."""

from __future__ import annotations

LIMB_BITS = 32
LIMB_BYTES = LIMB_BITS // 8
LIMB_MASK = (1 << LIMB_BITS) - 1


def to_limbs(value: int) -> list[int]:
    """Split a non-negative int into 32-bit limbs, least significant first.

    Zero is a single zero limb.
    """
    if value < 0:
        raise ValueError("Limb conversion needs a non-negative value")
    count = max(1, (value.bit_length() + LIMB_BITS - 1) // LIMB_BITS)
    raw = value.to_bytes(count * LIMB_BYTES, "little")
    return [int.from_bytes(raw[i:i + LIMB_BYTES], "little") for i in range(0, len(raw), LIMB_BYTES)]


def from_limbs(limbs: list[int]) -> int:
    return int.from_bytes(b"".join(limb.to_bytes(LIMB_BYTES, "little") for limb in limbs), "little")
