"""Integer multiplication: schoolbook on limbs vs. Karatsuba.

Both work in pure Python so their relative cost reflects the algorithms,
not CPython's built-in multiplication.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from cutover.algorithms.limbs import LIMB_BITS, LIMB_MASK, from_limbs, to_limbs

# Operands at or below this size go straight to the schoolbook kernel.
KARATSUBA_BASE_BITS = 32 * LIMB_BITS


def _mul_limbs(x: list[int], y: list[int]) -> list[int]:
    out = [0] * (len(x) + len(y))
    for i, xi in enumerate(x):
        if xi == 0:
            continue
        carry = 0
        k = i
        for yj in y:
            t = out[k] + xi * yj + carry
            out[k] = t & LIMB_MASK
            carry = t >> LIMB_BITS
            k += 1
        out[k] = carry
    return out


def schoolbook_multiply(a: int, b: int) -> int:
    """Quadratic-time product computed limb by limb."""
    negative = (a < 0) != (b < 0)
    product = from_limbs(_mul_limbs(to_limbs(abs(a)), to_limbs(abs(b))))
    return -product if negative else product


def _karatsuba(a: int, b: int) -> int:
    if a.bit_length() <= KARATSUBA_BASE_BITS or b.bit_length() <= KARATSUBA_BASE_BITS:
        return schoolbook_multiply(a, b)
    half = _split_point(a, b)
    a1, a0 = a >> half, a & ((1 << half) - 1)
    b1, b0 = b >> half, b & ((1 << half) - 1)
    z0 = _karatsuba(a0, b0)
    z2 = _karatsuba(a1, b1)
    z1 = _karatsuba(a0 + a1, b0 + b1) - z0 - z2
    return (z2 << (2 * half)) + (z1 << half) + z0


def _split_point(a: int, b: int) -> int:
    """Half the larger operand, rounded down to a whole limb."""
    half = max(a.bit_length(), b.bit_length()) // 2
    return max(LIMB_BITS, half - half % LIMB_BITS)


def karatsuba_multiply(a: int, b: int, workers: int = 1) -> int:
    """Karatsuba product of two ints.

    ``workers`` > 1 computes the three top-level sub-products on a thread
    pool; 1 runs serially.
    """
    negative = (a < 0) != (b < 0)
    a, b = abs(a), abs(b)
    if workers <= 1 or a.bit_length() <= KARATSUBA_BASE_BITS or b.bit_length() <= KARATSUBA_BASE_BITS:
        product = _karatsuba(a, b)
    else:
        half = _split_point(a, b)
        a1, a0 = a >> half, a & ((1 << half) - 1)
        b1, b0 = b >> half, b & ((1 << half) - 1)
        with ThreadPoolExecutor(max_workers=min(workers, 3)) as pool:
            f0 = pool.submit(_karatsuba, a0, b0)
            f2 = pool.submit(_karatsuba, a1, b1)
            f1 = pool.submit(_karatsuba, a0 + a1, b0 + b1)
            z0, z2 = f0.result(), f2.result()
            z1 = f1.result() - z0 - z2
        product = (z2 << (2 * half)) + (z1 << half) + z0
    return -product if negative else product
