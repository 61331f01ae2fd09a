"""Integer division: schoolbook long division vs. Newton reciprocal division.

schoolbook_divide is Knuth's algorithm D on 32-bit limbs. newton_divide
computes an approximate reciprocal of the divisor by Newton iteration with
precision doubling, multiplies it into the dividend using Karatsuba, then
corrects the quotient by a few units. Its speed therefore depends on the
multiplication cutover.

Both take non-negative operands and return ``(quotient, remainder)``.
"""

from __future__ import annotations

from cutover.algorithms.limbs import LIMB_BITS, LIMB_MASK, from_limbs, to_limbs
from cutover.algorithms.multiply import karatsuba_multiply

# Reciprocals of divisors up to this size are computed exactly.
NEWTON_BASE_BITS = 8 * LIMB_BITS

_BASE = 1 << LIMB_BITS


def _check_operands(a: int, b: int) -> None:
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    if a < 0 or b < 0:
        raise ValueError("Division operands must be non-negative")


def _divmod_small(u: list[int], d: int) -> tuple[list[int], int]:
    q = [0] * len(u)
    r = 0
    for i in range(len(u) - 1, -1, -1):
        cur = (r << LIMB_BITS) | u[i]
        q[i], r = divmod(cur, d)
    return q, r


def schoolbook_divide(a: int, b: int) -> tuple[int, int]:
    """Long division in O(len(a) * len(b)) limb operations."""
    _check_operands(a, b)
    if a < b:
        return 0, a

    v = to_limbs(b)
    if len(v) == 1:
        q, r = _divmod_small(to_limbs(a), v[0])
        return from_limbs(q), r

    # Normalise so the divisor's top limb has its high bit set.
    shift = LIMB_BITS - v[-1].bit_length()
    v = to_limbs(b << shift)
    u = to_limbs(a << shift)
    u.append(0)
    n = len(v)
    m = len(u) - n - 1
    q = [0] * (m + 1)
    v_top, v_next = v[-1], v[-2]

    for j in range(m, -1, -1):
        qhat, rhat = divmod((u[j + n] << LIMB_BITS) | u[j + n - 1], v_top)
        while qhat >= _BASE or qhat * v_next > ((rhat << LIMB_BITS) | u[j + n - 2]):
            qhat -= 1
            rhat += v_top
            if rhat >= _BASE:
                break

        borrow = 0
        carry = 0
        for i in range(n):
            p = qhat * v[i] + carry
            carry = p >> LIMB_BITS
            t = u[i + j] - (p & LIMB_MASK) - borrow
            u[i + j] = t & LIMB_MASK
            borrow = 1 if t < 0 else 0
        t = u[j + n] - carry - borrow
        u[j + n] = t & LIMB_MASK

        if t < 0:
            # qhat was one too large: add the divisor back.
            qhat -= 1
            carry = 0
            for i in range(n):
                s = u[i + j] + v[i] + carry
                u[i + j] = s & LIMB_MASK
                carry = s >> LIMB_BITS
            u[j + n] = (u[j + n] + carry) & LIMB_MASK
        q[j] = qhat

    return from_limbs(q), from_limbs(u[:n]) >> shift


def _reciprocal(d: int, bits: int) -> int:
    """Approximate 2**(2*bits) // d for a ``d`` of exactly ``bits`` bits.

    Off by at most a few units; callers correct the final quotient.
    """
    if bits <= NEWTON_BASE_BITS:
        return schoolbook_divide(1 << (2 * bits), d)[0]
    h = (bits + 1) // 2
    shift = bits - h
    x = _reciprocal(d >> shift, h) << shift
    # One Newton step doubles the number of correct bits.
    e = (1 << (2 * bits)) - karatsuba_multiply(d, x)
    return x + (karatsuba_multiply(x, e) >> (2 * bits))


def newton_divide(a: int, b: int) -> tuple[int, int]:
    """Division by multiplication with a Newton-iterated reciprocal."""
    _check_operands(a, b)
    if a < b:
        return 0, a

    k = b.bit_length()
    p = max(k, a.bit_length() - k)
    x = _reciprocal(b << (p - k), p)
    q = karatsuba_multiply(a, x) >> (p + k)
    r = a - karatsuba_multiply(q, b)
    while r < 0:
        q -= 1
        r += b
    while r >= b:
        q += 1
        r -= b
    return q, r
