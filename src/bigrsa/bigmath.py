"""Pure arbitrary-precision integer routines backing the RSA core.

Everything here is stateless and works on plain Python ints. Inputs are expected to be non-negative; negative values
are rejected with `InvalidInputError` instead of producing quietly wrong arithmetic.

Typical usage example:

    x, y, g = extended_gcd(240, 46)
    u = mod_inverse(17, 3120)
    c = mod_pow(65, 17, 3233)
    k = crt([2, 3, 2], [3, 5, 7])
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from collections.abc import Sequence

from bigrsa.errors import InvalidInputError
from bigrsa.errors import NoInverseError


def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise InvalidInputError(f"{name} must be >= 0, got {value}")


def _require_positive(**values: int) -> None:
    for name, value in values.items():
        if value <= 0:
            raise InvalidInputError(f"{name} must be > 0, got {value}")


def bit_length(n: int) -> int:
    """Number of binary digits of `n`, counting zero as one digit.

    Args:
        n: Non-negative integer.

    Returns:
        The bit length, at least 1.
    """
    _require_non_negative(n=n)
    return max(n.bit_length(), 1)


def gcd(a: int, b: int) -> int:
    """Classic Euclidean algorithm. `gcd(a, 0) == a`."""
    _require_non_negative(a=a, b=b)
    while b != 0:
        a, b = b, a % b
    return a


def balanced_gcd(a: int, b: int) -> int:
    """Euclidean algorithm over least absolute remainders.

    A remainder in the upper half of `[0, b)` is reflected to `b - r`, which divides by the same numbers as `r`
    but shrinks faster. The result always equals `gcd(a, b)`.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of `a` and `b`.
    """
    _require_non_negative(a=a, b=b)
    while b != 0:
        r = a % b
        if 2 * r > b:
            r = b - r
        a, b = b, r
    return a


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm, iteratively.

    Such that a*x + b*y = g = gcd(a, b). The coefficients are carried forward in the loop, so the depth does not
    grow with the size of the operands.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        The Bezout coefficients followed by the greatest common divisor, as `(x, y, g)`.
    """
    _require_non_negative(a=a, b=b)
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return s0, t0, r0


def mod_inverse(n: int, m: int) -> int:
    """Multiplicative inverse of `n` modulo `m`.

    Args:
        n: The value to invert.
        m: The modulus. Must be > 0.

    Returns:
        The unique `u` in `[0, m)` with `n * u % m == 1 % m`.

    Raises:
        NoInverseError: If `gcd(n, m) != 1`.
    """
    _require_non_negative(n=n)
    _require_positive(m=m)
    u, _, g = extended_gcd(n, m)
    if g != 1:
        raise NoInverseError(n, m, g)
    # Bezout coefficient lies in (-m, m); shift it into the non-negative residue class.
    return u % m


def mod_pow(n: int, e: int, m: int) -> int:
    """Computes `n**e mod m` with right-to-left square-and-multiply.

    Both the accumulator and the running square are reduced after every multiplication, so no intermediate value
    exceeds `m**2`.

    Args:
        n: The base.
        e: The exponent.
        m: The modulus. Must be > 0.

    Returns:
        `n**e mod m`, which is `1 % m` when `e == 0`.
    """
    _require_non_negative(n=n, e=e)
    _require_positive(m=m)
    p = 1 % m
    n %= m
    while e > 0:
        if e & 1:
            p = (p * n) % m
        e >>= 1
        n = (n * n) % m
    return p


def crt(residues: Sequence[int], moduli: Sequence[int]) -> int:
    """Chinese Remainder reconstruction.

    Solves k mod m_1 = x_1, ..., k mod m_n = x_n for pairwise coprime moduli.

    Args:
        residues: [x_1, ..., x_n]
        moduli: [m_1, ..., m_n], pairwise coprime.

    Returns:
        The unique solution in `[0, m_1 * ... * m_n)`.

    Raises:
        InvalidInputError: If the lists are empty, differ in length, or a modulus is not positive.
        NoInverseError: If two moduli share a factor.
    """
    if not moduli or len(residues) != len(moduli):
        raise InvalidInputError("residues and moduli must be non-empty and of equal length")
    big_m = 1
    for m_i in moduli:
        _require_positive(modulus=m_i)
        big_m *= m_i
    x = 0
    for x_i, m_i in zip(residues, moduli):
        _require_non_negative(residue=x_i)
        partial = big_m // m_i
        x += x_i * partial * mod_inverse(partial % m_i, m_i)
    return x % big_m


def lowest_set_bit(n: int) -> int:
    """Exponent `s` of the largest power of two dividing `n`, so that `n = 2**s * d` with `d` odd."""
    _require_positive(n=n)
    return (n & -n).bit_length() - 1
