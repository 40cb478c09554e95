"""Random big-integer generation over an injected randomness source.

Every function accepts an optional `rng`. Production code leaves it empty and gets the operating system's CSPRNG;
tests pass a seeded `random.Random` to replay exact sequences.

Typical usage example:

    r = random_bits(128)
    w = random_range(2, n - 2)
    w = random_range(2, n - 2, random.Random(7))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets
from typing import Protocol

from bigrsa import bigmath
from bigrsa.errors import InvalidInputError

_SYSTEM_SOURCE = secrets.SystemRandom()


class RandomSource(Protocol):
    """Anything that can hand out a uniformly random k-bit pattern."""

    def getrandbits(self, k: int, /) -> int:
        ...


def default_source() -> RandomSource:
    """The process-wide cryptographically secure source."""
    return _SYSTEM_SOURCE


def random_bits(bits: int, rng: RandomSource | None = None) -> int:
    """Draw a uniformly random bit pattern of length `bits`.

    The leading bits may be zero: callers that need an exact bit length must set the top bit themselves.

    Args:
        bits: Length of the pattern. Must be >= 0.
        rng: Randomness source. Defaults to `default_source()`.

    Returns:
        An integer in `[0, 2**bits)`.
    """
    if bits < 0:
        raise InvalidInputError(f"bits must be >= 0, got {bits}")
    if rng is None:
        rng = _SYSTEM_SOURCE
    return rng.getrandbits(bits)


def random_range(a: int, b: int, rng: RandomSource | None = None) -> int:
    """Draw uniformly from the inclusive range `[a, b]` by rejection sampling.

    Args:
        a: Lower bound. Must be >= 0.
        b: Upper bound. Must be >= `a`.
        rng: Randomness source. Defaults to `default_source()`.

    Returns:
        An integer in `[a, b]`.
    """
    if a < 0 or a > b:
        raise InvalidInputError(f"Invalid range [{a}, {b}]")
    between = b - a
    width = bigmath.bit_length(between)
    r = random_bits(width, rng)
    while r > between:
        r = random_bits(width, rng)
    return a + r
