"""Probabilistic primality testing and random prime generation.

Candidates pass a cheap trial division against a cached table of small primes before the Miller-Rabin test runs.
Witnesses are drawn from the same injectable randomness source as the candidates, so a seeded source makes prime
generation fully reproducible.

Typical usage example:

    get_pre_primes(12000)
    is_probable_prime(2**127 - 1)
    p = random_prime_bits(512)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from bigrsa import bigmath
from bigrsa import bigrandom
from bigrsa.bigrandom import RandomSource
from bigrsa.errors import InvalidInputError

logger = logging.getLogger(__name__)

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_TRIAL_BOUND: int = 10000


def _sieve(n: int = _TRIAL_BOUND) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = _TRIAL_BOUND, change: bool = False) -> list[int]:
    """Get the small primes, sieving only when the cache cannot answer.

    Regeneration occurs if the requested range is greater than the cached one, if forced by `change`, or if the
    cache is empty.

    Args:
        n: The number up to which primes are needed. Must be >= 0.
        change: Whether to force a recomputation.

    Returns:
        List of primes in ascending order, covering at least `[2, n]` unless `change` is True.
    """
    if n < 0:
        raise InvalidInputError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        logger.debug("Sieving small primes up to %d", n)
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = _TRIAL_BOUND) -> bool:
    """Check `no` against the known small primes.

    Args:
        no: The number to check.
        n: Bound passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def miller_rounds(candidate: int) -> int:
    """Default number of Miller-Rabin rounds for a candidate of this size."""
    size = candidate.bit_length()
    if size <= 512:
        return 40
    if size <= 1024:
        return 56
    if size <= 1536:
        return 64
    if size <= 2048:
        return 70
    return 74


def is_probable_prime(n: int, rounds: int | None = None, rng: RandomSource | None = None) -> bool:
    """Perform the Miller-Rabin primality test.

    Writes n - 1 = 2**s * d and checks `rounds` random witnesses from `[2, n - 2]`. A composite survives a single
    round with probability at most 1/4.

    Args:
        n: Integer to be tested.
        rounds: Number of witnesses. Defaults to `miller_rounds(n)`.
        rng: Randomness source for the witnesses.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if rounds is None:
        rounds = miller_rounds(n)
    if rounds < 1:
        raise InvalidInputError(f"rounds must be >= 1, got {rounds}")
    if n < 4:
        return n in (2, 3)
    if n % 2 == 0:
        return False
    tw = n - 1
    s = bigmath.lowest_set_bit(tw)
    d = tw >> s
    for _ in range(rounds):
        a = bigrandom.random_range(2, n - 2, rng)
        x = bigmath.mod_pow(a, d, n)
        if x == 1 or x == tw:
            continue
        for _ in range(1, s):
            x = bigmath.mod_pow(x, 2, n)
            if x == tw:
                break
            if x == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int, rounds: int | None = None, rng: RandomSource | None = None) -> bool:
    """Trial division against the small primes, then Miller-Rabin."""
    if not _trial_division(candidate):
        return False
    return is_probable_prime(candidate, rounds, rng)


def random_prime_bits(bits: int, rng: RandomSource | None = None, rounds: int | None = None) -> int:
    """Generate a probable prime of exactly `bits` bits.

    Forces the top bit (exact length) and the bottom bit (oddness) of every draw. There is no retry cap: by the
    prime number theorem roughly one odd candidate in `0.35 * bits` is prime.

    Args:
        bits: The size of the prime in bits. Must be >= 2.
        rng: Randomness source for candidates and witnesses.
        rounds: Miller-Rabin rounds per candidate. Defaults to `miller_rounds()`.

    Returns:
        A probable prime `p` with `p.bit_length() == bits`.
    """
    if bits < 2:
        raise InvalidInputError(f"A prime needs at least 2 bits, got {bits}")
    msk = (1 << (bits - 1)) | 1
    tries = 0
    while True:
        tries += 1
        candidate = bigrandom.random_bits(bits, rng) | msk
        if check_prime(candidate, rounds, rng):
            logger.debug("Found %d-bit probable prime after %d candidates", bits, tries)
            return candidate
