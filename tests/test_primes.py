# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest
import sympy

from bigrsa import primes
from bigrsa.errors import InvalidInputError

SMALL_PRIMES = list(sympy.primerange(0, 10000))

base_primetest_cases = [
    # Edge Cases (neither)
    (0, False),
    (1, False),
    # Known Primes
    (2, True),
    (3, True),
    (5, True),
    (101, True),
    (3571, True),
    (9973, True),
    # Composite
    (4, False),
    (6, False),
    (9, False),
    # Fermat Pseudoprimes (numbers that fool naive tests)
    (341, False),  # 11 * 31
    (561, False),  # 3 * 11 * 17 (Carmichael number)
    (1105, False),  # 5 * 13 * 17 (Carmichael number)
    # Strong pseudoprimes to base 2
    (2047, False),
    (3277, False),
    (52633, False),
]

large_primetest_cases = [
    (2**127 - 1, True),
    (2**521 - 1, True),
    (2**607 - 1, True),
    (2**1279 - 1, True),
    ((2**127 - 1) * 3, False),
    ((2**127 - 1) * (2**89 - 1), False),
    ((2**521 - 1) * (2**607 - 1), False),
    (2**1279 + 1, False),
    (1729, False),  # 7 * 13 * 19 (Carmichael number)
]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.mark.parametrize("n", [0, 1, 2, 20, 50, 1000, 5000, 10000])
def test_sieve_sane(n):
    assert primes._sieve(n) == [p for p in SMALL_PRIMES if p <= n]


@pytest.mark.parametrize("n,expected", [(10**5, 9592), (10**6, 78498)])
def test_sieve_large_approx(n, expected):
    assert len(primes._sieve(n)) == expected


@pytest.mark.parametrize("n", [-10, -1])
def test_get_pre_primes_errors(n):
    with pytest.raises(InvalidInputError):
        primes.get_pre_primes(n)


def test_get_pre_primes_caches(mocker):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("bigrsa.primes._sieve", return_value=mocked_primes)
    mocker.patch("bigrsa.primes._SMALL_PRIMES", [])
    mocker.patch("bigrsa.primes._SMALL_PRIMES_CAP", 0)

    rs = primes.get_pre_primes(50)
    primes._sieve.assert_called_once_with(50)
    assert rs == mocked_primes


def test_get_pre_primes_cache_hit(mocker):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("bigrsa.primes._sieve")
    mocker.patch("bigrsa.primes._SMALL_PRIMES", mocked_primes)
    mocker.patch("bigrsa.primes._SMALL_PRIMES_CAP", 50)

    assert primes.get_pre_primes(25) == mocked_primes
    assert primes.get_pre_primes(50) == mocked_primes
    primes._sieve.assert_not_called()


def test_get_pre_primes_cache_miss(mocker):
    greater_mocked_primes = [2, 3, 5, 7, 11, 13, 17, 19, 23]
    mocker.patch("bigrsa.primes._sieve", return_value=greater_mocked_primes)
    mocker.patch("bigrsa.primes._SMALL_PRIMES", [2, 3, 5, 7, 11])
    mocker.patch("bigrsa.primes._SMALL_PRIMES_CAP", 50)

    assert primes.get_pre_primes(75) == greater_mocked_primes
    primes._sieve.assert_called_once_with(75)


def test_get_pre_primes_cache_forced(mocker):
    mocked_primes = [2, 3, 5, 7, 11]
    mocker.patch("bigrsa.primes._sieve", return_value=mocked_primes)
    mocker.patch("bigrsa.primes._SMALL_PRIMES", [2, 3, 5, 7, 11, 13, 17, 19, 23])
    mocker.patch("bigrsa.primes._SMALL_PRIMES_CAP", 75)

    assert primes.get_pre_primes(50, change=True) == mocked_primes
    primes._sieve.assert_called_with(50)


@pytest.mark.parametrize("num,expected", base_primetest_cases, ids=id_generator)
def test_trial_division(num, expected):
    # Everything here is below 10000**2, so trial division alone is exact.
    assert primes._trial_division(num) == expected


def test_is_probable_prime_exhaustive_small():
    prime_set = set(SMALL_PRIMES)
    wrong = [n for n in range(10000) if primes.is_probable_prime(n, 20) != (n in prime_set)]
    assert not wrong


@pytest.mark.parametrize("n,expected", base_primetest_cases + large_primetest_cases, ids=id_generator)
def test_is_probable_prime(n, expected):
    assert primes.is_probable_prime(n) == expected


@pytest.mark.parametrize("n,expected", base_primetest_cases + large_primetest_cases, ids=id_generator)
def test_check_prime(n, expected):
    assert primes.check_prime(n) == expected


def test_is_probable_prime_single_round_carmichael():
    # 561 - 1 = 2**4 * 35; every witness is a Fermat liar, yet the squaring chain exposes it most of the time.
    rng = random.Random(5)
    results = [primes.is_probable_prime(561, 1, rng) for _ in range(200)]
    assert results.count(True) < 60


def test_is_probable_prime_validates_rounds():
    with pytest.raises(InvalidInputError):
        primes.is_probable_prime(97, 0)


@pytest.mark.parametrize("n,expected", [(3, 40), (2**512 - 1, 40), (2**1000, 56), (2**1500, 64), (2**2047, 70),
                                        (2**3071, 74)],
                         ids=id_generator)
def test_miller_rounds(n, expected):
    assert primes.miller_rounds(n) == expected


@pytest.mark.parametrize("bits", [2, 3, 8, 16, 64, 256, 512, pytest.param(1024, marks=pytest.mark.slow)])
def test_random_prime_bits(bits):
    p = primes.random_prime_bits(bits)
    assert p.bit_length() == bits
    assert p % 2 == 1
    assert sympy.isprime(p)


def test_random_prime_bits_reproducible():
    a = primes.random_prime_bits(128, random.Random(99))
    b = primes.random_prime_bits(128, random.Random(99))
    assert a == b


def test_random_prime_bits_forces_top_and_bottom(mocker):
    mocker.patch("bigrsa.primes.check_prime", side_effect=[False, True])
    source = mocker.Mock()
    source.getrandbits.side_effect = [0, 0b0110]
    p = primes.random_prime_bits(8, source)
    assert p == 0b10000111
    assert primes.check_prime.call_count == 2


@pytest.mark.parametrize("bits", [-3, 0, 1])
def test_random_prime_bits_validates(bits):
    with pytest.raises(InvalidInputError):
        primes.random_prime_bits(bits)
