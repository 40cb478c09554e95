"""Textbook RSA over arbitrary-precision integers, in an Academic Sense.

Provides modular arithmetic (extended Euclid, fast exponentiation, Chinese Remainder reconstruction), Miller-Rabin
prime generation, RSA key pair generation with CRT-accelerated decryption, and a background key generation task.

Typical usage example:

    pub, priv = gen_key_pair(1024)
    c = encrypt("Hi there!", pub)
    r = decrypt(c, priv, pub)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from bigrsa.bigmath import balanced_gcd
from bigrsa.bigmath import bit_length
from bigrsa.bigmath import crt
from bigrsa.bigmath import extended_gcd
from bigrsa.bigmath import gcd
from bigrsa.bigmath import lowest_set_bit
from bigrsa.bigmath import mod_inverse
from bigrsa.bigmath import mod_pow
from bigrsa.bigrandom import random_bits
from bigrsa.bigrandom import random_range
from bigrsa.bigrandom import RandomSource
from bigrsa.errors import InvalidInputError
from bigrsa.errors import KeyGenError
from bigrsa.errors import NoInverseError
from bigrsa.errors import RSAError
from bigrsa.primes import is_probable_prime
from bigrsa.primes import random_prime_bits
from bigrsa.rsa import decrypt
from bigrsa.rsa import encrypt
from bigrsa.rsa import gen_key_pair
from bigrsa.rsa import PrivateKey
from bigrsa.rsa import PublicKey
from bigrsa.task import KeyGenTask

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "PublicKey",
    "PrivateKey",
    "gen_key_pair",
    "encrypt",
    "decrypt",
    "KeyGenTask",
    "is_probable_prime",
    "random_prime_bits",
    "random_bits",
    "random_range",
    "RandomSource",
    "bit_length",
    "gcd",
    "balanced_gcd",
    "extended_gcd",
    "mod_inverse",
    "mod_pow",
    "crt",
    "lowest_set_bit",
    "RSAError",
    "InvalidInputError",
    "NoInverseError",
    "KeyGenError",
]
