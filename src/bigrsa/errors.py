"""Error types raised across bigrsa.

Each error also subclasses the builtin exception a caller would otherwise expect, so ``except ValueError`` keeps
working around the arithmetic routines.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all bigrsa errors."""


class InvalidInputError(RSAError, ValueError):
    """An argument is outside the domain an operation is defined on."""


class NoInverseError(RSAError, ValueError):
    """A modular inverse was requested for a non-coprime pair.

    Attributes:
        n: The value to invert.
        m: The modulus.
        g: The greatest common divisor found, always != 1.
    """

    def __init__(self, n: int, m: int, g: int) -> None:
        super().__init__(f"{n} has no inverse modulo {m} (gcd is {g})")
        self.n = n
        self.m = m
        self.g = g

    def __reduce__(self):
        return self.__class__, (self.n, self.m, self.g)


class KeyGenError(RSAError, RuntimeError):
    """Key pair generation could not produce a valid key."""
