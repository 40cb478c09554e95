"""Provides core RSA functionalities: key pair generation, encryption and CRT-accelerated decryption.

Strictly "textbook" RSA: no padding, one block per message. Plaintext is a string of single-byte characters that
is packed big-endian into one integer, so the message must stay below the modulus.

Typical usage example:

    pub, priv = gen_key_pair(1024)
    c = encrypt("Hi there!", pub)
    r = decrypt(c, priv, pub)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import NamedTuple

from bigrsa import bigmath
from bigrsa import primes
from bigrsa.bigrandom import RandomSource
from bigrsa.errors import InvalidInputError
from bigrsa.errors import KeyGenError
from bigrsa.errors import NoInverseError

logger = logging.getLogger(__name__)

DEFAULT_EXPONENT = 65537


class PublicKey(NamedTuple):
    """RSA public key.

    The factors travel with the public key so the holder of the matching private exponent can decrypt with the CRT.
    A key loaded from a public key file carries no factors; it still encrypts.

    Attributes:
        n: The modulus.
        p: Prime factor 1, or None.
        q: Prime factor 2, or None.
        e: The public exponent.
    """
    n: int
    p: int | None
    q: int | None
    e: int = DEFAULT_EXPONENT


class PrivateKey(NamedTuple):
    """RSA private key, the inverse of `e` modulo the totient."""
    d: int


def gen_key_pair(total_bits: int,
                 e: int = DEFAULT_EXPONENT,
                 rng: RandomSource | None = None) -> tuple[PublicKey, PrivateKey]:
    """Generates an RSA key pair.

    Splits `total_bits` between the two primes, so the modulus has `total_bits` or `total_bits - 1` bits.

    Args:
        total_bits: The size of the modulus in bits. Must be >= 5.
        e: The public exponent. Defaults (and recommended) to 65537.
        rng: Randomness source for prime generation.

    Returns:
        A tuple of (public, private) keys.

    Raises:
        InvalidInputError: If `total_bits` or `e` is too small.
        KeyGenError: If `e` is not invertible modulo the totient of the drawn primes.
    """
    if total_bits < 5:
        raise InvalidInputError(f"Key size must be at least 5 bits, got {total_bits}")
    if e < 3:
        raise InvalidInputError(f"Public exponent must be >= 3, got {e}")
    p_bits = total_bits >> 1
    q_bits = total_bits - p_bits
    logger.debug("Generating %d-bit key pair (%d + %d bit primes)", total_bits, p_bits, q_bits)
    p = primes.random_prime_bits(p_bits, rng)
    q = primes.random_prime_bits(q_bits, rng)
    while p == q:  # Only plausible for tiny keys.
        q = primes.random_prime_bits(q_bits, rng)
    n = p * q
    phi = n - p - q + 1
    try:
        d = bigmath.mod_inverse(e, phi)
    except NoInverseError as err:
        raise KeyGenError(f"Public exponent {e} is not coprime with the totient of the generated primes") from err
    logger.info("Generated %d-bit RSA key pair", bigmath.bit_length(n))
    return PublicKey(n, p, q, e), PrivateKey(d)


def max_message_length(pub: PublicKey) -> int:
    """Number of characters that always fit below the modulus of `pub`."""
    return (bigmath.bit_length(pub.n) - 1) // 8


def encrypt(plaintext: str, pub: PublicKey) -> int:
    """Encrypts a string of single-byte characters with the public key.

    Each character becomes one byte (two hex digits) of a big-endian integer. No chunking is performed, so the
    packed integer must be smaller than the modulus; see `max_message_length()`.

    Args:
        plaintext: Characters with code points 0 to 255.
        pub: The public key.

    Returns:
        The ciphertext, in `[0, n)`.

    Raises:
        InvalidInputError: On characters above 255 or a message that does not fit below the modulus.
    """
    try:
        raw = plaintext.encode("latin-1")
    except UnicodeEncodeError as err:
        raise InvalidInputError("Plaintext must only contain characters with code points 0-255") from err
    message = bytes_to_integer(raw)
    if message >= pub.n:
        raise InvalidInputError(
            f"Message of {len(raw)} bytes does not fit below the modulus; at most {max_message_length(pub)} fit")
    return bigmath.mod_pow(message, pub.e, pub.n)


def decrypt(ciphertext: int, priv: PrivateKey, pub: PublicKey) -> str:
    """Decrypts the ciphertext using the private key.

    With the factors available, exponentiates modulo `p` and `q` separately, with the exponent reduced by each
    prime's own totient, and recombines with the CRT. Otherwise falls back to a plain `c**d mod n`.

    Leading NUL characters of the original plaintext are not recovered, and a plaintext that packs to 0 (such as
    "" or "\x00") decrypts to "".

    Args:
        ciphertext: The integer produced by `encrypt()`.
        priv: The private key.
        pub: The public key matching `priv`.

    Returns:
        The decrypted string.

    Raises:
        InvalidInputError: If the ciphertext is out of range for the key.
    """
    if not 0 <= ciphertext < pub.n:
        raise InvalidInputError("Ciphertext must be in range [0, n-1]")
    if pub.p and pub.q:
        x1 = bigmath.mod_pow(ciphertext, priv.d % (pub.p - 1), pub.p)
        x2 = bigmath.mod_pow(ciphertext, priv.d % (pub.q - 1), pub.q)
        message = bigmath.crt([x1, x2], [pub.p, pub.q])
    else:
        message = bigmath.mod_pow(ciphertext, priv.d, pub.n)
    return integer_to_bytes(message).decode("latin-1")


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to its big-endian integer representative."""
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts an integer to big-endian bytes.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. Defaults to the minimal length, two hex digits per byte.

    Returns:
        The representative bytes.
    """
    if fixedlen is None:
        fixedlen = (msg.bit_length() + 7) // 8
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)
