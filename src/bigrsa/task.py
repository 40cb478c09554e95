"""Off-thread key pair generation.

Key generation is the only slow operation in the package. `KeyGenTask` hands one request to an executor and gives
the caller a `Future` to collect the key pair from, without blocking in the meantime.

Typical usage example:

    with KeyGenTask() as task:
        task.start(2048)
        ...
        pub, priv = task.result()
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from concurrent.futures import Executor
from concurrent.futures import Future
from concurrent.futures import ProcessPoolExecutor
import logging

from bigrsa import rsa
from bigrsa.errors import InvalidInputError

logger = logging.getLogger(__name__)


class KeyGenTask:
    """A single-shot key generation channel.

    Accepts exactly one request. The outcome is either the key pair or the exception raised while generating it,
    re-raised from `result()`. There is no cancellation or progress reporting.

    Attributes:
        future: The pending result, or None before `start()`.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        """Initialize the task.

        Args:
            executor: Where to run the generation. Defaults to a private single-worker process pool, created on
                `start()` and shut down by `close()`.
        """
        self._executor = executor
        self._owns_executor = executor is None
        self.future: Future[tuple[rsa.PublicKey, rsa.PrivateKey]] | None = None

    def start(self, bits: int, e: int = rsa.DEFAULT_EXPONENT) -> Future[tuple[rsa.PublicKey, rsa.PrivateKey]]:
        """Submit the generation request.

        Args:
            bits: Requested modulus size in bits.
            e: Public exponent.

        Returns:
            The future that will hold `(PublicKey, PrivateKey)`.

        Raises:
            InvalidInputError: If `bits` is not a positive integer.
            RuntimeError: If this task already received a request.
        """
        if self.future is not None:
            raise RuntimeError("KeyGenTask accepts a single request; create a new task.")
        if not isinstance(bits, int) or bits <= 0:
            raise InvalidInputError(f"Key size must be a positive integer, got {bits!r}")
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=1)
        logger.debug("Submitting %d-bit key generation", bits)
        self.future = self._executor.submit(rsa.gen_key_pair, bits, e)
        return self.future

    def done(self) -> bool:
        """Whether a result (or an error) is available."""
        return self.future is not None and self.future.done()

    def result(self, timeout: float | None = None) -> tuple[rsa.PublicKey, rsa.PrivateKey]:
        """Wait for the key pair.

        Args:
            timeout: Seconds to wait. Waits indefinitely by default.

        Returns:
            The generated `(PublicKey, PrivateKey)`.

        Raises:
            RuntimeError: If `start()` was never called.
            TimeoutError: If the result is not ready within `timeout`.
            Any error raised by `rsa.gen_key_pair()`.
        """
        if self.future is None:
            raise RuntimeError("KeyGenTask was never started.")
        return self.future.result(timeout)

    def close(self) -> None:
        """Shut down the executor if this task created it."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "KeyGenTask":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
