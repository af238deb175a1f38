"""Identifier generation.

An IdGenerator composes 12-byte Ids from a millisecond clock, a per-tick
counter and a random component drawn once per generator:

    bytes 0..5   milliseconds since the Unix epoch (big-endian)
    bytes 6..7   counter, restarted on every new millisecond (big-endian)
    bytes 8..11  random, fixed for the generator's lifetime

Ids from one generator are strictly increasing. When a millisecond's 65536
counter values run out the generator borrows the next millisecond, and a
clock that steps backwards never moves the generator's tick backwards.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from typing import Callable, Optional

from .exceptions import IdentifierError
from .models.id import Id

logger = logging.getLogger(__name__)

RANDOM_SIZE = 4
MAX_COUNTER = 0xFFFF
MAX_TICK = 2**48 - 1


def _clock_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Thread-safe Id generator.

    Args:
        clock: Callable returning milliseconds since the epoch (default: wall clock)
        random_bytes: Callable taking a size and returning that many random
            bytes (default: os.urandom)

    Example:
        >>> gen = IdGenerator(clock=lambda: 1578899447287, random_bytes=lambda n: b"\\x9c\\x86\\xd5\\x73")
        >>> gen.generate().hex()
        '016f9dbd9df700009c86d573'
        >>> gen.generate().hex()
        '016f9dbd9df700019c86d573'
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        random_bytes: Optional[Callable[[int], bytes]] = None,
    ) -> None:
        self._clock = clock or _clock_ms
        self._random_bytes = random_bytes or os.urandom
        self._lock = threading.Lock()
        self._random: Optional[bytes] = None
        self._tick = -1
        self._counter = 0
        self._last_clock = -1

    def generate(self) -> Id:
        """Return a new Id.

        Raises:
            IdentifierError: If the tick no longer fits in 48 bits
        """
        with self._lock:
            if self._random is None:
                random = self._random_bytes(RANDOM_SIZE)
                if len(random) != RANDOM_SIZE:
                    raise IdentifierError(
                        f"random_bytes returned {len(random)} bytes, expected {RANDOM_SIZE}"
                    )
                self._random = bytes(random)

            now = self._clock()
            if now < self._last_clock:
                logger.warning(
                    "Clock moved backwards by %d ms; holding tick at %d", self._last_clock - now, self._tick
                )

            if now > self._tick:
                tick, counter = now, 0
            elif self._counter == MAX_COUNTER:
                tick, counter = self._tick + 1, 0
                logger.debug("Counter exhausted; borrowing tick %d", tick)
            else:
                tick, counter = self._tick, self._counter + 1

            # state is left untouched when the tick is out of range
            if not 0 <= tick <= MAX_TICK:
                raise IdentifierError(f"Tick {tick} does not fit in 48 bits")
            self._last_clock = now
            self._tick = tick
            self._counter = counter

            return Id(
                tick.to_bytes(6, "big")
                + counter.to_bytes(2, "big")
                + self._random
            )


_default_lock = threading.Lock()
_default_generator: Optional[IdGenerator] = None


def default_generator() -> IdGenerator:
    """Return the process-wide generator, creating it on first use."""
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = IdGenerator()
        return _default_generator


def set_default_generator(generator: Optional[IdGenerator]) -> None:
    """Replace the process-wide generator (None restores a fresh default)."""
    global _default_generator
    with _default_lock:
        _default_generator = generator


def new_id() -> Id:
    """Generate an Id from the process-wide generator."""
    return default_generator().generate()
