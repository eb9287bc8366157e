"""Time-ordered 12-byte object identifiers rendered as 24 hex characters.

Layout: 4-byte big-endian Unix timestamp (seconds), 5-byte per-process random
value, 3-byte big-endian counter that wraps modulo 2**24. Identifiers minted
in the same process and second differ by their counter.
"""

from __future__ import annotations

import os
import re
import threading
import time
from collections.abc import Callable

_COUNTER_MODULUS = 1 << 24
_OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


def is_valid_object_id(value: str) -> bool:
    """Return ``True`` iff ``value`` is exactly 24 hexadecimal characters.

    Validity is syntactic only; it says nothing about existence.
    """

    return isinstance(value, str) and _OBJECT_ID_PATTERN.fullmatch(value) is not None


class ObjectIdGenerator:
    """Thread-safe generator of unique object identifiers.

    One instance is created at startup and shared by every request.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        random_bytes: Callable[[int], bytes] = os.urandom,
    ) -> None:
        self._clock = clock
        self._process_unique = random_bytes(5)
        self._counter = int.from_bytes(random_bytes(3), "big")
        self._lock = threading.Lock()

    def _next_count(self) -> int:
        with self._lock:
            self._counter = (self._counter + 1) % _COUNTER_MODULUS
            return self._counter

    def new_bytes(self) -> bytes:
        """Return a fresh 12-byte identifier."""
        timestamp = int(self._clock()) & 0xFFFFFFFF
        return (
            timestamp.to_bytes(4, "big")
            + self._process_unique
            + self._next_count().to_bytes(3, "big")
        )

    def new(self) -> str:
        """Return a fresh identifier as 24 lowercase hex characters."""
        return self.new_bytes().hex()


__all__ = ["ObjectIdGenerator", "is_valid_object_id"]
