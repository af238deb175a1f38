"""TimeStamp value type.

A TimeStamp is a plain unsigned 64-bit count of **seconds** since the Unix
epoch. It carries no calendar logic; equality and ordering are integer
comparison. The unit is not tagged on the wire, so every party exchanging
documents must agree on seconds.
"""

from __future__ import annotations

import functools
import time
from datetime import datetime, timezone
from typing import Any

_MAX_U64 = 2**64 - 1


@functools.total_ordering
class TimeStamp:
    """Seconds since the Unix epoch, stored as an unsigned 64-bit integer.

    Example:
        >>> ts = TimeStamp(1732694400)
        >>> ts.to_datetime().isoformat()
        '2024-11-27T08:00:00+00:00'
        >>> int(ts)
        1732694400
    """

    __slots__ = ("_seconds",)

    def __init__(self, seconds: int) -> None:
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise TypeError(f"TimeStamp requires int seconds, got {type(seconds).__name__}")
        if not 0 <= seconds <= _MAX_U64:
            raise ValueError(f"TimeStamp must be 0-{_MAX_U64}, got {seconds}")
        self._seconds = seconds

    @classmethod
    def now(cls) -> TimeStamp:
        """Return the current time truncated to whole seconds."""
        return cls(int(time.time()))

    @classmethod
    def from_datetime(cls, dt: datetime) -> TimeStamp:
        """Create a TimeStamp from a datetime.

        Naive datetimes are interpreted as UTC. Sub-second precision is dropped.
        """
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(int(dt.timestamp()))

    def to_datetime(self) -> datetime:
        """Return the timestamp as an aware UTC datetime."""
        return datetime.fromtimestamp(self._seconds, tz=timezone.utc)

    @property
    def seconds(self) -> int:
        return self._seconds

    def __int__(self) -> int:
        return self._seconds

    def __index__(self) -> int:
        return self._seconds

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TimeStamp):
            return NotImplemented
        return self._seconds == other._seconds

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, TimeStamp):
            return NotImplemented
        return self._seconds < other._seconds

    def __hash__(self) -> int:
        return hash((TimeStamp, self._seconds))

    def __repr__(self) -> str:
        return f"TimeStamp({self._seconds})"
