"""Clock sources for token timestamps."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of integer Unix seconds."""

    def now(self) -> int: ...


class SystemClock:
    """Wall clock."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """Clock pinned to a given instant, settable in tests."""

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp

    def now(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> None:
        self.timestamp += seconds
