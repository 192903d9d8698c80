# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Clock adapters.

SystemClock reads the host time; FixedClock pins the engine to a chosen
instant for diagnostics and tests.
"""
import time

from daylamp.ports import ClockSource


class SystemClock(ClockSource):
    """Reads the host's (NTP-disciplined) wall clock."""

    def now(self) -> int:
        return int(time.time())


class FixedClock(ClockSource):
    """Clock that only moves when told to."""

    def __init__(self, instant: int):
        self._instant = int(instant)

    def now(self) -> int:
        return self._instant

    def advance(self, seconds: int) -> None:
        self._instant += int(seconds)
