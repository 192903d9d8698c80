# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the ephemeris engine's upstream collaborators.

Adapters implement these to supply the current time and the configured
location. The domain layer never imports this package.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockSource(Protocol):
    """Port for the current instant (normally network-synchronised)."""

    def now(self) -> int:
        """Current time as integer seconds since the Unix epoch."""
        ...


@runtime_checkable
class LocationStore(Protocol):
    """Port for the persisted location and timezone offset."""

    def get_location(self) -> tuple[float, float]:
        """Return (latitude, longitude) in degrees."""
        ...

    def get_timezone_offset(self) -> float:
        """Return the timezone offset in hours, east positive."""
        ...

    def set_location(self, latitude: float, longitude: float) -> None:
        """Replace the stored coordinates."""
        ...

    def set_timezone_offset(self, hours: float) -> None:
        """Replace the stored timezone offset."""
        ...

    def save(self) -> None:
        """Persist pending changes."""
        ...
