# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for the clock and location/config store ports.

File and system-time access is confined to this layer.
"""
from daylamp.adapters.clock import FixedClock, SystemClock
from daylamp.adapters.location_store import InMemoryLocationStore, JsonLocationStore

__all__ = [
    "FixedClock",
    "InMemoryLocationStore",
    "JsonLocationStore",
    "SystemClock",
]
