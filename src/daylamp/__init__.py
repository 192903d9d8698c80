# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
daylamp

Solar ephemeris engine for a sunrise/sunset lamp timer. Computes local
sunrise, solar noon, sunset and cosine-of-zenith irradiance for a fixed
location and timezone offset using the NOAA solar calculator equations,
with explicit results for polar day/night and unsupported dates.
"""

from daylamp.domain.civil_time import (
    CalendarDate,
    DateOutOfRange,
    MAX_YEAR,
    MIN_YEAR,
)
from daylamp.domain.solar_pipeline import (
    CIVIL_TWILIGHT_ZENITH_DEG,
    GEOMETRIC_HORIZON_ZENITH_DEG,
    OFFICIAL_ZENITH_DEG,
    SolarState,
)
from daylamp.domain.ephemeris import (
    InvalidLocation,
    IrradianceProfile,
    SolarDay,
    SolarEphemeris,
    SolarResult,
    SolarResultError,
    SolarStatus,
    validate_location,
)

__version__ = "0.1.0"

__all__ = [
    "CIVIL_TWILIGHT_ZENITH_DEG",
    "CalendarDate",
    "DateOutOfRange",
    "GEOMETRIC_HORIZON_ZENITH_DEG",
    "InvalidLocation",
    "IrradianceProfile",
    "MAX_YEAR",
    "MIN_YEAR",
    "OFFICIAL_ZENITH_DEG",
    "SolarDay",
    "SolarEphemeris",
    "SolarResult",
    "SolarResultError",
    "SolarState",
    "SolarStatus",
    "validate_location",
]
