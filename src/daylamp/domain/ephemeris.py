# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Solar ephemeris engine.

Sunrise, solar noon, sunset and cosine-of-zenith irradiance for a fixed
location and timezone offset. Every operation is a pure function of
(location, offset, instant); polar days and nights and unsupported dates
come back as tagged SolarResult values instead of NaN.

Instants are integer epoch seconds. Event times are returned as local
wall-clock seconds: the civil day's midnight on the UTC baseline plus the
event's day fraction, so shifting the offset by N hours shifts every
returned event by N hours.
"""
import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from daylamp.domain.civil_time import (
    CalendarDate,
    DateOutOfRange,
    SECONDS_PER_DAY,
    instant_from_day_fraction,
    julian_day,
    local_date,
    offset_seconds,
)
from daylamp.domain.solar_pipeline import (
    CIVIL_TWILIGHT_ZENITH_DEG,
    SolarState,
    compute_solar_state,
    hour_angle_fraction,
    irradiance_values,
    noon_fraction,
)

logger = logging.getLogger(__name__)

# Anything beyond a day's worth of offset is a configuration error.
_MAX_TZ_OFFSET_HOURS = 26.0


class InvalidLocation(ValueError):
    """Latitude, longitude or timezone offset outside its valid range."""


class SolarStatus(Enum):
    OK = "ok"
    PERMANENT_DAY = "permanent_day"
    PERMANENT_NIGHT = "permanent_night"
    DATE_OUT_OF_RANGE = "date_out_of_range"


class SolarResultError(ValueError):
    """Raised by SolarResult.unwrap() on a result without a value."""

    def __init__(self, status: SolarStatus):
        super().__init__(f"no value: {status.value}")
        self.status = status


@dataclass(frozen=True)
class SolarResult:
    """Outcome of an ephemeris operation.

    value is an int instant for sunrise/solar noon/sunset, a float for
    irradiance, and None whenever status is not OK.
    """
    status: SolarStatus
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is SolarStatus.OK

    def unwrap(self):
        """Return the value or raise SolarResultError."""
        if not self.ok:
            raise SolarResultError(self.status)
        return self.value

    def value_or(self, default):
        return self.value if self.ok else default


@dataclass(frozen=True)
class SolarDay:
    """Sunrise, solar noon and sunset of one civil day."""
    sunrise: SolarResult
    solar_noon: SolarResult
    sunset: SolarResult

    @property
    def daylight_seconds(self) -> int | None:
        """Seconds between sunrise and sunset.

        A full day for PERMANENT_DAY, zero for PERMANENT_NIGHT, None for
        dates out of range.
        """
        status = self.sunrise.status
        if status is SolarStatus.OK:
            return self.sunset.value - self.sunrise.value
        if status is SolarStatus.PERMANENT_DAY:
            return SECONDS_PER_DAY
        if status is SolarStatus.PERMANENT_NIGHT:
            return 0
        return None


@dataclass(frozen=True, eq=False)
class IrradianceProfile:
    """Irradiance sampled at evenly spaced instants across one civil day."""
    instants: np.ndarray  # int64 epoch seconds
    values: np.ndarray    # cosine of solar zenith

    @property
    def peak_index(self) -> int:
        return int(np.argmax(self.values))

    @property
    def peak_instant(self) -> int:
        return int(self.instants[self.peak_index])

    @property
    def peak_value(self) -> float:
        return float(self.values[self.peak_index])


def validate_location(latitude: float, longitude: float, tz_offset: float = 0.0) -> None:
    """Raise InvalidLocation for out-of-range or non-finite coordinates."""
    for name, value in (("latitude", latitude), ("longitude", longitude),
                        ("tz_offset", tz_offset)):
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise InvalidLocation(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidLocation(f"{name} must be finite, got {value!r}")
    if abs(latitude) > 90.0:
        raise InvalidLocation(f"latitude {latitude} outside [-90, 90]")
    if abs(longitude) > 180.0:
        raise InvalidLocation(f"longitude {longitude} outside [-180, 180]")
    if abs(tz_offset) > _MAX_TZ_OFFSET_HOURS:
        raise InvalidLocation(
            f"tz_offset {tz_offset} outside [-{_MAX_TZ_OFFSET_HOURS:g}, {_MAX_TZ_OFFSET_HOURS:g}] hours"
        )


def _crossing_status(cos_ha: float) -> SolarStatus:
    if cos_ha < -1.0:
        return SolarStatus.PERMANENT_DAY
    if cos_ha > 1.0:
        return SolarStatus.PERMANENT_NIGHT
    return SolarStatus.OK


_OUT_OF_RANGE = SolarResult(SolarStatus.DATE_OUT_OF_RANGE)


@dataclass(frozen=True)
class SolarEphemeris:
    """Solar events and irradiance for one location.

    Args:
        latitude: Degrees, north positive, within [-90, 90].
        longitude: Degrees, east positive, within [-180, 180].
        tz_offset: Hours east of UTC, e.g. 5.5 for IST.
        event_zenith_deg: Zenith angle treated as the horizon for
            sunrise/sunset. Defaults to civil twilight (96 deg).
        clock: Object with now() -> int, used when an operation is
            called without an instant. Defaults to the system time.

    Raises:
        InvalidLocation: On out-of-range or non-numeric parameters.
    """
    latitude: float
    longitude: float
    tz_offset: float = 0.0
    event_zenith_deg: float = CIVIL_TWILIGHT_ZENITH_DEG
    clock: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        validate_location(self.latitude, self.longitude, self.tz_offset)
        if not isinstance(self.event_zenith_deg, (int, float)) or not 0.0 < self.event_zenith_deg < 180.0:
            raise InvalidLocation(
                f"event_zenith_deg must lie in (0, 180), got {self.event_zenith_deg!r}"
            )

    def _resolve(self, instant: int | None) -> int:
        if instant is not None:
            return int(instant)
        if self.clock is None:
            return int(time.time())
        return int(self.clock.now())

    def now(self) -> int:
        """Current instant from the configured clock (system time by default)."""
        return self._resolve(None)

    def _evaluate(self, instant: int) -> tuple[CalendarDate, SolarState]:
        date = local_date(instant, self.tz_offset)
        state = compute_solar_state(
            julian_day(date, self.tz_offset),
            date.time_of_day,
            self.latitude,
            self.longitude,
            self.tz_offset,
            self.event_zenith_deg,
        )
        return date, state

    def solar_state(self, instant: int | None = None) -> SolarState:
        """Full intermediate pipeline record at an instant.

        Raises:
            DateOutOfRange: If the local civil year is outside 1900-2099.
        """
        return self._evaluate(self._resolve(instant))[1]

    def irradiance(self, instant: int | None = None) -> SolarResult:
        """Cosine of the solar zenith angle, in [-1, 1].

        Negative values mean the Sun is below the horizon. This is a
        normalised proxy for direct power per unit area, not W/m^2.
        """
        instant = self._resolve(instant)
        try:
            _, state = self._evaluate(instant)
        except DateOutOfRange as exc:
            logger.warning("Irradiance at %d unavailable: %s", instant, exc)
            return _OUT_OF_RANGE
        return SolarResult(SolarStatus.OK, float(np.cos(np.radians(state.solar_zenith))))

    def solar_day(self, date: int | None = None) -> SolarDay:
        """Sunrise, solar noon and sunset on the civil day containing date."""
        instant = self._resolve(date)
        try:
            local, state = self._evaluate(instant)
        except DateOutOfRange as exc:
            logger.warning("Solar events for %d unavailable: %s", instant, exc)
            return SolarDay(_OUT_OF_RANGE, _OUT_OF_RANGE, _OUT_OF_RANGE)

        noon = noon_fraction(self.longitude, state.eq_of_time, self.tz_offset)
        solar_noon = SolarResult(SolarStatus.OK, instant_from_day_fraction(local, noon))

        status = _crossing_status(state.cos_sunrise_hour_angle)
        if status is not SolarStatus.OK:
            logger.debug(
                "%s at lat %.4f on %04d-%02d-%02d (cos H0 = %.4f)",
                status.value, self.latitude, local.year, local.month, local.day,
                state.cos_sunrise_hour_angle,
            )
            polar = SolarResult(status)
            return SolarDay(polar, solar_noon, polar)

        half_day = hour_angle_fraction(state.sunrise_hour_angle)
        return SolarDay(
            sunrise=SolarResult(SolarStatus.OK, instant_from_day_fraction(local, noon - half_day)),
            solar_noon=solar_noon,
            sunset=SolarResult(SolarStatus.OK, instant_from_day_fraction(local, noon + half_day)),
        )

    def sunrise(self, date: int | None = None) -> SolarResult:
        return self.solar_day(date).sunrise

    def solar_noon(self, date: int | None = None) -> SolarResult:
        return self.solar_day(date).solar_noon

    def sunset(self, date: int | None = None) -> SolarResult:
        return self.solar_day(date).sunset

    def irradiance_profile(self, date: int | None = None, samples: int = 96) -> IrradianceProfile:
        """Irradiance at evenly spaced instants over the civil day.

        Sample k sits k * 86400 // samples seconds after local midnight.
        Returned instants are absolute epoch seconds, directly comparable
        with irradiance() arguments.

        Raises:
            DateOutOfRange: If the local civil year is outside 1900-2099.
            ValueError: If samples < 2.
        """
        if samples < 2:
            raise ValueError(f"samples must be >= 2, got {samples}")
        local = local_date(self._resolve(date), self.tz_offset)
        offsets = np.arange(samples, dtype=np.int64) * SECONDS_PER_DAY // samples
        time_of_day = offsets / float(SECONDS_PER_DAY)
        values = irradiance_values(
            julian_day(local, self.tz_offset, time_of_day),
            time_of_day,
            self.latitude,
            self.longitude,
            self.tz_offset,
        )
        instants = local.midnight_instant() - offset_seconds(self.tz_offset) + offsets
        return IrradianceProfile(instants=instants, values=values)
