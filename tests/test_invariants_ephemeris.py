# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Invariant tests for the solar ephemeris engine.

These verify event ordering, noon maximality, timezone shift behaviour,
output bounds and determinism over a deterministic grid of locations
and dates.
"""
import pytest

from daylamp.domain.civil_time import CalendarDate, offset_seconds
from daylamp.domain.ephemeris import SolarEphemeris, SolarStatus

# (lat_deg, lon_deg, label); all outside the polar circles
_LOCATIONS = [
    (0.0, 0.0, "Gulf of Guinea"),
    (55.0, 100.0, "55N 100E"),
    (-55.0, -120.0, "55S 120W"),
    (30.0, -120.0, "30N 120W"),
    (-30.0, 100.0, "30S 100E"),
    (51.4769, 0.0, "Greenwich"),
]

_MONTHS = list(range(1, 13))


def _noon_utc(month: int, tz_offset: float = 0.0) -> int:
    """12:00 local on the 15th of a 2025 month."""
    return CalendarDate(2025, month, 15).midnight_instant() + 43200 - offset_seconds(tz_offset)


def _zone(lon: float) -> float:
    return float(round(lon / 15.0))


class TestE1EventOrdering:
    """E1: sunrise < solar noon < sunset away from the poles."""

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    @pytest.mark.parametrize("month", _MONTHS)
    def test_ordering(self, lat, lon, label, month):
        tz = _zone(lon)
        day = SolarEphemeris(lat, lon, tz).solar_day(_noon_utc(month, tz))
        assert day.sunrise.status is SolarStatus.OK, label
        assert day.sunrise.value < day.solar_noon.value < day.sunset.value, (
            f"{label} month {month}: {day}"
        )

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    def test_noon_midway(self, lat, lon, label):
        """Solar noon sits halfway between sunrise and sunset (+/-1 s)."""
        tz = _zone(lon)
        day = SolarEphemeris(lat, lon, tz).solar_day(_noon_utc(4, tz))
        midway = (day.sunrise.value + day.sunset.value) / 2
        assert abs(day.solar_noon.value - midway) <= 1, label


class TestE2NoonIsMaximum:
    """E2: irradiance peaks at solar noon (UTC offset 0)."""

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    @pytest.mark.parametrize("month", [3, 6, 9, 12])
    def test_noon_max(self, lat, lon, label, month):
        eph = SolarEphemeris(lat, lon, 0.0)
        date = _noon_utc(month)
        noon = eph.solar_noon(date).value
        peak = eph.irradiance(noon).value
        profile = eph.irradiance_profile(date, samples=720)
        assert peak >= profile.peak_value - 1e-6, f"{label} month {month}"
        for offset in (-1800, 1800):
            assert eph.irradiance(noon + offset).value < peak, label


class TestE3TimezoneShift:
    """E3: shifting the offset by D hours shifts events by D hours."""

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    @pytest.mark.parametrize("delta", [-2.0, 0.5, 1.0, 3.0])
    def test_event_shift(self, lat, lon, label, delta):
        tz = _zone(lon)
        # Local 12:00 under the base offset keeps both offsets on the same day
        instant = _noon_utc(5, tz)
        base = SolarEphemeris(lat, lon, tz).solar_day(instant)
        shifted = SolarEphemeris(lat, lon, tz + delta).solar_day(instant)
        expected = int(delta * 3600)
        for name in ("sunrise", "solar_noon", "sunset"):
            a = getattr(base, name).value
            b = getattr(shifted, name).value
            assert abs((b - a) - expected) <= 1, f"{label} {name} delta {delta}"

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    def test_irradiance_unchanged(self, lat, lon, label):
        instant = _noon_utc(8)
        reference = SolarEphemeris(lat, lon, 0.0).irradiance(instant).value
        for tz in (-11.0, -3.5, 4.0, 9.75, 14.0):
            value = SolarEphemeris(lat, lon, tz).irradiance(instant).value
            assert value == pytest.approx(reference, abs=1e-9), f"{label} tz {tz}"


class TestE4Bounds:
    """E4: irradiance stays within [-1, 1] at every hour of the year grid."""

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    def test_bounds(self, lat, lon, label):
        eph = SolarEphemeris(lat, lon)
        for month in _MONTHS:
            profile = eph.irradiance_profile(_noon_utc(month), samples=24)
            assert profile.values.max() <= 1.0, label
            assert profile.values.min() >= -1.0, label


class TestE5Determinism:
    """E5: identical inputs give bit-identical outputs."""

    @pytest.mark.parametrize("lat,lon,label", _LOCATIONS)
    def test_repeatable(self, lat, lon, label):
        instant = _noon_utc(7) + 1234
        a = SolarEphemeris(lat, lon, 1.0)
        b = SolarEphemeris(lat, lon, 1.0)
        assert a.irradiance(instant) == b.irradiance(instant)
        assert a.solar_day(instant) == a.solar_day(instant)
        assert a.solar_state(instant) == b.solar_state(instant)
