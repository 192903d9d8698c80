# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
NOAA solar calculator pipeline.

Each stage is a pure function of upstream quantities, written with numpy
ufuncs so it accepts a scalar or an array of epochs. Angles are degrees
throughout; conversion to radians happens only inside the trig helpers.

Reference: NOAA Global Monitoring Division solar calculator
(after Meeus, "Astronomical Algorithms").
"""
from dataclasses import dataclass

import numpy as np

from daylamp.domain.civil_time import julian_century

CIVIL_TWILIGHT_ZENITH_DEG: float = 96.0
OFFICIAL_ZENITH_DEG: float = 90.833  # refraction + solar disc radius
GEOMETRIC_HORIZON_ZENITH_DEG: float = 90.0

MINUTES_PER_DAY = 1440.0
MINUTES_PER_DEGREE = 4.0


@dataclass(frozen=True)
class SolarState:
    """Every intermediate quantity of one pipeline evaluation."""
    julian_day: float
    julian_century: float
    mean_long_sun: float          # deg
    mean_anom_sun: float          # deg
    eq_of_center: float           # deg
    true_long_sun: float          # deg
    eccent_earth_orbit: float
    mean_obliq_ecliptic: float    # deg
    obliq_corr: float             # deg
    var_y: float
    app_long_sun: float           # deg
    declination: float            # deg
    eq_of_time: float             # minutes
    true_solar_time: float        # minutes past true midnight
    hour_angle: float             # deg, negative before noon
    cos_sunrise_hour_angle: float
    sunrise_hour_angle: float | None  # deg, None without a horizon crossing
    solar_zenith: float           # deg
    solar_elevation: float        # deg


# ── Trig helpers (degrees in, degrees out) ──────────────────────────

def _sin(deg):
    return np.sin(np.radians(deg))


def _cos(deg):
    return np.cos(np.radians(deg))


def _tan(deg):
    return np.tan(np.radians(deg))


# ── Orbital stages ──────────────────────────────────────────────────

def mean_long_sun(T):
    """Geometric mean longitude of the Sun, wrapped to [0, 360)."""
    return (280.46646 + T * (36000.76983 + T * 0.0003032)) % 360.0


def mean_anom_sun(T):
    """Geometric mean anomaly of the Sun."""
    return 357.52911 + T * (35999.05029 - 0.0001537 * T)


def eq_of_center(mean_anom, T):
    """Equation of center: true minus mean anomaly."""
    return (_sin(mean_anom) * (1.914602 - T * (0.004817 + 0.000014 * T))
            + _sin(2.0 * mean_anom) * (0.019993 - 0.000101 * T)
            + _sin(3.0 * mean_anom) * 0.000289)


def true_long_sun(mean_long, center):
    return mean_long + center


def eccent_earth_orbit(T):
    """Eccentricity of Earth's orbit."""
    return 0.016708634 - T * (0.000042037 + 0.0000001267 * T)


def mean_obliq_ecliptic(T):
    """Mean obliquity of the ecliptic (IAU 1980 polynomial)."""
    seconds = 21.448 - T * (46.815 + T * (0.00059 - T * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def _omega(T):
    # Longitude of the Moon's ascending node
    return 125.04 - 1934.136 * T


def obliq_corr(mean_obliq, T):
    """Obliquity corrected for nutation."""
    return mean_obliq + 0.00256 * _cos(_omega(T))


def var_y(obliq):
    half_tan = _tan(obliq / 2.0)
    return half_tan * half_tan


def app_long_sun(true_long, T):
    """Apparent longitude: aberration and nutation applied."""
    return true_long - 0.00569 - 0.00478 * _sin(_omega(T))


def declination(obliq, app_long):
    return np.degrees(np.arcsin(_sin(obliq) * _sin(app_long)))


def eq_of_time(y, mean_long, eccent, mean_anom):
    """Equation of time in minutes (true minus mean solar time)."""
    return MINUTES_PER_DEGREE * np.degrees(
        y * _sin(2.0 * mean_long)
        - 2.0 * eccent * _sin(mean_anom)
        + 4.0 * eccent * y * _sin(mean_anom) * _cos(2.0 * mean_long)
        - 0.5 * y * y * _sin(4.0 * mean_long)
        - 1.25 * eccent * eccent * _sin(2.0 * mean_anom)
    )


# ── Local stages ────────────────────────────────────────────────────

def true_solar_time(time_of_day, eot, longitude, tz_offset):
    """True solar time in minutes, wrapped to [0, 1440)."""
    minutes = (time_of_day * MINUTES_PER_DAY + eot
               + MINUTES_PER_DEGREE * longitude - 60.0 * tz_offset)
    return minutes % MINUTES_PER_DAY


def hour_angle(tst):
    """Hour angle in degrees from wrapped true solar time."""
    return tst / MINUTES_PER_DEGREE - 180.0


def cos_sunrise_hour_angle(latitude, decl, zenith=CIVIL_TWILIGHT_ZENITH_DEG):
    """Cosine of the hour angle at which the Sun reaches the given zenith.

    Below -1 the Sun never descends to that zenith (permanent day),
    above +1 it never climbs to it (permanent night).
    """
    return (_cos(zenith) / (_cos(latitude) * _cos(decl))
            - _tan(latitude) * _tan(decl))


def sunrise_hour_angle(cos_ha):
    """Hour angle of the horizon crossing, or None when there is none."""
    if not -1.0 <= cos_ha <= 1.0:
        return None
    return float(np.degrees(np.arccos(cos_ha)))


def solar_zenith(latitude, decl, ha):
    cos_zenith = (_sin(latitude) * _sin(decl)
                  + _cos(latitude) * _cos(decl) * _cos(ha))
    return np.degrees(np.arccos(np.clip(cos_zenith, -1.0, 1.0)))


def solar_elevation(zenith):
    return 90.0 - zenith


def noon_fraction(longitude, eot, tz_offset):
    """Local solar noon as a fraction of the civil day."""
    return (720.0 - MINUTES_PER_DEGREE * longitude - eot + 60.0 * tz_offset) / MINUTES_PER_DAY


def hour_angle_fraction(ha):
    """Hour angle in degrees as a fraction of a day."""
    return ha * MINUTES_PER_DEGREE / MINUTES_PER_DAY


# ── Assembly ────────────────────────────────────────────────────────

def compute_solar_state(
    jd: float,
    time_of_day: float,
    latitude: float,
    longitude: float,
    tz_offset: float,
    event_zenith_deg: float = CIVIL_TWILIGHT_ZENITH_DEG,
) -> SolarState:
    """Run the full pipeline for one instant.

    Args:
        jd: Julian day of the instant.
        time_of_day: Local civil day fraction of the same instant.
        latitude: Degrees, north positive.
        longitude: Degrees, east positive.
        tz_offset: Hours east of UTC.
        event_zenith_deg: Zenith angle that counts as a horizon crossing.

    Returns:
        SolarState with all intermediate quantities as Python floats.
    """
    T = julian_century(jd)
    L0 = float(mean_long_sun(T))
    M = float(mean_anom_sun(T))
    C = float(eq_of_center(M, T))
    true_long = float(true_long_sun(L0, C))
    e = float(eccent_earth_orbit(T))
    eps0 = float(mean_obliq_ecliptic(T))
    eps = float(obliq_corr(eps0, T))
    y = float(var_y(eps))
    lam = float(app_long_sun(true_long, T))
    decl = float(declination(eps, lam))
    eot = float(eq_of_time(y, L0, e, M))
    tst = float(true_solar_time(time_of_day, eot, longitude, tz_offset))
    ha = float(hour_angle(tst))
    cos_ha0 = float(cos_sunrise_hour_angle(latitude, decl, event_zenith_deg))
    zenith = float(solar_zenith(latitude, decl, ha))

    return SolarState(
        julian_day=float(jd),
        julian_century=float(T),
        mean_long_sun=L0,
        mean_anom_sun=M,
        eq_of_center=C,
        true_long_sun=true_long,
        eccent_earth_orbit=e,
        mean_obliq_ecliptic=eps0,
        obliq_corr=eps,
        var_y=y,
        app_long_sun=lam,
        declination=decl,
        eq_of_time=eot,
        true_solar_time=tst,
        hour_angle=ha,
        cos_sunrise_hour_angle=cos_ha0,
        sunrise_hour_angle=sunrise_hour_angle(cos_ha0),
        solar_zenith=zenith,
        solar_elevation=float(solar_elevation(zenith)),
    )


def irradiance_values(
    jd: np.ndarray,
    time_of_day: np.ndarray,
    latitude: float,
    longitude: float,
    tz_offset: float,
) -> np.ndarray:
    """Cosine of the solar zenith for arrays of epochs in one pass."""
    T = julian_century(np.asarray(jd, dtype=np.float64))
    L0 = mean_long_sun(T)
    M = mean_anom_sun(T)
    eps = obliq_corr(mean_obliq_ecliptic(T), T)
    lam = app_long_sun(true_long_sun(L0, eq_of_center(M, T)), T)
    decl = declination(eps, lam)
    eot = eq_of_time(var_y(eps), L0, eccent_earth_orbit(T), M)
    tst = true_solar_time(np.asarray(time_of_day, dtype=np.float64), eot, longitude, tz_offset)
    zenith = solar_zenith(latitude, decl, hour_angle(tst))
    return np.cos(np.radians(zenith))
