# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Civil calendar arithmetic for the solar pipeline.

Decomposes integer epoch seconds into UTC-style calendar fields, counts
days from the 1900 epoch, and maps a fraction of a civil day back to
epoch seconds. Timezone offsets are flat hour shifts: there are no
daylight-saving rules anywhere in this module.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MIN_YEAR = 1900
MAX_YEAR = 2099
SECONDS_PER_DAY = 86400

JD_1900_OFFSET = 2415018.5
J2000_JD = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


class DateOutOfRange(ValueError):
    """Calendar year outside the supported 1900-2099 window."""

    def __init__(self, year: int | None = None):
        if year is None:
            message = "instant is outside the representable calendar range"
        else:
            message = f"year {year} is outside the supported range {MIN_YEAR}-{MAX_YEAR}"
        super().__init__(message)
        self.year = year


@dataclass(frozen=True)
class CalendarDate:
    """Civil date and time-of-day fields of an instant (no DST)."""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    @classmethod
    def from_instant(cls, instant: int) -> "CalendarDate":
        """Decompose epoch seconds into UTC-style calendar fields."""
        try:
            dt = _EPOCH + timedelta(seconds=int(instant))
        except OverflowError:
            raise DateOutOfRange() from None
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    @property
    def time_of_day(self) -> float:
        """Fraction of the day past midnight, noon is 0.5."""
        return (self.hour + self.minute / 60.0 + self.second / 3600.0) / 24.0

    def midnight_instant(self) -> int:
        """Epoch seconds of 00:00:00 on this date, read on the UTC baseline."""
        midnight = datetime(self.year, self.month, self.day, tzinfo=timezone.utc)
        return (midnight - _EPOCH) // _ONE_SECOND


def offset_seconds(tz_offset: float) -> int:
    """Timezone offset in hours as whole seconds (truncated)."""
    return int(tz_offset * 3600)


def local_date(instant: int, tz_offset: float) -> CalendarDate:
    """Calendar fields of an instant shifted by the timezone offset."""
    return CalendarDate.from_instant(int(instant) + offset_seconds(tz_offset))


def check_year(year: int) -> None:
    """Raise DateOutOfRange unless MIN_YEAR <= year <= MAX_YEAR."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise DateOutOfRange(year)


def days_since_1900(date: CalendarDate) -> int:
    """Truncated day count from the 1900 epoch.

    January and February are treated as months 13 and 14 of the
    previous year before the 365.25 / 30.61 day-count terms are applied.

    Raises:
        DateOutOfRange: If the civil year is outside 1900-2099.
    """
    check_year(date.year)

    year = date.year - MIN_YEAR
    month = date.month
    if month < 3:
        month += 12
        year -= 1

    year_days = math.floor(365.25 * year)
    month_days = math.floor(30.61 * (month + 1))
    return year_days + month_days + date.day - 63


def julian_day(date: CalendarDate, tz_offset: float = 0.0, time_of_day=None):
    """Julian day of a local civil date.

    Args:
        date: Local calendar fields (instant already shifted by tz_offset).
        tz_offset: Hours east of UTC, removed again to get back to UT.
        time_of_day: Day fraction overriding the date's own time fields.
            Accepts a numpy array to evaluate many times of one day.

    Returns:
        Julian day (float, or array when time_of_day is an array).
    """
    if time_of_day is None:
        time_of_day = date.time_of_day
    return days_since_1900(date) + JD_1900_OFFSET + time_of_day - tz_offset / 24.0


def julian_century(jd):
    """Julian centuries elapsed since J2000.0."""
    return (jd - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def instant_from_day_fraction(date: CalendarDate, fraction: float) -> int:
    """Epoch seconds at a fraction of the given civil day.

    The fraction may fall outside [0, 1); the result then lands on the
    neighbouring day. Sub-second remainders are floored.
    """
    return date.midnight_instant() + math.floor(fraction * SECONDS_PER_DAY)
