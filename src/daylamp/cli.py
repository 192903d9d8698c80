# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line diagnostics for the solar ephemeris.

Usage:
    # Today's events for the location stored in a config file
    daylamp --config lamp.json

    # Explicit location and date, geometric horizon
    daylamp --lat 52.37 --lon 4.90 --tz 1 --date 2026-03-20 --zenith geometric

    # Irradiance profile as JSON
    daylamp --config lamp.json --profile 24 --json

    # Store a new location in the config file
    daylamp --config lamp.json --lat 52.37 --lon 4.90 --tz 1 --save
"""
import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from daylamp.adapters.clock import FixedClock, SystemClock
from daylamp.adapters.location_store import InMemoryLocationStore, JsonLocationStore
from daylamp.domain.civil_time import SECONDS_PER_DAY, CalendarDate, offset_seconds
from daylamp.domain.ephemeris import SolarEphemeris, SolarResult
from daylamp.domain.solar_pipeline import (
    CIVIL_TWILIGHT_ZENITH_DEG,
    GEOMETRIC_HORIZON_ZENITH_DEG,
    OFFICIAL_ZENITH_DEG,
)
from daylamp.ports import ClockSource, LocationStore

logger = logging.getLogger(__name__)

_ZENITH_NAMES = {
    'civil': CIVIL_TWILIGHT_ZENITH_DEG,
    'official': OFFICIAL_ZENITH_DEG,
    'geometric': GEOMETRIC_HORIZON_ZENITH_DEG,
}


def ephemeris_from_store(
    store: LocationStore,
    clock: ClockSource | None = None,
    event_zenith_deg: float = CIVIL_TWILIGHT_ZENITH_DEG,
) -> SolarEphemeris:
    """Build an engine from the store's current values.

    Call again after the store changes; engines never see later updates.
    """
    latitude, longitude = store.get_location()
    return SolarEphemeris(
        latitude=latitude,
        longitude=longitude,
        tz_offset=store.get_timezone_offset(),
        event_zenith_deg=event_zenith_deg,
        clock=clock,
    )


def _parse_zenith(text: str) -> float:
    if text in _ZENITH_NAMES:
        return _ZENITH_NAMES[text]
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected one of {', '.join(_ZENITH_NAMES)} or degrees, got {text!r}"
        ) from None


def _parse_date(text: str) -> CalendarDate:
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}") from None
    return CalendarDate(parsed.year, parsed.month, parsed.day)


def local_noon_instant(date: CalendarDate, tz_offset: float) -> int:
    """Absolute instant of 12:00 local wall-clock time on a civil date."""
    return date.midnight_instant() + SECONDS_PER_DAY // 2 - offset_seconds(tz_offset)


def format_event(result: SolarResult) -> str:
    """Wall-clock timestamp of an OK result, or its status label."""
    if not result.ok:
        return result.status.value.replace('_', ' ')
    return datetime.fromtimestamp(result.value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def build_report(ephemeris: SolarEphemeris, profile_samples: int = 0) -> dict[str, Any]:
    """Evaluate every operation at the engine clock's current instant."""
    instant = ephemeris.now()
    day = ephemeris.solar_day(instant)
    irradiance = ephemeris.irradiance(instant)

    report: dict[str, Any] = {
        'latitude': ephemeris.latitude,
        'longitude': ephemeris.longitude,
        'tz_offset': ephemeris.tz_offset,
        'event_zenith_deg': ephemeris.event_zenith_deg,
        'instant': instant,
        'events': {},
        'irradiance': irradiance.value if irradiance.ok else irradiance.status.value,
        'daylight_seconds': day.daylight_seconds,
    }
    for name in ('sunrise', 'solar_noon', 'sunset'):
        result = getattr(day, name)
        report['events'][name] = {
            'status': result.status.value,
            'instant': result.value,
            'local': format_event(result),
        }

    if profile_samples:
        profile = ephemeris.irradiance_profile(instant, samples=profile_samples)
        report['profile'] = [
            {'instant': int(t), 'irradiance': round(float(v), 6)}
            for t, v in zip(profile.instants, profile.values)
        ]
        report['peak_instant'] = profile.peak_instant
    return report


def print_report(report: dict[str, Any]) -> None:
    print(f"Location: {report['latitude']:.4f}, {report['longitude']:.4f} "
          f"(UTC{report['tz_offset']:+g}), zenith {report['event_zenith_deg']:g} deg")
    for name, event in report['events'].items():
        print(f"  {name.replace('_', ' '):<11} {event['local']}")
    daylight = report['daylight_seconds']
    if daylight is not None:
        hours, rem = divmod(daylight, 3600)
        print(f"  {'daylight':<11} {hours}h {rem // 60:02d}m")
    irradiance = report['irradiance']
    if isinstance(irradiance, float):
        print(f"  {'irradiance':<11} {irradiance:+.4f}")
    else:
        print(f"  {'irradiance':<11} {irradiance.replace('_', ' ')}")
    for sample in report.get('profile', []):
        stamp = datetime.fromtimestamp(sample['instant'], tz=timezone.utc).strftime("%H:%M")
        level = max(sample['irradiance'], 0.0)
        print(f"    {stamp} UTC {sample['irradiance']:+.3f} {'#' * round(level * 40)}")


def main():
    parser = argparse.ArgumentParser(
        description="Sunrise, solar noon, sunset and irradiance for a lamp timer location"
    )
    parser.add_argument('--config', help="Path to location config JSON")
    parser.add_argument('--lat', type=float, help="Latitude in degrees, north positive")
    parser.add_argument('--lon', type=float, help="Longitude in degrees, east positive")
    parser.add_argument('--tz', type=float, help="Timezone offset in hours, east positive")
    when = parser.add_mutually_exclusive_group()
    when.add_argument('--date', type=_parse_date, help="Civil date YYYY-MM-DD (default: today)")
    when.add_argument('--at', type=int, help="Instant as Unix epoch seconds")
    parser.add_argument(
        '--zenith', type=_parse_zenith, default=CIVIL_TWILIGHT_ZENITH_DEG,
        help="Event zenith: civil, official, geometric or degrees (default: civil)"
    )
    parser.add_argument('--profile', type=int, default=0,
                        help="Add an irradiance profile with N samples")
    parser.add_argument('--json', action='store_true', default=False,
                        help="Print the report as JSON")
    parser.add_argument('--save', action='store_true', default=False,
                        help="Write --lat/--lon/--tz back to --config")
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
                        help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.save and not args.config:
        print("Error: --save requires --config", file=sys.stderr)
        sys.exit(1)
    if (args.lat is None) != (args.lon is None):
        print("Error: --lat and --lon must be given together", file=sys.stderr)
        sys.exit(1)
    if args.profile == 1 or args.profile < 0:
        print("Error: --profile needs at least 2 samples", file=sys.stderr)
        sys.exit(1)

    try:
        store = JsonLocationStore(args.config) if args.config else InMemoryLocationStore()
        if args.lat is not None:
            store.set_location(args.lat, args.lon)
        if args.tz is not None:
            store.set_timezone_offset(args.tz)
        if args.save:
            store.save()

        tz_offset = store.get_timezone_offset()
        if args.at is not None:
            clock = FixedClock(args.at)
        elif args.date is not None:
            clock = FixedClock(local_noon_instant(args.date, tz_offset))
        else:
            clock = FixedClock(SystemClock().now())

        ephemeris = ephemeris_from_store(store, clock=clock, event_zenith_deg=args.zenith)
        report = build_report(ephemeris, profile_samples=args.profile)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)


if __name__ == '__main__':
    main()
