"""
UTC → local civil date conversion for episode identity.

Twitch reports `created_at` as a UTC instant, but episodes are keyed by the
calendar date in the show's timezone (America/New_York by default). The
offset embedded in the full datetime string is derived from the wall-clock
projection itself: the local fields are reinterpreted as if they were UTC and
the difference with the real instant is the offset for that exact moment,
whichever standard/daylight rule applies.
"""

from datetime import datetime, timezone
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.twitch.errors import ConfigError

DEFAULT_TIMEZONE = "America/New_York"

Instant = Union[str, datetime]


def get_zone(name: str) -> ZoneInfo:
    """Return the IANA zone for `name`, raising ConfigError if it is unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e


def parse_utc_timestamp(value: Instant) -> datetime:
    """
    Parse a Twitch timestamp ("2026-01-26T22:00:00Z") into an aware UTC datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, datetime):
        instant = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        instant = datetime.fromisoformat(text)

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def wall_clock_parts(value: Instant, tz: str = DEFAULT_TIMEZONE) -> dict[str, str]:
    """
    Project an instant onto the wall clock of `tz`.

    Returns:
        Zero-padded string fields: year, month, day, hour, minute, second
    """
    local = parse_utc_timestamp(value).astimezone(get_zone(tz))
    parts = {
        "year": f"{local.year:04d}",
        "month": f"{local.month:02d}",
        "day": f"{local.day:02d}",
        "hour": f"{local.hour:02d}",
        "minute": f"{local.minute:02d}",
        "second": f"{local.second:02d}",
    }
    # 24-hour clock rollover for midnight
    if parts["hour"] == "24":
        parts["hour"] = "00"
    return parts


def to_civil_date(value: Instant, tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Convert a UTC instant to a YYYY-MM-DD date in `tz`.

    Example:
        to_civil_date("2026-01-26T22:00:00Z") -> "2026-01-26"
    """
    p = wall_clock_parts(value, tz)
    return f"{p['year']}-{p['month']}-{p['day']}"


def to_offset_datetime(value: Instant, tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Convert a UTC instant to an ISO 8601 local datetime with its numeric offset.

    Example:
        to_offset_datetime("2026-01-26T22:00:00Z") -> "2026-01-26T17:00:00-05:00"
        to_offset_datetime("2026-07-01T22:00:00Z") -> "2026-07-01T18:00:00-04:00"
    """
    instant = parse_utc_timestamp(value).replace(microsecond=0)
    p = wall_clock_parts(instant, tz)

    wall_as_utc = datetime(
        int(p["year"]),
        int(p["month"]),
        int(p["day"]),
        int(p["hour"]),
        int(p["minute"]),
        int(p["second"]),
        tzinfo=timezone.utc,
    )
    offset_minutes = round((wall_as_utc - instant).total_seconds() / 60)

    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return (
        f"{p['year']}-{p['month']}-{p['day']}T{p['hour']}:{p['minute']}:{p['second']}"
        f"{sign}{hours:02d}:{minutes:02d}"
    )
