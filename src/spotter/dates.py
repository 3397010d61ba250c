"""
Calendar date normalization.

Workout dates and check-in weeks are calendar days in the coach's local
timezone. A date-only string such as "2024-03-10" means local midnight of
that day, never UTC midnight (which lands on the previous day anywhere
west of Greenwich). Every comparison of "same day" in the engine goes
through this module.

Usage:
    from spotter.dates import format_local, is_same_local_date, week_start

    week_start("2024-03-10")            # date(2024, 3, 4)
    format_local(datetime.now())       # '2024-03-10'
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

from dateutil import parser as date_parser

from .config import DEFAULT_CONFIG

DateLike = Union[str, date, datetime]


def _zone(zone: Optional[tzinfo]) -> tzinfo:
    return zone if zone is not None else DEFAULT_CONFIG.local_tz()


def _is_date_only(value: str) -> bool:
    return 'T' not in value and ' ' not in value


def to_local_datetime(value: DateLike, zone: Optional[tzinfo] = None) -> datetime:
    """
    Interpret a date value as an aware datetime in the local timezone.

    Args:
        value: 'YYYY-MM-DD', a full timestamp string, a date or a datetime
        zone: Local timezone (default: configured/host local time)

    Returns:
        Aware datetime. Date-only input gives local midnight; naive
        timestamps are taken as local wall time; aware timestamps are
        converted to local time.
    """
    zone = _zone(zone)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=zone)
        return value.astimezone(zone)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=zone)

    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a date value: {value!r}")

    text = value.strip()
    if _is_date_only(text):
        day = date.fromisoformat(text)
        return datetime(day.year, day.month, day.day, tzinfo=zone)

    return to_local_datetime(date_parser.parse(text), zone)


def to_local_date(value: DateLike, zone: Optional[tzinfo] = None) -> date:
    """Local calendar day of a date value."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_local_datetime(value, zone).date()


def format_local(value: DateLike, zone: Optional[tzinfo] = None) -> str:
    """Canonical YYYY-MM-DD string built from local year/month/day."""
    day = to_local_date(value, zone)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def is_same_local_date(first: DateLike, second: DateLike, zone: Optional[tzinfo] = None) -> bool:
    """True if both values fall on the same local calendar day."""
    return format_local(first, zone) == format_local(second, zone)


def now_local(zone: Optional[tzinfo] = None) -> datetime:
    """Current aware datetime in the local timezone."""
    return datetime.now(_zone(zone))


def today_local(now: Optional[DateLike] = None, zone: Optional[tzinfo] = None) -> str:
    """Today's date as YYYY-MM-DD in the local timezone."""
    return format_local(now if now is not None else now_local(zone), zone)


def is_today(value: DateLike, now: Optional[DateLike] = None, zone: Optional[tzinfo] = None) -> bool:
    return is_same_local_date(value, now if now is not None else now_local(zone), zone)


def week_start(value: Optional[DateLike] = None, zone: Optional[tzinfo] = None) -> date:
    """
    Monday on or before the given day.

    Sunday belongs to the week that started six days earlier.
    """
    day = to_local_date(value if value is not None else now_local(zone), zone)
    # date.weekday(): Monday = 0 ... Sunday = 6
    return day - timedelta(days=day.weekday())


def week_end(value: Optional[DateLike] = None, zone: Optional[tzinfo] = None) -> date:
    """Sunday closing the week of the given day."""
    return week_start(value, zone) + timedelta(days=6)


def week_start_string(value: Optional[DateLike] = None, zone: Optional[tzinfo] = None) -> str:
    return format_local(week_start(value, zone))
