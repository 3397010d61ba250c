"""
Check-in availability.

Athletes answer the weekly check-in at the end of the training week:
Saturday all day and Sunday until 23:59 local time. The rest of the week
the prompt is not offered.
"""

from datetime import date, time, tzinfo
from enum import Enum
from typing import Iterable, Optional

from ..config import DEFAULT_CONFIG, SpotterConfig
from ..dates import DateLike, now_local, to_local_date, to_local_datetime, week_start
from ..models import WeeklyCheckin

SATURDAY = 5
SUNDAY = 6
SUNDAY_CLOSE = time(23, 59, 59, 999999)


class CheckinWindow(Enum):
    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"


class PromptState(Enum):
    """What the athlete's check-in prompt should show."""
    HIDDEN = "hidden"        # Outside the weekend window
    COMPLETED = "completed"  # This week's check-in is done
    PENDING = "pending"      # Saturday, not done yet
    URGENT = "urgent"        # Sunday, last day to answer


def _resolve_zone(zone: Optional[tzinfo], config: SpotterConfig) -> tzinfo:
    return zone if zone is not None else config.local_tz()


def checkin_window(
    now: Optional[DateLike] = None,
    zone: Optional[tzinfo] = None,
    config: SpotterConfig = DEFAULT_CONFIG
) -> CheckinWindow:
    zone = _resolve_zone(zone, config)
    local = to_local_datetime(now if now is not None else now_local(zone), zone)
    weekday = local.weekday()

    if weekday == SATURDAY:
        return CheckinWindow.AVAILABLE
    if weekday == SUNDAY and local.time() <= SUNDAY_CLOSE:
        return CheckinWindow.AVAILABLE
    return CheckinWindow.UNAVAILABLE


def is_checkin_available(
    now: Optional[DateLike] = None,
    zone: Optional[tzinfo] = None,
    config: SpotterConfig = DEFAULT_CONFIG
) -> bool:
    return checkin_window(now, zone, config) is CheckinWindow.AVAILABLE


def find_week_checkin(checkins: Iterable[WeeklyCheckin], week: date) -> Optional[WeeklyCheckin]:
    """First check-in recorded for the given week start.

    Duplicate rows for one week are not reconciled; the first one wins.
    """
    for checkin in checkins:
        if checkin.week_start_date == week:
            return checkin
    return None


def prompt_state(
    checkins: Iterable[WeeklyCheckin],
    now: Optional[DateLike] = None,
    zone: Optional[tzinfo] = None,
    config: SpotterConfig = DEFAULT_CONFIG
) -> PromptState:
    """
    Prompt state for one athlete.

    Args:
        checkins: The athlete's check-ins
        now: Evaluation time (default: current local time)
        zone: Local timezone (default: from config)
        config: Supplies the local timezone when zone is omitted
    """
    zone = _resolve_zone(zone, config)
    local = to_local_datetime(now if now is not None else now_local(zone), zone)
    if not is_checkin_available(local, zone):
        return PromptState.HIDDEN

    current = find_week_checkin(checkins, week_start(to_local_date(local, zone)))
    if current is not None and current.completed:
        return PromptState.COMPLETED
    if local.weekday() == SUNDAY:
        return PromptState.URGENT
    return PromptState.PENDING
