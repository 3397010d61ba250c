"""
Check-in Notifications

Scans every student's check-ins and raises coach-facing alerts:

- missing_checkin: no check-in for the current week, from Friday on
- pain_report: pain reported in the last 14 days
- low_scores: recovery, mental state and sleep averaging below 5 in
  at least two of the three over the last 21 days

Notifications are regenerated from the snapshot on every pass. Ids are
derived from type, student and week, so the same snapshot and `now`
always produce the same notifications, and a dismissed id stays
dismissed until the underlying week changes.

Usage:
    from spotter.checkins import generate_notifications

    alerts = generate_notifications(students, checkins, now=datetime.now(),
                                    dismissed=session_dismissed)
"""

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, SpotterConfig
from ..dates import DateLike, format_local, to_local_datetime, week_start
from ..models import (
    Notification,
    NotificationType,
    Priority,
    Student,
    WeeklyCheckin,
)
from .availability import SUNDAY, find_week_checkin

logger = logging.getLogger(__name__)

# Metrics watched by the low score rule
LOW_SCORE_METRICS = ('muscular_recovery', 'mental_state', 'sleep_quality')


def _reported_at(checkin: WeeklyCheckin, zone: tzinfo) -> datetime:
    """When the check-in was submitted; week start when the row has no timestamp."""
    if checkin.created_at is not None:
        return to_local_datetime(checkin.created_at, zone)
    return to_local_datetime(checkin.week_start_date, zone)


def _within(checkin: WeeklyCheckin, zone: tzinfo, window_start: datetime) -> bool:
    # Compared as UTC instants, not local wall-clock times
    return _reported_at(checkin, zone).astimezone(timezone.utc) > window_start


def _latest(checkins: Sequence[WeeklyCheckin], zone: tzinfo) -> WeeklyCheckin:
    return max(checkins, key=lambda c: (_reported_at(c, zone), c.week_start_date))


def check_missing_checkin(
    student: Student,
    checkins: Sequence[WeeklyCheckin],
    now: datetime,
    config: SpotterConfig
) -> Optional[Notification]:
    """Alert when this week's check-in is still missing late in the week."""
    weekday = now.weekday()
    if weekday < config.missing_checkin_weekday:
        return None

    week = week_start(now, now.tzinfo)
    if find_week_checkin(checkins, week) is not None:
        return None

    week_str = format_local(week)
    return Notification(
        id=f"missing-{student.id}-{week_str}",
        type=NotificationType.MISSING_CHECKIN,
        priority=Priority.HIGH if weekday == SUNDAY else Priority.MEDIUM,
        student_id=student.id,
        student_name=student.full_name,
        message=f"{student.first_name} has not submitted this week's check-in",
        week_start_date=week_str,
        created_at=to_local_datetime(week, now.tzinfo),
    )


def check_pain_reports(
    student: Student,
    checkins: Sequence[WeeklyCheckin],
    now: datetime,
    config: SpotterConfig
) -> Optional[Notification]:
    """Alert on any pain reported inside the pain window."""
    zone = now.tzinfo
    window_start = now.astimezone(timezone.utc) - timedelta(days=config.pain_window_days)

    recent = [
        c for c in checkins
        if c.reported_pain and _within(c, zone, window_start)
    ]
    if not recent:
        return None

    latest = _latest(recent, zone)
    return Notification(
        id=f"pain-{student.id}-{latest.week_start_string}",
        type=NotificationType.PAIN_REPORT,
        priority=Priority.HIGH,
        student_id=student.id,
        student_name=student.full_name,
        message=f"{student.first_name} reported pain in {len(recent)} recent check-in(s)",
        week_start_date=latest.week_start_string,
        created_at=_reported_at(latest, zone),
    )


def low_score_averages(checkins: Sequence[WeeklyCheckin]) -> Dict[str, float]:
    """Average of each watched metric over the given check-ins."""
    if not checkins:
        return {metric: 0.0 for metric in LOW_SCORE_METRICS}
    return {
        metric: float(np.mean([c.metric(metric) for c in checkins]))
        for metric in LOW_SCORE_METRICS
    }


def check_low_scores(
    student: Student,
    checkins: Sequence[WeeklyCheckin],
    now: datetime,
    config: SpotterConfig
) -> Optional[Notification]:
    """Alert when most watched metrics average below threshold."""
    zone = now.tzinfo
    window_start = now.astimezone(timezone.utc) - timedelta(days=config.low_scores_window_days)

    # Check-ins without all three scores can't be averaged
    recent = [
        c for c in checkins
        if _within(c, zone, window_start)
        and all(c.metric(m) is not None for m in LOW_SCORE_METRICS)
    ]
    if len(recent) < config.low_scores_min_checkins:
        return None

    averages = low_score_averages(recent)
    low = [m for m, avg in averages.items() if avg < config.low_score_threshold]
    if len(low) < config.low_scores_min_metrics:
        return None

    latest = _latest(recent, zone)
    return Notification(
        id=f"low-scores-{student.id}-{latest.week_start_string}",
        type=NotificationType.LOW_SCORES,
        priority=Priority.MEDIUM,
        student_id=student.id,
        student_name=student.full_name,
        message=f"{student.first_name} has low scores in {len(low)} categories",
        week_start_date=latest.week_start_string,
        created_at=_reported_at(latest, zone),
    )


RULES = (check_missing_checkin, check_pain_reports, check_low_scores)


def generate_notifications(
    students: Iterable[Student],
    checkins: Iterable[WeeklyCheckin],
    now: DateLike,
    dismissed: AbstractSet[str] = frozenset(),
    config: SpotterConfig = DEFAULT_CONFIG,
    zone: Optional[tzinfo] = None
) -> List[Notification]:
    """
    Run every rule for every student.

    Args:
        students: Students of the coach
        checkins: All check-ins of those students
        now: Evaluation time
        dismissed: Notification ids the coach dismissed this session
        config: Thresholds
        zone: Local timezone (default: from config)

    Returns:
        Notifications ordered by student, then rule
    """
    zone = zone if zone is not None else config.local_tz()
    local_now = to_local_datetime(now, zone)
    checkins = list(checkins)

    by_student: Dict[object, List[WeeklyCheckin]] = {}
    for checkin in checkins:
        by_student.setdefault(checkin.student_id, []).append(checkin)

    notifications = []
    suppressed = 0
    for student in students:
        own = by_student.get(student.id, [])
        for rule in RULES:
            notification = rule(student, own, local_now, config)
            if notification is None:
                continue
            if notification.id in dismissed:
                suppressed += 1
                continue
            notifications.append(notification)

    logger.debug(
        "Check-in scan at %s: %d notifications (%d dismissed) over %d check-ins",
        local_now.isoformat(), len(notifications), suppressed, len(checkins)
    )
    return notifications


def dismiss(dismissed: AbstractSet[str], notification_id: str) -> frozenset:
    """New dismissed set including notification_id."""
    return frozenset(dismissed) | {notification_id}


def summarize_notifications(notifications: Sequence[Notification]) -> Dict:
    """
    Coach dashboard summary.

    Returns:
        Dictionary with counts per priority and a one-line summary
    """
    by_priority = {p.value: 0 for p in Priority}
    for n in notifications:
        by_priority[n.priority.value] += 1

    return {
        'total': len(notifications),
        'by_priority': by_priority,
        'all_clear': len(notifications) == 0,
        'summary': f"{len(notifications)} check-in alerts" if notifications else "All clear",
    }
