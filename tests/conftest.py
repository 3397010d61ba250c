"""Shared fixtures for spotter tests."""
from datetime import date, datetime

import pytest
from dateutil import tz

from spotter.config import SpotterConfig
from spotter.models import Exercise, ExerciseResult, Student, WeeklyCheckin

# 2024-03-04 is a Monday; the week runs to Sunday 2024-03-10
WEEK = date(2024, 3, 4)
LOCAL_TZ = "America/Sao_Paulo"  # UTC-3, no DST in 2024


@pytest.fixture
def zone():
    return tz.gettz(LOCAL_TZ)


@pytest.fixture
def config():
    return SpotterConfig(timezone=LOCAL_TZ)


@pytest.fixture
def local_dt(zone):
    """Build an aware local datetime."""
    def _make(year, month, day, hour=12, minute=0):
        return datetime(year, month, day, hour, minute, tzinfo=zone)
    return _make


@pytest.fixture
def student():
    return Student(id=1, first_name="Ana", last_name="Souza", email="ana@example.com")


@pytest.fixture
def make_checkin(zone):
    counter = {'n': 0}

    def _make(student_id=1, week_start_date=WEEK, created_at=None, **scores):
        counter['n'] += 1
        defaults = dict(
            muscular_recovery=7,
            recovery_quality=7,
            mental_state=7,
            motivation=7,
            sleep_quality=7,
            nutrition_consistency=7,
            perceived_progress=7,
            sleep_hours=7.5,
            completed=True,
        )
        defaults.update(scores)
        if created_at is None:
            created_at = datetime(week_start_date.year, week_start_date.month,
                                  week_start_date.day, 10, 0, tzinfo=zone)
        return WeeklyCheckin(
            id=counter['n'],
            student_id=student_id,
            week_start_date=week_start_date,
            created_at=created_at,
            **defaults,
        )
    return _make


@pytest.fixture
def make_exercise():
    def _make(exercise_id, sets=3, reps="8-10", planned_rpe=8.0, workout_id=10):
        return Exercise(
            id=exercise_id,
            workout_id=workout_id,
            name=f"Exercise {exercise_id}",
            sets=sets,
            reps=reps,
            planned_rpe=planned_rpe,
        )
    return _make


@pytest.fixture
def make_result():
    counter = {'n': 0}

    def _make(exercise_id, set_number=1, weight=100.0, reps=5, actual_rpe=8.0):
        counter['n'] += 1
        return ExerciseResult(
            id=counter['n'],
            exercise_id=exercise_id,
            set_number=set_number,
            weight=weight,
            reps=reps,
            actual_rpe=actual_rpe,
        )
    return _make
