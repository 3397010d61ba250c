"""
Spotter: Coaching Computation Core

Turns what athletes log into what coaches act on:
- Estimated 1RM and target weights from weight x reps @ RPE
- Workout completion from logged sets
- Weekly check-in availability, alerts and wellness analytics

Everything here is a pure function of a data snapshot and "now".
Fetching, persistence and rendering belong to the caller.
"""

from .config import SpotterConfig
from .models import (
    Exercise,
    ExerciseCategory,
    ExerciseResult,
    HydrationLevel,
    InvalidRecordError,
    Notification,
    NotificationType,
    PainLevel,
    Priority,
    Student,
    WeeklyCheckin,
    Workout,
    WorkoutStatus,
    parse_records,
)
from .estimator import brzycki, epley, estimate_1rm, estimate_set, target_weight
from .completion import WorkoutProgress, derive_status, workout_progress
from .checkins import analyze_checkins, generate_notifications, is_checkin_available

__version__ = "0.1.0"

__all__ = [
    'SpotterConfig',
    'Exercise',
    'ExerciseCategory',
    'ExerciseResult',
    'HydrationLevel',
    'InvalidRecordError',
    'Notification',
    'NotificationType',
    'PainLevel',
    'Priority',
    'Student',
    'WeeklyCheckin',
    'Workout',
    'WorkoutStatus',
    'parse_records',
    'brzycki',
    'epley',
    'estimate_1rm',
    'estimate_set',
    'target_weight',
    'WorkoutProgress',
    'derive_status',
    'workout_progress',
    'analyze_checkins',
    'generate_notifications',
    'is_checkin_available',
]
