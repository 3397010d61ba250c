"""
Snapshot Data Model

Read-only value objects for the data the engine consumes: students,
workouts, exercises, logged sets and weekly check-ins. Records arrive as
dicts from the data-access layer (camelCase API payloads or snake_case
rows) and are converted with `from_record`.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union

from dateutil import parser as date_parser

from .dates import to_local_date

logger = logging.getLogger(__name__)

RecordId = Union[int, str]
T = TypeVar('T')


class InvalidRecordError(ValueError):
    """A snapshot record is missing a field the engine cannot do without."""


# =============================================================================
# Enums
# =============================================================================

class WorkoutStatus(Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ExerciseCategory(Enum):
    SQUAT = "squat"
    BENCH = "bench"
    DEADLIFT = "deadlift"
    ACCESSORY = "accessory"


class PainLevel(Enum):
    """Self-reported pain for the week."""
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    INTENSE = "intense"

    @classmethod
    def parse(cls, value: Any) -> Optional['PainLevel']:
        """Parse stored value; accepts legacy Portuguese values. None if unknown."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        return _PAIN_ALIASES.get(str(value).strip().lower())


class HydrationLevel(Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    ADEQUATE = "adequate"
    GOOD = "good"
    EXCELLENT = "excellent"

    @classmethod
    def parse(cls, value: Any) -> Optional['HydrationLevel']:
        if isinstance(value, cls):
            return value
        if not value:
            return None
        return _HYDRATION_ALIASES.get(str(value).strip().lower())


_PAIN_ALIASES = {
    **{p.value: p for p in PainLevel},
    'nenhuma': PainLevel.NONE,
    'leve': PainLevel.MILD,
    'moderada': PainLevel.MODERATE,
    'intensa': PainLevel.INTENSE,
}

_HYDRATION_ALIASES = {
    **{h.value: h for h in HydrationLevel},
    'muito_baixa': HydrationLevel.VERY_LOW,
    'baixa': HydrationLevel.LOW,
    'adequada': HydrationLevel.ADEQUATE,
    'boa': HydrationLevel.GOOD,
    'excelente': HydrationLevel.EXCELLENT,
}


class NotificationType(Enum):
    MISSING_CHECKIN = "missing_checkin"
    PAIN_REPORT = "pain_report"
    LOW_SCORES = "low_scores"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Wellness scores on a weekly check-in, all 1-10
WELLNESS_METRICS = (
    'muscular_recovery',
    'recovery_quality',
    'mental_state',
    'motivation',
    'sleep_quality',
    'nutrition_consistency',
    'perceived_progress',
)


# =============================================================================
# Record field helpers
# =============================================================================

def _get(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _require(record: Dict[str, Any], kind: str, *keys: str) -> Any:
    value = _get(record, *keys)
    if value is None or value == '':
        raise InvalidRecordError(f"{kind} record missing '{keys[0]}'")
    return value


def _as_int(value: Any) -> Optional[int]:
    """Whole number, halves rounded up ('6.5' -> 7)."""
    if value is None or value == '':
        return None
    try:
        return int(math.floor(float(value) + 0.5))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


_TRUTHY = {'true', '1', 'yes', 't', 'y'}


def _as_bool(value: Any) -> bool:
    """Explicit flag parsing; the string 'false' is false."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUTHY


def _as_day(value: Any, zone: Optional[tzinfo] = None) -> Optional[date]:
    if value is None or value == '':
        return None
    try:
        return to_local_date(value, zone)
    except (TypeError, ValueError, OverflowError):
        return None


def _as_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if value is None or value == '':
        return None
    try:
        return date_parser.parse(str(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_enum(parse: Callable[[Any], Any], value: Any, default: Any = None) -> Any:
    try:
        parsed = parse(value)
    except ValueError:
        parsed = None
    return parsed if parsed is not None else default


# =============================================================================
# Entities
# =============================================================================

@dataclass(frozen=True)
class Student:
    id: RecordId
    first_name: str
    last_name: str = ""
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_record(cls, record: Dict[str, Any], zone: Optional[tzinfo] = None) -> 'Student':
        return cls(
            id=_require(record, 'Student', 'id'),
            first_name=_get(record, 'first_name', 'firstName') or '',
            last_name=_get(record, 'last_name', 'lastName') or '',
            email=_get(record, 'email'),
        )


@dataclass(frozen=True)
class Workout:
    id: RecordId
    student_id: RecordId
    name: str
    date: date
    status: WorkoutStatus = WorkoutStatus.SCHEDULED
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any], zone: Optional[tzinfo] = None) -> 'Workout':
        day = _as_day(_require(record, 'Workout', 'date'), zone)
        if day is None:
            raise InvalidRecordError(f"Workout record has invalid date: {record.get('date')!r}")
        return cls(
            id=_require(record, 'Workout', 'id'),
            student_id=_require(record, 'Workout', 'student_id', 'studentId'),
            name=_get(record, 'name') or '',
            date=day,
            status=_as_enum(WorkoutStatus, _get(record, 'status'), WorkoutStatus.SCHEDULED),
            notes=_get(record, 'notes'),
        )


@dataclass(frozen=True)
class Exercise:
    id: RecordId
    workout_id: RecordId
    name: str
    category: ExerciseCategory = ExerciseCategory.ACCESSORY
    sets: int = 0
    reps: str = ""  # Prescribed range, e.g. "8-10"
    planned_rpe: Optional[float] = None
    rest_time: Optional[int] = None  # seconds

    @classmethod
    def from_record(cls, record: Dict[str, Any], zone: Optional[tzinfo] = None) -> 'Exercise':
        return cls(
            id=_require(record, 'Exercise', 'id'),
            workout_id=_require(record, 'Exercise', 'workout_id', 'workoutId'),
            name=_get(record, 'name') or '',
            category=_as_enum(ExerciseCategory, _get(record, 'category'), ExerciseCategory.ACCESSORY),
            sets=_as_int(_get(record, 'sets')) or 0,
            reps=str(_get(record, 'reps') or ''),
            planned_rpe=_as_float(_get(record, 'planned_rpe', 'plannedRpe')),
            rest_time=_as_int(_get(record, 'rest_time', 'restTime')),
        )


@dataclass(frozen=True)
class ExerciseResult:
    """One logged set."""
    id: RecordId
    exercise_id: RecordId
    set_number: int
    weight: float  # kg
    reps: int
    actual_rpe: Optional[float] = None
    one_rep_max: Optional[float] = None
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any], zone: Optional[tzinfo] = None) -> 'ExerciseResult':
        return cls(
            id=_require(record, 'ExerciseResult', 'id'),
            exercise_id=_require(record, 'ExerciseResult', 'exercise_id', 'exerciseId'),
            set_number=_as_int(_get(record, 'set_number', 'setNumber')) or 0,
            weight=_as_float(_get(record, 'weight')) or 0.0,
            reps=_as_int(_get(record, 'reps')) or 0,
            actual_rpe=_as_float(_get(record, 'actual_rpe', 'actualRpe')),
            one_rep_max=_as_float(_get(record, 'one_rep_max', 'oneRepMax', 'estimated1RM')),
            notes=_get(record, 'notes'),
        )


@dataclass(frozen=True)
class WeeklyCheckin:
    id: RecordId
    student_id: RecordId
    week_start_date: date
    muscular_recovery: Optional[int] = None
    recovery_quality: Optional[int] = None
    mental_state: Optional[int] = None
    motivation: Optional[int] = None
    sleep_quality: Optional[int] = None
    nutrition_consistency: Optional[int] = None
    perceived_progress: Optional[int] = None
    sleep_hours: Optional[float] = None
    hydration_level: Optional[HydrationLevel] = None
    pain_level: Optional[PainLevel] = None
    pain_description: Optional[str] = None
    highlights: Optional[str] = None
    concerns: Optional[str] = None
    completed: bool = False
    created_at: Optional[datetime] = None

    @property
    def week_start_string(self) -> str:
        return self.week_start_date.isoformat()

    @property
    def reported_pain(self) -> bool:
        """True only for an explicit pain level other than none."""
        return self.pain_level is not None and self.pain_level is not PainLevel.NONE

    def metric(self, name: str) -> Optional[int]:
        return getattr(self, name)

    @classmethod
    def from_record(cls, record: Dict[str, Any], zone: Optional[tzinfo] = None) -> 'WeeklyCheckin':
        week = _as_day(_require(record, 'WeeklyCheckin', 'week_start_date', 'weekStartDate'), zone)
        if week is None:
            raise InvalidRecordError("WeeklyCheckin record has invalid week start date")

        scores = {
            name: _as_int(_get(record, name, _camel(name)))
            for name in WELLNESS_METRICS
        }
        return cls(
            id=_require(record, 'WeeklyCheckin', 'id'),
            student_id=_require(record, 'WeeklyCheckin', 'student_id', 'studentId'),
            week_start_date=week,
            sleep_hours=_as_float(_get(record, 'sleep_hours', 'sleepHours')),
            hydration_level=HydrationLevel.parse(_get(record, 'hydration_level', 'hydrationLevel')),
            pain_level=PainLevel.parse(_get(record, 'pain_level', 'painLevel')),
            pain_description=_get(record, 'pain_description', 'painDescription'),
            highlights=_get(record, 'highlights'),
            concerns=_get(record, 'concerns'),
            completed=_as_bool(_get(record, 'completed')),
            created_at=_as_timestamp(_get(record, 'created_at', 'createdAt')),
            **scores,
        )


@dataclass(frozen=True)
class Notification:
    """Coach-facing alert. Regenerated on every pass, never persisted."""
    id: str
    type: NotificationType
    priority: Priority
    student_id: RecordId
    student_name: str
    message: str
    week_start_date: str
    created_at: datetime


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def parse_records(
    model: Type[T],
    records: Optional[Iterable[Dict[str, Any]]],
    zone: Optional[tzinfo] = None
) -> List[T]:
    """
    Convert raw snapshot records, skipping the ones that cannot be used.

    Args:
        model: Entity class with a `from_record` classmethod
        records: Raw dicts (None is treated as an empty snapshot)
        zone: Timezone for calendar-day fields (default: configured local)

    Returns:
        Parsed entities in input order
    """
    parsed = []
    for record in records or []:
        try:
            parsed.append(model.from_record(record, zone))
        except InvalidRecordError as e:
            logger.warning("Skipping %s record: %s", model.__name__, e)
    return parsed
