"""
Workout Completion

Combines a workout's exercises with the sets the athlete logged. An
exercise is confirmed once it has at least one logged set; the workout
is done when every exercise is confirmed.

Nothing here mutates a workout. `all_completed` is the signal the caller
uses to move the workout to completed.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .config import DEFAULT_CONFIG, SpotterConfig
from .estimator import best_set, result_estimate
from .models import Exercise, ExerciseResult, RecordId, Workout, WorkoutStatus

logger = logging.getLogger(__name__)


def _round_pct(value: float) -> int:
    return int(value + 0.5)


@dataclass(frozen=True)
class ExerciseProgress:
    """Logged state of one exercise."""
    exercise: Exercise
    results: Sequence[ExerciseResult]
    best_e1rm: float = 0

    @property
    def confirmed(self) -> bool:
        return len(self.results) > 0

    @property
    def sets_logged(self) -> int:
        return len(self.results)

    @property
    def set_ratio(self) -> float:
        """Logged sets over prescribed sets, capped at 1."""
        if self.exercise.sets <= 0:
            return 0.0
        return min(1.0, self.sets_logged / self.exercise.sets)


@dataclass(frozen=True)
class WorkoutProgress:
    workout: Optional[Workout]
    exercises: Sequence[ExerciseProgress]

    @property
    def total_exercises(self) -> int:
        return len(self.exercises)

    @property
    def confirmed_exercises(self) -> int:
        return sum(1 for ex in self.exercises if ex.confirmed)

    @property
    def ratio(self) -> float:
        if not self.exercises:
            return 0.0
        return self.confirmed_exercises / self.total_exercises

    @property
    def percentage(self) -> int:
        """Confirmed exercises as a whole percentage, 0 for an empty workout."""
        if not self.exercises:
            return 0
        return _round_pct(100 * self.confirmed_exercises / self.total_exercises)

    @property
    def all_completed(self) -> bool:
        return len(self.exercises) > 0 and all(ex.confirmed for ex in self.exercises)


def group_results(results: Iterable[ExerciseResult]) -> Dict[RecordId, List[ExerciseResult]]:
    """Logged sets per exercise id, ordered by set number."""
    grouped = defaultdict(list)
    for result in results:
        grouped[result.exercise_id].append(result)
    return {
        exercise_id: sorted(sets, key=lambda r: r.set_number)
        for exercise_id, sets in grouped.items()
    }


def exercise_progress(exercise: Exercise, results: Iterable[ExerciseResult],
                      config: SpotterConfig = DEFAULT_CONFIG) -> ExerciseProgress:
    """
    Build the progress record for one exercise.

    Args:
        exercise: Prescribed exercise
        results: Sets logged for it (other exercises' sets are ignored)
    """
    own = sorted((r for r in results if r.exercise_id == exercise.id),
                 key=lambda r: r.set_number)
    top = best_set(own, config)
    return ExerciseProgress(
        exercise=exercise,
        results=tuple(own),
        best_e1rm=result_estimate(top, config) if top else 0,
    )


def workout_progress(
    exercises: Sequence[Exercise],
    results: Iterable[ExerciseResult],
    workout: Optional[Workout] = None,
    config: SpotterConfig = DEFAULT_CONFIG
) -> WorkoutProgress:
    """
    Aggregate completion for a workout.

    Args:
        exercises: The workout's exercises, in display order
        results: Logged sets (may include sets of other workouts)
        workout: The workout itself, when the caller has it

    Returns:
        WorkoutProgress with percentage and all_completed
    """
    by_exercise = group_results(results)
    progress = tuple(
        exercise_progress(ex, by_exercise.get(ex.id, ()), config)
        for ex in exercises
    )

    summary = WorkoutProgress(workout=workout, exercises=progress)
    logger.debug(
        "Workout %s: %d/%d exercises confirmed",
        workout.id if workout else '?', summary.confirmed_exercises, summary.total_exercises
    )
    return summary


def derive_status(workout: Workout, progress: WorkoutProgress) -> WorkoutStatus:
    """
    Status the workout should show given its logged sets.

    A completed workout stays completed (it may have been forced).
    """
    if workout.status is WorkoutStatus.COMPLETED or progress.all_completed:
        return WorkoutStatus.COMPLETED
    if progress.confirmed_exercises > 0:
        return WorkoutStatus.IN_PROGRESS
    return workout.status


def summarize_workouts(workouts: Iterable[Workout]) -> Dict[str, int]:
    """Count a student's workouts per status."""
    counts = Counter(w.status for w in workouts)
    summary = {status.value: counts.get(status, 0) for status in WorkoutStatus}
    summary['total'] = sum(counts.values())
    return summary
