"""Tests for workout completion aggregation."""
from datetime import date

from spotter.completion import (
    derive_status,
    exercise_progress,
    group_results,
    summarize_workouts,
    workout_progress,
)
from spotter.models import Workout, WorkoutStatus


def _workout(status=WorkoutStatus.SCHEDULED, workout_id=10):
    return Workout(id=workout_id, student_id=1, name="Lower A",
                   date=date(2024, 3, 6), status=status)


class TestWorkoutProgress:

    def test_two_of_three_confirmed(self, make_exercise, make_result):
        exercises = [make_exercise(1), make_exercise(2), make_exercise(3)]
        results = [make_result(1), make_result(2)]

        progress = workout_progress(exercises, results)

        assert progress.confirmed_exercises == 2
        assert progress.percentage == 67
        assert progress.all_completed is False

    def test_all_confirmed(self, make_exercise, make_result):
        exercises = [make_exercise(1), make_exercise(2), make_exercise(3)]
        results = [make_result(1), make_result(2), make_result(3)]

        progress = workout_progress(exercises, results)

        assert progress.percentage == 100
        assert progress.ratio == 1.0
        assert progress.all_completed is True

    def test_no_exercises(self):
        progress = workout_progress([], [])
        assert progress.percentage == 0
        assert progress.ratio == 0.0
        assert progress.all_completed is False

    def test_percentage_rounds_half_up(self, make_exercise, make_result):
        exercises = [make_exercise(i) for i in range(1, 9)]
        results = [make_result(i) for i in range(1, 8)]
        # 7/8 = 87.5%
        assert workout_progress(exercises, results).percentage == 88

    def test_ignores_other_workouts_sets(self, make_exercise, make_result):
        exercises = [make_exercise(1)]
        progress = workout_progress(exercises, [make_result(99)])
        assert progress.confirmed_exercises == 0


class TestExerciseProgress:

    def test_set_ratio(self, make_exercise, make_result):
        exercise = make_exercise(1, sets=4)
        progress = exercise_progress(exercise, [make_result(1, 1), make_result(1, 2)])
        assert progress.sets_logged == 2
        assert progress.set_ratio == 0.5

    def test_set_ratio_capped(self, make_exercise, make_result):
        exercise = make_exercise(1, sets=1)
        progress = exercise_progress(exercise, [make_result(1, 1), make_result(1, 2)])
        assert progress.set_ratio == 1.0

    def test_set_ratio_without_prescription(self, make_exercise, make_result):
        progress = exercise_progress(make_exercise(1, sets=0), [make_result(1)])
        assert progress.set_ratio == 0.0

    def test_best_e1rm(self, make_exercise, make_result):
        results = [
            make_result(1, 1, weight=100, reps=5, actual_rpe=8),
            make_result(1, 2, weight=90, reps=5, actual_rpe=8),
        ]
        assert exercise_progress(make_exercise(1), results).best_e1rm == 125.0

    def test_unconfirmed_has_no_estimate(self, make_exercise):
        progress = exercise_progress(make_exercise(1), [])
        assert progress.confirmed is False
        assert progress.best_e1rm == 0

    def test_group_results_orders_by_set_number(self, make_result):
        grouped = group_results([make_result(1, 3), make_result(1, 1), make_result(2, 1)])
        assert [r.set_number for r in grouped[1]] == [1, 3]
        assert len(grouped[2]) == 1


class TestDeriveStatus:

    def test_all_confirmed_completes(self, make_exercise, make_result):
        progress = workout_progress([make_exercise(1)], [make_result(1)])
        assert derive_status(_workout(), progress) is WorkoutStatus.COMPLETED

    def test_partial_is_in_progress(self, make_exercise, make_result):
        progress = workout_progress([make_exercise(1), make_exercise(2)], [make_result(1)])
        assert derive_status(_workout(), progress) is WorkoutStatus.IN_PROGRESS

    def test_untouched_keeps_status(self, make_exercise):
        progress = workout_progress([make_exercise(1)], [])
        assert derive_status(_workout(), progress) is WorkoutStatus.SCHEDULED

    def test_forced_completion_sticks(self, make_exercise):
        progress = workout_progress([make_exercise(1)], [])
        workout = _workout(WorkoutStatus.COMPLETED)
        assert derive_status(workout, progress) is WorkoutStatus.COMPLETED

    def test_does_not_mutate_workout(self, make_exercise, make_result):
        workout = _workout()
        derive_status(workout, workout_progress([make_exercise(1)], [make_result(1)]))
        assert workout.status is WorkoutStatus.SCHEDULED


def test_summarize_workouts():
    workouts = [
        _workout(WorkoutStatus.COMPLETED, 1),
        _workout(WorkoutStatus.COMPLETED, 2),
        _workout(WorkoutStatus.SCHEDULED, 3),
    ]
    assert summarize_workouts(workouts) == {
        'scheduled': 1,
        'in_progress': 0,
        'completed': 2,
        'total': 3,
    }
