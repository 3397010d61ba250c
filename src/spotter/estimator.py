"""
One-Rep-Max and Load Estimation

Converts logged sets (weight x reps @ RPE) into an estimated 1RM and,
inversely, prescribes a target weight for a rep/RPE target.

Primary method is RPE-based (reps-in-reserve table as used in
powerlifting). Epley and Brzycki are kept as cross-checks and as the
fallback when a set was logged without an RPE.

Invalid input is not an error: every estimator returns 0 to signal
"no estimate available".
"""

import math
import re
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from .config import DEFAULT_CONFIG, SpotterConfig
from .models import Exercise, ExerciseResult


# %1RM for a single rep at each RPE
RPE_PERCENTAGES = {
    10.0: 100.0,  # No reps left
    9.5: 97.5,
    9.0: 95.0,    # 1 rep left
    8.5: 92.5,
    8.0: 90.0,    # 2 reps left
    7.5: 87.5,
    7.0: 85.0,    # 3 reps left
    6.5: 82.5,
    6.0: 80.0,    # 4 reps left
    5.0: 75.0,    # 5+ reps left
}

RPE_DESCRIPTIONS = {
    10.0: "Maximum effort - could not do another rep",
    9.5: "Maybe 1 more rep",
    9.0: "Could do 1 more rep",
    8.5: "Maybe 2 more reps",
    8.0: "Could do 2 more reps",
    7.5: "Maybe 3 more reps",
    7.0: "Could do 3 more reps",
    6.5: "Maybe 4 more reps",
    6.0: "Could do 4 more reps",
    5.0: "Could do 5 or more reps",
}


def _round_half_up(value: float, step: float) -> float:
    """Round to the nearest multiple of step, halves going up."""
    return math.floor(value / step + 0.5) * step


def _round_1dp(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def round_rpe(rpe: float) -> float:
    """Round an RPE to the nearest 0.5."""
    return math.floor(rpe * 2 + 0.5) / 2


def rpe_percentage(rpe: float, config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """%1RM for one rep at the given RPE; RPE 7 row when not in the table."""
    return RPE_PERCENTAGES.get(round_rpe(rpe), config.default_percentage)


def _adjusted_percentage(reps: int, rpe: float, config: SpotterConfig) -> float:
    # Linear rep penalty, floored
    penalty = max(0.0, (reps - 1) * config.rep_penalty_pct)
    return max(rpe_percentage(rpe, config) - penalty, config.min_percentage)


def _valid_rpe(rpe: float, config: SpotterConfig) -> bool:
    return config.min_rpe <= rpe <= config.max_rpe


@lru_cache(maxsize=4096)
def estimate_1rm(weight: float, reps: int, rpe: float,
                 config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """
    Estimate 1RM from a set using the RPE table.

    Args:
        weight: Load lifted (kg)
        reps: Repetitions performed
        rpe: Rate of perceived exertion, 6-10

    Returns:
        Estimated 1RM rounded to 0.1 kg, or 0 for invalid input
    """
    if weight <= 0 or reps <= 0 or not _valid_rpe(rpe, config):
        return 0

    percentage = _adjusted_percentage(reps, rpe, config)
    return _round_1dp(weight * 100 / percentage)


def epley(weight: float, reps: int) -> float:
    """Epley: 1RM = w * (1 + r/30)."""
    if weight <= 0 or reps <= 0:
        return 0
    if reps == 1:
        return weight
    return _round_1dp(weight * (1 + reps / 30))


def brzycki(weight: float, reps: int) -> float:
    """Brzycki: 1RM = w / (1.0278 - 0.0278 * r)."""
    if weight <= 0 or reps <= 0:
        return 0
    if reps == 1:
        return weight
    return _round_1dp(weight / (1.0278 - 0.0278 * reps))


@lru_cache(maxsize=4096)
def target_weight(one_rm: float, target_reps: int, target_rpe: float,
                  config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """
    Weight to load for a rep/RPE target given a known or estimated 1RM.

    Returns:
        Weight rounded to the nearest 0.5 kg, or 0 for invalid input
    """
    if one_rm <= 0 or target_reps <= 0 or not _valid_rpe(target_rpe, config):
        return 0

    percentage = _adjusted_percentage(target_reps, target_rpe, config)
    return _round_half_up(one_rm * percentage / 100, 0.5)


def rpe_description(rpe: float) -> str:
    """Human-readable reps-in-reserve description for an RPE."""
    return RPE_DESCRIPTIONS.get(round_rpe(rpe), "Unrecognized RPE")


def estimate_set(weight: float, reps: int, rpe: Optional[float] = None,
                 config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """
    Derived 1RM stored on a logged set.

    RPE method when the athlete logged an RPE, Epley otherwise.
    """
    if rpe is None:
        return epley(weight, reps)
    return estimate_1rm(weight, reps, rpe, config)


def result_estimate(result: ExerciseResult, config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """Stored estimate when present, recomputed from the set otherwise."""
    if result.one_rep_max:
        return result.one_rep_max
    return estimate_set(result.weight, result.reps, result.actual_rpe, config)


def best_set(results: Iterable[ExerciseResult],
             config: SpotterConfig = DEFAULT_CONFIG) -> Optional[ExerciseResult]:
    """Find the set with the highest estimated 1RM; earliest set wins ties."""
    best = None
    best_e1rm = 0
    for result in sorted(results, key=lambda r: r.set_number):
        est = result_estimate(result, config)
        if est > best_e1rm:
            best_e1rm = est
            best = result
    return best


_REP_RANGE = re.compile(r'^\s*(\d+)\s*(?:-|–|to)?\s*(\d+)?\s*$', re.IGNORECASE)


def parse_rep_range(reps: str) -> Optional[Tuple[int, int]]:
    """
    Parse a prescribed rep range.

    "8-10" -> (8, 10), "5" -> (5, 5), anything else -> None
    """
    match = _REP_RANGE.match(str(reps or ''))
    if not match:
        return None
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    if low <= 0:
        return None
    return (min(low, high), max(low, high))


def prescribe(exercise: Exercise, one_rm: float,
              config: SpotterConfig = DEFAULT_CONFIG) -> float:
    """
    Target weight for an exercise's prescription.

    Uses the low end of the rep range (the heaviest load in range) and the
    planned RPE. Returns 0 when the prescription can't be resolved.
    """
    rep_range = parse_rep_range(exercise.reps)
    if rep_range is None or exercise.planned_rpe is None:
        return 0
    return target_weight(one_rm, rep_range[0], exercise.planned_rpe, config)
