"""
Check-in Analytics

Reduces a student's check-in history to the numbers on the coach's
analytics card: averaged wellness scores, completion rate and pain
incidents. Empty histories give zeros, never NaN.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..models import WELLNESS_METRICS, RecordId, Student, WeeklyCheckin

logger = logging.getLogger(__name__)


def _mean(values: Sequence[Optional[float]]) -> float:
    """Mean of the values present; 0 when there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return float(np.mean(present))


def score_band(score: float) -> str:
    """Display band for a 1-10 score."""
    if score >= 8:
        return 'good'
    if score >= 6:
        return 'fair'
    return 'poor'


@dataclass(frozen=True)
class ScoreAverages:
    """The four categories shown on the analytics card."""
    muscular_recovery: float = 0.0
    mental_state: float = 0.0
    sleep_quality: float = 0.0
    perceived_progress: float = 0.0

    @property
    def overall(self) -> float:
        return (self.muscular_recovery + self.mental_state
                + self.sleep_quality + self.perceived_progress) / 4

    def as_dict(self) -> Dict[str, float]:
        return {
            'muscular_recovery': self.muscular_recovery,
            'mental_state': self.mental_state,
            'sleep_quality': self.sleep_quality,
            'perceived_progress': self.perceived_progress,
        }


@dataclass(frozen=True)
class CheckinAnalytics:
    total_checkins: int
    completed_checkins: int
    pain_reports: int
    average_scores: ScoreAverages
    metric_averages: Dict[str, float]
    average_sleep_hours: float

    @property
    def completion_rate(self) -> float:
        if self.total_checkins == 0:
            return 0.0
        return self.completed_checkins / self.total_checkins

    @property
    def completion_percentage(self) -> float:
        return self.completion_rate * 100

    @property
    def overall_average(self) -> float:
        return self.average_scores.overall

    def to_dict(self) -> Dict:
        return {
            'total_checkins': self.total_checkins,
            'completion_rate': self.completion_rate,
            'pain_reports': self.pain_reports,
            'average_scores': self.average_scores.as_dict(),
            'overall_average': self.overall_average,
            'metric_averages': dict(self.metric_averages),
            'average_sleep_hours': self.average_sleep_hours,
        }


def analyze_checkins(checkins: Iterable[WeeklyCheckin]) -> CheckinAnalytics:
    """
    Aggregate one student's check-in history.

    Each score average is taken over the check-ins that carry that score;
    a missing score is skipped, not counted as zero. With complete data
    this is the plain mean over all check-ins.

    Args:
        checkins: The student's check-ins (any order)

    Returns:
        CheckinAnalytics; all zeros for an empty history
    """
    history: List[WeeklyCheckin] = list(checkins)

    metric_averages = {
        metric: _mean([c.metric(metric) for c in history])
        for metric in WELLNESS_METRICS
    }

    return CheckinAnalytics(
        total_checkins=len(history),
        completed_checkins=sum(1 for c in history if c.completed),
        pain_reports=sum(1 for c in history if c.reported_pain),
        average_scores=ScoreAverages(
            muscular_recovery=metric_averages['muscular_recovery'],
            mental_state=metric_averages['mental_state'],
            sleep_quality=metric_averages['sleep_quality'],
            perceived_progress=metric_averages['perceived_progress'],
        ),
        metric_averages=metric_averages,
        average_sleep_hours=_mean([c.sleep_hours for c in history]),
    )


def analyze_by_student(
    students: Iterable[Student],
    checkins: Iterable[WeeklyCheckin]
) -> Dict[RecordId, CheckinAnalytics]:
    """Analytics for every student, including those with no check-ins."""
    grouped: Dict[RecordId, List[WeeklyCheckin]] = {}
    for checkin in checkins:
        grouped.setdefault(checkin.student_id, []).append(checkin)

    results = {}
    for student in students:
        results[student.id] = analyze_checkins(grouped.get(student.id, []))

    logger.debug("Analyzed check-ins for %d students", len(results))
    return results
