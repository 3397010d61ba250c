# Weekly check-in availability, alerts and analytics
from .availability import (
    CheckinWindow,
    PromptState,
    checkin_window,
    find_week_checkin,
    is_checkin_available,
    prompt_state,
)
from .notifications import (
    dismiss,
    generate_notifications,
    summarize_notifications,
)
from .analytics import (
    CheckinAnalytics,
    ScoreAverages,
    analyze_by_student,
    analyze_checkins,
    score_band,
)

__all__ = [
    'CheckinWindow',
    'PromptState',
    'checkin_window',
    'find_week_checkin',
    'is_checkin_available',
    'prompt_state',
    'dismiss',
    'generate_notifications',
    'summarize_notifications',
    'CheckinAnalytics',
    'ScoreAverages',
    'analyze_by_student',
    'analyze_checkins',
    'score_band',
]
