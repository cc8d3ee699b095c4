"""Daily activity streaks and gamification.

Streak maths over distinct calendar dates: current streak with a one-day
grace period, longest streak, display status, consistency analytics,
milestone badges and point totals.
"""

from dosewatch.core.streaks.calculator import (
    compute_streak,
    streak_analytics,
    streak_milestones,
    streak_status,
    to_local_date,
    total_points,
)
from dosewatch.core.streaks.constants import (
    DEFAULT_ACTIVITY_POINTS,
    GRACE_DAYS,
    STREAK_MILESTONES,
)
from dosewatch.core.streaks.errors import (
    InvalidActivityDate,
    InvalidTimezone,
    StreakError,
)
from dosewatch.core.streaks.models import (
    ActivityRecord,
    StreakAnalytics,
    StreakMilestone,
    StreakResult,
    StreakState,
    StreakStatus,
)

__all__ = [
    "DEFAULT_ACTIVITY_POINTS",
    "GRACE_DAYS",
    "STREAK_MILESTONES",
    "ActivityRecord",
    "InvalidActivityDate",
    "InvalidTimezone",
    "StreakAnalytics",
    "StreakError",
    "StreakMilestone",
    "StreakResult",
    "StreakState",
    "StreakStatus",
    "compute_streak",
    "streak_analytics",
    "streak_milestones",
    "streak_status",
    "to_local_date",
    "total_points",
]
