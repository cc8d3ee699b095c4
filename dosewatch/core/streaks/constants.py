"""Streak and gamification constants."""

from typing import Final

# A streak survives one calendar day without activity: it is only broken
# once a full day passes with nothing logged.
GRACE_DAYS: Final[int] = 1

# (days, badge) in ascending order
STREAK_MILESTONES: Final[tuple[tuple[int, str], ...]] = (
    (3, "First Steps Badge"),
    (7, "Week Warrior Badge"),
    (14, "Fortnight Fighter Badge"),
    (30, "Monthly Master Badge"),
    (60, "Consistency Champion Badge"),
    (100, "Century Streak Badge"),
    (365, "Year-Long Legend Badge"),
)

# Points awarded for a daily login when the caller does not say otherwise
DEFAULT_ACTIVITY_POINTS: Final[int] = 5
