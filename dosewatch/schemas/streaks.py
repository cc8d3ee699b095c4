"""Streak and activity schemas."""

from datetime import date

from pydantic import BaseModel, Field

from dosewatch.core.streaks import DEFAULT_ACTIVITY_POINTS, StreakMilestone


class StreakResponse(BaseModel):
    """Streak state for one activity type."""

    activity_type: str
    as_of: date
    current_streak: int
    longest_streak: int
    last_activity_date: date | None
    streak_start_date: date | None
    is_active_today: bool
    status: str
    message: str
    days_until_risk: int
    milestones: list[StreakMilestone]


class ActivityLogRequest(BaseModel):
    """Log an activity.

    ``activity_date`` defaults to today in ``timezone`` (or the server's
    default timezone).
    """

    activity_date: date | None = None
    timezone: str | None = None
    points: int = Field(default=DEFAULT_ACTIVITY_POINTS, ge=0, le=100)


class ActivityLogResponse(BaseModel):
    activity_type: str
    activity_date: date
    recorded: bool


class PointsResponse(BaseModel):
    activity_type: str | None
    total_points: int
