"""Consecutive-day streak calculation.

Works on plain calendar dates. Converting timestamps to the user's local
date is done once, at the boundary, with ``to_local_date``.
"""

import zoneinfo
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from dosewatch.core.streaks.constants import GRACE_DAYS, STREAK_MILESTONES
from dosewatch.core.streaks.errors import InvalidActivityDate, InvalidTimezone
from dosewatch.core.streaks.models import (
    ActivityRecord,
    StreakAnalytics,
    StreakMilestone,
    StreakResult,
    StreakState,
    StreakStatus,
)

_ONE_DAY = timedelta(days=1)


def _require_date(value: object) -> date:
    # datetime subclasses date, so it has to be excluded explicitly
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidActivityDate(value)
    return value


def _distinct_dates(activity_dates: Iterable[date]) -> set[date]:
    return {_require_date(d) for d in activity_dates}


def _runs(sorted_dates: list[date]) -> list[int]:
    """Lengths of consecutive-day runs in ascending-sorted distinct dates."""
    runs: list[int] = []
    previous: date | None = None
    for current in sorted_dates:
        if previous is not None and current - previous == _ONE_DAY:
            runs[-1] += 1
        else:
            runs.append(1)
        previous = current
    return runs


def to_local_date(instant: datetime, timezone_name: str) -> date:
    """Calendar date of ``instant`` in the named IANA timezone.

    Raises:
        InvalidActivityDate: ``instant`` is not a timezone-aware datetime.
        InvalidTimezone: the zone name is unknown.
    """
    if not isinstance(instant, datetime) or instant.tzinfo is None:
        raise InvalidActivityDate(instant)
    try:
        tz = zoneinfo.ZoneInfo(timezone_name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezone(f"Unknown timezone: {timezone_name!r}") from e
    return instant.astimezone(tz).date()


def compute_streak(activity_dates: Iterable[date], as_of: date) -> StreakResult:
    """Compute current and longest streaks.

    The current streak counts consecutive days back from ``as_of``, or
    from the day before when nothing was logged on ``as_of`` yet. Dates
    after ``as_of`` do not extend the current streak.

    Args:
        activity_dates: Calendar dates with activity; duplicates collapse.
        as_of: The user's "today".

    Raises:
        InvalidActivityDate: an element or ``as_of`` is not a plain date.
    """
    as_of = _require_date(as_of)
    dates = _distinct_dates(activity_dates)
    if not dates:
        return StreakResult(current_streak=0, longest_streak=0)

    longest = max(_runs(sorted(dates)))

    anchor = as_of if as_of in dates else as_of - timedelta(days=GRACE_DAYS)
    current = 0
    start: date | None = None
    day = anchor
    while day in dates:
        current += 1
        start = day
        day -= _ONE_DAY

    past = [d for d in dates if d <= as_of]

    return StreakResult(
        current_streak=current,
        longest_streak=longest,
        last_activity_date=max(past) if past else None,
        streak_start_date=start,
        is_active_today=as_of in dates,
    )


def streak_status(result: StreakResult, as_of: date) -> StreakStatus:
    """Describe a streak for display on ``as_of``."""
    as_of = _require_date(as_of)

    if result.is_active_today:
        return StreakStatus(
            streak=result,
            status=StreakState.active,
            message=f"{result.current_streak} day streak! Keep it going tomorrow.",
            days_until_risk=1,
        )

    if result.current_streak > 0 and result.last_activity_date == as_of - _ONE_DAY:
        return StreakStatus(
            streak=result,
            status=StreakState.at_risk,
            message=(
                f"{result.current_streak} day streak at risk! "
                "Log in today to continue."
            ),
            days_until_risk=0,
        )

    if result.longest_streak > 0:
        message = (
            f"Streak broken. Your best was {result.longest_streak} days. "
            "Start a new one today!"
        )
    else:
        message = "Start your first streak today!"
    return StreakStatus(
        streak=result,
        status=StreakState.broken,
        message=message,
        days_until_risk=0,
    )


def streak_analytics(activity_dates: Iterable[date]) -> StreakAnalytics:
    """Summarise consistency across the full activity history."""
    dates = sorted(_distinct_dates(activity_dates))
    if not dates:
        return StreakAnalytics(
            total_days=0,
            active_days=0,
            consistency_rate=0.0,
            average_streak_length=0.0,
            streak_breaks=0,
            longest_gap=0,
        )

    total_days = (dates[-1] - dates[0]).days + 1
    runs = _runs(dates)
    gaps = [(b - a).days - 1 for a, b in zip(dates, dates[1:]) if b - a > _ONE_DAY]

    return StreakAnalytics(
        total_days=total_days,
        active_days=len(dates),
        consistency_rate=round(len(dates) / total_days * 100, 2),
        average_streak_length=round(sum(runs) / len(runs), 2),
        streak_breaks=len(runs) - 1,
        longest_gap=max(gaps, default=0),
    )


def streak_milestones(streak: int) -> list[StreakMilestone]:
    """Badge table with reached/new flags for a streak length."""
    if streak < 0:
        raise ValueError(f"streak must be >= 0, got {streak}")
    return [
        StreakMilestone(
            days=days,
            reward=reward,
            reached=streak >= days,
            is_new=streak == days,
        )
        for days, reward in STREAK_MILESTONES
    ]


def total_points(records: Iterable[ActivityRecord]) -> int:
    """Sum activity points, counting one record per user, type and day.

    When the same day was recorded twice the higher-scoring record counts.
    """
    best: dict[tuple[object, str, date], int] = {}
    for record in records:
        key = (record.user_id, record.activity_type, record.activity_date)
        best[key] = max(best.get(key, 0), record.points_earned)
    return sum(best.values())
