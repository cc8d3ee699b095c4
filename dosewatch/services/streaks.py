"""Activity logging and streak evaluation.

Activity dates are stored as the user's local calendar date, resolved
once when the activity is recorded.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.config import settings
from dosewatch.core.streaks import (
    DEFAULT_ACTIVITY_POINTS,
    ActivityRecord,
    StreakAnalytics,
    StreakMilestone,
    StreakStatus,
    compute_streak,
    streak_analytics,
    streak_milestones,
    streak_status,
    to_local_date,
    total_points,
)
from dosewatch.logging_config import get_logger
from dosewatch.models.daily_activity import DailyActivity

logger = get_logger(__name__)


@dataclass
class StreakReport:
    """Streak status for one activity type, with milestone badges."""

    activity_type: str
    as_of: date
    status: StreakStatus
    milestones: list[StreakMilestone]


def local_today(tz_name: str | None = None, now: datetime | None = None) -> date:
    """The user's calendar date right now."""
    return to_local_date(now or datetime.now(UTC), tz_name or settings.default_timezone)


async def get_activity_dates(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str,
) -> list[date]:
    """Distinct activity dates of one type for a user, ascending."""
    result = await db.execute(
        select(DailyActivity.activity_date)
        .where(
            DailyActivity.user_id == user_id,
            DailyActivity.activity_type == activity_type,
        )
        .distinct()
        .order_by(DailyActivity.activity_date)
    )
    return list(result.scalars().all())


async def get_activity_records(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str | None = None,
) -> list[ActivityRecord]:
    """All activity records for a user, optionally of one type."""
    stmt = select(DailyActivity).where(DailyActivity.user_id == user_id)
    if activity_type is not None:
        stmt = stmt.where(DailyActivity.activity_type == activity_type)
    result = await db.execute(stmt.order_by(DailyActivity.activity_date))

    return [
        ActivityRecord(
            user_id=row.user_id,
            activity_type=row.activity_type,
            activity_date=row.activity_date,
            points_earned=row.points_earned,
        )
        for row in result.scalars().all()
    ]


async def record_activity(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str,
    activity_date: date,
    points: int = DEFAULT_ACTIVITY_POINTS,
) -> bool:
    """Record activity for a day. Idempotent per user, type and date.

    Returns:
        True if a new row was stored, False if the day was already logged.
    """
    # Validates type length, date and points before touching the database
    record = ActivityRecord(
        user_id=user_id,
        activity_type=activity_type,
        activity_date=activity_date,
        points_earned=points,
    )

    stmt = (
        insert(DailyActivity)
        .values(
            id=uuid.uuid4(),
            user_id=record.user_id,
            activity_type=record.activity_type,
            activity_date=record.activity_date,
            points_earned=record.points_earned,
        )
        .on_conflict_do_nothing(
            index_elements=["user_id", "activity_type", "activity_date"]
        )
    )
    result = await db.execute(stmt)
    await db.commit()

    created = result.rowcount > 0
    logger.info(
        "Activity recorded" if created else "Activity already recorded",
        user_id=str(user_id),
        activity_type=activity_type,
        activity_date=activity_date.isoformat(),
    )
    return created


async def evaluate_streak(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str,
    as_of: date,
) -> StreakReport:
    """Current streak, display status and milestones for an activity type."""
    dates = await get_activity_dates(db, user_id, activity_type)
    result = compute_streak(dates, as_of)

    logger.debug(
        "Evaluated streak",
        user_id=str(user_id),
        activity_type=activity_type,
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
    )
    return StreakReport(
        activity_type=activity_type,
        as_of=as_of,
        status=streak_status(result, as_of),
        milestones=streak_milestones(result.current_streak),
    )


async def get_streak_analytics(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str,
) -> StreakAnalytics:
    """Consistency analytics over a user's whole history of one activity."""
    dates = await get_activity_dates(db, user_id, activity_type)
    return streak_analytics(dates)


async def get_total_points(
    db: AsyncSession,
    user_id: uuid.UUID,
    activity_type: str | None = None,
) -> int:
    """Points earned by a user, one record per type and day."""
    records = await get_activity_records(db, user_id, activity_type)
    return total_points(records)
