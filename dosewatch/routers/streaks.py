"""Activity streak endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.streaks import StreakAnalytics, StreakError
from dosewatch.database import get_db
from dosewatch.schemas.streaks import (
    ActivityLogRequest,
    ActivityLogResponse,
    PointsResponse,
    StreakResponse,
)
from dosewatch.services.streaks import (
    evaluate_streak,
    get_streak_analytics,
    get_total_points,
    local_today,
    record_activity,
)

router = APIRouter(prefix="/api/users/{user_id}/streaks", tags=["streaks"])

ActivityType = Annotated[str, Path(min_length=1, max_length=50)]


@router.get("/{activity_type}", response_model=StreakResponse)
async def get_streak(
    user_id: uuid.UUID,
    activity_type: ActivityType,
    timezone: str | None = Query(default=None, max_length=64),
    db: AsyncSession = Depends(get_db),
) -> StreakResponse:
    """Current and longest streak with display status and milestones."""
    try:
        as_of = local_today(timezone)
        report = await evaluate_streak(db, user_id, activity_type, as_of)
    except StreakError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    streak = report.status.streak
    return StreakResponse(
        activity_type=report.activity_type,
        as_of=report.as_of,
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_activity_date=streak.last_activity_date,
        streak_start_date=streak.streak_start_date,
        is_active_today=streak.is_active_today,
        status=report.status.status.value,
        message=report.status.message,
        days_until_risk=report.status.days_until_risk,
        milestones=report.milestones,
    )


@router.get("/{activity_type}/analytics", response_model=StreakAnalytics)
async def get_analytics(
    user_id: uuid.UUID,
    activity_type: ActivityType,
    db: AsyncSession = Depends(get_db),
) -> StreakAnalytics:
    """Consistency analytics across the whole history."""
    return await get_streak_analytics(db, user_id, activity_type)


@router.get("/{activity_type}/points", response_model=PointsResponse)
async def get_points(
    user_id: uuid.UUID,
    activity_type: ActivityType,
    db: AsyncSession = Depends(get_db),
) -> PointsResponse:
    """Total points earned for an activity type."""
    total = await get_total_points(db, user_id, activity_type)
    return PointsResponse(activity_type=activity_type, total_points=total)


@router.post("/{activity_type}/activity", response_model=ActivityLogResponse)
async def log_activity(
    user_id: uuid.UUID,
    activity_type: ActivityType,
    data: ActivityLogRequest,
    db: AsyncSession = Depends(get_db),
) -> ActivityLogResponse:
    """Record today's (or a given day's) activity. Repeat calls are no-ops."""
    try:
        activity_date = data.activity_date or local_today(data.timezone)
    except StreakError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    recorded = await record_activity(
        db, user_id, activity_type, activity_date, data.points
    )
    return ActivityLogResponse(
        activity_type=activity_type,
        activity_date=activity_date,
        recorded=recorded,
    )
