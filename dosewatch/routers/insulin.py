"""Insulin on board, risk alert and insulin stats endpoints.

IOB is informational. None of these endpoints recommend a dose.
"""

import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.config import settings
from dosewatch.core.insulin_on_board import InsulinOnBoardError
from dosewatch.core.insulin_stats import InsulinStats
from dosewatch.core.streaks import InvalidTimezone
from dosewatch.database import get_db
from dosewatch.schemas.insulin import IOBCurveResponse, IOBResponse, RiskAlertsResponse
from dosewatch.services.insulin import evaluate_iob, get_insulin_stats, get_iob_curve
from dosewatch.services.risk import evaluate_risk

router = APIRouter(prefix="/api/users/{user_id}/insulin", tags=["insulin"])


@router.get("/iob", response_model=IOBResponse)
async def get_iob(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> IOBResponse:
    """Current insulin on board with a per-dose breakdown."""
    try:
        result = await evaluate_iob(db, user_id, datetime.now(UTC))
    except InsulinOnBoardError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return IOBResponse(
        total_iob=result.total_iob,
        evaluated_at=result.evaluated_at,
        active_dose_count=result.active_dose_count,
        doses=result.doses,
        short_acting_duration_hours=settings.short_acting_duration_hours,
    )


@router.get("/iob/curve", response_model=IOBCurveResponse)
async def get_curve(
    user_id: uuid.UUID,
    hours: float = Query(default=6.0, gt=0, le=24, description="Projection horizon"),
    step_minutes: int = Query(default=30, ge=5, le=240),
    db: AsyncSession = Depends(get_db),
) -> IOBCurveResponse:
    """Projected insulin on board for the decay chart."""
    now = datetime.now(UTC)
    try:
        points = await get_iob_curve(db, user_id, hours, step_minutes, now)
    except InsulinOnBoardError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return IOBCurveResponse(
        start=now,
        hours=hours,
        step_minutes=step_minutes,
        points=points,
    )


@router.get("/alerts", response_model=RiskAlertsResponse)
async def get_risk_alerts(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> RiskAlertsResponse:
    """Evaluate IOB, stacking and low-glucose risk right now."""
    now = datetime.now(UTC)
    try:
        alerts = await evaluate_risk(db, user_id, now)
    except InsulinOnBoardError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return RiskAlertsResponse(alerts=alerts, count=len(alerts), evaluated_at=now)


@router.get("/stats", response_model=InsulinStats)
async def get_stats(
    user_id: uuid.UUID,
    period: int = Query(default=30, ge=1, le=365, description="Days to summarise"),
    timezone: str | None = Query(default=None, max_length=64),
    db: AsyncSession = Depends(get_db),
) -> InsulinStats:
    """Insulin usage totals, averages, split and trend."""
    try:
        return await get_insulin_stats(db, user_id, period, timezone)
    except (InsulinOnBoardError, InvalidTimezone) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
