"""Insulin on board, decay projection and usage statistics.

Glue between the dose history provider and the pure IOB engine. The
engine's short-acting duration comes from settings.
"""

import uuid
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.config import settings
from dosewatch.core.insulin_on_board import (
    BOLUS_CLASSES,
    InsulinClass,
    IOBCurvePoint,
    IOBResult,
    compute_iob,
    duration_for,
    project_iob_curve,
)
from dosewatch.core.insulin_stats import InsulinStats, summarize_insulin
from dosewatch.core.streaks import to_local_date
from dosewatch.logging_config import get_logger
from dosewatch.services.dose_history import get_doses_in_window

logger = get_logger(__name__)

DEFAULT_CURVE_HOURS = 6.0
DEFAULT_STATS_PERIOD_DAYS = 30


def engine_durations() -> dict[InsulinClass, float]:
    """Per-class duration overrides passed to the engine."""
    return {InsulinClass.short: settings.short_acting_duration_hours}


def lookback_hours() -> float:
    """How far back to fetch doses so no active bolus is missed."""
    durations = engine_durations()
    longest_bolus = max(duration_for(c, durations) for c in BOLUS_CLASSES)
    return max(settings.iob_lookback_hours, longest_bolus)


def dose_window(now: datetime) -> tuple[datetime, datetime]:
    """Dose history window for evaluating IOB at ``now``.

    Reaches slightly past ``now`` so doses stamped a little in the future
    still reach the engine, which counts them as taken at ``now``.
    """
    return (
        now - timedelta(hours=lookback_hours()),
        now + timedelta(minutes=settings.future_dose_tolerance_minutes),
    )


async def evaluate_iob(
    db: AsyncSession,
    user_id: uuid.UUID,
    now: datetime | None = None,
) -> IOBResult:
    """Current insulin on board for a user.

    Args:
        db: Database session.
        user_id: User's UUID.
        now: Evaluation instant; defaults to the current time.
    """
    now = now or datetime.now(UTC)
    doses = await get_doses_in_window(db, user_id, *dose_window(now))
    result = compute_iob(doses, now, engine_durations())

    logger.debug(
        "Evaluated insulin on board",
        user_id=str(user_id),
        total_iob=result.total_iob,
        active_doses=result.active_dose_count,
    )
    return result


async def get_iob_curve(
    db: AsyncSession,
    user_id: uuid.UUID,
    hours: float = DEFAULT_CURVE_HOURS,
    step_minutes: int = 30,
    now: datetime | None = None,
) -> list[IOBCurvePoint]:
    """Projected IOB from now over the next ``hours`` hours."""
    now = now or datetime.now(UTC)
    doses = await get_doses_in_window(db, user_id, *dose_window(now))
    return project_iob_curve(doses, now, hours, step_minutes, engine_durations())


async def get_insulin_stats(
    db: AsyncSession,
    user_id: uuid.UUID,
    period_days: int = DEFAULT_STATS_PERIOD_DAYS,
    tz_name: str | None = None,
    now: datetime | None = None,
) -> InsulinStats:
    """Insulin usage summary over the last ``period_days`` days."""
    if period_days <= 0:
        raise ValueError(f"period_days must be positive, got {period_days}")

    now = now or datetime.now(UTC)
    tz_name = tz_name or settings.default_timezone
    today = to_local_date(now, tz_name)

    doses = await get_doses_in_window(
        db, user_id, now - timedelta(days=period_days), now
    )
    stats = summarize_insulin(doses, period_days, today, tz_name)

    logger.info(
        "Computed insulin stats",
        user_id=str(user_id),
        period_days=period_days,
        entries=stats.totals.entries,
        trend=stats.trend.value,
    )
    return stats
