"""Dose history and glucose providers.

Read insulin logs and glucose readings and hand them to the core as
immutable core models.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.insulin_on_board import InsulinDose
from dosewatch.core.risk_alerts import GlucoseReading as GlucoseSample
from dosewatch.logging_config import get_logger
from dosewatch.models.glucose import GlucoseReading
from dosewatch.models.insulin_log import InsulinLog

logger = get_logger(__name__)


def _aware(value: datetime) -> datetime:
    # Some drivers hand back naive UTC timestamps
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def to_dose(row: InsulinLog) -> InsulinDose:
    """Convert an insulin log row into a core dose."""
    return InsulinDose(
        id=str(row.id),
        amount=row.units,
        timestamp=_aware(row.taken_at),
        insulin_class=row.insulin_class,
    )


async def get_doses_in_window(
    db: AsyncSession,
    user_id: uuid.UUID,
    start: datetime,
    end: datetime,
) -> list[InsulinDose]:
    """Fetch a user's doses taken between ``start`` and ``end`` inclusive.

    Args:
        db: Database session.
        user_id: User's UUID.
        start: Window start (timezone-aware).
        end: Window end (timezone-aware).

    Returns:
        Doses ordered by time taken.
    """
    result = await db.execute(
        select(InsulinLog)
        .where(
            InsulinLog.user_id == user_id,
            InsulinLog.taken_at >= start,
            InsulinLog.taken_at <= end,
        )
        .order_by(InsulinLog.taken_at)
    )
    doses = [to_dose(row) for row in result.scalars().all()]

    logger.debug(
        "Fetched dose history",
        user_id=str(user_id),
        dose_count=len(doses),
        window_start=start.isoformat(),
        window_end=end.isoformat(),
    )
    return doses


async def get_latest_glucose(
    db: AsyncSession,
    user_id: uuid.UUID,
) -> GlucoseSample | None:
    """Most recent glucose reading for a user, or None."""
    result = await db.execute(
        select(GlucoseReading)
        .where(GlucoseReading.user_id == user_id)
        .order_by(desc(GlucoseReading.reading_timestamp))
        .limit(1)
    )
    row = result.scalar_one_or_none()
    if row is None:
        logger.debug("No glucose readings for user", user_id=str(user_id))
        return None

    return GlucoseSample(
        value=row.value,
        timestamp=_aware(row.reading_timestamp),
        trend=row.trend,
    )
