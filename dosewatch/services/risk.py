"""Risk evaluation for a user.

Fetches the inputs for the risk classifier and runs it. Alerts are
returned to the caller; nothing is persisted here.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.config import settings
from dosewatch.core.insulin_on_board import compute_iob
from dosewatch.core.risk_alerts import Alert, classify_risk
from dosewatch.logging_config import get_logger
from dosewatch.services.dose_history import get_doses_in_window, get_latest_glucose
from dosewatch.services.insulin import dose_window, engine_durations

logger = get_logger(__name__)


async def evaluate_risk(
    db: AsyncSession,
    user_id: uuid.UUID,
    now: datetime | None = None,
) -> list[Alert]:
    """Evaluate IOB, stacking and low-glucose risk for a user.

    A glucose reading older than ``glucose_stale_minutes`` is treated as
    missing, so a stale low does not raise a critical alert.

    Args:
        db: Database session.
        user_id: User's UUID.
        now: Evaluation instant; defaults to the current time.

    Returns:
        Alerts ordered critical, high, medium.
    """
    now = now or datetime.now(UTC)
    doses = await get_doses_in_window(db, user_id, *dose_window(now))
    iob = compute_iob(doses, now, engine_durations())

    glucose = await get_latest_glucose(db, user_id)
    if glucose is not None:
        minutes_ago = (now - glucose.timestamp).total_seconds() / 60
        if minutes_ago > settings.glucose_stale_minutes:
            logger.debug(
                "Glucose reading is stale, skipping low-glucose check",
                user_id=str(user_id),
                minutes_ago=round(minutes_ago, 1),
            )
            glucose = None

    alerts = classify_risk(iob, doses, glucose)

    if alerts:
        logger.info(
            "Risk alerts raised",
            user_id=str(user_id),
            alert_count=len(alerts),
            kinds=[a.kind.value for a in alerts],
            total_iob=iob.total_iob,
        )
    return alerts
