"""Sensor inventory forecasting and current-sensor status."""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.sensors import (
    DEFAULT_SENSOR_DURATION_DAYS,
    SENSOR_MODELS,
    InventoryForecast,
    InventoryItem,
    ReorderReminder,
    SensorExpiration,
    SensorExpiryAlert,
    SensorModel,
    detect_sensor_model,
    inventory_forecast,
    reorder_reminder,
    sensor_expiration,
    sensor_expiry_alerts,
)
from dosewatch.logging_config import get_logger
from dosewatch.models.sensor import Sensor, SensorInventory, SensorOrder

logger = get_logger(__name__)

# Usage rate is averaged over roughly three months
USAGE_WINDOW_DAYS = 90


@dataclass
class InventoryReport:
    forecast: InventoryForecast
    reminder: ReorderReminder | None


@dataclass
class CurrentSensor:
    """The sensor currently worn and where it stands against its wear-life."""

    serial_number: str
    model: SensorModel | None
    date_added: datetime
    expiration: SensorExpiration
    alerts: list[SensorExpiryAlert] = field(default_factory=list)


def resolve_sensor_model(model_id: str | None, serial_number: str) -> SensorModel | None:
    """Catalogue model for a sensor, falling back to its serial format."""
    if model_id and model_id in SENSOR_MODELS:
        return SENSOR_MODELS[model_id]
    return detect_sensor_model(serial_number)


def _inventory_item(row: SensorInventory) -> InventoryItem:
    duration = row.duration_days
    if duration is None and row.model_id in SENSOR_MODELS:
        duration = SENSOR_MODELS[row.model_id].duration_days
    return InventoryItem(
        model_id=row.model_id,
        model_name=row.model_name,
        quantity=row.quantity,
        duration_days=duration,
    )


async def get_inventory_forecast(
    db: AsyncSession,
    user_id: uuid.UUID,
    today: date,
) -> InventoryReport:
    """Supply forecast and reorder reminder for a user's sensor stock."""
    result = await db.execute(
        select(SensorInventory).where(SensorInventory.user_id == user_id)
    )
    items = [_inventory_item(row) for row in result.scalars().all()]

    result = await db.execute(
        select(func.max(SensorOrder.order_date)).where(SensorOrder.user_id == user_id)
    )
    last_order_date = result.scalar_one_or_none()

    window_start = datetime.combine(
        today - timedelta(days=USAGE_WINDOW_DAYS), datetime.min.time(), tzinfo=UTC
    )
    result = await db.execute(
        select(func.count(Sensor.id)).where(
            Sensor.user_id == user_id,
            Sensor.date_added >= window_start,
        )
    )
    recently_started = result.scalar_one()

    forecast = inventory_forecast(items, last_order_date, today, recently_started)
    reminder = reorder_reminder(forecast, today)

    logger.info(
        "Computed sensor inventory forecast",
        user_id=str(user_id),
        total_quantity=forecast.total_quantity,
        days_of_supply=forecast.days_of_supply,
        low_stock=forecast.low_stock,
        reminder=reminder.priority.value if reminder else None,
    )
    return InventoryReport(forecast=forecast, reminder=reminder)


async def get_current_sensor(
    db: AsyncSession,
    user_id: uuid.UUID,
    now: datetime | None = None,
) -> CurrentSensor | None:
    """Most recently applied sensor with its expiration status, or None."""
    result = await db.execute(
        select(Sensor)
        .where(Sensor.user_id == user_id)
        .order_by(desc(Sensor.date_added))
        .limit(1)
    )
    row = result.scalar_one_or_none()
    if row is None:
        logger.debug("No sensors for user", user_id=str(user_id))
        return None

    now = now or datetime.now(UTC)
    date_added = row.date_added
    if date_added.tzinfo is None:
        date_added = date_added.replace(tzinfo=UTC)

    model = resolve_sensor_model(row.model_id, row.serial_number)
    duration = model.duration_days if model else DEFAULT_SENSOR_DURATION_DAYS

    expiration = sensor_expiration(date_added, duration, now)
    alerts = sensor_expiry_alerts(expiration, model, now)
    if alerts:
        logger.info(
            "Sensor expiry alerts due",
            user_id=str(user_id),
            kinds=[a.kind.value for a in alerts],
            days_left=expiration.days_left,
        )

    return CurrentSensor(
        serial_number=row.serial_number,
        model=model,
        date_added=date_added,
        expiration=expiration,
        alerts=alerts,
    )
