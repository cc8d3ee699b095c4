"""Sensor supply forecasting and reorder reminders."""

from collections.abc import Sequence
from datetime import date, timedelta

from dosewatch.core.sensors.constants import (
    DEFAULT_SENSOR_DURATION_DAYS,
    LOW_STOCK_QUANTITY,
    MONTHLY_REORDER_SUPPLY_DAYS,
    REORDER_BUFFER_DAYS,
    REORDER_INTERVAL_DAYS,
    REORDER_REMINDER_DAYS,
    REORDER_SAFETY_SENSORS,
    USAGE_WINDOW_MONTHS,
)
from dosewatch.core.sensors.models import (
    InventoryForecast,
    InventoryItem,
    InventoryModelSupply,
    ReminderPriority,
    ReorderReminder,
)


def _duration(item: InventoryItem) -> int:
    return item.duration_days or DEFAULT_SENSOR_DURATION_DAYS


def recommended_reorder_date(
    items: Sequence[InventoryItem],
    last_order_date: date | None,
    today: date,
) -> date:
    """When the user should next order sensors.

    With an order history: a month after the last order while supply lasts
    more than a month, otherwise a few days before supply runs out.
    Without history: early enough to keep two sensors' worth in hand.
    """
    supply = sum(item.quantity * _duration(item) for item in items)

    if last_order_date is not None:
        if supply > MONTHLY_REORDER_SUPPLY_DAYS:
            return last_order_date + timedelta(days=REORDER_INTERVAL_DAYS)
        return today + timedelta(days=max(0, supply - REORDER_BUFFER_DAYS))

    if items:
        mean_duration = sum(_duration(item) for item in items) / len(items)
    else:
        mean_duration = DEFAULT_SENSOR_DURATION_DAYS
    days_until = max(0.0, supply - REORDER_SAFETY_SENSORS * mean_duration)
    return today + timedelta(days=int(days_until))


def inventory_forecast(
    items: Sequence[InventoryItem],
    last_order_date: date | None,
    today: date,
    sensors_started_recently: int = 0,
) -> InventoryForecast:
    """Summarise sensor supply.

    Args:
        items: Inventory rows, one per sensor model.
        last_order_date: Date of the most recent order, if any.
        today: The user's current date.
        sensors_started_recently: Sensors applied over the usage window
            (three months), used for the monthly usage rate.
    """
    if sensors_started_recently < 0:
        raise ValueError("sensors_started_recently must be >= 0")

    by_model = [
        InventoryModelSupply(
            model_id=item.model_id,
            model_name=item.model_name or "Unknown",
            quantity=item.quantity,
            duration_days=_duration(item),
            days_of_supply=item.quantity * _duration(item),
        )
        for item in items
    ]
    total_quantity = sum(item.quantity for item in items)

    return InventoryForecast(
        total_quantity=total_quantity,
        days_of_supply=sum(m.days_of_supply for m in by_model),
        usage_rate_per_month=round(sensors_started_recently / USAGE_WINDOW_MONTHS, 1),
        low_stock=total_quantity <= LOW_STOCK_QUANTITY,
        last_order_date=last_order_date,
        recommended_reorder_date=recommended_reorder_date(
            items, last_order_date, today
        ),
        by_model=by_model,
    )


def reorder_reminder(
    forecast: InventoryForecast, today: date
) -> ReorderReminder | None:
    """Reminder when the reorder date is at most three days away."""
    days_until = (forecast.recommended_reorder_date - today).days
    if days_until < 0 or days_until > REORDER_REMINDER_DAYS:
        return None

    count = forecast.total_quantity
    if days_until == 0:
        priority = ReminderPriority.high
        message = f"Time to reorder sensors! You have {count} sensors left."
    elif days_until == 1:
        priority = ReminderPriority.high
        message = f"Reorder sensors tomorrow! You have {count} sensors remaining."
    else:
        priority = ReminderPriority.medium
        message = (
            f"Reorder sensors in {days_until} days. "
            f"Current inventory: {count} sensors."
        )

    return ReorderReminder(
        days_until_reorder=days_until,
        priority=priority,
        message=message,
        current_inventory=count,
    )
