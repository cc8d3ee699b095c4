"""CGM sensor wear-life and inventory forecasting."""

from dosewatch.core.sensors.constants import DEFAULT_SENSOR_DURATION_DAYS
from dosewatch.core.sensors.errors import InvalidSensorTimestamp, SensorError
from dosewatch.core.sensors.expiration import (
    SENSOR_MODELS,
    detect_sensor_model,
    has_grace_period,
    sensor_expiration,
    sensor_expiry_alerts,
)
from dosewatch.core.sensors.inventory import (
    inventory_forecast,
    recommended_reorder_date,
    reorder_reminder,
)
from dosewatch.core.sensors.models import (
    ExpirationStatus,
    InventoryForecast,
    InventoryItem,
    InventoryModelSupply,
    ReminderPriority,
    ReorderReminder,
    SensorAlertKind,
    SensorExpiration,
    SensorExpiryAlert,
    SensorModel,
)

__all__ = [
    "DEFAULT_SENSOR_DURATION_DAYS",
    "SENSOR_MODELS",
    "ExpirationStatus",
    "InvalidSensorTimestamp",
    "InventoryForecast",
    "InventoryItem",
    "InventoryModelSupply",
    "ReminderPriority",
    "ReorderReminder",
    "SensorAlertKind",
    "SensorError",
    "SensorExpiration",
    "SensorExpiryAlert",
    "SensorModel",
    "detect_sensor_model",
    "has_grace_period",
    "inventory_forecast",
    "recommended_reorder_date",
    "reorder_reminder",
    "sensor_expiration",
    "sensor_expiry_alerts",
]
