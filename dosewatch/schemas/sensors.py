"""Sensor inventory and current sensor schemas."""

from datetime import datetime

from pydantic import BaseModel

from dosewatch.core.sensors import (
    InventoryForecast,
    ReorderReminder,
    SensorExpiration,
    SensorExpiryAlert,
    SensorModel,
)


class InventoryResponse(BaseModel):
    forecast: InventoryForecast
    reminder: ReorderReminder | None


class CurrentSensorResponse(BaseModel):
    """The sensor currently worn."""

    serial_number: str
    model: SensorModel | None
    date_added: datetime
    expiration: SensorExpiration
    alerts: list[SensorExpiryAlert] = []
