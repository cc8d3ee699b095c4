# Database Models
from dosewatch.models.base import Base, TimestampMixin
from dosewatch.models.daily_activity import DailyActivity
from dosewatch.models.glucose import GlucoseReading
from dosewatch.models.insulin_log import InsulinLog
from dosewatch.models.sensor import Sensor, SensorInventory, SensorOrder

__all__ = [
    "Base",
    "DailyActivity",
    "GlucoseReading",
    "InsulinLog",
    "Sensor",
    "SensorInventory",
    "SensorOrder",
    "TimestampMixin",
]
