"""CGM sensor Pydantic models."""

from datetime import date, datetime
from enum import StrEnum, auto

from pydantic import BaseModel, ConfigDict, Field


class SensorModel(BaseModel):
    """A CGM sensor product and its rated wear-life."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str
    manufacturer: str
    model_name: str
    duration_days: int = Field(gt=0)


class ExpirationStatus(StrEnum):
    normal = auto()
    warning = auto()
    critical = auto()


class SensorExpiration(BaseModel):
    """Where a worn sensor stands against its wear-life."""

    model_config = ConfigDict(frozen=True)

    expiration_date: datetime
    days_left: int
    status: ExpirationStatus
    is_expired: bool
    is_expiring_soon: bool


class SensorAlertKind(StrEnum):
    sensor_expiry_warning = auto()
    sensor_expired = auto()
    sensor_grace_period = auto()


class SensorExpiryAlert(BaseModel):
    """A notification that a worn sensor is expiring or has expired.

    ``grace_time_left`` is set only for ``sensor_grace_period`` alerts,
    formatted as ``"5h 30m"``, ``"5h"`` or ``"45m"``.
    """

    model_config = ConfigDict(frozen=True)

    kind: SensorAlertKind
    title: str
    message: str
    days_left: int
    expiration_date: datetime
    sensor_model: str
    grace_time_left: str | None = None


class InventoryItem(BaseModel):
    """Unused sensors of one model held by the user."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str | None = None
    model_name: str | None = None
    quantity: int = Field(ge=0)
    duration_days: int | None = Field(default=None, gt=0)


class InventoryModelSupply(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_id: str | None
    model_name: str
    quantity: int
    duration_days: int
    days_of_supply: int


class InventoryForecast(BaseModel):
    """Supply on hand and when to reorder."""

    model_config = ConfigDict(frozen=True)

    total_quantity: int = Field(ge=0)
    days_of_supply: int = Field(ge=0)
    usage_rate_per_month: float = Field(ge=0.0)
    low_stock: bool
    last_order_date: date | None
    recommended_reorder_date: date
    by_model: list[InventoryModelSupply] = Field(default_factory=list)


class ReminderPriority(StrEnum):
    medium = auto()
    high = auto()


class ReorderReminder(BaseModel):
    """A nudge to reorder sensors."""

    model_config = ConfigDict(frozen=True)

    days_until_reorder: int = Field(ge=0)
    priority: ReminderPriority
    message: str
    current_inventory: int = Field(ge=0)
