"""Sensor wear-life and model detection."""

import math
import re
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Final

from dosewatch.core.sensors.constants import (
    CRITICAL_DAYS,
    DEXCOM_GRACE_PERIOD_HOURS,
    EXPIRING_SOON_DAYS,
    EXPIRY_WARNING_DAYS,
)
from dosewatch.core.sensors.errors import InvalidSensorTimestamp
from dosewatch.core.sensors.models import (
    ExpirationStatus,
    SensorAlertKind,
    SensorExpiration,
    SensorExpiryAlert,
    SensorModel,
)

SENSOR_MODELS: Final = MappingProxyType(
    {
        "dexcom-g6": SensorModel(
            model_id="dexcom-g6",
            manufacturer="Dexcom",
            model_name="G6",
            duration_days=10,
        ),
        "dexcom-g7": SensorModel(
            model_id="dexcom-g7",
            manufacturer="Dexcom",
            model_name="G7",
            duration_days=10,
        ),
        "freestyle-libre": SensorModel(
            model_id="freestyle-libre",
            manufacturer="Abbott",
            model_name="FreeStyle Libre",
            duration_days=14,
        ),
    }
)

# Dexcom: 10-11 digits starting 4-9. Libre: 8-10 alphanumerics.
_DEXCOM_SERIAL = re.compile(r"^[4-9]\d{9,10}$")
_LIBRE_SERIAL = re.compile(r"^[A-Za-z0-9]{8,10}$")


def _require_aware(value: object, name: str) -> datetime:
    if not isinstance(value, datetime) or value.tzinfo is None:
        raise InvalidSensorTimestamp(f"{name} must be a timezone-aware datetime")
    return value


def sensor_expiration(
    date_added: datetime, duration_days: int, now: datetime
) -> SensorExpiration:
    """Compute expiration info for a sensor applied at ``date_added``.

    ``days_left`` rounds partial days up, so a sensor with six hours left
    shows one day left and is only expired once ``days_left`` goes negative.
    """
    _require_aware(date_added, "date_added")
    _require_aware(now, "now")
    if duration_days <= 0:
        raise ValueError(f"duration_days must be positive, got {duration_days}")

    expiration_date = date_added + timedelta(days=duration_days)
    days_left = math.ceil((expiration_date - now).total_seconds() / 86400)

    is_expired = days_left < 0
    is_expiring_soon = 0 <= days_left <= EXPIRING_SOON_DAYS

    if is_expired or days_left <= CRITICAL_DAYS:
        status = ExpirationStatus.critical
    elif days_left <= EXPIRING_SOON_DAYS:
        status = ExpirationStatus.warning
    else:
        status = ExpirationStatus.normal

    return SensorExpiration(
        expiration_date=expiration_date,
        days_left=days_left,
        status=status,
        is_expired=is_expired,
        is_expiring_soon=is_expiring_soon,
    )


def detect_sensor_model(serial_number: str) -> SensorModel | None:
    """Guess the sensor model from its serial number format.

    Dexcom serials do not distinguish G6 from G7, so they map to G6.
    """
    serial = serial_number.strip()
    if _DEXCOM_SERIAL.match(serial):
        return SENSOR_MODELS["dexcom-g6"]
    if _LIBRE_SERIAL.match(serial):
        return SENSOR_MODELS["freestyle-libre"]
    return None


def has_grace_period(model: SensorModel | None) -> bool:
    """Dexcom G6 and G7 sensors keep reading for a while after expiring."""
    if model is None:
        return False
    name = model.model_name.lower()
    return "dexcom" in model.manufacturer.lower() or "g6" in name or "g7" in name


def _format_grace_time(remaining: timedelta) -> str:
    hours, minutes = divmod(max(0, int(remaining.total_seconds() // 60)), 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def _warning(expiration: SensorExpiration, label: str) -> SensorExpiryAlert:
    expires_on = expiration.expiration_date.date().isoformat()
    if expiration.days_left == 3:
        title = "Sensor expires in 3 days"
        message = (
            f"Your {label} will expire in 3 days on {expires_on}. "
            "Make sure you have a replacement ready."
        )
    elif expiration.days_left == 1:
        title = "Sensor expires tomorrow"
        message = (
            f"Your {label} expires tomorrow ({expires_on}). "
            "Make sure you have a replacement ready."
        )
    else:
        title = "Sensor expires today"
        message = (
            f"Your {label} expires today at "
            f"{expiration.expiration_date.strftime('%H:%M %Z').strip()}. "
            "Replace it as soon as possible to maintain continuous monitoring."
        )
    return SensorExpiryAlert(
        kind=SensorAlertKind.sensor_expiry_warning,
        title=title,
        message=message,
        days_left=expiration.days_left,
        expiration_date=expiration.expiration_date,
        sensor_model=label,
    )


def sensor_expiry_alerts(
    expiration: SensorExpiration,
    model: SensorModel | None,
    now: datetime,
) -> list[SensorExpiryAlert]:
    """Expiry notifications due for a worn sensor at ``now``.

    A warning is raised when exactly 3, 1 or 0 days are left. Once the
    expiration instant has passed, Dexcom sensors get a grace-period alert
    for the first 12 hours and an expired alert after that; other sensors
    go straight to expired. A sensor on its last day can carry both a
    warning and a grace-period or expired alert.

    Args:
        expiration: Result of ``sensor_expiration`` for the sensor.
        model: Catalogue model, or None when it is unknown.
        now: Evaluation instant (timezone-aware).
    """
    _require_aware(now, "now")
    label = f"{model.manufacturer} {model.model_name}" if model else "sensor"
    alerts: list[SensorExpiryAlert] = []

    if expiration.days_left in EXPIRY_WARNING_DAYS:
        alerts.append(_warning(expiration, label))

    if now < expiration.expiration_date:
        return alerts

    grace_end = expiration.expiration_date + timedelta(hours=DEXCOM_GRACE_PERIOD_HOURS)
    if has_grace_period(model) and now < grace_end:
        grace_time_left = _format_grace_time(grace_end - now)
        alerts.append(
            SensorExpiryAlert(
                kind=SensorAlertKind.sensor_grace_period,
                title=f"Sensor has expired - {grace_time_left} remaining",
                message=(
                    f"Your {label} has expired. Change your sensor as soon as "
                    f"possible. You are now in the {DEXCOM_GRACE_PERIOD_HOURS}-hour "
                    f"grace period with {grace_time_left} remaining."
                ),
                days_left=expiration.days_left,
                expiration_date=expiration.expiration_date,
                sensor_model=label,
                grace_time_left=grace_time_left,
            )
        )
        return alerts

    days_expired = abs(expiration.days_left)
    if days_expired:
        ago = f"{days_expired} day{'' if days_expired == 1 else 's'} ago"
    else:
        ago = "today"
    alerts.append(
        SensorExpiryAlert(
            kind=SensorAlertKind.sensor_expired,
            title="Sensor replacement needed",
            message=(
                f"Your {label} expired {ago}. "
                "Replace it immediately to resume glucose monitoring."
            ),
            days_left=expiration.days_left,
            expiration_date=expiration.expiration_date,
            sensor_model=label,
        )
    )
    return alerts
