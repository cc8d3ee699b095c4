"""Risk alert enums."""

from enum import StrEnum


class AlertKind(StrEnum):
    """Closed set of risk conditions the classifier reports."""

    high_iob = "high-iob"
    moderate_iob = "moderate-iob"
    stacking = "stacking"
    low_glucose_with_iob = "low-glucose-with-iob"


class AlertSeverity(StrEnum):
    """Alert severity, highest first in ``SEVERITY_ORDER``."""

    critical = "critical"
    high = "high"
    medium = "medium"


SEVERITY_ORDER: dict[AlertSeverity, int] = {
    AlertSeverity.critical: 0,
    AlertSeverity.high: 1,
    AlertSeverity.medium: 2,
}
