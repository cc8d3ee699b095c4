"""Risk classification over insulin on board.

Combines an IOB evaluation, recent bolus doses and the latest glucose
reading into tagged alerts. Persistence, deduplication against alerts
already shown, and delivery are the caller's concern.
"""

from dosewatch.core.risk_alerts.classifier import (
    check_iob_band,
    check_low_glucose_with_iob,
    check_stacking,
    classify_risk,
    count_recent_bolus_doses,
)
from dosewatch.core.risk_alerts.enums import AlertKind, AlertSeverity
from dosewatch.core.risk_alerts.models import (
    Alert,
    GlucoseReading,
    HighIOBAlert,
    LowGlucoseWithIOBAlert,
    ModerateIOBAlert,
    StackingAlert,
    alert_adapter,
)

__all__ = [
    "Alert",
    "AlertKind",
    "AlertSeverity",
    "GlucoseReading",
    "HighIOBAlert",
    "LowGlucoseWithIOBAlert",
    "ModerateIOBAlert",
    "StackingAlert",
    "alert_adapter",
    "check_iob_band",
    "check_low_glucose_with_iob",
    "check_stacking",
    "classify_risk",
    "count_recent_bolus_doses",
]
