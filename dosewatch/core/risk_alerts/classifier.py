"""Insulin on board risk classification.

Four rules run independently over one IOB evaluation; any number of them
may fire at once:

1. High IOB (>= 5 u), severity high
2. Moderate IOB (3 to < 5 u), severity medium
3. Stacking (>= 3 bolus doses in the last 2 h), severity medium
4. Low glucose (< 70 mg/dL) with any IOB, severity critical

Rule 4 is the safety-critical one. The returned list is ordered by
severity so it comes first, but consumers should not rely on order alone.
"""

from collections.abc import Iterable, Sequence

from dosewatch.core.insulin_on_board import (
    BOLUS_CLASSES,
    InsulinDose,
    IOBResult,
    resolve_insulin_class,
)
from dosewatch.core.risk_alerts.constants import (
    HIGH_IOB_UNITS,
    HYPOGLYCEMIA_THRESHOLD_MGDL,
    MODERATE_IOB_UNITS,
    STACKING_DOSE_COUNT,
    STACKING_WINDOW_HOURS,
)
from dosewatch.core.risk_alerts.enums import SEVERITY_ORDER, AlertKind, AlertSeverity
from dosewatch.core.risk_alerts.models import (
    Alert,
    GlucoseReading,
    HighIOBAlert,
    LowGlucoseWithIOBAlert,
    ModerateIOBAlert,
    StackingAlert,
)


def _alert_id(kind: AlertKind, iob: IOBResult) -> str:
    # Same inputs, same id: lets callers deduplicate against alerts already shown
    return f"{kind.value}:{iob.evaluated_at.isoformat()}"


def count_recent_bolus_doses(
    doses: Iterable[InsulinDose],
    iob: IOBResult,
    window_hours: float = STACKING_WINDOW_HOURS,
) -> int:
    """Count bolus doses taken less than ``window_hours`` before evaluation.

    Future-dated doses count as taken at the evaluation instant.

    Raises:
        InvalidInsulinClass: a dose has an unknown class.
    """
    count = 0
    for dose in doses:
        insulin_class = resolve_insulin_class(dose.insulin_class, dose_id=dose.id)
        if insulin_class not in BOLUS_CLASSES:
            continue
        hours_ago = (iob.evaluated_at - dose.timestamp).total_seconds() / 3600
        if max(0.0, hours_ago) < window_hours:
            count += 1
    return count


def check_iob_band(iob: IOBResult) -> Alert | None:
    """Return the high or moderate IOB alert, or None below both bands."""
    total = iob.total_iob
    if total >= HIGH_IOB_UNITS:
        return HighIOBAlert(
            id=_alert_id(AlertKind.high_iob, iob),
            severity=AlertSeverity.high,
            message=(
                f"High insulin on board: {total:.1f} units. "
                "Consider delaying correction doses."
            ),
            related_iob=total,
            triggered_at=iob.evaluated_at,
        )
    if total >= MODERATE_IOB_UNITS:
        return ModerateIOBAlert(
            id=_alert_id(AlertKind.moderate_iob, iob),
            severity=AlertSeverity.medium,
            message=(
                f"Moderate insulin on board: {total:.1f} units. "
                "Be cautious with additional insulin."
            ),
            related_iob=total,
            triggered_at=iob.evaluated_at,
        )
    return None


def check_stacking(
    iob: IOBResult, recent_doses: Iterable[InsulinDose]
) -> StackingAlert | None:
    """Return a stacking alert when enough bolus doses are recent."""
    count = count_recent_bolus_doses(recent_doses, iob)
    if count < STACKING_DOSE_COUNT:
        return None
    return StackingAlert(
        id=_alert_id(AlertKind.stacking, iob),
        severity=AlertSeverity.medium,
        message=(
            f"{count} doses in the last {STACKING_WINDOW_HOURS:g} hours. "
            "Watch for insulin stacking."
        ),
        related_iob=iob.total_iob,
        triggered_at=iob.evaluated_at,
        recent_dose_count=count,
        window_hours=STACKING_WINDOW_HOURS,
    )


def check_low_glucose_with_iob(
    iob: IOBResult, latest_glucose: GlucoseReading | None
) -> LowGlucoseWithIOBAlert | None:
    """Return the critical alert for hypoglycemia with insulin still active."""
    if latest_glucose is None:
        return None
    if latest_glucose.value >= HYPOGLYCEMIA_THRESHOLD_MGDL or iob.total_iob <= 0:
        return None
    return LowGlucoseWithIOBAlert(
        id=_alert_id(AlertKind.low_glucose_with_iob, iob),
        severity=AlertSeverity.critical,
        message=(
            f"Glucose {latest_glucose.value} mg/dL with {iob.total_iob:.1f} units "
            "of insulin on board. Treat the low and monitor closely."
        ),
        related_iob=iob.total_iob,
        triggered_at=iob.evaluated_at,
        glucose_value=latest_glucose.value,
    )


def classify_risk(
    iob: IOBResult,
    recent_doses: Sequence[InsulinDose],
    latest_glucose: GlucoseReading | None,
) -> list[Alert]:
    """Classify the current risk state into zero or more alerts.

    Args:
        iob: IOB evaluation; its ``evaluated_at`` is the reference instant.
        recent_doses: Doses from roughly the last two hours. Non-bolus and
            older doses are filtered out here.
        latest_glucose: Most recent reading, or None to skip the
            low-glucose rule.

    Returns:
        Alerts ordered critical, high, medium.
    """
    candidates = [
        check_low_glucose_with_iob(iob, latest_glucose),
        check_iob_band(iob),
        check_stacking(iob, recent_doses),
    ]
    alerts = [c for c in candidates if c is not None]
    alerts.sort(key=lambda a: SEVERITY_ORDER[a.severity])
    return alerts
