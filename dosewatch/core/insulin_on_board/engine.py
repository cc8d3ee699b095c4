"""Insulin on board decay engine.

Linear decay per insulin class: a bolus of ``a`` units with duration of
action ``d`` hours has ``a * (d - t) / d`` units left ``t`` hours after it
was taken, and nothing left from ``d`` hours on. This is a deliberate
simplification of real pharmacokinetics, adequate for an informational
display that never drives a dosing decision.

All functions are pure. Nothing is cached; callers that want memoisation
key it on (doses, evaluation instant) themselves.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from dosewatch.core.insulin_on_board.constants import (
    BOLUS_CLASSES,
    DEFAULT_DURATION_HOURS,
    DOSE_DETAIL_DECIMALS,
    INSULIN_CLASS_ALIASES,
    TOTAL_IOB_DECIMALS,
)
from dosewatch.core.insulin_on_board.enums import InsulinClass
from dosewatch.core.insulin_on_board.errors import (
    InconsistentDoseDuration,
    InvalidInsulinClass,
    InvalidTimestamp,
)
from dosewatch.core.insulin_on_board.models import (
    DoseContribution,
    InsulinDose,
    IOBCurvePoint,
    IOBResult,
)

DurationTable = Mapping[InsulinClass, float]


def resolve_insulin_class(
    value: object, dose_id: str | None = None
) -> InsulinClass:
    """Map a class name (or alias) onto the closed ``InsulinClass`` set.

    Raises:
        InvalidInsulinClass: if the value names no known class.
    """
    if isinstance(value, InsulinClass):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        try:
            return InsulinClass(key)
        except ValueError:
            pass
        alias = INSULIN_CLASS_ALIASES.get(key)
        if alias is not None:
            return alias
    raise InvalidInsulinClass(value, dose_id=dose_id)


def _duration_table(durations: DurationTable | None) -> dict[InsulinClass, float]:
    table = dict(DEFAULT_DURATION_HOURS)
    if durations:
        for key, hours in durations.items():
            if hours <= 0:
                raise ValueError(f"Duration for {key} must be positive, got {hours}")
            table[resolve_insulin_class(key)] = float(hours)
    return table


def duration_for(
    insulin_class: object, durations: DurationTable | None = None
) -> float:
    """Duration of insulin action in hours for a class.

    Args:
        insulin_class: Class name, alias or ``InsulinClass``.
        durations: Optional per-class overrides of the default table.
    """
    return _duration_table(durations)[resolve_insulin_class(insulin_class)]


def remaining_fraction(hours_elapsed: float, duration_hours: float) -> float:
    """Fraction of a dose still active after ``hours_elapsed`` hours.

    Negative elapsed time (clock skew, future-dated entries) is treated as
    no time elapsed so a dose never contributes more than its amount.
    """
    if duration_hours <= 0:
        raise ValueError(f"duration_hours must be positive, got {duration_hours}")
    if hours_elapsed <= 0:
        return 1.0
    if hours_elapsed >= duration_hours:
        return 0.0
    return (duration_hours - hours_elapsed) / duration_hours


def require_aware(value: object, name: str) -> datetime:
    """Return ``value`` if it is a timezone-aware datetime.

    Raises:
        InvalidTimestamp: for naive datetimes and non-datetime values.
    """
    if not isinstance(value, datetime):
        raise InvalidTimestamp(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidTimestamp(f"{name} must be timezone-aware")
    return value


def compute_iob(
    doses: Iterable[InsulinDose],
    evaluation_instant: datetime,
    durations: DurationTable | None = None,
) -> IOBResult:
    """Compute insulin on board at ``evaluation_instant``.

    Every dose is class-checked, but only bolus classes (rapid, short)
    contribute. The breakdown lists each bolus dose, including fully
    absorbed ones, ordered by dose time.

    Args:
        doses: Dose records in any order; may be empty.
        evaluation_instant: Timezone-aware instant to evaluate at.
        durations: Optional per-class duration overrides (hours).

    Returns:
        IOBResult with ``total_iob`` rounded to one decimal place.

    Raises:
        InvalidInsulinClass: a dose has an unknown class.
        InconsistentDoseDuration: a dose's precomputed duration disagrees
            with its class for this call.
        InvalidTimestamp: ``evaluation_instant`` is naive or not a datetime.
    """
    require_aware(evaluation_instant, "evaluation_instant")
    table = _duration_table(durations)

    total = 0.0
    active = 0
    contributions: list[tuple[datetime, str, DoseContribution]] = []

    for dose in doses:
        insulin_class = resolve_insulin_class(dose.insulin_class, dose_id=dose.id)
        duration = table[insulin_class]
        if dose.duration_hours is not None and not math.isclose(
            dose.duration_hours, duration
        ):
            raise InconsistentDoseDuration(dose.id, dose.duration_hours, duration)

        if insulin_class not in BOLUS_CLASSES:
            continue

        elapsed = (evaluation_instant - dose.timestamp).total_seconds() / 3600
        hours_elapsed = max(0.0, elapsed)
        fraction = remaining_fraction(hours_elapsed, duration)
        remaining = dose.amount * fraction

        total += remaining
        if fraction > 0:
            active += 1

        contributions.append(
            (
                dose.timestamp,
                dose.id,
                DoseContribution(
                    dose_id=dose.id,
                    amount=dose.amount,
                    remaining_amount=round(remaining, DOSE_DETAIL_DECIMALS),
                    remaining_fraction=fraction,
                    hours_elapsed=round(hours_elapsed, DOSE_DETAIL_DECIMALS),
                    hours_remaining=round(
                        max(0.0, duration - hours_elapsed), DOSE_DETAIL_DECIMALS
                    ),
                ),
            )
        )

    contributions.sort(key=lambda item: (item[0], item[1]))

    return IOBResult(
        total_iob=round(total, TOTAL_IOB_DECIMALS),
        evaluated_at=evaluation_instant,
        active_dose_count=active,
        doses=[c for _, _, c in contributions],
    )


def project_iob_curve(
    doses: Iterable[InsulinDose],
    start: datetime,
    hours: float,
    step_minutes: int = 30,
    durations: DurationTable | None = None,
) -> list[IOBCurvePoint]:
    """Project total IOB from ``start`` over the next ``hours`` hours.

    Points are spaced ``step_minutes`` apart, starting at ``start`` and
    including the last step that does not pass the horizon.
    """
    require_aware(start, "start")
    if hours <= 0:
        raise ValueError(f"hours must be positive, got {hours}")
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be positive, got {step_minutes}")

    dose_list = list(doses)
    horizon_minutes = int(hours * 60)

    points: list[IOBCurvePoint] = []
    for minutes in range(0, horizon_minutes + 1, step_minutes):
        at = start + timedelta(minutes=minutes)
        result = compute_iob(dose_list, at, durations)
        points.append(
            IOBCurvePoint(at=at, minutes_from_start=minutes, total_iob=result.total_iob)
        )
    return points
