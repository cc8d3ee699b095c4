"""Insulin usage summary.

Basal means long-acting insulin; every other class is counted as bolus.
Days are bucketed in the caller's timezone.
"""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, timedelta

from dosewatch.core.insulin_on_board import (
    InsulinClass,
    InsulinDose,
    resolve_insulin_class,
)
from dosewatch.core.insulin_stats.models import (
    InsulinDailyAverages,
    InsulinSplit,
    InsulinStats,
    InsulinTotals,
    UsageTrend,
)
from dosewatch.core.streaks import to_local_date

TREND_THRESHOLD_UNITS = 2.0


def _r1(value: float) -> float:
    return round(value, 1)


def usage_trend(daily_totals: Sequence[float]) -> UsageTrend:
    """Compare the mean daily total of the first and second halves.

    With an odd number of days the middle day falls in the second half.
    """
    mid = len(daily_totals) // 2
    first, second = daily_totals[:mid], daily_totals[mid:]
    first_avg = sum(first) / len(first) if first else 0.0
    second_avg = sum(second) / len(second) if second else 0.0
    diff = second_avg - first_avg
    if abs(diff) <= TREND_THRESHOLD_UNITS:
        return UsageTrend.stable
    return UsageTrend.increasing if diff > 0 else UsageTrend.decreasing


def summarize_insulin(
    doses: Sequence[InsulinDose],
    period_days: int,
    today: date,
    tz_name: str = "UTC",
) -> InsulinStats:
    """Summarise the doses logged over the last ``period_days`` days.

    The caller is responsible for selecting the doses in the period; this
    function only aggregates them.

    Raises:
        InvalidInsulinClass: a dose carries an unknown class.
        ValueError: ``period_days`` is not positive.
    """
    if period_days <= 0:
        raise ValueError(f"period_days must be positive, got {period_days}")

    bolus_total = 0.0
    basal_total = 0.0
    by_class: dict[str, float] = defaultdict(float)
    per_day: dict[date, float] = defaultdict(float)

    for dose in doses:
        insulin_class = resolve_insulin_class(dose.insulin_class, dose.id)
        if insulin_class is InsulinClass.long:
            basal_total += dose.amount
        else:
            bolus_total += dose.amount
            by_class[insulin_class.value] += dose.amount
        per_day[to_local_date(dose.timestamp, tz_name)] += dose.amount

    total = bolus_total + basal_total
    days = len(per_day)

    def per_day_avg(value: float) -> float:
        return _r1(value / days) if days else 0.0

    return InsulinStats(
        period_days=period_days,
        start_date=today - timedelta(days=period_days),
        end_date=today,
        days_with_data=days,
        totals=InsulinTotals(
            insulin=_r1(total),
            bolus=_r1(bolus_total),
            basal=_r1(basal_total),
            entries=len(doses),
        ),
        daily_averages=InsulinDailyAverages(
            insulin=per_day_avg(total),
            bolus=per_day_avg(bolus_total),
            basal=per_day_avg(basal_total),
        ),
        percentages=InsulinSplit(
            bolus=_r1(bolus_total / total * 100) if total else 0.0,
            basal=_r1(basal_total / total * 100) if total else 0.0,
        ),
        bolus_by_class={k: _r1(v) for k, v in sorted(by_class.items())},
        trend=usage_trend([per_day[d] for d in sorted(per_day)]),
    )
