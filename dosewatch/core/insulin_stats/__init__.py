"""Insulin usage statistics over a reporting period."""

from dosewatch.core.insulin_stats.models import (
    InsulinDailyAverages,
    InsulinSplit,
    InsulinStats,
    InsulinTotals,
    UsageTrend,
)
from dosewatch.core.insulin_stats.summary import (
    TREND_THRESHOLD_UNITS,
    summarize_insulin,
    usage_trend,
)

__all__ = [
    "TREND_THRESHOLD_UNITS",
    "InsulinDailyAverages",
    "InsulinSplit",
    "InsulinStats",
    "InsulinTotals",
    "UsageTrend",
    "summarize_insulin",
    "usage_trend",
]
