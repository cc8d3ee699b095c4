"""Insulin usage summary models."""

from datetime import date
from enum import StrEnum, auto

from pydantic import BaseModel, ConfigDict, Field


class UsageTrend(StrEnum):
    increasing = auto()
    decreasing = auto()
    stable = auto()


class InsulinTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    insulin: float = Field(ge=0.0)
    bolus: float = Field(ge=0.0)
    basal: float = Field(ge=0.0)
    entries: int = Field(ge=0)


class InsulinDailyAverages(BaseModel):
    model_config = ConfigDict(frozen=True)

    insulin: float = Field(ge=0.0)
    bolus: float = Field(ge=0.0)
    basal: float = Field(ge=0.0)


class InsulinSplit(BaseModel):
    """Bolus and basal share of the total, in percent."""

    model_config = ConfigDict(frozen=True)

    bolus: float = Field(ge=0.0, le=100.0)
    basal: float = Field(ge=0.0, le=100.0)


class InsulinStats(BaseModel):
    """Insulin usage over a reporting period."""

    model_config = ConfigDict(frozen=True)

    period_days: int = Field(gt=0)
    start_date: date
    end_date: date
    days_with_data: int = Field(ge=0)
    totals: InsulinTotals
    daily_averages: InsulinDailyAverages
    percentages: InsulinSplit
    bolus_by_class: dict[str, float] = Field(default_factory=dict)
    trend: UsageTrend = UsageTrend.stable
