"""Streak Pydantic models."""

import uuid
from datetime import date
from enum import StrEnum, auto
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ActivityRecord(BaseModel):
    """One day of one tracked activity for one user."""

    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    activity_type: str = Field(min_length=1, max_length=50)
    activity_date: date
    points_earned: int = Field(default=0, ge=0)


class StreakResult(BaseModel):
    """Current and longest run of consecutive active days."""

    model_config = ConfigDict(frozen=True)

    current_streak: int = Field(ge=0)
    longest_streak: int = Field(ge=0)
    last_activity_date: date | None = None
    streak_start_date: date | None = None
    is_active_today: bool = False

    @model_validator(mode="after")
    def check_consistency(self) -> Self:
        """Enforce that the streak fields are internally consistent."""
        if self.longest_streak < self.current_streak:
            msg = "longest_streak must be >= current_streak"
            raise ValueError(msg)
        if self.current_streak > 0 and self.streak_start_date is None:
            msg = "streak_start_date is required while a streak is running"
            raise ValueError(msg)
        return self


class StreakState(StrEnum):
    """Display state of a streak on a given day."""

    active = auto()
    at_risk = auto()
    broken = auto()


class StreakStatus(BaseModel):
    """Streak plus the message shown to the user."""

    model_config = ConfigDict(frozen=True)

    streak: StreakResult
    status: StreakState
    message: str
    days_until_risk: int = Field(ge=0)


class StreakAnalytics(BaseModel):
    """Consistency figures over the whole activity history."""

    model_config = ConfigDict(frozen=True)

    total_days: int = Field(ge=0)
    active_days: int = Field(ge=0)
    consistency_rate: float = Field(ge=0.0, le=100.0)
    average_streak_length: float = Field(ge=0.0)
    streak_breaks: int = Field(ge=0)
    longest_gap: int = Field(ge=0)


class StreakMilestone(BaseModel):
    """A badge threshold and where the user stands against it."""

    model_config = ConfigDict(frozen=True)

    days: int
    reward: str
    reached: bool
    is_new: bool
