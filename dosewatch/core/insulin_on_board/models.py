"""Insulin on board Pydantic models.

Pure data models for IOB evaluation. No database dependencies.
Doses are immutable: a correction is a new dose, never an edit.
"""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class InsulinDose(BaseModel):
    """One administered insulin dose.

    ``insulin_class`` is kept as the normalised string the caller supplied;
    the engine resolves it so an unknown class surfaces as
    ``InvalidInsulinClass`` at evaluation time rather than as a generic
    validation error on load.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    amount: float = Field(gt=0, description="Units of insulin.")
    timestamp: AwareDatetime
    insulin_class: str
    duration_hours: float | None = Field(
        default=None,
        gt=0,
        description="Optional precomputed duration; must match the class.",
    )

    @field_validator("insulin_class", mode="before")
    @classmethod
    def _normalise_class(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class DoseContribution(BaseModel):
    """What is left of one bolus dose at the evaluation instant."""

    model_config = ConfigDict(frozen=True)

    dose_id: str
    amount: float
    remaining_amount: float
    remaining_fraction: float = Field(ge=0.0, le=1.0)
    hours_elapsed: float = Field(ge=0.0)
    hours_remaining: float = Field(ge=0.0)


class IOBResult(BaseModel):
    """Total insulin on board with a per-dose breakdown."""

    model_config = ConfigDict(frozen=True)

    total_iob: float = Field(ge=0.0)
    evaluated_at: datetime
    active_dose_count: int = Field(default=0, ge=0)
    doses: list[DoseContribution] = Field(default_factory=list)


class IOBCurvePoint(BaseModel):
    """Projected IOB at one instant."""

    model_config = ConfigDict(frozen=True)

    at: datetime
    minutes_from_start: int
    total_iob: float = Field(ge=0.0)
