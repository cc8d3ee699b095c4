"""Risk alert Pydantic models.

``Alert`` is a closed union tagged on ``kind``. Each variant carries only
the fields that matter for its condition, so consumers can match on the
kind exhaustively without checking which keys happen to be present.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, TypeAdapter

from dosewatch.core.risk_alerts.enums import AlertKind, AlertSeverity


class GlucoseReading(BaseModel):
    """A single CGM or meter reading."""

    model_config = ConfigDict(frozen=True)

    # Severe lows and highs are kept as reported, no clinical range
    value: int = Field(ge=0, description="Glucose in mg/dL.")
    timestamp: AwareDatetime
    trend: str | None = None


class _AlertBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    severity: AlertSeverity
    message: str = Field(min_length=1)
    related_iob: float = Field(ge=0.0)
    triggered_at: datetime


class HighIOBAlert(_AlertBase):
    """IOB at or above the high band."""

    kind: Literal[AlertKind.high_iob] = AlertKind.high_iob


class ModerateIOBAlert(_AlertBase):
    """IOB inside the moderate band."""

    kind: Literal[AlertKind.moderate_iob] = AlertKind.moderate_iob


class StackingAlert(_AlertBase):
    """Several bolus doses inside a short window."""

    kind: Literal[AlertKind.stacking] = AlertKind.stacking
    recent_dose_count: int = Field(ge=0)
    window_hours: float = Field(gt=0)


class LowGlucoseWithIOBAlert(_AlertBase):
    """Hypoglycemia while insulin is still active."""

    kind: Literal[AlertKind.low_glucose_with_iob] = AlertKind.low_glucose_with_iob
    glucose_value: int


Alert = Annotated[
    HighIOBAlert | ModerateIOBAlert | StackingAlert | LowGlucoseWithIOBAlert,
    Field(discriminator="kind"),
]

# For loading alerts back from JSON (API clients, stored payloads).
alert_adapter: TypeAdapter[Alert] = TypeAdapter(Alert)
