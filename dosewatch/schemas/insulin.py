"""Insulin on board, risk alert and insulin stats response schemas."""

from datetime import datetime

from pydantic import BaseModel

from dosewatch.core.insulin_on_board import DoseContribution, IOBCurvePoint
from dosewatch.core.risk_alerts import Alert


class IOBResponse(BaseModel):
    """Current insulin on board."""

    total_iob: float
    evaluated_at: datetime
    active_dose_count: int
    doses: list[DoseContribution]
    short_acting_duration_hours: float


class IOBCurveResponse(BaseModel):
    """Projected insulin on board over the coming hours."""

    start: datetime
    hours: float
    step_minutes: int
    points: list[IOBCurvePoint]


class RiskAlertsResponse(BaseModel):
    alerts: list[Alert]
    count: int
    evaluated_at: datetime
