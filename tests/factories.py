"""Shared builders for tests."""

import uuid
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from dosewatch.core.insulin_on_board import InsulinDose

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)


def make_dose(
    amount: float,
    hours_ago: float,
    insulin_class: str = "rapid",
    dose_id: str | None = None,
    now: datetime = NOW,
) -> InsulinDose:
    """Build a dose taken ``hours_ago`` hours before ``now``."""
    return InsulinDose(
        id=dose_id or f"dose-{uuid.uuid4().hex[:8]}",
        amount=amount,
        timestamp=now - timedelta(hours=hours_ago),
        insulin_class=insulin_class,
    )


def scalars_result(rows: list) -> MagicMock:
    """Mock of ``await db.execute(...)`` returning ORM rows via scalars()."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    result.scalar_one_or_none.return_value = rows[0] if rows else None
    return result


def scalar_result(value) -> MagicMock:
    """Mock of ``await db.execute(...)`` for a single scalar value."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    return result
