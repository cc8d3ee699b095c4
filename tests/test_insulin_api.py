"""Tests for the insulin endpoints."""

import uuid
from datetime import UTC, date, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dosewatch.core.insulin_on_board import (
    InvalidInsulinClass,
    IOBCurvePoint,
    IOBResult,
    compute_iob,
)
from dosewatch.core.insulin_stats import summarize_insulin
from dosewatch.core.risk_alerts import GlucoseReading, classify_risk
from tests.factories import NOW, make_dose, scalars_result


class TestIOBEndpoint:
    """Tests for GET /api/users/{user_id}/insulin/iob."""

    @pytest.mark.asyncio
    async def test_returns_iob(self, client, user_id):
        with patch(
            "dosewatch.routers.insulin.evaluate_iob",
            new_callable=AsyncMock,
        ) as mock_iob:
            mock_iob.return_value = compute_iob([make_dose(6.0, 2, dose_id="d1")], NOW)

            response = await client.get(f"/api/users/{user_id}/insulin/iob")

        assert response.status_code == 200
        data = response.json()
        assert data["total_iob"] == 3.0
        assert data["active_dose_count"] == 1
        assert data["doses"][0]["dose_id"] == "d1"
        assert data["doses"][0]["remaining_amount"] == 3.0
        assert data["short_acting_duration_hours"] == 6.0

    @pytest.mark.asyncio
    async def test_bad_dose_class_is_unprocessable(self, client, user_id):
        with patch(
            "dosewatch.routers.insulin.evaluate_iob",
            new_callable=AsyncMock,
        ) as mock_iob:
            mock_iob.side_effect = InvalidInsulinClass("mystery", dose_id="d9")

            response = await client.get(f"/api/users/{user_id}/insulin/iob")

        assert response.status_code == 422
        assert "mystery" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, client):
        response = await client.get("/api/users/not-a-uuid/insulin/iob")
        assert response.status_code == 422


class TestIOBCurveEndpoint:
    @pytest.mark.asyncio
    async def test_returns_points(self, client, user_id):
        with patch(
            "dosewatch.routers.insulin.get_iob_curve",
            new_callable=AsyncMock,
        ) as mock_curve:
            mock_curve.return_value = [
                IOBCurvePoint(at=NOW, minutes_from_start=0, total_iob=2.0),
                IOBCurvePoint(at=NOW, minutes_from_start=60, total_iob=1.5),
            ]

            response = await client.get(
                f"/api/users/{user_id}/insulin/iob/curve",
                params={"hours": 1, "step_minutes": 60},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["hours"] == 1.0
        assert data["step_minutes"] == 60
        assert [p["total_iob"] for p in data["points"]] == [2.0, 1.5]

    @pytest.mark.asyncio
    async def test_horizon_is_bounded(self, client, user_id):
        response = await client.get(
            f"/api/users/{user_id}/insulin/iob/curve", params={"hours": 48}
        )
        assert response.status_code == 422


class TestRiskAlertsEndpoint:
    @pytest.mark.asyncio
    async def test_returns_tagged_alerts(self, client, user_id):
        alerts = classify_risk(
            IOBResult(total_iob=5.4, evaluated_at=NOW),
            [],
            GlucoseReading(value=64, timestamp=NOW),
        )
        with patch(
            "dosewatch.routers.insulin.evaluate_risk",
            new_callable=AsyncMock,
        ) as mock_risk:
            mock_risk.return_value = alerts

            response = await client.get(f"/api/users/{user_id}/insulin/alerts")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [a["kind"] for a in data["alerts"]] == ["low-glucose-with-iob", "high-iob"]
        assert data["alerts"][0]["severity"] == "critical"
        assert data["alerts"][0]["glucose_value"] == 64

    @pytest.mark.asyncio
    async def test_no_alerts(self, client, user_id):
        with patch(
            "dosewatch.routers.insulin.evaluate_risk",
            new_callable=AsyncMock,
        ) as mock_risk:
            mock_risk.return_value = []

            response = await client.get(f"/api/users/{user_id}/insulin/alerts")

        assert response.status_code == 200
        assert response.json()["alerts"] == []

    @pytest.mark.asyncio
    async def test_severe_low_reading_end_to_end(self, client, user_id, mock_db):
        """A stored 15 mg/dL reading with insulin active gives one critical alert."""
        now = datetime.now(UTC)
        dose_row = MagicMock(
            id=uuid.uuid4(),
            units=2.0,
            taken_at=now - timedelta(hours=1),
            insulin_class="rapid",
        )
        glucose_row = MagicMock(
            value=15, reading_timestamp=now - timedelta(minutes=5), trend=None
        )
        mock_db.execute.side_effect = [
            scalars_result([dose_row]),
            scalars_result([glucose_row]),
        ]

        response = await client.get(f"/api/users/{user_id}/insulin/alerts")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["alerts"][0]["kind"] == "low-glucose-with-iob"
        assert data["alerts"][0]["severity"] == "critical"
        assert data["alerts"][0]["glucose_value"] == 15


class TestInsulinStatsEndpoint:
    @pytest.mark.asyncio
    async def test_returns_stats(self, client, user_id):
        stats = summarize_insulin(
            [make_dose(4.0, 1), make_dose(12.0, 2, "long")], 7, date(2024, 3, 10)
        )
        with patch(
            "dosewatch.routers.insulin.get_insulin_stats",
            new_callable=AsyncMock,
        ) as mock_stats:
            mock_stats.return_value = stats

            response = await client.get(
                f"/api/users/{user_id}/insulin/stats", params={"period": 7}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["totals"]["insulin"] == 16.0
        assert data["percentages"]["basal"] == 75.0
        mock_stats.assert_awaited_once()
        assert mock_stats.await_args.args[2] == 7

    @pytest.mark.asyncio
    async def test_period_must_be_positive(self, client, user_id):
        response = await client.get(
            f"/api/users/{user_id}/insulin/stats", params={"period": 0}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_timezone(self, client, user_id, mock_db):
        response = await client.get(
            f"/api/users/{user_id}/insulin/stats",
            params={"timezone": "Nowhere/Special"},
        )
        assert response.status_code == 422
        assert "Nowhere/Special" in response.json()["detail"]
