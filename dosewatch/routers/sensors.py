"""Sensor inventory and wear-life endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dosewatch.core.sensors import SensorError
from dosewatch.core.streaks import InvalidTimezone
from dosewatch.database import get_db
from dosewatch.schemas.sensors import CurrentSensorResponse, InventoryResponse
from dosewatch.services.sensors import get_current_sensor, get_inventory_forecast
from dosewatch.services.streaks import local_today

router = APIRouter(prefix="/api/users/{user_id}/sensors", tags=["sensors"])


@router.get("/inventory", response_model=InventoryResponse)
async def get_inventory(
    user_id: uuid.UUID,
    timezone: str | None = Query(default=None, max_length=64),
    db: AsyncSession = Depends(get_db),
) -> InventoryResponse:
    """Sensor supply, usage rate and reorder reminder."""
    try:
        today = local_today(timezone)
    except InvalidTimezone as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    report = await get_inventory_forecast(db, user_id, today)
    return InventoryResponse(forecast=report.forecast, reminder=report.reminder)


@router.get("/current", response_model=CurrentSensorResponse)
async def get_current(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> CurrentSensorResponse:
    """The sensor currently worn and its expiration status."""
    try:
        current = await get_current_sensor(db, user_id)
    except SensorError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    if current is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No sensor recorded",
        )

    return CurrentSensorResponse(
        serial_number=current.serial_number,
        model=current.model,
        date_added=current.date_added,
        expiration=current.expiration,
        alerts=current.alerts,
    )
