"""CGM sensor models: worn sensors, unused stock and orders."""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from dosewatch.models.base import Base, TimestampMixin


class Sensor(Base, TimestampMixin):
    """A sensor the user has applied."""

    __tablename__ = "sensors"

    __table_args__ = (Index("ix_sensors_user_date_added", "user_id", "date_added"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    serial_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    # Catalogue id such as "dexcom-g7"; NULL when unknown
    model_id: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Sensor(user_id={self.user_id}, serial={self.serial_number}, added={self.date_added})>"


class SensorInventory(Base, TimestampMixin):
    """Unused sensors of one model held by a user."""

    __tablename__ = "sensor_inventory"

    __table_args__ = (
        UniqueConstraint("user_id", "model_id", name="uq_sensor_inventory_user_model"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    model_id: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    model_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Wear-life override; falls back to the catalogue default
    duration_days: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<SensorInventory(user_id={self.user_id}, model={self.model_id}, quantity={self.quantity})>"


class SensorOrder(Base, TimestampMixin):
    """A sensor order placed by a user."""

    __tablename__ = "sensor_orders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    order_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    model_id: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<SensorOrder(user_id={self.user_id}, date={self.order_date}, quantity={self.quantity})>"
