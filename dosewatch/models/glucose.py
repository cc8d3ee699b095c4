"""Glucose reading model.

CGM or fingerstick readings in mg/dL.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from dosewatch.models.base import Base


class GlucoseReading(Base):
    """A single glucose reading for a user."""

    __tablename__ = "glucose_readings"

    __table_args__ = (
        # Latest-reading lookups
        Index("ix_glucose_readings_user_timestamp", "user_id", "reading_timestamp"),
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

    # Glucose value in mg/dL
    value: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    reading_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    trend: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
    )

    source: Mapped[str] = mapped_column(
        String(30),
        default="cgm",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GlucoseReading(user_id={self.user_id}, value={self.value}, timestamp={self.reading_timestamp})>"
