"""Insulin dose log model.

Rows are append-only: a correction is logged as a new dose.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from dosewatch.models.base import Base, TimestampMixin


class InsulinLog(Base, TimestampMixin):
    """One administered insulin dose."""

    __tablename__ = "insulin_logs"

    __table_args__ = (
        Index("ix_insulin_logs_user_taken_at", "user_id", "taken_at"),
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

    # Units of insulin
    units: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    # rapid / short / intermediate / long, or a recognised alias
    insulin_class: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    # Brand name, e.g. "Humalog"
    insulin_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    taken_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<InsulinLog(user_id={self.user_id}, units={self.units}, "
            f"class={self.insulin_class}, taken_at={self.taken_at})>"
        )
