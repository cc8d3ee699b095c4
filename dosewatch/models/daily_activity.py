"""Daily activity model for streak tracking."""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from dosewatch.core.streaks import DEFAULT_ACTIVITY_POINTS
from dosewatch.models.base import Base


class DailyActivity(Base):
    """One day of activity of a given type for a user.

    The unique constraint makes logging idempotent: at most one row per
    user, activity type and calendar date.
    """

    __tablename__ = "daily_activities"

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "activity_type",
            "activity_date",
            name="uq_daily_activities_user_type_date",
        ),
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

    # e.g. "login", "glucose_log", "insulin_log"
    activity_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    # Calendar date in the user's timezone
    activity_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    points_earned: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_ACTIVITY_POINTS,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<DailyActivity(user_id={self.user_id}, "
            f"type={self.activity_type}, date={self.activity_date})>"
        )
