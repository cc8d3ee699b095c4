"""Create insulin, glucose, activity and sensor tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "insulin_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("units", sa.Float(), nullable=False),
        sa.Column("insulin_class", sa.String(20), nullable=False),
        sa.Column("insulin_name", sa.String(100), nullable=True),
        sa.Column("taken_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("units > 0", name="ck_insulin_logs_units_positive"),
    )
    op.create_index("ix_insulin_logs_user_id", "insulin_logs", ["user_id"])
    op.create_index(
        "ix_insulin_logs_user_taken_at", "insulin_logs", ["user_id", "taken_at"]
    )

    op.create_table(
        "glucose_readings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("reading_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("trend", sa.String(30), nullable=True),
        sa.Column("source", sa.String(30), nullable=False, server_default="cgm"),
    )
    op.create_index("ix_glucose_readings_user_id", "glucose_readings", ["user_id"])
    op.create_index(
        "ix_glucose_readings_user_timestamp",
        "glucose_readings",
        ["user_id", "reading_timestamp"],
    )

    op.create_table(
        "daily_activities",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("activity_date", sa.Date(), nullable=False),
        sa.Column("points_earned", sa.Integer(), nullable=False, server_default="5"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # One row per user, activity type and day
        sa.UniqueConstraint(
            "user_id",
            "activity_type",
            "activity_date",
            name="uq_daily_activities_user_type_date",
        ),
    )
    op.create_index("ix_daily_activities_user_id", "daily_activities", ["user_id"])

    op.create_table(
        "sensors",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("serial_number", sa.String(50), nullable=False),
        sa.Column("model_id", sa.String(50), nullable=True),
        sa.Column("date_added", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_sensors_user_id", "sensors", ["user_id"])
    op.create_index("ix_sensors_user_date_added", "sensors", ["user_id", "date_added"])

    op.create_table(
        "sensor_inventory",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("model_id", sa.String(50), nullable=True),
        sa.Column("model_name", sa.String(100), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("duration_days", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "model_id", name="uq_sensor_inventory_user_model"),
        sa.CheckConstraint("quantity >= 0", name="ck_sensor_inventory_quantity"),
    )
    op.create_index("ix_sensor_inventory_user_id", "sensor_inventory", ["user_id"])

    op.create_table(
        "sensor_orders",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("model_id", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_sensor_orders_user_id", "sensor_orders", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_sensor_orders_user_id")
    op.drop_table("sensor_orders")
    op.drop_index("ix_sensor_inventory_user_id")
    op.drop_table("sensor_inventory")
    op.drop_index("ix_sensors_user_date_added")
    op.drop_index("ix_sensors_user_id")
    op.drop_table("sensors")
    op.drop_index("ix_daily_activities_user_id")
    op.drop_table("daily_activities")
    op.drop_index("ix_glucose_readings_user_timestamp")
    op.drop_index("ix_glucose_readings_user_id")
    op.drop_table("glucose_readings")
    op.drop_index("ix_insulin_logs_user_taken_at")
    op.drop_index("ix_insulin_logs_user_id")
    op.drop_table("insulin_logs")
