"""Initial schema: washers, schedules, availability, washes, credits

Revision ID: a1_initial_schema
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "a1_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

approval_status = postgresql.ENUM("pending", "approved", "rejected", name="approvalstatus", create_type=False)
availability_status = postgresql.ENUM("open", "closed", name="availabilitystatus", create_type=False)
wash_status = postgresql.ENUM("scheduled", "completed", "cancelled", "no_show", name="washstatus", create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    approval_status.create(bind, checkfirst=True)
    availability_status.create(bind, checkfirst=True)
    wash_status.create(bind, checkfirst=True)

    op.create_table(
        "washers",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "washer_default_week",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("washer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("weekday", sa.Integer(), nullable=False),
        sa.Column("is_working", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("zip", sa.String(16), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["washer_id"], ["washers.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("washer_id", "weekday", name="uq_washer_default_week_washer_weekday"),
    )
    op.create_index("ix_washer_default_week_washer_id", "washer_default_week", ["washer_id"])

    op.create_table(
        "washer_schedule_exceptions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("washer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("service_date", sa.Date(), nullable=False),
        sa.Column("is_day_off", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("zip", sa.String(16), nullable=True),
        sa.Column("approval_status", approval_status, nullable=False, server_default="approved"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["washer_id"], ["washers.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("washer_id", "service_date", name="uq_washer_schedule_exceptions_washer_date"),
    )
    op.create_index("ix_washer_schedule_exceptions_washer_id", "washer_schedule_exceptions", ["washer_id"])
    op.create_index("ix_washer_schedule_exceptions_service_date", "washer_schedule_exceptions", ["service_date"])

    op.create_table(
        "washer_availability",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("washer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("service_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("location", sa.String(16), nullable=False),
        sa.Column("status", availability_status, nullable=False, server_default="open"),
        sa.Column("max_bookings", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("current_bookings", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["washer_id"], ["washers.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "current_bookings >= 0 AND current_bookings <= max_bookings",
            name="ck_washer_availability_capacity",
        ),
    )
    op.create_index("ix_washer_availability_washer_id", "washer_availability", ["washer_id"])
    op.create_index("ix_washer_availability_service_date", "washer_availability", ["service_date"])
    op.create_index(
        "ix_washer_availability_slot",
        "washer_availability",
        ["location", "service_date", "start_time", "end_time"],
    )

    op.create_table(
        "washes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sharetribe_user_id", sa.String(255), nullable=False),
        sa.Column("subscription_id", sa.String(255), nullable=True),
        sa.Column("washer_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("status", wash_status, nullable=False, server_default="scheduled"),
        sa.Column("scheduled_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scheduled_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location_id", sa.String(16), nullable=False),
        sa.Column("vehicle_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("late_cancellation_fee_applied", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["washer_id"], ["washers.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_washes_sharetribe_user_id", "washes", ["sharetribe_user_id"])
    op.create_index("ix_washes_washer_id", "washes", ["washer_id"])
    op.create_index("ix_washes_status", "washes", ["status"])
    op.create_index("ix_washes_scheduled_start", "washes", ["scheduled_start"])
    op.create_index("ix_washes_location_id", "washes", ["location_id"])

    op.create_table(
        "subscription_credits",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sharetribe_user_id", sa.String(255), nullable=False),
        sa.Column("credits_remaining", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("plan_label", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_subscription_credits_sharetribe_user_id",
        "subscription_credits",
        ["sharetribe_user_id"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_subscription_credits_sharetribe_user_id", table_name="subscription_credits")
    op.drop_table("subscription_credits")
    op.drop_table("washes")
    op.drop_table("washer_availability")
    op.drop_table("washer_schedule_exceptions")
    op.drop_table("washer_default_week")
    op.drop_table("washers")

    bind = op.get_bind()
    wash_status.drop(bind, checkfirst=True)
    availability_status.drop(bind, checkfirst=True)
    approval_status.drop(bind, checkfirst=True)
