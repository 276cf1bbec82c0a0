"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the campus events backend:
users, event_types, events, event_registrations.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("student_id", sa.String(50), nullable=True, unique=True),
        sa.Column("course", sa.String(100), nullable=True),
        sa.Column("year", sa.Integer, nullable=True),
        sa.Column("role", sa.String(10), nullable=False, server_default="STUDENT"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # --- event_types ---
    op.create_table(
        "event_types",
        sa.Column("event_type_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("slug", sa.String(100), nullable=True),
        sa.Column("icon_class", sa.String(50), nullable=True),
        sa.Column("color_hex", sa.String(7), nullable=True),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("requires_registration", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("has_capacity_limit", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("default_duration_minutes", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("event_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_attendees", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("date_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(200), nullable=True),
        sa.Column("event_type_id", sa.String(36), sa.ForeignKey("event_types.event_type_id"), nullable=False),
        sa.Column("creator_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("max_attendees", sa.Integer, nullable=True),
        sa.Column("current_attendees", sa.Integer, nullable=False, server_default="0"),
        sa.Column("waitlist_enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("featured_image", sa.String(500), nullable=True),
        sa.Column("featured_image_alt", sa.String(200), nullable=True),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column("meeting_link", sa.String(500), nullable=True),
        sa.Column("requirements", sa.String(1000), nullable=True),
        sa.Column("agenda", sa.Text, nullable=True),
        sa.Column("registration_required", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("registration_opens_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_closes_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_cancelled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("cancellation_reason", sa.String(500), nullable=True),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("share_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_slug", "events", ["slug"])
    op.create_index("ix_events_published_date", "events", ["is_published", "date_time"])

    # --- event_registrations ---
    op.create_table(
        "event_registrations",
        sa.Column("registration_id", sa.String(36), primary_key=True),
        sa.Column(
            "event_id", sa.String(36),
            sa.ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "user_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("attendance_status", sa.String(10), nullable=False, server_default="REGISTERED"),
        sa.Column("is_waitlisted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("waitlist_position", sa.Integer, nullable=True),
        sa.Column("special_requirements", sa.String(500), nullable=True),
        sa.Column("notes", sa.String(1000), nullable=True),
        sa.Column("reminder_sent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("confirmation_sent", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("checked_in", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("check_in_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("checked_in_by", sa.String(36), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("is_cancelled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancellation_reason", sa.String(500), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_event_registrations_event_id", "event_registrations", ["event_id"])
    op.create_index("ix_event_registrations_user_id", "event_registrations", ["user_id"])
    op.create_index(
        "uq_event_registrations_active",
        "event_registrations",
        ["event_id", "user_id"],
        unique=True,
        sqlite_where=sa.text("is_cancelled = 0"),
        postgresql_where=sa.text("is_cancelled = false"),
    )


def downgrade() -> None:
    op.drop_index("uq_event_registrations_active", table_name="event_registrations")
    op.drop_table("event_registrations")
    op.drop_table("events")
    op.drop_table("event_types")
    op.drop_table("users")
