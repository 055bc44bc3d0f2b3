"""initial preptrac schema

Revision ID: 4c1d9e7f2a10
Revises:
Create Date: 2026-10-18 09:12:05.114220

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1d9e7f2a10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    # Enum values match Python enum string values
    activitylevel_enum = sa.Enum(
        "sedentary", "moderate", "very_active", "extra_active", name="activitylevel"
    )
    eventtype_enum = sa.Enum(
        "expiration", "maintenance", "rotation", "battery_replacement", name="eventtype"
    )
    consumptiontype_enum = sa.Enum("consumption", "addition", name="consumptiontype")
    sex_enum = sa.Enum("male", "female", name="sex")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("activity_level", activitylevel_enum, nullable=True),
        sa.Column("ammo_goal_rounds", sa.Float(), nullable=True),
        sa.Column("water_goal_gallons", sa.Float(), nullable=True),
        sa.Column("food_goal_days", sa.Float(), nullable=True),
        sa.Column("fuel_goal_gallons", sa.Float(), nullable=True),
        sa.Column("fuel_goal_kwh", sa.Float(), nullable=True),
        sa.Column("fuel_goal_battery_kwh", sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("icon", sa.String(length=50), nullable=True),
        sa.Column("target_quantity", sa.Float(), server_default="0", nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_categories_id"), "categories", ["id"], unique=False)
    op.create_index(op.f("ix_categories_user_id"), "categories", ["user_id"], unique=False)

    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_locations_id"), "locations", ["id"], unique=False)
    op.create_index(op.f("ix_locations_user_id"), "locations", ["user_id"], unique=False)

    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("locations.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("quantity", sa.Float(), server_default="0", nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("maintenance_interval", sa.Integer(), nullable=True),
        sa.Column("last_maintenance_date", sa.Date(), nullable=True),
        sa.Column("rotation_schedule", sa.Integer(), nullable=True),
        sa.Column("last_rotation_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("qr_code", sa.String(length=255), nullable=True),
        sa.Column("min_quantity", sa.Float(), server_default="0", nullable=False),
        sa.Column("target_quantity", sa.Float(), server_default="0", nullable=False),
        sa.Column("calories_per_unit", sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_items_id"), "items", ["id"], unique=False)
    op.create_index(op.f("ix_items_user_id"), "items", ["user_id"], unique=False)
    op.create_index(op.f("ix_items_category_id"), "items", ["category_id"], unique=False)
    op.create_index(op.f("ix_items_location_id"), "items", ["location_id"], unique=False)
    op.create_index(op.f("ix_items_expiration_date"), "items", ["expiration_date"], unique=False)

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "item_id", sa.Integer(), sa.ForeignKey("items.id", ondelete="CASCADE"), nullable=True
        ),
        sa.Column("type", eventtype_enum, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_events_id"), "events", ["id"], unique=False)
    op.create_index(op.f("ix_events_user_id"), "events", ["user_id"], unique=False)
    op.create_index(op.f("ix_events_item_id"), "events", ["item_id"], unique=False)
    op.create_index(op.f("ix_events_type"), "events", ["type"], unique=False)
    op.create_index(op.f("ix_events_date"), "events", ["date"], unique=False)
    op.create_index(op.f("ix_events_completed"), "events", ["completed"], unique=False)

    op.create_table(
        "consumption_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "item_id", sa.Integer(), sa.ForeignKey("items.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("type", consumptiontype_enum, nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_consumption_logs_id"), "consumption_logs", ["id"], unique=False)
    op.create_index(
        op.f("ix_consumption_logs_user_id"), "consumption_logs", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_consumption_logs_item_id"), "consumption_logs", ["item_id"], unique=False
    )
    op.create_index(
        op.f("ix_consumption_logs_created_at"), "consumption_logs", ["created_at"], unique=False
    )

    op.create_table(
        "family_members",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("weight_kg", sa.Float(), nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=False),
        sa.Column("sex", sex_enum, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_family_members_id"), "family_members", ["id"], unique=False)
    op.create_index(
        op.f("ix_family_members_user_id"), "family_members", ["user_id"], unique=False
    )

    op.create_table(
        "notification_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("email_enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("email_expiration_days", sa.Integer(), server_default="30", nullable=False),
        sa.Column("email_maintenance_days", sa.Integer(), server_default="7", nullable=False),
        sa.Column("email_rotation_days", sa.Integer(), server_default="7", nullable=False),
        sa.Column("email_low_inventory", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("in_app_enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("webhook_enabled", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("webhook_url", sa.String(length=1000), nullable=True),
        sa.Column("webhook_secret", sa.String(length=255), nullable=True),
        sa.Column("webhook_expiration_days", sa.Integer(), server_default="7", nullable=False),
        sa.Column("webhook_maintenance_days", sa.Integer(), server_default="3", nullable=False),
        sa.Column("webhook_rotation_days", sa.Integer(), server_default="3", nullable=False),
        sa.Column(
            "webhook_low_inventory", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(
        op.f("ix_notification_settings_id"), "notification_settings", ["id"], unique=False
    )


def downgrade() -> None:
    op.drop_table("notification_settings")
    op.drop_table("family_members")
    op.drop_table("consumption_logs")
    op.drop_table("events")
    op.drop_table("items")
    op.drop_table("locations")
    op.drop_table("categories")
    op.drop_table("users")

    for enum_name in ("sex", "consumptiontype", "eventtype", "activitylevel"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
