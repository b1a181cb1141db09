# This project was developed with assistance from AI tools.
"""initial schema: users, creator-scoped roles, assignments, owned records

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_username", "users", ["username"])

    op.create_table(
        "roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("role_name", sa.String(100), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("role_name", "created_by_user_id", name="uq_role_name_creator"),
    )
    op.create_index("ix_roles_created_by_user_id", "roles", ["created_by_user_id"])

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("role_id", sa.Uuid(), nullable=False),
        sa.Column(
            "assigned_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
    )
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])

    op.create_table(
        "polygons",
        sa.Column("polygon_id", sa.Uuid(), nullable=False),
        sa.Column("polygon_name", sa.String(200), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("polygon_id"),
    )
    op.create_index("ix_polygons_polygon_name", "polygons", ["polygon_name"])
    op.create_index("ix_polygons_created_by_user_id", "polygons", ["created_by_user_id"])

    op.create_table(
        "polygon_points",
        sa.Column("point_id", sa.Uuid(), nullable=False),
        sa.Column("polygon_id", sa.Uuid(), nullable=False),
        sa.Column("latitude", sa.Numeric(18, 6), nullable=False),
        sa.Column("longitude", sa.Numeric(18, 6), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["polygon_id"], ["polygons.polygon_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("point_id"),
    )
    op.create_index("ix_polygon_points_polygon_id", "polygon_points", ["polygon_id"])

    op.create_table(
        "polygon_entries",
        sa.Column("polygon_entry_id", sa.Uuid(), nullable=False),
        sa.Column("polygon_id", sa.Uuid(), nullable=True),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("value", sa.Numeric(18, 4), nullable=False),
        sa.Column(
            "created_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.PrimaryKeyConstraint("polygon_entry_id"),
    )
    op.create_index("ix_polygon_entries_polygon_id", "polygon_entries", ["polygon_id"])
    op.create_index(
        "ix_polygon_entries_created_by_user_id", "polygon_entries", ["created_by_user_id"],
    )

    op.create_table(
        "grain_parcel_data",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("polygon_id", sa.Uuid(), nullable=False),
        sa.Column("crop_type", sa.String(100), nullable=False),
        sa.Column("parcel_area", sa.Numeric(12, 4), nullable=True),
        sa.Column("irrigation_type", sa.String(100), nullable=True),
        sa.Column("fertilizer_used", sa.Numeric(12, 4), nullable=True),
        sa.Column("pesticide_used", sa.Numeric(12, 4), nullable=True),
        sa.Column("yield", sa.Numeric(12, 4), nullable=True),
        sa.Column("soil_type", sa.String(100), nullable=True),
        sa.Column("season", sa.String(50), nullable=True),
        sa.Column("water_usage", sa.Numeric(12, 4), nullable=True),
        sa.Column(
            "created_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.ForeignKeyConstraint(["polygon_id"], ["polygons.polygon_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_grain_parcel_data_polygon_id", "grain_parcel_data", ["polygon_id"])

    op.create_table(
        "animal_parcel_data",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("polygon_id", sa.Uuid(), nullable=False),
        sa.Column("animal_type", sa.String(100), nullable=False),
        sa.Column("number_of_animals", sa.Integer(), nullable=False),
        sa.Column("feed_type", sa.String(100), nullable=False),
        sa.Column("water_consumption", sa.Numeric(12, 4), nullable=False),
        sa.Column("veterinary_visits", sa.Integer(), nullable=False),
        sa.Column("waste_management", sa.Text(), nullable=False),
        sa.Column(
            "created_date", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False,
        ),
        sa.ForeignKeyConstraint(["polygon_id"], ["polygons.polygon_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_animal_parcel_data_polygon_id", "animal_parcel_data", ["polygon_id"])


def downgrade() -> None:
    op.drop_table("animal_parcel_data")
    op.drop_table("grain_parcel_data")
    op.drop_table("polygon_entries")
    op.drop_table("polygon_points")
    op.drop_table("polygons")
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_table("users")
