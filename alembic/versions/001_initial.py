"""Initial migration: properties and contact inquiries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── properties ──
    op.create_table(
        "properties",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(500), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column("features", sa.JSON, nullable=True),
        sa.Column("title_en", sa.String(500), nullable=True),
        sa.Column("title_ar", sa.String(500), nullable=True),
        sa.Column("description_en", sa.Text, nullable=True),
        sa.Column("description_ar", sa.Text, nullable=True),
        sa.Column("location_en", sa.String(500), nullable=True),
        sa.Column("location_ar", sa.String(500), nullable=True),
        sa.Column("features_en", sa.JSON, nullable=True),
        sa.Column("features_ar", sa.JSON, nullable=True),
        sa.Column("property_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="for_sale"),
        sa.Column("governorate", sa.String(50), nullable=True),
        sa.Column("area", sa.Float, nullable=True),
        sa.Column("land_area", sa.Float, nullable=True),
        sa.Column("building_area", sa.Float, nullable=True),
        sa.Column("total_area", sa.Float, nullable=True),
        sa.Column("bedrooms", sa.Integer, nullable=True),
        sa.Column("bathrooms", sa.Integer, nullable=True),
        sa.Column("floor", sa.Integer, nullable=True),
        sa.Column("floors", sa.Integer, nullable=True),
        sa.Column("parking", sa.Integer, nullable=True),
        sa.Column("apartments", sa.Integer, nullable=True),
        sa.Column("rooms", sa.Integer, nullable=True),
        sa.Column("studios", sa.Integer, nullable=True),
        sa.Column("view", sa.String(255), nullable=True),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("contact_for_price", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("images", sa.JSON, nullable=True),
        sa.Column("videos", sa.JSON, nullable=True),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_properties_property_type", "properties", ["property_type"])
    op.create_index("ix_properties_status", "properties", ["status"])
    op.create_index("ix_properties_price", "properties", ["price"])
    op.create_index("ix_properties_is_featured", "properties", ["is_featured"])
    op.create_index("ix_properties_created_at", "properties", ["created_at"])

    # ── contact_inquiries ──
    op.create_table(
        "contact_inquiries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("property_interest", sa.String(255), nullable=True),
        sa.Column("language", sa.String(2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_contact_inquiries_created_at", "contact_inquiries", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_contact_inquiries_created_at")
    op.drop_table("contact_inquiries")
    op.drop_index("ix_properties_created_at")
    op.drop_index("ix_properties_is_featured")
    op.drop_index("ix_properties_price")
    op.drop_index("ix_properties_status")
    op.drop_index("ix_properties_property_type")
    op.drop_table("properties")
