"""create supply chain record and upload log tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def _owned_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _string_array(name: str) -> sa.Column:
    return sa.Column(name, postgresql.ARRAY(sa.String()), nullable=False)


def upgrade() -> None:
    op.create_table(
        "products",
        *_owned_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("supplier", sa.String(length=100), nullable=False),
        sa.Column("origin", sa.String(length=100), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("unit_cost", sa.Float(), nullable=False),
        sa.Column("lead_time", sa.Float(), nullable=False),
        sa.Column("min_order_quantity", sa.Float(), nullable=False),
        sa.Column("max_order_quantity", sa.Float(), nullable=False),
        sa.Column("risk_level", sa.String(length=16), nullable=False),
        _string_array("certifications"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_user_id", "products", ["user_id"], unique=False)

    op.create_table(
        "suppliers",
        *_owned_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("country", sa.String(length=255), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("risk_level", sa.String(length=16), nullable=False),
        _string_array("certifications"),
        sa.Column("lead_time", sa.Float(), nullable=False),
        sa.Column("payment_terms", sa.String(length=120), nullable=False),
        sa.Column("minimum_order", sa.Float(), nullable=False),
        sa.Column("maximum_order", sa.Float(), nullable=False),
        _string_array("specialties"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_suppliers_user_id", "suppliers", ["user_id"], unique=False)

    op.create_table(
        "factories",
        *_owned_columns(),
        sa.Column("factory_id", sa.String(length=50), nullable=False),
        sa.Column("factory_name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=False),
        sa.Column("capacity", sa.Float(), nullable=False),
        sa.Column("utilization", sa.Float(), nullable=False),
        sa.Column("lead_time", sa.Float(), nullable=False),
        sa.Column("quality_rating", sa.Float(), nullable=False),
        _string_array("certifications"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_factories_user_id", "factories", ["user_id"], unique=False)

    op.create_table(
        "warehouses",
        *_owned_columns(),
        sa.Column("warehouse_id", sa.String(length=50), nullable=False),
        sa.Column("warehouse_name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=False),
        sa.Column("capacity", sa.Float(), nullable=False),
        sa.Column("current_stock", sa.Float(), nullable=False),
        sa.Column("storage_cost", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_warehouses_user_id", "warehouses", ["user_id"], unique=False)

    op.create_table(
        "retailers",
        *_owned_columns(),
        sa.Column("retailer_id", sa.String(length=50), nullable=False),
        sa.Column("retailer_name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=False),
        sa.Column("market_segment", sa.String(length=100), nullable=False),
        sa.Column("sales_volume", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_retailers_user_id", "retailers", ["user_id"], unique=False)

    op.create_table(
        "shipments",
        *_owned_columns(),
        sa.Column("shipment_id", sa.String(length=50), nullable=False),
        sa.Column("origin", sa.String(length=100), nullable=False),
        sa.Column("destination", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("expected_delivery", sa.Date(), nullable=False),
        sa.Column("actual_delivery", sa.Date(), nullable=True),
        sa.Column("tracking_number", sa.String(length=50), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("total_value", sa.Float(), nullable=False),
        sa.Column("shipping_cost", sa.Float(), nullable=True),
        sa.Column("shipping_method", sa.String(length=16), nullable=False),
        sa.Column("carrier", sa.String(length=100), nullable=False),
        sa.Column("current_location", sa.String(length=200), nullable=True),
        _string_array("risk_factors"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shipments_user_id", "shipments", ["user_id"], unique=False)
    op.create_index("ix_shipments_user_id_status", "shipments", ["user_id", "status"], unique=False)

    op.create_table(
        "upload_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("schema_type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("mapping_source", sa.String(length=16), nullable=True),
        sa.Column("rows_seen", sa.Integer(), nullable=False),
        sa.Column("records_accepted", sa.Integer(), nullable=False),
        sa.Column("records_rejected", sa.Integer(), nullable=False),
        sa.Column("records_persisted", sa.Integer(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("rejections_json", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_upload_logs_user_id_created_at",
        "upload_logs",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_upload_logs_user_id_created_at", table_name="upload_logs")
    op.drop_table("upload_logs")
    op.drop_index("ix_shipments_user_id_status", table_name="shipments")
    for table_name in ("shipments", "retailers", "warehouses", "factories", "suppliers", "products"):
        op.drop_index(f"ix_{table_name}_user_id", table_name=table_name)
        op.drop_table(table_name)
