"""Create catalog and audit tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Tables: products, audit_records
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create products and audit_records tables."""
    op.create_table(
        "products",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("stock", sa.Integer, nullable=False),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )

    # product_id has no foreign key: records outlive deleted products
    op.create_table(
        "audit_records",
        sa.Column("seq", sa.BigInteger, sa.Identity(always=False), primary_key=True),
        sa.Column("id", UUID, nullable=False, unique=True),
        sa.Column("action_type", sa.String(16), nullable=False),
        sa.Column("product_id", UUID, nullable=False),
        sa.Column("product_name", sa.Text, nullable=False),
        sa.Column("timestamp", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint(
            "action_type IN ('Added', 'Updated', 'Deleted')",
            name="ck_audit_records_action_type",
        ),
    )

    # Newest-first listing
    op.create_index(
        "idx_audit_records_timestamp_seq",
        "audit_records",
        [sa.text("timestamp DESC"), sa.text("seq DESC")],
    )

    op.create_index("idx_audit_records_product", "audit_records", ["product_id"])


def downgrade() -> None:
    """Drop catalog and audit tables."""
    op.drop_table("audit_records")
    op.drop_table("products")
