"""Initial schema: users, listings, match_requests, matches

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "listings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(100), nullable=False),
        sa.Column("brand", sa.String(100), nullable=True),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column("condition", sa.String(20), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("region", sa.String(100), nullable=False),
        sa.Column("seller_id", sa.String(36), nullable=False),
        sa.Column("details", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("price >= 0", name="ck_listings_price_non_negative"),
        sa.ForeignKeyConstraint(["seller_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_listings_name", "listings", ["name"], unique=False)
    op.create_index("ix_listings_code", "listings", ["code"], unique=False)
    op.create_index("ix_listings_seller_id", "listings", ["seller_id"], unique=False)

    for table in ("match_requests", "matches"):
        status_column = (
            sa.Column("status", sa.String(20), nullable=False, server_default="pending")
            if table == "match_requests"
            else sa.Column("status", sa.String(32), nullable=False)
        )
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("buyer_id", sa.String(36), nullable=False),
            sa.Column("listing_id", sa.Integer(), nullable=False),
            status_column,
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
            sa.ForeignKeyConstraint(["buyer_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["listing_id"], ["listings.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("buyer_id", "listing_id", name=f"uq_{table}_buyer_listing"),
        )
        op.create_index(f"ix_{table}_buyer_id", table, ["buyer_id"], unique=False)
        op.create_index(f"ix_{table}_listing_id", table, ["listing_id"], unique=False)


def downgrade() -> None:
    for table in ("matches", "match_requests"):
        op.drop_index(f"ix_{table}_listing_id", table)
        op.drop_index(f"ix_{table}_buyer_id", table)
        op.drop_table(table)
    op.drop_index("ix_listings_seller_id", "listings")
    op.drop_index("ix_listings_code", "listings")
    op.drop_index("ix_listings_name", "listings")
    op.drop_table("listings")
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
