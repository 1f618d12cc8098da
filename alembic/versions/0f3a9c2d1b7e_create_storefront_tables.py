"""create_storefront_tables

Revision ID: 0f3a9c2d1b7e
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0f3a9c2d1b7e"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    """created_at/updated_at columns (from TimestampMixin)."""
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Apply migration - create product, app_user, review, customer_order and coupon."""
    # Create product table
    op.create_table(
        "product",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("photos", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        # Review aggregates
        sa.Column("ratings", sa.Numeric(precision=3, scale=1), nullable=False),
        sa.Column("num_of_reviews", sa.Integer(), nullable=False),
        *_timestamps(),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price >= 0", name="ck_product_price_positive"),
        sa.CheckConstraint("stock >= 0", name="ck_product_stock_positive"),
        sa.CheckConstraint("ratings >= 0 AND ratings <= 5", name="ck_product_ratings_range"),
    )
    op.create_index(op.f("ix_product_category"), "product", ["category"], unique=False)
    op.create_index(op.f("ix_product_created_at"), "product", ["created_at"], unique=False)

    # Create app_user table
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("photo", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=10), nullable=False, server_default="user"),
        sa.Column("gender", sa.String(length=10), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        *_timestamps(),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('admin', 'user')", name="ck_app_user_valid_role"),
        sa.CheckConstraint(
            "gender IS NULL OR gender IN ('male', 'female')",
            name="ck_app_user_valid_gender",
        ),
    )
    op.create_index(op.f("ix_app_user_email"), "app_user", ["email"], unique=True)
    op.create_index(op.f("ix_app_user_created_at"), "app_user", ["created_at"], unique=False)

    # Create review table
    op.create_table(
        "review",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("product_id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=False),
        *_timestamps(),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )
    op.create_index(op.f("ix_review_product_id"), "review", ["product_id"], unique=False)
    op.create_index(op.f("ix_review_user_id"), "review", ["user_id"], unique=False)
    op.create_index(op.f("ix_review_created_at"), "review", ["created_at"], unique=False)

    # Create customer_order table
    op.create_table(
        "customer_order",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=32), nullable=True),
        sa.Column("shipping_info", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        # Price breakdown
        sa.Column("subtotal", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("tax", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("shipping_charges", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("discount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("total", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Processing"),
        sa.Column("order_items", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        *_timestamps(),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.CheckConstraint(
            "status IN ('Processing', 'Shipped', 'Delivered')",
            name="ck_customer_order_valid_status",
        ),
        sa.CheckConstraint("total >= 0", name="ck_customer_order_total_positive"),
    )
    op.create_index(
        op.f("ix_customer_order_user_id"), "customer_order", ["user_id"], unique=False
    )
    op.create_index(op.f("ix_customer_order_status"), "customer_order", ["status"], unique=False)
    op.create_index(
        op.f("ix_customer_order_created_at"), "customer_order", ["created_at"], unique=False
    )
    op.create_index(
        "ix_customer_order_status_created",
        "customer_order",
        ["status", "created_at"],
        unique=False,
    )

    # Create coupon table
    op.create_table(
        "coupon",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        *_timestamps(),
        # Constraints
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_coupon_amount_positive"),
    )
    op.create_index(op.f("ix_coupon_code"), "coupon", ["code"], unique=True)
    op.create_index(op.f("ix_coupon_created_at"), "coupon", ["created_at"], unique=False)


def downgrade() -> None:
    """Revert migration - drop all storefront tables."""
    op.drop_index(op.f("ix_coupon_created_at"), table_name="coupon")
    op.drop_index(op.f("ix_coupon_code"), table_name="coupon")
    op.drop_table("coupon")

    op.drop_index("ix_customer_order_status_created", table_name="customer_order")
    op.drop_index(op.f("ix_customer_order_created_at"), table_name="customer_order")
    op.drop_index(op.f("ix_customer_order_status"), table_name="customer_order")
    op.drop_index(op.f("ix_customer_order_user_id"), table_name="customer_order")
    op.drop_table("customer_order")

    op.drop_index(op.f("ix_review_created_at"), table_name="review")
    op.drop_index(op.f("ix_review_user_id"), table_name="review")
    op.drop_index(op.f("ix_review_product_id"), table_name="review")
    op.drop_table("review")

    op.drop_index(op.f("ix_app_user_created_at"), table_name="app_user")
    op.drop_index(op.f("ix_app_user_email"), table_name="app_user")
    op.drop_table("app_user")

    op.drop_index(op.f("ix_product_created_at"), table_name="product")
    op.drop_index(op.f("ix_product_category"), table_name="product")
    op.drop_table("product")
