"""Record store ORM models for the storefront.

This module defines the five persisted record types:
- Catalog: Product, Review
- Customers: User
- Sales: Order, Coupon

Every record carries created_at/updated_at from TimestampMixin; the
dashboard buckets records by created_at.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.models import IdMixin, TimestampMixin

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def age_on(dob: datetime.date | None, today: datetime.date) -> int | None:
    """Completed years between ``dob`` and ``today``."""
    if dob is None:
        return None
    before_birthday = (today.month, today.day) < (dob.month, dob.day)
    return today.year - dob.year - int(before_birthday)


class UserRole(str, Enum):
    """Account roles shown in the admin/customer split."""

    ADMIN = "admin"
    USER = "user"


class Gender(str, Enum):
    """Genders tracked for the dashboard user ratio."""

    MALE = "male"
    FEMALE = "female"


class OrderStatus(str, Enum):
    """Fulfilment states of an order.

    State transitions:
    - PROCESSING -> SHIPPED -> DELIVERED
    """

    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


# ============================================================================
# CATALOG
# ============================================================================


class Product(IdMixin, TimestampMixin, Base):
    """Catalog product.

    Attributes:
        id: Primary key (32-char hex).
        name: Display name.
        price: Unit price.
        stock: Units in stock (0 = out of stock).
        category: Lower-cased category name.
        description: Long description.
        photos: Hosted images as ``[{"url": ..., "public_id": ...}]``.
        ratings: Average review rating (1 decimal), recomputed on review changes.
        num_of_reviews: Number of reviews, recomputed on review changes.
    """

    __tablename__ = "product"

    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False))
    stock: Mapped[int] = mapped_column(Integer, default=0)
    category: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    photos: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list)
    ratings: Mapped[float] = mapped_column(Numeric(3, 1, asdecimal=False), default=0)
    num_of_reviews: Mapped[int] = mapped_column(Integer, default=0)

    reviews: Mapped[list[Review]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_positive"),
        CheckConstraint("stock >= 0", name="ck_product_stock_positive"),
        CheckConstraint("ratings >= 0 AND ratings <= 5", name="ck_product_ratings_range"),
    )


class Review(IdMixin, TimestampMixin, Base):
    """Product review left by a user.

    Attributes:
        id: Primary key.
        rating: Star rating (1-5).
        comment: Free-text comment.
        product_id: Reviewed product (FK, cascades on product delete).
        user_id: Author (FK).
    """

    __tablename__ = "review"

    rating: Mapped[int] = mapped_column(Integer)
    comment: Mapped[str] = mapped_column(Text, default="")
    product_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("product.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("app_user.id"), index=True)

    product: Mapped[Product] = relationship(back_populates="reviews")
    user: Mapped[User] = relationship(back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )


# ============================================================================
# CUSTOMERS
# ============================================================================


class User(IdMixin, TimestampMixin, Base):
    """Storefront account.

    Attributes:
        id: Primary key.
        name: Display name (used as the shipping name on payments).
        email: Unique email address.
        photo: Avatar URL.
        role: admin or user.
        gender: male or female.
        dob: Date of birth; ``age`` is derived from it.
    """

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    photo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    role: Mapped[str] = mapped_column(String(10), default=UserRole.USER.value)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    dob: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    reviews: Mapped[list[Review]] = relationship(back_populates="user")
    orders: Mapped[list[Order]] = relationship(back_populates="user")

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="ck_app_user_valid_role"),
        CheckConstraint(
            "gender IS NULL OR gender IN ('male', 'female')",
            name="ck_app_user_valid_gender",
        ),
    )

    @property
    def age(self) -> int | None:
        """Age in whole years today, or None without a date of birth."""
        return age_on(self.dob, datetime.date.today())


# ============================================================================
# SALES
# ============================================================================


class Order(IdMixin, TimestampMixin, Base):
    """Placed order with its price breakdown.

    Attributes:
        id: Primary key.
        user_id: Customer (FK).
        shipping_info: Address, city, state, country, pinCode.
        subtotal: Sum of item prices.
        tax: Tax charged.
        shipping_charges: Shipping charged.
        discount: Coupon discount applied.
        total: Amount paid.
        status: Processing, Shipped or Delivered.
        order_items: ``[{"name", "photo", "price", "quantity", "productId"}]``.
    """

    __tablename__ = "customer_order"

    user_id: Mapped[str | None] = mapped_column(
        String(32), ForeignKey("app_user.id"), index=True, nullable=True
    )
    shipping_info: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict)
    subtotal: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    tax: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    shipping_charges: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    discount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    total: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), default=0)
    status: Mapped[str] = mapped_column(
        String(20), default=OrderStatus.PROCESSING.value, index=True
    )
    order_items: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list)

    user: Mapped[User | None] = relationship(back_populates="orders")

    __table_args__ = (
        Index("ix_customer_order_status_created", "status", "created_at"),
        CheckConstraint(
            "status IN ('Processing', 'Shipped', 'Delivered')",
            name="ck_customer_order_valid_status",
        ),
        CheckConstraint("total >= 0", name="ck_customer_order_total_positive"),
    )


class Coupon(IdMixin, TimestampMixin, Base):
    """Named discount code worth a fixed amount.

    Attributes:
        id: Primary key.
        code: Unique coupon code entered at checkout.
        amount: Fixed discount amount.
    """

    __tablename__ = "coupon"

    code: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    amount: Mapped[int] = mapped_column(Integer)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_coupon_amount_positive"),)
