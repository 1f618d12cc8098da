"""Record store models for the storefront.

- Catalog: Product, Review
- Customers: User
- Sales: Order, Coupon
"""

from app.features.records.models import (
    Coupon,
    Gender,
    Order,
    OrderStatus,
    Product,
    Review,
    User,
    UserRole,
    age_on,
)

__all__ = [
    "Coupon",
    "Gender",
    "Order",
    "OrderStatus",
    "Product",
    "Review",
    "User",
    "UserRole",
    "age_on",
]
