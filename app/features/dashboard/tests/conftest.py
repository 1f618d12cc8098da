"""Test fixtures for the dashboard module.

Seeds a small store around the reference instant 2024-06-15 12:00 UTC
(``fixed_now``): records this month, last month, earlier this year and
last year.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

import pytest

from app.features.records.models import Order, Product, User


def at(year: int, month: int, day: int, hour: int = 9, minute: int = 0, second: int = 0):
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


@dataclass
class SeededStore:
    products: list[Product]
    users: list[User]
    orders: list[Order]


@pytest.fixture
async def seeded_store(make_product, make_user, make_order) -> SeededStore:
    """Four products, four users and four orders at fixed dates."""
    products = [
        await make_product("Phone", price=300, category="electronics", created_at=at(2024, 6, 2)),
        await make_product("Tablet", price=450, category="electronics", created_at=at(2024, 5, 10)),
        await make_product(
            "Shirt", price=40, stock=0, category="clothing", created_at=at(2024, 6, 5)
        ),
        await make_product("Novel", price=15, category="books", created_at=at(2023, 1, 1)),
    ]
    users = [
        await make_user("Asha", gender="female", dob=date(1995, 6, 15), created_at=at(2024, 6, 1)),
        await make_user(
            "Ravi",
            role="admin",
            gender="male",
            dob=date(2010, 1, 1),
            created_at=at(2024, 5, 20),
        ),
        await make_user("Dev", gender="male", dob=None, created_at=at(2024, 4, 1)),
        await make_user("Meera", gender="female", dob=date(1970, 1, 1), created_at=at(2024, 6, 10)),
    ]
    orders = [
        await make_order(
            total=1180,
            subtotal=1000,
            tax=180,
            shipping_charges=0,
            discount=0,
            status="Processing",
            items=2,
            user=users[0],
            created_at=at(2024, 6, 3),
        ),
        await make_order(
            total=550,
            subtotal=400,
            tax=72,
            shipping_charges=200,
            discount=50,
            status="Shipped",
            user=users[1],
            created_at=at(2024, 5, 31, 23, 59, 59),
        ),
        await make_order(
            total=300,
            subtotal=250,
            tax=45,
            shipping_charges=5,
            status="Delivered",
            created_at=at(2024, 1, 15),
        ),
        await make_order(
            total=1000,
            subtotal=800,
            tax=144,
            shipping_charges=56,
            status="Delivered",
            created_at=at(2023, 12, 31),
        ),
    ]
    return SeededStore(products=products, users=users, orders=orders)
