"""Tests for the typed query filters."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import select

from app.features.records.filters import CreatedBetween, ProductSearchFilters
from app.features.records.models import Product

pytestmark = pytest.mark.integration


async def names(session, stmt) -> list[str]:
    result = await session.execute(stmt)
    return [p.name for p in result.scalars().all()]


@pytest.fixture
async def catalog(make_product):
    await make_product("Gaming Laptop", price=1500, category="electronics")
    await make_product("Laptop Bag", price=40, category="accessories")
    await make_product("Desk Lamp", price=25, category="home")
    await make_product("Phone", price=700, category="electronics")


class TestProductSearchFilters:
    """Tests for ProductSearchFilters."""

    async def test_search_is_case_insensitive(self, db_session, catalog):
        """Name search matches substrings in any case."""
        filters = ProductSearchFilters(search="laptop", sort="asc")
        stmt = filters.order(filters.apply(select(Product)))

        assert await names(db_session, stmt) == ["Laptop Bag", "Gaming Laptop"]

    async def test_price_ceiling_inclusive(self, db_session, catalog):
        """The price filter keeps products at exactly the ceiling."""
        filters = ProductSearchFilters(max_price=700, sort="desc")
        stmt = filters.order(filters.apply(select(Product)))

        assert await names(db_session, stmt) == ["Phone", "Laptop Bag", "Desk Lamp"]

    async def test_category_exact(self, db_session, catalog):
        """Category must match exactly."""
        filters = ProductSearchFilters(category="electronics", sort="asc")
        stmt = filters.order(filters.apply(select(Product)))

        assert await names(db_session, stmt) == ["Phone", "Gaming Laptop"]

    async def test_filters_combine(self, db_session, catalog):
        """All criteria apply together."""
        filters = ProductSearchFilters(search="lap", category="electronics", max_price=1000)
        stmt = filters.apply(select(Product))

        assert await names(db_session, stmt) == []

    async def test_default_order_newest_first(self, db_session, catalog):
        """Without a sort, newest products come first."""
        filters = ProductSearchFilters()
        stmt = filters.order(filters.apply(select(Product)))

        assert (await names(db_session, stmt))[0] == "Phone"


class TestCreatedBetween:
    """Tests for CreatedBetween."""

    @pytest.fixture
    async def dated(self, make_product):
        await make_product("May", created_at=datetime(2024, 5, 31, 23, 59, tzinfo=UTC))
        await make_product("June", created_at=datetime(2024, 6, 1, tzinfo=UTC))

    async def test_half_open_excludes_end(self, db_session, dated):
        """An exclusive end leaves out records at the boundary."""
        window = CreatedBetween(
            datetime(2024, 5, 1, tzinfo=UTC),
            datetime(2024, 6, 1, tzinfo=UTC),
            end_inclusive=False,
        )
        stmt = window.apply(select(Product), Product)

        assert await names(db_session, stmt) == ["May"]

    async def test_closed_includes_end(self, db_session, dated):
        """An inclusive end keeps records at the boundary."""
        window = CreatedBetween(datetime(2024, 6, 1, tzinfo=UTC), datetime(2024, 6, 1, tzinfo=UTC))
        stmt = window.apply(select(Product), Product)

        assert await names(db_session, stmt) == ["June"]
