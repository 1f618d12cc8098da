"""Typed query filters shared by the catalog and dashboard services.

Each filter knows how to narrow a SQLAlchemy ``Select`` so call sites never
build loose filter dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from sqlalchemy import Select

from app.features.records.models import Product


@dataclass(frozen=True)
class CreatedBetween:
    """Half-open or closed window over a model's ``created_at`` column.

    Attributes:
        start: Inclusive lower bound.
        end: Upper bound.
        end_inclusive: Whether ``end`` itself is inside the window.
    """

    start: datetime
    end: datetime
    end_inclusive: bool = True

    def apply(self, stmt: Select[Any], model: Any) -> Select[Any]:
        """Restrict ``stmt`` to rows of ``model`` created inside the window."""
        column = model.created_at
        upper = column <= self.end if self.end_inclusive else column < self.end
        return stmt.where(column >= self.start, upper)


@dataclass(frozen=True)
class ProductSearchFilters:
    """Storefront product search criteria.

    Attributes:
        search: Case-insensitive substring of the product name.
        category: Exact category.
        max_price: Inclusive price ceiling.
        sort: Price ordering, ``asc`` or ``desc``; None lists newest first.
    """

    search: str | None = None
    category: str | None = None
    max_price: float | None = None
    sort: Literal["asc", "desc"] | None = None

    def apply(self, stmt: Select[Any]) -> Select[Any]:
        """Apply the where-clauses (not the ordering) to ``stmt``."""
        if self.search:
            stmt = stmt.where(Product.name.ilike(f"%{self.search}%"))
        if self.max_price is not None:
            stmt = stmt.where(Product.price <= self.max_price)
        if self.category:
            stmt = stmt.where(Product.category == self.category)
        return stmt

    def order(self, stmt: Select[Any]) -> Select[Any]:
        """Apply the price ordering, falling back to newest first."""
        if self.sort == "asc":
            return stmt.order_by(Product.price.asc(), Product.id)
        if self.sort == "desc":
            return stmt.order_by(Product.price.desc(), Product.id)
        return stmt.order_by(Product.created_at.desc(), Product.id)
