"""Pydantic schemas for catalog endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.shared.schemas import CamelModel

SortOrder = Literal["asc", "desc"]

# Column widths of product.name and product.category
NAME_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 100


class PhotoSchema(CamelModel):
    """Hosted product photo."""

    url: str
    public_id: str = Field(..., alias="public_id")


class ProductResponse(CamelModel):
    """Product as returned to clients."""

    id: str = Field(..., alias="_id")
    name: str
    price: float
    stock: int
    category: str
    description: str
    photos: list[PhotoSchema]
    ratings: float
    num_of_reviews: int
    created_at: datetime
    updated_at: datetime


class ProductListResponse(CamelModel):
    """Response for the latest and admin product listings."""

    success: bool = True
    products: list[ProductResponse]


class ProductSearchResponse(CamelModel):
    """One page of storefront search results."""

    success: bool = True
    products: list[ProductResponse]
    total_page: int = Field(..., ge=0, description="Pages available for the same filters.")


class CategoryListResponse(CamelModel):
    """Distinct product categories."""

    success: bool = True
    categories: list[str]


class SingleProductResponse(CamelModel):
    """Response for GET /product/{id}."""

    success: bool = True
    product: ProductResponse


class ProductFields(CamelModel):
    """Scalar product fields submitted with a create or update form.

    Every field is optional here; create requires them at the form layer.
    """

    name: str | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    category: str | None = Field(None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    description: str | None = None
