"""Pydantic schemas for product review endpoints."""

from datetime import datetime

from pydantic import Field

from app.shared.schemas import CamelModel


class ReviewCreate(CamelModel):
    """Body of POST /product/review/new/{id}."""

    rating: int = Field(..., ge=1, le=5, description="Star rating (1-5).")
    comment: str = Field("", max_length=2000)


class ReviewAuthor(CamelModel):
    """Review author, reduced to id and name."""

    id: str = Field(..., alias="_id")
    name: str


class ReviewResponse(CamelModel):
    """Review as returned to clients."""

    id: str = Field(..., alias="_id")
    rating: int
    comment: str
    product: str = Field(..., description="Product id.")
    user: ReviewAuthor
    created_at: datetime
    updated_at: datetime


class ReviewListResponse(CamelModel):
    """Response for GET /product/reviews/{id}."""

    success: bool = True
    reviews: list[ReviewResponse]
