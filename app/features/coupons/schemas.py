"""Pydantic schemas for coupon endpoints."""

from datetime import datetime

from pydantic import Field

from app.shared.schemas import CamelModel


class CouponCreate(CamelModel):
    """Body of POST /payment/coupon/new.

    Both fields are optional at the schema level so a missing one is
    reported with the storefront message rather than a generic error.
    """

    code: str | None = Field(None, max_length=50, description="Coupon code.")
    amount: int | None = Field(None, description="Fixed discount amount.")


class CouponUpdate(CamelModel):
    """Body of PUT /payment/coupon/{id}; only provided fields change."""

    code: str | None = Field(None, min_length=1, max_length=50)
    amount: int | None = Field(None, gt=0)


class CouponResponse(CamelModel):
    """Coupon as returned to clients."""

    id: str = Field(..., alias="_id")
    code: str
    amount: int
    created_at: datetime
    updated_at: datetime


class CouponListResponse(CamelModel):
    """Response for GET /payment/coupon/all."""

    success: bool = True
    coupons: list[CouponResponse]


class SingleCouponResponse(CamelModel):
    """Response for GET /payment/coupon/{id}."""

    success: bool = True
    coupon: CouponResponse


class DiscountResponse(CamelModel):
    """Response for GET /payment/discount."""

    success: bool = True
    discount: int
