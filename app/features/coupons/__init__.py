"""Discount coupons: CRUD and code lookup."""

from app.features.coupons.routes import router
from app.features.coupons.service import CouponService

__all__ = ["CouponService", "router"]
