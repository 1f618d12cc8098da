"""Coupon and discount API routes (mounted under the payment prefix)."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.coupons.schemas import (
    CouponCreate,
    CouponListResponse,
    CouponUpdate,
    DiscountResponse,
    SingleCouponResponse,
)
from app.features.coupons.service import CouponService
from app.shared.schemas import SuccessResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/payment", tags=["coupons"])


@router.get(
    "/discount",
    response_model=DiscountResponse,
    summary="Apply a coupon code",
    description="Fixed discount of a coupon code; 400 `Invalid Coupon Code` when unknown.",
)
async def apply_discount(
    coupon: str | None = Query(None, description="Coupon code."),
    db: AsyncSession = Depends(get_db),
) -> DiscountResponse:
    """Look up the discount for a coupon code."""
    service = CouponService()
    found = await service.find_by_code(db, coupon)
    return DiscountResponse(discount=found.amount)


@router.post(
    "/coupon/new",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a coupon",
)
async def create_coupon(
    request: CouponCreate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """Create a coupon.

    Args:
        request: Code and amount.
        db: Database session.

    Returns:
        Success message naming the coupon.
    """
    service = CouponService()
    coupon = await service.create_coupon(db, request)
    return SuccessResponse(message=f"Coupon {coupon.code} Created Successfully")


@router.get(
    "/coupon/all",
    response_model=CouponListResponse,
    summary="List coupons",
)
async def list_coupons(db: AsyncSession = Depends(get_db)) -> CouponListResponse:
    """List all coupons."""
    service = CouponService()
    return CouponListResponse(coupons=await service.list_coupons(db))


@router.get(
    "/coupon/{coupon_id}",
    response_model=SingleCouponResponse,
    summary="Get a coupon",
)
async def get_coupon(
    coupon_id: str,
    db: AsyncSession = Depends(get_db),
) -> SingleCouponResponse:
    """Get one coupon (404 ``Invalid Coupon ID``)."""
    service = CouponService()
    return SingleCouponResponse(coupon=await service.get_coupon(db, coupon_id))


@router.put(
    "/coupon/{coupon_id}",
    response_model=SuccessResponse,
    summary="Update a coupon",
)
async def update_coupon(
    coupon_id: str,
    request: CouponUpdate,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """Update a coupon's code and/or amount."""
    service = CouponService()
    coupon = await service.update_coupon(db, coupon_id, request)
    return SuccessResponse(message=f"Coupon {coupon.code} Updated Successfully")


@router.delete(
    "/coupon/{coupon_id}",
    response_model=SuccessResponse,
    summary="Delete a coupon",
)
async def delete_coupon(
    coupon_id: str,
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse:
    """Delete a coupon (404 ``Invalid Coupon ID``, nothing deleted)."""
    service = CouponService()
    coupon = await service.delete_coupon(db, coupon_id)
    return SuccessResponse(message=f"Coupon {coupon.code} Deleted Successfully")
