"""Service layer for discount coupons."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationMissingError,
)
from app.core.logging import get_logger
from app.features.coupons.schemas import CouponCreate, CouponResponse, CouponUpdate
from app.features.records.models import Coupon

logger = get_logger(__name__)


class CouponService:
    """Service for coupon CRUD and discount lookup."""

    async def _get_or_404(self, db: AsyncSession, coupon_id: str) -> Coupon:
        coupon = await db.get(Coupon, coupon_id)
        if coupon is None:
            raise NotFoundError("Invalid Coupon ID", details={"coupon_id": coupon_id})
        return coupon

    async def _flush_unique(self, db: AsyncSession, code: str) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Coupon {code} already exists",
                details={"code": code},
            ) from e

    async def find_by_code(self, db: AsyncSession, code: str | None) -> Coupon:
        """Look up a coupon by its code.

        Raises:
            BadRequestError: If the code is empty or unknown.
        """
        if not code:
            raise BadRequestError("Invalid Coupon Code")
        result = await db.execute(select(Coupon).where(Coupon.code == code))
        coupon = result.scalar_one_or_none()
        if coupon is None:
            raise BadRequestError("Invalid Coupon Code", details={"code": code})
        return coupon

    async def create_coupon(self, db: AsyncSession, data: CouponCreate) -> Coupon:
        """Create a coupon.

        Raises:
            ValidationMissingError: If code or amount is missing (or amount is 0).
            ConflictError: If the code already exists.
        """
        if not data.code or not data.amount:
            raise ValidationMissingError("Please enter both coupon and amount")
        if data.amount < 0:
            raise BadRequestError(
                "Coupon amount must be positive",
                details={"amount": data.amount},
            )

        coupon = Coupon(code=data.code, amount=data.amount)
        db.add(coupon)
        await self._flush_unique(db, data.code)

        logger.info(
            "coupons.created",
            coupon_id=coupon.id,
            code=coupon.code,
            amount=coupon.amount,
        )
        return coupon

    async def list_coupons(self, db: AsyncSession) -> list[CouponResponse]:
        """All coupons, newest first."""
        stmt = select(Coupon).order_by(Coupon.created_at.desc(), Coupon.id)
        result = await db.execute(stmt)
        return [CouponResponse.model_validate(c) for c in result.scalars().all()]

    async def get_coupon(self, db: AsyncSession, coupon_id: str) -> CouponResponse:
        """Get one coupon.

        Raises:
            NotFoundError: If the coupon does not exist.
        """
        return CouponResponse.model_validate(await self._get_or_404(db, coupon_id))

    async def update_coupon(self, db: AsyncSession, coupon_id: str, data: CouponUpdate) -> Coupon:
        """Update provided coupon fields.

        Raises:
            NotFoundError: If the coupon does not exist.
            ConflictError: If the new code is taken.
        """
        coupon = await self._get_or_404(db, coupon_id)
        if data.code:
            coupon.code = data.code
        if data.amount:
            coupon.amount = data.amount
        await self._flush_unique(db, coupon.code)

        logger.info("coupons.updated", coupon_id=coupon_id, code=coupon.code)
        return coupon

    async def delete_coupon(self, db: AsyncSession, coupon_id: str) -> Coupon:
        """Delete a coupon.

        Raises:
            NotFoundError: If the coupon does not exist; nothing is deleted.
        """
        coupon = await self._get_or_404(db, coupon_id)
        await db.delete(coupon)
        await db.flush()

        logger.info("coupons.deleted", coupon_id=coupon_id, code=coupon.code)
        return coupon
