"""Service layer for checkout payments.

Prices are always taken from the catalog, never from the client cart.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.exceptions import UnauthorizedError, ValidationMissingError
from app.core.logging import get_logger
from app.features.coupons.service import CouponService
from app.features.payments.gateway import PaymentGateway
from app.features.payments.schemas import CartItem, PaymentCreate, ShippingInfo
from app.features.records.models import Product, User

logger = get_logger(__name__)


@dataclass(frozen=True)
class PriceBreakdown:
    """Checkout totals.

    Attributes:
        subtotal: Sum of catalog price times quantity.
        tax: Tax on the subtotal.
        shipping: Flat shipping charge, waived above the threshold.
        discount: Coupon discount.
        total: Whole amount charged (floored).
    """

    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: int

    @property
    def amount_minor(self) -> int:
        """Total in the currency's smallest unit (paise, cents)."""
        return self.total * 100


def price_cart(
    items: Sequence[CartItem],
    prices: Mapping[str, float],
    discount: float,
    settings: Settings,
) -> PriceBreakdown:
    """Price a cart against catalog prices.

    Items whose product is not in ``prices`` contribute nothing. When a
    product appears on several lines, its first line's quantity is used.

    Args:
        items: Cart lines.
        prices: Catalog price per product id.
        discount: Coupon discount.
        settings: Tax rate and shipping rules.

    Returns:
        PriceBreakdown for the cart.
    """
    quantities: dict[str, int] = {}
    for item in items:
        quantities.setdefault(item.product_id, item.quantity)

    subtotal = sum(price * quantities[pid] for pid, price in prices.items() if pid in quantities)
    tax = subtotal * settings.tax_rate
    shipping = 0 if subtotal > settings.free_shipping_threshold else settings.shipping_charge
    total = math.floor(subtotal + tax + shipping - discount)

    return PriceBreakdown(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        discount=discount,
        total=total,
    )


def shipping_details(user: User, info: ShippingInfo) -> dict[str, object]:
    """Shipping block sent to the payment gateway."""
    return {
        "name": user.name,
        "address": {
            "line1": info.address,
            "postal_code": str(info.pin_code),
            "city": info.city,
            "state": info.state,
            "country": info.country,
        },
    }


class PaymentService:
    """Service creating payment intents for carts.

    Args:
        gateway: Payment provider.
    """

    def __init__(self, gateway: PaymentGateway) -> None:
        self.settings = get_settings()
        self.gateway = gateway

    async def create_payment_intent(
        self,
        db: AsyncSession,
        user_id: str | None,
        data: PaymentCreate,
    ) -> str:
        """Price the cart and create a payment intent for it.

        Args:
            db: Database session.
            user_id: Paying user.
            data: Cart, shipping info and optional coupon code.

        Returns:
            Client secret of the payment intent.

        Raises:
            UnauthorizedError: If the user is missing or unknown.
            ValidationMissingError: If the cart or shipping info is missing.
            BadRequestError: If the coupon code is unknown.
            UpstreamFailureError: If the gateway fails.
        """
        if not user_id:
            raise UnauthorizedError("Please login first")
        user = await db.get(User, user_id)
        if user is None:
            raise UnauthorizedError(
                "Invalid user ID or not logged in",
                details={"user_id": user_id},
            )

        if not data.items:
            raise ValidationMissingError("Please add items to cart")
        if data.shipping_info is None:
            raise ValidationMissingError("Please provide shipping info")

        discount = 0
        if data.coupon:
            coupon = await CouponService().find_by_code(db, data.coupon)
            discount = coupon.amount

        product_ids = {item.product_id for item in data.items}
        result = await db.execute(
            select(Product.id, Product.price).where(Product.id.in_(product_ids))
        )
        prices = {row.id: float(row.price) for row in result.all()}

        breakdown = price_cart(data.items, prices, discount, self.settings)

        logger.info(
            "payments.cart_priced",
            user_id=user.id,
            items=len(data.items),
            matched_products=len(prices),
            subtotal=breakdown.subtotal,
            discount=breakdown.discount,
            total=breakdown.total,
        )

        return await self.gateway.create_payment_intent(
            amount=breakdown.amount_minor,
            currency=self.settings.payment_currency,
            description=self.settings.payment_description,
            metadata={"userId": user.id},
            shipping=shipping_details(user, data.shipping_info),
        )
