"""Payment API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging import get_logger
from app.features.payments.gateway import PaymentGateway, get_payment_gateway
from app.features.payments.schemas import PaymentCreate, PaymentIntentResponse
from app.features.payments.service import PaymentService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/payment", tags=["payments"])


@router.post(
    "/create",
    response_model=PaymentIntentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a payment intent",
    description="""
Price a cart from catalog prices and create a payment intent.

**Pricing**:
- `subtotal` = sum of catalog price x quantity (unknown products are ignored)
- `tax` = 18% of subtotal
- `shipping` = 0 above 1000, otherwise 200
- `total` = floor(subtotal + tax + shipping - coupon discount)

The intent amount is `total x 100` in the configured currency (`inr`).

**Errors**:
- 401 when `?id=` is missing or unknown
- 400 `Please add items to cart`, `Please provide shipping info`, `Invalid Coupon Code`
- 500 `Payment Intent Creation Failed` when the gateway rejects the request
""",
)
async def create_payment_intent(
    request: PaymentCreate,
    user_id: str | None = Query(None, alias="id", description="Paying user's id."),
    db: AsyncSession = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> PaymentIntentResponse:
    """Create a payment intent for a cart.

    Args:
        request: Cart, shipping info and coupon.
        user_id: Paying user.
        db: Database session.
        gateway: Payment provider.

    Returns:
        Client secret of the new intent.
    """
    logger.info(
        "payments.create_request_received",
        user_id=user_id,
        items=len(request.items),
        coupon=request.coupon,
    )

    service = PaymentService(gateway)
    client_secret = await service.create_payment_intent(db, user_id, request)

    return PaymentIntentResponse(client_secret=client_secret)
