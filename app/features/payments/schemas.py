"""Pydantic schemas for payment endpoints."""

from pydantic import Field

from app.shared.schemas import CamelModel


class CartItem(CamelModel):
    """One cart line; only ``productId`` and ``quantity`` are priced."""

    product_id: str
    quantity: int = Field(..., ge=1)
    name: str | None = None
    photo: str | None = None
    price: float | None = Field(None, description="Client-side price (ignored for pricing).")


class ShippingInfo(CamelModel):
    """Delivery address."""

    address: str
    city: str
    state: str
    country: str
    pin_code: int | str


class PaymentCreate(CamelModel):
    """Body of POST /payment/create.

    ``items`` and ``shippingInfo`` may be omitted so their absence is
    reported with the storefront messages.
    """

    items: list[CartItem] = Field(default_factory=list)
    shipping_info: ShippingInfo | None = None
    coupon: str | None = None


class PaymentIntentResponse(CamelModel):
    """Response for POST /payment/create."""

    success: bool = True
    client_secret: str
