"""Checkout payments: cart pricing and payment intents."""

from app.features.payments.gateway import (
    PaymentGateway,
    StripePaymentGateway,
    get_payment_gateway,
)
from app.features.payments.routes import router
from app.features.payments.service import PaymentService, PriceBreakdown, price_cart

__all__ = [
    "PaymentGateway",
    "PaymentService",
    "PriceBreakdown",
    "StripePaymentGateway",
    "get_payment_gateway",
    "price_cart",
    "router",
]
