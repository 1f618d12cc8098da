"""Payment gateway providers.

Provides an abstract interface and a Stripe implementation that creates
payment intents and hands the client secret back to the storefront.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import stripe

from app.core.config import Settings, get_settings
from app.core.exceptions import ConfigurationMissingError, UpstreamFailureError
from app.core.logging import get_logger

logger = get_logger(__name__)


class PaymentGateway(ABC):
    """Abstract base class for payment providers."""

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str],
        shipping: dict[str, Any],
    ) -> str:
        """Create a payment intent.

        Args:
            amount: Amount in the currency's smallest unit.
            currency: Lower-case ISO currency code.
            description: Statement description.
            metadata: Key/value pairs stored on the intent.
            shipping: ``{"name", "address": {...}}`` shipping details.

        Returns:
            Client secret of the new intent.

        Raises:
            ConfigurationMissingError: If credentials are missing.
            UpstreamFailureError: If the provider rejects the request.
        """


class StripePaymentGateway(PaymentGateway):
    """Stripe payment intents.

    The SDK is blocking, so the request runs in a worker thread. The API
    key is passed per request instead of being set on the module.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        description: str,
        metadata: dict[str, str],
        shipping: dict[str, Any],
    ) -> str:
        if not self.settings.stripe_key:
            raise ConfigurationMissingError("Stripe Configuration Missing")

        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.create,
                api_key=self.settings.stripe_key,
                amount=amount,
                currency=currency,
                description=description,
                metadata=metadata,
                shipping=shipping,
            )
        except stripe.StripeError as e:
            logger.error(
                "payments.intent_failed",
                error=str(e),
                error_type=type(e).__name__,
                amount=amount,
                currency=currency,
            )
            raise UpstreamFailureError(
                "Payment Intent Creation Failed",
                details={"error": str(e)},
            ) from e

        logger.info("payments.intent_created", intent_id=intent.id, amount=amount)
        return str(intent.client_secret)


def get_payment_gateway() -> PaymentGateway:
    """FastAPI dependency returning the configured payment gateway."""
    return StripePaymentGateway()
