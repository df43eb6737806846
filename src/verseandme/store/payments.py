"""Stripe payment gateway.

The browser completes payment in Stripe's hosted Payment Element using the
client secret returned here; the server only creates and reads payment
intents.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

import stripe
from django.conf import settings

from .pricing import to_minor_units

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """Error from the payment gateway."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass
class PaymentIntentResult:
    """A created payment intent."""

    id: str
    client_secret: str
    amount: int
    currency: str


@dataclass
class OrderDetails:
    """What the order confirmation page shows for a payment."""

    id: str
    amount: int
    email: str | None
    status: str
    created: int
    shipping: dict | None = None

    @classmethod
    def from_intent(cls, intent) -> "OrderDetails":
        shipping = None
        if intent.get("shipping"):
            address = intent["shipping"].get("address") or {}
            shipping = {
                "name": intent["shipping"].get("name"),
                "address": {
                    "line1": address.get("line1"),
                    "line2": address.get("line2"),
                    "city": address.get("city"),
                    "state": address.get("state"),
                    "postal_code": address.get("postal_code"),
                    "country": address.get("country"),
                },
            }
        return cls(
            id=intent["id"],
            amount=intent["amount"],
            email=intent.get("receipt_email"),
            status=intent["status"],
            created=intent["created"],
            shipping=shipping,
        )


def create_payment_intent(amount: Decimal, email: str, metadata: dict | None = None) -> PaymentIntentResult:
    """Create a payment intent for ``amount`` in the store currency.

    Raises:
        PaymentGatewayError: Stripe rejected the request or was unreachable
    """
    try:
        intent = stripe.PaymentIntent.create(
            api_key=settings.STRIPE_SECRET_KEY,
            amount=to_minor_units(amount),
            currency=settings.STORE_CURRENCY,
            receipt_email=email,
            metadata={key: str(value) for key, value in (metadata or {}).items()},
            automatic_payment_methods={"enabled": True},
        )
    except stripe.StripeError as e:
        logger.error("Stripe payment intent creation failed: %s", e)
        raise PaymentGatewayError(e.user_message or "Failed to initialize payment. Please try again.") from e

    logger.info("Payment intent created: %s", intent["id"])
    return PaymentIntentResult(
        id=intent["id"],
        client_secret=intent["client_secret"],
        amount=intent["amount"],
        currency=intent["currency"],
    )


def retrieve_payment_intent(payment_intent_id: str) -> OrderDetails:
    """Look up a payment intent by id.

    Raises:
        PaymentGatewayError: Stripe rejected the request or was unreachable
    """
    try:
        intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=settings.STRIPE_SECRET_KEY)
    except stripe.StripeError as e:
        logger.error("Stripe payment intent lookup failed for %s: %s", payment_intent_id, e)
        raise PaymentGatewayError(e.user_message or "Unable to load order details") from e

    return OrderDetails.from_intent(intent)
