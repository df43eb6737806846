"""Checkout workflow.

Two steps, stored in the session so they survive between requests:

``shipping``
    The customer enters email and address. Valid details create a Stripe
    payment intent for the order total and move on to ``payment``.
``payment``
    The browser completes the payment in Stripe's Payment Element. When Stripe
    reports success the paid order is queued for Shopify, the cart is
    cleared and the customer is sent to the confirmation page.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from urllib.parse import urlencode

from django.urls import reverse

from verseandme.shopify.gid import numeric_id

from . import orders, payments
from .cart import CartStore
from .pricing import OrderTotals, calculate_totals, to_minor_units

logger = logging.getLogger(__name__)

CHECKOUT_KEY = "checkout"

SHIPPING = "shipping"
PAYMENT = "payment"

REQUIRED_ADDRESS_FIELDS = [
    "first_name",
    "last_name",
    "address1",
    "city",
    "province",
    "country",
    "zip",
]


class CheckoutError(Exception):
    """The checkout cannot continue; ``message`` is shown to the customer."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CheckoutValidationError(CheckoutError):
    """A shipping form field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class PaymentNotCompleted(CheckoutError):
    """Stripe has not confirmed the payment."""


@dataclass
class ShippingAddress:
    first_name: str = ""
    last_name: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    province: str = ""
    country: str = "US"
    zip: str = ""
    phone: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "ShippingAddress":
        data = data or {}
        known = {name for name in cls.__dataclass_fields__}
        return cls(**{key: str(value or "").strip() for key, value in data.items() if key in known})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class CheckoutState:
    step: str = SHIPPING
    email: str = ""
    shipping_address: dict = field(default_factory=lambda: asdict(ShippingAddress()))
    client_secret: str = ""
    payment_intent_id: str = ""
    totals: dict | None = None
    line_items: list = field(default_factory=list)
    error: str | None = None


def validate_shipping(email: str, address: ShippingAddress) -> None:
    """Check the shipping form.

    Raises:
        CheckoutValidationError: For the first missing or invalid field
    """
    if not email or "@" not in email:
        raise CheckoutValidationError("email", "Please enter a valid email address")

    for name in REQUIRED_ADDRESS_FIELDS:
        if not getattr(address, name):
            raise CheckoutValidationError(name, f"Please fill in {name.replace('_', ' ')}")


class CheckoutOrchestrator:
    """Drives one browser session through shipping and payment."""

    def __init__(self, storage, cart: CartStore):
        self.storage = storage
        self.cart = cart
        self.state = self._load()

    def _load(self) -> CheckoutState:
        raw = self.storage.get(CHECKOUT_KEY)
        if not raw:
            return CheckoutState()
        try:
            return CheckoutState(**json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.error("Error loading checkout state: %s", e)
            return CheckoutState()

    def _persist(self) -> None:
        self.storage[CHECKOUT_KEY] = json.dumps(asdict(self.state))

    @property
    def step(self) -> str:
        return self.state.step

    def totals(self) -> OrderTotals:
        return calculate_totals(self.cart.cart_total)

    def proceed_to_payment(self, email: str, address: dict) -> str:
        """Validate shipping details and create the payment intent.

        Returns:
            The Stripe client secret for the Payment Element

        Raises:
            CheckoutValidationError: A field is missing; no payment intent is requested
            CheckoutError: The cart is empty
            payments.PaymentGatewayError: Stripe failed; the step stays ``shipping``
        """
        shipping_address = ShippingAddress.from_dict(address)
        email = (email or "").strip()
        self.state.email = email
        self.state.shipping_address = asdict(shipping_address)
        self.state.error = None

        try:
            validate_shipping(email, shipping_address)
            if not self.cart.items:
                raise CheckoutError("Your cart is empty")
        except CheckoutError as e:
            self._fail(e.message)
            raise

        totals = self.totals()
        logger.info("Creating payment intent for %s", totals.total)
        try:
            intent = payments.create_payment_intent(
                amount=totals.total,
                email=email,
                metadata={
                    "customerName": shipping_address.full_name,
                    "itemCount": self.cart.cart_count,
                },
            )
        except payments.PaymentGatewayError as e:
            self._fail(e.message)
            raise

        self.state.step = PAYMENT
        self.state.client_secret = intent.client_secret
        self.state.payment_intent_id = intent.id
        self.state.totals = totals.to_dict()
        self.state.line_items = [
            {
                "variant_id": numeric_id(item.variant_id),
                "quantity": item.quantity,
                "price": str(item.unit_price),
            }
            for item in self.cart.items
        ]
        self._persist()
        return intent.client_secret

    def _fail(self, message: str) -> None:
        self.state.step = SHIPPING
        self.state.error = message
        self._persist()

    def back_to_shipping(self) -> None:
        """Return to the shipping form, keeping what was entered."""
        self.state.step = SHIPPING
        self.state.client_secret = ""
        self.state.payment_intent_id = ""
        self.state.totals = None
        self.state.line_items = []
        self._persist()

    def build_order_request(self, payment_intent_id: str) -> dict:
        """The Shopify order request for what was charged.

        Lines and total come from the snapshot taken when the payment intent
        was created, not from the cart as it is now.
        """
        address = self.state.shipping_address
        return {
            "lineItems": [dict(line) for line in self.state.line_items],
            "customer": {
                "email": self.state.email,
                "firstName": address.get("first_name", ""),
                "lastName": address.get("last_name", ""),
            },
            "shippingAddress": dict(address),
            "totalPrice": self.state.totals["total"],
            "paymentId": payment_intent_id,
        }

    def complete_payment(self, payment_intent_id: str) -> str:
        """Finish a checkout Stripe reports as paid.

        The Shopify order is queued rather than created inline: a failure
        there is logged and kept for retry and does not affect the customer,
        whose payment has already gone through.

        Returns:
            The order confirmation path for the payment

        Raises:
            CheckoutError: Not in the payment step, or a different payment intent
            PaymentNotCompleted: Stripe does not report the payment as succeeded,
                or the amount paid differs from the order total
            payments.PaymentGatewayError: Stripe could not be reached
        """
        if self.state.step != PAYMENT:
            raise CheckoutError("Checkout is not awaiting payment")
        if payment_intent_id != self.state.payment_intent_id:
            raise CheckoutError("Payment does not match this checkout")

        details = payments.retrieve_payment_intent(payment_intent_id)
        if details.status != "succeeded":
            raise PaymentNotCompleted(f"Payment not completed (status: {details.status})")
        expected = to_minor_units(Decimal(self.state.totals["total"]))
        if details.amount != expected:
            logger.error("Payment %s amount %s does not match order total %s", payment_intent_id, details.amount, expected)
            raise PaymentNotCompleted("Payment amount does not match the order total")

        logger.info("Payment succeeded: %s", payment_intent_id)
        orders.enqueue_order(payment_intent_id, self.build_order_request(payment_intent_id))

        self.cart.clear_cart()
        self.state = CheckoutState()
        self._persist()
        return confirmation_url(payment_intent_id)


def confirmation_url(payment_intent_id: str) -> str:
    return f"{reverse('order-confirmation')}?{urlencode({'payment_intent': payment_intent_id})}"
