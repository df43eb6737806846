"""Tests for the checkout workflow."""

from unittest.mock import patch

import pytest
import stripe

from ..checkout import (
    PAYMENT,
    SHIPPING,
    CheckoutError,
    CheckoutOrchestrator,
    CheckoutValidationError,
    PaymentNotCompleted,
)
from ..models import PendingShopifyOrder
from ..payments import PaymentGatewayError
from .conftest import line_item

INTENT = {"id": "pi_123", "client_secret": "pi_123_secret_abc", "amount": 4999, "currency": "usd"}


@pytest.fixture
def stripe_create():
    with patch("stripe.PaymentIntent.create", return_value=INTENT) as mock_create:
        yield mock_create


@pytest.fixture
def checkout(session, cart):
    cart.add_to_cart(line_item(price="20.00", quantity=2))
    return CheckoutOrchestrator(session, cart)


@pytest.fixture
def at_payment(checkout, shipping_address, stripe_create):
    checkout.proceed_to_payment("ada@example.com", shipping_address)
    return checkout


class TestProceedToPayment:
    def test_creates_one_intent_for_order_total(self, checkout, shipping_address, stripe_create):
        """A 40.00 cart is charged 49.99 (5.99 shipping, 4.00 tax)."""
        client_secret = checkout.proceed_to_payment("ada@example.com", shipping_address)

        assert client_secret == "pi_123_secret_abc"
        assert checkout.step == PAYMENT
        assert checkout.state.payment_intent_id == "pi_123"
        stripe_create.assert_called_once()
        kwargs = stripe_create.call_args.kwargs
        assert kwargs["amount"] == 4999
        assert kwargs["currency"] == "usd"
        assert kwargs["receipt_email"] == "ada@example.com"
        assert kwargs["metadata"] == {"customerName": "Ada Lovelace", "itemCount": "2"}

    def test_missing_city_makes_no_network_call(self, checkout, shipping_address, stripe_create):
        shipping_address["city"] = ""

        with pytest.raises(CheckoutValidationError) as exc_info:
            checkout.proceed_to_payment("ada@example.com", shipping_address)

        assert exc_info.value.field == "city"
        assert exc_info.value.message == "Please fill in city"
        assert checkout.step == SHIPPING
        assert checkout.state.error == "Please fill in city"
        stripe_create.assert_not_called()

    def test_field_name_words(self, checkout, shipping_address, stripe_create):
        shipping_address["first_name"] = "  "

        with pytest.raises(CheckoutValidationError, match="Please fill in first name"):
            checkout.proceed_to_payment("ada@example.com", shipping_address)

    def test_invalid_email(self, checkout, shipping_address, stripe_create):
        with pytest.raises(CheckoutValidationError, match="Please enter a valid email address"):
            checkout.proceed_to_payment("ada.example.com", shipping_address)

        stripe_create.assert_not_called()

    def test_empty_cart_rejected(self, session, cart, shipping_address, stripe_create):
        checkout = CheckoutOrchestrator(session, cart)

        with pytest.raises(CheckoutError, match="Your cart is empty"):
            checkout.proceed_to_payment("ada@example.com", shipping_address)

        stripe_create.assert_not_called()

    def test_gateway_failure_stays_on_shipping(self, checkout, shipping_address):
        with patch("stripe.PaymentIntent.create", side_effect=stripe.APIConnectionError("Network down")):
            with pytest.raises(PaymentGatewayError):
                checkout.proceed_to_payment("ada@example.com", shipping_address)

        assert checkout.step == SHIPPING
        assert checkout.state.error == "Network down"

    def test_state_survives_reload(self, at_payment, session, cart):
        reloaded = CheckoutOrchestrator(session, cart)

        assert reloaded.step == PAYMENT
        assert reloaded.state.client_secret == "pi_123_secret_abc"
        assert reloaded.state.shipping_address["city"] == "Springfield"


class TestBackToShipping:
    def test_keeps_entered_details(self, at_payment):
        at_payment.back_to_shipping()

        assert at_payment.step == SHIPPING
        assert at_payment.state.email == "ada@example.com"
        assert at_payment.state.shipping_address["zip"] == "62701"
        assert at_payment.state.client_secret == ""


@pytest.mark.django_db
class TestCompletePayment:
    def test_succeeded_payment_queues_order_and_clears_cart(self, at_payment, cart, settings):
        settings.SHOPIFY_ORDER_SUBMIT_INLINE = False
        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "status": "succeeded", "created": 1}):
            redirect_url = at_payment.complete_payment("pi_123")

        assert redirect_url == "/order-confirmation/?payment_intent=pi_123"
        assert cart.items == []
        assert at_payment.step == SHIPPING
        assert at_payment.state.email == ""

        pending = PendingShopifyOrder.objects.get(payment_intent_id="pi_123")
        assert pending.status == PendingShopifyOrder.Status.PENDING
        assert pending.payload["lineItems"] == [{"variant_id": "11", "quantity": 2, "price": "20.00"}]
        assert pending.payload["customer"] == {"email": "ada@example.com", "firstName": "Ada", "lastName": "Lovelace"}
        assert pending.payload["totalPrice"] == "49.99"

    def test_shopify_failure_does_not_affect_customer(self, at_payment, cart, shopify, django_capture_on_commit_callbacks):
        """The order is paid; a Shopify failure is only recorded for retry."""
        shopify.reply({"customers": {"edges": []}})
        shopify.reply({"draftOrderCreate": {"draftOrder": None, "userErrors": [{"field": ["lineItems"], "message": "Variant not found"}]}})

        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "status": "succeeded", "created": 1}):
            with django_capture_on_commit_callbacks(execute=True):
                redirect_url = at_payment.complete_payment("pi_123")

        assert redirect_url == "/order-confirmation/?payment_intent=pi_123"
        assert cart.items == []
        pending = PendingShopifyOrder.objects.get(payment_intent_id="pi_123")
        assert pending.status == PendingShopifyOrder.Status.FAILED
        assert pending.attempts == 1
        assert "Variant not found" in pending.last_error

    def test_order_is_what_was_charged(self, at_payment, cart, settings):
        """Lines added after the intent was created are not ordered."""
        settings.SHOPIFY_ORDER_SUBMIT_INLINE = False
        cart.add_to_cart(line_item(variant_id="gid://shopify/ProductVariant/12", price="100.00", quantity=3))

        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "status": "succeeded", "created": 1}):
            at_payment.complete_payment("pi_123")

        pending = PendingShopifyOrder.objects.get(payment_intent_id="pi_123")
        assert pending.payload["lineItems"] == [{"variant_id": "11", "quantity": 2, "price": "20.00"}]
        assert pending.payload["totalPrice"] == "49.99"

    def test_amount_mismatch_rejected(self, at_payment, cart):
        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "amount": 100, "status": "succeeded", "created": 1}):
            with pytest.raises(PaymentNotCompleted, match="amount does not match"):
                at_payment.complete_payment("pi_123")

        assert len(cart) == 1
        assert at_payment.step == PAYMENT
        assert not PendingShopifyOrder.objects.exists()

    def test_malformed_shopify_reply_is_recorded(self, at_payment, cart, shopify, django_capture_on_commit_callbacks):
        shopify.reply({"customers": {"edges": []}})
        shopify.reply({"draftOrderCreate": {"draftOrder": None, "userErrors": []}})

        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "status": "succeeded", "created": 1}):
            with django_capture_on_commit_callbacks(execute=True):
                redirect_url = at_payment.complete_payment("pi_123")

        assert redirect_url == "/order-confirmation/?payment_intent=pi_123"
        assert cart.items == []
        pending = PendingShopifyOrder.objects.get(payment_intent_id="pi_123")
        assert pending.status == PendingShopifyOrder.Status.FAILED
        assert "no draft order" in pending.last_error

    def test_unconfirmed_payment(self, at_payment, cart):
        with patch("stripe.PaymentIntent.retrieve", return_value={**INTENT, "status": "requires_payment_method", "created": 1}):
            with pytest.raises(PaymentNotCompleted):
                at_payment.complete_payment("pi_123")

        assert len(cart) == 1
        assert not PendingShopifyOrder.objects.exists()

    def test_other_payment_intent_rejected(self, at_payment, cart):
        with patch("stripe.PaymentIntent.retrieve") as mock_retrieve:
            with pytest.raises(CheckoutError, match="does not match"):
                at_payment.complete_payment("pi_other")

        mock_retrieve.assert_not_called()
        assert len(cart) == 1

    def test_requires_payment_step(self, checkout):
        with pytest.raises(CheckoutError):
            checkout.complete_payment("pi_123")
