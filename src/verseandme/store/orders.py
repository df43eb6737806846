"""Shopify order creation after a successful Stripe payment.

The sequence is fixed: look up the customer by email (best effort), create a
draft order, complete the draft order. There is no retry inside the
sequence and nothing is rolled back if completion fails after the draft was
created; an orphaned draft order is left in Shopify.

Paid orders are first recorded as ``PendingShopifyOrder`` rows so a failed
submission keeps its payload and can be retried by the
``submit_pending_orders`` management command.
"""

import logging
from functools import partial

from django.conf import settings
from django.db import transaction

from verseandme.shopify.client import admin_query
from verseandme.shopify.exceptions import ShopifyError, ShopifyGraphQLError
from verseandme.shopify.gid import variant_gid

from .models import PendingShopifyOrder

logger = logging.getLogger(__name__)

FIND_CUSTOMER_QUERY = """
  query getCustomerByEmail($query: String!) {
    customers(first: 1, query: $query) {
      edges {
        node {
          id
          email
          firstName
          lastName
        }
      }
    }
  }
"""

CREATE_DRAFT_ORDER_MUTATION = """
  mutation draftOrderCreate($input: DraftOrderInput!) {
    draftOrderCreate(input: $input) {
      draftOrder {
        id
        name
        order {
          id
          name
          orderNumber
        }
      }
      userErrors {
        field
        message
      }
    }
  }
"""

COMPLETE_DRAFT_ORDER_MUTATION = """
  mutation draftOrderComplete($id: ID!) {
    draftOrderComplete(id: $id) {
      draftOrder {
        id
        order {
          id
          name
          orderNumber
          customer {
            id
            email
          }
        }
      }
      userErrors {
        field
        message
      }
    }
  }
"""


class OrderCreationError(Exception):
    """Draft order creation or completion failed.

    ``details`` holds the remote error payload.
    """

    def __init__(self, message: str, details=None):
        self.message = message
        self.details = details
        super().__init__(message)


def find_customer_id(email: str) -> str | None:
    """Return the Shopify customer id for an email, or None.

    Lookup failures are logged and treated as "no customer".
    """
    try:
        data = admin_query(FIND_CUSTOMER_QUERY, {"query": f"email:{email}"})
    except ShopifyError as e:
        logger.warning("Error finding customer %s: %s", email, e)
        return None

    customer_edges = (data.get("customers") or {}).get("edges") or []
    if not customer_edges:
        logger.info("No customer found with email: %s", email)
        return None
    return customer_edges[0]["node"]["id"]


def _format_address(address: dict, include_phone: bool) -> dict:
    formatted = {
        "firstName": address.get("first_name"),
        "lastName": address.get("last_name"),
        "address1": address.get("address1"),
        "address2": address.get("address2") or "",
        "city": address.get("city"),
        "province": address.get("province"),
        "country": address.get("country"),
        "zip": address.get("zip"),
    }
    if include_phone:
        formatted["phone"] = address.get("phone") or ""
    return formatted


def build_draft_order_input(payload: dict, customer_id: str | None) -> dict:
    """Translate an order request into a Shopify ``DraftOrderInput``."""
    payment_id = payload["paymentId"]
    address = payload["shippingAddress"]
    draft_input = {
        "lineItems": [
            {"variantId": variant_gid(item["variant_id"]), "quantity": int(item["quantity"])}
            for item in payload["lineItems"]
        ],
        "email": payload["customer"]["email"],
        "shippingAddress": _format_address(address, include_phone=True),
        "billingAddress": _format_address(address, include_phone=False),
        "note": f"Payment ID: {payment_id}\nProcessed via Stripe",
        "tags": ["stripe-checkout", "web-order", payment_id],
    }
    if customer_id:
        draft_input["customerId"] = customer_id
    return draft_input


def _run_mutation(query: str, variables: dict, key: str) -> dict:
    try:
        data = admin_query(query, variables)
    except ShopifyGraphQLError as e:
        raise OrderCreationError(f"{key} failed", e.errors) from e

    result = data.get(key) or {}
    if result.get("userErrors"):
        raise OrderCreationError(f"{key} failed", result["userErrors"])
    return result


def create_shopify_order(payload: dict) -> dict:
    """Create and complete a Shopify order for a paid checkout.

    ``payload`` uses the storefront's order request format: ``lineItems``
    (variant_id, quantity, price), ``customer`` (email, firstName, lastName),
    ``shippingAddress`` (snake_case fields), ``totalPrice`` and ``paymentId``.

    Returns:
        The completed order (id, name, orderNumber, customer)

    Raises:
        OrderCreationError: Draft creation or completion was rejected
        ShopifyUnavailable / ShopifyHTTPError: Transport failure
    """
    email = payload["customer"]["email"]
    logger.info("Creating Shopify order for %s", email)

    customer_id = find_customer_id(email)
    draft_input = build_draft_order_input(payload, customer_id)

    draft = _run_mutation(CREATE_DRAFT_ORDER_MUTATION, {"input": draft_input}, "draftOrderCreate")
    draft_order_id = (draft.get("draftOrder") or {}).get("id")
    if not draft_order_id:
        raise OrderCreationError("draftOrderCreate returned no draft order", draft)
    logger.info("Draft order created: %s", draft_order_id)

    completed = _run_mutation(COMPLETE_DRAFT_ORDER_MUTATION, {"id": draft_order_id}, "draftOrderComplete")
    order = (completed.get("draftOrder") or {}).get("order")
    if not order:
        raise OrderCreationError("draftOrderComplete returned no order", completed)
    logger.info(
        "Order completed: %s (customer: %s)",
        order["name"],
        (order.get("customer") or {}).get("email", "guest"),
    )
    return order


def submit_pending_order(pending: PendingShopifyOrder) -> bool:
    """Try to create the Shopify order for a pending record.

    Failures are logged and recorded on the record, never raised.

    Returns:
        True if the order was created
    """
    pending.attempts += 1
    try:
        order = create_shopify_order(pending.payload)
    except OrderCreationError as e:
        logger.error("Shopify order creation failed for %s: %s %s", pending.payment_intent_id, e, e.details)
        pending.mark_failed(f"{e.message}: {e.details}")
        return False
    except ShopifyError as e:
        logger.error("Shopify order creation failed for %s: %s", pending.payment_intent_id, e)
        pending.mark_failed(str(e))
        return False

    pending.mark_completed(order["id"], order["name"])
    return True


def _submit_by_pk(pk) -> None:
    pending = PendingShopifyOrder.objects.get(pk=pk)
    submit_pending_order(pending)


def enqueue_order(payment_intent_id: str, payload: dict) -> PendingShopifyOrder:
    """Record a paid order and submit it to Shopify once the record is committed.

    A repeated payment intent id returns the existing record without
    submitting again.
    """
    pending, created = PendingShopifyOrder.objects.get_or_create(
        payment_intent_id=payment_intent_id,
        defaults={"payload": payload},
    )
    if created and getattr(settings, "SHOPIFY_ORDER_SUBMIT_INLINE", True):
        transaction.on_commit(partial(_submit_by_pk, pending.pk), robust=True)
    return pending


def pending_orders_to_retry():
    """Records still without a Shopify order and under the attempt limit."""
    return PendingShopifyOrder.objects.filter(
        status__in=[PendingShopifyOrder.Status.PENDING, PendingShopifyOrder.Status.FAILED],
        attempts__lt=settings.SHOPIFY_ORDER_MAX_ATTEMPTS,
    ).order_by("created_at")
