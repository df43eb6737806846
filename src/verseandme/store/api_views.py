"""Storefront API endpoints called directly by the browser.

These keep the request and response shapes the storefront frontend already
uses (camelCase keys).
"""

import logging
from dataclasses import asdict
from decimal import Decimal, InvalidOperation

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from verseandme.core.http import read_json
from verseandme.shopify.exceptions import ShopifyError

from . import orders, payments

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class CreatePaymentIntentView(View):
    """Create a Stripe payment intent.

    POST /api/create-payment-intent/
    {
        "amount": 49.99,
        "email": "ada@example.com",
        "metadata": {"customerName": "Ada Lovelace", "itemCount": 2}
    }

    Returns {"clientSecret": ...}.
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        try:
            amount = Decimal(str(data.get("amount")))
        except InvalidOperation:
            return JsonResponse({"error": "Invalid amount"}, status=400)
        if not amount.is_finite() or amount <= 0:
            return JsonResponse({"error": "Invalid amount"}, status=400)

        email = str(data.get("email") or "").strip()
        if not email:
            return JsonResponse({"error": "Email required"}, status=400)

        metadata = data.get("metadata")
        try:
            intent = payments.create_payment_intent(
                amount=amount,
                email=email,
                metadata=metadata if isinstance(metadata, dict) else None,
            )
        except payments.PaymentGatewayError as e:
            return JsonResponse({"error": e.message}, status=502)

        return JsonResponse({"clientSecret": intent.client_secret, "paymentIntentId": intent.id})


@method_decorator(csrf_exempt, name="dispatch")
class CreateShopifyOrderView(View):
    """Create and complete a Shopify order for a paid checkout.

    POST /api/create-shopify-order/
    {
        "lineItems": [{"variant_id": "11", "quantity": 2, "price": "20.00"}],
        "customer": {"email": "ada@example.com", "firstName": "Ada", "lastName": "Lovelace"},
        "shippingAddress": {"first_name": "Ada", ...},
        "totalPrice": "49.99",
        "paymentId": "pi_123"
    }
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        missing = [name for name in ("lineItems", "customer", "shippingAddress", "paymentId") if not data.get(name)]
        if missing:
            return JsonResponse({"error": f"Missing fields: {', '.join(missing)}"}, status=400)

        try:
            order = orders.create_shopify_order(data)
        except orders.OrderCreationError as e:
            logger.error("Error creating Shopify order: %s %s", e, e.details)
            return JsonResponse({"error": e.message, "details": e.details}, status=500)
        except (ShopifyError, KeyError, TypeError) as e:
            logger.error("Error creating Shopify order: %s", e)
            return JsonResponse({"error": str(e), "details": repr(e)}, status=500)

        return JsonResponse(
            {
                "success": True,
                "order": order,
                "orderId": order["id"],
                "orderName": order["name"],
                "orderNumber": order.get("orderNumber"),
                "customerLinked": bool(order.get("customer")),
            }
        )


class OrderDetailsView(View):
    """GET /api/order-details/?payment_intent=<id> - payment summary for the confirmation page."""

    def get(self, request):
        payment_intent_id = request.GET.get("payment_intent", "").strip()
        if not payment_intent_id:
            return JsonResponse({"error": "No payment intent ID found"}, status=400)

        try:
            details = payments.retrieve_payment_intent(payment_intent_id)
        except payments.PaymentGatewayError:
            return JsonResponse({"error": "Unable to load order details"}, status=502)

        return JsonResponse(asdict(details))


class OrderConfirmationView(OrderDetailsView):
    """GET /order-confirmation/?payment_intent=<id> - where checkout lands after payment."""
