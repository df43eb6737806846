"""Cart and checkout endpoints.

State lives in the Django session, so every view builds its stores from
``request.session`` and answers with the resulting snapshot.
"""

import logging
from decimal import InvalidOperation

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from verseandme.core.http import read_json

from .cart import CartLineItem, CartStore, SavedForLaterStore
from .checkout import CheckoutError, CheckoutOrchestrator, CheckoutValidationError
from .payments import PaymentGatewayError
from .pricing import calculate_totals

logger = logging.getLogger(__name__)


def _cart_response(request, status=200):
    cart = CartStore(request.session)
    saved = SavedForLaterStore(request.session)
    return JsonResponse(
        {
            "items": [item.to_dict() for item in cart.items],
            "saved_for_later": [item.to_dict() for item in saved.items],
            "cart_count": cart.cart_count,
            "savings": str(cart.savings),
            "totals": calculate_totals(cart.cart_total).to_dict(),
        },
        status=status,
    )


def _parse_quantity(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class CartView(View):
    """GET /cart/ - cart lines, saved items and totals."""

    def get(self, request):
        return _cart_response(request)


@method_decorator(csrf_exempt, name="dispatch")
class CartItemsView(View):
    """Add a variant to the cart.

    POST /cart/items/
    {
        "product_id": "gid://shopify/Product/1",
        "variant_id": "gid://shopify/ProductVariant/11",
        "title": "Poem Print",
        "unit_price": "20.00",
        "quantity": 2,
        "options": [{"name": "Size", "value": "A4"}]
    }
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        missing = [name for name in ("product_id", "variant_id", "title", "unit_price") if not data.get(name)]
        if missing:
            return JsonResponse({"error": f"Missing fields: {', '.join(missing)}"}, status=400)

        data = {key: value for key, value in data.items() if key != "id"}
        try:
            item = CartLineItem.from_dict(data)
            CartStore(request.session).add_to_cart(item)
        except (InvalidOperation, TypeError, KeyError) as e:
            logger.warning("Rejected cart item: %s", e)
            return JsonResponse({"error": "Invalid cart item"}, status=400)
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)

        return _cart_response(request, status=201)


@method_decorator(csrf_exempt, name="dispatch")
class CartItemDetailView(View):
    """PATCH /cart/items/<id>/ {"quantity": n} and DELETE /cart/items/<id>/."""

    def patch(self, request, item_id):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        quantity = _parse_quantity(data.get("quantity"))
        if quantity is None:
            return JsonResponse({"error": "Quantity required"}, status=400)

        CartStore(request.session).update_quantity(item_id, quantity)
        return _cart_response(request)

    def delete(self, request, item_id):
        CartStore(request.session).remove_from_cart(item_id)
        return _cart_response(request)


@method_decorator(csrf_exempt, name="dispatch")
class CartClearView(View):
    def post(self, request):
        CartStore(request.session).clear_cart()
        return _cart_response(request)


@method_decorator(csrf_exempt, name="dispatch")
class SaveForLaterView(View):
    """POST /cart/items/<id>/save/ - move a cart line to the saved list."""

    def post(self, request, item_id):
        saved = SavedForLaterStore(request.session).save_for_later(CartStore(request.session), item_id)
        if saved is None:
            return JsonResponse({"error": "Item not in cart"}, status=404)
        return _cart_response(request)


@method_decorator(csrf_exempt, name="dispatch")
class MoveToCartView(View):
    """POST /cart/saved/<id>/move/ - move a saved item back with quantity 1."""

    def post(self, request, item_id):
        added = SavedForLaterStore(request.session).move_to_cart(CartStore(request.session), item_id)
        if added is None:
            return JsonResponse({"error": "Item not saved"}, status=404)
        return _cart_response(request)


@method_decorator(csrf_exempt, name="dispatch")
class SavedItemView(View):
    def delete(self, request, item_id):
        SavedForLaterStore(request.session).remove_saved(item_id)
        return _cart_response(request)


def _checkout_response(checkout: CheckoutOrchestrator, status=200):
    state = checkout.state
    return JsonResponse(
        {
            "step": state.step,
            "email": state.email,
            "shipping_address": state.shipping_address,
            "client_secret": state.client_secret or None,
            "payment_intent_id": state.payment_intent_id or None,
            "totals": checkout.totals().to_dict(),
            "error": state.error,
        },
        status=status,
    )


def _checkout(request) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(request.session, CartStore(request.session))


class CheckoutView(View):
    """GET /checkout/ - current step, entered details and totals."""

    def get(self, request):
        return _checkout_response(_checkout(request))


@method_decorator(csrf_exempt, name="dispatch")
class ShippingView(View):
    """Submit shipping details and create the payment intent.

    POST /checkout/shipping/
    {
        "email": "ada@example.com",
        "shipping_address": {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "address1": "1 Main St",
            "city": "Springfield",
            "province": "IL",
            "country": "US",
            "zip": "62701"
        }
    }
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        checkout = _checkout(request)
        try:
            checkout.proceed_to_payment(data.get("email", ""), data.get("shipping_address") or {})
        except CheckoutValidationError as e:
            return JsonResponse({"error": e.message, "field": e.field}, status=400)
        except CheckoutError as e:
            return JsonResponse({"error": e.message}, status=400)
        except PaymentGatewayError as e:
            # SessionMiddleware skips saving on 5xx; keep the entered details and error.
            request.session.save()
            return JsonResponse({"error": e.message}, status=502)

        return _checkout_response(checkout)


@method_decorator(csrf_exempt, name="dispatch")
class BackToShippingView(View):
    def post(self, request):
        checkout = _checkout(request)
        checkout.back_to_shipping()
        return _checkout_response(checkout)


@method_decorator(csrf_exempt, name="dispatch")
class CompletePaymentView(View):
    """POST /checkout/complete/ {"payment_intent_id": "pi_..."}.

    Called after Stripe confirms the payment in the browser. Answers with the
    confirmation page to redirect to.
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        payment_intent_id = str(data.get("payment_intent_id") or "").strip()
        if not payment_intent_id:
            return JsonResponse({"error": "Payment intent ID required"}, status=400)

        checkout = _checkout(request)
        try:
            redirect_url = checkout.complete_payment(payment_intent_id)
        except CheckoutError as e:
            return JsonResponse({"error": e.message}, status=400)
        except PaymentGatewayError as e:
            return JsonResponse({"error": e.message}, status=502)

        return JsonResponse({"success": True, "redirect_url": redirect_url})
