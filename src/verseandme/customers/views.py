"""Customer account endpoints.

All endpoints work on ``request.customer_session`` (see middleware) and
answer JSON. Shopify user errors are returned verbatim so the storefront can
show them; transport failures get a generic retry message.
"""

import logging
from dataclasses import asdict

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from verseandme.core.http import read_json
from verseandme.shopify.exceptions import ShopifyError

from .exceptions import AccountCreationError, InvalidCredentials, RecoveryError, SessionExpired

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Something went wrong. Please try again."


def _customer_response(customer):
    return JsonResponse({"customer": asdict(customer)})


class AccountView(View):
    """GET /account/ - the logged-in customer with their orders."""

    def get(self, request):
        customer = request.customer_session.customer
        if customer is None:
            return JsonResponse({"error": "Not logged in"}, status=401)
        return _customer_response(customer)


@method_decorator(csrf_exempt, name="dispatch")
class LoginView(View):
    """Login endpoint.

    POST /account/login/
    {
        "email": "user@example.com",
        "password": "secret"
    }
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")
        if not email or not password:
            return JsonResponse({"error": "Email and password required"}, status=400)

        try:
            customer = request.customer_session.login(email, password)
        except InvalidCredentials as e:
            return JsonResponse({"error": e.message}, status=401)
        except (ShopifyError, SessionExpired) as e:
            logger.error("Login error: %s", e)
            return JsonResponse({"error": RETRY_MESSAGE}, status=502)

        return _customer_response(customer)


@method_decorator(csrf_exempt, name="dispatch")
class LogoutView(View):
    """POST /account/logout/ - always succeeds locally."""

    def post(self, request):
        request.customer_session.logout()
        return JsonResponse({"success": True})


@method_decorator(csrf_exempt, name="dispatch")
class RegisterView(View):
    """Create an account and log in with it.

    POST /account/register/
    {
        "email": "user@example.com",
        "password": "secret",
        "first_name": "Ada",
        "last_name": "Lovelace"
    }
    """

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")
        if not email or not password:
            return JsonResponse({"error": "Email and password required"}, status=400)

        try:
            customer = request.customer_session.create_account(
                email,
                password,
                data.get("first_name", ""),
                data.get("last_name", ""),
            )
        except (AccountCreationError, InvalidCredentials) as e:
            return JsonResponse({"error": e.message}, status=400)
        except (ShopifyError, SessionExpired) as e:
            logger.error("Create account error: %s", e)
            return JsonResponse({"error": RETRY_MESSAGE}, status=502)

        return _customer_response(customer)


@method_decorator(csrf_exempt, name="dispatch")
class RecoverPasswordView(View):
    """POST /account/recover/ {"email": ...} - send a reset email."""

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        email = str(data.get("email") or "").strip()
        if not email:
            return JsonResponse({"error": "Email required"}, status=400)

        try:
            request.customer_session.recover_password(email)
        except RecoveryError as e:
            return JsonResponse({"error": e.message}, status=400)
        except ShopifyError as e:
            logger.error("Recover password error: %s", e)
            return JsonResponse({"error": RETRY_MESSAGE}, status=502)

        return JsonResponse({"success": True})


@method_decorator(csrf_exempt, name="dispatch")
class RefreshView(View):
    """POST /account/refresh/ - refetch the customer and orders."""

    def post(self, request):
        try:
            customer = request.customer_session.refresh_customer()
        except SessionExpired:
            return JsonResponse({"error": "Not logged in"}, status=401)
        except ShopifyError as e:
            logger.error("Refresh customer error: %s", e)
            return JsonResponse({"error": RETRY_MESSAGE}, status=502)

        return _customer_response(customer)
