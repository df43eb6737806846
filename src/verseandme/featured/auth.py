"""Admin API authentication.

The verifier class is named by the ``ADMIN_CREDENTIAL_VERIFIER`` setting so a
real identity provider can replace the shared secret.
"""

import hmac
from functools import wraps

from django.conf import settings
from django.http import JsonResponse
from django.utils.module_loading import import_string


class CredentialVerifier:
    """Decides whether a request may use the admin API."""

    def verify(self, request) -> bool:
        raise NotImplementedError


class StaticSecretVerifier(CredentialVerifier):
    """Accepts ``Authorization: Bearer <ADMIN_SECRET>``.

    Every request is rejected while ``ADMIN_SECRET`` is unset.
    """

    def verify(self, request) -> bool:
        secret = getattr(settings, "ADMIN_SECRET", None)
        if not secret:
            return False
        auth_header = request.headers.get("Authorization", "")
        return hmac.compare_digest(auth_header.encode(), f"Bearer {secret}".encode())


def get_verifier() -> CredentialVerifier:
    return import_string(settings.ADMIN_CREDENTIAL_VERIFIER)()


def require_admin(view_func):
    """Decorator to reject requests the configured verifier does not accept."""

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not get_verifier().verify(request):
            return JsonResponse({"error": "Unauthorized"}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapper
