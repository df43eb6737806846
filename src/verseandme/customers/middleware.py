"""Customer session middleware."""

from .session import CustomerSessionStore


class CustomerSessionMiddleware:
    """Attach a ``CustomerSessionStore`` to each request.

    Sets request.customer_session. A stored token is validated (renewed or
    discarded when expired) before the view runs.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        store = CustomerSessionStore(request.session)
        store.initialize()
        request.customer_session = store

        response = self.get_response(request)
        return response
