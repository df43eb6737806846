"""Exceptions raised by the Shopify GraphQL clients."""


class ShopifyError(Exception):
    """Base class for Shopify API failures."""


class ShopifyUnavailable(ShopifyError):
    """Shopify could not be reached (transport failure)."""


class ShopifyHTTPError(ShopifyError):
    """Shopify answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shopify API HTTP error: {status_code} - {body}")


class ShopifyGraphQLError(ShopifyError):
    """The response carried a top-level GraphQL ``errors`` list."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"GraphQL Error: {errors}")


class ShopifyUserError(ShopifyError):
    """A mutation reported a business-rule violation.

    ``message`` is the first user error, suitable for showing verbatim.
    """

    def __init__(self, message: str, errors: list | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)
