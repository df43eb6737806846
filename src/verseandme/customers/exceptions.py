"""Customer account exceptions."""

from verseandme.shopify.exceptions import ShopifyUserError


class InvalidCredentials(ShopifyUserError):
    """Login was rejected by Shopify."""


class AccountCreationError(ShopifyUserError):
    """Shopify refused to create the customer (e.g. email already taken)."""


class RecoveryError(ShopifyUserError):
    """Shopify refused the password recovery request."""


class TokenRenewalError(ShopifyUserError):
    """The access token could not be renewed."""


class SessionExpired(Exception):
    """No customer is associated with the stored access token."""
