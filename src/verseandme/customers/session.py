"""Customer session store.

Holds the Shopify customer access token and its expiry in a dict-like
storage (the Django session in production) and caches the customer
projection fetched with it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from verseandme.shopify.exceptions import ShopifyError

from . import auth
from .exceptions import SessionExpired
from .types import Customer

logger = logging.getLogger(__name__)

TOKEN_KEY = "customerAccessToken"
EXPIRES_KEY = "tokenExpiresAt"
CUSTOMER_KEY = "customer"


@dataclass(frozen=True)
class CustomerSession:
    """An access token usable while ``now < expires_at``."""

    access_token: str
    expires_at: datetime | None

    @classmethod
    def from_payload(cls, payload: dict) -> "CustomerSession":
        return cls(access_token=payload["accessToken"], expires_at=_parse_expiry(payload.get("expiresAt")))

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return True
        return self.expires_at <= (now or timezone.now())


def _parse_expiry(value: str | None) -> datetime | None:
    if not value:
        return None
    return parse_datetime(value)


class CustomerSessionStore:
    """Login state for one browser session.

    ``storage`` is any mutable mapping; values written are JSON-compatible.
    """

    def __init__(self, storage):
        self.storage = storage

    # --- stored state ---

    @property
    def session(self) -> CustomerSession | None:
        token = self.storage.get(TOKEN_KEY)
        if not token:
            return None
        return CustomerSession(access_token=token, expires_at=_parse_expiry(self.storage.get(EXPIRES_KEY)))

    @property
    def customer(self) -> Customer | None:
        node = self.storage.get(CUSTOMER_KEY)
        return Customer.from_node(node) if node else None

    @property
    def is_authenticated(self) -> bool:
        return self.customer is not None

    def _store_session(self, payload: dict) -> CustomerSession:
        session = CustomerSession.from_payload(payload)
        self.storage[TOKEN_KEY] = session.access_token
        self.storage[EXPIRES_KEY] = payload.get("expiresAt")
        return session

    def _clear(self) -> None:
        for key in (TOKEN_KEY, EXPIRES_KEY, CUSTOMER_KEY):
            self.storage.pop(key, None)

    # --- operations ---

    def initialize(self) -> None:
        """Validate a stored token when a request starts.

        An expired token gets one renewal attempt; if that fails the session
        is logged out. A valid token without a cached customer is used to
        fetch one. There is no background renewal.
        """
        session = self.session
        if session is None:
            return

        if session.is_expired():
            try:
                self._store_session(auth.renew_access_token(session.access_token))
            except ShopifyError as e:
                logger.warning("Failed to renew customer token: %s", e)
                self.logout()
                return
        elif self.storage.get(CUSTOMER_KEY):
            return

        try:
            self.refresh_customer()
        except (ShopifyError, SessionExpired) as e:
            logger.warning("Failed to fetch customer: %s", e)
            self.logout()

    def login(self, email: str, password: str) -> Customer:
        """Log in and cache the customer.

        Raises:
            InvalidCredentials: Shopify rejected the credentials
        """
        self._store_session(auth.create_access_token(email, password))
        logger.info("Customer logged in")
        return self.refresh_customer()

    def create_account(self, email: str, password: str, first_name: str, last_name: str) -> Customer:
        """Create a customer and log in with the same credentials.

        Raises:
            AccountCreationError: Shopify refused the account (e.g. duplicate email)
        """
        auth.create_customer(email, password, first_name, last_name)
        logger.info("Customer account created")
        return self.login(email, password)

    def recover_password(self, email: str) -> None:
        auth.recover_password(email)

    def logout(self) -> None:
        """Invalidate the token remotely (best effort) and clear local state."""
        session = self.session
        if session is not None:
            try:
                auth.delete_access_token(session.access_token)
            except ShopifyError as e:
                logger.error("Logout error: %s", e)
        self._clear()

    def refresh_customer(self) -> Customer:
        """Refetch the customer projection with the current token.

        Raises:
            SessionExpired: No token is stored or Shopify no longer knows it;
                the session is logged out
        """
        session = self.session
        if session is None:
            raise SessionExpired("Not logged in")

        try:
            node = auth.get_customer(session.access_token)
        except SessionExpired:
            self.logout()
            raise

        self.storage[CUSTOMER_KEY] = node
        return Customer.from_node(node)
