"""Shared fixtures for customer account tests."""

from datetime import timedelta

import pytest
from django.utils import timezone


def customer_node(email="ada@example.com", orders=None):
    return {
        "id": "gid://shopify/Customer/7",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": email,
        "phone": None,
        "acceptsMarketing": False,
        "createdAt": "2026-01-02T10:00:00Z",
        "orders": {"edges": [{"node": node} for node in orders or []]},
    }


def order_node(number, processed_at):
    return {
        "id": f"gid://shopify/Order/{number}",
        "name": f"#{number}",
        "orderNumber": number,
        "processedAt": processed_at,
        "financialStatus": "PAID",
        "fulfillmentStatus": "UNFULFILLED",
        "totalPriceV2": {"amount": "49.99", "currencyCode": "USD"},
        "subtotalPriceV2": {"amount": "40.0", "currencyCode": "USD"},
        "totalShippingPriceV2": {"amount": "5.99", "currencyCode": "USD"},
        "totalTaxV2": {"amount": "4.0", "currencyCode": "USD"},
        "lineItems": {"edges": []},
        "shippingAddress": None,
        "statusUrl": None,
    }


def token_payload(token="token-1", expires_in=timedelta(days=30)):
    return {"accessToken": token, "expiresAt": (timezone.now() + expires_in).isoformat()}


@pytest.fixture
def logged_in_session():
    """Session storage holding a valid token and a cached customer."""
    payload = token_payload()
    return {
        "customerAccessToken": payload["accessToken"],
        "tokenExpiresAt": payload["expiresAt"],
        "customer": customer_node(),
    }
