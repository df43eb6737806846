"""Shared pytest fixtures for verseandme tests."""

import json
from unittest.mock import patch

import httpx
import pytest
from django.conf import settings
from django.test import Client


class FakeShopify:
    """Scripted Shopify GraphQL endpoint served through ``httpx.MockTransport``.

    Queue one reply per expected request; every request is recorded in
    ``calls`` as ``(path, query, variables, headers)``.
    """

    def __init__(self):
        self.calls = []
        self._replies = []

    def reply(self, data=None, errors=None, status=200):
        body = {}
        if data is not None:
            body["data"] = data
        if errors is not None:
            body["errors"] = errors
        self._replies.append(httpx.Response(status, json=body))

    def fail(self, message="connection refused"):
        self._replies.append(message)

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append((request.url.path, payload["query"], payload["variables"], request.headers))
        if not self._replies:
            raise AssertionError(f"Unexpected Shopify request: {payload['query'][:60]}")
        reply = self._replies.pop(0)
        if isinstance(reply, str):
            raise httpx.ConnectError(reply, request=request)
        return reply

    def operations(self):
        """GraphQL operation names of the recorded calls, in order."""
        names = []
        for _, query, _, _ in self.calls:
            words = query.split()
            names.append(words[1].split("(")[0])
        return names


@pytest.fixture
def shopify():
    """Route all Shopify API calls to a ``FakeShopify``."""
    fake = FakeShopify()

    def _client(headers):
        return httpx.Client(
            base_url=f"https://{settings.SHOPIFY_STORE_DOMAIN}",
            headers={"Content-Type": "application/json", **headers},
            transport=httpx.MockTransport(fake.handler),
        )

    with patch("verseandme.shopify.client._get_client", side_effect=_client):
        yield fake


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def session():
    """A plain dict standing in for request.session."""
    return {}
