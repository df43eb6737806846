"""HTTP clients for the Shopify GraphQL APIs.

The Storefront API is called with the public storefront token and serves
catalog and customer-account queries. The Admin API is called with the
elevated admin token and is only used server-side for order creation.
"""

import logging
from typing import Any

import httpx
from django.conf import settings

from .exceptions import (
    ShopifyGraphQLError,
    ShopifyHTTPError,
    ShopifyUnavailable,
    ShopifyUserError,
)

logger = logging.getLogger(__name__)


def _storefront_path() -> str:
    return f"/api/{settings.SHOPIFY_API_VERSION}/graphql.json"


def _admin_path() -> str:
    return f"/admin/api/{settings.SHOPIFY_API_VERSION}/graphql.json"


def _get_client(headers: dict) -> httpx.Client:
    """Get a configured httpx client for the store domain."""
    return httpx.Client(
        base_url=f"https://{settings.SHOPIFY_STORE_DOMAIN}",
        timeout=settings.SHOPIFY_TIMEOUT,
        headers={"Content-Type": "application/json", **headers},
    )


def _get_storefront_client() -> httpx.Client:
    return _get_client({"X-Shopify-Storefront-Access-Token": settings.SHOPIFY_STOREFRONT_ACCESS_TOKEN})


def _get_admin_client() -> httpx.Client:
    return _get_client({"X-Shopify-Access-Token": settings.SHOPIFY_ADMIN_ACCESS_TOKEN})


def _handle_response(response: httpx.Response) -> dict:
    """Handle a GraphQL response, returning its ``data`` object."""
    if not response.is_success:
        logger.error("Shopify HTTP error %s: %s", response.status_code, response.text)
        raise ShopifyHTTPError(response.status_code, response.text)

    result = response.json()
    if result.get("errors"):
        logger.error("Shopify GraphQL errors: %s", result["errors"])
        raise ShopifyGraphQLError(result["errors"])

    return result.get("data") or {}


def _execute(client_factory, path: str, query: str, variables: dict | None) -> dict:
    payload: dict[str, Any] = {"query": query, "variables": variables or {}}
    try:
        with client_factory() as client:
            response = client.post(path, json=payload)
    except httpx.RequestError as e:
        logger.error("Shopify API unavailable: %s", e)
        raise ShopifyUnavailable(str(e)) from e
    return _handle_response(response)


def storefront_query(query: str, variables: dict | None = None) -> dict:
    """Run a Storefront API query or mutation.

    Raises:
        ShopifyUnavailable: On transport failure
        ShopifyHTTPError: On a non-2xx response
        ShopifyGraphQLError: When the response carries GraphQL errors
    """
    return _execute(_get_storefront_client, _storefront_path(), query, variables)


def admin_query(query: str, variables: dict | None = None) -> dict:
    """Run an Admin API query or mutation. Raises like ``storefront_query``."""
    return _execute(_get_admin_client, _admin_path(), query, variables)


def raise_for_user_errors(payload: dict | None, key: str = "userErrors", error_class=ShopifyUserError):
    """Raise ``error_class`` with the first user error in ``payload[key]``."""
    errors = (payload or {}).get(key) or []
    if errors:
        raise error_class(errors[0].get("message", "Unknown error"), errors)
