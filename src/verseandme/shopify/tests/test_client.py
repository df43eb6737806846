"""Tests for the Shopify GraphQL clients."""

import httpx
import pytest

from ..client import _handle_response, admin_query, raise_for_user_errors, storefront_query
from ..exceptions import (
    ShopifyGraphQLError,
    ShopifyHTTPError,
    ShopifyUnavailable,
    ShopifyUserError,
)
from ..gid import numeric_id, product_gid, variant_gid


class TestHandleResponse:
    """Tests for _handle_response."""

    def test_returns_data(self):
        response = httpx.Response(200, json={"data": {"shop": {"name": "Verse"}}})
        assert _handle_response(response) == {"shop": {"name": "Verse"}}

    def test_non_2xx_raises_http_error(self):
        response = httpx.Response(401, text="Invalid API key")

        with pytest.raises(ShopifyHTTPError) as exc_info:
            _handle_response(response)

        assert exc_info.value.status_code == 401
        assert "Invalid API key" in str(exc_info.value)

    def test_graphql_errors_raise(self):
        errors = [{"message": "Field 'nope' doesn't exist"}]
        response = httpx.Response(200, json={"errors": errors, "data": None})

        with pytest.raises(ShopifyGraphQLError) as exc_info:
            _handle_response(response)

        assert exc_info.value.errors == errors


class TestQueries:
    """Requests go to the right endpoint with the right token."""

    def test_storefront_query_uses_storefront_endpoint(self, shopify):
        shopify.reply({"ok": True})

        assert storefront_query("query shop { shop { name } }", {"a": 1}) == {"ok": True}

        path, _, variables, headers = shopify.calls[0]
        assert path == "/api/2025-01/graphql.json"
        assert variables == {"a": 1}
        assert headers["X-Shopify-Storefront-Access-Token"] == "storefront-token"

    def test_admin_query_uses_admin_endpoint(self, shopify):
        shopify.reply({"ok": True})

        admin_query("query shop { shop { name } }")

        path, _, variables, headers = shopify.calls[0]
        assert path == "/admin/api/2025-01/graphql.json"
        assert variables == {}
        assert headers["X-Shopify-Access-Token"] == "admin-token"

    def test_transport_failure_raises_unavailable(self, shopify):
        shopify.fail("connection refused")

        with pytest.raises(ShopifyUnavailable):
            storefront_query("query shop { shop { name } }")


class TestUserErrors:
    def test_no_errors_passes(self):
        raise_for_user_errors({"userErrors": []})

    def test_first_message_is_raised(self):
        payload = {"customerUserErrors": [{"message": "Unidentified customer"}, {"message": "second"}]}

        with pytest.raises(ShopifyUserError) as exc_info:
            raise_for_user_errors(payload, "customerUserErrors")

        assert exc_info.value.message == "Unidentified customer"
        assert len(exc_info.value.errors) == 2


class TestGlobalIds:
    def test_product_gid(self):
        assert product_gid(123) == "gid://shopify/Product/123"
        assert product_gid("gid://shopify/Product/123") == "gid://shopify/Product/123"

    @pytest.mark.parametrize("value", ["456", 456, "gid://shopify/ProductVariant/456"])
    def test_variant_gid_keeps_digits(self, value):
        assert variant_gid(value) == "gid://shopify/ProductVariant/456"

    def test_numeric_id(self):
        assert numeric_id("gid://shopify/ProductVariant/789") == "789"
