"""Tests for catalog queries and endpoints."""

from decimal import Decimal

import pytest
from django.urls import reverse

from ..exceptions import CatalogQueryError, ProductNotFound
from ..services import PAGE_SIZE, get_product, list_products


def product_node(product_id="1", title="Ocean Verse Print"):
    return {
        "id": f"gid://shopify/Product/{product_id}",
        "title": title,
        "description": "A framed poem",
        "vendor": "Verse & Me",
        "productType": "Print",
        "tags": ["poetry"],
        "options": [{"name": "Size", "values": ["A4", "A3"]}],
        "images": {"edges": [{"node": {"url": "https://cdn.example.com/1.jpg"}}]},
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/ProductVariant/11",
                        "title": "A4",
                        "price": {"amount": "20.0", "currencyCode": "USD"},
                        "compareAtPrice": {"amount": "25.0", "currencyCode": "USD"},
                        "availableForSale": True,
                        "quantityAvailable": 3,
                        "selectedOptions": [{"name": "Size", "value": "A4"}],
                        "image": None,
                    }
                }
            ]
        },
    }


class TestListProducts:
    def test_single_request_for_first_page(self, shopify):
        """One request, sized to the page, no cursor followed."""
        shopify.reply({"products": {"edges": [{"node": product_node()}], "pageInfo": {"hasNextPage": True}}})

        products = list_products()

        assert len(shopify.calls) == 1
        assert shopify.calls[0][2] == {"first": PAGE_SIZE}
        assert products[0].title == "Ocean Verse Print"
        variant = products[0].variants[0]
        assert variant.price.amount == Decimal("20.0")
        assert variant.compare_at_price.amount == Decimal("25.0")
        assert variant.selected_options == [("Size", "A4")]

    def test_empty_store(self, shopify):
        shopify.reply({"products": {"edges": []}})

        assert list_products() == []

    def test_graphql_errors(self, shopify):
        shopify.reply(errors=[{"message": "Throttled"}])

        with pytest.raises(CatalogQueryError) as exc_info:
            list_products()

        assert exc_info.value.errors == [{"message": "Throttled"}]


class TestGetProduct:
    def test_numeric_id_becomes_gid(self, shopify):
        shopify.reply({"product": product_node("42")})

        product = get_product("42")

        assert shopify.calls[0][2] == {"id": "gid://shopify/Product/42"}
        assert product.id == "gid://shopify/Product/42"
        assert product.images == ["https://cdn.example.com/1.jpg"]

    def test_absent_product(self, shopify):
        shopify.reply({"product": None})

        with pytest.raises(ProductNotFound):
            get_product("999")


@pytest.mark.django_db
class TestCatalogViews:
    def test_product_list(self, client, shopify):
        shopify.reply({"products": {"edges": [{"node": product_node()}]}})

        response = client.get(reverse("catalog:product-list"))

        assert response.status_code == 200
        product = response.json()["products"][0]
        assert product["variants"][0]["price"] == {"amount": "20.0", "currency_code": "USD"}

    def test_product_list_query_error_is_502(self, client, shopify):
        shopify.reply(errors=[{"message": "Throttled"}])

        response = client.get(reverse("catalog:product-list"))

        assert response.status_code == 502

    def test_product_list_unavailable_is_503(self, client, shopify):
        shopify.fail()

        response = client.get(reverse("catalog:product-list"))

        assert response.status_code == 503

    def test_missing_product_is_404(self, client, shopify):
        shopify.reply({"product": None})

        response = client.get(reverse("catalog:product-detail", args=["999"]))

        assert response.status_code == 404
