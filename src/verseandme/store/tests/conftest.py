"""Shared fixtures for store tests."""

from decimal import Decimal

import pytest

from ..cart import CartLineItem, CartStore


def line_item(variant_id="gid://shopify/ProductVariant/11", price="20.00", quantity=1, options=None, **kwargs):
    return CartLineItem(
        product_id="gid://shopify/Product/1",
        variant_id=variant_id,
        title="Ocean Verse Print",
        unit_price=Decimal(price),
        quantity=quantity,
        options=options if options is not None else {"Size": "A4"},
        **kwargs,
    )


@pytest.fixture
def cart(session):
    return CartStore(session)


@pytest.fixture
def shipping_address():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "address1": "1 Main St",
        "address2": "",
        "city": "Springfield",
        "province": "IL",
        "country": "US",
        "zip": "62701",
        "phone": "",
    }
