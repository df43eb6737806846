"""Shopify global id helpers."""

import re

GID_PREFIX = "gid://shopify/"


def product_gid(product_id) -> str:
    """Format a numeric product id as a Product global id."""
    product_id = str(product_id)
    if product_id.startswith(GID_PREFIX):
        return product_id
    return f"{GID_PREFIX}Product/{product_id}"


def variant_gid(variant_id) -> str:
    """Format any variant reference as a ProductVariant global id.

    Accepts a bare number, a numeric string or a full global id; only the
    digits are kept.
    """
    numeric_id = re.sub(r"\D", "", str(variant_id))
    return f"{GID_PREFIX}ProductVariant/{numeric_id}"


def numeric_id(gid: str) -> str:
    """Return the trailing id segment of a global id."""
    return str(gid).rsplit("/", 1)[-1]
