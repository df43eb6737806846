"""Featured product operations."""

import logging

from django.db import IntegrityError, transaction

from verseandme.shopify.gid import product_gid

from .exceptions import DuplicateProduct
from .models import FeaturedProduct

logger = logging.getLogger(__name__)


def list_featured():
    return list(FeaturedProduct.objects.order_by("display_order"))


def create_featured(shopify_product_id, display_order=0) -> FeaturedProduct:
    """Feature a product.

    Raises:
        DuplicateProduct: The product is already featured
    """
    shopify_product_id = str(shopify_product_id)
    try:
        with transaction.atomic():
            product = FeaturedProduct.objects.create(
                shopify_product_id=shopify_product_id,
                display_order=display_order or 0,
            )
    except IntegrityError as e:
        raise DuplicateProduct(shopify_product_id) from e

    logger.info("Featured product %s added", shopify_product_id)
    return product


def update_featured(featured_id, is_active=None, display_order=None) -> FeaturedProduct:
    """Change visibility or position; values of the wrong type are ignored.

    Raises:
        FeaturedProduct.DoesNotExist: Unknown id
    """
    product = FeaturedProduct.objects.get(pk=featured_id)
    if isinstance(is_active, bool):
        product.is_active = is_active
    if isinstance(display_order, int) and not isinstance(display_order, bool):
        product.display_order = display_order
    product.save()
    return product


def delete_featured(featured_id) -> None:
    """Raises FeaturedProduct.DoesNotExist for an unknown id."""
    FeaturedProduct.objects.get(pk=featured_id).delete()
    logger.info("Featured product %s removed", featured_id)


def active_product_gids() -> list[str]:
    """Product global ids for the home page, in display order."""
    ids = (
        FeaturedProduct.objects.filter(is_active=True)
        .order_by("display_order")
        .values_list("shopify_product_id", flat=True)
    )
    return [product_gid(product_id) for product_id in ids]
