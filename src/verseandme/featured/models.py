"""Featured product models."""

import uuid

from django.db import models


class FeaturedProduct(models.Model):
    """A Shopify product shown on the home page.

    ``shopify_product_id`` is the numeric product id; it is not checked
    against the catalog.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shopify_product_id = models.CharField(max_length=64, unique=True)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order"]

    def __str__(self):
        return self.shopify_product_id

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "shopifyProductId": self.shopify_product_id,
            "displayOrder": self.display_order,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
