"""Store models."""

from django.db import models


class PendingShopifyOrder(models.Model):
    """A paid checkout waiting to become a Shopify order.

    Written when Stripe confirms the payment; the Shopify order is created
    from ``payload`` after commit and retried while ``status`` is not
    completed.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    payment_intent_id = models.CharField(max_length=255, unique=True)
    payload = models.JSONField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    attempts = models.PositiveIntegerField(default=0)
    last_error = models.TextField(blank=True)
    shopify_order_id = models.CharField(max_length=255, blank=True)
    shopify_order_name = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "pending Shopify order"

    def __str__(self):
        return f"{self.payment_intent_id} ({self.status})"

    def mark_completed(self, order_id: str, order_name: str):
        self.status = self.Status.COMPLETED
        self.shopify_order_id = order_id
        self.shopify_order_name = order_name
        self.last_error = ""
        self.save(update_fields=["status", "attempts", "shopify_order_id", "shopify_order_name", "last_error", "updated_at"])

    def mark_failed(self, error: str):
        self.status = self.Status.FAILED
        self.last_error = error
        self.save(update_fields=["status", "attempts", "last_error", "updated_at"])
