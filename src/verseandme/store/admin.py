from django.contrib import admin

from . import orders
from .models import PendingShopifyOrder


@admin.action(description="Retry Shopify order submission")
def retry_submission(modeladmin, request, queryset):
    submitted = sum(
        1 for pending in queryset.exclude(status=PendingShopifyOrder.Status.COMPLETED)
        if orders.submit_pending_order(pending)
    )
    modeladmin.message_user(request, f"{submitted} order(s) created in Shopify.")


@admin.register(PendingShopifyOrder)
class PendingShopifyOrderAdmin(admin.ModelAdmin):
    list_display = ["payment_intent_id", "status", "attempts", "shopify_order_name", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["payment_intent_id", "shopify_order_name"]
    readonly_fields = ["payment_intent_id", "shopify_order_id", "shopify_order_name", "created_at", "updated_at"]
    actions = [retry_submission]
