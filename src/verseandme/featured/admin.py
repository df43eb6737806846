from django.contrib import admin

from .models import FeaturedProduct


@admin.register(FeaturedProduct)
class FeaturedProductAdmin(admin.ModelAdmin):
    list_display = ["shopify_product_id", "display_order", "is_active", "updated_at"]
    list_editable = ["display_order", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["shopify_product_id"]
    ordering = ["display_order"]
