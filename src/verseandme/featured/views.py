"""Featured product endpoints."""

import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from verseandme.core.http import read_json

from . import services
from .auth import require_admin
from .exceptions import DuplicateProduct
from .models import FeaturedProduct

logger = logging.getLogger(__name__)

# Unknown or malformed ids fall through to the generic failure response.
LOOKUP_ERRORS = (FeaturedProduct.DoesNotExist, ValidationError, DatabaseError)


@method_decorator(csrf_exempt, name="dispatch")
@method_decorator(require_admin, name="dispatch")
class AdminFeaturedProductsView(View):
    """Manage featured products.

    GET    /api/admin/products/
    POST   /api/admin/products/  {"shopifyProductId": "123", "displayOrder": 0}
    PATCH  /api/admin/products/  {"id": "<uuid>", "isActive": false, "displayOrder": 2}
    DELETE /api/admin/products/?id=<uuid>

    All methods require ``Authorization: Bearer <ADMIN_SECRET>``.
    """

    def get(self, request):
        try:
            products = services.list_featured()
        except DatabaseError as e:
            logger.error("Error fetching products: %s", e)
            return JsonResponse({"error": "Failed to fetch products"}, status=500)
        return JsonResponse({"products": [p.to_dict() for p in products]})

    def post(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        shopify_product_id = data.get("shopifyProductId")
        if not shopify_product_id:
            return JsonResponse({"error": "Product ID is required"}, status=400)

        display_order = data.get("displayOrder")
        if not isinstance(display_order, int) or isinstance(display_order, bool):
            display_order = 0

        try:
            product = services.create_featured(shopify_product_id, display_order)
        except DuplicateProduct:
            return JsonResponse({"error": "Product already exists"}, status=409)
        except DatabaseError as e:
            logger.error("Error creating product: %s", e)
            return JsonResponse({"error": "Failed to create product"}, status=500)

        return JsonResponse({"product": product.to_dict()})

    def patch(self, request):
        data = read_json(request)
        if data is None:
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        featured_id = data.get("id")
        if not featured_id:
            return JsonResponse({"error": "Product ID is required"}, status=400)

        try:
            product = services.update_featured(
                featured_id,
                is_active=data.get("isActive"),
                display_order=data.get("displayOrder"),
            )
        except LOOKUP_ERRORS as e:
            logger.error("Error updating product: %s", e)
            return JsonResponse({"error": "Failed to update product"}, status=500)

        return JsonResponse({"product": product.to_dict()})

    def delete(self, request):
        featured_id = request.GET.get("id")
        if not featured_id:
            return JsonResponse({"error": "Product ID is required"}, status=400)

        try:
            services.delete_featured(featured_id)
        except LOOKUP_ERRORS as e:
            logger.error("Error deleting product: %s", e)
            return JsonResponse({"error": "Failed to delete product"}, status=500)

        return JsonResponse({"success": True})


class PublicFeaturedProductsView(View):
    """GET /api/featured-products/ - active product ids in display order."""

    def get(self, request):
        try:
            product_ids = services.active_product_gids()
        except DatabaseError as e:
            logger.error("Error fetching featured products: %s", e)
            return JsonResponse({"error": "Failed to fetch products"}, status=500)
        return JsonResponse({"productIds": product_ids})
