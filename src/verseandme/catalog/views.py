"""Public catalog endpoints."""

import logging

from django.http import JsonResponse
from django.views import View

from verseandme.shopify.exceptions import ShopifyError

from . import services
from .exceptions import CatalogQueryError, ProductNotFound

logger = logging.getLogger(__name__)


class ProductListView(View):
    """GET /api/products/ - first page of products."""

    def get(self, request):
        try:
            products = services.list_products()
        except CatalogQueryError as e:
            return JsonResponse({"error": str(e)}, status=502)
        except ShopifyError as e:
            logger.error("Failed to fetch products: %s", e)
            return JsonResponse({"error": "Failed to fetch products. Please try again."}, status=503)

        return JsonResponse({"products": [p.to_dict() for p in products]})


class ProductDetailView(View):
    """GET /api/products/<id>/ - a single product."""

    def get(self, request, product_id):
        try:
            product = services.get_product(product_id)
        except ProductNotFound:
            return JsonResponse({"error": "Product not found. Verify the product ID."}, status=404)
        except CatalogQueryError:
            return JsonResponse({"error": "Failed to fetch product data."}, status=502)
        except ShopifyError as e:
            logger.error("Failed to fetch product %s: %s", product_id, e)
            return JsonResponse({"error": "An error occurred while fetching the product."}, status=503)

        return JsonResponse({"product": product.to_dict()})
