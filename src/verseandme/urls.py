"""URL configuration for the Verse & Me storefront."""

from django.contrib import admin
from django.urls import include, path

from verseandme.core.views import health_check
from verseandme.featured.urls import admin_urlpatterns as featured_admin_patterns
from verseandme.store.api_views import OrderConfirmationView

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin
    path("admin/", admin.site.urls),

    # Catalog
    path("api/products/", include("verseandme.catalog.urls", namespace="catalog")),

    # Customer accounts
    path("account/", include("verseandme.customers.urls", namespace="customers")),

    # Cart and checkout
    path("cart/", include("verseandme.store.urls", namespace="cart")),
    path("checkout/", include("verseandme.store.checkout_urls", namespace="checkout")),
    path("order-confirmation/", OrderConfirmationView.as_view(), name="order-confirmation"),

    # Payment and order API used by the browser checkout
    path("api/", include("verseandme.store.api_urls")),

    # Featured products
    path("api/admin/products/", include((featured_admin_patterns, "featured-admin"))),
    path("api/featured-products/", include("verseandme.featured.urls", namespace="featured")),
]
