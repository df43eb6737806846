"""Featured product URL patterns."""

from django.urls import path

from . import views

app_name = "featured"

admin_urlpatterns = [
    path("", views.AdminFeaturedProductsView.as_view(), name="admin-products"),
]

urlpatterns = [
    path("", views.PublicFeaturedProductsView.as_view(), name="public-products"),
]
