"""Storefront API URL patterns used by the browser checkout."""

from django.urls import path

from . import api_views

urlpatterns = [
    path("create-payment-intent/", api_views.CreatePaymentIntentView.as_view(), name="create-payment-intent"),
    path("create-shopify-order/", api_views.CreateShopifyOrderView.as_view(), name="create-shopify-order"),
    path("order-details/", api_views.OrderDetailsView.as_view(), name="order-details"),
]
