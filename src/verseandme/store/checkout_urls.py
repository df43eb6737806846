"""Checkout URL patterns."""

from django.urls import path

from . import views

app_name = "checkout"

urlpatterns = [
    path("", views.CheckoutView.as_view(), name="detail"),
    path("shipping/", views.ShippingView.as_view(), name="shipping"),
    path("back/", views.BackToShippingView.as_view(), name="back"),
    path("complete/", views.CompletePaymentView.as_view(), name="complete"),
]
