"""Cart URL patterns."""

from django.urls import path

from . import views

app_name = "cart"

urlpatterns = [
    path("", views.CartView.as_view(), name="detail"),
    path("items/", views.CartItemsView.as_view(), name="add-item"),
    path("items/<str:item_id>/", views.CartItemDetailView.as_view(), name="item"),
    path("items/<str:item_id>/save/", views.SaveForLaterView.as_view(), name="save-for-later"),
    path("clear/", views.CartClearView.as_view(), name="clear"),
    path("saved/<str:item_id>/", views.SavedItemView.as_view(), name="saved-item"),
    path("saved/<str:item_id>/move/", views.MoveToCartView.as_view(), name="move-to-cart"),
]
