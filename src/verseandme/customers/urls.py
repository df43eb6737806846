"""Customer account URL patterns."""

from django.urls import path

from . import views

app_name = "customers"

urlpatterns = [
    path("", views.AccountView.as_view(), name="account"),
    path("login/", views.LoginView.as_view(), name="login"),
    path("logout/", views.LogoutView.as_view(), name="logout"),
    path("register/", views.RegisterView.as_view(), name="register"),
    path("recover/", views.RecoverPasswordView.as_view(), name="recover"),
    path("refresh/", views.RefreshView.as_view(), name="refresh"),
]
