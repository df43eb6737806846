"""Test settings."""

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key-not-for-production"
DEBUG = True

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

SHOPIFY_STORE_DOMAIN = "test-shop.myshopify.com"
SHOPIFY_STOREFRONT_ACCESS_TOKEN = "storefront-token"
SHOPIFY_ADMIN_ACCESS_TOKEN = "admin-token"

STRIPE_SECRET_KEY = "sk_test_123"
STRIPE_PUBLISHABLE_KEY = "pk_test_123"

ADMIN_SECRET = "test-admin-secret"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
