"""Store module for e-commerce functionality.

Provides the session cart, saved-for-later list, checkout with Stripe and
Shopify order creation for paid checkouts.
"""
