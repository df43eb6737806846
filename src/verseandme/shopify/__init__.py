"""Shopify GraphQL access.

Thin httpx clients for the Storefront API (public catalog and customer
accounts) and the Admin API (draft orders, customer lookup).
"""
