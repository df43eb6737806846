"""Catalog module: read-only product queries against Shopify."""
