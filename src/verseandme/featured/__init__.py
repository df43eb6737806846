"""Featured products: an admin-curated list of Shopify products for the home page."""
