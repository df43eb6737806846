"""Customer accounts backed by the Shopify Storefront customer API."""
