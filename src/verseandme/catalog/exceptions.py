"""Catalog exceptions."""


class CatalogQueryError(Exception):
    """Shopify reported GraphQL-level errors for a catalog query."""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"GraphQL Error: {errors}")


class ProductNotFound(Exception):
    """The requested product is not in the Storefront response."""

    def __init__(self, gid: str):
        self.gid = gid
        super().__init__(f"Product not found: {gid}")
