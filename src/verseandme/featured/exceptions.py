"""Featured product exceptions."""


class DuplicateProduct(Exception):
    """The Shopify product is already featured."""

    def __init__(self, shopify_product_id: str):
        self.shopify_product_id = shopify_product_id
        super().__init__(f"Product already exists: {shopify_product_id}")
