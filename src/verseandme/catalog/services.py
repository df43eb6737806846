"""Read-only catalog queries against the Storefront API.

Every call goes to Shopify; nothing is cached and no pagination cursor is
followed beyond the first page.
"""

import logging
from dataclasses import asdict, dataclass, field

from verseandme.shopify.client import storefront_query
from verseandme.shopify.exceptions import ShopifyGraphQLError
from verseandme.shopify.gid import product_gid
from verseandme.shopify.types import Money, edges

from .exceptions import CatalogQueryError, ProductNotFound

logger = logging.getLogger(__name__)

PAGE_SIZE = 20

PRODUCTS_QUERY = """
  query products($first: Int!) {
    products(first: $first) {
      edges {
        node {
          id
          title
          description
          vendor
          productType
          tags
          createdAt
          updatedAt
          options {
            name
            values
          }
          images(first: 5) {
            edges {
              node {
                url
              }
            }
          }
          variants(first: 20) {
            edges {
              node {
                id
                title
                price {
                  amount
                  currencyCode
                }
                compareAtPrice {
                  amount
                  currencyCode
                }
                availableForSale
                quantityAvailable
                selectedOptions {
                  name
                  value
                }
                image {
                  url
                }
              }
            }
          }
        }
      }
    }
  }
"""

PRODUCT_QUERY = """
  query product($id: ID!) {
    product(id: $id) {
      id
      title
      description
      images(first: 3) {
        edges {
          node {
            url
          }
        }
      }
      variants(first: 10) {
        edges {
          node {
            id
            title
            price {
              amount
              currencyCode
            }
            availableForSale
          }
        }
      }
    }
  }
"""


@dataclass
class ProductVariant:
    id: str
    title: str
    price: Money
    available_for_sale: bool
    compare_at_price: Money | None = None
    quantity_available: int | None = None
    selected_options: list[tuple[str, str]] = field(default_factory=list)
    image: str | None = None

    @classmethod
    def from_node(cls, node: dict) -> "ProductVariant":
        return cls(
            id=node["id"],
            title=node["title"],
            price=Money.from_node(node["price"]),
            available_for_sale=node.get("availableForSale", False),
            compare_at_price=Money.from_node(node.get("compareAtPrice")),
            quantity_available=node.get("quantityAvailable"),
            selected_options=[(o["name"], o["value"]) for o in node.get("selectedOptions") or []],
            image=(node.get("image") or {}).get("url"),
        )


@dataclass
class Product:
    id: str
    title: str
    description: str
    images: list[str]
    variants: list[ProductVariant]
    vendor: str | None = None
    product_type: str | None = None
    tags: list[str] = field(default_factory=list)
    options: list[dict] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_node(cls, node: dict) -> "Product":
        return cls(
            id=node["id"],
            title=node["title"],
            description=node.get("description", ""),
            images=[image["url"] for image in edges(node.get("images"))],
            variants=[ProductVariant.from_node(v) for v in edges(node.get("variants"))],
            vendor=node.get("vendor"),
            product_type=node.get("productType"),
            tags=node.get("tags") or [],
            options=node.get("options") or [],
            created_at=node.get("createdAt"),
            updated_at=node.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["variants"] = [
            {
                **asdict(v),
                "price": v.price.to_dict(),
                "compare_at_price": v.compare_at_price.to_dict() if v.compare_at_price else None,
                "selected_options": [{"name": n, "value": val} for n, val in v.selected_options],
            }
            for v in self.variants
        ]
        return data


def list_products() -> list[Product]:
    """Fetch the first page of products with their variants and images.

    Raises:
        CatalogQueryError: Shopify reported GraphQL errors
    """
    try:
        data = storefront_query(PRODUCTS_QUERY, {"first": PAGE_SIZE})
    except ShopifyGraphQLError as e:
        raise CatalogQueryError(e.errors) from e

    products = [Product.from_node(node) for node in edges(data.get("products"))]
    if not products:
        logger.warning("No products found in store")
    logger.info("Fetched %d products", len(products))
    return products


def get_product(product_id) -> Product:
    """Fetch one product by its numeric id or global id.

    Raises:
        CatalogQueryError: Shopify reported GraphQL errors
        ProductNotFound: The product is absent from the response
    """
    gid = product_gid(product_id)
    try:
        data = storefront_query(PRODUCT_QUERY, {"id": gid})
    except ShopifyGraphQLError as e:
        logger.error("GraphQL errors for product %s", gid)
        raise CatalogQueryError(e.errors) from e

    node = data.get("product")
    if not node:
        raise ProductNotFound(gid)
    return Product.from_node(node)
