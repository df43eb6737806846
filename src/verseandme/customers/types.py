"""Read-only customer projection built from the Storefront ``customer`` query."""

from dataclasses import dataclass, field

from verseandme.shopify.types import Money, edges


@dataclass
class ShippingAddress:
    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    province: str | None = None
    country: str | None = None
    zip: str | None = None

    @classmethod
    def from_node(cls, node: dict | None) -> "ShippingAddress | None":
        if not node:
            return None
        return cls(
            first_name=node.get("firstName"),
            last_name=node.get("lastName"),
            address1=node.get("address1"),
            address2=node.get("address2"),
            city=node.get("city"),
            province=node.get("province"),
            country=node.get("country"),
            zip=node.get("zip"),
        )


@dataclass
class OrderLineItem:
    title: str
    quantity: int
    variant_id: str | None
    variant_title: str | None
    image_url: str | None
    unit_price: Money | None

    @classmethod
    def from_node(cls, node: dict) -> "OrderLineItem":
        variant = node.get("variant") or {}
        return cls(
            title=node["title"],
            quantity=node["quantity"],
            variant_id=variant.get("id"),
            variant_title=variant.get("title"),
            image_url=(variant.get("image") or {}).get("url"),
            unit_price=Money.from_node(variant.get("priceV2")),
        )


@dataclass
class Order:
    id: str
    name: str
    order_number: int
    processed_at: str
    financial_status: str | None
    fulfillment_status: str | None
    total: Money
    subtotal: Money | None
    shipping: Money | None
    tax: Money | None
    line_items: list[OrderLineItem] = field(default_factory=list)
    shipping_address: ShippingAddress | None = None
    status_url: str | None = None

    @classmethod
    def from_node(cls, node: dict) -> "Order":
        return cls(
            id=node["id"],
            name=node["name"],
            order_number=node["orderNumber"],
            processed_at=node["processedAt"],
            financial_status=node.get("financialStatus"),
            fulfillment_status=node.get("fulfillmentStatus"),
            total=Money.from_node(node["totalPriceV2"]),
            subtotal=Money.from_node(node.get("subtotalPriceV2")),
            shipping=Money.from_node(node.get("totalShippingPriceV2")),
            tax=Money.from_node(node.get("totalTaxV2")),
            line_items=[OrderLineItem.from_node(n) for n in edges(node.get("lineItems"))],
            shipping_address=ShippingAddress.from_node(node.get("shippingAddress")),
            status_url=node.get("statusUrl"),
        )


@dataclass
class Customer:
    id: str
    email: str
    first_name: str | None
    last_name: str | None
    phone: str | None
    accepts_marketing: bool
    created_at: str | None
    orders: list[Order] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: dict) -> "Customer":
        orders = [Order.from_node(n) for n in edges(node.get("orders"))]
        # Shopify already sorts by PROCESSED_AT reverse; keep it true for cached data too
        orders.sort(key=lambda o: o.processed_at, reverse=True)
        return cls(
            id=node["id"],
            email=node["email"],
            first_name=node.get("firstName"),
            last_name=node.get("lastName"),
            phone=node.get("phone"),
            accepts_marketing=node.get("acceptsMarketing", False),
            created_at=node.get("createdAt"),
            orders=orders,
        )
