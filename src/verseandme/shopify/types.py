"""Value types shared by the Storefront API projections."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Money:
    """A Shopify MoneyV2 value."""

    amount: Decimal
    currency_code: str

    @classmethod
    def from_node(cls, node: dict | None) -> "Money | None":
        if not node:
            return None
        return cls(amount=Decimal(str(node["amount"])), currency_code=node["currencyCode"])

    def to_dict(self) -> dict:
        return {"amount": str(self.amount), "currency_code": self.currency_code}


def edges(connection: dict | None) -> list[dict]:
    """Flatten a GraphQL connection into its list of nodes."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges", [])]
