"""Session-backed cart and saved-for-later lists.

Both stores keep their line items in memory and write the whole list as a
JSON array to their storage key after every mutation. The list is read back
once, when the store is constructed.
"""

import json
import logging
import time
from dataclasses import dataclass, replace
from decimal import Decimal

from verseandme.shopify.gid import numeric_id

logger = logging.getLogger(__name__)

CART_KEY = "verseandme_cart"
SAVED_KEY = "savedForLater"


def normalize_options(options) -> tuple[tuple[str, str], ...]:
    """Return variant options as an ordered tuple of (name, value) pairs.

    Accepts a mapping (insertion order kept), a list of
    ``{"name", "value"}`` dicts, or a list of pairs.
    """
    if not options:
        return ()
    if isinstance(options, dict):
        return tuple((str(k), str(v)) for k, v in options.items())
    pairs = []
    for option in options:
        if isinstance(option, dict):
            pairs.append((str(option["name"]), str(option["value"])))
        else:
            name, value = option
            pairs.append((str(name), str(value)))
    return tuple(pairs)


def _decimal(value) -> Decimal | None:
    if value is None or value == "":
        return None
    return Decimal(str(value))


@dataclass
class CartLineItem:
    """One product variant in the cart."""

    product_id: str
    variant_id: str
    title: str
    unit_price: Decimal
    quantity: int = 1
    options: tuple[tuple[str, str], ...] = ()
    image: str = ""
    description: str = ""
    compare_at_price: Decimal | None = None
    vendor: str | None = None
    product_type: str | None = None
    sku: str | None = None
    available_for_sale: bool = True
    quantity_available: int | None = None
    id: str = ""

    def __post_init__(self):
        self.options = normalize_options(self.options)
        self.unit_price = _decimal(self.unit_price)
        self.compare_at_price = _decimal(self.compare_at_price)
        self.quantity = int(self.quantity)

    @property
    def merge_key(self) -> tuple:
        return (self.variant_id, self.options)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "options": [{"name": name, "value": value} for name, value in self.options],
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "compare_at_price": str(self.compare_at_price) if self.compare_at_price is not None else None,
            "vendor": self.vendor,
            "product_type": self.product_type,
            "sku": self.sku,
            "available_for_sale": self.available_for_sale,
            "quantity_available": self.quantity_available,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        return cls(
            id=data.get("id", ""),
            product_id=data["product_id"],
            variant_id=data["variant_id"],
            title=data["title"],
            description=data.get("description", ""),
            image=data.get("image", ""),
            options=data.get("options"),
            quantity=data.get("quantity", 1),
            unit_price=data["unit_price"],
            compare_at_price=data.get("compare_at_price"),
            vendor=data.get("vendor"),
            product_type=data.get("product_type"),
            sku=data.get("sku"),
            available_for_sale=data.get("available_for_sale", True),
            quantity_available=data.get("quantity_available"),
        )


def _load(storage, key: str) -> list[CartLineItem]:
    raw = storage.get(key)
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise TypeError("stored value is not a list of line items")
        return [CartLineItem.from_dict(item) for item in data]
    except (ValueError, TypeError, KeyError, ArithmeticError) as e:
        logger.error("Error loading %s: %s", key, e)
        return []


class CartStore:
    """The shopping cart for one browser session."""

    def __init__(self, storage):
        self.storage = storage
        self.items: list[CartLineItem] = _load(storage, CART_KEY)

    def _persist(self) -> None:
        self.storage[CART_KEY] = json.dumps([item.to_dict() for item in self.items])

    def _generate_id(self, variant_id: str) -> str:
        prefix = numeric_id(variant_id)
        existing = {item.id for item in self.items}
        stamp = int(time.time() * 1000)
        while f"{prefix}-{stamp}" in existing:
            stamp += 1
        return f"{prefix}-{stamp}"

    def get(self, item_id: str) -> CartLineItem | None:
        return next((item for item in self.items if item.id == item_id), None)

    def add_to_cart(self, item: CartLineItem) -> CartLineItem:
        """Add a line, merging into an existing one with the same variant and options."""
        if item.quantity < 1:
            raise ValueError("Quantity must be at least 1")

        for index, existing in enumerate(self.items):
            if existing.merge_key == item.merge_key:
                merged = replace(existing, quantity=existing.quantity + item.quantity)
                self.items[index] = merged
                self._persist()
                return merged

        added = replace(item, id=self._generate_id(item.variant_id))
        self.items.append(added)
        self._persist()
        return added

    def remove_from_cart(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]
        self._persist()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line.

        Stock (``quantity_available``) is not enforced here.
        """
        if quantity <= 0:
            self.remove_from_cart(item_id)
            return

        self.items = [replace(item, quantity=quantity) if item.id == item_id else item for item in self.items]
        self._persist()

    def clear_cart(self) -> None:
        self.items = []
        self._persist()

    @property
    def cart_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def cart_total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def savings(self) -> Decimal:
        """Total discount against compare-at prices."""
        return sum(
            ((item.compare_at_price - item.unit_price) * item.quantity for item in self.items if item.compare_at_price),
            Decimal("0"),
        )

    def __len__(self):
        return len(self.items)


class SavedForLaterStore:
    """Items moved out of the cart to buy later (quantity is not kept)."""

    def __init__(self, storage):
        self.storage = storage
        self.items: list[CartLineItem] = _load(storage, SAVED_KEY)

    def _persist(self) -> None:
        self.storage[SAVED_KEY] = json.dumps([item.to_dict() for item in self.items])

    def save_for_later(self, cart: CartStore, item_id: str) -> CartLineItem | None:
        item = cart.get(item_id)
        if item is None:
            return None
        saved = replace(item, quantity=1)
        self.items.append(saved)
        self._persist()
        cart.remove_from_cart(item_id)
        return saved

    def move_to_cart(self, cart: CartStore, item_id: str) -> CartLineItem | None:
        saved = next((item for item in self.items if item.id == item_id), None)
        if saved is None:
            return None
        self.remove_saved(item_id)
        return cart.add_to_cart(replace(saved, quantity=1))

    def remove_saved(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]
        self._persist()
