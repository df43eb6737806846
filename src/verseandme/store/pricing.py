"""Order pricing policy.

One place for the shipping and tax rules shown on the cart page and charged
at checkout: free shipping over a threshold (otherwise a flat fee) and a flat
tax rate on the subtotal. No tax-jurisdiction logic.
"""

from decimal import ROUND_HALF_EVEN, Decimal
from typing import NamedTuple

from django.conf import settings


class OrderTotals(NamedTuple):
    """Result of order total calculation."""

    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {name: str(value) for name, value in self._asdict().items()}


def round_money(amount: Decimal, places: int = 2) -> Decimal:
    """Round to specified decimal places using banker's rounding."""
    quantize_str = "0." + "0" * places
    return amount.quantize(Decimal(quantize_str), rounding=ROUND_HALF_EVEN)


def _setting(name: str, default: str) -> Decimal:
    return Decimal(str(getattr(settings, name, default)))


def shipping_for(subtotal: Decimal) -> Decimal:
    """Flat shipping fee, waived when the subtotal is over the threshold."""
    if subtotal > _setting("STORE_FREE_SHIPPING_THRESHOLD", "50"):
        return Decimal("0.00")
    return round_money(_setting("STORE_FLAT_SHIPPING", "5.99"))


def tax_for(subtotal: Decimal) -> Decimal:
    return round_money(subtotal * _setting("STORE_TAX_RATE", "0.10"))


def calculate_totals(subtotal: Decimal) -> OrderTotals:
    """Calculate shipping, tax and grand total for a cart subtotal.

    Examples:
        40.00 -> shipping 5.99, tax 4.00, total 49.99
        60.00 -> shipping 0.00, tax 6.00, total 66.00
    """
    subtotal = round_money(Decimal(str(subtotal)))
    shipping = shipping_for(subtotal)
    tax = tax_for(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )


def to_minor_units(amount: Decimal) -> int:
    """Convert a currency amount to integer cents for the payment gateway."""
    return int(round_money(amount * 100, places=0))
