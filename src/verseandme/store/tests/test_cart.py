"""Tests for CartStore and SavedForLaterStore."""

import json
from decimal import Decimal

import pytest

from ..cart import CART_KEY, SAVED_KEY, CartStore, SavedForLaterStore
from .conftest import line_item


class TestAddToCart:
    def test_same_variant_and_options_merge(self, cart):
        """Two adds of the same variant give one line with the summed quantity."""
        cart.add_to_cart(line_item(quantity=2))
        cart.add_to_cart(line_item(quantity=3))

        assert len(cart) == 1
        assert cart.items[0].quantity == 5
        assert cart.cart_count == 5

    def test_different_options_stay_separate(self, cart):
        cart.add_to_cart(line_item(options={"Size": "A4"}))
        cart.add_to_cart(line_item(options={"Size": "A3"}))

        assert len(cart) == 2
        assert cart.items[0].id != cart.items[1].id

    def test_option_formats_compare_equal(self, cart):
        cart.add_to_cart(line_item(options={"Size": "A4"}))
        cart.add_to_cart(line_item(options=[{"name": "Size", "value": "A4"}]))

        assert len(cart) == 1

    def test_quantity_below_one_rejected(self, cart):
        with pytest.raises(ValueError):
            cart.add_to_cart(line_item(quantity=0))

        assert len(cart) == 0


class TestUpdateQuantity:
    @pytest.mark.parametrize("quantity", [0, -1])
    def test_zero_or_less_removes_line(self, cart, quantity):
        item = cart.add_to_cart(line_item(quantity=2))

        cart.update_quantity(item.id, quantity)

        assert cart.items == []

    def test_sets_quantity_without_stock_check(self, cart):
        item = cart.add_to_cart(line_item(quantity_available=2))

        cart.update_quantity(item.id, 10)

        assert cart.get(item.id).quantity == 10

    def test_remove_unknown_id_leaves_cart_unchanged(self, cart, session):
        cart.add_to_cart(line_item(quantity=2))
        before = session[CART_KEY]

        cart.remove_from_cart("missing")

        assert len(cart) == 1
        assert cart.items[0].quantity == 2
        assert session[CART_KEY] == before


class TestTotals:
    def test_cart_total_and_count(self, cart):
        cart.add_to_cart(line_item(price="20.00", quantity=2))
        cart.add_to_cart(line_item(variant_id="gid://shopify/ProductVariant/12", price="5.50"))

        assert cart.cart_total == Decimal("45.50")
        assert cart.cart_count == 3

    def test_savings_against_compare_at_price(self, cart):
        cart.add_to_cart(line_item(price="20.00", quantity=2, compare_at_price=Decimal("25.00")))
        cart.add_to_cart(line_item(variant_id="gid://shopify/ProductVariant/12"))

        assert cart.savings == Decimal("10.00")


class TestPersistence:
    def test_every_mutation_persists(self, cart, session):
        item = cart.add_to_cart(line_item(quantity=2))
        assert json.loads(session[CART_KEY])[0]["quantity"] == 2

        cart.update_quantity(item.id, 4)
        assert json.loads(session[CART_KEY])[0]["quantity"] == 4

        cart.remove_from_cart(item.id)
        assert json.loads(session[CART_KEY]) == []

    def test_rehydrates_from_storage(self, cart, session):
        cart.add_to_cart(line_item(quantity=2, options={"Size": "A4", "Frame": "Oak"}))

        restored = CartStore(session)

        assert restored.items == cart.items
        assert restored.items[0].options == (("Size", "A4"), ("Frame", "Oak"))

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            '{"a": 1}',
            "[1, 2]",
            json.dumps([{**line_item().to_dict(), "unit_price": "abc"}]),
        ],
        ids=["not-json", "object", "not-line-items", "bad-price"],
    )
    def test_corrupt_storage_gives_empty_cart(self, session, raw):
        session[CART_KEY] = raw

        assert CartStore(session).items == []

    def test_clear_cart(self, cart, session):
        cart.add_to_cart(line_item())

        cart.clear_cart()

        assert CartStore(session).cart_count == 0


class TestSavedForLater:
    def test_save_moves_line_out_of_cart(self, cart, session):
        item = cart.add_to_cart(line_item(quantity=3))
        saved = SavedForLaterStore(session)

        saved.save_for_later(cart, item.id)

        assert cart.items == []
        assert saved.items[0].variant_id == item.variant_id
        assert json.loads(session[SAVED_KEY])[0]["id"] == item.id

    def test_move_back_with_quantity_one(self, cart, session):
        item = cart.add_to_cart(line_item(quantity=3))
        saved = SavedForLaterStore(session)
        saved.save_for_later(cart, item.id)

        saved.move_to_cart(cart, item.id)

        assert saved.items == []
        assert cart.cart_count == 1

    def test_unknown_ids_are_ignored(self, cart, session):
        saved = SavedForLaterStore(session)

        assert saved.save_for_later(cart, "missing") is None
        assert saved.move_to_cart(cart, "missing") is None
