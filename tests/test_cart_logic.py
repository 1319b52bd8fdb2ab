"""
Unit Tests: cart_logic: validate_item, Item, ItemCollection, CollectionView
"""

from decimal import Decimal

import pytest

from cart.cart_logic import CollectionView, Item, ItemCollection, validate_item
from cart.exceptions import InvalidItemData


class TestValidateItem:
    """validate_item() accepts well-formed records and names the bad field otherwise."""

    @pytest.mark.parametrize("product", [
        {"id": 1, "quantity": 1, "price": 10},
        {"id": "sku-1", "quantity": 0, "price": 0},
        {"id": 0, "quantity": 3, "price": 9.99},
        {"id": 7, "quantity": 1, "price": Decimal("12.50"), "name": "Mug"},
    ])
    def test_valid_products(self, product):
        validate_item(product)

    @pytest.mark.parametrize("product, field", [
        ({"quantity": 1, "price": 10}, "id"),
        ({"id": 1, "price": 10}, "quantity"),
        ({"id": 1, "quantity": 1}, "price"),
        ({"id": "", "quantity": 1, "price": 10}, "id"),
        ({"id": None, "quantity": 1, "price": 10}, "id"),
        ({"id": True, "quantity": 1, "price": 10}, "id"),
        ({"id": 1, "quantity": -1, "price": 10}, "quantity"),
        ({"id": 1, "quantity": 1.5, "price": 10}, "quantity"),
        ({"id": 1, "quantity": "2", "price": 10}, "quantity"),
        ({"id": 1, "quantity": True, "price": 10}, "quantity"),
        ({"id": 1, "quantity": 1, "price": -0.01}, "price"),
        ({"id": 1, "quantity": 1, "price": "10"}, "price"),
        ({"id": 1, "quantity": 1, "price": float("nan")}, "price"),
        ({"id": 1, "quantity": 1, "price": Decimal("Infinity")}, "price"),
    ])
    def test_invalid_products(self, product, field):
        with pytest.raises(InvalidItemData) as exc_info:
            validate_item(product)
        assert exc_info.value.field == field
        assert exc_info.value.details == {"field": field}

    def test_not_a_mapping(self):
        with pytest.raises(InvalidItemData):
            validate_item([1, 2, 10])

    def test_validation_has_no_side_effects(self):
        product = {"id": 1, "quantity": 1, "price": 10}
        validate_item(product)
        assert product == {"id": 1, "quantity": 1, "price": 10}


class TestItem:
    def test_from_dict_splits_attributes(self):
        item = Item.from_dict({"id": 1, "name": "Mug", "quantity": 2, "price": 5})
        assert item.id == 1
        assert item.quantity == 2
        assert item.price == 5
        assert item.attributes == {"name": "Mug"}

    def test_to_dict_round_trip(self):
        record = {"id": "a", "quantity": 1, "price": 3.5, "options": {"color": "red"}}
        assert Item.from_dict(record).to_dict() == record

    def test_subtotal(self):
        assert Item(1, 3, Decimal("2.50")).subtotal == Decimal("7.50")

    def test_equality(self):
        assert Item(1, 1, 10, {"name": "x"}) == Item(1, 1, 10, {"name": "x"})
        assert Item(1, 1, 10) != Item(1, 2, 10)


class TestItemCollection:
    def test_set_items_accepts_none(self):
        collection = ItemCollection().set_items(None)
        assert collection.find_item(1) is None

    def test_insert_appends_new_items_in_order(self):
        collection = ItemCollection()
        collection.insert({"id": 1, "quantity": 1, "price": 1})
        collection.insert({"id": 2, "quantity": 1, "price": 1})
        items = collection.insert({"id": 3, "quantity": 1, "price": 1})
        assert list(items.keys()) == ["1", "2", "3"]

    def test_insert_overwrites_in_place(self):
        collection = ItemCollection()
        for item_id in (1, 2, 3):
            collection.insert({"id": item_id, "quantity": 1, "price": 1})
        items = collection.insert({"id": 2, "quantity": 9, "price": 1})
        assert list(items.keys()) == ["1", "2", "3"]
        assert items["2"]["quantity"] == 9

    def test_find_item_matches_string_keys(self):
        """A session restored from JSON has string keys; lookups by int still work."""
        collection = ItemCollection().set_items({"5": {"id": 5, "quantity": 1, "price": 2}})
        assert collection.find_item(5) == Item(5, 1, 2)
        assert collection.find_item("5") == Item(5, 1, 2)
        assert collection.find_item(6) is None

    def test_set_items_does_not_alias_source(self):
        raw = {"1": {"id": 1, "quantity": 1, "price": 1}}
        collection = ItemCollection().set_items(raw)
        collection.insert({"id": 1, "quantity": 5, "price": 1})
        assert raw["1"]["quantity"] == 1

    def test_delete_missing_is_noop(self):
        collection = ItemCollection().set_items({"1": {"id": 1, "quantity": 1, "price": 1}})
        assert list(collection.delete(2).keys()) == ["1"]
        assert collection.delete(1) == {}


class TestCollectionView:
    @pytest.fixture
    def view(self):
        return ItemCollection().make({
            "1": {"id": 1, "quantity": 2, "price": 10},
            "2": {"id": 2, "quantity": 3, "price": 1.5, "name": "Pen"},
        })

    def test_count_is_unique_items(self, view):
        assert view.count() == 2
        assert len(view) == 2

    def test_sum(self, view):
        assert view.sum(lambda item: item.quantity) == 5
        assert view.sum(lambda item: item.price * item.quantity) == 24.5

    def test_sum_mixes_float_and_decimal(self):
        view = CollectionView({
            "1": {"id": 1, "quantity": 1, "price": Decimal("0.10")},
            "2": {"id": 2, "quantity": 2, "price": 0.2},
        })
        assert view.sum(lambda item: item.price * item.quantity) == Decimal("0.50")

    def test_empty_view(self):
        view = CollectionView(None)
        assert view.count() == 0
        assert view.sum(lambda item: item.quantity) == 0
        assert view.is_empty()
        assert view.all() == []

    def test_iteration_and_lookup(self, view):
        assert [item.id for item in view] == [1, 2]
        assert 2 in view
        assert 3 not in view
        assert view.get(2).attributes == {"name": "Pen"}
        assert view.get(3) is None

    def test_to_dict_is_a_copy(self, view):
        raw = view.to_dict()
        raw["1"]["quantity"] = 100
        assert view.get(1).quantity == 2
