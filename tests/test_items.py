from types import SimpleNamespace

import pytest

from apps.common import errors
from apps.orders.items import (
    LegacyLabel,
    LineItem,
    clean_submitted_items,
    parse_line_items,
    total_cents,
)


def test_parse_line_items_resolves_legacy_and_structured_shapes():
    items = parse_line_items(["2x Ramen", {"name": "Mochi", "price": "8.99", "quantity": 2}, None])
    assert items[0] == LegacyLabel("2x Ramen")
    assert items[1] == LineItem(name="Mochi", unit_price_cents=899, quantity=2)
    assert items[2] == LegacyLabel("")
    assert total_cents(items) == 1798


def test_parse_line_items_is_lenient():
    item = parse_line_items([{"name": "Odd", "price": "abc", "quantity": "x"}])[0]
    assert item.unit_price_cents == 0
    assert item.quantity == 1
    assert parse_line_items("not a list") == []


def test_legacy_label_as_dict():
    assert LegacyLabel("Tea").as_dict() == {"name": "Tea", "quantity": 1, "price": None, "legacy": True}


def test_clean_submitted_items_computes_totals():
    items = clean_submitted_items(
        [
            {"name": "Ramen", "price": 18.99, "quantity": 2},
            {"name": "Cheesecake", "price": "12.99", "quantity": "1"},
        ]
    )
    assert [i.line_total_cents for i in items] == [3798, 1299]
    assert total_cents(items) == 5097


@pytest.mark.parametrize(
    "raw",
    [
        [],
        None,
        ["Ramen"],
        [{"name": "Ramen", "price": "1.00", "quantity": 0}],
        [{"name": "Ramen", "price": "1.00", "quantity": -1}],
        [{"name": "Ramen", "price": "1.00", "quantity": 1.5}],
        [{"name": "Ramen", "price": "1.00", "quantity": True}],
        [{"name": "", "price": "1.00", "quantity": 1}],
        [{"name": "Ramen", "quantity": 1}],
        [{"name": "Ramen", "price": "-1", "quantity": 1}],
        [{"name": "Ramen", "price": "abc", "quantity": 1}],
    ],
)
def test_clean_submitted_items_rejects(raw):
    with pytest.raises(errors.ValidationError):
        clean_submitted_items(raw)


def test_clean_submitted_items_fills_from_menu():
    dish = SimpleNamespace(name="Mochi Ice Cream", price_cents=899)
    items = clean_submitted_items([{"id": "abc", "quantity": 3}], menu_lookup=lambda _id: dish)
    assert items[0].name == "Mochi Ice Cream"
    assert items[0].unit_price_cents == 899
    assert items[0].line_total_cents == 2697
    assert items[0].menu_item_id == "abc"


def test_clean_submitted_items_keeps_client_price():
    dish = SimpleNamespace(name="Mochi Ice Cream", price_cents=899)
    items = clean_submitted_items([{"id": "abc", "name": "Mochi", "price": "1.00", "quantity": 1}], menu_lookup=lambda _id: dish)
    assert items[0].unit_price_cents == 100
    assert items[0].name == "Mochi"


@pytest.mark.parametrize(
    "raw",
    [
        [{"name": "Ramen", "price": "1e30", "quantity": 1}],
        [{"name": "Ramen", "price": "10", "quantity": 10**20}],
        [{"name": "Ramen", "price": "10", "quantity": 1001}],
        [{"name": "Ramen", "price": "30000000", "quantity": 1}],
        [{"name": "Ramen", "price": "15000000", "quantity": 1}, {"name": "Mochi", "price": "15000000", "quantity": 1}],
    ],
)
def test_clean_submitted_items_rejects_oversized_amounts(raw):
    with pytest.raises(errors.ValidationError):
        clean_submitted_items(raw)


def test_clean_submitted_items_accepts_quantity_cap():
    items = clean_submitted_items([{"name": "Mochi", "price": "8.99", "quantity": 1000}])
    assert items[0].line_total_cents == 899000
