"""Line items as stored on an order.

Historical rows hold either plain strings or structured objects. They are
resolved once, here, into `LegacyLabel | LineItem`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from apps.common import errors
from apps.common.money import MAX_CENTS, cents_str, to_cents

MAX_QUANTITY = 1000


@dataclass(frozen=True)
class LegacyLabel:
    label: str

    quantity = 1
    line_total_cents = 0

    @property
    def name(self) -> str:
        return self.label

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.label, "quantity": 1, "price": None, "legacy": True}


@dataclass(frozen=True)
class LineItem:
    name: str
    unit_price_cents: int
    quantity: int
    menu_item_id: str | None = None

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.menu_item_id,
            "name": self.name,
            "price": cents_str(self.unit_price_cents),
            "quantity": self.quantity,
        }


OrderLine = Union[LegacyLabel, LineItem]


def _lenient_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_line_item(raw) -> OrderLine:
    """Read one stored item. Never raises: unknown shapes become labels."""
    if isinstance(raw, dict):
        try:
            price = to_cents(raw.get("price"), field="price")
        except errors.ValidationError:
            price = 0
        menu_id = raw.get("id") or raw.get("menu_item_id")
        return LineItem(
            name=str(raw.get("name") or ""),
            unit_price_cents=price,
            quantity=max(1, _lenient_int(raw.get("quantity"), 1)),
            menu_item_id=str(menu_id) if menu_id else None,
        )
    if raw is None:
        return LegacyLabel("")
    return LegacyLabel(str(raw))


def parse_line_items(raw_items) -> list[OrderLine]:
    if not isinstance(raw_items, (list, tuple)):
        return []
    return [parse_line_item(r) for r in raw_items]


def _strict_quantity(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    try:
        qty = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return qty if qty >= 1 else None


MenuLookup = Callable[[str], Any]


def clean_submitted_items(raw_items, *, menu_lookup: MenuLookup | None = None) -> list[LineItem]:
    """Validate checkout items.

    Client-supplied unit prices are trusted; the menu is consulted only to
    fill a missing name or price from the referenced dish.
    """
    if not isinstance(raw_items, (list, tuple)) or not raw_items:
        raise errors.ValidationError("Missing required fields: email, customer_name, and items")
    out: list[LineItem] = []
    for pos, raw in enumerate(raw_items, start=1):
        if not isinstance(raw, dict):
            raise errors.ValidationError(f"Item {pos} is malformed")
        qty = _strict_quantity(raw.get("quantity", 1))
        if qty is None:
            raise errors.ValidationError(f"Item {pos}: quantity must be a positive integer")
        if qty > MAX_QUANTITY:
            raise errors.ValidationError(f"Item {pos}: quantity must not exceed {MAX_QUANTITY}")

        menu_id = raw.get("id") or raw.get("menu_item_id")
        dish = menu_lookup(str(menu_id)) if (menu_lookup and menu_id) else None
        name = str(raw.get("name") or "").strip() or (dish.name if dish else "")
        if not name:
            raise errors.ValidationError(f"Item {pos}: name is required")
        if raw.get("price") not in (None, ""):
            price = to_cents(raw.get("price"), field=f"price for item {pos}")
        elif dish is not None:
            price = int(dish.price_cents)
        else:
            raise errors.ValidationError(f"Item {pos}: price is required")
        if price < 0:
            raise errors.ValidationError(f"Item {pos}: price must not be negative")
        item = LineItem(name=name, unit_price_cents=price, quantity=qty, menu_item_id=str(menu_id) if menu_id else None)
        if item.line_total_cents > MAX_CENTS:
            raise errors.ValidationError(f"Item {pos}: amount is too large")
        out.append(item)
    if total_cents(out) > MAX_CENTS:
        raise errors.ValidationError("Order total is too large")
    return out


def total_cents(items: Iterable[OrderLine]) -> int:
    return sum(item.line_total_cents for item in items)
