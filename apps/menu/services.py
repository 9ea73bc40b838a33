from __future__ import annotations

import logging
from typing import Any

from django.db import transaction

from apps.common import errors
from apps.common.money import MAX_CENTS, to_cents
from .models import MenuItem

logger = logging.getLogger(__name__)

CATEGORY_ERROR = 'Category must be either "salt" or "sweet"'


def _clean_price(raw) -> int:
    cents = to_cents(raw, field="price")
    if cents < 0:
        raise errors.ValidationError("Price must not be negative")
    if cents > MAX_CENTS:
        raise errors.ValidationError("Price is too large")
    return cents


def get_item(item_id) -> MenuItem:
    item = MenuItem.objects.filter(pk=item_id).first()
    if not item:
        raise errors.NotFoundError("Food not found")
    return item


def create_item(data: dict[str, Any]) -> MenuItem:
    category = str(data.get("category") or "").strip()
    name = str(data.get("name") or "").strip()
    description = str(data.get("description") or "").strip()
    if not category or not name or not description or data.get("price") in (None, ""):
        raise errors.ValidationError("Missing required fields")
    if category not in MenuItem.CATEGORIES:
        raise errors.ValidationError(CATEGORY_ERROR)
    item = MenuItem.objects.create(
        category=category,
        name=name,
        description=description,
        image_url=str(data.get("image_url") or "").strip(),
        price_cents=_clean_price(data.get("price")),
        is_available=bool(data.get("is_available", True)),
    )
    logger.info("Menu item created: %s (%s)", item.name, item.id)
    return item


@transaction.atomic
def update_item(item: MenuItem, data: dict[str, Any]) -> MenuItem:
    """Partial update; empty values leave the field untouched."""
    item = MenuItem.objects.select_for_update().get(pk=item.pk)
    category = str(data.get("category") or "").strip()
    if category and category not in MenuItem.CATEGORIES:
        raise errors.ValidationError(CATEGORY_ERROR)
    changed = []
    if category:
        item.category = category
        changed.append("category")
    for field in ("name", "description", "image_url"):
        value = str(data.get(field) or "").strip()
        if value:
            setattr(item, field, value)
            changed.append(field)
    if data.get("price") not in (None, ""):
        item.price_cents = _clean_price(data.get("price"))
        changed.append("price_cents")
    if "is_available" in data:
        item.is_available = bool(data.get("is_available"))
        changed.append("is_available")
    if changed:
        item.save(update_fields=changed + ["updated_at"])
    return item


def delete_item(item: MenuItem) -> dict:
    deleted = {"id": str(item.id), "name": item.name}
    item.delete()
    logger.info("Menu item deleted: %s (%s)", deleted["name"], deleted["id"])
    return deleted
