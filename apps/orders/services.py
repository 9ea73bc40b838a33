"""Order creation, lookup and status transitions."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction

from apps.common import errors
from apps.common.codes import order_code
from apps.menu.models import MenuItem
from apps.notifications.api import enqueue_order_confirmation, enqueue_order_status
from apps.revenue.services import record_order
from .items import clean_submitted_items, total_cents
from .models import Order
from .status import LEDGER_STATUSES, PENDING, is_valid_ledger_status, to_ledger_status

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields: email, customer_name, and items"
INVALID_STATUS = "Invalid status. Must be one of: " + ", ".join(LEDGER_STATUSES)

_TRUE = {"1", "true", "yes", "on"}


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE
    return bool(value)


def _menu_lookup(item_id: str):
    try:
        uuid.UUID(str(item_id))
    except ValueError:
        return None
    return MenuItem.objects.filter(pk=item_id).first()


def _resolve_user(user, raw_user_id):
    if user is not None:
        return user
    if not raw_user_id:
        return None
    try:
        uuid.UUID(str(raw_user_id))
    except ValueError:
        return None
    return get_user_model().objects.filter(pk=raw_user_id, is_active=True).first()


def create_order(data: dict[str, Any], *, user=None) -> Order:
    """Validate, persist, then run the best-effort ledger upsert and confirmation email.

    Nothing is written when validation fails. The ledger and email steps run
    after the order row is committed and never fail the call.
    """
    email = str(data.get("email") or "").strip().lower()
    customer_name = str(data.get("customer_name") or "").strip()
    raw_items = data.get("items")
    if not email or not customer_name or not raw_items:
        raise errors.ValidationError(MISSING_FIELDS)
    try:
        validate_email(email)
    except DjangoValidationError:
        raise errors.ValidationError("Invalid email address")

    items = clean_submitted_items(raw_items, menu_lookup=_menu_lookup)
    pickup = _flag(data.get("pickup", False))
    address = "" if pickup else str(data.get("address") or "").strip()
    if not pickup and not address:
        raise errors.ValidationError("Address is required for delivery orders")

    payment_method = str(data.get("payment_method") or "").strip() or settings.DEFAULT_PAYMENT_METHOD
    with transaction.atomic():
        order = Order.objects.create(
            public_code=order_code(exists=lambda c: Order.objects.filter(public_code=c).exists()),
            user=_resolve_user(user, data.get("user_id")),
            email=email,
            customer_name=customer_name,
            address=address,
            pickup=pickup,
            items_json=[item.as_dict() for item in items],
            special_instructions=str(data.get("special_instructions") or "").strip(),
            payment_method=payment_method,
            status=PENDING,
            total_cents=total_cents(items),
        )
    logger.info("Order %s created: %s items, %s cents", order.public_code, len(items), order.total_cents)

    record_order(order)

    if settings.ORDER_EMAIL_ENABLED:
        try:
            enqueue_order_confirmation(order)
        except Exception:
            logger.exception("Failed to enqueue confirmation email for order %s", order.public_code)
    return order


def get_order(code: str) -> Order:
    order = Order.objects.filter(public_code=str(code or "").strip()).first()
    if not order:
        raise errors.NotFoundError("Order not found")
    return order


def list_orders(email: str | None = None):
    qs = Order.objects.all()
    if email:
        qs = qs.filter(email__iexact=email.strip())
    return qs.order_by("-created_at")


def update_order_status(code: str, status: str | None = None, *, workflow_status: str | None = None, source: str = "admin") -> Order:
    """Set any ledger status from any current one; last writer wins."""
    order = get_order(code)
    if status is None and workflow_status is not None:
        status = to_ledger_status(str(workflow_status))
    if status is None:
        return order
    if not is_valid_ledger_status(status):
        raise errors.ValidationError(INVALID_STATUS)
    changed = status != order.status
    order.set_status(status, source=source)
    if not changed:
        return order
    logger.info("Order %s moved to %s", order.public_code, status)

    if settings.ORDER_EMAIL_ENABLED:
        try:
            enqueue_order_status(order)
        except Exception:
            logger.exception("Failed to enqueue status email for order %s", order.public_code)
    return order
