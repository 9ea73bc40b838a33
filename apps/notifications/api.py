from __future__ import annotations

from typing import Optional
from django.db import transaction

from apps.common.money import cents_str
from .models import Notification
from .tasks import send_notification


def enqueue(*, to: str, template_code: str, payload: dict, idempotency_key: Optional[str] = None) -> Notification:
    """Store an email notification and dispatch it once the surrounding transaction commits."""
    if idempotency_key:
        existing = Notification.objects.filter(idempotency_key=idempotency_key).first()
        if existing:
            return existing
    n = Notification(
        to=to,
        template_code=template_code,
        payload_json=payload or {},
        status="queued",
    )
    if idempotency_key:
        n.idempotency_key = idempotency_key
    n.save()

    def _dispatch():
        send_notification.delay(str(n.id))

    transaction.on_commit(_dispatch)
    return n


def order_confirmation_payload(order) -> dict:
    items = [
        {
            "name": item.name,
            "quantity": item.quantity,
            "line_total": cents_str(item.line_total_cents),
        }
        for item in order.line_items
    ]
    return {
        "order_id": order.public_code,
        "customer_name": order.customer_name,
        "items": items,
        "total": cents_str(order.total_cents),
        "pickup": order.pickup,
        "address": order.address,
        "tracking_url": order.tracking_url,
    }


def enqueue_order_confirmation(order) -> Notification:
    return enqueue(
        to=order.email,
        template_code="order_confirmation",
        payload=order_confirmation_payload(order),
        idempotency_key=f"order_confirmation:{order.public_code}",
    )


def enqueue_order_status(order) -> Notification:
    payload = {
        "order_id": order.public_code,
        "customer_name": order.customer_name,
        "status": order.status,
        "tracking_url": order.tracking_url,
    }
    return enqueue(to=order.email, template_code="order_status", payload=payload)
