import json
import logging
from celery import shared_task
from django.conf import settings
from django.utils import timezone
from django.db import transaction
from django.template import Template as DjTemplate, Context
from django.core.validators import validate_email
from django.core.exceptions import ValidationError
import requests

from .models import Notification, NotificationAttempt, Template

log = logging.getLogger(__name__)


class TransientError(Exception):
    pass


class PermanentError(Exception):
    pass


DEFAULT_TEMPLATES = {
    "order_confirmation": {
        "subject": "Order Confirmation - {{ order_id }}",
        "body_txt": (
            "Hi {{ customer_name }},\n\n"
            "Thank you for your order {{ order_id }}.\n\n"
            "{% for item in items %}{{ item.quantity }} x {{ item.name }}: ${{ item.line_total }}\n{% endfor %}"
            "\nTotal: ${{ total }}\n"
            "{% if pickup %}Your order will be ready for pickup.{% else %}Delivering to: {{ address }}{% endif %}\n\n"
            "Track your order: {{ tracking_url }}\n"
        ),
        "body_html": (
            "<div style=\"font-family:system-ui,Arial;line-height:1.5;color:#111\">"
            "<p>Hi {{ customer_name }},</p>"
            "<p>Thank you for your order <strong>{{ order_id }}</strong>.</p>"
            "<ul>{% for item in items %}<li>{{ item.quantity }} x {{ item.name }}: ${{ item.line_total }}</li>{% endfor %}</ul>"
            "<p><strong>Total: ${{ total }}</strong></p>"
            "<p>{% if pickup %}Your order will be ready for pickup.{% else %}Delivering to: {{ address }}{% endif %}</p>"
            "<p><a href=\"{{ tracking_url }}\">Track your order</a></p>"
            "</div>"
        ),
    },
    "order_status": {
        "subject": "Order {{ order_id }} is now {{ status }}",
        "body_txt": "Hi {{ customer_name }}, your order {{ order_id }} is now {{ status }}. Track it at {{ tracking_url }}",
        "body_html": (
            "<p>Hi {{ customer_name }},</p>"
            "<p>Your order <strong>{{ order_id }}</strong> is now <strong>{{ status }}</strong>.</p>"
            "<p><a href=\"{{ tracking_url }}\">Track your order</a></p>"
        ),
    },
}


def render_template(code: str, payload: dict) -> dict:
    t = Template.objects.filter(code=code).first()
    defaults = DEFAULT_TEMPLATES.get(code, {})
    ctx = Context(payload or {})
    out = {}
    for field, key in (("subject", "subject"), ("body_txt", "text"), ("body_html", "html")):
        source = getattr(t, field, "") if t else ""
        if not (source or "").strip():
            # Empty DB override falls back to the built-in default
            source = defaults.get(field, "")
        out[key] = DjTemplate(source).render(ctx)
    return out


def _sendgrid_send_email(to_email: str, subject: str, text: str, html: str) -> dict:
    api_key = settings.SENDGRID_API_KEY
    from_email = settings.SENDGRID_FROM_EMAIL
    from_name = settings.SENDGRID_FROM_NAME or "Orders"
    if not (api_key and from_email):
        raise TransientError("SendGrid not configured")
    url = "https://api.sendgrid.com/v3/mail/send"
    headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
    content = [{"type": "text/plain", "value": text or ""}]
    if html:
        content.append({"type": "text/html", "value": html})
    body = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": {"email": from_email, "name": from_name},
        "subject": subject or "",
        "content": content,
    }
    try:
        resp = requests.post(url, headers=headers, data=json.dumps(body), timeout=20)
    except requests.RequestException as e:
        raise TransientError(f"SendGrid unreachable: {e}") from e
    if resp.status_code >= 500:
        raise TransientError(f"SendGrid 5xx: {resp.status_code}")
    if resp.status_code == 429:
        raise TransientError("SendGrid rate limited")
    if resp.status_code >= 400:
        raise PermanentError(f"SendGrid 4xx: {resp.text}")
    # SendGrid answers 202 with the id in X-Message-Id
    return {"message_id": resp.headers.get("X-Message-Id"), "status_code": resp.status_code}


def _finish(n: Notification, attempt: NotificationAttempt, *, provider: str, message_id: str, response: dict):
    n.provider = provider
    n.provider_message_id = message_id
    n.status = "sent"
    n.sent_at = timezone.now()
    n.save(update_fields=["provider", "provider_message_id", "status", "sent_at", "updated_at"])
    attempt.result = "ok"
    attempt.provider_response_json = response
    attempt.finished_at = timezone.now()
    attempt.save()


@shared_task(bind=True, max_retries=5, autoretry_for=(TransientError,), retry_backoff=True, retry_backoff_max=3600)
def send_notification(self, notification_id: str):
    with transaction.atomic():
        try:
            n = Notification.objects.select_for_update().get(id=notification_id)
        except Notification.DoesNotExist:
            log.warning("Notification %s not found", notification_id)
            return
        if n.status not in ("queued", "processing"):
            return
        n.status = "processing"
        n.attempts = (n.attempts or 0) + 1
        n.save(update_fields=["status", "attempts", "updated_at"])

    attempt = NotificationAttempt(notification=n, started_at=timezone.now())
    try:
        try:
            validate_email(n.to)
        except ValidationError:
            raise PermanentError("invalid email")
        ren = render_template(n.template_code, n.payload_json)
        if settings.NOTIF_DEV_MODE:
            log.info("DEV NOTIF [email] to %s template=%s subject=\"%s\"", n.to, n.template_code, ren.get("subject"))
            _finish(n, attempt, provider="dev", message_id="DEV", response={"dev": True})
            return
        resp = _sendgrid_send_email(n.to, ren.get("subject"), ren.get("text"), ren.get("html"))
        _finish(n, attempt, provider="sendgrid", message_id=resp.get("message_id") or "", response=resp)
    except TransientError as te:
        attempt.result = "error"
        attempt.error_message = str(te)
        attempt.finished_at = timezone.now()
        attempt.save()
        # escalate to Celery autoretry
        raise
    except PermanentError as e:
        log.warning("Notification %s failed: %s", n.id, e)
        n.status = "failed"
        n.error_message = str(e)
        n.save(update_fields=["status", "error_message", "updated_at"])
        attempt.result = "error"
        attempt.error_message = str(e)
        attempt.finished_at = timezone.now()
        attempt.save()
