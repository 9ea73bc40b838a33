from django.db import models
from django.utils import timezone
from apps.common.models import BaseModel


class Notification(BaseModel):
    STATUS_CHOICES = [
        ("queued", "Queued"),
        ("processing", "Processing"),
        ("sent", "Sent"),
        ("failed", "Failed"),
    ]
    PROVIDER_CHOICES = [("sendgrid", "SendGrid"), ("dev", "Dev Mode")]

    to = models.EmailField()
    template_code = models.CharField(max_length=80)
    payload_json = models.JSONField(default=dict, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="queued", db_index=True)
    provider = models.CharField(max_length=20, choices=PROVIDER_CHOICES, blank=True, null=True)
    provider_message_id = models.CharField(max_length=120, blank=True, null=True)
    error_message = models.TextField(blank=True, null=True)
    attempts = models.PositiveIntegerField(default=0)
    idempotency_key = models.CharField(max_length=120, blank=True, null=True, unique=True)
    sent_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        indexes = [
            models.Index(fields=["status", "created_at"], name="notif_status_created_idx"),
        ]


class NotificationAttempt(BaseModel):
    notification = models.ForeignKey(Notification, on_delete=models.CASCADE, related_name="attempts_log")
    started_at = models.DateTimeField(default=timezone.now)
    finished_at = models.DateTimeField(blank=True, null=True)
    result = models.CharField(max_length=20)  # ok | error
    provider_response_json = models.JSONField(default=dict, blank=True)
    error_message = models.TextField(blank=True, null=True)


class Template(BaseModel):
    """Database override for a built-in email template."""

    code = models.CharField(max_length=80, unique=True)
    subject = models.CharField(max_length=200, blank=True)
    body_txt = models.TextField(blank=True)
    body_html = models.TextField(blank=True)
