from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import BaseModel
from apps.common.money import cents_str
from .items import parse_line_items
from .status import PENDING, STATUS_CHOICES, color_class_for, progress_steps

# Fields that may change after checkout
MUTABLE_FIELDS = {"status", "updated_at"}


class Order(BaseModel):
    public_code = models.CharField(max_length=50, unique=True)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="orders")
    email = models.EmailField()
    customer_name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    pickup = models.BooleanField(default=False)
    items_json = models.JSONField(default=list)
    special_instructions = models.TextField(blank=True)
    payment_method = models.CharField(max_length=50, default="pay-on-delivery")
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default=PENDING)
    total_cents = models.IntegerField(validators=[MinValueValidator(0)])

    class Meta:
        indexes = [
            models.Index(fields=["email", "created_at"], name="orders_email_created_idx"),
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return self.public_code

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        update_fields = kwargs.get("update_fields")
        if not is_new and (update_fields is None or set(update_fields) - MUTABLE_FIELDS):
            raise ValueError("only status can change once an order is placed")
        prev_status = None
        if not is_new:
            prev_status = type(self).objects.filter(pk=self.pk).values_list("status", flat=True).first()
        source = getattr(self, "_status_change_source", "")
        super().save(*args, **kwargs)
        if hasattr(self, "_status_change_source"):
            delattr(self, "_status_change_source")
        if is_new:
            OrderStatusChange.objects.create(order=self, status=self.status, source=source or "initial")
        elif prev_status != self.status:
            OrderStatusChange.objects.create(order=self, status=self.status, source=source)

    def set_status(self, status: str, *, source: str = "") -> None:
        self.status = status
        if source:
            self._status_change_source = source
        self.save(update_fields=["status", "updated_at"])

    @property
    def line_items(self):
        if not hasattr(self, "_line_items"):
            self._line_items = parse_line_items(self.items_json)
        return self._line_items

    @property
    def tracking_url(self) -> str:
        return f"/track?orderId={self.public_code}"

    def as_dict(self) -> dict:
        return {
            "id": self.public_code,
            "user_id": str(self.user_id) if self.user_id else None,
            "email": self.email,
            "customer_name": self.customer_name,
            "address": self.address or None,
            "pickup": self.pickup,
            "items": [item.as_dict() for item in self.line_items],
            "special_instructions": self.special_instructions,
            "status": self.status,
            "status_class": color_class_for(self.status),
            "total_amount": cents_str(self.total_cents),
            "payment_method": self.payment_method,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def as_tracking_dict(self) -> dict:
        data = self.as_dict()
        data["progress"] = progress_steps(self.status, pickup=self.pickup)
        return data


class OrderStatusChange(BaseModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="status_changes")
    status = models.CharField(max_length=50, choices=STATUS_CHOICES)
    source = models.CharField(max_length=32, blank=True)

    class Meta:
        indexes = [models.Index(fields=["order", "created_at"], name="orders_status_change_idx")]
        ordering = ["created_at"]
