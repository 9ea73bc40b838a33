import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("Pending", "Pending"),
    ("Preparing", "Preparing"),
    ("Out for Delivery", "Out for Delivery"),
    ("Completed", "Completed"),
    ("Cancelled", "Cancelled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("public_code", models.CharField(max_length=50, unique=True)),
                ("email", models.EmailField(max_length=254)),
                ("customer_name", models.CharField(max_length=255)),
                ("address", models.TextField(blank=True)),
                ("pickup", models.BooleanField(default=False)),
                ("items_json", models.JSONField(default=list)),
                ("special_instructions", models.TextField(blank=True)),
                ("payment_method", models.CharField(default="pay-on-delivery", max_length=50)),
                ("status", models.CharField(choices=STATUS_CHOICES, default="Pending", max_length=50)),
                ("total_cents", models.IntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["email", "created_at"], name="orders_email_created_idx"),
        ),
        migrations.AddIndex(
            model_name="order",
            index=models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
        ),
        migrations.CreateModel(
            name="OrderStatusChange",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=50)),
                ("source", models.CharField(blank=True, max_length=32)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_changes",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="orderstatuschange",
            index=models.Index(fields=["order", "created_at"], name="orders_status_change_idx"),
        ),
    ]
