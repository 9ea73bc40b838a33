import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("category", models.CharField(choices=[("salt", "Savory"), ("sweet", "Sweet")], max_length=10)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("image_url", models.CharField(blank=True, max_length=500)),
                ("price_cents", models.IntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ("is_available", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["category", "name"],
            },
        ),
        migrations.AddIndex(
            model_name="menuitem",
            index=models.Index(fields=["category", "name"], name="menu_item_category_idx"),
        ),
    ]
