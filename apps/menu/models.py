from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import BaseModel
from apps.common.money import cents_str


class MenuItem(BaseModel):
    CATEGORY_CHOICES = [("salt", "Savory"), ("sweet", "Sweet")]
    CATEGORIES = {c for c, _label in CATEGORY_CHOICES}

    category = models.CharField(max_length=10, choices=CATEGORY_CHOICES)
    name = models.CharField(max_length=255)
    description = models.TextField()
    image_url = models.CharField(max_length=500, blank=True)
    price_cents = models.IntegerField(validators=[MinValueValidator(0)])
    is_available = models.BooleanField(default=True)

    class Meta:
        indexes = [models.Index(fields=["category", "name"], name="menu_item_category_idx")]
        ordering = ["category", "name"]

    def __str__(self):
        return self.name

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "category": self.category,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url or settings.MENU_PLACEHOLDER_IMAGE,
            "price": cents_str(self.price_cents),
            "is_available": self.is_available,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
