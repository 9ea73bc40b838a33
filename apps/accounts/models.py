from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import UniqueConstraint
from django.db.models.functions import Lower

from apps.common.models import BaseModel


class User(BaseModel, AbstractUser):
    """Restaurant member with UUID primary key and a required display name.

    Email is the login identifier; `username` is an internal handle hidden
    from the UI. Email uniqueness is case-insensitive.
    """

    email = models.EmailField("email address", blank=True)
    name = models.CharField(max_length=255)

    class Meta(AbstractUser.Meta):
        constraints = [
            UniqueConstraint(
                Lower("email"), name="accounts_user_email_lower_uniq", violation_error_message="Email already registered"
            )
        ]

    def save(self, *args, **kwargs):
        if self.email:
            self.email = str(self.email).strip().lower()
        return super().save(*args, **kwargs)

    def as_dict(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "name": self.name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
