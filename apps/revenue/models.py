from django.db import models


class DailyRevenue(models.Model):
    """Running gross total for one calendar day, a cache over Order rows."""

    date = models.DateField(primary_key=True)
    amount_cents = models.BigIntegerField(default=0)
    order_count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]
        verbose_name_plural = "daily revenue"

    def __str__(self):
        return f"{self.date}: {self.amount_cents}"
