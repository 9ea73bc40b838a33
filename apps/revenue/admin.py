from django.contrib import admin

from .models import DailyRevenue


@admin.register(DailyRevenue)
class DailyRevenueAdmin(admin.ModelAdmin):
    list_display = ("date", "amount_cents", "order_count", "updated_at")
    date_hierarchy = "date"
    ordering = ("-date",)
