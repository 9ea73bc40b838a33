from django.contrib import admin

from apps.common.money import fmt_usd
from .models import Order, OrderStatusChange


class OrderStatusChangeInline(admin.TabularInline):
    model = OrderStatusChange
    extra = 0
    can_delete = False
    readonly_fields = ("status", "source", "created_at")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("public_code", "customer_name", "email", "status", "total", "pickup", "created_at")
    list_filter = ("status", "pickup", "created_at")
    search_fields = ("public_code", "email", "customer_name")
    ordering = ("-created_at",)
    readonly_fields = ("public_code", "items_json", "total_cents", "created_at", "updated_at")
    inlines = [OrderStatusChangeInline]

    @admin.display(description="Total", ordering="total_cents")
    def total(self, obj):
        return fmt_usd(obj.total_cents)

    def save_model(self, request, obj, form, change):
        if change:
            obj.set_status(obj.status, source="django-admin")
        else:
            super().save_model(request, obj, form, change)
