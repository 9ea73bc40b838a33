from django.contrib import admin

from .models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price_cents", "is_available", "created_at")
    list_filter = ("category", "is_available")
    search_fields = ("name", "description")
    ordering = ("category", "name")
