from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _


User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("email", "name", "username", "is_staff", "created_at")
    search_fields = ("email", "name", "username")
    ordering = ("email",)

    fieldsets = DjangoUserAdmin.fieldsets + (
        (_("Member"), {"fields": ("name",)}),
    )

    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        (_("Member"), {"classes": ("wide",), "fields": ("email", "name")}),
    )
