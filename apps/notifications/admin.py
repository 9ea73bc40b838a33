from django.contrib import admin

from .models import Notification, NotificationAttempt, Template


class NotificationAttemptInline(admin.TabularInline):
    model = NotificationAttempt
    extra = 0
    readonly_fields = ("started_at", "finished_at", "result", "error_message")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("to", "template_code", "status", "provider", "attempts", "created_at")
    list_filter = ("status", "template_code")
    search_fields = ("to", "provider_message_id")
    inlines = [NotificationAttemptInline]


@admin.register(Template)
class TemplateAdmin(admin.ModelAdmin):
    list_display = ("code", "subject", "updated_at")
