from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("recipient", "notification_type", "title", "is_read", "emailed_at", "created_at")
    list_filter = ("notification_type", "is_read")
    search_fields = ("recipient__display_name", "recipient__email", "title", "body")
    ordering = ("-created_at",)
