from django.contrib import admin
from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("display_name", "tenant", "email", "is_active", "deleted_at")
    list_filter = ("is_active", "tenant")
    search_fields = ("display_name", "email", "discord_user_id")
    ordering = ("display_name",)
