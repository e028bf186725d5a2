from django.contrib import admin
from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("tenant_name", "timezone", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("tenant_name",)
    ordering = ("tenant_name",)
