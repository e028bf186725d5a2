from django.contrib import admin
from .models import Position, ShiftAssignment, ShiftSlot


@admin.register(Position)
class PositionAdmin(admin.ModelAdmin):
    list_display = ("position_name", "tenant", "display_order", "is_active", "deleted_at")
    list_filter = ("is_active",)
    search_fields = ("position_name",)
    ordering = ("tenant", "display_order", "position_name")


@admin.register(ShiftSlot)
class ShiftSlotAdmin(admin.ModelAdmin):
    list_display = ("slot_name", "instance_name", "business_day", "position", "start_time", "end_time",
                    "required_count", "priority", "deleted_at")
    list_filter = ("position",)
    search_fields = ("slot_name", "instance_name")
    ordering = ("business_day", "start_time", "priority")


@admin.register(ShiftAssignment)
class ShiftAssignmentAdmin(admin.ModelAdmin):
    """Read-only: assignments change only through the capacity allocator."""

    list_display = ("slot", "member", "status", "method", "assigned_at", "cancelled_at", "deleted_at")
    list_filter = ("status", "method")
    search_fields = ("member__display_name", "slot__slot_name")
    ordering = ("slot", "assigned_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
