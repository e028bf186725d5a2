from django.contrib import admin
from .models import BusinessDay, Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("event_name", "tenant", "created_at")
    list_filter = ("tenant",)
    search_fields = ("event_name",)
    ordering = ("event_name",)


@admin.register(BusinessDay)
class BusinessDayAdmin(admin.ModelAdmin):
    list_display = ("event", "target_date", "start_time", "end_time", "occurrence_type", "is_active")
    list_filter = ("occurrence_type", "is_active", "tenant")
    search_fields = ("event__event_name",)
    ordering = ("target_date", "start_time")
