"""URL patterns for the scheduling JSON API (mounted under /api/v1/)."""
from django.urls import path
from . import views

app_name = "scheduling"

urlpatterns = [
    path(
        "business-days/<uuid:business_day_id>/shift-slots/",
        views.BusinessDaySlotsView.as_view(),
        name="business_day_slots",
    ),
    path("shift-slots/<uuid:pk>/", views.ShiftSlotDetailView.as_view(), name="slot_detail"),
    path("shift-assignments/", views.AssignmentListView.as_view(), name="assignment_list"),
    path("shift-assignments/<uuid:pk>/", views.AssignmentDetailView.as_view(), name="assignment_detail"),
]
