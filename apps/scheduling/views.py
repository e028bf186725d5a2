"""
Scheduling JSON API views for RosterDesk.

View inventory:
  BusinessDaySlotsView   → list slots of a business day (GET), create slot (POST)
  ShiftSlotDetailView    → slot detail (GET), soft-delete slot (DELETE)
  AssignmentListView     → list assignments (GET), confirm member into slot (POST)
  AssignmentDetailView   → detail (GET), cancel (PATCH), administrative removal (DELETE)

All views are tenant-scoped through TenantScopedMixin, which also renders
service errors (SLOT_FULL → 409, NOT_FOUND → 404, VALIDATION → 400,
TRANSACTION_FAILED → 500).
"""

from django.http import HttpRequest
from django.views import View

from apps.scheduling import selectors
from apps.scheduling.forms import (
    AssignmentFilterForm,
    CancelAssignmentForm,
    ConfirmAssignmentForm,
    ShiftSlotForm,
    clean_or_raise,
)
from apps.scheduling.services import CapacityAllocator, ShiftSlotService
from core.http import json_success, no_content, parse_json_body
from core.permissions import TenantScopedMixin


class BusinessDaySlotsView(TenantScopedMixin, View):
    """Slots of one business day."""

    def get(self, request: HttpRequest, business_day_id):
        """Return the day's live slots ordered by start time and priority."""
        return json_success(selectors.list_slots_for_business_day(request.tenant_id, business_day_id))

    def post(self, request: HttpRequest, business_day_id):
        """Create a slot; 201 with the slot and an assigned count of 0."""
        data = clean_or_raise(ShiftSlotForm(parse_json_body(request)))
        slot = ShiftSlotService.create(
            tenant_id=request.tenant_id,
            business_day_id=business_day_id,
            position_id=data["position_id"],
            slot_name=data["slot_name"],
            instance_name=data["instance_name"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            required_count=data["required_count"],
            priority=data["priority"],
        )
        return json_success(selectors.serialize_slot(slot, assigned_count=0), status=201)


class ShiftSlotDetailView(TenantScopedMixin, View):
    def get(self, request: HttpRequest, pk):
        return json_success(selectors.get_slot_detail(request.tenant_id, pk))

    def delete(self, request: HttpRequest, pk):
        ShiftSlotService.delete(request.tenant_id, pk)
        return no_content()


class AssignmentListView(TenantScopedMixin, View):
    """Assignment listing and the confirm entry point."""

    def get(self, request: HttpRequest):
        filters = clean_or_raise(AssignmentFilterForm(request.GET))
        return json_success(
            selectors.list_assignments(
                request.tenant_id,
                member_id=filters["member_id"],
                slot_id=filters["slot_id"],
                business_day_id=filters["business_day_id"],
                status=filters["assignment_status"] or None,
                start_date=filters["start_date"],
                end_date=filters["end_date"],
            )
        )

    def post(self, request: HttpRequest):
        """
        Confirm a member into a slot.

        Returns 201 with the new assignment, or 200 with the existing one when
        the member is already confirmed in the slot.
        """
        data = clean_or_raise(ConfirmAssignmentForm(parse_json_body(request)))
        admission = CapacityAllocator.confirm(
            tenant_id=request.tenant_id,
            slot_id=data["slot_id"],
            member_id=data["member_id"],
            actor_id=request.actor_id,
            note=data["note"],
        )
        detail = selectors.get_assignment_detail(request.tenant_id, admission.assignment.pk)
        return json_success(detail, status=201 if admission.created else 200)


class AssignmentDetailView(TenantScopedMixin, View):
    def get(self, request: HttpRequest, pk):
        return json_success(selectors.get_assignment_detail(request.tenant_id, pk))

    def patch(self, request: HttpRequest, pk):
        """Cancel the assignment. The body may be empty or {"assignment_status": "cancelled"}."""
        clean_or_raise(CancelAssignmentForm(parse_json_body(request)))
        CapacityAllocator.cancel(request.tenant_id, pk, actor_id=request.actor_id)
        return no_content()

    def delete(self, request: HttpRequest, pk):
        CapacityAllocator.remove(request.tenant_id, pk, actor_id=request.actor_id)
        return no_content()
