"""
Read-side queries for shift slots and assignments.

Selectors return plain dicts ready for JSON rendering. They take no locks and
their counts are snapshots: never feed them into an admission decision, the
allocator recounts under the slot lock.
"""

from django.conf import settings
from django.db.models import Count, Q

from apps.events.models import BusinessDay
from apps.scheduling.models import ShiftAssignment, ShiftSlot
from core.exceptions import NotFoundError

LIVE_ASSIGNMENT = Q(
    assignments__status=ShiftAssignment.Status.CONFIRMED,
    assignments__deleted_at__isnull=True,
)


def _iso(value):
    return value.isoformat() if value is not None else None


def _hhmm(value) -> str:
    return value.strftime("%H:%M")


def _str_or_none(value):
    return str(value) if value is not None else None


def serialize_slot(slot: ShiftSlot, assigned_count: int) -> dict:
    """Render a slot with its live assigned count."""
    return {
        "slot_id": str(slot.pk),
        "business_day_id": str(slot.business_day_id),
        "position_id": str(slot.position_id),
        "slot_name": slot.slot_name,
        "instance_name": slot.instance_name,
        "start_time": _hhmm(slot.start_time),
        "end_time": _hhmm(slot.end_time),
        "is_overnight": slot.is_overnight,
        "required_count": slot.required_count,
        "assigned_count": assigned_count,
        "is_full": assigned_count >= slot.required_count,
        "priority": slot.priority,
        "created_at": _iso(slot.created_at),
    }


def serialize_assignment(assignment: ShiftAssignment) -> dict:
    """
    Render the denormalized assignment view.

    Expects member, slot and slot.business_day to be loaded already
    (see assignment_queryset) to avoid a query per row.
    """
    slot = assignment.slot
    return {
        "assignment_id": str(assignment.pk),
        "slot_id": str(slot.pk),
        "member_id": str(assignment.member_id),
        "member_display_name": assignment.member.display_name,
        "slot_name": slot.slot_name,
        "instance_name": slot.instance_name,
        "position_name": slot.position.position_name,
        "start_time": _hhmm(slot.start_time),
        "end_time": _hhmm(slot.end_time),
        "is_overnight": slot.is_overnight,
        "business_day_id": str(slot.business_day_id),
        "target_date": slot.business_day.target_date.isoformat(),
        "assignment_status": assignment.status,
        "method": assignment.method,
        "is_outside_preference": assignment.is_outside_preference,
        "note": assignment.note,
        "assigned_by": _str_or_none(assignment.assigned_by),
        "assigned_at": _iso(assignment.assigned_at),
        "cancelled_at": _iso(assignment.cancelled_at),
    }


def assignment_queryset(tenant_id):
    """Live-or-cancelled (not removed) assignments of a tenant with joins preloaded."""
    return (
        ShiftAssignment.objects.for_tenant(tenant_id)
        .alive()
        .select_related("member", "slot", "slot__position", "slot__business_day")
    )


def list_assignments(
    tenant_id,
    member_id=None,
    slot_id=None,
    business_day_id=None,
    status=None,
    start_date=None,
    end_date=None,
) -> list[dict]:
    """
    List a tenant's assignments, optionally filtered.

    Date bounds apply to the business day's target_date and are inclusive.
    At most ROSTERDESK["ASSIGNMENT_LIST_LIMIT"] rows are returned, ordered by
    date, slot start time and confirmation time.
    """
    qs = assignment_queryset(tenant_id)
    if member_id:
        qs = qs.filter(member_id=member_id)
    if slot_id:
        qs = qs.filter(slot_id=slot_id)
    if business_day_id:
        qs = qs.filter(slot__business_day_id=business_day_id)
    if status:
        qs = qs.filter(status=status)
    if start_date:
        qs = qs.filter(slot__business_day__target_date__gte=start_date)
    if end_date:
        qs = qs.filter(slot__business_day__target_date__lte=end_date)

    qs = qs.order_by("slot__business_day__target_date", "slot__start_time", "assigned_at")
    limit = settings.ROSTERDESK["ASSIGNMENT_LIST_LIMIT"]
    return [serialize_assignment(a) for a in qs[:limit]]


def get_assignment_detail(tenant_id, assignment_id) -> dict:
    """
    Return one assignment view.

    Raises:
        NotFoundError: If the assignment is missing, removed or cross-tenant.
    """
    assignment = assignment_queryset(tenant_id).filter(pk=assignment_id).first()
    if assignment is None:
        raise NotFoundError("ShiftAssignment", assignment_id)
    return serialize_assignment(assignment)


def _slots_with_counts(tenant_id):
    return (
        ShiftSlot.objects.for_tenant(tenant_id)
        .alive()
        .annotate(live_count=Count("assignments", filter=LIVE_ASSIGNMENT))
    )


def list_slots_for_business_day(tenant_id, business_day_id) -> list[dict]:
    """
    List a business day's live slots with their fill level.

    Raises:
        NotFoundError: If the business day is not a live record of the tenant.
    """
    if not BusinessDay.objects.for_tenant(tenant_id).alive().filter(pk=business_day_id).exists():
        raise NotFoundError("BusinessDay", business_day_id)
    slots = (
        _slots_with_counts(tenant_id)
        .filter(business_day_id=business_day_id)
        .order_by("start_time", "priority", "created_at")
    )
    return [serialize_slot(slot, slot.live_count) for slot in slots]


def get_slot_detail(tenant_id, slot_id) -> dict:
    """
    Return one slot with its live assigned count.

    Raises:
        NotFoundError: If the slot is missing, deleted or cross-tenant.
    """
    slot = _slots_with_counts(tenant_id).filter(pk=slot_id).first()
    if slot is None:
        raise NotFoundError("ShiftSlot", slot_id)
    return serialize_slot(slot, slot.live_count)
