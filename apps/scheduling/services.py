"""
Scheduling services: slot lifecycle and the capacity allocator.

Every write that can change a slot's live assignment count runs inside a
short transaction holding an exclusive row lock on that slot
(`SELECT ... FOR UPDATE` on the ShiftSlot row). Different slots never block
each other. Notification and audit events are dispatched only after commit,
outside the lock; their failures never undo an assignment.

Usage:
    from apps.scheduling.services import CapacityAllocator

    admission = CapacityAllocator.confirm(
        tenant_id=request.tenant_id,
        slot_id=slot_id,
        member_id=member_id,
        actor_id=request.actor_id,
    )
    if admission.created:
        ...
"""

import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from apps.events.models import BusinessDay
from apps.members.models import Member
from apps.scheduling import signals
from apps.scheduling.models import POSITIVE_INT_MAX, Position, ShiftAssignment, ShiftSlot
from core.exceptions import NotFoundError, SlotFullError, TransactionFailure, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class Admission:
    """Outcome of a successful confirm: the live assignment and whether it is new."""

    assignment: ShiftAssignment
    created: bool


def _lock_slot(tenant_id, slot_id, include_deleted: bool = False) -> ShiftSlot:
    """
    Load a slot with an exclusive row lock held until the transaction ends.

    Must be called inside transaction.atomic().

    Raises:
        NotFoundError: If the slot is missing, cross-tenant, or soft-deleted
            (unless include_deleted is set).
    """
    qs = ShiftSlot.objects.for_tenant(tenant_id)
    if not include_deleted:
        qs = qs.alive()
    try:
        return qs.select_for_update().get(pk=slot_id)
    except ShiftSlot.DoesNotExist:
        raise NotFoundError("ShiftSlot", slot_id) from None


def _get_assignment(tenant_id, assignment_id) -> ShiftAssignment:
    try:
        return ShiftAssignment.objects.for_tenant(tenant_id).get(pk=assignment_id)
    except ShiftAssignment.DoesNotExist:
        raise NotFoundError("ShiftAssignment", assignment_id) from None


class ShiftSlotService:
    """
    Create and retire shift slots.

    Slot editing is not offered: a slot's capacity and window are fixed once
    members start confirming into it. Retire it and create a new one instead.
    """

    @staticmethod
    def create(
        tenant_id,
        business_day_id,
        position_id,
        slot_name: str,
        start_time,
        end_time,
        required_count: int,
        instance_name: str = "",
        priority: int | None = None,
    ) -> ShiftSlot:
        """
        Create a slot on a business day of the same tenant.

        Args:
            tenant_id:       Owning tenant.
            business_day_id: Business day the slot belongs to for life.
            position_id:     Position the slot is staffed for.
            slot_name:       Display name, e.g. "Door A".
            start_time:      Time-of-day the slot starts.
            end_time:        Time-of-day the slot ends; earlier than
                             start_time for an overnight slot.
            required_count:  Capacity, at least 1.
            instance_name:   Optional sub-venue label.
            priority:        Display ordering, at least 1. Defaults to
                             ROSTERDESK["DEFAULT_SLOT_PRIORITY"].

        Returns:
            The persisted ShiftSlot.

        Raises:
            ValidationError: On an empty name, a count or priority outside
                1..POSITIVE_INT_MAX, or a zero-length window.
            NotFoundError: If the business day or position is not a live
                record of the tenant.
        """
        config = settings.ROSTERDESK
        if priority is None:
            priority = config["DEFAULT_SLOT_PRIORITY"]

        errors = {}
        slot_name = (slot_name or "").strip()
        if not slot_name:
            errors["slot_name"] = ["This field is required."]
        elif len(slot_name) > config["SLOT_NAME_MAX_LENGTH"]:
            errors["slot_name"] = [f"At most {config['SLOT_NAME_MAX_LENGTH']} characters."]
        for field, value in (("required_count", required_count), ("priority", priority)):
            if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= POSITIVE_INT_MAX:
                errors[field] = [f"Must be an integer between 1 and {POSITIVE_INT_MAX}."]
        if start_time == end_time:
            errors["end_time"] = ["start_time and end_time must differ."]
        if errors:
            raise ValidationError("Invalid shift slot", details=errors)

        business_day = BusinessDay.objects.for_tenant(tenant_id).alive().filter(pk=business_day_id).first()
        if business_day is None:
            raise NotFoundError("BusinessDay", business_day_id)
        position = Position.objects.for_tenant(tenant_id).alive().filter(pk=position_id).first()
        if position is None:
            raise NotFoundError("Position", position_id)

        try:
            slot = ShiftSlot.objects.create(
                tenant_id=tenant_id,
                business_day=business_day,
                position=position,
                slot_name=slot_name,
                instance_name=(instance_name or "").strip(),
                start_time=start_time,
                end_time=end_time,
                required_count=required_count,
                priority=priority,
            )
        except DatabaseError as exc:
            logger.exception("Failed to create slot on business day %s", business_day_id)
            raise TransactionFailure("Could not create shift slot") from exc

        logger.info(
            "Created slot %s (%s, capacity %d, overnight=%s) on business day %s",
            slot.pk, slot.slot_name, slot.required_count, slot.is_overnight, business_day.pk,
        )
        return slot

    @staticmethod
    def delete(tenant_id, slot_id) -> None:
        """
        Soft-delete a slot under its row lock.

        A confirm racing with the delete either commits first (its assignment
        stays, as history) or waits and then sees the slot as missing.

        Raises:
            NotFoundError: If the slot is missing, cross-tenant or already deleted.
        """
        try:
            with transaction.atomic():
                slot = _lock_slot(tenant_id, slot_id)
                slot.soft_delete()
        except DatabaseError as exc:
            logger.exception("Failed to delete slot %s", slot_id)
            raise TransactionFailure("Could not delete shift slot") from exc
        logger.info("Soft-deleted slot %s", slot_id)


class CapacityAllocator:
    """
    Admits members into slots without ever exceeding required_count.

    The admission decision (recount, compare, insert) runs while holding the
    slot row lock, so two confirms for the same slot are serialized and the
    second one sees the first one's row. Cancel and remove take the same lock,
    so a release and an admission on one slot are linearized too.

    Errors:
      ValidationError     inactive member
      NotFoundError       slot, member or assignment not visible to the tenant
      SlotFullError       slot already at capacity (expected conflict, not retried)
      TransactionFailure  storage fault; nothing was written
    """

    @staticmethod
    def confirm(tenant_id, slot_id, member_id, actor_id, note: str = "") -> Admission:
        """
        Confirm a member into a slot.

        Confirming a member who already holds a live assignment on the slot
        returns that assignment unchanged (created=False) and emits nothing.

        Args:
            tenant_id: Tenant scope of the request.
            slot_id:   Slot to join.
            member_id: Member being assigned.
            actor_id:  Who performed the confirmation (audit attribution).
            note:      Optional free-text note stored on the assignment.

        Returns:
            Admission with the live assignment.
        """
        try:
            with transaction.atomic():
                member = Member.objects.for_tenant(tenant_id).alive().filter(pk=member_id).first()
                if member is None:
                    raise NotFoundError("Member", member_id)
                slot = _lock_slot(tenant_id, slot_id)

                # Checked only once both member and slot resolve in the tenant.
                if not member.is_active:
                    raise ValidationError(
                        "Member is not active",
                        details={"member_id": [f"Member {member_id} is deactivated."]},
                    )

                existing = ShiftAssignment.objects.live().filter(slot=slot, member=member).first()
                if existing is not None:
                    logger.info("Member %s already confirmed in slot %s", member.pk, slot.pk)
                    return Admission(assignment=existing, created=False)

                current = ShiftAssignment.objects.live().filter(slot=slot).count()
                if current >= slot.required_count:
                    logger.info(
                        "Rejected member %s for slot %s: full (%d/%d)",
                        member.pk, slot.pk, current, slot.required_count,
                    )
                    raise SlotFullError(slot.pk, current, slot.required_count)

                assignment = ShiftAssignment.objects.create(
                    tenant_id=tenant_id,
                    slot=slot,
                    member=member,
                    status=ShiftAssignment.Status.CONFIRMED,
                    method=ShiftAssignment.Method.MANUAL,
                    assigned_by=actor_id,
                    note=note or "",
                )
                signals.send_after_commit(
                    signals.assignment_confirmed,
                    sender=ShiftAssignment,
                    tenant_id=tenant_id,
                    assignment_id=assignment.pk,
                    slot_id=slot.pk,
                    member_id=member.pk,
                    actor_id=actor_id,
                    assigned_at=assignment.assigned_at,
                    note=assignment.note,
                )
        except IntegrityError as exc:
            # Only reachable if the live (slot, member) uniqueness fired, which
            # the lock should prevent; report the surviving row if there is one.
            winner = (
                ShiftAssignment.objects.for_tenant(tenant_id)
                .live()
                .filter(slot_id=slot_id, member_id=member_id)
                .first()
            )
            if winner is not None:
                logger.warning("Duplicate confirm for member %s in slot %s resolved by constraint", member_id, slot_id)
                return Admission(assignment=winner, created=False)
            logger.exception("Integrity error confirming member %s into slot %s", member_id, slot_id)
            raise TransactionFailure("Could not confirm assignment") from exc
        except DatabaseError as exc:
            logger.exception("Transaction failed confirming member %s into slot %s", member_id, slot_id)
            raise TransactionFailure("Could not confirm assignment") from exc

        logger.info(
            "Confirmed member %s into slot %s (%d/%d)",
            member.pk, slot.pk, current + 1, slot.required_count,
        )
        return Admission(assignment=assignment, created=True)

    @staticmethod
    def cancel(tenant_id, assignment_id, actor_id=None) -> ShiftAssignment:
        """
        Cancel an assignment and release one unit of its slot's capacity.

        Cancelling an assignment that is already cancelled or administratively
        removed is a no-op success.

        Raises:
            NotFoundError: If the assignment does not exist in the tenant.
        """
        assignment = _get_assignment(tenant_id, assignment_id)
        try:
            with transaction.atomic():
                _lock_slot(tenant_id, assignment.slot_id, include_deleted=True)
                assignment.refresh_from_db()
                if not assignment.is_live:
                    logger.info("Assignment %s already released; cancel is a no-op", assignment.pk)
                    return assignment
                assignment.cancel()
                signals.send_after_commit(
                    signals.assignment_cancelled,
                    sender=ShiftAssignment,
                    tenant_id=tenant_id,
                    assignment_id=assignment.pk,
                    slot_id=assignment.slot_id,
                    member_id=assignment.member_id,
                    actor_id=actor_id,
                    cancelled_at=assignment.cancelled_at,
                )
        except DatabaseError as exc:
            logger.exception("Transaction failed cancelling assignment %s", assignment_id)
            raise TransactionFailure("Could not cancel assignment") from exc

        logger.info("Cancelled assignment %s in slot %s", assignment.pk, assignment.slot_id)
        return assignment

    @staticmethod
    def remove(tenant_id, assignment_id, actor_id=None) -> ShiftAssignment:
        """
        Administratively remove an assignment (soft delete).

        The row is kept for history and stops counting against capacity.
        Removing an already removed assignment is a no-op success.

        Raises:
            NotFoundError: If the assignment does not exist in the tenant.
        """
        assignment = _get_assignment(tenant_id, assignment_id)
        try:
            with transaction.atomic():
                _lock_slot(tenant_id, assignment.slot_id, include_deleted=True)
                assignment.refresh_from_db()
                if assignment.is_deleted:
                    logger.info("Assignment %s already removed", assignment.pk)
                    return assignment
                assignment.soft_delete()
                signals.send_after_commit(
                    signals.assignment_removed,
                    sender=ShiftAssignment,
                    tenant_id=tenant_id,
                    assignment_id=assignment.pk,
                    slot_id=assignment.slot_id,
                    member_id=assignment.member_id,
                    actor_id=actor_id,
                    deleted_at=assignment.deleted_at,
                )
        except DatabaseError as exc:
            logger.exception("Transaction failed removing assignment %s", assignment_id)
            raise TransactionFailure("Could not remove assignment") from exc

        logger.info("Removed assignment %s from slot %s", assignment.pk, assignment.slot_id)
        return assignment
