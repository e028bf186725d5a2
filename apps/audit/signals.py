"""Audit receivers for assignment lifecycle signals."""

from django.dispatch import receiver

from apps.audit.models import AuditLog
from apps.audit.tasks import record_event
from apps.scheduling.signals import assignment_cancelled, assignment_confirmed, assignment_removed

ASSIGNMENT = "ShiftAssignment"


def _str_or_none(value):
    return str(value) if value is not None else None


def _queue(action, tenant_id, assignment_id, slot_id, member_id, actor_id, after, before=None, note=""):
    record_event.delay(
        tenant_id=str(tenant_id),
        actor_id=_str_or_none(actor_id),
        action=action,
        entity_type=ASSIGNMENT,
        entity_id=str(assignment_id),
        after={"slot_id": str(slot_id), "member_id": str(member_id), **after},
        before=before,
        note=note,
    )


@receiver(assignment_confirmed, dispatch_uid="audit.assignment_confirmed")
def audit_confirmed(sender, tenant_id, assignment_id, slot_id, member_id, actor_id, assigned_at,
                    note="", **kwargs):
    _queue(
        AuditLog.Action.CREATE, tenant_id, assignment_id, slot_id, member_id, actor_id,
        after={"status": "confirmed", "assigned_at": assigned_at.isoformat()},
        note=note,
    )


@receiver(assignment_cancelled, dispatch_uid="audit.assignment_cancelled")
def audit_cancelled(sender, tenant_id, assignment_id, slot_id, member_id, actor_id, cancelled_at, **kwargs):
    _queue(
        AuditLog.Action.CANCEL, tenant_id, assignment_id, slot_id, member_id, actor_id,
        after={"status": "cancelled", "cancelled_at": cancelled_at.isoformat()},
        before={"status": "confirmed"},
    )


@receiver(assignment_removed, dispatch_uid="audit.assignment_removed")
def audit_removed(sender, tenant_id, assignment_id, slot_id, member_id, actor_id, deleted_at, **kwargs):
    _queue(
        AuditLog.Action.DELETE, tenant_id, assignment_id, slot_id, member_id, actor_id,
        after={"deleted_at": deleted_at.isoformat()},
    )
