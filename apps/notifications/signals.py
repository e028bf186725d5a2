from django.dispatch import receiver

from apps.notifications.tasks import deliver_shift_assigned
from apps.scheduling.signals import assignment_confirmed


@receiver(assignment_confirmed, dispatch_uid="notifications.queue_shift_assigned")
def queue_shift_assigned(sender, tenant_id, assignment_id, slot_id, member_id, assigned_at, **kwargs):
    """Queue the member notification for a newly confirmed assignment."""
    deliver_shift_assigned.delay(
        tenant_id=str(tenant_id),
        assignment_id=str(assignment_id),
        slot_id=str(slot_id),
        member_id=str(member_id),
        assigned_at=assigned_at.isoformat(),
    )
