"""
Celery tasks for RosterDesk notifications.

Tasks:
  deliver_shift_assigned  : queued after an assignment commits; persists a
                            Notification for the member and emails it when the
                            member has an address.

Routed to the "notifications" queue (see CELERY_TASK_ROUTES in settings/base.py).

Design notes:
  - Arguments are JSON-safe strings; the task re-reads rows from the database.
  - The task is idempotent per assignment: a redelivery reuses the existing
    Notification and emails only if emailed_at is still unset, so a send
    that failed on an earlier attempt is retried.
"""

import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

logger = logging.getLogger(__name__)


@shared_task(name="notifications.deliver_shift_assigned")
def deliver_shift_assigned(tenant_id: str, assignment_id: str, slot_id: str, member_id: str,
                           assigned_at: str) -> dict:
    """
    Notify a member about a confirmed shift assignment.

    Args:
        tenant_id:     Owning tenant.
        assignment_id: The new assignment.
        slot_id:       Slot the member was confirmed into.
        member_id:     Recipient.
        assigned_at:   ISO timestamp of the confirmation.

    Returns:
        Dict with the notification id and whether an email went out.
    """
    from apps.members.models import Member
    from apps.notifications.models import Notification
    from apps.scheduling.models import ShiftSlot

    member = Member.objects.for_tenant(tenant_id).filter(pk=member_id).first()
    slot = (
        ShiftSlot.objects.for_tenant(tenant_id)
        .select_related("business_day", "position")
        .filter(pk=slot_id)
        .first()
    )
    if member is None or slot is None:
        logger.warning("Skipping notification for assignment %s: member or slot gone", assignment_id)
        return {"notification_id": None, "emailed": False}

    title = "New Shift Assigned"
    body = (
        f"You have been assigned to {slot.slot_name} ({slot.position.position_name}) on "
        f"{slot.business_day.target_date:%Y-%m-%d}, {slot.start_time:%H:%M}–{slot.end_time:%H:%M}."
    )
    notification, _ = Notification.objects.get_or_create(
        recipient=member,
        notification_type=Notification.Type.SHIFT_ASSIGNED,
        assignment_id=assignment_id,
        defaults={
            "tenant_id": tenant_id,
            "title": title,
            "body": body,
            "data": {"member_id": member_id, "slot_id": slot_id, "assigned_at": assigned_at},
        },
    )

    emailed = False
    if notification.emailed_at is None and member.email:
        send_mail(
            subject=title,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[member.email],
        )
        notification.emailed_at = timezone.now()
        notification.save(update_fields=["emailed_at"])
        emailed = True

    logger.info("Notification %s for assignment %s (emailed=%s)", notification.pk, assignment_id, emailed)
    return {"notification_id": notification.pk, "emailed": emailed}
