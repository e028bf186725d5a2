"""
Celery tasks for the RosterDesk audit trail.

Tasks:
  record_event  : queued after an assignment change commits; inserts one
                  immutable AuditLog row.
"""

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="audit.record_event")
def record_event(tenant_id: str, actor_id: str | None, action: str, entity_type: str, entity_id: str,
                 after: dict | None = None, before: dict | None = None, note: str = "") -> int:
    """
    Insert an audit log entry.

    Returns:
        The new AuditLog id.
    """
    from apps.audit.models import AuditLog

    entry = AuditLog.objects.create(
        tenant_id=tenant_id,
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        before=before or {},
        after=after or {},
        note=note,
    )
    logger.info("Audit %s %s %s by %s", action, entity_type, entity_id, actor_id or "system")
    return entry.pk
