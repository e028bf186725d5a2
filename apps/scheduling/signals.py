"""
Domain signals emitted by the capacity allocator.

Receivers live in the consuming apps (apps.notifications.signals,
apps.audit.signals) and are connected in their AppConfig.ready(). The
allocator never calls them directly: it schedules a dispatch with
send_after_commit(), which runs once the assignment transaction has committed
and the slot lock is released.

Payloads (keyword arguments, UUIDs and datetimes as Python objects):

  assignment_confirmed  tenant_id, assignment_id, slot_id, member_id,
                        actor_id, assigned_at, note
  assignment_cancelled  tenant_id, assignment_id, slot_id, member_id,
                        actor_id, cancelled_at
  assignment_removed    tenant_id, assignment_id, slot_id, member_id,
                        actor_id, deleted_at
"""

import logging

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)

assignment_confirmed = Signal()
assignment_cancelled = Signal()
assignment_removed = Signal()


def send_after_commit(signal: Signal, sender, **payload) -> None:
    """
    Dispatch `signal` to its receivers after the current transaction commits.

    Receivers run through send_robust(): a failing receiver is logged and
    the remaining receivers still run. Nothing is dispatched if the
    transaction rolls back.
    """

    def _dispatch():
        for receiver, response in signal.send_robust(sender=sender, **payload):
            if isinstance(response, Exception):
                logger.error(
                    "Receiver %r failed for assignment %s",
                    receiver,
                    payload.get("assignment_id"),
                    exc_info=response,
                )

    transaction.on_commit(_dispatch)
