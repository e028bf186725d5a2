import uuid

from django.test import TestCase

from apps.audit.models import AuditLog
from apps.audit.tasks import record_event
from apps.scheduling.tests.factories import make_tenant


class TestAuditLogModel(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.actor_id = uuid.uuid4()

    def _log(self, **kwargs):
        return AuditLog.objects.create(
            tenant=self.tenant,
            actor_id=self.actor_id,
            action=kwargs.pop("action", AuditLog.Action.CREATE),
            entity_type="ShiftAssignment",
            entity_id=uuid.uuid4(),
            **kwargs,
        )

    def test_audit_log_creation_and_str(self):
        log = self._log(after={"status": "confirmed"})
        self.assertIn("CREATE", str(log))
        self.assertIn("ShiftAssignment", str(log))

    def test_system_actor(self):
        self.actor_id = None
        log = self._log(action=AuditLog.Action.DELETE)
        self.assertIn("System", str(log))

    def test_audit_log_is_immutable(self):
        log = self._log(action=AuditLog.Action.CANCEL)
        log.note = "rewritten"
        with self.assertRaises(RuntimeError):
            log.save()


class TestRecordEventTask(TestCase):
    def test_records_entry(self):
        tenant = make_tenant()
        entity_id = uuid.uuid4()
        pk = record_event(
            tenant_id=str(tenant.pk),
            actor_id=None,
            action="CANCEL",
            entity_type="ShiftAssignment",
            entity_id=str(entity_id),
            after={"status": "cancelled"},
            before={"status": "confirmed"},
        )
        log = AuditLog.objects.get(pk=pk)
        self.assertEqual(log.entity_id, entity_id)
        self.assertIsNone(log.actor_id)
        self.assertEqual(log.before, {"status": "confirmed"})
        self.assertEqual(log.after, {"status": "cancelled"})
