import datetime
import uuid
from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.db import IntegrityError, transaction
from django.test import TestCase

from apps.notifications.models import Notification
from apps.notifications.tasks import deliver_shift_assigned
from apps.scheduling.tests.factories import make_member, make_slot, make_tenant


class TestNotificationModel(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.member = make_member(self.tenant, "Notify")

    def _notification(self, **kwargs):
        return Notification.objects.create(
            tenant=self.tenant,
            recipient=self.member,
            notification_type=Notification.Type.SHIFT_ASSIGNED,
            title="New Shift Assigned",
            body="You have been assigned a new shift.",
            **kwargs,
        )

    def test_notification_creation(self):
        notif = self._notification(data={"slot_id": "abc"})
        self.assertFalse(notif.is_read)
        self.assertIn("Notify", str(notif))

    def test_mark_read(self):
        notif = self._notification()
        notif.mark_read()
        self.assertTrue(notif.is_read)
        self.assertIsNotNone(notif.read_at)
        self.assertLessEqual(notif.read_at, datetime.datetime.now(datetime.timezone.utc))

    def test_one_notification_per_assignment(self):
        assignment_id = uuid.uuid4()
        self._notification(assignment_id=assignment_id)
        with self.assertRaises(IntegrityError), transaction.atomic():
            self._notification(assignment_id=assignment_id)


class TestDeliverShiftAssigned(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.slot = make_slot(self.tenant, slot_name="Bar")

    def _deliver(self, member, assignment_id=None):
        return deliver_shift_assigned(
            tenant_id=str(self.tenant.pk),
            assignment_id=str(assignment_id or uuid.uuid4()),
            slot_id=str(self.slot.pk),
            member_id=str(member.pk),
            assigned_at="2026-03-06T20:00:00+00:00",
        )

    def test_persists_and_emails(self):
        member = make_member(self.tenant, "Alice", email="alice@example.com")
        result = self._deliver(member)

        notification = Notification.objects.get(pk=result["notification_id"])
        self.assertIn("Bar", notification.body)
        self.assertEqual(notification.data["slot_id"], str(self.slot.pk))
        self.assertTrue(result["emailed"])
        self.assertIsNotNone(notification.emailed_at)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["alice@example.com"])

    def test_member_without_email_gets_in_app_only(self):
        member = make_member(self.tenant, "Dan")
        result = self._deliver(member)
        self.assertFalse(result["emailed"])
        self.assertEqual(len(mail.outbox), 0)
        self.assertTrue(Notification.objects.filter(recipient=member).exists())

    def test_redelivery_does_not_notify_twice(self):
        member = make_member(self.tenant, "Alice", email="alice@example.com")
        assignment_id = uuid.uuid4()
        self._deliver(member, assignment_id)
        self._deliver(member, assignment_id)
        self.assertEqual(Notification.objects.filter(recipient=member).count(), 1)
        self.assertEqual(len(mail.outbox), 1)

    def test_redelivery_retries_failed_email(self):
        member = make_member(self.tenant, "Alice", email="alice@example.com")
        assignment_id = uuid.uuid4()
        with mock.patch("apps.notifications.tasks.send_mail", side_effect=SMTPException("down")):
            with self.assertRaises(SMTPException):
                self._deliver(member, assignment_id)
        notification = Notification.objects.get(recipient=member)
        self.assertIsNone(notification.emailed_at)

        result = self._deliver(member, assignment_id)
        self.assertTrue(result["emailed"])
        self.assertEqual(result["notification_id"], notification.pk)
        self.assertEqual(len(mail.outbox), 1)
        notification.refresh_from_db()
        self.assertIsNotNone(notification.emailed_at)

    def test_cross_tenant_member_is_skipped(self):
        stranger = make_member(make_tenant())
        result = self._deliver(stranger)
        self.assertIsNone(result["notification_id"])
        self.assertFalse(Notification.objects.exists())
