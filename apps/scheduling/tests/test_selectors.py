import uuid
from datetime import date, time

from django.test import TestCase, override_settings
from django.conf import settings

from apps.scheduling import selectors
from apps.scheduling.models import ShiftAssignment
from apps.scheduling.tests.factories import (
    make_assignment,
    make_business_day,
    make_member,
    make_position,
    make_slot,
    make_tenant,
)
from core.exceptions import NotFoundError


class TestSlotSelectors(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.day = make_business_day(self.tenant)
        self.position = make_position(self.tenant, "Bar")

    def _slot(self, **kwargs):
        return make_slot(self.tenant, business_day=self.day, position=self.position, **kwargs)

    def test_lists_slots_ordered_with_fill_level(self):
        late = self._slot(slot_name="Late", start_time=time(23, 0), end_time=time(3, 0), required_count=1)
        early_low = self._slot(slot_name="Early B", start_time=time(20, 0), end_time=time(23, 0), priority=2)
        early_high = self._slot(slot_name="Early A", start_time=time(20, 0), end_time=time(23, 0), priority=1)
        make_assignment(late, make_member(self.tenant))
        make_assignment(early_low, make_member(self.tenant), status=ShiftAssignment.Status.CANCELLED)

        rows = selectors.list_slots_for_business_day(self.tenant.pk, self.day.pk)

        self.assertEqual([r["slot_id"] for r in rows], [str(early_high.pk), str(early_low.pk), str(late.pk)])
        self.assertEqual(rows[2]["assigned_count"], 1)
        self.assertTrue(rows[2]["is_full"])
        self.assertTrue(rows[2]["is_overnight"])
        self.assertEqual(rows[1]["assigned_count"], 0)
        self.assertEqual(rows[0]["start_time"], "20:00")

    def test_deleted_slots_are_hidden(self):
        slot = self._slot()
        slot.soft_delete()
        self.assertEqual(selectors.list_slots_for_business_day(self.tenant.pk, self.day.pk), [])
        with self.assertRaises(NotFoundError):
            selectors.get_slot_detail(self.tenant.pk, slot.pk)

    def test_unknown_business_day_is_not_found(self):
        with self.assertRaises(NotFoundError):
            selectors.list_slots_for_business_day(self.tenant.pk, uuid.uuid4())

    def test_other_tenant_sees_nothing(self):
        slot = self._slot()
        other = make_tenant()
        with self.assertRaises(NotFoundError):
            selectors.list_slots_for_business_day(other.pk, self.day.pk)
        with self.assertRaises(NotFoundError):
            selectors.get_slot_detail(other.pk, slot.pk)


class TestAssignmentSelectors(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.alice = make_member(self.tenant, "Alice")
        self.bob = make_member(self.tenant, "Bob")
        self.day1 = make_business_day(self.tenant, target_date=date(2026, 3, 6))
        self.day2 = make_business_day(self.tenant, target_date=date(2026, 3, 13))
        self.slot1 = make_slot(self.tenant, business_day=self.day1, slot_name="Door A")
        self.slot2 = make_slot(self.tenant, business_day=self.day2, slot_name="Door B")
        self.a1 = make_assignment(self.slot1, self.alice)
        self.a2 = make_assignment(self.slot2, self.alice)
        self.b1 = make_assignment(self.slot1, self.bob, status=ShiftAssignment.Status.CANCELLED)

    def test_denormalized_view(self):
        view = selectors.get_assignment_detail(self.tenant.pk, self.a1.pk)
        self.assertEqual(view["member_display_name"], "Alice")
        self.assertEqual(view["slot_name"], "Door A")
        self.assertEqual(view["target_date"], "2026-03-06")
        self.assertEqual(view["start_time"], "21:00")
        self.assertEqual(view["end_time"], "02:00")
        self.assertEqual(view["assignment_status"], "confirmed")
        self.assertIsNone(view["cancelled_at"])

    def test_filters(self):
        def ids(**filters):
            return {row["assignment_id"] for row in selectors.list_assignments(self.tenant.pk, **filters)}

        self.assertEqual(ids(), {str(self.a1.pk), str(self.a2.pk), str(self.b1.pk)})
        self.assertEqual(ids(member_id=self.bob.pk), {str(self.b1.pk)})
        self.assertEqual(ids(slot_id=self.slot2.pk), {str(self.a2.pk)})
        self.assertEqual(ids(business_day_id=self.day1.pk), {str(self.a1.pk), str(self.b1.pk)})
        self.assertEqual(ids(status="cancelled"), {str(self.b1.pk)})
        self.assertEqual(ids(start_date=date(2026, 3, 7)), {str(self.a2.pk)})
        self.assertEqual(ids(end_date=date(2026, 3, 6)), {str(self.a1.pk), str(self.b1.pk)})

    def test_removed_assignments_are_hidden(self):
        self.a1.soft_delete()
        with self.assertRaises(NotFoundError):
            selectors.get_assignment_detail(self.tenant.pk, self.a1.pk)
        self.assertNotIn(
            str(self.a1.pk),
            {row["assignment_id"] for row in selectors.list_assignments(self.tenant.pk)},
        )

    def test_tenant_isolation(self):
        self.assertEqual(selectors.list_assignments(make_tenant().pk), [])

    def test_list_is_capped(self):
        capped = {**settings.ROSTERDESK, "ASSIGNMENT_LIST_LIMIT": 2}
        with override_settings(ROSTERDESK=capped):
            self.assertEqual(len(selectors.list_assignments(self.tenant.pk)), 2)
