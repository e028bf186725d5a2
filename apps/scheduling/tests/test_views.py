import json
import uuid
from datetime import time
from unittest import mock

from django.test import TestCase
from django.urls import reverse

from apps.scheduling.models import ShiftAssignment, ShiftSlot
from apps.scheduling.tests.factories import (
    ACTOR_ID,
    make_assignment,
    make_business_day,
    make_member,
    make_position,
    make_slot,
    make_tenant,
)


class ApiTestCase(TestCase):
    def setUp(self):
        self.tenant = make_tenant()
        self.headers = {"X-Tenant-ID": str(self.tenant.pk), "X-Actor-ID": str(ACTOR_ID)}

    def post_json(self, url, payload, headers=None):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json",
                                headers=headers or self.headers)

    def patch_json(self, url, payload=None, headers=None):
        return self.client.patch(url, data=json.dumps(payload or {}), content_type="application/json",
                                 headers=headers or self.headers)


class TestTenantContext(ApiTestCase):
    def test_missing_tenant_is_forbidden(self):
        resp = self.client.get(reverse("scheduling:assignment_list"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["error"]["code"], "FORBIDDEN")

    def test_malformed_tenant_is_forbidden(self):
        resp = self.client.get(reverse("scheduling:assignment_list"), headers={"X-Tenant-ID": "not-a-uuid"})
        self.assertEqual(resp.status_code, 403)

    def test_write_without_actor_is_forbidden(self):
        resp = self.post_json(reverse("scheduling:assignment_list"), {},
                              headers={"X-Tenant-ID": str(self.tenant.pk)})
        self.assertEqual(resp.status_code, 403)

    def test_health_check_needs_no_tenant(self):
        resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["db"])

    def test_health_check_reports_unreachable_database(self):
        with mock.patch("rosterdesk.urls._database_reachable", return_value=False):
            resp = self.client.get("/health/")
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()["status"], "degraded")


class TestSlotEndpoints(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.day = make_business_day(self.tenant)
        self.position = make_position(self.tenant, "Door")
        self.url = reverse("scheduling:business_day_slots", args=[self.day.pk])

    def test_create_overnight_slot(self):
        resp = self.post_json(self.url, {
            "position_id": str(self.position.pk),
            "slot_name": "Door A",
            "start_time": "21:00",
            "end_time": "02:00",
            "required_count": 2,
        })
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["data"]
        self.assertTrue(data["is_overnight"])
        self.assertEqual(data["assigned_count"], 0)
        self.assertEqual(data["priority"], 1)

    def test_create_zero_length_slot_is_400(self):
        resp = self.post_json(self.url, {
            "position_id": str(self.position.pk),
            "slot_name": "Door A",
            "start_time": "21:00",
            "end_time": "21:00",
            "required_count": 2,
        })
        self.assertEqual(resp.status_code, 400)
        body = resp.json()["error"]
        self.assertEqual(body["code"], "VALIDATION")
        self.assertIn("end_time", body["details"])

    def test_create_with_zero_capacity_is_400(self):
        resp = self.post_json(self.url, {
            "position_id": str(self.position.pk),
            "slot_name": "Door A",
            "start_time": "21:00",
            "end_time": "23:00",
            "required_count": 0,
        })
        self.assertEqual(resp.status_code, 400)
        self.assertIn("required_count", resp.json()["error"]["details"])

    def test_create_with_oversized_numbers_is_400(self):
        for field in ("required_count", "priority"):
            payload = {
                "position_id": str(self.position.pk),
                "slot_name": "Door A",
                "start_time": "21:00",
                "end_time": "23:00",
                "required_count": 1,
            }
            payload[field] = 2**63
            with self.subTest(field=field):
                resp = self.post_json(self.url, payload)
                self.assertEqual(resp.status_code, 400)
                body = resp.json()["error"]
                self.assertEqual(body["code"], "VALIDATION")
                self.assertIn(field, body["details"])
        self.assertFalse(ShiftSlot.objects.exists())

    def test_create_on_unknown_day_is_404(self):
        url = reverse("scheduling:business_day_slots", args=[uuid.uuid4()])
        resp = self.post_json(url, {
            "position_id": str(self.position.pk),
            "slot_name": "Door A",
            "start_time": "21:00",
            "end_time": "23:00",
            "required_count": 1,
        })
        self.assertEqual(resp.status_code, 404)

    def test_invalid_json_is_400(self):
        resp = self.client.post(self.url, data="{oops", content_type="application/json", headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_list_detail_and_delete(self):
        slot = make_slot(self.tenant, business_day=self.day, position=self.position)
        make_assignment(slot, make_member(self.tenant))

        listed = self.client.get(self.url, headers=self.headers).json()["data"]
        self.assertEqual([row["assigned_count"] for row in listed], [1])

        detail_url = reverse("scheduling:slot_detail", args=[slot.pk])
        self.assertEqual(self.client.get(detail_url, headers=self.headers).json()["data"]["slot_id"], str(slot.pk))

        self.assertEqual(self.client.delete(detail_url, headers=self.headers).status_code, 204)
        self.assertIsNotNone(ShiftSlot.objects.get(pk=slot.pk).deleted_at)
        self.assertEqual(self.client.get(detail_url, headers=self.headers).status_code, 404)


class TestAssignmentEndpoints(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.slot = make_slot(self.tenant, required_count=1, start_time=time(21, 0), end_time=time(2, 0))
        self.member = make_member(self.tenant, "Alice")
        self.url = reverse("scheduling:assignment_list")

    def _confirm(self, member=None, **extra):
        payload = {"slot_id": str(self.slot.pk), "member_id": str((member or self.member).pk), **extra}
        return self.post_json(self.url, payload)

    def test_confirm_then_repeat(self):
        first = self._confirm(note="regular")
        self.assertEqual(first.status_code, 201)
        data = first.json()["data"]
        self.assertEqual(data["member_display_name"], "Alice")
        self.assertEqual(data["assignment_status"], "confirmed")
        self.assertEqual(data["note"], "regular")
        self.assertEqual(data["assigned_by"], str(ACTOR_ID))

        repeat = self._confirm()
        self.assertEqual(repeat.status_code, 200)
        self.assertEqual(repeat.json()["data"]["assignment_id"], data["assignment_id"])

    def test_full_slot_is_409(self):
        self._confirm()
        resp = self._confirm(make_member(self.tenant))
        self.assertEqual(resp.status_code, 409)
        error = resp.json()["error"]
        self.assertEqual(error["code"], "SLOT_FULL")
        self.assertEqual(error["details"]["current_count"], 1)
        self.assertEqual(error["details"]["required_count"], 1)

    def test_unknown_member_is_404(self):
        resp = self.post_json(self.url, {"slot_id": str(self.slot.pk), "member_id": str(uuid.uuid4())})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"]["code"], "NOT_FOUND")

    def test_malformed_ids_are_400(self):
        resp = self.post_json(self.url, {"slot_id": "nope", "member_id": str(self.member.pk)})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("slot_id", resp.json()["error"]["details"])

    def test_inactive_member_is_400(self):
        self.member.is_active = False
        self.member.save()
        self.assertEqual(self._confirm().status_code, 400)

    def test_inactive_member_with_foreign_slot_is_404(self):
        self.member.is_active = False
        self.member.save()
        foreign_slot = make_slot(make_tenant())
        resp = self._confirm(slot_id=str(foreign_slot.pk))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"]["code"], "NOT_FOUND")

    def test_cancel_releases_seat(self):
        assignment_id = self._confirm().json()["data"]["assignment_id"]
        detail_url = reverse("scheduling:assignment_detail", args=[assignment_id])

        self.assertEqual(self.patch_json(detail_url, {"assignment_status": "cancelled"}).status_code, 204)
        self.assertEqual(ShiftAssignment.objects.get(pk=assignment_id).status, "cancelled")
        # Repeat cancel is a no-op success
        self.assertEqual(self.patch_json(detail_url).status_code, 204)

        self.assertEqual(self._confirm(make_member(self.tenant)).status_code, 201)

    def test_patch_to_other_status_is_400(self):
        assignment = make_assignment(self.slot, self.member)
        url = reverse("scheduling:assignment_detail", args=[assignment.pk])
        self.assertEqual(self.patch_json(url, {"assignment_status": "confirmed"}).status_code, 400)

    def test_remove(self):
        assignment = make_assignment(self.slot, self.member)
        url = reverse("scheduling:assignment_detail", args=[assignment.pk])
        self.assertEqual(self.client.delete(url, headers=self.headers).status_code, 204)
        self.assertEqual(self.client.get(url, headers=self.headers).status_code, 404)

    def test_other_tenant_cannot_touch_assignment(self):
        assignment = make_assignment(self.slot, self.member)
        url = reverse("scheduling:assignment_detail", args=[assignment.pk])
        other_headers = {"X-Tenant-ID": str(make_tenant().pk), "X-Actor-ID": str(ACTOR_ID)}
        self.assertEqual(self.client.get(url, headers=other_headers).status_code, 404)
        self.assertEqual(self.patch_json(url, headers=other_headers).status_code, 404)
        assignment.refresh_from_db()
        self.assertTrue(assignment.is_live)

    def test_list_with_filters(self):
        make_assignment(self.slot, self.member)
        resp = self.client.get(self.url, {"member_id": str(self.member.pk), "assignment_status": "confirmed"},
                               headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["data"]), 1)

    def test_list_with_inverted_date_range_is_400(self):
        resp = self.client.get(self.url, {"start_date": "2026-03-10", "end_date": "2026-03-01"},
                               headers=self.headers)
        self.assertEqual(resp.status_code, 400)
