"""
Seed RosterDesk with a small demo tenant.

Creates:
  1. Tenant "Night Owl Events" with eight members (one deactivated)
  2. Positions: Door, Bar, Security
  3. Event "Friday Club Night" with a business day next Friday
  4. Slots, including an overnight one (21:00–02:00) and a capacity-1 slot
  5. A few confirmed assignments, leaving one slot full and one open

Usage:
    python manage.py seed_data
    python manage.py seed_data --reset
"""

import uuid
from datetime import time, timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

TENANT_NAME = "Night Owl Events"
SEED_ACTOR = uuid.UUID("00000000-0000-0000-0000-000000000001")


class Command(BaseCommand):
    help = "Seed RosterDesk with a demo tenant, business day, slots and members"

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true",
                            help="Delete the demo tenant and all of its data first (DESTRUCTIVE).")

    def handle(self, *args, **options):
        if options["reset"]:
            self.stdout.write(self.style.WARNING("Resetting demo tenant..."))
            self._reset_data()

        self.stdout.write("Seeding RosterDesk demo data...")

        tenant    = self._create_tenant()
        members   = self._create_members(tenant)
        positions = self._create_positions(tenant)
        day       = self._create_business_day(tenant)
        slots     = self._create_slots(tenant, day, positions)
        self._create_assignments(tenant, slots, members)

        self.stdout.write(self.style.SUCCESS("\nSeed complete!\n"))
        self.stdout.write("=" * 55)
        self.stdout.write(f"X-Tenant-ID: {tenant.pk}")
        self.stdout.write(f"X-Actor-ID:  {SEED_ACTOR}")
        self.stdout.write(f"Business day: {day.pk} ({day.target_date})")
        self.stdout.write("=" * 55)

    # ------------------------------------------------------------------
    def _reset_data(self):
        from apps.audit.models import AuditLog
        from apps.events.models import BusinessDay, Event
        from apps.members.models import Member
        from apps.notifications.models import Notification
        from apps.scheduling.models import Position, ShiftAssignment, ShiftSlot
        from apps.tenants.models import Tenant

        tenants = Tenant.objects.filter(tenant_name=TENANT_NAME)
        # PROTECT foreign keys: children first
        for model in [AuditLog, Notification, ShiftAssignment, ShiftSlot, Position,
                      BusinessDay, Event, Member]:
            model.objects.filter(tenant__in=tenants).delete()
        tenants.delete()
        self.stdout.write(self.style.WARNING("  Cleared existing demo data."))

    # ------------------------------------------------------------------
    def _create_tenant(self):
        from apps.tenants.models import Tenant
        tenant, created = Tenant.objects.get_or_create(
            tenant_name=TENANT_NAME,
            defaults={"timezone": "Europe/Berlin"},
        )
        if created:
            self.stdout.write(f"  + Tenant: {tenant.tenant_name}")
        return tenant

    # ------------------------------------------------------------------
    def _create_members(self, tenant) -> dict:
        from apps.members.models import Member
        members = {}
        for name, email, active in [
            ("Alice", "alice@nightowl.example", True),
            ("Bob",   "bob@nightowl.example",   True),
            ("Carol", "carol@nightowl.example", True),
            ("Dan",   "",                       True),
            ("Erin",  "erin@nightowl.example",  True),
            ("Femi",  "femi@nightowl.example",  True),
            ("Gus",   "",                       True),
            ("Hana",  "hana@nightowl.example",  False),
        ]:
            obj, created = Member.objects.get_or_create(
                tenant=tenant,
                display_name=name,
                defaults={"email": email, "is_active": active},
            )
            members[name] = obj
            if created:
                self.stdout.write(f"  + Member: {name}{'' if active else ' (inactive)'}")
        return members

    # ------------------------------------------------------------------
    def _create_positions(self, tenant) -> dict:
        from apps.scheduling.models import Position
        positions = {}
        for order, name in enumerate(["Door", "Bar", "Security"]):
            obj, created = Position.objects.get_or_create(
                tenant=tenant,
                position_name=name,
                deleted_at=None,
                defaults={"display_order": order},
            )
            positions[name] = obj
            if created:
                self.stdout.write(f"  + Position: {name}")
        return positions

    # ------------------------------------------------------------------
    def _create_business_day(self, tenant):
        from apps.events.models import BusinessDay, Event
        event, _ = Event.objects.get_or_create(
            tenant=tenant,
            event_name="Friday Club Night",
            defaults={"description": "Weekly club night, doors at 21:00."},
        )
        today = timezone.localdate()
        next_friday = today + timedelta(days=(4 - today.weekday()) % 7 or 7)
        day, created = BusinessDay.objects.get_or_create(
            tenant=tenant,
            event=event,
            target_date=next_friday,
            defaults={
                "start_time": time(20, 0),
                "end_time": time(4, 0),
                "occurrence_type": BusinessDay.OccurrenceType.RECURRING,
            },
        )
        if created:
            self.stdout.write(f"  + Business day: {day}")
        return day

    # ------------------------------------------------------------------
    def _create_slots(self, tenant, day, positions) -> dict:
        from apps.scheduling.models import ShiftSlot
        from apps.scheduling.services import ShiftSlotService

        slots = {}
        for key, position, name, instance, start, end, count in [
            ("door_early", "Door",     "Door A",   "Main floor", time(20, 0), time(23, 0), 2),
            ("door_late",  "Door",     "Door A",   "Main floor", time(23, 0), time(4, 0),  2),
            ("bar",        "Bar",      "Bar",      "Main floor", time(21, 0), time(2, 0),  3),
            ("security",   "Security", "Security", "",           time(20, 0), time(4, 0),  1),
        ]:
            existing = (
                ShiftSlot.objects.for_tenant(tenant.pk).alive()
                .filter(business_day=day, slot_name=name, start_time=start).first()
            )
            if existing is not None:
                slots[key] = existing
                continue
            slots[key] = ShiftSlotService.create(
                tenant_id=tenant.pk,
                business_day_id=day.pk,
                position_id=positions[position].pk,
                slot_name=name,
                instance_name=instance,
                start_time=start,
                end_time=end,
                required_count=count,
            )
            self.stdout.write(f"  + Slot: {slots[key]}")
        return slots

    # ------------------------------------------------------------------
    def _create_assignments(self, tenant, slots, members):
        from apps.scheduling.services import CapacityAllocator
        from core.exceptions import SlotFullError

        # Security ends up full; the bar stays one short
        for slot_key, names in [
            ("security",   ["Bob"]),
            ("door_early", ["Alice"]),
            ("bar",        ["Carol", "Erin"]),
        ]:
            for name in names:
                try:
                    admission = CapacityAllocator.confirm(
                        tenant_id=tenant.pk,
                        slot_id=slots[slot_key].pk,
                        member_id=members[name].pk,
                        actor_id=SEED_ACTOR,
                        note="seeded",
                    )
                except SlotFullError as exc:
                    self.stdout.write(self.style.WARNING(f"  ! {name} not seated: {exc.message}"))
                    continue
                if admission.created:
                    self.stdout.write(f"  + Assignment: {name} → {slots[slot_key].slot_name}")
