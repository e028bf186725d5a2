"""
Scheduling models for RosterDesk.

The core of the platform. Defines:
  - Position: a role a slot is staffed for (door staff, bar, security)
  - ShiftSlot: a position × time window × headcount on one business day
  - ShiftAssignment: one member's claim on one slot

Capacity rule enforced by apps.scheduling.services.CapacityAllocator:
  live assignments (status=confirmed, deleted_at IS NULL) per slot
  never exceed the slot's required_count.

Slot times are time-of-day values. end_time < start_time is an overnight slot
(e.g. 21:00–02:00) and is stored as-is; start_time == end_time is rejected.
"""

from datetime import date, datetime, timedelta

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import TenantScopedModel, TenantScopedQuerySet

# Largest value a PositiveIntegerField column holds on PostgreSQL (int4).
POSITIVE_INT_MAX = 2147483647


class Position(TenantScopedModel):
    """
    A named role that shift slots require.

    Examples: Door, Bar, Security, Reception
    """

    position_name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["display_order", "position_name"]
        verbose_name = "Position"
        verbose_name_plural = "Positions"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "position_name"],
                condition=models.Q(deleted_at__isnull=True),
                name="unique_position_name_per_tenant",
            ),
        ]

    def __str__(self) -> str:
        return self.position_name


class ShiftSlot(TenantScopedModel):
    """
    An allocatable unit of staffing on a business day.

    A slot says WHICH position is needed, WHEN (time-of-day window on the
    owning business day) and HOW MANY members (required_count). Members are
    attached via ShiftAssignment. The slot row doubles as the lock that
    serializes admission decisions for it.

    Slots are never physically deleted. A soft-deleted slot keeps its
    assignment history but accepts no new confirmations.
    """

    business_day = models.ForeignKey(
        "events.BusinessDay",
        on_delete=models.PROTECT,
        related_name="shift_slots",
    )
    position = models.ForeignKey(
        Position,
        on_delete=models.PROTECT,
        related_name="shift_slots",
    )
    slot_name = models.CharField(max_length=255)
    instance_name = models.CharField(
        max_length=255,
        blank=True,
        help_text="Sub-venue label when the same slot name repeats across instances.",
    )
    start_time = models.TimeField()
    end_time = models.TimeField(help_text="Earlier than start_time for overnight slots.")
    required_count = models.PositiveIntegerField(
        default=1,
        help_text="Number of members required; the slot's capacity.",
    )
    priority = models.PositiveIntegerField(
        default=1,
        help_text="Display ordering only (lower first); not used for admission.",
    )

    class Meta:
        verbose_name = "Shift Slot"
        verbose_name_plural = "Shift Slots"
        ordering = ["start_time", "priority", "created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(required_count__gte=1),
                name="shift_slot_required_count_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(priority__gte=1),
                name="shift_slot_priority_positive",
            ),
            models.CheckConstraint(
                condition=~models.Q(start_time=models.F("end_time")),
                name="shift_slot_nonzero_window",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "business_day"], name="slot_tenant_day_idx"),
            models.Index(fields=["business_day", "start_time", "priority"], name="slot_day_time_idx"),
        ]

    def __str__(self) -> str:
        """Return a human-readable slot description."""
        label = f"{self.slot_name} ({self.instance_name})" if self.instance_name else self.slot_name
        return f"{label} | {self.start_time:%H:%M}–{self.end_time:%H:%M}"

    @property
    def is_overnight(self) -> bool:
        """Return True if the slot ends after midnight."""
        return self.end_time < self.start_time

    @property
    def duration(self) -> timedelta:
        """Length of the window, counting overnight slots across midnight."""
        anchor = date(2000, 1, 1)
        start = datetime.combine(anchor, self.start_time)
        end = datetime.combine(anchor, self.end_time)
        if end <= start:
            end += timedelta(days=1)
        return end - start

    @property
    def assigned_count(self) -> int:
        """
        Return the current number of live assignments.

        For display only: admission decisions recount under the slot lock.
        """
        return ShiftAssignment.objects.live().filter(slot=self).count()


class ShiftAssignmentQuerySet(TenantScopedQuerySet):
    def live(self):
        """Assignments that consume capacity: confirmed and not deleted."""
        return self.filter(
            status=ShiftAssignment.Status.CONFIRMED,
            deleted_at__isnull=True,
        )


class ShiftAssignment(TenantScopedModel):
    """
    Links a member to a shift slot.

    Status machine:
      CONFIRMED → CANCELLED (member released the seat; cancelled_at stamped)

    Independently, deleted_at marks an administrative removal. Either way the
    row stops counting against capacity but is kept for history. Writes go
    through CapacityAllocator only; reporting code must treat rows as read-only.
    """

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")

    class Method(models.TextChoices):
        MANUAL = "manual", _("Manual")
        AUTO = "auto", _("Automatic")

    slot = models.ForeignKey(ShiftSlot, on_delete=models.PROTECT, related_name="assignments")
    member = models.ForeignKey(
        "members.Member",
        on_delete=models.PROTECT,
        related_name="shift_assignments",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CONFIRMED)
    method = models.CharField(max_length=20, choices=Method.choices, default=Method.MANUAL)
    is_outside_preference = models.BooleanField(
        default=False,
        help_text="Assigned outside the member's stated preferences (informational).",
    )
    assigned_by = models.UUIDField(
        null=True,
        blank=True,
        help_text="Actor (member or admin id) who confirmed the assignment.",
    )
    note = models.TextField(blank=True)
    assigned_at = models.DateTimeField(default=timezone.now)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    objects = ShiftAssignmentQuerySet.as_manager()

    class Meta:
        verbose_name = "Shift Assignment"
        verbose_name_plural = "Shift Assignments"
        ordering = ["assigned_at"]
        constraints = [
            # A member can hold only one live assignment per slot
            models.UniqueConstraint(
                fields=["slot", "member"],
                condition=models.Q(status="confirmed", deleted_at__isnull=True),
                name="unique_live_assignment_per_slot",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(status="confirmed", cancelled_at__isnull=True)
                    | models.Q(status="cancelled", cancelled_at__isnull=False)
                ),
                name="shift_assignment_cancelled_consistency",
            ),
        ]
        indexes = [
            models.Index(fields=["slot", "status"], name="assignment_slot_status_idx"),
            models.Index(fields=["tenant", "member", "status"], name="assignment_member_status_idx"),
        ]

    def __str__(self) -> str:
        """Return a readable description of this assignment."""
        return f"{self.member} → {self.slot} [{self.get_status_display()}]"

    @property
    def is_cancelled(self) -> bool:
        return self.status == self.Status.CANCELLED

    @property
    def is_live(self) -> bool:
        """Return True if this assignment currently consumes slot capacity."""
        return self.status == self.Status.CONFIRMED and self.deleted_at is None

    def cancel(self) -> None:
        """Mark this assignment cancelled and stamp cancelled_at."""
        self.status = self.Status.CANCELLED
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancelled_at", "updated_at"])
