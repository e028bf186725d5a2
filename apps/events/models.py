"""
Events models for RosterDesk.

An Event is a recurring or one-off operation a tenant staffs (a club night,
a venue, a convention). Each BusinessDay is one dated occurrence of it, and
owns the shift slots defined for that day.

Business day and slot times are time-of-day values in the tenant's timezone.
An end time earlier than the start time means the day runs past midnight.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import TenantScopedModel


class Event(TenantScopedModel):
    """A staffed operation owned by a tenant."""

    event_name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ["event_name"]
        verbose_name = "Event"
        verbose_name_plural = "Events"

    def __str__(self) -> str:
        return self.event_name


class BusinessDay(TenantScopedModel):
    """
    One dated occurrence of an event.

    Generated from a recurring pattern or created as a special day by the
    event service; the allocator only reads target_date for listings.
    """

    class OccurrenceType(models.TextChoices):
        RECURRING = "recurring", _("Recurring")
        SPECIAL = "special", _("Special")

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="business_days")
    target_date = models.DateField(help_text="Local calendar date of the business day.")
    start_time = models.TimeField()
    end_time = models.TimeField(help_text="May be earlier than start_time for overnight days.")
    occurrence_type = models.CharField(
        max_length=20,
        choices=OccurrenceType.choices,
        default=OccurrenceType.SPECIAL,
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["target_date", "start_time"]
        verbose_name = "Business Day"
        verbose_name_plural = "Business Days"
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(start_time=models.F("end_time")),
                name="business_day_nonzero_window",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant", "target_date"], name="business_day_tenant_date_idx"),
        ]

    def __str__(self) -> str:
        """Return the event name and date."""
        return f"{self.event.event_name} | {self.target_date.isoformat()}"

    @property
    def is_overnight(self) -> bool:
        """Return True if the day runs past midnight."""
        return self.end_time < self.start_time
