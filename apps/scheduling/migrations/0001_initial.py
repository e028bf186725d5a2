import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("members", "0001_initial"),
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Position",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("position_name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("display_order", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Position",
                "verbose_name_plural": "Positions",
                "ordering": ["display_order", "position_name"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("deleted_at__isnull", True)),
                        fields=("tenant", "position_name"),
                        name="unique_position_name_per_tenant",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ShiftSlot",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("slot_name", models.CharField(max_length=255)),
                (
                    "instance_name",
                    models.CharField(
                        blank=True,
                        help_text="Sub-venue label when the same slot name repeats across instances.",
                        max_length=255,
                    ),
                ),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField(help_text="Earlier than start_time for overnight slots.")),
                (
                    "required_count",
                    models.PositiveIntegerField(default=1, help_text="Number of members required; the slot's capacity."),
                ),
                (
                    "priority",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Display ordering only (lower first); not used for admission.",
                    ),
                ),
                (
                    "business_day",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shift_slots",
                        to="events.businessday",
                    ),
                ),
                (
                    "position",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shift_slots",
                        to="scheduling.position",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Shift Slot",
                "verbose_name_plural": "Shift Slots",
                "ordering": ["start_time", "priority", "created_at"],
                "indexes": [
                    models.Index(fields=["tenant", "business_day"], name="slot_tenant_day_idx"),
                    models.Index(fields=["business_day", "start_time", "priority"], name="slot_day_time_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("required_count__gte", 1)),
                        name="shift_slot_required_count_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("priority__gte", 1)),
                        name="shift_slot_priority_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("start_time", models.F("end_time")), _negated=True),
                        name="shift_slot_nonzero_window",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ShiftAssignment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("confirmed", "Confirmed"), ("cancelled", "Cancelled")],
                        default="confirmed",
                        max_length=20,
                    ),
                ),
                (
                    "method",
                    models.CharField(
                        choices=[("manual", "Manual"), ("auto", "Automatic")],
                        default="manual",
                        max_length=20,
                    ),
                ),
                (
                    "is_outside_preference",
                    models.BooleanField(
                        default=False,
                        help_text="Assigned outside the member's stated preferences (informational).",
                    ),
                ),
                (
                    "assigned_by",
                    models.UUIDField(
                        blank=True,
                        help_text="Actor (member or admin id) who confirmed the assignment.",
                        null=True,
                    ),
                ),
                ("note", models.TextField(blank=True)),
                ("assigned_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="shift_assignments",
                        to="members.member",
                    ),
                ),
                (
                    "slot",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="assignments",
                        to="scheduling.shiftslot",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Shift Assignment",
                "verbose_name_plural": "Shift Assignments",
                "ordering": ["assigned_at"],
                "indexes": [
                    models.Index(fields=["slot", "status"], name="assignment_slot_status_idx"),
                    models.Index(fields=["tenant", "member", "status"], name="assignment_member_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "confirmed"), ("deleted_at__isnull", True)),
                        fields=("slot", "member"),
                        name="unique_live_assignment_per_slot",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("status", "confirmed"), ("cancelled_at__isnull", True)),
                            models.Q(("status", "cancelled"), ("cancelled_at__isnull", False)),
                            _connector="OR",
                        ),
                        name="shift_assignment_cancelled_consistency",
                    ),
                ],
            },
        ),
    ]
