import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("actor_id", models.UUIDField(blank=True, null=True)),
                (
                    "action",
                    models.CharField(
                        choices=[("CREATE", "Create"), ("CANCEL", "Cancel"), ("DELETE", "Delete")],
                        max_length=20,
                    ),
                ),
                ("entity_type", models.CharField(max_length=100)),
                ("entity_id", models.UUIDField()),
                (
                    "before",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="State of the record before the change. Empty for creations.",
                    ),
                ),
                (
                    "after",
                    models.JSONField(blank=True, default=dict, help_text="State of the record after the change."),
                ),
                ("note", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
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
                "verbose_name": "Audit Log Entry",
                "verbose_name_plural": "Audit Log",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["tenant", "entity_type", "entity_id"], name="audit_entity_idx"),
                    models.Index(fields=["tenant", "actor_id", "-created_at"], name="audit_actor_idx"),
                ],
            },
        ),
    ]
