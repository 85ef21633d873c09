import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("doctors", "0001_initial"),
        ("patients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Admission",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("admission_date", models.DateField(db_index=True)),
                ("discharge_date", models.DateField(blank=True, null=True)),
                ("reason", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("ADMITTED", "Admitted"), ("DISCHARGED", "Discharged")],
                        db_index=True,
                        default="ADMITTED",
                        max_length=16,
                    ),
                ),
                ("rate_per_day", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("total_days", models.PositiveIntegerField(blank=True, null=True)),
                ("total_charge", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("discharge_notes", models.TextField(blank=True)),
                (
                    "doctor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="admissions",
                        to="doctors.doctor",
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="admissions",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "admissions_admission",
                "ordering": ["-admission_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["doctor", "status"], name="adm_doctor_status_idx"),
                    models.Index(fields=["patient", "admission_date"], name="adm_patient_date_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(status="ADMITTED"),
                        fields=("patient",),
                        name="uq_active_admission_per_patient",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(rate_per_day__gte=0),
                        name="ck_admission_rate_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(discharge_date__isnull=True, status="ADMITTED"),
                            models.Q(discharge_date__isnull=False, status="DISCHARGED"),
                            _connector="OR",
                        ),
                        name="ck_admission_status_discharge_date",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("discharge_date__isnull", True),
                            ("discharge_date__gte", models.F("admission_date")),
                            _connector="OR",
                        ),
                        name="ck_admission_discharge_after_admission",
                    ),
                ],
            },
        ),
    ]
