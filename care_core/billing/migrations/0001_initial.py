import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("admissions", "0001_initial"),
        ("patients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Bill",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("bill_date", models.DateField(default=django.utils.timezone.localdate)),
                ("doctor_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("room_charges", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("medicine_charges", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("other_charges", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("PARTIAL", "Partial"), ("PAID", "Paid")],
                        db_index=True,
                        default="PENDING",
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                (
                    "admission",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="admissions.admission",
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "billing_bill",
                "ordering": ["-bill_date", "-created_at"],
                "indexes": [models.Index(fields=["patient", "bill_date"], name="bill_patient_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("payment_date", models.DateField(default=django.utils.timezone.localdate)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("Cash", "Cash"),
                            ("Card", "Card"),
                            ("UPI", "UPI"),
                            ("Bank Transfer", "Bank Transfer"),
                            ("Cheque", "Cheque"),
                        ],
                        default="Cash",
                        max_length=32,
                    ),
                ),
                ("reference", models.CharField(blank=True, max_length=100)),
                ("recorded_by_user_id", models.IntegerField(blank=True, null=True)),
                (
                    "bill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="billing.bill",
                    ),
                ),
            ],
            options={
                "db_table": "billing_payment",
                "ordering": ["-payment_date", "-created_at"],
            },
        ),
    ]
