import uuid
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Doctor",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                ("specialization", models.CharField(db_index=True, max_length=100)),
                ("phone", models.CharField(max_length=10, unique=True)),
                ("email", models.EmailField(blank=True, max_length=100, null=True, unique=True)),
                (
                    "consultation_fee",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10),
                ),
                ("schedule", models.TextField(blank=True)),
            ],
            options={
                "db_table": "doctors_doctor",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(consultation_fee__gte=0),
                        name="ck_doctor_fee_non_negative",
                    ),
                ],
            },
        ),
    ]
