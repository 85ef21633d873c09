import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("patient_code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("age", models.PositiveSmallIntegerField()),
                (
                    "gender",
                    models.CharField(
                        choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")],
                        max_length=16,
                    ),
                ),
                ("phone", models.CharField(max_length=10, unique=True)),
                ("email", models.EmailField(blank=True, max_length=100)),
                ("address", models.TextField(blank=True)),
                ("emergency_contact", models.CharField(blank=True, max_length=10)),
                ("medical_history", models.TextField(blank=True)),
            ],
            options={
                "db_table": "patients_patient",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["name"], name="patients_name_idx")],
            },
        ),
    ]
