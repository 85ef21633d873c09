# care_core/patients/models.py
from django.db import models

from care_core.common.models import UUIDModel


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"
    OTHER = "Other", "Other"


class Patient(UUIDModel):
    """
    Registered patient. Edited in place, never hard-deleted.
    """
    # facility-assigned code, e.g. PAT0001
    patient_code = models.CharField(max_length=20, unique=True)

    name = models.CharField(max_length=100)
    age = models.PositiveSmallIntegerField()
    gender = models.CharField(max_length=16, choices=Gender.choices)
    phone = models.CharField(max_length=10, unique=True)
    email = models.EmailField(max_length=100, blank=True)
    address = models.TextField(blank=True)
    emergency_contact = models.CharField(max_length=10, blank=True)
    medical_history = models.TextField(blank=True)

    class Meta:
        db_table = "patients_patient"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="patients_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.patient_code})"
