# care_core/doctors/models.py
from decimal import Decimal

from django.db import models
from django.db.models import Q

from care_core.common.models import UUIDModel


class Doctor(UUIDModel):
    """
    Staff doctor available for admissions.

    email is stored NULL when absent so the unique constraint only applies
    to real addresses.
    """
    name = models.CharField(max_length=100)
    specialization = models.CharField(max_length=100, db_index=True)
    phone = models.CharField(max_length=10, unique=True)
    email = models.EmailField(max_length=100, unique=True, null=True, blank=True)
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    schedule = models.TextField(blank=True)

    class Meta:
        db_table = "doctors_doctor"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(consultation_fee__gte=0),
                name="ck_doctor_fee_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Dr. {self.name} ({self.specialization})"
