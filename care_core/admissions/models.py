# care_core/admissions/models.py
from decimal import Decimal

from django.db import models
from django.db.models import F, Q

from care_core.common.models import UUIDModel
from care_core.doctors.models import Doctor
from care_core.patients.models import Patient


class AdmissionStatus(models.TextChoices):
    ADMITTED = "ADMITTED", "Admitted"
    DISCHARGED = "DISCHARGED", "Discharged"


class Admission(UUIDModel):
    """
    One stay of a patient under a doctor.

    Created ADMITTED by AdmissionService.admit and moved to DISCHARGED exactly
    once by AdmissionService.discharge. Never transitions back.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="admissions")
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name="admissions")

    admission_date = models.DateField(db_index=True)
    discharge_date = models.DateField(null=True, blank=True)
    reason = models.TextField()
    status = models.CharField(
        max_length=16,
        choices=AdmissionStatus.choices,
        default=AdmissionStatus.ADMITTED,
        db_index=True,
    )

    # agreed daily rate, kept after discharge
    rate_per_day = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    # set at discharge
    total_days = models.PositiveIntegerField(null=True, blank=True)
    total_charge = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discharge_notes = models.TextField(blank=True)

    class Meta:
        db_table = "admissions_admission"
        ordering = ["-admission_date", "-created_at"]
        indexes = [
            models.Index(fields=["doctor", "status"], name="adm_doctor_status_idx"),
            models.Index(fields=["patient", "admission_date"], name="adm_patient_date_idx"),
        ]
        constraints = [
            # At most one open admission per patient.
            models.UniqueConstraint(
                fields=["patient"],
                condition=Q(status=AdmissionStatus.ADMITTED),
                name="uq_active_admission_per_patient",
            ),
            models.CheckConstraint(
                condition=Q(rate_per_day__gte=0),
                name="ck_admission_rate_non_negative",
            ),
            models.CheckConstraint(
                condition=(
                    Q(status=AdmissionStatus.ADMITTED, discharge_date__isnull=True)
                    | Q(status=AdmissionStatus.DISCHARGED, discharge_date__isnull=False)
                ),
                name="ck_admission_status_discharge_date",
            ),
            models.CheckConstraint(
                condition=Q(discharge_date__isnull=True) | Q(discharge_date__gte=F("admission_date")),
                name="ck_admission_discharge_after_admission",
            ),
        ]

    def __str__(self) -> str:
        return f"Admission({self.patient_id}, {self.status})"

    @property
    def is_active(self) -> bool:
        return self.status == AdmissionStatus.ADMITTED
