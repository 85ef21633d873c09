# care_core/admissions/selectors.py
from __future__ import annotations

from datetime import date
from uuid import UUID

from django.db.models import QuerySet

from care_core.admissions.models import Admission, AdmissionStatus
from care_core.common.api.exceptions import NotFoundError
from care_core.doctors.models import Doctor


def admissions_qs() -> QuerySet[Admission]:
    return Admission.objects.select_related("patient", "doctor")


def get_admission(*, admission_id: UUID) -> Admission:
    try:
        return admissions_qs().get(id=admission_id)
    except Admission.DoesNotExist:
        raise NotFoundError("Admission not found.")


def count_active_admissions(*, doctor_id: UUID) -> int:
    return Admission.objects.filter(doctor_id=doctor_id, status=AdmissionStatus.ADMITTED).count()


def count_admissions(*, doctor_id: UUID) -> int:
    return Admission.objects.filter(doctor_id=doctor_id).count()


def has_active_admission(*, patient_id: UUID) -> bool:
    return Admission.objects.filter(patient_id=patient_id, status=AdmissionStatus.ADMITTED).exists()


def list_admissions(
    *,
    patient_id: UUID | None = None,
    doctor_id: UUID | None = None,
    status: str | None = None,
) -> QuerySet[Admission]:
    qs = admissions_qs().order_by("-admission_date", "-created_at")

    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    if status:
        qs = qs.filter(status=status)

    return qs


def list_admissions_by_doctor(
    *,
    doctor_id: UUID,
    status: str | None = None,
    date_from: date | None = None,
) -> QuerySet[Admission]:
    qs = list_admissions(doctor_id=doctor_id, status=status)
    if date_from:
        qs = qs.filter(admission_date__gte=date_from)
    return qs


def list_admissions_by_patient(*, patient_id: UUID) -> QuerySet[Admission]:
    return list_admissions(patient_id=patient_id)


def doctor_workload_rows(*, doctor_id: UUID | None = None) -> list[dict]:
    """
    One row per (doctor, admission) pair, doctors without admissions included
    once with null admission columns. A single query, so every row comes from
    the same snapshot.
    """
    qs = Doctor.objects.all()
    if doctor_id is not None:
        qs = qs.filter(id=doctor_id)

    return list(
        qs.order_by("name", "id").values(
            "id",
            "name",
            "specialization",
            "admissions__status",
            "admissions__admission_date",
            "admissions__discharge_date",
        )
    )
