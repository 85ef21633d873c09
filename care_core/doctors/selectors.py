# care_core/doctors/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from care_core.common.api.exceptions import NotFoundError
from care_core.doctors.models import Doctor


def get_doctor(*, doctor_id: UUID) -> Doctor:
    try:
        return Doctor.objects.get(id=doctor_id)
    except Doctor.DoesNotExist:
        raise NotFoundError("Doctor not found.")


def search_doctors(*, q: str | None = None, specialization: str | None = None) -> QuerySet[Doctor]:
    qs = Doctor.objects.all()

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(name__icontains=qv)
            | Q(specialization__icontains=qv)
            | Q(phone__icontains=qv)
            | Q(email__icontains=qv)
        )

    spec = (specialization or "").strip()
    if spec:
        qs = qs.filter(specialization__icontains=spec)

    return qs.order_by("name", "id")
