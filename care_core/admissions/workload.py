# care_core/admissions/workload.py
"""
Doctor workload tiers and workload-balanced assignment recommendations.

classify_workload is the only place tier thresholds are applied; the
recommender and the statistics reports both go through it.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from django.db import models
from django.db.models import Count, Q

from care_core.admissions.models import AdmissionStatus
from care_core.doctors.models import Doctor

MEDIUM_THRESHOLD = 5
HIGH_THRESHOLD = 10


class WorkloadTier(models.TextChoices):
    LOW = "LOW", "Low"
    MEDIUM = "MEDIUM", "Medium"
    HIGH = "HIGH", "High"


def classify_workload(active_count: int) -> WorkloadTier:
    if active_count < 0:
        raise ValueError("active_count must be non-negative")
    if active_count >= HIGH_THRESHOLD:
        return WorkloadTier.HIGH
    if active_count >= MEDIUM_THRESHOLD:
        return WorkloadTier.MEDIUM
    return WorkloadTier.LOW


@dataclass(frozen=True)
class DoctorRecommendation:
    doctor_id: UUID
    name: str
    specialization: str
    consultation_fee: Decimal
    active_assignments: int
    total_assignments: int
    workload_tier: WorkloadTier


def _with_counts(qs):
    return qs.annotate(
        active_assignments=Count("admissions", filter=Q(admissions__status=AdmissionStatus.ADMITTED)),
        total_assignments=Count("admissions"),
    )


def _to_recommendation(doctor) -> DoctorRecommendation:
    return DoctorRecommendation(
        doctor_id=doctor.id,
        name=doctor.name,
        specialization=doctor.specialization,
        consultation_fee=doctor.consultation_fee,
        active_assignments=doctor.active_assignments,
        total_assignments=doctor.total_assignments,
        workload_tier=classify_workload(doctor.active_assignments),
    )


def recommend_doctors(*, specialization: str | None = None) -> list[DoctorRecommendation]:
    """
    Every doctor, least loaded first (active, then lifetime total, then name).

    HIGH tier doctors are still listed; the tier is advisory.
    """
    qs = _with_counts(Doctor.objects.all())

    spec = (specialization or "").strip()
    if spec:
        qs = qs.filter(specialization__icontains=spec)

    qs = qs.order_by("active_assignments", "total_assignments", "name", "id")
    return [_to_recommendation(d) for d in qs]


def annotate_roster(doctors: Iterable[Doctor | UUID]) -> list[DoctorRecommendation]:
    """
    Workload figures for a caller-supplied roster (doctors or doctor ids),
    in roster order. Unknown ids are dropped.
    """
    ids = []
    for d in doctors:
        doctor_id = getattr(d, "id", d)
        if doctor_id not in ids:
            ids.append(doctor_id)
    if not ids:
        return []

    by_id = {d.id: d for d in _with_counts(Doctor.objects.filter(id__in=ids))}
    return [_to_recommendation(by_id[i]) for i in ids if i in by_id]
