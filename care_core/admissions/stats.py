# care_core/admissions/stats.py
"""
Workload and assignment statistics.

Each report is built from a single query and folded in Python, so all
figures in one result describe the same database snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from django.utils import timezone

from care_core.admissions.models import AdmissionStatus
from care_core.admissions.selectors import doctor_workload_rows, list_admissions_by_patient
from care_core.admissions.workload import WorkloadTier, classify_workload
from care_core.billing.selectors import patient_activity_summary
from care_core.common.api.exceptions import NotFoundError
from care_core.patients.models import Patient

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30


def _mean_days(values: list[int]) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), 1)


@dataclass
class _Tally:
    as_of: date
    total: int = 0
    active: int = 0
    completed: int = 0
    weekly: int = 0
    monthly: int = 0
    stays: list[int] = field(default_factory=list)
    last_assignment_date: date | None = None

    def add(self, *, status: str, admission_date: date, discharge_date: date | None) -> None:
        self.total += 1
        if status == AdmissionStatus.ADMITTED:
            self.active += 1
        else:
            self.completed += 1
            if discharge_date is not None:
                self.stays.append((discharge_date - admission_date).days)

        if admission_date >= self.as_of - timedelta(days=WEEKLY_WINDOW_DAYS):
            self.weekly += 1
        if admission_date >= self.as_of - timedelta(days=MONTHLY_WINDOW_DAYS):
            self.monthly += 1

        if self.last_assignment_date is None or admission_date > self.last_assignment_date:
            self.last_assignment_date = admission_date

    @property
    def avg_stay_days(self) -> float | None:
        return _mean_days(self.stays)


@dataclass(frozen=True)
class DoctorWorkloadStats:
    doctor_id: UUID
    name: str
    specialization: str
    total_assignments: int
    active_assignments: int
    completed_assignments: int
    avg_stay_days: float | None
    weekly_assignments: int
    monthly_assignments: int
    last_assignment_date: date | None
    workload_tier: WorkloadTier


@dataclass(frozen=True)
class FacilityWorkloadStats:
    as_of: date
    total_doctors: int
    total_active: int
    total_assignments: int
    total_completed: int
    weekly_assignments: int
    monthly_assignments: int
    avg_workload: float
    avg_stay_days: float | None
    tier_distribution: dict[str, int]
    doctors: list[DoctorWorkloadStats]


@dataclass(frozen=True)
class AssignmentRecord:
    admission_id: UUID
    doctor_id: UUID
    doctor_name: str
    specialization: str
    admission_date: date
    discharge_date: date | None
    status: str
    reason: str
    stay_days: int
    rate_per_day: Decimal
    total_charge: Decimal | None


@dataclass(frozen=True)
class PatientSummary:
    patient_id: UUID
    total_admissions: int
    active_admissions: int
    bill_count: int
    pending_bill_count: int
    total_billed: Decimal
    total_paid: Decimal
    outstanding: Decimal


def _fold_rows(rows: list[dict], as_of: date) -> dict[UUID, tuple[dict, _Tally]]:
    doctors: dict[UUID, tuple[dict, _Tally]] = {}
    for row in rows:
        entry = doctors.get(row["id"])
        if entry is None:
            entry = (row, _Tally(as_of=as_of))
            doctors[row["id"]] = entry

        if row["admissions__status"] is None:
            continue
        entry[1].add(
            status=row["admissions__status"],
            admission_date=row["admissions__admission_date"],
            discharge_date=row["admissions__discharge_date"],
        )
    return doctors


def _doctor_stats(row: dict, tally: _Tally) -> DoctorWorkloadStats:
    return DoctorWorkloadStats(
        doctor_id=row["id"],
        name=row["name"],
        specialization=row["specialization"],
        total_assignments=tally.total,
        active_assignments=tally.active,
        completed_assignments=tally.completed,
        avg_stay_days=tally.avg_stay_days,
        weekly_assignments=tally.weekly,
        monthly_assignments=tally.monthly,
        last_assignment_date=tally.last_assignment_date,
        workload_tier=classify_workload(tally.active),
    )


class WorkloadStatsService:
    @staticmethod
    def doctor_stats(*, doctor_id: UUID, as_of: date | None = None) -> DoctorWorkloadStats:
        as_of = as_of or timezone.localdate()

        rows = doctor_workload_rows(doctor_id=doctor_id)
        if not rows:
            raise NotFoundError("Doctor not found.")

        row, tally = _fold_rows(rows, as_of)[rows[0]["id"]]
        return _doctor_stats(row, tally)

    @staticmethod
    def facility_stats(*, as_of: date | None = None) -> FacilityWorkloadStats:
        as_of = as_of or timezone.localdate()

        folded = _fold_rows(doctor_workload_rows(), as_of)
        per_doctor = [_doctor_stats(row, tally) for row, tally in folded.values()]
        # dashboard order: busiest first
        per_doctor.sort(key=lambda s: (-s.active_assignments, -s.total_assignments, s.name))

        tiers = {tier.value: 0 for tier in WorkloadTier}
        all_stays: list[int] = []
        for stats in per_doctor:
            tiers[stats.workload_tier.value] += 1
        for _, tally in folded.values():
            all_stays.extend(tally.stays)

        total_doctors = len(per_doctor)
        total_active = sum(s.active_assignments for s in per_doctor)

        return FacilityWorkloadStats(
            as_of=as_of,
            total_doctors=total_doctors,
            total_active=total_active,
            total_assignments=sum(s.total_assignments for s in per_doctor),
            total_completed=sum(s.completed_assignments for s in per_doctor),
            weekly_assignments=sum(s.weekly_assignments for s in per_doctor),
            monthly_assignments=sum(s.monthly_assignments for s in per_doctor),
            avg_workload=round(total_active / total_doctors, 1) if total_doctors else 0.0,
            avg_stay_days=_mean_days(all_stays),
            tier_distribution=tiers,
            doctors=per_doctor,
        )

    @staticmethod
    def patient_history(*, patient_id: UUID, as_of: date | None = None) -> list[AssignmentRecord]:
        """
        Every admission of the patient, newest first. Open stays are measured
        up to as_of.
        """
        as_of = as_of or timezone.localdate()

        if not Patient.objects.filter(id=patient_id).exists():
            raise NotFoundError("Patient not found.")

        records = []
        for adm in list_admissions_by_patient(patient_id=patient_id):
            end = adm.discharge_date or as_of
            records.append(
                AssignmentRecord(
                    admission_id=adm.id,
                    doctor_id=adm.doctor_id,
                    doctor_name=adm.doctor.name,
                    specialization=adm.doctor.specialization,
                    admission_date=adm.admission_date,
                    discharge_date=adm.discharge_date,
                    status=adm.status,
                    reason=adm.reason,
                    stay_days=(end - adm.admission_date).days,
                    rate_per_day=adm.rate_per_day,
                    total_charge=adm.total_charge,
                )
            )
        return records

    @staticmethod
    def patient_summary(*, patient_id: UUID) -> PatientSummary:
        row = patient_activity_summary(patient_id=patient_id)
        if row is None:
            raise NotFoundError("Patient not found.")

        return PatientSummary(
            patient_id=patient_id,
            total_admissions=row["total_admissions"],
            active_admissions=row["active_admissions"],
            bill_count=row["bill_count"],
            pending_bill_count=row["pending_count"],
            total_billed=row["total_billed"],
            total_paid=row["total_paid"],
            outstanding=row["outstanding"],
        )
