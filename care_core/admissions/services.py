# care_core/admissions/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from care_core.admissions.models import Admission, AdmissionStatus
from care_core.admissions.selectors import has_active_admission
from care_core.audit.services import AuditService
from care_core.common.api.exceptions import ConflictError, NotFoundError
from care_core.common.validation import (
    DateRange,
    MaxLength,
    NumericRange,
    Required,
    ValidUUID,
    ensure_valid,
    is_blank,
    parse_date,
    parse_decimal,
    parse_uuid,
)
from care_core.doctors.models import Doctor
from care_core.patients.models import Patient

logger = logging.getLogger(__name__)

ALREADY_ADMITTED_MSG = "Patient is already admitted. Discharge the current admission first."
NOT_ADMITTED_MSG = "Admission not found or patient already discharged."
REASON_MAX_LENGTH = 1000


@dataclass(frozen=True)
class AdmitRequest:
    patient_id: UUID | str | None
    doctor_id: UUID | str | None
    admission_date: date | str | None
    reason: str
    rate_per_day: Decimal | str = Decimal("0.00")


@dataclass(frozen=True)
class DischargeRequest:
    admission_id: UUID
    discharge_date: date | str | None
    notes: str = ""


@dataclass(frozen=True)
class DischargeResult:
    admission_id: UUID
    total_days: int
    total_charge: Decimal


def compute_stay_charge(admission_date: date, discharge_date: date, rate_per_day: Decimal) -> tuple[int, Decimal]:
    """
    Billable days count both the admission and the discharge day,
    so a same-day stay is one day.
    """
    total_days = (discharge_date - admission_date).days + 1
    total_charge = (Decimal(total_days) * Decimal(str(rate_per_day))).quantize(Decimal("0.01"))
    return total_days, total_charge


class AdmissionService:
    """
    Admission lifecycle: ADMITTED -> DISCHARGED (terminal).
    """

    @staticmethod
    @transaction.atomic
    def admit(*, request: AdmitRequest, actor_user_id: int | None) -> Admission:
        today = timezone.localdate()
        reason = (request.reason or "").strip()

        ensure_valid(
            {
                "patient_id": (request.patient_id, [Required("Patient"), ValidUUID("Patient")]),
                "doctor_id": (request.doctor_id, [Required("Doctor"), ValidUUID("Doctor")]),
                "admission_date": (request.admission_date, [
                    Required("Admission date"),
                    DateRange("Admission date", max_date=today,
                              max_message="Admission date cannot be in the future"),
                ]),
                "reason": (reason, [
                    Required("Reason for admission"),
                    MaxLength("Reason for admission", REASON_MAX_LENGTH),
                ]),
                "rate_per_day": (request.rate_per_day, [
                    NumericRange("Rate per day", min_value=0, message="Rate per day must be a valid positive number"),
                ]),
            }
        )

        patient = Patient.objects.select_for_update().filter(id=parse_uuid(request.patient_id)).first()
        if patient is None:
            raise NotFoundError("Patient not found.")

        doctor = Doctor.objects.filter(id=parse_uuid(request.doctor_id)).first()
        if doctor is None:
            raise NotFoundError("Doctor not found.")

        if has_active_admission(patient_id=patient.id):
            logger.warning("Rejected admission for patient %s: already admitted", patient.id)
            raise ConflictError({"patient": [ALREADY_ADMITTED_MSG]})

        rate = Decimal("0") if is_blank(request.rate_per_day) else parse_decimal(request.rate_per_day)

        try:
            with transaction.atomic():
                admission = Admission.objects.create(
                    patient=patient,
                    doctor=doctor,
                    admission_date=parse_date(request.admission_date),
                    reason=reason,
                    status=AdmissionStatus.ADMITTED,
                    rate_per_day=rate.quantize(Decimal("0.01")),
                )
        except IntegrityError:
            # partial unique index lost the race to a concurrent admit
            logger.warning("Rejected admission for patient %s: concurrent admission", patient.id)
            raise ConflictError({"patient": [ALREADY_ADMITTED_MSG]})

        AuditService.log(
            event_code="admission.admitted",
            entity_type="Admission",
            entity_id=admission.id,
            actor_user_id=actor_user_id,
            metadata={
                "patient_id": str(patient.id),
                "doctor_id": str(doctor.id),
                "admission_date": admission.admission_date.isoformat(),
            },
        )
        logger.info(
            "Admitted patient %s under doctor %s (admission %s)",
            patient.id,
            doctor.id,
            admission.id,
        )
        return admission

    @staticmethod
    @transaction.atomic
    def discharge(*, request: DischargeRequest, actor_user_id: int | None) -> DischargeResult:
        admission = (
            Admission.objects.select_for_update()
            .filter(id=request.admission_id, status=AdmissionStatus.ADMITTED)
            .first()
        )
        if admission is None:
            raise NotFoundError(NOT_ADMITTED_MSG)

        ensure_valid(
            {
                "discharge_date": (request.discharge_date, [
                    Required("Discharge date"),
                    DateRange(
                        "Discharge date",
                        min_date=admission.admission_date,
                        max_date=timezone.localdate(),
                        min_message="Discharge date cannot be before admission date",
                        max_message="Discharge date cannot be in the future",
                    ),
                ]),
            }
        )

        discharge_date = parse_date(request.discharge_date)
        total_days, total_charge = compute_stay_charge(
            admission.admission_date, discharge_date, admission.rate_per_day
        )

        updated = AdmissionService._update_on_discharge(
            admission_id=admission.id,
            discharge_date=discharge_date,
            total_days=total_days,
            total_charge=total_charge,
            notes=(request.notes or "").strip(),
        )
        if not updated:
            raise NotFoundError(NOT_ADMITTED_MSG)

        AuditService.log(
            event_code="admission.discharged",
            entity_type="Admission",
            entity_id=admission.id,
            actor_user_id=actor_user_id,
            metadata={
                "patient_id": str(admission.patient_id),
                "doctor_id": str(admission.doctor_id),
                "discharge_date": discharge_date.isoformat(),
                "total_days": total_days,
                "total_charge": str(total_charge),
            },
        )
        logger.info(
            "Discharged admission %s after %s day(s), charge %s",
            admission.id,
            total_days,
            total_charge,
        )
        return DischargeResult(admission_id=admission.id, total_days=total_days, total_charge=total_charge)

    @staticmethod
    def _update_on_discharge(
        *,
        admission_id: UUID,
        discharge_date: date,
        total_days: int,
        total_charge: Decimal,
        notes: str,
    ) -> bool:
        # only an ADMITTED row may be closed
        rows = Admission.objects.filter(id=admission_id, status=AdmissionStatus.ADMITTED).update(
            status=AdmissionStatus.DISCHARGED,
            discharge_date=discharge_date,
            total_days=total_days,
            total_charge=total_charge,
            discharge_notes=notes,
            updated_at=timezone.now(),
        )
        return rows == 1
