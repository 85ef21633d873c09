# care_core/patients/services.py
from __future__ import annotations

import logging
import re
from typing import Any
from uuid import UUID

from django.conf import settings
from django.core.validators import validate_email
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from care_core.audit.services import AuditService
from care_core.common.validation import (
    PHONE_PATTERN,
    MaxLength,
    NumericRange,
    Pattern,
    Required,
    collect_errors,
)
from care_core.patients.models import Gender, Patient
from care_core.patients.selectors import get_patient

logger = logging.getLogger(__name__)

DUPLICATE_PHONE_MSG = "A patient with this phone number already exists"
PATIENT_CODE_ATTEMPTS = 2

EDITABLE_FIELDS = (
    "name",
    "age",
    "gender",
    "phone",
    "email",
    "address",
    "emergency_contact",
    "medical_history",
)


def _patient_rules(data: dict[str, Any]) -> dict:
    return {
        "name": (data.get("name"), [Required("Name"), MaxLength("Name", 100)]),
        "age": (data.get("age"), [
            Required("Age"),
            NumericRange("Age", 1, 150, message="Age must be a valid number between 1 and 150"),
        ]),
        "gender": (data.get("gender"), [
            Required("Gender"),
            Pattern("Gender", "|".join(Gender.values), message="Gender must be Male, Female or Other"),
        ]),
        "phone": (data.get("phone"), [
            Required("Phone"),
            Pattern("Phone", PHONE_PATTERN, message="Phone number must be 10 digits"),
        ]),
        "emergency_contact": (data.get("emergency_contact"), [
            Pattern("Emergency contact", PHONE_PATTERN, message="Emergency contact must be 10 digits"),
        ]),
    }


def _check_email(errors: dict[str, list[str]], email: str | None) -> None:
    if not email:
        return
    try:
        validate_email(email)
    except DjangoValidationError:
        errors.setdefault("email", []).append("Please enter a valid email address")


class PatientService:
    @staticmethod
    def _next_patient_code_locked() -> str:
        prefix = getattr(settings, "CARE_CORE_PATIENT_CODE_PREFIX", "PAT")
        latest = (
            Patient.objects.select_for_update()
            .filter(patient_code__startswith=prefix)
            .order_by("-created_at", "-patient_code")
            .first()
        )

        if not latest:
            return f"{prefix}0001"

        m = re.match(rf"{re.escape(prefix)}(\d+)$", latest.patient_code.strip())
        if not m:
            return f"{prefix}{Patient.objects.count() + 1:04d}"

        n = int(m.group(1)) + 1
        return f"{prefix}{n:04d}"

    @staticmethod
    @transaction.atomic
    def create_patient(
        *,
        actor_user_id: int | None,
        name: str,
        age: int,
        gender: str,
        phone: str,
        email: str = "",
        address: str = "",
        emergency_contact: str = "",
        medical_history: str = "",
    ) -> Patient:
        data = {
            "name": (name or "").strip(),
            "age": age,
            "gender": gender,
            "phone": (phone or "").strip(),
            "email": (email or "").strip(),
            "address": (address or "").strip(),
            "emergency_contact": (emergency_contact or "").strip(),
            "medical_history": (medical_history or "").strip(),
        }

        errors = collect_errors(_patient_rules(data))
        _check_email(errors, data["email"])
        if not errors and Patient.objects.filter(phone=data["phone"]).exists():
            errors["phone"] = [DUPLICATE_PHONE_MSG]
        if errors:
            raise ValidationError(errors)

        # a concurrent registration can take the generated code; regenerate once
        for attempt in range(PATIENT_CODE_ATTEMPTS):
            try:
                with transaction.atomic():
                    patient = Patient.objects.create(
                        patient_code=PatientService._next_patient_code_locked(),
                        **data,
                    )
                break
            except IntegrityError:
                if Patient.objects.filter(phone=data["phone"]).exists():
                    raise ValidationError({"phone": [DUPLICATE_PHONE_MSG]})
                if attempt + 1 == PATIENT_CODE_ATTEMPTS:
                    raise
                logger.warning("Patient code collision, regenerating")

        AuditService.log(
            event_code="patient.registered",
            entity_type="Patient",
            entity_id=patient.id,
            actor_user_id=actor_user_id,
            metadata={"patient_code": patient.patient_code},
        )
        logger.info("Registered patient %s (%s)", patient.id, patient.patient_code)
        return patient

    @staticmethod
    @transaction.atomic
    def update_patient(
        *,
        actor_user_id: int | None,
        patient_id: UUID,
        data: dict,
    ) -> Patient:
        patient = get_patient(patient_id=patient_id)

        updates = {k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS}
        merged = {f: getattr(patient, f) for f in EDITABLE_FIELDS}
        merged.update(updates)

        errors = collect_errors(_patient_rules(merged))
        _check_email(errors, merged.get("email"))
        if (
            "phone" in updates
            and "phone" not in errors
            and Patient.objects.filter(phone=merged["phone"]).exclude(id=patient.id).exists()
        ):
            errors["phone"] = [DUPLICATE_PHONE_MSG]
        if errors:
            raise ValidationError(errors)

        for k, v in updates.items():
            setattr(patient, k, v.strip() if isinstance(v, str) else v)

        try:
            with transaction.atomic():
                patient.save()
        except IntegrityError:
            raise ValidationError({"phone": [DUPLICATE_PHONE_MSG]})

        AuditService.log(
            event_code="patient.updated",
            entity_type="Patient",
            entity_id=patient.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(list(updates.keys()))},
        )
        return patient
