# care_core/doctors/services.py
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from rest_framework.exceptions import ValidationError

from care_core.admissions.selectors import count_admissions
from care_core.audit.services import AuditService
from care_core.common.api.exceptions import ConflictError
from care_core.common.validation import (
    PHONE_PATTERN,
    MaxLength,
    NumericRange,
    Pattern,
    Required,
    collect_errors,
)
from care_core.doctors.models import Doctor
from care_core.doctors.selectors import get_doctor

logger = logging.getLogger(__name__)

DUPLICATE_PHONE_MSG = "A doctor with this phone number already exists"
DUPLICATE_EMAIL_MSG = "A doctor with this email address already exists"
DELETE_BLOCKED_MSG = (
    "Cannot delete doctor. This doctor has patient admission records. "
    "Please transfer or discharge all patients first."
)

EDITABLE_FIELDS = ("name", "specialization", "phone", "email", "consultation_fee", "schedule")


def _doctor_rules(data: dict[str, Any]) -> dict:
    return {
        "name": (data.get("name"), [Required("Name"), MaxLength("Name", 100)]),
        "specialization": (data.get("specialization"), [
            Required("Specialization"),
            MaxLength("Specialization", 100),
        ]),
        "phone": (data.get("phone"), [
            Required("Phone"),
            Pattern("Phone", PHONE_PATTERN, message="Phone number must be 10 digits"),
        ]),
        "consultation_fee": (data.get("consultation_fee"), [
            Required("Consultation fee"),
            NumericRange("Consultation fee", 0, message="Consultation fee must be a valid positive number"),
        ]),
    }


def _validate(data: dict[str, Any], *, exclude_id: UUID | None = None) -> None:
    errors = collect_errors(_doctor_rules(data))

    email = data.get("email")
    if email:
        try:
            validate_email(email)
        except DjangoValidationError:
            errors.setdefault("email", []).append("Please enter a valid email address")

    others = Doctor.objects.all()
    if exclude_id is not None:
        others = others.exclude(id=exclude_id)
    if "phone" not in errors and others.filter(phone=data["phone"]).exists():
        errors["phone"] = [DUPLICATE_PHONE_MSG]
    if email and "email" not in errors and others.filter(email__iexact=email).exists():
        errors["email"] = [DUPLICATE_EMAIL_MSG]

    if errors:
        raise ValidationError(errors)


def _duplicate_error(phone: str, exclude_id: UUID | None = None) -> ValidationError:
    others = Doctor.objects.exclude(id=exclude_id) if exclude_id else Doctor.objects.all()
    if others.filter(phone=phone).exists():
        return ValidationError({"phone": [DUPLICATE_PHONE_MSG]})
    return ValidationError({"email": [DUPLICATE_EMAIL_MSG]})


def _clean(data: dict[str, Any]) -> dict[str, Any]:
    cleaned = {k: (v.strip() if isinstance(v, str) else v) for k, v in data.items()}
    # blank email is stored as NULL, others lowercased
    if "email" in cleaned:
        cleaned["email"] = cleaned["email"].lower() if cleaned["email"] else None
    return cleaned


class DoctorService:
    @staticmethod
    @transaction.atomic
    def create_doctor(
        *,
        actor_user_id: int | None,
        name: str,
        specialization: str,
        phone: str,
        consultation_fee,
        email: str | None = None,
        schedule: str = "",
    ) -> Doctor:
        data = _clean(
            {
                "name": name,
                "specialization": specialization,
                "phone": phone,
                "email": email,
                "consultation_fee": consultation_fee,
                "schedule": schedule or "",
            }
        )
        _validate(data)

        try:
            with transaction.atomic():
                doctor = Doctor.objects.create(**data)
        except IntegrityError:
            raise _duplicate_error(data["phone"])

        AuditService.log(
            event_code="doctor.created",
            entity_type="Doctor",
            entity_id=doctor.id,
            actor_user_id=actor_user_id,
            metadata={"name": doctor.name, "specialization": doctor.specialization},
        )
        return doctor

    @staticmethod
    @transaction.atomic
    def update_doctor(
        *,
        actor_user_id: int | None,
        doctor_id: UUID,
        data: dict,
    ) -> Doctor:
        doctor = get_doctor(doctor_id=doctor_id)

        updates = _clean({k: v for k, v in (data or {}).items() if k in EDITABLE_FIELDS})
        merged = {f: getattr(doctor, f) for f in EDITABLE_FIELDS}
        merged.update(updates)
        _validate(merged, exclude_id=doctor.id)

        for k, v in updates.items():
            setattr(doctor, k, v)

        try:
            with transaction.atomic():
                doctor.save()
        except IntegrityError:
            raise _duplicate_error(doctor.phone, exclude_id=doctor.id)

        AuditService.log(
            event_code="doctor.updated",
            entity_type="Doctor",
            entity_id=doctor.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(list(updates.keys()))},
        )
        return doctor

    @staticmethod
    @transaction.atomic
    def delete_doctor(*, actor_user_id: int | None, doctor_id: UUID) -> None:
        """
        Removes a doctor who has never been assigned an admission.
        Any admission, active or discharged, blocks deletion.
        """
        doctor = get_doctor(doctor_id=doctor_id)

        if count_admissions(doctor_id=doctor.id) > 0:
            logger.warning("Refused to delete doctor %s with admission records", doctor.id)
            raise ConflictError({"doctor": [DELETE_BLOCKED_MSG]})

        name, specialization = doctor.name, doctor.specialization
        try:
            with transaction.atomic():
                doctor.delete()
        except ProtectedError:
            raise ConflictError({"doctor": [DELETE_BLOCKED_MSG]})

        AuditService.log(
            event_code="doctor.deleted",
            entity_type="Doctor",
            entity_id=doctor_id,
            actor_user_id=actor_user_id,
            metadata={"name": name, "specialization": specialization},
        )
        logger.info("Deleted doctor %s", doctor_id)
