# care_core/doctors/tests/test_doctor_services.py
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.exceptions import ValidationError

from care_core.admissions.tests.helpers import admit_row
from care_core.audit.models import AuditEvent
from care_core.common.api.exceptions import ConflictError
from care_core.doctors.models import Doctor
from care_core.doctors.services import DoctorService

pytestmark = pytest.mark.django_db


def _create(**overrides):
    data = {
        "actor_user_id": None,
        "name": "Meera Iyer",
        "specialization": "Neurology",
        "phone": "9876543210",
        "email": "meera@example.com",
        "consultation_fee": Decimal("750.00"),
    }
    data.update(overrides)
    return DoctorService.create_doctor(**data)


def test_create_doctor_ok():
    doctor = _create(schedule="Mon-Fri 9-5")

    assert doctor.name == "Meera Iyer"
    assert doctor.consultation_fee == Decimal("750.00")
    assert AuditEvent.objects.filter(event_code="doctor.created", entity_id=doctor.id).exists()


def test_blank_emails_do_not_collide():
    a = _create(phone="9000000101", email="")
    b = _create(phone="9000000102", email=None)

    assert a.email is None
    assert b.email is None


def test_create_doctor_rejects_duplicate_phone_and_email():
    _create()

    with pytest.raises(ValidationError) as exc:
        _create(name="Other", email="meera@example.com")

    assert "phone" in exc.value.detail
    assert "email" in exc.value.detail


def test_create_doctor_rejects_negative_fee_and_bad_phone():
    with pytest.raises(ValidationError) as exc:
        _create(phone="12345", consultation_fee=Decimal("-1"))

    assert str(exc.value.detail["phone"][0]) == "Phone number must be 10 digits"
    assert "consultation_fee" in exc.value.detail


def test_update_doctor_keeps_own_phone():
    doctor = _create()

    updated = DoctorService.update_doctor(
        actor_user_id=None,
        doctor_id=doctor.id,
        data={"phone": "9876543210", "consultation_fee": Decimal("900.00")},
    )

    assert updated.consultation_fee == Decimal("900.00")


def test_delete_doctor_without_admissions(doctor):
    DoctorService.delete_doctor(actor_user_id=None, doctor_id=doctor.id)

    assert not Doctor.objects.filter(id=doctor.id).exists()
    assert AuditEvent.objects.filter(event_code="doctor.deleted", entity_id=doctor.id).exists()


@pytest.mark.parametrize("discharged", [False, True])
def test_delete_doctor_blocked_by_any_admission(doctor, patient, discharged):
    admit_row(
        patient,
        doctor,
        admission_date=date(2024, 1, 1),
        discharge_date=date(2024, 1, 2) if discharged else None,
    )

    with pytest.raises(ConflictError) as exc:
        DoctorService.delete_doctor(actor_user_id=None, doctor_id=doctor.id)

    assert "Cannot delete doctor" in str(exc.value.detail["doctor"][0])
    assert Doctor.objects.filter(id=doctor.id).exists()


def test_email_stored_lowercase_and_compared_case_insensitively():
    doctor = _create(email="Meera.Iyer@Example.com")
    assert doctor.email == "meera.iyer@example.com"

    with pytest.raises(ValidationError) as exc:
        _create(phone="9000000201", email="MEERA.IYER@example.COM")

    assert str(exc.value.detail["email"][0]) == "A doctor with this email address already exists"
    assert "phone" not in exc.value.detail


def test_update_email_collision_ignores_case():
    _create(email="first@example.com")
    other = _create(phone="9000000202", email="second@example.com")

    with pytest.raises(ValidationError) as exc:
        DoctorService.update_doctor(actor_user_id=None, doctor_id=other.id, data={"email": "First@Example.com"})

    assert "email" in exc.value.detail
