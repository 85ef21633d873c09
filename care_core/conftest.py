# care_core/conftest.py
import itertools
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from care_core.doctors.models import Doctor
from care_core.patients.models import Patient

_phones = itertools.count(9000000001)
_codes = itertools.count(1)


def next_phone() -> str:
    return str(next(_phones))


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="testuser",
        password="testpass",
        is_active=True,
    )


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def make_patient(db):
    def _make(**overrides) -> Patient:
        data = {
            "patient_code": f"TST{next(_codes):05d}",
            "name": "Test Patient",
            "age": 40,
            "gender": "Male",
            "phone": next_phone(),
        }
        data.update(overrides)
        return Patient.objects.create(**data)

    return _make


@pytest.fixture
def make_doctor(db):
    def _make(**overrides) -> Doctor:
        data = {
            "name": "Dr Test",
            "specialization": "General Medicine",
            "phone": next_phone(),
            "consultation_fee": Decimal("500.00"),
        }
        data.update(overrides)
        return Doctor.objects.create(**data)

    return _make


@pytest.fixture
def patient(make_patient):
    return make_patient(name="Pat One")


@pytest.fixture
def doctor(make_doctor):
    return make_doctor(name="Asha Rao", specialization="Cardiology")
