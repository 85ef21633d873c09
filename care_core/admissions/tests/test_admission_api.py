# care_core/admissions/tests/test_admission_api.py
from datetime import date, timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from care_core.admissions.tests.helpers import admit_row

pytestmark = pytest.mark.django_db


def _admit(api_client, patient, doctor, **overrides):
    payload = {
        "patient_id": str(patient.id),
        "doctor_id": str(doctor.id),
        "admission_date": "2024-01-01",
        "reason": "Chest pain",
        "rate_per_day": "1000.00",
    }
    payload.update(overrides)
    return api_client.post("/api/v1/admissions/", payload, format="json")


def test_admit_then_discharge_roundtrip(api_client, patient, doctor):
    r = _admit(api_client, patient, doctor)
    assert r.status_code == 201, r.data
    assert r.data["status"] == "ADMITTED"
    assert r.data["patient_code"] == patient.patient_code
    assert r.data["doctor_name"] == doctor.name
    assert r.data["rate_per_day"] == "1000.00"
    adm_id = r.data["id"]

    d = api_client.post(
        f"/api/v1/admissions/{adm_id}/discharge/",
        {"discharge_date": "2024-01-05", "notes": "Recovered"},
        format="json",
    )
    assert d.status_code == 200, d.data
    assert d.data["total_days"] == 5
    assert d.data["total_charge"] == "5000.00"

    g = api_client.get(f"/api/v1/admissions/{adm_id}/")
    assert g.status_code == 200, g.data
    assert g.data["status"] == "DISCHARGED"
    assert g.data["discharge_date"] == "2024-01-05"


def test_admit_validation_errors_are_itemized(api_client, patient, doctor):
    future = (timezone.localdate() + timedelta(days=3)).isoformat()

    r = _admit(api_client, patient, doctor, admission_date=future, reason="")

    assert r.status_code == 400, r.data
    assert r.data["error"]["code"] == "validation_error"
    details = r.data["error"]["details"]
    assert details["admission_date"] == ["Admission date cannot be in the future"]
    assert details["reason"] == ["Reason for admission is required"]


def test_admit_reports_rate_date_and_reason_together(api_client, patient, doctor):
    r = _admit(api_client, patient, doctor, admission_date="2999-01-01", reason="", rate_per_day="abc")

    assert r.status_code == 400, r.data
    details = r.data["error"]["details"]
    assert set(details.keys()) == {"admission_date", "reason", "rate_per_day"}
    assert details["rate_per_day"] == ["Rate per day must be a valid number"]


def test_admit_missing_ids_are_itemized_with_other_fields(api_client):
    r = api_client.post(
        "/api/v1/admissions/",
        {"doctor_id": "not-a-uuid", "admission_date": "2999-01-01", "reason": "", "rate_per_day": "-3"},
        format="json",
    )

    assert r.status_code == 400, r.data
    details = r.data["error"]["details"]
    assert set(details.keys()) == {"patient_id", "doctor_id", "admission_date", "reason", "rate_per_day"}
    assert details["patient_id"] == ["Patient is required"]
    assert details["doctor_id"] == ["Please select a valid doctor"]


def test_admit_without_rate_defaults_to_zero(api_client, patient, doctor):
    r = _admit(api_client, patient, doctor, rate_per_day=None)

    assert r.status_code == 201, r.data
    assert r.data["rate_per_day"] == "0.00"


def test_admit_already_admitted_returns_conflict(api_client, patient, doctor):
    admit_row(patient, doctor, admission_date=date(2024, 1, 1))

    r = _admit(api_client, patient, doctor)

    assert r.status_code == 409, r.data
    assert r.data["error"]["code"] == "conflict"
    assert r.data["error"]["message"] == "Patient is already admitted. Discharge the current admission first."
    assert "request_id" in r.data["error"]


def test_admit_unknown_doctor_returns_404(api_client, patient):
    r = api_client.post(
        "/api/v1/admissions/",
        {
            "patient_id": str(patient.id),
            "doctor_id": "00000000-0000-0000-0000-000000000000",
            "admission_date": "2024-01-01",
            "reason": "Fever",
        },
        format="json",
    )

    assert r.status_code == 404, r.data
    assert r.data["error"]["code"] == "not_found"
    assert r.data["error"]["message"] == "Doctor not found."


def test_discharge_twice_returns_404(api_client, patient, doctor):
    adm = admit_row(patient, doctor, admission_date=date(2024, 1, 1))
    url = f"/api/v1/admissions/{adm.id}/discharge/"

    first = api_client.post(url, {"discharge_date": "2024-01-02"}, format="json")
    assert first.status_code == 200, first.data

    second = api_client.post(url, {"discharge_date": "2024-01-03"}, format="json")
    assert second.status_code == 404, second.data
    assert second.data["error"]["message"] == "Admission not found or patient already discharged."


def test_discharge_requires_date(api_client, patient, doctor):
    adm = admit_row(patient, doctor, admission_date=date(2024, 1, 1))

    r = api_client.post(f"/api/v1/admissions/{adm.id}/discharge/", {}, format="json")

    assert r.status_code == 400, r.data
    assert r.data["error"]["details"]["discharge_date"] == ["Discharge date is required"]


def test_list_admissions_filters_by_status(api_client, make_patient, doctor):
    admit_row(make_patient(), doctor, admission_date=date(2024, 1, 1))
    admit_row(make_patient(), doctor, admission_date=date(2024, 1, 2), discharge_date=date(2024, 1, 3))

    r = api_client.get("/api/v1/admissions/", {"status": "DISCHARGED"})

    assert r.status_code == 200, r.data
    assert r.data["count"] == 1
    assert r.data["results"][0]["status"] == "DISCHARGED"


def test_list_admissions_rejects_bad_status(api_client):
    r = api_client.get("/api/v1/admissions/", {"status": "LOST"})

    assert r.status_code == 400, r.data
    assert "status" in r.data["error"]["details"]


def test_admissions_require_authentication():
    r = APIClient().get("/api/v1/admissions/")

    assert r.status_code in (401, 403)
    assert r.data["error"]["code"] in ("not_authenticated", "permission_denied")
