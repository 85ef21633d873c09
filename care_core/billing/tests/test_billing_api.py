# care_core/billing/tests/test_billing_api.py
from datetime import date

import pytest

from care_core.admissions.tests.helpers import admit_row

pytestmark = pytest.mark.django_db


def _create_bill(api_client, patient, **overrides):
    payload = {"patient_id": str(patient.id), "doctor_fee": "800.00", "other_charges": "200.00"}
    payload.update(overrides)
    return api_client.post("/api/v1/billing/bills/", payload, format="json")


def test_bill_create_and_payments_flow(api_client, patient):
    r = _create_bill(api_client, patient)
    assert r.status_code == 201, r.data
    assert r.data["total_amount"] == "1000.00"
    assert r.data["status"] == "PENDING"
    bill_id = r.data["id"]
    url = f"/api/v1/billing/bills/{bill_id}/payments/"

    p1 = api_client.post(url, {"amount": "300.00", "payment_method": "Card"}, format="json")
    assert p1.status_code == 201, p1.data
    assert p1.data["recorded_by_user_id"] is not None

    p2 = api_client.post(url, {"amount": "700.00"}, format="json")
    assert p2.status_code == 201, p2.data
    assert p2.data["payment_method"] == "Cash"

    payments = api_client.get(url)
    assert payments.status_code == 200
    assert len(payments.data) == 2

    g = api_client.get(f"/api/v1/billing/bills/{bill_id}/")
    assert g.data["status"] == "PAID"
    assert len(g.data["payments"]) == 2

    again = api_client.post(url, {"amount": "1.00"}, format="json")
    assert again.status_code == 409, again.data
    assert again.data["error"]["message"] == "Bill is already fully paid"


def test_bill_for_admission_uses_doctor_fee(api_client, patient, doctor):
    adm = admit_row(patient, doctor, admission_date=date(2024, 1, 1))

    r = api_client.post(
        "/api/v1/billing/bills/",
        {"patient_id": str(patient.id), "admission_id": str(adm.id)},
        format="json",
    )

    assert r.status_code == 201, r.data
    assert r.data["doctor_fee"] == "500.00"
    assert r.data["admission"] == adm.id


def test_bill_list_filters(api_client, patient, make_patient):
    _create_bill(api_client, patient)
    _create_bill(api_client, make_patient())

    r = api_client.get("/api/v1/billing/bills/", {"patient": str(patient.id)})
    assert r.status_code == 200, r.data
    assert r.data["count"] == 1

    bad = api_client.get("/api/v1/billing/bills/", {"patient": "not-a-uuid"})
    assert bad.status_code == 400


def test_overpayment_returns_validation_error(api_client, patient):
    bill_id = _create_bill(api_client, patient).data["id"]

    r = api_client.post(f"/api/v1/billing/bills/{bill_id}/payments/", {"amount": "5000.00"}, format="json")

    assert r.status_code == 400, r.data
    assert r.data["error"]["details"]["amount"] == ["Payment amount exceeds pending amount"]
