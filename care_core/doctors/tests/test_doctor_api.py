# care_core/doctors/tests/test_doctor_api.py
from datetime import date

import pytest

from care_core.admissions.tests.helpers import admit_row, load_doctor

pytestmark = pytest.mark.django_db


def test_doctor_create_and_retrieve(api_client):
    r = api_client.post(
        "/api/v1/doctors/",
        {
            "name": "Ravi Kumar",
            "specialization": "Orthopedics",
            "phone": "9123456780",
            "consultation_fee": "600.00",
        },
        format="json",
    )
    assert r.status_code == 201, r.data
    assert r.data["email"] is None
    did = r.data["id"]

    g = api_client.get(f"/api/v1/doctors/{did}/")
    assert g.status_code == 200, g.data
    assert g.data["consultation_fee"] == "600.00"


def test_doctor_patch(api_client, doctor):
    r = api_client.patch(f"/api/v1/doctors/{doctor.id}/", {"schedule": "Tue/Thu"}, format="json")

    assert r.status_code == 200, r.data
    assert r.data["schedule"] == "Tue/Thu"


def test_doctor_delete_blocked_returns_conflict(api_client, doctor, patient):
    admit_row(patient, doctor, admission_date=date(2024, 1, 1), discharge_date=date(2024, 1, 2))

    r = api_client.delete(f"/api/v1/doctors/{doctor.id}/")

    assert r.status_code == 409, r.data
    assert r.data["error"]["code"] == "conflict"
    assert r.data["error"]["message"].startswith("Cannot delete doctor.")


def test_doctor_delete_ok(api_client, doctor):
    r = api_client.delete(f"/api/v1/doctors/{doctor.id}/")
    assert r.status_code == 204

    g = api_client.get(f"/api/v1/doctors/{doctor.id}/")
    assert g.status_code == 404


def test_recommendations_endpoint(api_client, make_doctor, make_patient):
    busy = make_doctor(name="Busy", specialization="Cardiology")
    make_doctor(name="Free", specialization="Cardiology")
    make_doctor(name="Elsewhere", specialization="Dermatology")
    load_doctor(make_patient, busy, active=5)

    r = api_client.get("/api/v1/doctors/recommendations/", {"specialization": "cardiology"})

    assert r.status_code == 200, r.data
    assert [d["name"] for d in r.data] == ["Free", "Busy"]
    assert r.data[1]["workload_tier"] == "MEDIUM"
    assert r.data[1]["active_assignments"] == 5


def test_recommendations_empty(api_client):
    r = api_client.get("/api/v1/doctors/recommendations/")

    assert r.status_code == 200
    assert r.data == []


def test_workload_report(api_client, make_doctor, make_patient):
    d = make_doctor(name="Solo")
    admit_row(make_patient(), d, admission_date=date(2024, 3, 1), discharge_date=date(2024, 3, 4))
    admit_row(make_patient(), d, admission_date=date(2024, 3, 28))

    r = api_client.get("/api/v1/doctors/workload/", {"as_of": "2024-03-31"})

    assert r.status_code == 200, r.data
    assert r.data["total_doctors"] == 1
    assert r.data["total_active"] == 1
    assert r.data["weekly_assignments"] == 1
    assert r.data["avg_stay_days"] == 3.0
    assert r.data["tier_distribution"] == {"LOW": 1, "MEDIUM": 0, "HIGH": 0}
    assert r.data["doctors"][0]["name"] == "Solo"


def test_workload_report_rejects_bad_as_of(api_client):
    r = api_client.get("/api/v1/doctors/workload/", {"as_of": "yesterday"})

    assert r.status_code == 400, r.data
    assert "as_of" in r.data["error"]["details"]


def test_doctor_stats_endpoint(api_client, doctor, patient):
    admit_row(patient, doctor, admission_date=date(2024, 3, 30))

    r = api_client.get(f"/api/v1/doctors/{doctor.id}/stats/", {"as_of": "2024-03-31"})

    assert r.status_code == 200, r.data
    assert r.data["active_assignments"] == 1
    assert r.data["avg_stay_days"] is None
    assert r.data["last_assignment_date"] == "2024-03-30"
    assert r.data["workload_tier"] == "LOW"


def test_doctor_stats_unknown_doctor(api_client):
    r = api_client.get("/api/v1/doctors/00000000-0000-0000-0000-000000000000/stats/")

    assert r.status_code == 404
    assert r.data["error"]["code"] == "not_found"


def test_doctor_assignments_filtered_and_paginated(api_client, doctor, make_patient):
    admit_row(make_patient(), doctor, admission_date=date(2024, 1, 5))
    admit_row(make_patient(), doctor, admission_date=date(2024, 2, 5))
    admit_row(make_patient(), doctor, admission_date=date(2024, 2, 1), discharge_date=date(2024, 2, 3))

    r = api_client.get(f"/api/v1/doctors/{doctor.id}/assignments/", {"status": "ADMITTED"})
    assert r.status_code == 200, r.data
    assert r.data["count"] == 2
    assert [a["admission_date"] for a in r.data["results"]] == ["2024-02-05", "2024-01-05"]

    r = api_client.get(f"/api/v1/doctors/{doctor.id}/assignments/", {"date_from": "2024-02-01"})
    assert r.data["count"] == 2

    r = api_client.get(f"/api/v1/doctors/{doctor.id}/assignments/", {"page_size": 1, "page": 2})
    assert r.data["count"] == 3
    assert len(r.data["results"]) == 1
    assert r.data["previous"] is not None


def test_recommendations_for_roster_keep_roster_order(api_client, make_doctor, make_patient):
    busy = make_doctor(name="Busy")
    free = make_doctor(name="Free")
    load_doctor(make_patient, busy, active=10)

    r = api_client.get(
        "/api/v1/doctors/recommendations/",
        {"ids": f"{busy.id}, {free.id},00000000-0000-0000-0000-000000000000"},
    )

    assert r.status_code == 200, r.data
    assert [d["name"] for d in r.data] == ["Busy", "Free"]
    assert r.data[0]["workload_tier"] == "HIGH"
    assert r.data[1]["workload_tier"] == "LOW"


def test_recommendations_roster_rejects_bad_id(api_client):
    r = api_client.get("/api/v1/doctors/recommendations/", {"ids": "nope"})

    assert r.status_code == 400, r.data
    assert "ids" in r.data["error"]["details"]
