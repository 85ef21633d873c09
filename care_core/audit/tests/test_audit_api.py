# care_core/audit/tests/test_audit_api.py
from datetime import date

import pytest

from care_core.admissions.services import AdmissionService, AdmitRequest
from care_core.audit.services import AuditService

pytestmark = pytest.mark.django_db


def test_audit_log_returns_record(patient):
    rec = AuditService.log(
        event_code="patient.viewed",
        entity_type="Patient",
        entity_id=patient.id,
        actor_user_id=None,
    )

    assert rec.metadata == {}
    assert rec.entity_id == patient.id


def test_audit_events_list_and_filters(api_client, user, patient, doctor):
    adm = AdmissionService.admit(
        request=AdmitRequest(
            patient_id=patient.id,
            doctor_id=doctor.id,
            admission_date=date(2024, 1, 1),
            reason="Observation",
        ),
        actor_user_id=user.id,
    )

    r = api_client.get("/api/v1/audit/events/", {"entity_type": "Admission"})
    assert r.status_code == 200, r.data
    assert r.data["count"] == 1
    event = r.data["results"][0]
    assert event["event_code"] == "admission.admitted"
    assert event["actor_user_id"] == user.id
    assert str(event["entity_id"]) == str(adm.id)

    r = api_client.get("/api/v1/audit/events/", {"event_code": "admission.discharged"})
    assert r.data["count"] == 0


def test_audit_events_bad_entity_id(api_client):
    r = api_client.get("/api/v1/audit/events/", {"entity_id": "xyz"})

    assert r.status_code == 400
    assert r.data["error"]["details"] == {"entity_id": ["Invalid UUID"]}
