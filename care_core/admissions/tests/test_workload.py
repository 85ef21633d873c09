# care_core/admissions/tests/test_workload.py
import pytest

from care_core.admissions.tests.helpers import load_doctor
from care_core.admissions.workload import (
    WorkloadTier,
    annotate_roster,
    classify_workload,
    recommend_doctors,
)


@pytest.mark.parametrize(
    "active, tier",
    [
        (0, WorkloadTier.LOW),
        (4, WorkloadTier.LOW),
        (5, WorkloadTier.MEDIUM),
        (9, WorkloadTier.MEDIUM),
        (10, WorkloadTier.HIGH),
        (250, WorkloadTier.HIGH),
    ],
)
def test_classify_workload_boundaries(active, tier):
    assert classify_workload(active) == tier


def test_classify_workload_rejects_negative():
    with pytest.raises(ValueError):
        classify_workload(-1)


@pytest.mark.django_db
def test_recommend_empty_roster_returns_empty_list():
    assert recommend_doctors() == []


@pytest.mark.django_db
def test_recommend_orders_least_loaded_first(make_doctor, make_patient):
    busy = make_doctor(name="Busy")
    idle = make_doctor(name="Idle")
    seasoned = make_doctor(name="Seasoned")

    load_doctor(make_patient, busy, active=5)
    load_doctor(make_patient, seasoned, discharged=3)

    recs = recommend_doctors()

    assert [r.name for r in recs] == ["Idle", "Seasoned", "Busy"]
    by_name = {r.name: r for r in recs}
    assert by_name["Busy"].active_assignments == 5
    assert by_name["Busy"].workload_tier == WorkloadTier.MEDIUM
    assert by_name["Seasoned"].active_assignments == 0
    assert by_name["Seasoned"].total_assignments == 3
    assert by_name["Idle"].workload_tier == WorkloadTier.LOW
    assert idle.id in {r.doctor_id for r in recs}


@pytest.mark.django_db
def test_recommend_lists_high_load_doctors_once_each(make_doctor, make_patient):
    overloaded = make_doctor(name="Overloaded")
    make_doctor(name="Other")
    load_doctor(make_patient, overloaded, active=10)

    recs = recommend_doctors()

    assert len(recs) == 2
    assert len({r.doctor_id for r in recs}) == 2
    assert recs[-1].doctor_id == overloaded.id
    assert recs[-1].workload_tier == WorkloadTier.HIGH
    for r in recs:
        assert r.workload_tier == classify_workload(r.active_assignments)


@pytest.mark.django_db
def test_recommend_filters_by_specialization_case_insensitive(make_doctor):
    make_doctor(name="Heart", specialization="Cardiology")
    make_doctor(name="Bones", specialization="Orthopedics")

    recs = recommend_doctors(specialization="cardio")

    assert [r.name for r in recs] == ["Heart"]


@pytest.mark.django_db
def test_annotate_roster_keeps_roster_order_and_drops_duplicates(make_doctor, make_patient):
    a = make_doctor(name="A")
    b = make_doctor(name="B")
    load_doctor(make_patient, a, active=2)

    recs = annotate_roster([b, a, b])

    assert [r.doctor_id for r in recs] == [b.id, a.id]
    assert recs[1].active_assignments == 2
    assert annotate_roster([]) == []
