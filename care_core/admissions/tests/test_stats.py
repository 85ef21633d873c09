# care_core/admissions/tests/test_stats.py
import uuid
from datetime import date
from decimal import Decimal

import pytest

from care_core.admissions.stats import WorkloadStatsService
from care_core.admissions.tests.helpers import admit_row, load_doctor
from care_core.admissions.workload import WorkloadTier
from care_core.billing.services import BillService, PaymentService
from care_core.common.api.exceptions import NotFoundError

pytestmark = pytest.mark.django_db

AS_OF = date(2024, 3, 31)


def test_doctor_stats_average_stay_ignores_active_admissions(doctor, make_patient):
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 1), discharge_date=date(2024, 3, 4))
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 10), discharge_date=date(2024, 3, 17))
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 20))

    stats = WorkloadStatsService.doctor_stats(doctor_id=doctor.id, as_of=AS_OF)

    assert stats.total_assignments == 3
    assert stats.active_assignments == 1
    assert stats.completed_assignments == 2
    assert stats.avg_stay_days == 5.0
    assert stats.last_assignment_date == date(2024, 3, 20)
    assert stats.workload_tier == WorkloadTier.LOW


def test_doctor_stats_recent_windows(doctor, make_patient):
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 24))  # exactly 7 days back
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 23))
    admit_row(make_patient(), doctor, admission_date=date(2024, 3, 1))  # exactly 30 days back
    admit_row(make_patient(), doctor, admission_date=date(2024, 2, 29))

    stats = WorkloadStatsService.doctor_stats(doctor_id=doctor.id, as_of=AS_OF)

    assert stats.weekly_assignments == 1
    assert stats.monthly_assignments == 3


def test_doctor_stats_without_admissions(doctor):
    stats = WorkloadStatsService.doctor_stats(doctor_id=doctor.id, as_of=AS_OF)

    assert stats.total_assignments == 0
    assert stats.avg_stay_days is None
    assert stats.last_assignment_date is None
    assert stats.workload_tier == WorkloadTier.LOW


def test_doctor_stats_unknown_doctor():
    with pytest.raises(NotFoundError):
        WorkloadStatsService.doctor_stats(doctor_id=uuid.uuid4())


def test_facility_stats_totals_and_tiers(make_doctor, make_patient):
    busy = make_doctor(name="Busy")
    medium = make_doctor(name="Medium")
    make_doctor(name="Idle")

    load_doctor(make_patient, busy, active=10, admission_date=date(2024, 3, 30))
    load_doctor(make_patient, medium, active=5, admission_date=date(2024, 1, 1))
    admit_row(make_patient(), medium, admission_date=date(2024, 3, 1), discharge_date=date(2024, 3, 3))

    report = WorkloadStatsService.facility_stats(as_of=AS_OF)

    assert report.total_doctors == 3
    assert report.total_active == 15
    assert report.total_assignments == 16
    assert report.total_completed == 1
    assert report.weekly_assignments == 10
    assert report.monthly_assignments == 11
    assert report.avg_workload == 5.0
    assert report.avg_stay_days == 2.0
    assert report.tier_distribution == {"LOW": 1, "MEDIUM": 1, "HIGH": 1}
    assert [d.name for d in report.doctors] == ["Busy", "Medium", "Idle"]


def test_facility_stats_with_no_doctors():
    report = WorkloadStatsService.facility_stats(as_of=AS_OF)

    assert report.total_doctors == 0
    assert report.avg_workload == 0
    assert report.avg_stay_days is None
    assert report.doctors == []


def test_patient_history_newest_first_with_open_stay_to_as_of(patient, make_doctor):
    first_doc = make_doctor(name="First")
    second_doc = make_doctor(name="Second")
    admit_row(patient, first_doc, admission_date=date(2024, 1, 1), discharge_date=date(2024, 1, 4))
    admit_row(patient, second_doc, admission_date=date(2024, 3, 25))

    history = WorkloadStatsService.patient_history(patient_id=patient.id, as_of=AS_OF)

    assert [h.doctor_name for h in history] == ["Second", "First"]
    assert history[0].stay_days == 6
    assert history[0].discharge_date is None
    assert history[1].stay_days == 3


def test_patient_history_unknown_patient():
    with pytest.raises(NotFoundError):
        WorkloadStatsService.patient_history(patient_id=uuid.uuid4())


def test_patient_summary_includes_billing(patient, doctor):
    admit_row(patient, doctor, admission_date=date(2024, 1, 1), discharge_date=date(2024, 1, 2))
    admit_row(patient, doctor, admission_date=date(2024, 2, 1))

    paid = BillService.generate_bill(actor_user_id=None, patient_id=patient.id, doctor_fee=Decimal("300.00"))
    BillService.generate_bill(actor_user_id=None, patient_id=patient.id, doctor_fee=Decimal("200.00"))
    PaymentService.record_payment(bill_id=paid.id, amount=Decimal("300.00"))

    summary = WorkloadStatsService.patient_summary(patient_id=patient.id)

    assert summary.total_admissions == 2
    assert summary.active_admissions == 1
    assert summary.bill_count == 2
    assert summary.pending_bill_count == 1
    assert summary.total_billed == Decimal("500.00")
    assert summary.total_paid == Decimal("300.00")
    assert summary.outstanding == Decimal("200.00")


def test_patient_summary_is_one_statement(patient, doctor, django_assert_num_queries):
    admit_row(patient, doctor, admission_date=date(2024, 1, 1))
    BillService.generate_bill(actor_user_id=None, patient_id=patient.id, doctor_fee=Decimal("150.00"))

    with django_assert_num_queries(1):
        summary = WorkloadStatsService.patient_summary(patient_id=patient.id)

    assert summary.active_admissions == 1
    assert summary.outstanding == Decimal("150.00")


def test_patient_summary_without_activity(patient):
    summary = WorkloadStatsService.patient_summary(patient_id=patient.id)

    assert summary.total_admissions == 0
    assert summary.bill_count == 0
    assert summary.total_billed == Decimal("0.00")
    assert summary.outstanding == Decimal("0.00")


def test_patient_summary_unknown_patient():
    with pytest.raises(NotFoundError):
        WorkloadStatsService.patient_summary(patient_id=uuid.uuid4())
