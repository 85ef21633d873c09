# care_core/admissions/tests/helpers.py
from datetime import date
from decimal import Decimal

from care_core.admissions.models import Admission, AdmissionStatus


def admit_row(patient, doctor, *, admission_date: date, discharge_date: date | None = None,
              rate_per_day: Decimal = Decimal("0.00"), reason: str = "Observation") -> Admission:
    """
    Inserts an admission row directly, bypassing the service rules.
    """
    return Admission.objects.create(
        patient=patient,
        doctor=doctor,
        admission_date=admission_date,
        discharge_date=discharge_date,
        status=AdmissionStatus.DISCHARGED if discharge_date else AdmissionStatus.ADMITTED,
        reason=reason,
        rate_per_day=rate_per_day,
    )


def load_doctor(make_patient, doctor, *, active: int = 0, discharged: int = 0,
                admission_date: date = date(2024, 1, 1)) -> None:
    for _ in range(active):
        admit_row(make_patient(), doctor, admission_date=admission_date)
    for _ in range(discharged):
        admit_row(make_patient(), doctor, admission_date=admission_date, discharge_date=admission_date)
