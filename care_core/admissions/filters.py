# care_core/admissions/filters.py
from __future__ import annotations

import django_filters

from care_core.admissions.models import Admission, AdmissionStatus


class AdmissionFilter(django_filters.FilterSet):
    """
    Query params for admission listings: ?status=&date_from=&patient=&doctor=
    """
    status = django_filters.ChoiceFilter(choices=AdmissionStatus.choices)
    date_from = django_filters.DateFilter(field_name="admission_date", lookup_expr="gte")
    patient = django_filters.UUIDFilter(field_name="patient_id")
    doctor = django_filters.UUIDFilter(field_name="doctor_id")

    class Meta:
        model = Admission
        fields = ["status", "date_from", "patient", "doctor"]
