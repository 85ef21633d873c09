# care_core/admissions/admin.py
from django.contrib import admin

from care_core.admissions.models import Admission


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    list_display = (
        "patient",
        "doctor",
        "admission_date",
        "discharge_date",
        "status",
        "rate_per_day",
        "total_charge",
    )
    list_filter = ("status", "admission_date")
    search_fields = ("patient__name", "patient__patient_code", "doctor__name")
    readonly_fields = ("status", "discharge_date", "total_days", "total_charge", "created_at", "updated_at")
    ordering = ("-admission_date",)
