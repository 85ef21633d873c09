# care_core/patients/admin.py
from django.contrib import admin

from care_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "patient_code",
        "name",
        "age",
        "gender",
        "phone",
        "created_at",
    )
    list_filter = ("gender",)
    search_fields = ("name", "patient_code", "phone", "email")
    readonly_fields = ("patient_code", "created_at", "updated_at")
    ordering = ("-created_at",)
