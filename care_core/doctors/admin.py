# care_core/doctors/admin.py
from django.contrib import admin

from care_core.doctors.models import Doctor


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ("name", "specialization", "phone", "email", "consultation_fee", "created_at")
    list_filter = ("specialization",)
    search_fields = ("name", "specialization", "phone", "email")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
