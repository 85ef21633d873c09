# care_core/admissions/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from care_core.admissions.models import Admission
from care_core.admissions.workload import WorkloadTier


class AdmissionSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.name", read_only=True)
    patient_code = serializers.CharField(source="patient.patient_code", read_only=True)
    doctor_name = serializers.CharField(source="doctor.name", read_only=True)
    specialization = serializers.CharField(source="doctor.specialization", read_only=True)

    class Meta:
        model = Admission
        fields = [
            "id",
            "patient",
            "patient_name",
            "patient_code",
            "doctor",
            "doctor_name",
            "specialization",
            "admission_date",
            "discharge_date",
            "reason",
            "status",
            "rate_per_day",
            "total_days",
            "total_charge",
            "discharge_notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AdmitSerializer(serializers.Serializer):
    """
    Accepts raw values only. AdmissionService validates every field, so all
    failing fields are reported together.
    """
    patient_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    doctor_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    admission_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True, default="")
    rate_per_day = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class DischargeSerializer(serializers.Serializer):
    discharge_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class DischargeResultSerializer(serializers.Serializer):
    admission_id = serializers.UUIDField()
    total_days = serializers.IntegerField()
    total_charge = serializers.DecimalField(max_digits=12, decimal_places=2)


class DoctorRecommendationSerializer(serializers.Serializer):
    doctor_id = serializers.UUIDField()
    name = serializers.CharField()
    specialization = serializers.CharField()
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    active_assignments = serializers.IntegerField()
    total_assignments = serializers.IntegerField()
    workload_tier = serializers.ChoiceField(choices=WorkloadTier.choices)


class DoctorWorkloadStatsSerializer(serializers.Serializer):
    doctor_id = serializers.UUIDField()
    name = serializers.CharField()
    specialization = serializers.CharField()
    total_assignments = serializers.IntegerField()
    active_assignments = serializers.IntegerField()
    completed_assignments = serializers.IntegerField()
    avg_stay_days = serializers.FloatField(allow_null=True)
    weekly_assignments = serializers.IntegerField()
    monthly_assignments = serializers.IntegerField()
    last_assignment_date = serializers.DateField(allow_null=True)
    workload_tier = serializers.ChoiceField(choices=WorkloadTier.choices)


class FacilityWorkloadStatsSerializer(serializers.Serializer):
    as_of = serializers.DateField()
    total_doctors = serializers.IntegerField()
    total_active = serializers.IntegerField()
    total_assignments = serializers.IntegerField()
    total_completed = serializers.IntegerField()
    weekly_assignments = serializers.IntegerField()
    monthly_assignments = serializers.IntegerField()
    avg_workload = serializers.FloatField()
    avg_stay_days = serializers.FloatField(allow_null=True)
    tier_distribution = serializers.DictField(child=serializers.IntegerField())
    doctors = DoctorWorkloadStatsSerializer(many=True)


class AssignmentRecordSerializer(serializers.Serializer):
    admission_id = serializers.UUIDField()
    doctor_id = serializers.UUIDField()
    doctor_name = serializers.CharField()
    specialization = serializers.CharField()
    admission_date = serializers.DateField()
    discharge_date = serializers.DateField(allow_null=True)
    status = serializers.CharField()
    reason = serializers.CharField()
    stay_days = serializers.IntegerField()
    rate_per_day = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_charge = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)


class PatientSummarySerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    total_admissions = serializers.IntegerField()
    active_admissions = serializers.IntegerField()
    bill_count = serializers.IntegerField()
    pending_bill_count = serializers.IntegerField()
    total_billed = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    outstanding = serializers.DecimalField(max_digits=14, decimal_places=2)
