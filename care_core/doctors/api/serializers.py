# care_core/doctors/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from care_core.doctors.models import Doctor


class DoctorCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    specialization = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=10)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True, default=None)
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    schedule = serializers.CharField(required=False, allow_blank=True, default="")


class DoctorUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    specialization = serializers.CharField(max_length=100, required=False)
    phone = serializers.CharField(max_length=10, required=False)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    schedule = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class DoctorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Doctor
        fields = [
            "id",
            "name",
            "specialization",
            "phone",
            "email",
            "consultation_fee",
            "schedule",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
