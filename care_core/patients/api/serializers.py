# care_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from care_core.patients.models import Gender, Patient


class PatientCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    age = serializers.IntegerField()
    gender = serializers.ChoiceField(choices=Gender.choices)
    phone = serializers.CharField(max_length=10)
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    emergency_contact = serializers.CharField(max_length=10, required=False, allow_blank=True, default="")
    medical_history = serializers.CharField(required=False, allow_blank=True, default="")


class PatientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH). patient_code is never editable.
    """
    name = serializers.CharField(max_length=100, required=False)
    age = serializers.IntegerField(required=False)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False)
    phone = serializers.CharField(max_length=10, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    emergency_contact = serializers.CharField(max_length=10, required=False, allow_blank=True)
    medical_history = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "patient_code",
            "name",
            "age",
            "gender",
            "phone",
            "email",
            "address",
            "emergency_contact",
            "medical_history",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
