# care_core/patients/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from care_core.admissions.api.serializers import AssignmentRecordSerializer, PatientSummarySerializer
from care_core.admissions.stats import WorkloadStatsService
from care_core.common.api.pagination import paginate
from care_core.common.api.utils import UUID_LOOKUP_REGEX, actor_user_id
from care_core.patients.api.serializers import (
    PatientCreateSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
)
from care_core.patients.models import Patient
from care_core.patients.selectors import get_patient, search_patients
from care_core.patients.services import PatientService


class PatientViewSet(viewsets.GenericViewSet):
    serializer_class = PatientSerializer
    queryset = Patient.objects.none()
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(
        tags=["Patients"],
        responses={200: PatientSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Search by name, patient code, phone or email.",
            ),
        ],
    )
    def list(self, request):
        q = request.query_params.get("q", "").strip()
        return paginate(request, search_patients(q=q), PatientSerializer)

    @extend_schema(tags=["Patients"], request=PatientCreateSerializer, responses={201: PatientSerializer})
    def create(self, request):
        ser = PatientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        patient = PatientService.create_patient(
            actor_user_id=actor_user_id(request),
            **ser.validated_data,
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Patients"], responses={200: PatientSerializer})
    def retrieve(self, request, pk=None):
        patient = get_patient(patient_id=UUID(str(pk)))
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], request=PatientUpdateSerializer, responses={200: PatientSerializer})
    def partial_update(self, request, pk=None):
        ser = PatientUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        patient = PatientService.update_patient(
            actor_user_id=actor_user_id(request),
            patient_id=UUID(str(pk)),
            data=ser.validated_data,
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], responses={200: AssignmentRecordSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="assignment-history")
    def assignment_history(self, request, pk=None):
        records = WorkloadStatsService.patient_history(patient_id=UUID(str(pk)))
        return Response(AssignmentRecordSerializer(records, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Patients"], responses={200: PatientSummarySerializer})
    @action(detail=True, methods=["get"], url_path="summary")
    def summary(self, request, pk=None):
        summary = WorkloadStatsService.patient_summary(patient_id=UUID(str(pk)))
        return Response(PatientSummarySerializer(summary).data, status=status.HTTP_200_OK)
