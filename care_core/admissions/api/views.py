# care_core/admissions/api/views.py
from __future__ import annotations

from uuid import UUID

from django_filters.utils import translate_validation
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from care_core.admissions.api.serializers import (
    AdmissionSerializer,
    AdmitSerializer,
    DischargeResultSerializer,
    DischargeSerializer,
)
from care_core.admissions.filters import AdmissionFilter
from care_core.admissions.models import Admission
from care_core.admissions.selectors import get_admission, list_admissions
from care_core.admissions.services import AdmissionService, AdmitRequest, DischargeRequest
from care_core.common.api.pagination import paginate
from care_core.common.api.utils import UUID_LOOKUP_REGEX, actor_user_id


class AdmissionViewSet(viewsets.GenericViewSet):
    """
    Admissions:
    - list/retrieve
    - create (admit a patient under a doctor)
    - discharge
    """
    serializer_class = AdmissionSerializer
    queryset = Admission.objects.none()
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(
        tags=["Admissions"],
        responses={200: AdmissionSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="date_from", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="patient", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="doctor", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        f = AdmissionFilter(request.query_params, queryset=list_admissions())
        if not f.is_valid():
            raise translate_validation(f.errors)
        return paginate(request, f.qs, AdmissionSerializer)

    @extend_schema(tags=["Admissions"], responses={200: AdmissionSerializer})
    def retrieve(self, request, pk=None):
        adm = get_admission(admission_id=UUID(str(pk)))
        return Response(AdmissionSerializer(adm).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Admissions"], request=AdmitSerializer, responses={201: AdmissionSerializer})
    def create(self, request):
        ser = AdmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        adm = AdmissionService.admit(
            request=AdmitRequest(
                patient_id=ser.validated_data.get("patient_id"),
                doctor_id=ser.validated_data.get("doctor_id"),
                admission_date=ser.validated_data.get("admission_date"),
                reason=ser.validated_data.get("reason", ""),
                rate_per_day=ser.validated_data.get("rate_per_day"),
            ),
            actor_user_id=actor_user_id(request),
        )
        adm = get_admission(admission_id=adm.id)
        return Response(AdmissionSerializer(adm).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Admissions"], request=DischargeSerializer, responses={200: DischargeResultSerializer})
    @action(detail=True, methods=["post"], url_path="discharge")
    def discharge(self, request, pk=None):
        ser = DischargeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = AdmissionService.discharge(
            request=DischargeRequest(
                admission_id=UUID(str(pk)),
                discharge_date=ser.validated_data.get("discharge_date"),
                notes=ser.validated_data.get("notes", ""),
            ),
            actor_user_id=actor_user_id(request),
        )
        return Response(DischargeResultSerializer(result).data, status=status.HTTP_200_OK)
