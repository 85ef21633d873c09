# care_core/doctors/api/views.py
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
    DoctorRecommendationSerializer,
    DoctorWorkloadStatsSerializer,
    FacilityWorkloadStatsSerializer,
)
from care_core.admissions.filters import AdmissionFilter
from care_core.admissions.models import Admission
from care_core.admissions.selectors import list_admissions_by_doctor
from care_core.admissions.stats import WorkloadStatsService
from care_core.admissions.workload import annotate_roster, recommend_doctors
from care_core.common.api.pagination import paginate
from care_core.common.api.utils import UUID_LOOKUP_REGEX, actor_user_id, date_param, uuid_or_none
from care_core.doctors.api.serializers import (
    DoctorCreateSerializer,
    DoctorSerializer,
    DoctorUpdateSerializer,
)
from care_core.doctors.models import Doctor
from care_core.doctors.selectors import get_doctor, search_doctors
from care_core.doctors.services import DoctorService


AS_OF_PARAM = OpenApiParameter(
    name="as_of",
    type=OpenApiTypes.DATE,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Reporting date for weekly/monthly windows (default today).",
)


class DoctorViewSet(viewsets.GenericViewSet):
    """
    Doctors:
    - list/retrieve/create/partial_update/destroy
    - recommendations: least loaded doctors first
    - workload: facility-wide workload report
    - stats / assignments per doctor
    """
    serializer_class = DoctorSerializer
    queryset = Doctor.objects.none()
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(
        tags=["Doctors"],
        responses={200: DoctorSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                name="specialization", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False
            ),
        ],
    )
    def list(self, request):
        qs = search_doctors(
            q=request.query_params.get("q"),
            specialization=request.query_params.get("specialization"),
        )
        return paginate(request, qs, DoctorSerializer)

    @extend_schema(tags=["Doctors"], request=DoctorCreateSerializer, responses={201: DoctorSerializer})
    def create(self, request):
        ser = DoctorCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        doctor = DoctorService.create_doctor(actor_user_id=actor_user_id(request), **ser.validated_data)
        return Response(DoctorSerializer(doctor).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Doctors"], responses={200: DoctorSerializer})
    def retrieve(self, request, pk=None):
        doctor = get_doctor(doctor_id=UUID(str(pk)))
        return Response(DoctorSerializer(doctor).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Doctors"], request=DoctorUpdateSerializer, responses={200: DoctorSerializer})
    def partial_update(self, request, pk=None):
        ser = DoctorUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        doctor = DoctorService.update_doctor(
            actor_user_id=actor_user_id(request),
            doctor_id=UUID(str(pk)),
            data=ser.validated_data,
        )
        return Response(DoctorSerializer(doctor).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Doctors"], responses={204: None})
    def destroy(self, request, pk=None):
        DoctorService.delete_doctor(actor_user_id=actor_user_id(request), doctor_id=UUID(str(pk)))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Doctors"],
        responses={200: DoctorRecommendationSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="specialization",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Case-insensitive specialization filter.",
            ),
            OpenApiParameter(
                name="ids",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Comma separated doctor ids. Returns that roster in the given order.",
            ),
        ],
    )
    @action(detail=False, methods=["get"], url_path="recommendations")
    def recommendations(self, request):
        roster = request.query_params.get("ids")
        if roster is not None:
            ids = [uuid_or_none(raw.strip(), "ids") for raw in roster.split(",") if raw.strip()]
            recs = annotate_roster(ids)
        else:
            recs = recommend_doctors(specialization=request.query_params.get("specialization"))
        return Response(DoctorRecommendationSerializer(recs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Doctors"], responses={200: FacilityWorkloadStatsSerializer}, parameters=[AS_OF_PARAM])
    @action(detail=False, methods=["get"], url_path="workload")
    def workload(self, request):
        report = WorkloadStatsService.facility_stats(as_of=date_param(request, "as_of"))
        return Response(FacilityWorkloadStatsSerializer(report).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Doctors"], responses={200: DoctorWorkloadStatsSerializer}, parameters=[AS_OF_PARAM])
    @action(detail=True, methods=["get"], url_path="stats")
    def stats(self, request, pk=None):
        report = WorkloadStatsService.doctor_stats(doctor_id=UUID(str(pk)), as_of=date_param(request, "as_of"))
        return Response(DoctorWorkloadStatsSerializer(report).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Doctors"],
        responses={200: AdmissionSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="date_from", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="page", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    @action(detail=True, methods=["get"], url_path="assignments")
    def assignments(self, request, pk=None):
        doctor = get_doctor(doctor_id=UUID(str(pk)))

        f = AdmissionFilter(request.query_params, queryset=Admission.objects.none())
        if not f.is_valid():
            raise translate_validation(f.errors)

        qs = list_admissions_by_doctor(
            doctor_id=doctor.id,
            status=f.form.cleaned_data.get("status") or None,
            date_from=f.form.cleaned_data.get("date_from"),
        )
        return paginate(request, qs, AdmissionSerializer)
