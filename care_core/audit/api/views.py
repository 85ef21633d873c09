# care_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from care_core.audit.api.serializers import AuditEventSerializer
from care_core.audit.models import AuditEvent
from care_core.audit.selectors import list_audit_events
from care_core.common.api.pagination import paginate
from care_core.common.api.utils import uuid_or_none


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    Activity log (admissions, discharges, bills, payments, roster changes).
    """
    permission_classes = [IsAuthenticated]
    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditEventSerializer(many=True)},
        parameters=[
            OpenApiParameter("entity_type", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description="Filter by entity type (e.g. Admission, Bill)."),
            OpenApiParameter("entity_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("event_code", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False,
                             description="Filter by event code (e.g. admission.discharged)."),
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = list_audit_events(
            entity_type=request.query_params.get("entity_type") or None,
            entity_id=uuid_or_none(request.query_params.get("entity_id"), "entity_id"),
            event_code=request.query_params.get("event_code") or None,
        )
        return paginate(request, qs, AuditEventSerializer)
