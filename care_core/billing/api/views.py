# care_core/billing/api/views.py
from __future__ import annotations

from uuid import UUID

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from care_core.billing.api.serializers import (
    BillCreateSerializer,
    BillingSummarySerializer,
    BillSerializer,
    CollectionEfficiencySerializer,
    DailyBillingSerializer,
    PaymentCreateSerializer,
    PaymentReportSerializer,
    PaymentSerializer,
    PendingDueSerializer,
)
from care_core.billing.models import Bill
from care_core.billing.reports import DEFAULT_PERIOD, PERIOD_DAYS, BillingReportService
from care_core.billing.selectors import bill_payments, bills_filtered, get_bill
from care_core.billing.services import BillService, PaymentService
from care_core.common.api.pagination import paginate
from care_core.common.api.utils import UUID_LOOKUP_REGEX, actor_user_id, date_param, uuid_or_none


class BillViewSet(viewsets.GenericViewSet):
    """
    Bills: list/retrieve/create. Payments live under /billing/bills/<id>/payments/.
    """
    serializer_class = BillSerializer
    queryset = Bill.objects.none()
    lookup_value_regex = UUID_LOOKUP_REGEX

    @extend_schema(
        tags=["Billing"],
        responses={200: BillSerializer(many=True)},
        parameters=[
            OpenApiParameter(name="patient", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="admission", type=OpenApiTypes.UUID, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="status", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        qs = bills_filtered(
            patient_id=uuid_or_none(request.query_params.get("patient"), "patient"),
            admission_id=uuid_or_none(request.query_params.get("admission"), "admission"),
            status=request.query_params.get("status") or None,
        )
        return paginate(request, qs, BillSerializer)

    @extend_schema(tags=["Billing"], responses={200: BillSerializer})
    def retrieve(self, request, pk=None):
        bill = get_bill(bill_id=UUID(str(pk)))
        return Response(BillSerializer(bill).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], request=BillCreateSerializer, responses={201: BillSerializer})
    def create(self, request):
        ser = BillCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        bill = BillService.generate_bill(actor_user_id=actor_user_id(request), **ser.validated_data)
        return Response(BillSerializer(bill).data, status=status.HTTP_201_CREATED)


class BillPaymentsView(APIView):
    """
    /billing/bills/<bill_id>/payments/
    - GET list payments
    - POST record a payment
    """

    @extend_schema(tags=["Billing"], responses={200: PaymentSerializer(many=True)})
    def get(self, request, bill_id: UUID):
        bill = get_bill(bill_id=bill_id)
        return Response(PaymentSerializer(bill_payments(bill_id=bill.id), many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], request=PaymentCreateSerializer, responses={201: PaymentSerializer})
    def post(self, request, bill_id: UUID):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        pay = PaymentService.record_payment(
            bill_id=bill_id,
            amount=ser.validated_data["amount"],
            payment_method=ser.validated_data.get("payment_method"),
            payment_date=ser.validated_data.get("payment_date"),
            reference=ser.validated_data.get("reference", ""),
            recorded_by_user_id=actor_user_id(request),
        )
        return Response(PaymentSerializer(pay).data, status=status.HTTP_201_CREATED)


DATE_FROM_PARAM = OpenApiParameter(name="date_from", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False)
DATE_TO_PARAM = OpenApiParameter(name="date_to", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False)
AS_OF_PARAM = OpenApiParameter(name="as_of", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False)
PERIOD_PARAM = OpenApiParameter(
    name="period",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=False,
    enum=list(PERIOD_DAYS),
    default=DEFAULT_PERIOD,
)


class BillingReportViewSet(viewsets.GenericViewSet):
    """
    /billing/reports/
    - GET                 summary for a date range (default: this month)
    - GET daily/          per-day totals
    - GET pending-dues/   unpaid bills with days pending
    - GET collection/     collection efficiency for a period
    - GET payments/       payments by method for a period
    """
    serializer_class = BillingSummarySerializer
    queryset = Bill.objects.none()

    def _range(self, request) -> dict:
        return {
            "date_from": date_param(request, "date_from"),
            "date_to": date_param(request, "date_to"),
            "as_of": date_param(request, "as_of"),
        }

    @extend_schema(
        tags=["Billing"],
        responses={200: BillingSummarySerializer},
        parameters=[DATE_FROM_PARAM, DATE_TO_PARAM, AS_OF_PARAM],
    )
    def list(self, request):
        report = BillingReportService.summary(**self._range(request))
        return Response(BillingSummarySerializer(report).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        responses={200: DailyBillingSerializer(many=True)},
        parameters=[DATE_FROM_PARAM, DATE_TO_PARAM, AS_OF_PARAM],
    )
    @action(detail=False, methods=["get"])
    def daily(self, request):
        rows = BillingReportService.daily(**self._range(request))
        return Response(DailyBillingSerializer(rows, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Billing"],
        responses={200: PendingDueSerializer(many=True)},
        parameters=[DATE_FROM_PARAM, DATE_TO_PARAM, AS_OF_PARAM],
    )
    @action(detail=False, methods=["get"], url_path="pending-dues")
    def pending_dues(self, request):
        dues = BillingReportService.pending_dues(**self._range(request))
        return Response(PendingDueSerializer(dues, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], responses={200: CollectionEfficiencySerializer}, parameters=[PERIOD_PARAM, AS_OF_PARAM])
    @action(detail=False, methods=["get"])
    def collection(self, request):
        report = BillingReportService.collection_efficiency(
            period=request.query_params.get("period") or None,
            as_of=date_param(request, "as_of"),
        )
        return Response(CollectionEfficiencySerializer(report).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Billing"], responses={200: PaymentReportSerializer}, parameters=[PERIOD_PARAM, AS_OF_PARAM])
    @action(detail=False, methods=["get"])
    def payments(self, request):
        report = BillingReportService.payments(
            period=request.query_params.get("period") or None,
            as_of=date_param(request, "as_of"),
        )
        return Response(PaymentReportSerializer(report).data, status=status.HTTP_200_OK)
