# care_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from care_core.admissions.api.views import AdmissionViewSet
from care_core.audit.api.views import AuditEventViewSet
from care_core.billing.api.views import BillingReportViewSet, BillPaymentsView, BillViewSet
from care_core.doctors.api.views import DoctorViewSet
from care_core.patients.api.views import PatientViewSet

router = DefaultRouter()

router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"doctors", DoctorViewSet, basename="doctors")
router.register(r"admissions", AdmissionViewSet, basename="admissions")
router.register(r"billing/bills", BillViewSet, basename="billing-bills")
router.register(r"billing/reports", BillingReportViewSet, basename="billing-reports")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Bill payments (non-ViewSet endpoint)
    path(
        "billing/bills/<uuid:bill_id>/payments/",
        BillPaymentsView.as_view(),
        name="billing-bill-payments",
    ),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
