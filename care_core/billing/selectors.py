# care_core/billing/selectors.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db.models import Count, DecimalField, IntegerField, Min, OuterRef, QuerySet, Subquery, Sum, Value
from django.db.models.functions import Coalesce

from care_core.admissions.models import Admission, AdmissionStatus
from care_core.billing.models import Bill, BillStatus, Payment
from care_core.common.api.exceptions import NotFoundError
from care_core.patients.models import Patient


def bills_filtered(
    *,
    patient_id: UUID | None = None,
    admission_id: UUID | None = None,
    status: str | None = None,
) -> QuerySet[Bill]:
    qs = Bill.objects.select_related("patient").order_by("-bill_date", "-created_at")

    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    if admission_id:
        qs = qs.filter(admission_id=admission_id)
    if status:
        qs = qs.filter(status=status)

    return qs


def get_bill(*, bill_id: UUID) -> Bill:
    try:
        return Bill.objects.get(id=bill_id)
    except Bill.DoesNotExist:
        raise NotFoundError("Bill not found.")


def paid_amount(*, bill_id: UUID) -> Decimal:
    total = Payment.objects.filter(bill_id=bill_id).aggregate(s=Sum("amount"))["s"]
    return total or Decimal("0.00")


def bill_payments(*, bill_id: UUID) -> QuerySet[Payment]:
    return Payment.objects.filter(bill_id=bill_id).order_by("-payment_date", "-created_at")


def bill_report_rows(
    *,
    date_from: date | None = None,
    date_to: date | None = None,
    unpaid_only: bool = False,
) -> list[dict]:
    """
    One row per bill with its paid total and first payment date.
    """
    qs = Bill.objects.all()
    if date_from:
        qs = qs.filter(bill_date__gte=date_from)
    if date_to:
        qs = qs.filter(bill_date__lte=date_to)
    if unpaid_only:
        qs = qs.exclude(status=BillStatus.PAID)

    return list(
        qs.order_by()
        .annotate(paid=Sum("payments__amount"), first_payment_date=Min("payments__payment_date"))
        .values(
            "id",
            "bill_date",
            "status",
            "total_amount",
            "doctor_fee",
            "room_charges",
            "medicine_charges",
            "other_charges",
            "paid",
            "first_payment_date",
            "patient_id",
            "patient__patient_code",
            "patient__name",
            "patient__phone",
        )
    )


def payment_method_rows(*, date_from: date | None = None, date_to: date | None = None) -> list[dict]:
    qs = Payment.objects.all()
    if date_from:
        qs = qs.filter(payment_date__gte=date_from)
    if date_to:
        qs = qs.filter(payment_date__lte=date_to)

    return list(
        qs.order_by()
        .values("payment_method")
        .annotate(count=Count("id"), total_amount=Sum("amount"))
        .order_by("payment_method")
    )


def _per_patient(qs: QuerySet, key: str, aggregate, output_field) -> Coalesce:
    sub = qs.order_by().values(key).annotate(v=aggregate).values("v")[:1]
    return Coalesce(Subquery(sub, output_field=output_field), Value(0), output_field=output_field)


def patient_activity_summary(*, patient_id: UUID) -> dict | None:
    """
    Admission counts and billing totals for one patient, read in a single
    statement. None when the patient does not exist.
    """
    money = DecimalField(max_digits=14, decimal_places=2)
    count = IntegerField()

    admissions = Admission.objects.filter(patient_id=OuterRef("pk"))
    bills = Bill.objects.filter(patient_id=OuterRef("pk"))
    payments = Payment.objects.filter(bill__patient_id=OuterRef("pk"))

    row = (
        Patient.objects.filter(id=patient_id)
        .annotate(
            total_admissions=_per_patient(admissions, "patient_id", Count("id"), count),
            active_admissions=_per_patient(
                admissions.filter(status=AdmissionStatus.ADMITTED), "patient_id", Count("id"), count
            ),
            bill_count=_per_patient(bills, "patient_id", Count("id"), count),
            pending_count=_per_patient(bills.exclude(status=BillStatus.PAID), "patient_id", Count("id"), count),
            total_billed=_per_patient(bills, "patient_id", Sum("total_amount"), money),
            total_paid=_per_patient(payments, "bill__patient_id", Sum("amount"), money),
        )
        .values(
            "total_admissions",
            "active_admissions",
            "bill_count",
            "pending_count",
            "total_billed",
            "total_paid",
        )
        .first()
    )
    if row is None:
        return None

    for key in ("total_billed", "total_paid"):
        row[key] = Decimal(row[key]).quantize(Decimal("0.01"))
    row["outstanding"] = row["total_billed"] - row["total_paid"]
    return row
