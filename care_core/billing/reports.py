# care_core/billing/reports.py
"""
Billing and collection reports.

Like the workload statistics, each report reads one query and folds the
rows in Python. Money is summed as Decimal and quantized to paise.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from django.utils import timezone
from rest_framework.exceptions import ValidationError

from care_core.billing.models import BillStatus
from care_core.billing.selectors import bill_report_rows, payment_method_rows

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# days back from as_of; None means no lower bound
PERIOD_DAYS: dict[str, int | None] = {
    "today": 0,
    "week": 7,
    "month": 30,
    "quarter": 90,
    "year": 365,
    "all": None,
}
DEFAULT_PERIOD = "month"


def _money(value) -> Decimal:
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT)


def _average(total: Decimal, count: int) -> Decimal | None:
    if not count:
        return None
    return (total / count).quantize(CENT)


def period_start(period: str | None, as_of: date) -> date | None:
    period = period or DEFAULT_PERIOD
    if period not in PERIOD_DAYS:
        raise ValidationError({"period": [f"Period must be one of: {', '.join(PERIOD_DAYS)}"]})
    days = PERIOD_DAYS[period]
    return None if days is None else as_of - timedelta(days=days)


def _check_range(date_from: date | None, date_to: date | None) -> None:
    if date_from and date_to and date_from > date_to:
        raise ValidationError({"date_to": ["End date cannot be before start date"]})


@dataclass(frozen=True)
class BillingSummary:
    date_from: date
    date_to: date
    total_bills: int
    total_billed: Decimal
    total_collected: Decimal
    total_pending: Decimal
    paid_bills: int
    partial_bills: int
    pending_bills: int
    average_bill_amount: Decimal | None
    total_doctor_fees: Decimal
    total_room_charges: Decimal
    total_medicine_charges: Decimal
    total_other_charges: Decimal


@dataclass(frozen=True)
class DailyBilling:
    bill_date: date
    bills_count: int
    total_billed: Decimal
    total_collected: Decimal
    total_pending: Decimal
    average_bill: Decimal


@dataclass(frozen=True)
class PendingDue:
    bill_id: UUID
    bill_date: date
    status: str
    patient_id: UUID
    patient_code: str
    patient_name: str
    phone: str
    total_amount: Decimal
    paid_amount: Decimal
    pending_amount: Decimal
    days_pending: int


@dataclass(frozen=True)
class CollectionEfficiency:
    period: str
    as_of: date
    date_from: date | None
    total_bills: int
    total_billed: Decimal
    total_collected: Decimal
    collection_rate: float | None
    fully_paid_bills: int
    partially_paid_bills: int
    unpaid_bills: int
    avg_collection_days: float | None


@dataclass(frozen=True)
class PaymentMethodBreakdown:
    payment_method: str
    count: int
    total_amount: Decimal
    average_amount: Decimal


@dataclass(frozen=True)
class PaymentReport:
    period: str
    as_of: date
    date_from: date | None
    total_payments: int
    total_amount: Decimal
    average_amount: Decimal | None
    methods: list[PaymentMethodBreakdown]


class BillingReportService:
    @staticmethod
    def summary(
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        as_of: date | None = None,
    ) -> BillingSummary:
        """
        Totals for bills dated within [date_from, date_to].

        Defaults to the current month up to as_of.
        """
        as_of = as_of or timezone.localdate()
        date_to = date_to or as_of
        date_from = date_from or date_to.replace(day=1)
        _check_range(date_from, date_to)

        rows = bill_report_rows(date_from=date_from, date_to=date_to)

        billed = sum((_money(r["total_amount"]) for r in rows), ZERO)
        collected = sum((_money(r["paid"]) for r in rows), ZERO)
        by_status = {s: 0 for s in BillStatus.values}
        for r in rows:
            by_status[r["status"]] += 1

        return BillingSummary(
            date_from=date_from,
            date_to=date_to,
            total_bills=len(rows),
            total_billed=billed,
            total_collected=collected,
            total_pending=billed - collected,
            paid_bills=by_status[BillStatus.PAID],
            partial_bills=by_status[BillStatus.PARTIAL],
            pending_bills=by_status[BillStatus.PENDING],
            average_bill_amount=_average(billed, len(rows)),
            total_doctor_fees=sum((_money(r["doctor_fee"]) for r in rows), ZERO),
            total_room_charges=sum((_money(r["room_charges"]) for r in rows), ZERO),
            total_medicine_charges=sum((_money(r["medicine_charges"]) for r in rows), ZERO),
            total_other_charges=sum((_money(r["other_charges"]) for r in rows), ZERO),
        )

    @staticmethod
    def daily(
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        as_of: date | None = None,
    ) -> list[DailyBilling]:
        """Per bill_date totals, most recent day first."""
        as_of = as_of or timezone.localdate()
        date_to = date_to or as_of
        date_from = date_from or date_to.replace(day=1)
        _check_range(date_from, date_to)

        days: dict[date, list[Decimal]] = {}
        for r in bill_report_rows(date_from=date_from, date_to=date_to):
            # [count, billed, collected]
            acc = days.setdefault(r["bill_date"], [0, ZERO, ZERO])
            acc[0] += 1
            acc[1] += _money(r["total_amount"])
            acc[2] += _money(r["paid"])

        return [
            DailyBilling(
                bill_date=day,
                bills_count=count,
                total_billed=billed,
                total_collected=collected,
                total_pending=billed - collected,
                average_bill=_average(billed, count),
            )
            for day, (count, billed, collected) in sorted(days.items(), reverse=True)
        ]

    @staticmethod
    def pending_dues(
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        as_of: date | None = None,
    ) -> list[PendingDue]:
        """
        Bills not fully paid, oldest first.

        Ties on age go to the larger pending amount.
        """
        as_of = as_of or timezone.localdate()
        _check_range(date_from, date_to)

        dues = []
        for r in bill_report_rows(date_from=date_from, date_to=date_to, unpaid_only=True):
            total = _money(r["total_amount"])
            paid = _money(r["paid"])
            dues.append(
                PendingDue(
                    bill_id=r["id"],
                    bill_date=r["bill_date"],
                    status=r["status"],
                    patient_id=r["patient_id"],
                    patient_code=r["patient__patient_code"],
                    patient_name=r["patient__name"],
                    phone=r["patient__phone"],
                    total_amount=total,
                    paid_amount=paid,
                    pending_amount=total - paid,
                    days_pending=(as_of - r["bill_date"]).days,
                )
            )

        dues.sort(key=lambda d: (-d.days_pending, -d.pending_amount))
        return dues

    @staticmethod
    def collection_efficiency(*, period: str | None = None, as_of: date | None = None) -> CollectionEfficiency:
        """
        Share of billed money collected for bills dated in the period.

        Collection days run from bill_date to the first payment, or to as_of
        for bills with no payment yet.
        """
        as_of = as_of or timezone.localdate()
        period = period or DEFAULT_PERIOD
        date_from = period_start(period, as_of)

        rows = bill_report_rows(date_from=date_from, date_to=as_of)

        billed = sum((_money(r["total_amount"]) for r in rows), ZERO)
        collected = sum((_money(r["paid"]) for r in rows), ZERO)
        by_status = {s: 0 for s in BillStatus.values}
        waits = []
        for r in rows:
            by_status[r["status"]] += 1
            settled_on = r["first_payment_date"] or as_of
            waits.append((settled_on - r["bill_date"]).days)

        return CollectionEfficiency(
            period=period,
            as_of=as_of,
            date_from=date_from,
            total_bills=len(rows),
            total_billed=billed,
            total_collected=collected,
            collection_rate=round(float(collected / billed * 100), 1) if billed else None,
            fully_paid_bills=by_status[BillStatus.PAID],
            partially_paid_bills=by_status[BillStatus.PARTIAL],
            unpaid_bills=by_status[BillStatus.PENDING],
            avg_collection_days=round(sum(waits) / len(waits), 1) if waits else None,
        )

    @staticmethod
    def payments(*, period: str | None = None, as_of: date | None = None) -> PaymentReport:
        """Payments received in the period, split by method, largest total first."""
        as_of = as_of or timezone.localdate()
        period = period or DEFAULT_PERIOD
        date_from = period_start(period, as_of)

        methods = []
        for r in payment_method_rows(date_from=date_from, date_to=as_of):
            total = _money(r["total_amount"])
            methods.append(
                PaymentMethodBreakdown(
                    payment_method=r["payment_method"],
                    count=r["count"],
                    total_amount=total,
                    average_amount=_average(total, r["count"]),
                )
            )
        methods.sort(key=lambda m: (-m.total_amount, m.payment_method))

        count = sum(m.count for m in methods)
        total = sum((m.total_amount for m in methods), ZERO)
        return PaymentReport(
            period=period,
            as_of=as_of,
            date_from=date_from,
            total_payments=count,
            total_amount=total,
            average_amount=_average(total, count),
            methods=methods,
        )
