# care_core/billing/models.py
from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from care_core.admissions.models import Admission
from care_core.common.models import UUIDModel
from care_core.patients.models import Patient


class BillStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PARTIAL = "PARTIAL", "Partial"
    PAID = "PAID", "Paid"


def bill_status_for(total_amount: Decimal, paid_amount: Decimal) -> str:
    if paid_amount >= total_amount:
        return BillStatus.PAID
    if paid_amount > 0:
        return BillStatus.PARTIAL
    return BillStatus.PENDING


class Bill(UUIDModel):
    """
    Patient bill, optionally tied to one admission.
    total_amount is the sum of the four charge components.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="bills")
    admission = models.ForeignKey(
        Admission,
        on_delete=models.PROTECT,
        related_name="bills",
        null=True,
        blank=True,
    )

    bill_date = models.DateField(default=timezone.localdate)

    doctor_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    room_charges = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    medicine_charges = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    other_charges = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=16, choices=BillStatus.choices, default=BillStatus.PENDING, db_index=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "billing_bill"
        ordering = ["-bill_date", "-created_at"]
        indexes = [
            models.Index(fields=["patient", "bill_date"], name="bill_patient_date_idx"),
        ]


class PaymentMethod(models.TextChoices):
    CASH = "Cash", "Cash"
    CARD = "Card", "Card"
    UPI = "UPI", "UPI"
    BANK = "Bank Transfer", "Bank Transfer"
    CHEQUE = "Cheque", "Cheque"


class Payment(UUIDModel):
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_date = models.DateField(default=timezone.localdate)
    payment_method = models.CharField(max_length=32, choices=PaymentMethod.choices, default=PaymentMethod.CASH)

    reference = models.CharField(max_length=100, blank=True)
    recorded_by_user_id = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "billing_payment"
        ordering = ["-payment_date", "-created_at"]
