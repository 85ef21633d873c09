# care_core/billing/services.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from care_core.admissions.models import Admission, AdmissionStatus
from care_core.audit.services import AuditService
from care_core.billing.models import Bill, BillStatus, Payment, PaymentMethod, bill_status_for
from care_core.billing.selectors import paid_amount
from care_core.common.api.exceptions import ConflictError, NotFoundError
from care_core.common.validation import DateRange, NumericRange, Required, ensure_valid, parse_date
from care_core.patients.selectors import get_patient

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


def _charge_rule(label: str) -> NumericRange:
    return NumericRange(label, min_value=0, message=f"{label} must be a valid positive number")


class BillService:
    @staticmethod
    @transaction.atomic
    def generate_bill(
        *,
        actor_user_id: int | None,
        patient_id: UUID,
        admission_id: UUID | None = None,
        bill_date: date | str | None = None,
        doctor_fee: Decimal | None = None,
        room_charges: Decimal | None = None,
        medicine_charges: Decimal = ZERO,
        other_charges: Decimal = ZERO,
        notes: str = "",
    ) -> Bill:
        """
        Creates a PENDING bill.

        For an admission bill, doctor_fee defaults to the doctor's consultation
        fee and room_charges to the stay charge computed at discharge.
        """
        patient = get_patient(patient_id=patient_id)

        admission = None
        if admission_id:
            admission = Admission.objects.select_related("doctor").filter(id=admission_id).first()
            if admission is None:
                raise NotFoundError("Admission not found.")
            if admission.patient_id != patient.id:
                raise ValidationError({"admission_id": ["Admission does not belong to this patient."]})

        if doctor_fee is None:
            doctor_fee = admission.doctor.consultation_fee if admission else ZERO
        if room_charges is None:
            room_charges = (
                admission.total_charge
                if admission and admission.status == AdmissionStatus.DISCHARGED and admission.total_charge is not None
                else ZERO
            )
        bill_date = bill_date or timezone.localdate()

        ensure_valid(
            {
                "bill_date": (bill_date, [Required("Bill date"), DateRange("Bill date")]),
                "doctor_fee": (doctor_fee, [_charge_rule("Doctor fee")]),
                "room_charges": (room_charges, [_charge_rule("Room charges")]),
                "medicine_charges": (medicine_charges, [_charge_rule("Medicine charges")]),
                "other_charges": (other_charges, [_charge_rule("Other charges")]),
            }
        )

        components = [_money(doctor_fee), _money(room_charges), _money(medicine_charges), _money(other_charges)]

        bill = Bill.objects.create(
            patient=patient,
            admission=admission,
            bill_date=parse_date(bill_date),
            doctor_fee=components[0],
            room_charges=components[1],
            medicine_charges=components[2],
            other_charges=components[3],
            total_amount=sum(components, ZERO),
            status=BillStatus.PENDING,
            notes=(notes or "").strip(),
        )

        AuditService.log(
            event_code="bill.generated",
            entity_type="Bill",
            entity_id=bill.id,
            actor_user_id=actor_user_id,
            metadata={
                "patient_id": str(patient.id),
                "admission_id": str(admission.id) if admission else None,
                "total_amount": str(bill.total_amount),
            },
        )
        logger.info("Generated bill %s for patient %s, total %s", bill.id, patient.id, bill.total_amount)
        return bill


class PaymentService:
    @staticmethod
    @transaction.atomic
    def record_payment(
        *,
        bill_id: UUID,
        amount: Decimal,
        payment_method: str = PaymentMethod.CASH,
        payment_date: date | str | None = None,
        reference: str = "",
        recorded_by_user_id: int | None = None,
    ) -> Payment:
        bill = Bill.objects.select_for_update().filter(id=bill_id).first()
        if bill is None:
            raise NotFoundError("Bill not found.")

        if bill.status == BillStatus.PAID:
            raise ConflictError({"bill": ["Bill is already fully paid"]})

        payment_date = payment_date or timezone.localdate()
        ensure_valid(
            {
                "amount": (amount, [
                    Required("Payment amount"),
                    NumericRange("Payment amount", min_value=Decimal("0.01"),
                                 message="Payment amount must be greater than 0"),
                ]),
                "payment_date": (payment_date, [Required("Payment date"), DateRange("Payment date")]),
                "payment_method": (payment_method, [Required("Payment method")]),
            }
        )
        if payment_method not in PaymentMethod.values:
            raise ValidationError({"payment_method": ["Invalid payment method"]})

        amount = _money(amount)
        already_paid = paid_amount(bill_id=bill.id)
        if amount > bill.total_amount - already_paid:
            raise ValidationError({"amount": ["Payment amount exceeds pending amount"]})

        pay = Payment.objects.create(
            bill=bill,
            amount=amount,
            payment_date=parse_date(payment_date),
            payment_method=payment_method,
            reference=(reference or "").strip(),
            recorded_by_user_id=recorded_by_user_id,
        )

        bill.status = bill_status_for(bill.total_amount, already_paid + amount)
        bill.save(update_fields=["status", "updated_at"])

        AuditService.log(
            event_code="bill.payment_recorded",
            entity_type="Bill",
            entity_id=bill.id,
            actor_user_id=recorded_by_user_id,
            metadata={"payment_id": str(pay.id), "amount": str(amount), "status": bill.status},
        )
        return pay
