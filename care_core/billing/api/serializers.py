# care_core/billing/api/serializers.py
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from care_core.billing.models import Bill, Payment, PaymentMethod


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "bill",
            "amount",
            "payment_date",
            "payment_method",
            "reference",
            "recorded_by_user_id",
            "created_at",
        ]
        read_only_fields = fields


class BillSerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.name", read_only=True)
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta:
        model = Bill
        fields = [
            "id",
            "patient",
            "patient_name",
            "admission",
            "bill_date",
            "doctor_fee",
            "room_charges",
            "medicine_charges",
            "other_charges",
            "total_amount",
            "status",
            "notes",
            "payments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BillCreateSerializer(serializers.Serializer):
    """
    doctor_fee / room_charges default from the admission when omitted.
    """
    patient_id = serializers.UUIDField()
    admission_id = serializers.UUIDField(required=False, allow_null=True)
    bill_date = serializers.DateField(required=False, allow_null=True)
    doctor_fee = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    room_charges = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    medicine_charges = serializers.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    other_charges = serializers.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    payment_date = serializers.DateField(required=False, allow_null=True)
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")


class BillingSummarySerializer(serializers.Serializer):
    date_from = serializers.DateField()
    date_to = serializers.DateField()
    total_bills = serializers.IntegerField()
    total_billed = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_collected = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid_bills = serializers.IntegerField()
    partial_bills = serializers.IntegerField()
    pending_bills = serializers.IntegerField()
    average_bill_amount = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    total_doctor_fees = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_room_charges = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_medicine_charges = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_other_charges = serializers.DecimalField(max_digits=14, decimal_places=2)


class DailyBillingSerializer(serializers.Serializer):
    bill_date = serializers.DateField()
    bills_count = serializers.IntegerField()
    total_billed = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_collected = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_bill = serializers.DecimalField(max_digits=14, decimal_places=2)


class PendingDueSerializer(serializers.Serializer):
    bill_id = serializers.UUIDField()
    bill_date = serializers.DateField()
    status = serializers.CharField()
    patient_id = serializers.UUIDField()
    patient_code = serializers.CharField()
    patient_name = serializers.CharField()
    phone = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    days_pending = serializers.IntegerField()


class CollectionEfficiencySerializer(serializers.Serializer):
    period = serializers.CharField()
    as_of = serializers.DateField()
    date_from = serializers.DateField(allow_null=True)
    total_bills = serializers.IntegerField()
    total_billed = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_collected = serializers.DecimalField(max_digits=14, decimal_places=2)
    collection_rate = serializers.FloatField(allow_null=True)
    fully_paid_bills = serializers.IntegerField()
    partially_paid_bills = serializers.IntegerField()
    unpaid_bills = serializers.IntegerField()
    avg_collection_days = serializers.FloatField(allow_null=True)


class PaymentMethodBreakdownSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class PaymentReportSerializer(serializers.Serializer):
    period = serializers.CharField()
    as_of = serializers.DateField()
    date_from = serializers.DateField(allow_null=True)
    total_payments = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_amount = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)
    methods = PaymentMethodBreakdownSerializer(many=True)
