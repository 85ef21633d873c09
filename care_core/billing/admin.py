# care_core/billing/admin.py
from django.contrib import admin

from care_core.billing.models import Bill, Payment


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    readonly_fields = ("amount", "payment_date", "payment_method", "reference", "recorded_by_user_id", "created_at")
    can_delete = False


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", "admission", "bill_date", "total_amount", "status")
    list_filter = ("status", "bill_date")
    search_fields = ("patient__name", "patient__patient_code")
    readonly_fields = ("total_amount", "status", "created_at", "updated_at")
    ordering = ("-bill_date", "-created_at")
    inlines = [PaymentInline]
