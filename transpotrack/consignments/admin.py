from django.contrib import admin
from .models import LorryReceipt, LorryReceiptPayment


@admin.register(LorryReceipt)
class LorryReceiptAdmin(admin.ModelAdmin):
    list_display = ['lr_number', 'date', 'truck_number', 'from_location', 'to_location',
                    'freight_type', 'total_amount', 'amount_paid', 'status', 'invoice_id']
    list_filter = ['status', 'freight_type', 'date']
    search_fields = ['id', 'lr_number', 'truck_number', 'from_location', 'to_location']
    readonly_fields = ['amount_paid', 'invoice_id', 'created_at', 'updated_at']
    ordering = ['-date']
    date_hierarchy = 'date'


@admin.register(LorryReceiptPayment)
class LorryReceiptPaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'lr_id', 'date', 'amount', 'method']
    list_filter = ['method', 'date']
    search_fields = ['id', 'lr_id']
    ordering = ['-date']
