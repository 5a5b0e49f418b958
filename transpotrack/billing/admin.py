from django.contrib import admin
from .models import Invoice, Payment


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ['invoice_number', 'date', 'client_id', 'invoice_type', 'total_amount',
                    'amount_paid', 'due_date', 'status']
    list_filter = ['status', 'invoice_type', 'date']
    search_fields = ['id', 'invoice_number', 'client_id']
    readonly_fields = ['amount_paid', 'created_at', 'updated_at']
    ordering = ['-date']
    date_hierarchy = 'date'


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'invoice_id', 'date', 'amount', 'method']
    list_filter = ['method', 'date']
    search_fields = ['id', 'invoice_id']
    ordering = ['-date']
