from django.contrib import admin
from .models import TripNote, SupplierPayment


@admin.register(TripNote)
class TripNoteAdmin(admin.ModelAdmin):
    list_display = ['note_id', 'date', 'supplier_id', 'vehicle_number', 'from_location', 'to_location',
                    'total_freight', 'status']
    list_filter = ['status', 'date']
    search_fields = ['id', 'note_id', 'vehicle_number', 'supplier_id']
    ordering = ['-date']
    date_hierarchy = 'date'


@admin.register(SupplierPayment)
class SupplierPaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'trip_note_id', 'date', 'amount', 'payment_type', 'method']
    list_filter = ['payment_type', 'method', 'date']
    search_fields = ['id', 'trip_note_id']
    ordering = ['-date']
