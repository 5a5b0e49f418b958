from django.urls import re_path
from .views import (
    trip_note_list_create, trip_note_detail, trip_note_balance,
    supplier_payment_list_create, supplier_payment_detail,
)

urlpatterns = [
    # TripNote endpoints
    re_path(r'^tripNotes/?$', trip_note_list_create, name='trip-note-list-create'),
    re_path(r'^tripNotes/(?P<pk>[^/]+)/balance/?$', trip_note_balance, name='trip-note-balance'),
    re_path(r'^tripNotes/(?P<pk>[^/]+)/?$', trip_note_detail, name='trip-note-detail'),

    # SupplierPayment endpoints
    re_path(r'^supplierPayments/?$', supplier_payment_list_create, name='supplier-payment-list-create'),
    re_path(r'^supplierPayments/(?P<pk>[^/]+)/?$', supplier_payment_detail, name='supplier-payment-detail'),
]
