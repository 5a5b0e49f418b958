from django.urls import re_path
from .views import (
    lorry_receipt_list_create, lorry_receipt_detail, lorry_receipt_balance,
    lorry_receipt_payment_list_create, lorry_receipt_payment_detail,
)

urlpatterns = [
    # LorryReceipt endpoints
    re_path(r'^lorryReceipts/?$', lorry_receipt_list_create, name='lorry-receipt-list-create'),
    re_path(r'^lorryReceipts/(?P<pk>[^/]+)/balance/?$', lorry_receipt_balance, name='lorry-receipt-balance'),
    re_path(r'^lorryReceipts/(?P<pk>[^/]+)/?$', lorry_receipt_detail, name='lorry-receipt-detail'),

    # LorryReceiptPayment endpoints
    re_path(r'^lorryReceiptPayments/?$', lorry_receipt_payment_list_create, name='lorry-receipt-payment-list-create'),
    re_path(r'^lorryReceiptPayments/(?P<pk>[^/]+)/?$', lorry_receipt_payment_detail, name='lorry-receipt-payment-detail'),
]
