from django.urls import re_path
from .views import (
    invoice_list_create, invoice_detail, invoice_cancel, invoice_reminder, invoice_calculate,
    payment_list_create, payment_detail,
)

urlpatterns = [
    # Invoice endpoints
    re_path(r'^invoices/?$', invoice_list_create, name='invoice-list-create'),
    re_path(r'^invoices/calculate/?$', invoice_calculate, name='invoice-calculate'),
    re_path(r'^invoices/(?P<pk>[^/]+)/cancel/?$', invoice_cancel, name='invoice-cancel'),
    re_path(r'^invoices/(?P<pk>[^/]+)/reminder/?$', invoice_reminder, name='invoice-reminder'),
    re_path(r'^invoices/(?P<pk>[^/]+)/?$', invoice_detail, name='invoice-detail'),

    # Payment endpoints
    re_path(r'^payments/?$', payment_list_create, name='payment-list-create'),
    re_path(r'^payments/(?P<pk>[^/]+)/?$', payment_detail, name='payment-detail'),
]
