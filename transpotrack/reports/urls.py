from django.urls import re_path
from . import views

urlpatterns = [
    re_path(r'^ledger/clients/?$', views.client_ledger_summary, name='ledger-client-summary'),
    re_path(r'^ledger/clients/(?P<client_id>[^/]+)/?$', views.client_ledger_detail, name='ledger-client-detail'),
    re_path(r'^ledger/suppliers/?$', views.supplier_ledger_summary, name='ledger-supplier-summary'),
    re_path(r'^ledger/suppliers/(?P<supplier_id>[^/]+)/?$', views.supplier_ledger_detail, name='ledger-supplier-detail'),
    re_path(r'^ledger/financial-years/?$', views.financial_year_list, name='ledger-financial-years'),
    re_path(r'^dashboard/?$', views.dashboard, name='dashboard'),
]
