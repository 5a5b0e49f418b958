from django.urls import re_path
from .views import company_settings, audit_log_list

urlpatterns = [
    # Company settings
    re_path(r'^settings/company/?$', company_settings, name='company-settings'),

    # AuditLog endpoints
    re_path(r'^audit-logs/?$', audit_log_list, name='audit-log-list'),
]
