from django.apps import AppConfig


class BillingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'transpotrack.billing'
    verbose_name = 'Invoices & Payments'
