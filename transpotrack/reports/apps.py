from django.apps import AppConfig


class ReportsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'transpotrack.reports'
    verbose_name = 'Ledger & Reports'
