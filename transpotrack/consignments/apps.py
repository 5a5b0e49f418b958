from django.apps import AppConfig


class ConsignmentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'transpotrack.consignments'
    verbose_name = 'Lorry Receipts'
