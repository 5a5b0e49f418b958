"""
Management command to back up every collection to one JSON file
"""
import os
from datetime import datetime

from django.conf import settings
from django.core.management.base import BaseCommand
from rest_framework.renderers import JSONRenderer

from transpotrack.billing.models import Invoice, Payment
from transpotrack.billing.serializers import InvoiceSerializer, PaymentSerializer
from transpotrack.consignments.models import LorryReceipt, LorryReceiptPayment
from transpotrack.consignments.serializers import LorryReceiptSerializer, LorryReceiptPaymentSerializer
from transpotrack.parties.models import Client, Supplier
from transpotrack.parties.serializers import ClientSerializer, SupplierSerializer
from transpotrack.trips.models import TripNote, SupplierPayment
from transpotrack.trips.serializers import TripNoteSerializer, SupplierPaymentSerializer

# Collection name -> (model, API serializer), in the order the API lists them
COLLECTIONS = [
    ('clients', Client, ClientSerializer),
    ('lorryReceipts', LorryReceipt, LorryReceiptSerializer),
    ('invoices', Invoice, InvoiceSerializer),
    ('payments', Payment, PaymentSerializer),
    ('lorryReceiptPayments', LorryReceiptPayment, LorryReceiptPaymentSerializer),
    ('suppliers', Supplier, SupplierSerializer),
    ('tripNotes', TripNote, TripNoteSerializer),
    ('supplierPayments', SupplierPayment, SupplierPaymentSerializer),
]


def build_backup():
    """All collections as API documents, keyed by collection name"""
    return {
        name: serializer_class(model.objects.all(), many=True).data
        for name, model, serializer_class in COLLECTIONS
    }


class Command(BaseCommand):
    help = "Exports all eight collections to a JSON file in API document format"

    def add_arguments(self, parser):
        parser.add_argument(
            '--output',
            type=str,
            default=None,
            help='Path of the JSON file to write (default: transpotrack_backup_<timestamp>.json)',
        )

    def handle(self, *args, **options):
        output = options['output']
        if not output:
            output = f"transpotrack_backup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        if not os.path.isabs(output):
            output = os.path.normpath(os.path.join(settings.BASE_DIR, output))

        backup = build_backup()
        content = JSONRenderer().render(backup, renderer_context={'indent': 2})

        with open(output, 'wb') as f:
            f.write(content)

        for name, documents in backup.items():
            self.stdout.write(f"  {name}: {len(documents)}")
        self.stdout.write(self.style.SUCCESS(f"Backup written to {output}"))
