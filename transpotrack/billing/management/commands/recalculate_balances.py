from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Sum

from transpotrack.billing.models import Invoice, Payment
from transpotrack.billing.services import recalculate_invoice
from transpotrack.consignments.models import LorryReceipt, LorryReceiptPayment


class Command(BaseCommand):
    help = 'Recomputes invoice and LR amountPaid/status from their payments and repairs stale LR links'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Perform a dry run without saving changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE: No changes will be saved."))

        invoices_fixed = 0
        lrs_fixed = 0
        links_fixed = 0

        with transaction.atomic():
            invoices = Invoice.objects.select_for_update().all()
            self.stdout.write(f"Checking {invoices.count()} invoices...")
            for invoice in invoices:
                before = (invoice.amount_paid, invoice.status)
                if recalculate_invoice(invoice):
                    invoices_fixed += 1
                    self.stdout.write(self.style.SUCCESS(
                        f"  - Invoice {invoice.invoice_number}: {before[0]}/{before[1]} -> "
                        f"{invoice.amount_paid}/{invoice.status}"
                    ))
                    invoice.save(update_fields=['amount_paid', 'status', 'updated_at'])

            orphans = Payment.objects.exclude(invoice_id__in=Invoice.objects.values('id')).count()
            if orphans:
                self.stdout.write(self.style.WARNING(f"  - {orphans} payment(s) reference invoices that no longer exist"))

            lrs = LorryReceipt.objects.select_for_update().all()
            self.stdout.write(f"Checking {lrs.count()} lorry receipts...")
            live_invoice_ids = set(Invoice.objects.exclude(status='Cancelled').values_list('id', flat=True))
            for lr in lrs:
                update_fields = []
                paid = LorryReceiptPayment.objects.filter(lr_id=lr.id).aggregate(s=Sum('amount'))['s'] or Decimal('0.00')
                if lr.amount_paid != paid:
                    self.stdout.write(self.style.SUCCESS(f"  - LR {lr.lr_number}: amountPaid {lr.amount_paid} -> {paid}"))
                    lr.amount_paid = paid
                    update_fields.append('amount_paid')
                    lrs_fixed += 1
                if lr.invoice_id and lr.invoice_id not in live_invoice_ids:
                    self.stdout.write(self.style.NOTICE(f"  - LR {lr.lr_number}: unlinking stale invoice {lr.invoice_id}"))
                    lr.invoice_id = None
                    update_fields.append('invoice_id')
                    links_fixed += 1
                if update_fields:
                    lr.save(update_fields=update_fields + ['updated_at'])

            summary = f"{invoices_fixed} invoice(s), {lrs_fixed} LR balance(s), {links_fixed} LR link(s) repaired"
            if dry_run:
                self.stdout.write(self.style.WARNING(f"\nDry run complete ({summary}). Rolling back changes."))
                transaction.set_rollback(True)
            else:
                self.stdout.write(self.style.SUCCESS(f"\nBalance repair complete and committed: {summary}."))
