"""
Comprehensive test suite for Billing module
Tests: invoice totals, LR linking, cancellation, payments and the balance repair command
"""
import io
from datetime import date
from decimal import Decimal

from django.core.management import call_command
from django.test import TestCase
from rest_framework import status

from transpotrack.billing.models import Invoice, Payment
from transpotrack.billing.services import amount_in_words, calculate_invoice_totals, get_payment_status
from transpotrack.consignments.models import LorryReceipt
from transpotrack.core.models import AuditLog
from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient


class InvoiceCalculationTests(TestCase):
    """Test invoice totals and amount in words"""

    def test_lr_based_totals_with_gst_and_tds(self):
        """Test LR-based totals with GST and TDS deduction"""
        totals = calculate_invoice_totals(
            invoice_type='LR-based',
            lr_charges=[
                {'totalAmount': Decimal('10000.00'), 'haltingCharge': 500},
                {'totalAmount': Decimal('8000.00'), 'freightAmount': 9000, 'extraCharge': 500},
            ],
            discount=1000,
            gst_details={'rate': 12, 'isReverseCharge': False},
            tds_details={'type': 'Deduction', 'rate': 2},
        )
        self.assertEqual(totals['totalTripAmount'], Decimal('20000.00'))
        self.assertEqual(totals['taxableAmount'], Decimal('19000.00'))
        self.assertEqual(totals['gstAmount'], Decimal('2280.00'))
        self.assertEqual(totals['tdsAmount'], Decimal('380.00'))
        self.assertEqual(totals['totalAmount'], Decimal('20900.00'))

    def test_reverse_charge_skips_gst(self):
        """Test reverse charge invoices carry no GST"""
        totals = calculate_invoice_totals(
            lr_charges=[{'totalAmount': 5000}],
            gst_details={'rate': 5, 'isReverseCharge': True},
        )
        self.assertEqual(totals['gstAmount'], Decimal('0.00'))
        self.assertEqual(totals['totalAmount'], Decimal('5000.00'))

    def test_tds_addition(self):
        """Test TDS of type Addition raises the total"""
        totals = calculate_invoice_totals(
            lr_charges=[{'totalAmount': 1000}],
            tds_details={'type': 'Addition', 'rate': 1},
        )
        self.assertEqual(totals['totalAmount'], Decimal('1010.00'))

    def test_manual_totals_with_round_off_and_advance(self):
        """Test manual entries with round-off and advance received"""
        totals = calculate_invoice_totals(
            invoice_type='Manual',
            manual_entries=[{'freightAmount': 1000.40}, {'freightAmount': 500}],
            apply_round_off=True,
            advance_received=500,
        )
        self.assertEqual(totals['totalTripAmount'], Decimal('1500.40'))
        self.assertEqual(totals['roundOff'], Decimal('-0.40'))
        self.assertEqual(totals['totalAmount'], Decimal('1500.00'))
        self.assertEqual(totals['payableAmount'], Decimal('1000.00'))
        self.assertEqual(totals['amountInWords'], 'ONE THOUSAND FIVE HUNDRED ONLY')

    def test_amount_in_words_indian_system(self):
        """Test amount in words uses crore and lakh"""
        self.assertEqual(
            amount_in_words(Decimal('12345678.50')),
            'ONE CRORE TWENTY THREE LAKH FORTY FIVE THOUSAND SIX HUNDRED SEVENTY EIGHT AND PAISE FIFTY ONLY',
        )
        self.assertEqual(amount_in_words(100000), 'ONE LAKH ONLY')
        self.assertEqual(amount_in_words(0), 'ZERO ONLY')

    def test_negative_total_in_words(self):
        """Test a discount larger than the trip amount gives a negative total in words"""
        totals = calculate_invoice_totals('Manual', manual_entries=[{'freightAmount': 100}], discount=105)
        self.assertEqual(totals['totalAmount'], Decimal('-5.00'))
        self.assertEqual(totals['amountInWords'], 'MINUS FIVE ONLY')
        self.assertEqual(
            amount_in_words(Decimal('-1500.50')),
            'MINUS ONE THOUSAND FIVE HUNDRED AND PAISE FIFTY ONLY',
        )

    def test_payment_status(self):
        """Test invoice payment status derivation"""
        invoice = Invoice(total_amount=Decimal('100.00'), amount_paid=Decimal('0.00'), status='Unpaid')
        self.assertEqual(get_payment_status(invoice), 'Unpaid')
        invoice.amount_paid = Decimal('40.00')
        self.assertEqual(get_payment_status(invoice), 'Partially Paid')
        invoice.amount_paid = Decimal('100.00')
        self.assertEqual(get_payment_status(invoice), 'Paid')
        invoice.status = 'Cancelled'
        self.assertEqual(get_payment_status(invoice), 'Cancelled')


class InvoiceAPITests(TestCase):
    """Test Invoice API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.customer = TestDataFactory.create_client(name='Acme Steel')
        self.lr1 = TestDataFactory.create_lorry_receipt(consignor=self.customer, total_amount='10000.00')
        self.lr2 = TestDataFactory.create_lorry_receipt(consignor=self.customer, total_amount='5000.00')

    def _create(self, **overrides):
        data = {
            'date': '2024-06-01',
            'clientId': self.customer.id,
            'lrIds': [self.lr1.id, self.lr2.id],
            'status': 'Paid',
        }
        data.update(overrides)
        return self.client.post('/api/invoices', data)

    def test_create_invoice_links_lrs(self):
        """Test creating an invoice links its LRs"""
        response = self._create()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        invoice_id = response.data['id']
        self.assertTrue(invoice_id.startswith('inv-'))
        self.assertTrue(response.data['invoiceNumber'].startswith('INV'))
        self.assertEqual(response.data['status'], 'Unpaid')
        self.assertEqual(response.data['amountPaid'], Decimal('0.00'))
        self.assertEqual(response.data['totalAmount'], Decimal('15000.00'))
        self.assertEqual(response.data['dueDate'], '2024-06-16')
        self.assertIsNotNone(response.data['bankDetails'])
        for lr in (self.lr1, self.lr2):
            lr.refresh_from_db()
            self.assertEqual(lr.invoice_id, invoice_id)
        self.assertEqual(AuditLog.objects.filter(action='lr_link').count(), 2)

    def test_manual_invoice_number(self):
        """Test manual invoices get their own number series"""
        response = self._create(
            type='Manual', lrIds=[],
            manualEntries=[{'lrNumber': 'M-1', 'from': 'Pune', 'to': 'Goa', 'freightAmount': 7000}],
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['invoiceNumber'].startswith('MAN-INV'))
        self.assertEqual(response.data['totalAmount'], Decimal('7000.00'))
        self.assertEqual(response.data['manualEntries'][0]['from'], 'Pune')

    def test_explicit_total_is_kept(self):
        """Test an explicit totalAmount is not recalculated"""
        response = self._create(totalAmount=14000)
        self.assertEqual(response.data['totalAmount'], Decimal('14000.00'))

    def test_unknown_lr_rejected(self):
        """Test invoicing an unknown LR should fail"""
        response = self._create(lrIds=['lr-missing'])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('lrIds', response.data)

    def test_lr_billed_elsewhere_rejected(self):
        """Test an LR already on another invoice cannot be billed again"""
        self._create(lrIds=[self.lr1.id])
        response = self._create(lrIds=[self.lr1.id, self.lr2.id])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Invoice.objects.count(), 1)
        self.lr2.refresh_from_db()
        self.assertIsNone(self.lr2.invoice_id)

    def test_update_relinks_lrs(self):
        """Test updating lrIds links new LRs and releases removed ones"""
        invoice_id = self._create(lrIds=[self.lr1.id]).data['id']
        response = self.client.put(f'/api/invoices/{invoice_id}', {'lrIds': [self.lr2.id]})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalAmount'], Decimal('5000.00'))
        self.lr1.refresh_from_db()
        self.lr2.refresh_from_db()
        self.assertIsNone(self.lr1.invoice_id)
        self.assertEqual(self.lr2.invoice_id, invoice_id)

    def test_update_to_cancelled_unlinks_all(self):
        """Test cancelling through PUT releases every LR"""
        invoice_id = self._create().data['id']
        response = self.client.put(f'/api/invoices/{invoice_id}', {'status': 'Cancelled'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'Cancelled')
        self.assertEqual(LorryReceipt.objects.filter(invoice_id=invoice_id).count(), 0)

    def test_cancel_endpoint(self):
        """Test the cancel endpoint"""
        invoice_id = self._create().data['id']
        response = self.client.post(f'/api/invoices/{invoice_id}/cancel')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'Cancelled')
        self.lr1.refresh_from_db()
        self.assertIsNone(self.lr1.invoice_id)
        self.assertTrue(AuditLog.objects.filter(action='invoice_cancel').exists())

        response = self.client.post(f'/api/invoices/{invoice_id}/cancel')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_invoice_unlinks_lrs_and_removes_payments(self):
        """Test deleting an invoice"""
        invoice = Invoice.objects.get(pk=self._create().data['id'])
        TestDataFactory.create_payment(invoice, '100.00')
        response = self.client.delete(f'/api/invoices/{invoice.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Item deleted successfully'})
        self.lr1.refresh_from_db()
        self.assertIsNone(self.lr1.invoice_id)
        self.assertFalse(Payment.objects.filter(invoice_id=invoice.id).exists())

    def test_reminder(self):
        """Test recording a payment reminder"""
        invoice_id = self._create().data['id']
        response = self.client.post(f'/api/invoices/{invoice_id}/reminder')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.data['lastReminderSent'])

    def test_calculate_endpoint(self):
        """Test invoice calculation without saving"""
        response = self.client.post('/api/invoices/calculate', {
            'lrIds': [self.lr1.id, self.lr2.id],
            'lrCharges': [{'lrId': self.lr2.id, 'freightAmount': 6000, 'extraCharge': 250}],
            'gstDetails': {'rate': 5},
            'applyRoundOff': True,
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalTripAmount'], Decimal('16250.00'))
        self.assertEqual(response.data['gstAmount'], Decimal('812.50'))
        self.assertEqual(response.data['totalAmount'], Decimal('17063.00'))
        self.assertEqual(Invoice.objects.count(), 0)

    def test_filters(self):
        """Test invoice list filters"""
        self._create(lrIds=[self.lr1.id], invoiceNumber='INV100001', dueDate='2099-12-31')
        other = TestDataFactory.create_client(name='Zen Cement')
        TestDataFactory.create_invoice(other, invoice_number='INV100002', due_date=date(2020, 1, 1))
        response = self.client.get('/api/invoices', {'search': 'zen'})
        self.assertEqual([item['invoiceNumber'] for item in response.data], ['INV100002'])
        response = self.client.get('/api/invoices', {'clientId': self.customer.id})
        self.assertEqual([item['invoiceNumber'] for item in response.data], ['INV100001'])
        response = self.client.get('/api/invoices', {'overdue': 'true'})
        self.assertEqual([item['invoiceNumber'] for item in response.data], ['INV100002'])


class PaymentAPITests(TestCase):
    """Test invoice payments and amountPaid bookkeeping"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.customer = TestDataFactory.create_client()
        self.invoice = TestDataFactory.create_invoice(self.customer, total_amount='10000.00')

    def _pay(self, amount, invoice=None):
        return self.client.post('/api/payments', {
            'invoiceId': (invoice or self.invoice).id,
            'date': '2024-06-10',
            'amount': amount,
            'method': 'Bank Transfer',
        })

    def _paid_sum(self):
        return sum((p.amount for p in Payment.objects.filter(invoice_id=self.invoice.id)), Decimal('0.00'))

    def test_partial_then_full_payment(self):
        """Test a partial payment followed by the remainder"""
        response = self._pay(4000)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.status, 'Partially Paid')
        self.assertEqual(self.invoice.get_balance_due(), Decimal('6000.00'))

        self._pay(6000)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.status, 'Paid')
        self.assertEqual(self.invoice.amount_paid, Decimal('10000.00'))

    def test_overpayment_rejected(self):
        """Test paying more than the balance should fail"""
        self._pay(9000)
        response = self._pay(1000.01)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.amount_paid, Decimal('9000.00'))
        self.assertEqual(Payment.objects.count(), 1)

    def test_payment_on_cancelled_invoice_rejected(self):
        """Test paying a cancelled invoice should fail"""
        self.invoice.status = 'Cancelled'
        self.invoice.save()
        response = self._pay(100)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('invoiceId', response.data)

    def test_payment_on_unknown_invoice(self):
        """Test paying an unknown invoice should fail"""
        response = self.client.post('/api/payments', {'invoiceId': 'inv-missing', 'date': '2024-06-10', 'amount': 10})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_amount_paid_tracks_payment_history(self):
        """Test amountPaid follows payment create, update and delete"""
        first = self._pay(3000).data['id']
        second = self._pay(2000).data['id']
        self.client.put(f'/api/payments/{first}', {'amount': 5000})
        self.client.delete(f'/api/payments/{second}')
        self._pay(1000)

        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.amount_paid, self._paid_sum())
        self.assertEqual(self.invoice.amount_paid, Decimal('6000.00'))
        self.assertEqual(self.invoice.status, 'Partially Paid')

    def test_deleting_last_payment_returns_to_unpaid(self):
        """Test removing the only payment makes the invoice Unpaid again"""
        payment_id = self._pay(10000).data['id']
        self.client.delete(f'/api/payments/{payment_id}')
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.amount_paid, Decimal('0.00'))
        self.assertEqual(self.invoice.status, 'Unpaid')

    def test_update_cannot_exceed_balance(self):
        """Test raising a payment past the balance should fail"""
        payment_id = self._pay(3000).data['id']
        response = self.client.put(f'/api/payments/{payment_id}', {'amount': 10000.5})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.amount_paid, Decimal('3000.00'))

    def test_filter_by_invoice(self):
        """Test filtering payments by invoice"""
        self._pay(100)
        other = TestDataFactory.create_invoice(self.customer)
        self._pay(100, invoice=other)
        response = self.client.get('/api/payments', {'invoiceId': self.invoice.id})
        self.assertEqual(len(response.data), 1)


class RecalculateBalancesCommandTests(TestCase):

    def test_repairs_drifted_balances(self):
        """Test recalculating balances from stored payments"""
        customer = TestDataFactory.create_client()
        lr = TestDataFactory.create_lorry_receipt(consignor=customer, freight_type='To Pay')
        invoice = TestDataFactory.create_invoice(customer, total_amount='1000.00', amount_paid='999.00', status='Paid')
        TestDataFactory.create_payment(invoice, '400.00')
        TestDataFactory.create_lr_payment(lr, '250.00')
        stale = TestDataFactory.create_lorry_receipt(invoice_id='inv-gone')

        call_command('recalculate_balances', stdout=io.StringIO())

        invoice.refresh_from_db()
        lr.refresh_from_db()
        stale.refresh_from_db()
        self.assertEqual(invoice.amount_paid, Decimal('400.00'))
        self.assertEqual(invoice.status, 'Partially Paid')
        self.assertEqual(lr.amount_paid, Decimal('250.00'))
        self.assertIsNone(stale.invoice_id)

    def test_dry_run_changes_nothing(self):
        """Test dry run reports without saving"""
        customer = TestDataFactory.create_client()
        invoice = TestDataFactory.create_invoice(customer, total_amount='1000.00', amount_paid='999.00')
        call_command('recalculate_balances', dry_run=True, stdout=io.StringIO())
        invoice.refresh_from_db()
        self.assertEqual(invoice.amount_paid, Decimal('999.00'))
