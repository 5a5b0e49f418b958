"""
Comprehensive test suite for Consignments module
Tests: LR creation defaults, totals, filters, LR payments and cascading deletes
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from transpotrack.billing.models import Invoice
from transpotrack.consignments.models import LorryReceipt, LorryReceiptPayment
from transpotrack.consignments.services import calculate_lr_total, get_lr_payment_status
from transpotrack.core.company import DEFAULT_COMPANY_SETTINGS
from transpotrack.core.models import AuditLog
from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient
from transpotrack.trips.models import TripNote


class LorryReceiptCalculationTests(TestCase):
    """Test LR totals and payment status"""

    def test_total_adds_other_charges_and_gst(self):
        """Test LR total with other charges and GST"""
        total = calculate_lr_total(
            10000,
            [{'name': 'Loading', 'amount': 500}, {'name': 'Toll', 'amount': 250.5}],
            {'cgst': 900, 'sgst': 900, 'igst': 0},
        )
        self.assertEqual(total, Decimal('12550.50'))

    def test_total_without_extras(self):
        """Test LR total from freight alone"""
        self.assertEqual(calculate_lr_total(7500), Decimal('7500.00'))

    def test_payment_status(self):
        """Test LR payment status derivation"""
        lr = TestDataFactory.create_lorry_receipt(total_amount='1000.00', freight_type='To Pay')
        self.assertEqual(get_lr_payment_status(lr), 'Unpaid')
        lr.amount_paid = Decimal('400.00')
        self.assertEqual(get_lr_payment_status(lr), 'Partially Paid')
        lr.amount_paid = Decimal('1000.00')
        self.assertEqual(get_lr_payment_status(lr), 'Paid')

    def test_to_be_billed_status(self):
        """Test To be billed freight gives the To be Billed status"""
        lr = TestDataFactory.create_lorry_receipt(freight_type='To be billed')
        self.assertEqual(get_lr_payment_status(lr), 'To be Billed')


class LorryReceiptAPITests(TestCase):
    """Test LorryReceipt API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.consignor = TestDataFactory.create_client(name='Acme Steel')
        self.consignee = TestDataFactory.create_client(name='Bharat Builders')

    def test_create_lr_defaults(self):
        """Test creating an LR fills in defaults"""
        data = TestDataFactory.lr_payload(
            self.consignor, self.consignee,
            otherCharges=[{'name': 'Hamali', 'amount': 300}],
            gstDetails={'cgst': 0, 'sgst': 0, 'igst': 1200},
        )
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('lr-'))
        self.assertTrue(response.data['lrNumber'].startswith('LR'))
        self.assertEqual(response.data['status'], 'Scheduled')
        self.assertEqual(response.data['amountPaid'], Decimal('0.00'))
        self.assertIsNone(response.data['invoiceId'])
        self.assertEqual(response.data['totalAmount'], Decimal('11500.00'))
        self.assertEqual(response.data['from'], 'Mumbai')
        self.assertEqual(response.data['riskType'], DEFAULT_COMPANY_SETTINGS['defaultRiskType'])
        self.assertEqual(response.data['remarks'], DEFAULT_COMPANY_SETTINGS['defaultRemarks'])
        self.assertTrue(AuditLog.objects.filter(model_name='LorryReceipt', action='create').exists())

    def test_create_lr_keeps_explicit_total_and_number(self):
        """Test explicit LR number and total are kept"""
        data = TestDataFactory.lr_payload(lrNumber='LR000777', totalAmount=9999)
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['lrNumber'], 'LR000777')
        self.assertEqual(response.data['totalAmount'], Decimal('9999.00'))

    def test_create_lr_ignores_client_supplied_payment_state(self):
        """Test amountPaid cannot be set on create"""
        data = TestDataFactory.lr_payload(amountPaid=5000, invoiceId='inv-x')
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['amountPaid'], Decimal('0.00'))
        self.assertIsNone(response.data['invoiceId'])

    def test_create_lr_accepts_timestamp_dates(self):
        """Test ISO timestamps are accepted as dates"""
        data = TestDataFactory.lr_payload(date='2024-05-10T08:15:00.000Z')
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['date'], '2024-05-10')

    def test_create_lr_with_unknown_consignor(self):
        """Test an unknown consignor should fail"""
        data = TestDataFactory.lr_payload(consignorId='cli-missing')
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('consignorId', response.data)

    def test_create_lr_without_truck(self):
        """Test creating an LR without a truck number should fail"""
        data = TestDataFactory.lr_payload()
        del data['truckNumber']
        response = self.client.post('/api/lorryReceipts', data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('truckNumber', response.data)

    def test_update_recomputes_total_when_freight_changes(self):
        """Test changing freight recomputes the total"""
        lr = TestDataFactory.create_lorry_receipt(total_amount='10000.00')
        response = self.client.put(f'/api/lorryReceipts/{lr.id}', {'basicFreight': 12000})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalAmount'], Decimal('12000.00'))

    def test_update_status(self):
        """Test updating LR status"""
        lr = TestDataFactory.create_lorry_receipt()
        response = self.client.put(f'/api/lorryReceipts/{lr.id}', {'status': 'Delivered'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        lr.refresh_from_db()
        self.assertEqual(lr.status, 'Delivered')
        self.assertEqual(lr.total_amount, Decimal('10000.00'))

    def test_search_and_status_filters(self):
        """Test LR search and status filters"""
        TestDataFactory.create_lorry_receipt(consignor=self.consignor, lr_number='LR111111')
        TestDataFactory.create_lorry_receipt(lr_number='LR222222', status='Delivered')
        response = self.client.get('/api/lorryReceipts', {'search': 'acme'})
        self.assertEqual([item['lrNumber'] for item in response.data], ['LR111111'])
        response = self.client.get('/api/lorryReceipts', {'status': 'Delivered'})
        self.assertEqual([item['lrNumber'] for item in response.data], ['LR222222'])

    def test_unbilled_filters(self):
        """Test unbilled and unbilledFor filters"""
        billed = TestDataFactory.create_lorry_receipt(consignor=self.consignor)
        TestDataFactory.create_invoice(self.consignor, lrs=[billed])
        open_lr = TestDataFactory.create_lorry_receipt(consignee=self.consignor)
        other = TestDataFactory.create_lorry_receipt()
        response = self.client.get('/api/lorryReceipts', {'unbilled': 'true'})
        self.assertEqual({item['id'] for item in response.data}, {open_lr.id, other.id})
        response = self.client.get('/api/lorryReceipts', {'unbilledFor': self.consignor.id})
        self.assertEqual([item['id'] for item in response.data], [open_lr.id])

    def test_financial_year_filter(self):
        """Test filtering LRs by financial year"""
        TestDataFactory.create_lorry_receipt(lr_number='LR-FY24', lr_date='2024-06-01')
        TestDataFactory.create_lorry_receipt(lr_number='LR-FY23', lr_date='2024-02-01')
        response = self.client.get('/api/lorryReceipts', {'financialYear': '2023-2024'})
        self.assertEqual([item['lrNumber'] for item in response.data], ['LR-FY23'])

    def test_delete_lr_cleans_up_references(self):
        """Test deleting an LR"""
        lr = TestDataFactory.create_lorry_receipt(consignor=self.consignor)
        keep = TestDataFactory.create_lorry_receipt(consignor=self.consignor)
        invoice = TestDataFactory.create_invoice(self.consignor, lrs=[lr, keep])
        note = TestDataFactory.create_trip_note(TestDataFactory.create_supplier(), linked_lrs=[lr])
        TestDataFactory.create_lr_payment(lr, '100.00')

        response = self.client.delete(f'/api/lorryReceipts/{lr.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(LorryReceipt.objects.filter(pk=lr.id).exists())
        self.assertEqual(Invoice.objects.get(pk=invoice.id).lr_ids, [keep.id])
        self.assertEqual(TripNote.objects.get(pk=note.id).linked_lr_ids, [])
        self.assertFalse(LorryReceiptPayment.objects.filter(lr_id=lr.id).exists())

    def test_delete_lr_leaves_other_trip_notes_alone(self):
        """Test deleting an LR only edits the trip notes that list it"""
        lr = TestDataFactory.create_lorry_receipt(consignor=self.consignor)
        other = TestDataFactory.create_lorry_receipt(consignor=self.consignor)
        supplier = TestDataFactory.create_supplier()
        linked = TestDataFactory.create_trip_note(supplier, linked_lrs=[lr, other])
        unrelated = TestDataFactory.create_trip_note(supplier, linked_lrs=[other])
        unrelated.linked_lr_ids = [other.id, f'{lr.id}-copy']
        unrelated.save()

        response = self.client.delete(f'/api/lorryReceipts/{lr.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(TripNote.objects.get(pk=linked.id).linked_lr_ids, [other.id])
        self.assertEqual(TripNote.objects.get(pk=unrelated.id).linked_lr_ids, [other.id, f'{lr.id}-copy'])


class LorryReceiptPaymentAPITests(TestCase):
    """Test LR payment endpoints and amountPaid bookkeeping"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.lr = TestDataFactory.create_lorry_receipt(total_amount='5000.00', freight_type='To Pay')

    def _pay(self, amount):
        return self.client.post('/api/lorryReceiptPayments', {
            'lrId': self.lr.id, 'date': '2024-05-20', 'amount': amount, 'method': 'Cash',
        })

    def test_record_payment_updates_lr(self):
        """Test recording an LR payment"""
        response = self._pay(2000)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('lrpay-'))
        self.lr.refresh_from_db()
        self.assertEqual(self.lr.amount_paid, Decimal('2000.00'))
        self.assertEqual(get_lr_payment_status(self.lr), 'Partially Paid')

    def test_overpayment_rejected(self):
        """Test paying more than the LR balance should fail"""
        response = self._pay(5000.01)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('amount', response.data)
        self.lr.refresh_from_db()
        self.assertEqual(self.lr.amount_paid, Decimal('0.00'))
        self.assertEqual(LorryReceiptPayment.objects.count(), 0)

    def test_zero_payment_rejected(self):
        """Test a zero LR payment should fail"""
        response = self._pay(0)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_payment_for_unknown_lr(self):
        """Test paying an unknown LR should fail"""
        response = self.client.post('/api/lorryReceiptPayments', {
            'lrId': 'lr-missing', 'date': '2024-05-20', 'amount': 100,
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('lrId', response.data)

    def test_update_and_delete_payment_keep_balance(self):
        """Test LR payment update and delete adjust amountPaid"""
        payment_id = self._pay(2000).data['id']
        response = self.client.put(f'/api/lorryReceiptPayments/{payment_id}', {'amount': 3500})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.lr.refresh_from_db()
        self.assertEqual(self.lr.amount_paid, Decimal('3500.00'))

        response = self.client.delete(f'/api/lorryReceiptPayments/{payment_id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.lr.refresh_from_db()
        self.assertEqual(self.lr.amount_paid, Decimal('0.00'))

    def test_filter_by_lr(self):
        """Test filtering LR payments by LR"""
        self._pay(100)
        other = TestDataFactory.create_lorry_receipt(freight_type='To Pay')
        TestDataFactory.create_lr_payment(other, '50.00')
        response = self.client.get('/api/lorryReceiptPayments', {'lrId': self.lr.id})
        self.assertEqual(len(response.data), 1)

    def test_balance_endpoint(self):
        """Test the LR balance endpoint"""
        self._pay(1500)
        response = self.client.get(f'/api/lorryReceipts/{self.lr.id}/balance')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['balanceDue'], Decimal('3500.00'))
        self.assertEqual(response.data['paymentStatus'], 'Partially Paid')
        self.assertEqual(len(response.data['payments']), 1)
