"""
Test suite for Trips module
Tests: trip notes, LR links, supplier payments and trip balances
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient
from transpotrack.trips.models import TripNote, SupplierPayment


class TripNoteModelTests(TestCase):

    def test_paid_amount_and_balance(self):
        """Test trip note paid amount and balance"""
        note = TestDataFactory.create_trip_note(TestDataFactory.create_supplier(), total_freight='8000.00')
        TestDataFactory.create_supplier_payment(note, '3000.00')
        TestDataFactory.create_supplier_payment(note, '1000.00', payment_type='Balance')
        self.assertEqual(note.get_paid_amount(), Decimal('4000.00'))
        self.assertEqual(note.get_balance_due(), Decimal('4000.00'))


class TripNoteAPITests(TestCase):
    """Test TripNote API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.supplier = TestDataFactory.create_supplier(name='Sharma Roadlines')
        self.lr = TestDataFactory.create_lorry_receipt()

    def _payload(self, **overrides):
        data = {
            'date': '2024-05-12',
            'supplierId': self.supplier.id,
            'vehicleNumber': 'GJ05XY9876',
            'from': 'Surat',
            'to': 'Pune',
            'totalFreight': 8000,
        }
        data.update(overrides)
        return data

    def test_create_trip_note_defaults(self):
        """Test creating a trip note fills in defaults"""
        response = self.client.post('/api/tripNotes', self._payload(linkedLrIds=[self.lr.id]))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('tn-'))
        self.assertTrue(response.data['noteId'].startswith('TN'))
        self.assertEqual(response.data['status'], 'Draft')
        self.assertEqual(response.data['from'], 'Surat')
        self.assertEqual(response.data['linkedLrIds'], [self.lr.id])

    def test_unknown_supplier_rejected(self):
        """Test an unknown supplier should fail"""
        response = self.client.post('/api/tripNotes', self._payload(supplierId='sup-missing'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('supplierId', response.data)

    def test_unknown_lr_rejected(self):
        """Test linking an unknown LR should fail"""
        response = self.client.post('/api/tripNotes', self._payload(linkedLrIds=['lr-missing']))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('linkedLrIds', response.data)

    def test_lr_on_another_trip_rejected(self):
        """Test an LR already on another trip note cannot be linked"""
        TestDataFactory.create_trip_note(self.supplier, linked_lrs=[self.lr])
        response = self.client.post('/api/tripNotes', self._payload(linkedLrIds=[self.lr.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(TripNote.objects.count(), 1)

    def test_update_keeps_own_links(self):
        """Test a trip note can keep its own LR links on update"""
        note = TestDataFactory.create_trip_note(self.supplier, linked_lrs=[self.lr])
        response = self.client.put(f'/api/tripNotes/{note.id}', {'status': 'In Transit', 'linkedLrIds': [self.lr.id]})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'In Transit')

    def test_negative_freight_rejected(self):
        """Test negative freight should fail"""
        response = self.client.post('/api/tripNotes', self._payload(totalFreight=-1))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filters(self):
        """Test trip note list filters"""
        TestDataFactory.create_trip_note(self.supplier, note_id='TN000001')
        other = TestDataFactory.create_supplier(name='Gupta Transport')
        TestDataFactory.create_trip_note(other, note_id='TN000002')
        response = self.client.get('/api/tripNotes', {'search': 'gupta'})
        self.assertEqual([item['noteId'] for item in response.data], ['TN000002'])
        response = self.client.get('/api/tripNotes', {'supplierId': self.supplier.id})
        self.assertEqual([item['noteId'] for item in response.data], ['TN000001'])

    def test_delete_removes_supplier_payments(self):
        """Test deleting a trip note"""
        note = TestDataFactory.create_trip_note(self.supplier)
        TestDataFactory.create_supplier_payment(note, '500.00')
        response = self.client.delete(f'/api/tripNotes/{note.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(SupplierPayment.objects.filter(trip_note_id=note.id).exists())

    def test_balance_endpoint(self):
        """Test the trip note balance endpoint"""
        note = TestDataFactory.create_trip_note(self.supplier, total_freight='8000.00')
        TestDataFactory.create_supplier_payment(note, '2500.00')
        response = self.client.get(f'/api/tripNotes/{note.id}/balance')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['paidAmount'], Decimal('2500.00'))
        self.assertEqual(response.data['balance'], Decimal('5500.00'))


class SupplierPaymentAPITests(TestCase):
    """Test SupplierPayment API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.note = TestDataFactory.create_trip_note(TestDataFactory.create_supplier())

    def test_record_supplier_payment(self):
        """Test recording a supplier payment"""
        response = self.client.post('/api/supplierPayments', {
            'tripNoteId': self.note.id, 'date': '2024-05-13', 'amount': 3000, 'type': 'Advance', 'method': 'Cash',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('spay-'))
        self.assertEqual(response.data['type'], 'Advance')
        self.assertEqual(self.note.get_paid_amount(), Decimal('3000.00'))

    def test_unknown_trip_note_rejected(self):
        """Test paying an unknown trip note should fail"""
        response = self.client.post('/api/supplierPayments', {
            'tripNoteId': 'tn-missing', 'date': '2024-05-13', 'amount': 100,
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('tripNoteId', response.data)

    def test_non_positive_amount_rejected(self):
        """Test a zero supplier payment should fail"""
        response = self.client.post('/api/supplierPayments', {
            'tripNoteId': self.note.id, 'date': '2024-05-13', 'amount': 0,
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_and_delete(self):
        """Test supplier payment update and delete"""
        payment = TestDataFactory.create_supplier_payment(self.note, '1000.00')
        response = self.client.put(f'/api/supplierPayments/{payment.id}', {'amount': 1200, 'type': 'Balance'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['amount'], Decimal('1200.00'))
        response = self.client.delete(f'/api/supplierPayments/{payment.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(SupplierPayment.objects.count(), 0)

    def test_filter_by_trip_note(self):
        """Test filtering supplier payments by trip note"""
        TestDataFactory.create_supplier_payment(self.note, '100.00')
        other = TestDataFactory.create_trip_note(TestDataFactory.create_supplier())
        TestDataFactory.create_supplier_payment(other, '100.00')
        response = self.client.get('/api/supplierPayments', {'tripNoteId': self.note.id})
        self.assertEqual(len(response.data), 1)
