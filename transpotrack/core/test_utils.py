"""
Test utilities and factories for creating test data
"""
from rest_framework.test import APIClient
from transpotrack.billing.models import Invoice, Payment
from transpotrack.consignments.models import LorryReceipt, LorryReceiptPayment
from transpotrack.parties.models import Client, Supplier
from transpotrack.trips.models import TripNote, SupplierPayment
from decimal import Decimal
from datetime import date
import random
import string


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def new_id(prefix):
        return f'{prefix}-{TestDataFactory.random_string(12)}'

    @staticmethod
    def address(name, city='Mumbai'):
        """Address snapshot as stored on LRs and invoices"""
        return {
            'name': name,
            'gstin': '',
            'contact': '9876543210',
            'address': f'Test Address {name}',
            'city': city,
            'state': 'Maharashtra',
            'country': 'India',
            'pinCode': '400001',
        }

    @staticmethod
    def create_client(name=None, gstin='', contact_number='9876543210'):
        """Create a test client"""
        if not name:
            name = f'Client_{TestDataFactory.random_string(6)}'
        return Client.objects.create(
            id=TestDataFactory.new_id('cli'),
            name=name,
            address=f'Test Address {name}',
            gstin=gstin,
            contact_person='Test Person',
            contact_number=contact_number,
        )

    @staticmethod
    def create_supplier(name=None, contact_number='9123456780'):
        """Create a test supplier"""
        if not name:
            name = f'Supplier_{TestDataFactory.random_string(6)}'
        return Supplier.objects.create(
            id=TestDataFactory.new_id('sup'),
            name=name,
            contact_person='Owner',
            contact_number=contact_number,
            address=f'Test Address {name}',
        )

    @staticmethod
    def create_lorry_receipt(consignor=None, consignee=None, total_amount=None, freight_type='To be billed',
                             lr_date=None, lr_number=None, invoice_id=None, status='Scheduled'):
        """Create a test LR; consignor/consignee are Client instances or None"""
        if total_amount is None:
            total_amount = Decimal('10000.00')
        consignor_name = consignor.name if consignor else 'Walk-in Consignor'
        consignee_name = consignee.name if consignee else 'Walk-in Consignee'
        return LorryReceipt.objects.create(
            id=TestDataFactory.new_id('lr'),
            lr_number=lr_number or f'LR{random.randint(100000, 999999)}',
            date=lr_date or date(2024, 5, 10),
            consignor_id=consignor.id if consignor else None,
            consignor=TestDataFactory.address(consignor_name),
            consignee_id=consignee.id if consignee else None,
            consignee=TestDataFactory.address(consignee_name, city='Delhi'),
            truck_number='MH01AB1234',
            from_location='Mumbai',
            to_location='Delhi',
            freight_type=freight_type,
            basic_freight=Decimal(total_amount),
            total_amount=Decimal(total_amount),
            invoice_id=invoice_id,
            status=status,
        )

    @staticmethod
    def create_invoice(client, lrs=None, total_amount=None, invoice_date=None, status='Unpaid',
                       amount_paid=None, invoice_number=None, due_date=None):
        """Create a test invoice and link the given LRs to it"""
        lrs = lrs or []
        if total_amount is None:
            total_amount = sum((lr.total_amount for lr in lrs), Decimal('0.00')) or Decimal('10000.00')
        invoice = Invoice.objects.create(
            id=TestDataFactory.new_id('inv'),
            invoice_number=invoice_number or f'INV{random.randint(100000, 999999)}',
            date=invoice_date or date(2024, 6, 1),
            client_id=client.id,
            lr_ids=[lr.id for lr in lrs],
            total_amount=Decimal(total_amount),
            amount_paid=Decimal(amount_paid or '0.00'),
            due_date=due_date,
            status=status,
        )
        for lr in lrs:
            lr.invoice_id = invoice.id
            lr.save(update_fields=['invoice_id'])
        return invoice

    @staticmethod
    def create_payment(invoice, amount, payment_date=None, method='Bank Transfer'):
        """Create a raw payment row (does not touch the invoice's amountPaid)"""
        return Payment.objects.create(
            id=TestDataFactory.new_id('pay'),
            invoice_id=invoice.id,
            date=payment_date or date(2024, 6, 15),
            amount=Decimal(amount),
            method=method,
        )

    @staticmethod
    def create_lr_payment(lr, amount, payment_date=None):
        return LorryReceiptPayment.objects.create(
            id=TestDataFactory.new_id('lrpay'),
            lr_id=lr.id,
            date=payment_date or date(2024, 5, 20),
            amount=Decimal(amount),
            method='Cash',
        )

    @staticmethod
    def create_trip_note(supplier, total_freight=None, note_date=None, note_id=None, linked_lrs=None):
        """Create a test trip note"""
        return TripNote.objects.create(
            id=TestDataFactory.new_id('tn'),
            note_id=note_id or f'TN{random.randint(100000, 999999)}',
            date=note_date or date(2024, 5, 12),
            supplier_id=supplier.id,
            vehicle_number='GJ05XY9876',
            from_location='Surat',
            to_location='Pune',
            total_freight=Decimal(total_freight or '8000.00'),
            linked_lr_ids=[lr.id for lr in linked_lrs or []],
        )

    @staticmethod
    def create_supplier_payment(trip_note, amount, payment_type='Advance', payment_date=None):
        return SupplierPayment.objects.create(
            id=TestDataFactory.new_id('spay'),
            trip_note_id=trip_note.id,
            date=payment_date or date(2024, 5, 13),
            amount=Decimal(amount),
            payment_type=payment_type,
            method='Cash',
        )

    @staticmethod
    def lr_payload(consignor=None, consignee=None, **overrides):
        """Minimal valid LR document as the API expects it"""
        payload = {
            'date': '2024-05-10',
            'consignor': TestDataFactory.address(consignor.name if consignor else 'Consignor Co'),
            'consignee': TestDataFactory.address(consignee.name if consignee else 'Consignee Co', city='Delhi'),
            'truckNumber': 'MH01AB1234',
            'from': 'Mumbai',
            'to': 'Delhi',
            'freightType': 'To Pay',
            'basicFreight': 10000,
        }
        if consignor:
            payload['consignorId'] = consignor.id
        if consignee:
            payload['consigneeId'] = consignee.id
        payload.update(overrides)
        return payload


class DocumentAPIClient(APIClient):
    """APIClient that sends JSON bodies by default"""

    def post(self, path, data=None, format='json', **extra):
        return super().post(path, data, format=format, **extra)

    def put(self, path, data=None, format='json', **extra):
        return super().put(path, data, format=format, **extra)
