"""
Test suite for Reports module
Tests: client and supplier ledgers, statements, financial years and the dashboard
"""
from datetime import date

from django.test import TestCase
from rest_framework import status

from transpotrack.billing.models import Invoice, Payment
from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient
from transpotrack.parties.models import Client
from transpotrack.reports import ledger
from transpotrack.trips.models import TripNote


class LedgerFunctionTests(TestCase):
    """Test the pure ledger functions"""

    def setUp(self):
        self.acme = TestDataFactory.create_client(name='Acme Steel')
        self.zen = TestDataFactory.create_client(name='Zen Cement')
        self.idle = TestDataFactory.create_client(name='Idle Co')
        self.inv1 = TestDataFactory.create_invoice(self.acme, total_amount='10000.00', invoice_date=date(2024, 5, 1),
                                                   invoice_number='INV000001')
        self.inv2 = TestDataFactory.create_invoice(self.zen, total_amount='3000.00', invoice_date=date(2024, 2, 1),
                                                   invoice_number='INV000002')
        self.cancelled = TestDataFactory.create_invoice(self.acme, total_amount='9999.00', status='Cancelled')
        TestDataFactory.create_payment(self.inv1, '4000.00', payment_date=date(2024, 5, 20))
        TestDataFactory.create_payment(self.inv2, '3500.00', payment_date=date(2024, 2, 10))

    def _summary(self, financial_year=None):
        return ledger.client_summary(Client.objects.all(), Invoice.objects.all(), Payment.objects.all(),
                                     financial_year=financial_year)

    def test_client_summary(self):
        """Test client summary debits, credits and balance type"""
        rows = {row['name']: row for row in self._summary()}
        self.assertNotIn('Idle Co', rows)
        self.assertEqual(rows['Acme Steel']['totalDebits'], 10000.0)
        self.assertEqual(rows['Acme Steel']['totalCredits'], 4000.0)
        self.assertEqual(rows['Acme Steel']['balance'], 6000.0)
        self.assertEqual(rows['Acme Steel']['balanceType'], 'Dr')
        self.assertEqual(rows['Zen Cement']['balance'], -500.0)
        self.assertEqual(rows['Zen Cement']['balanceType'], 'Cr')

    def test_client_summary_for_financial_year(self):
        """Test client summary restricted to one financial year"""
        rows = self._summary(financial_year='2023-2024')
        self.assertEqual([row['name'] for row in rows], ['Zen Cement'])

    def test_search_and_sort(self):
        """Test ledger search and ordering"""
        rows = self._summary()
        by_balance = ledger.search_and_sort(rows, ordering='-balance')
        self.assertEqual([row['name'] for row in by_balance], ['Acme Steel', 'Zen Cement'])
        by_name_desc = ledger.search_and_sort(rows, ordering='-name')
        self.assertEqual([row['name'] for row in by_name_desc], ['Zen Cement', 'Acme Steel'])
        self.assertEqual(len(ledger.search_and_sort(rows, search='ZEN')), 1)
        self.assertEqual(len(ledger.search_and_sort(rows, ordering='bogus')), 2)

    def test_client_statement_running_balance(self):
        """Test client statement running balance"""
        TestDataFactory.create_payment(self.inv1, '1000.00', payment_date=date(2024, 5, 1))
        statement = ledger.client_statement(self.acme, Invoice.objects.all(), Payment.objects.all())
        self.assertEqual(
            [entry['particulars'] for entry in statement['entries']],
            ['Invoice No: INV000001', 'Payment Received (Inv: INV000001)', 'Payment Received (Inv: INV000001)'],
        )
        self.assertEqual([entry['balance'] for entry in statement['entries']], [10000.0, 9000.0, 5000.0])
        self.assertEqual(statement['closingBalance'], statement['totalDebits'] - statement['totalCredits'])
        self.assertEqual(statement['balanceType'], 'Dr')

    def test_payments_on_cancelled_invoice_stay_credited(self):
        """Test money received on an invoice that was later cancelled stays in the ledger"""
        TestDataFactory.create_payment(self.cancelled, '500.00', payment_date=date(2024, 6, 20))
        rows = {row['name']: row for row in self._summary()}
        self.assertEqual(rows['Acme Steel']['totalDebits'], 10000.0)
        self.assertEqual(rows['Acme Steel']['totalCredits'], 4500.0)
        self.assertEqual(rows['Acme Steel']['balance'], 5500.0)

        statement = ledger.client_statement(self.acme, Invoice.objects.all(), Payment.objects.all())
        particulars = [entry['particulars'] for entry in statement['entries']]
        self.assertNotIn(f"Invoice No: {self.cancelled.invoice_number}", particulars)
        self.assertIn(f"Payment Received (Inv: {self.cancelled.invoice_number})", particulars)
        self.assertEqual(statement['closingBalance'], 5500.0)

    def test_financial_years_newest_first(self):
        """Test financial years are listed newest first"""
        TestDataFactory.create_trip_note(TestDataFactory.create_supplier(), note_date=date(2025, 4, 2))
        years = ledger.financial_years(Invoice.objects.all(), TripNote.objects.all())
        self.assertEqual(years, ['2025-2026', '2024-2025', '2023-2024'])


class LedgerAPITests(TestCase):
    """Test ledger and dashboard endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()
        self.customer = TestDataFactory.create_client(name='Acme Steel')
        self.supplier = TestDataFactory.create_supplier(name='Sharma Roadlines')

    def test_client_ledger_endpoints(self):
        """Test client ledger summary and statement endpoints"""
        invoice = TestDataFactory.create_invoice(self.customer, total_amount='5000.00')
        TestDataFactory.create_payment(invoice, '2000.00')
        response = self.client.get('/api/ledger/clients')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['balance'], 3000.0)

        response = self.client.get(f'/api/ledger/clients/{self.customer.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['entries']), 2)
        self.assertEqual(response.data['closingBalance'], 3000.0)

    def test_client_ledger_unknown_client(self):
        """Test the statement of an unknown client"""
        response = self.client.get('/api/ledger/clients/cli-missing')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cancelled_invoice_keeps_received_payment(self):
        """Test cancelling a part-paid invoice leaves the payment as a client credit"""
        invoice = TestDataFactory.create_invoice(self.customer, total_amount='1000.00')
        response = self.client.post('/api/payments', {
            'invoiceId': invoice.id, 'date': '2024-06-10', 'amount': 400, 'method': 'Cash',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.post(f'/api/invoices/{invoice.id}/cancel')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get('/api/ledger/clients')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['totalDebits'], 0.0)
        self.assertEqual(response.data[0]['totalCredits'], 400.0)
        self.assertEqual(response.data[0]['balanceType'], 'Cr')

        response = self.client.get(f'/api/ledger/clients/{self.customer.id}')
        self.assertEqual(len(response.data['entries']), 1)
        self.assertEqual(response.data['entries'][0]['type'], 'payment')
        self.assertEqual(response.data['closingBalance'], -400.0)

    def test_supplier_ledger_endpoints(self):
        """Test supplier ledger summary and statement endpoints"""
        note = TestDataFactory.create_trip_note(self.supplier, total_freight='8000.00', note_id='TN000009')
        TestDataFactory.create_supplier_payment(note, '3000.00')
        response = self.client.get('/api/ledger/suppliers', {'ordering': '-totalFreight'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['totalFreight'], 8000.0)
        self.assertEqual(response.data[0]['balance'], -5000.0)
        self.assertEqual(response.data[0]['balanceType'], 'Dr')

        response = self.client.get(f'/api/ledger/suppliers/{self.supplier.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        particulars = [entry['particulars'] for entry in response.data['entries']]
        self.assertEqual(particulars, ['Trip Freight: TN000009 (Surat to Pune)', 'Payment Paid (Advance) (TN: TN000009)'])
        self.assertEqual(response.data['closingBalance'], -5000.0)

    def test_financial_years_endpoint(self):
        """Test the financial years endpoint"""
        TestDataFactory.create_invoice(self.customer, invoice_date=date(2024, 6, 1))
        response = self.client.get('/api/ledger/financial-years')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, ['2024-2025'])

    def test_dashboard(self):
        """Test dashboard figures"""
        lr = TestDataFactory.create_lorry_receipt(consignor=self.customer, lr_number='LR000001', lr_date=date(2024, 5, 1))
        TestDataFactory.create_invoice(self.customer, lrs=[lr], invoice_date=date(2024, 5, 15),
                                       invoice_number='INV000001', amount_paid='4000.00', status='Partially Paid')
        TestDataFactory.create_invoice(self.customer, total_amount='2000.00', invoice_date=date(2024, 6, 1),
                                       invoice_number='INV000002', amount_paid='2000.00', status='Paid')
        TestDataFactory.create_invoice(self.customer, total_amount='7000.00', invoice_date=date(2024, 6, 5),
                                       status='Cancelled')
        note = TestDataFactory.create_trip_note(self.supplier, total_freight='8000.00')
        TestDataFactory.create_supplier_payment(note, '3000.00')

        response = self.client.get('/api/dashboard')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalLorryReceipts'], 1)
        self.assertEqual(response.data['totalInvoices'], 3)
        self.assertEqual(response.data['outstandingAmount'], 6000.0)
        self.assertEqual(response.data['supplierOutstanding'], 5000.0)
        self.assertEqual(response.data['recentActivity'][0]['date'], '2024-06-05')
        self.assertLessEqual(len(response.data['recentActivity']), 5)
        self.assertEqual(
            response.data['monthlyRevenue'],
            [{'month': 'May 2024', 'revenue': 10000.0}, {'month': 'Jun 2024', 'revenue': 2000.0}],
        )
