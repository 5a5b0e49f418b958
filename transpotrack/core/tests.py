"""
Test suite for the core module
Tests: helpers, company settings, audit trail, error responses and the backup command
"""
import io
import json
import os
import tempfile
from datetime import date
from decimal import Decimal

from django.core.management import call_command
from django.test import TestCase
from rest_framework import status

from transpotrack.core.company import DEFAULT_COMPANY_SETTINGS, get_company_settings
from transpotrack.core.exceptions import WorkflowError
from transpotrack.core.models import AuditLog
from transpotrack.core.serializers import to_camel
from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient
from transpotrack.core.utils import (
    create_audit_log, ensure_payment_amount, financial_year_bounds, generate_document_id,
    generate_reference_number, get_financial_year, parse_date,
)
from transpotrack.parties.models import Client


class UtilsTests(TestCase):
    """Test shared helpers"""

    def test_financial_year_starts_in_april(self):
        """Test financial years start in April"""
        self.assertEqual(get_financial_year(date(2024, 4, 1)), '2024-2025')
        self.assertEqual(get_financial_year(date(2025, 3, 31)), '2024-2025')
        self.assertEqual(get_financial_year('2024-01-15'), '2023-2024')

    def test_financial_year_of_timestamp_string(self):
        """Test financial year of an ISO timestamp"""
        self.assertEqual(get_financial_year('2024-07-01T10:30:00.000Z'), '2024-2025')

    def test_financial_year_of_empty_value(self):
        """Test financial year of a missing date"""
        self.assertIsNone(get_financial_year(None))
        self.assertIsNone(get_financial_year(''))

    def test_financial_year_bounds(self):
        """Test financial year label to date range"""
        self.assertEqual(financial_year_bounds('2023-2024'), (date(2023, 4, 1), date(2024, 3, 31)))

    def test_parse_date(self):
        """Test date parsing"""
        self.assertEqual(parse_date('2024-02-29'), date(2024, 2, 29))
        self.assertEqual(parse_date(date(2024, 1, 1)), date(2024, 1, 1))

    def test_generate_document_id_skips_taken_ids(self):
        """Test generated ids never collide"""
        first = generate_document_id(Client, 'cli')
        Client.objects.create(id=first, name='Taken')
        second = generate_document_id(Client, 'cli')
        self.assertTrue(second.startswith('cli-'))
        self.assertNotEqual(first, second)

    def test_generate_reference_number(self):
        """Test reference number format"""
        number = generate_reference_number('LR')
        self.assertTrue(number.startswith('LR'))
        self.assertEqual(len(number), 8)

    def test_ensure_payment_amount_accepts_exact_balance(self):
        """Test paying exactly the balance"""
        self.assertEqual(ensure_payment_amount(Decimal('500.00'), Decimal('500.00')), Decimal('500.00'))

    def test_ensure_payment_amount_rejects_zero(self):
        """Test a zero payment should fail"""
        with self.assertRaises(WorkflowError):
            ensure_payment_amount(0, Decimal('100.00'))

    def test_ensure_payment_amount_rejects_overpayment(self):
        """Test paying past the tolerance should fail"""
        with self.assertRaises(WorkflowError):
            ensure_payment_amount(Decimal('100.01'), Decimal('100.00'))

    def test_to_camel(self):
        """Test snake_case to camelCase"""
        self.assertEqual(to_camel('lr_ids'), 'lrIds')
        self.assertEqual(to_camel('loading_address_same_as_consignor'), 'loadingAddressSameAsConsignor')
        self.assertEqual(to_camel('id'), 'id')

    def test_create_audit_log_skips_incomplete_entries(self):
        """Test audit entries missing an object id are skipped"""
        self.assertIsNone(create_audit_log(action='create', model_name='Invoice'))
        self.assertEqual(AuditLog.objects.count(), 0)


class CompanySettingsAPITests(TestCase):
    """Test company profile and document defaults"""

    def setUp(self):
        self.client = DocumentAPIClient()

    def test_get_defaults(self):
        """Test reading default company settings"""
        response = self.client.get('/api/settings/company')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], DEFAULT_COMPANY_SETTINGS['name'])
        self.assertEqual(response.data['defaultRiskType'], "AT OWNER'S RISK")

    def test_update_merges_with_defaults(self):
        """Test updating company settings"""
        response = self.client.put('/api/settings/company', {
            'name': 'Speedy Carriers',
            'defaultBankDetails': {'bankName': 'SBI'},
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Speedy Carriers')
        self.assertEqual(response.data['defaultBankDetails']['bankName'], 'SBI')
        self.assertEqual(
            response.data['defaultBankDetails']['ifscCode'],
            DEFAULT_COMPANY_SETTINGS['defaultBankDetails']['ifscCode'],
        )
        self.assertEqual(get_company_settings()['name'], 'Speedy Carriers')
        self.assertTrue(AuditLog.objects.filter(action='settings_update').exists())

    def test_reset_restores_defaults(self):
        """Test resetting company settings back to the built-in defaults"""
        self.client.put('/api/settings/company', {'name': 'Speedy Carriers'})
        response = self.client.delete('/api/settings/company')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], DEFAULT_COMPANY_SETTINGS['name'])
        self.assertEqual(get_company_settings()['name'], DEFAULT_COMPANY_SETTINGS['name'])
        self.assertTrue(AuditLog.objects.filter(action='settings_reset').exists())

    def test_invalid_theme_color(self):
        """Test an invalid theme color should fail"""
        response = self.client.put('/api/settings/company', {'themeColor': 'blue'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('themeColor', response.data)


class AuditLogAPITests(TestCase):

    def setUp(self):
        self.client = DocumentAPIClient()
        create_audit_log(action='invoice_create', model_name='Invoice', object_id='inv-1', object_reference='INV001')
        create_audit_log(action='payment_add', model_name='Payment', object_id='pay-1', object_reference='INV001')

    def test_list_audit_logs(self):
        """Test listing audit logs"""
        response = self.client.get('/api/audit-logs')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_filter_by_action(self):
        """Test filtering audit logs by action"""
        response = self.client.get('/api/audit-logs', {'action': 'payment_add'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['object_id'], 'pay-1')


class ErrorResponseTests(TestCase):

    def setUp(self):
        self.client = DocumentAPIClient()

    def test_unknown_document_returns_item_not_found(self):
        """Test unknown ids return Item not found"""
        response = self.client.get('/api/clients/does-not-exist')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'message': 'Item not found'})

    def test_update_with_non_object_body(self):
        """Test a PUT body that is not a JSON object is rejected as invalid"""
        client = TestDataFactory.create_client(name='Array Body')
        response = self.client.put(f'/api/clients/{client.id}', [1, 2])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('non_field_errors', response.data)
        client.refresh_from_db()
        self.assertEqual(client.name, 'Array Body')

    def test_delete_unknown_document(self):
        """Test deleting an unknown document"""
        response = self.client.delete('/api/invoices/does-not-exist')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class ExportCollectionsCommandTests(TestCase):

    def test_export_writes_every_collection(self):
        """Test exporting every collection to JSON"""
        client = TestDataFactory.create_client(name='Acme Steel')
        lr = TestDataFactory.create_lorry_receipt(consignor=client)
        TestDataFactory.create_invoice(client, lrs=[lr])

        with tempfile.TemporaryDirectory() as tmp:
            output = os.path.join(tmp, 'backup.json')
            call_command('export_collections', output=output, stdout=io.StringIO())
            with open(output, encoding='utf-8') as f:
                backup = json.load(f)

        self.assertEqual(set(backup.keys()), {
            'clients', 'lorryReceipts', 'invoices', 'payments',
            'lorryReceiptPayments', 'suppliers', 'tripNotes', 'supplierPayments',
        })
        self.assertEqual(backup['clients'][0]['name'], 'Acme Steel')
        self.assertEqual(backup['lorryReceipts'][0]['invoiceId'], backup['invoices'][0]['id'])
        self.assertEqual(backup['invoices'][0]['totalAmount'], 10000.0)
