"""
Test suite for Parties module
Tests: client and supplier CRUD, search and the document conventions shared by every collection
"""
from django.test import TestCase
from rest_framework import status
from transpotrack.core.test_utils import TestDataFactory, DocumentAPIClient
from transpotrack.parties.models import Client, Supplier


class ClientAPITests(TestCase):
    """Test Client API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()

    def test_create_client_generates_id(self):
        """Test creating a client via API"""
        data = {
            'name': 'Tata Steel',
            'address': 'Jamshedpur',
            'gstin': '20AAACT2803M1ZL',
            'contactPerson': 'R. Singh',
            'contactNumber': '9000000001',
        }
        response = self.client.post('/api/clients', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('cli-'))
        self.assertEqual(response.data['contactPerson'], 'R. Singh')
        self.assertTrue(Client.objects.filter(pk=response.data['id']).exists())

    def test_create_client_keeps_given_id(self):
        """Test a client id sent by the caller is kept"""
        response = self.client.post('/api/clients', {'id': 'client-42', 'name': 'Given Id'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['id'], 'client-42')

    def test_create_client_with_taken_id(self):
        """Test creating a client with an id that already exists should fail"""
        existing = TestDataFactory.create_client(name='First Owner')
        response = self.client.post('/api/clients', {'id': existing.id, 'name': 'Second Owner'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('id', response.data)
        existing.refresh_from_db()
        self.assertEqual(existing.name, 'First Owner')

    def test_create_client_without_name(self):
        """Test creating a client without a name should fail"""
        response = self.client.post('/api/clients', {'address': 'Nowhere'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data)

    def test_create_client_with_blank_name(self):
        """Test creating a client with a blank name should fail"""
        response = self.client.post('/api/clients', {'name': '   '})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_clients_in_insertion_order(self):
        """Test listing clients"""
        first = TestDataFactory.create_client(name='Zeta Traders')
        second = TestDataFactory.create_client(name='Alpha Traders')
        response = self.client.get('/api/clients')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['id'] for item in response.data], [first.id, second.id])

    def test_search_clients(self):
        """Test searching clients by name and GSTIN"""
        TestDataFactory.create_client(name='Reliance Industries', gstin='27AAACR5055K1Z7')
        TestDataFactory.create_client(name='Infosys')
        response = self.client.get('/api/clients', {'search': 'reliance'})
        self.assertEqual(len(response.data), 1)
        response = self.client.get('/api/clients', {'search': '27AAACR'})
        self.assertEqual(len(response.data), 1)

    def test_trailing_slash_is_optional(self):
        """Test routes accept a trailing slash"""
        client = TestDataFactory.create_client()
        self.assertEqual(self.client.get('/api/clients/').status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f'/api/clients/{client.id}/').status_code, status.HTTP_200_OK)

    def test_update_client_url_id_wins(self):
        """Test the URL id wins over the body id"""
        client = TestDataFactory.create_client(name='Old Name')
        response = self.client.put(f'/api/clients/{client.id}', {'id': 'something-else', 'name': 'New Name'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], client.id)
        self.assertEqual(response.data['name'], 'New Name')
        self.assertFalse(Client.objects.filter(pk='something-else').exists())

    def test_update_keeps_omitted_fields(self):
        """Test fields left out of a PUT keep their values"""
        client = TestDataFactory.create_client(name='Keep Fields', gstin='GST123')
        response = self.client.put(f'/api/clients/{client.id}', {'name': 'Renamed'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['gstin'], 'GST123')

    def test_update_unknown_client(self):
        """Test updating an unknown client"""
        response = self.client.put('/api/clients/nope', {'name': 'Ghost'})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_client(self):
        """Test deleting a client"""
        client = TestDataFactory.create_client()
        response = self.client.delete(f'/api/clients/{client.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'message': 'Item deleted successfully'})
        self.assertEqual(self.client.get(f'/api/clients/{client.id}').status_code, status.HTTP_404_NOT_FOUND)


class SupplierAPITests(TestCase):
    """Test Supplier API endpoints"""

    def setUp(self):
        self.client = DocumentAPIClient()

    def test_create_supplier(self):
        """Test creating a supplier via API"""
        data = {'name': 'Sharma Roadlines', 'contactPerson': 'Vikas', 'contactNumber': '9811111111'}
        response = self.client.post('/api/suppliers', data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['id'].startswith('sup-'))
        self.assertEqual(Supplier.objects.count(), 1)

    def test_search_suppliers(self):
        """Test searching suppliers"""
        TestDataFactory.create_supplier(name='Sharma Roadlines')
        TestDataFactory.create_supplier(name='Gupta Transport', contact_number='9555500000')
        response = self.client.get('/api/suppliers', {'search': '95555'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['name'], 'Gupta Transport')

    def test_delete_supplier(self):
        """Test deleting a supplier"""
        supplier = TestDataFactory.create_supplier()
        response = self.client.delete(f'/api/suppliers/{supplier.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Supplier.objects.filter(pk=supplier.id).exists())
