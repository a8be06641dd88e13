"""
Test suite for the costs module
Tests: cost CRUD and list filters
"""
from datetime import date
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import Cost


class CostAPITests(TestCase):
    """Test cost endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def test_create_cost(self):
        data = {'name': 'Anuncios Instagram', 'amount': '350.00', 'category': 'redes_sociales',
                'date': '2024-05-10', 'frequency': 'monthly', 'is_recurring': True}
        response = self.client.post('/api/v1/admin/costs/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Costo creado exitosamente')
        cost = Cost.objects.get(name='Anuncios Instagram')
        self.assertEqual(cost.amount, Decimal('350.00'))

    def test_create_cost_invalid_category(self):
        data = {'name': 'Viaje', 'amount': '10', 'category': 'viajes', 'date': '2024-05-10'}
        response = self.client.post('/api/v1/admin/costs/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al crear el costo')
        self.assertIn('category', response.data['errors'])

    def test_list_ordered_and_filtered(self):
        TestDataFactory.create_cost(name='Renta mayo', category='alquiler', date=date(2024, 5, 1),
                                    frequency='monthly')
        TestDataFactory.create_cost(name='IVA', category='impuestos', date=date(2024, 6, 15))
        TestDataFactory.create_cost(name='Renta junio', category='alquiler', date=date(2024, 6, 1),
                                    frequency='monthly')

        response = self.client.get('/api/v1/admin/costs/')
        self.assertEqual([c['name'] for c in response.data], ['IVA', 'Renta junio', 'Renta mayo'])

        response = self.client.get('/api/v1/admin/costs/', {'start_date': '2024-06-01', 'end_date': '2024-06-30'})
        self.assertEqual([c['name'] for c in response.data], ['IVA', 'Renta junio'])

        response = self.client.get('/api/v1/admin/costs/', {'category': 'alquiler'})
        self.assertEqual([c['name'] for c in response.data], ['Renta junio', 'Renta mayo'])

        response = self.client.get('/api/v1/admin/costs/', {'category': 'all', 'frequency': 'one_time'})
        self.assertEqual([c['name'] for c in response.data], ['IVA'])

    def test_update_and_delete(self):
        cost = TestDataFactory.create_cost(amount=Decimal('100'))
        self.client.get('/api/v1/admin/costs/')

        response = self.client.patch(f'/api/v1/admin/costs/{cost.id}/', {'amount': '120.00'}, format='json')
        self.assertEqual(response.data['message'], 'Costo actualizado exitosamente')
        response = self.client.get('/api/v1/admin/costs/')
        self.assertEqual(response.data[0]['amount'], '120.00')

        response = self.client.delete(f'/api/v1/admin/costs/{cost.id}/')
        self.assertEqual(response.data['message'], 'Costo eliminado exitosamente')
        self.assertFalse(Cost.objects.filter(pk=cost.pk).exists())

    def test_requires_admin(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/costs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
