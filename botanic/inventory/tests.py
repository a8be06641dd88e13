"""
Test suite for the inventory module
Tests: stock deltas, movement recording, item/movement endpoints and filters
"""
from datetime import timedelta
from decimal import Decimal

from django.core.cache import cache
from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import InventoryItem, InventoryMovement
from .stock import record_movement, stock_delta


class StockDeltaTests(SimpleTestCase):
    """Test how each movement type changes stock"""

    def test_inbound(self):
        self.assertEqual(stock_delta('entrada', Decimal('5')), Decimal('5'))

    def test_outbound_types_subtract(self):
        for movement_type in ('salida', 'produccion', 'venta', 'perdida'):
            self.assertEqual(stock_delta(movement_type, Decimal('2.5')), Decimal('-2.5'))

    def test_adjustment_keeps_sign(self):
        self.assertEqual(stock_delta('ajuste', Decimal('3')), Decimal('3'))
        self.assertEqual(stock_delta('ajuste', Decimal('-4')), Decimal('-4'))

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            stock_delta('regalo', Decimal('1'))


class RecordMovementTests(TestCase):
    """Test movements applied to item stock"""

    def setUp(self):
        self.item = TestDataFactory.create_inventory_item(current_stock=Decimal('10'), min_stock=Decimal('5'))

    def test_entrada_then_salida(self):
        record_movement(inventory_item=self.item, movement_type='entrada', quantity=Decimal('4'))
        movement = record_movement(inventory_item=self.item, movement_type='salida', quantity=Decimal('9'))
        self.assertEqual(movement.inventory_item.current_stock, Decimal('5'))
        self.item.refresh_from_db()
        self.assertEqual(self.item.current_stock, Decimal('5'))
        self.assertTrue(self.item.is_low_stock)
        self.assertEqual(InventoryMovement.objects.filter(inventory_item=self.item).count(), 2)

    def test_negative_adjustment(self):
        record_movement(inventory_item=self.item, movement_type='ajuste', quantity=Decimal('-1.250'))
        self.item.refresh_from_db()
        self.assertEqual(self.item.current_stock, Decimal('8.750'))


class InventoryAPITests(TestCase):
    """Test inventory endpoints"""

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_create_item_ignores_stock(self):
        data = {'name': 'Aceite de coco', 'sku': 'INV-COCO', 'unit': 'L', 'min_stock': '2', 'current_stock': '50'}
        response = self.client.post('/api/v1/admin/inventory/items/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Item de inventario creado exitosamente')
        item = InventoryItem.objects.get(sku='INV-COCO')
        self.assertEqual(item.current_stock, Decimal('0'))
        self.assertEqual(item.created_by, self.admin)

    def test_item_filters(self):
        TestDataFactory.create_inventory_item(name='Frasco 50ml', category='envases',
                                              current_stock=Decimal('3'), min_stock=Decimal('10'))
        TestDataFactory.create_inventory_item(name='Manteca de karité', category='materias_primas',
                                              current_stock=Decimal('20'), min_stock=Decimal('5'))
        TestDataFactory.create_inventory_item(name='Etiqueta', category='envases', active=False)

        response = self.client.get('/api/v1/admin/inventory/items/', {'low_stock': 'true'})
        self.assertEqual([i['name'] for i in response.data], ['Frasco 50ml'])
        self.assertTrue(response.data[0]['is_low_stock'])

        response = self.client.get('/api/v1/admin/inventory/items/', {'category': 'envases', 'active': 'true'})
        self.assertEqual([i['name'] for i in response.data], ['Frasco 50ml'])

        response = self.client.get('/api/v1/admin/inventory/items/', {'category': 'all', 'search': 'karité'})
        self.assertEqual([i['name'] for i in response.data], ['Manteca de karité'])

    def test_record_movement_updates_stock(self):
        item = TestDataFactory.create_inventory_item(current_stock=Decimal('10'))
        self.client.get('/api/v1/admin/inventory/items/')

        data = {'inventory_item_id': item.id, 'movement_type': 'produccion', 'quantity': '3.5'}
        response = self.client.post('/api/v1/admin/inventory/movements/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Movimiento de inventario registrado exitosamente')
        self.assertEqual(Decimal(response.data['data']['inventory_item']['current_stock']), Decimal('6.5'))

        response = self.client.get('/api/v1/admin/inventory/items/')
        self.assertEqual(Decimal(response.data[0]['current_stock']), Decimal('6.5'))

    def test_movement_quantity_validation(self):
        item = TestDataFactory.create_inventory_item()
        data = {'inventory_item_id': item.id, 'movement_type': 'salida', 'quantity': '-2'}
        response = self.client.post('/api/v1/admin/inventory/movements/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        data = {'inventory_item_id': item.id, 'movement_type': 'ajuste', 'quantity': '0'}
        response = self.client.post('/api/v1/admin/inventory/movements/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al registrar el movimiento')

    def test_movement_filters(self):
        soap = TestDataFactory.create_inventory_item(name='Base de jabón')
        oil = TestDataFactory.create_inventory_item(name='Aceite de almendras')
        last_month = timezone.now() - timedelta(days=30)
        record_movement(inventory_item=soap, movement_type='entrada', quantity=Decimal('5'),
                        movement_date=last_month)
        record_movement(inventory_item=soap, movement_type='venta', quantity=Decimal('1'))
        record_movement(inventory_item=oil, movement_type='entrada', quantity=Decimal('2'))

        response = self.client.get('/api/v1/admin/inventory/movements/', {'item': soap.id})
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]['movement_type'], 'venta')

        response = self.client.get('/api/v1/admin/inventory/movements/', {'movement_type': 'entrada'})
        self.assertEqual(len(response.data), 2)

        week_ago = (timezone.localdate() - timedelta(days=7)).isoformat()
        response = self.client.get('/api/v1/admin/inventory/movements/', {'date_from': week_ago})
        self.assertEqual(len(response.data), 2)

    def test_update_and_delete_item(self):
        item = TestDataFactory.create_inventory_item()
        response = self.client.patch(f'/api/v1/admin/inventory/items/{item.id}/', {'min_stock': '1'},
                                     format='json')
        self.assertEqual(response.data['message'], 'Item de inventario actualizado exitosamente')
        item.refresh_from_db()
        self.assertEqual(item.min_stock, Decimal('1'))

        response = self.client.delete(f'/api/v1/admin/inventory/items/{item.id}/')
        self.assertEqual(response.data['message'], 'Item de inventario eliminado exitosamente')
        self.assertFalse(InventoryItem.objects.filter(pk=item.pk).exists())
