"""
Test suite for the orders module
Tests: customer checkout and order history, admin order list and status updates
"""
from datetime import date, timedelta
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .models import Order


class AdminOrderAPITests(TestCase):
    """Test admin order endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())
        self.buyer = TestDataFactory.create_user(email='ana@test.com')
        TestDataFactory.create_customer(self.buyer, first_name='Ana', last_name='López')

    def test_list_with_items_and_customer(self):
        product = TestDataFactory.create_product(name='Crema de Aloe')
        order = TestDataFactory.create_order(self.buyer, total=Decimal('100.00'), status='pending')
        TestDataFactory.create_order_item(order, product, quantity=2)
        guest_order = TestDataFactory.create_order(None)

        response = self.client.get('/api/v1/admin/orders/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o['id'] for o in response.data], [guest_order.id, order.id])

        listed = response.data[1]
        self.assertEqual(listed['user_email'], 'ana@test.com')
        self.assertEqual(listed['user_name'], 'Ana López')
        self.assertEqual(len(listed['items']), 1)
        self.assertEqual(listed['items'][0]['product_name'], 'Crema de Aloe')
        self.assertEqual(listed['items'][0]['quantity'], 2)

        self.assertEqual(response.data[0]['user_email'], '')
        self.assertEqual(response.data[0]['user_name'], '')

    def test_update_status_only(self):
        order = TestDataFactory.create_order(self.buyer, status='pending')
        order.tracking_number = 'GT123'
        order.save()

        response = self.client.post(f'/api/v1/admin/orders/{order.id}/status/', {'status': 'processing'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Estado del pedido actualizado')
        self.assertEqual(response.data['description'], 'El pedido ha sido actualizado exitosamente.')
        order.refresh_from_db()
        self.assertEqual(order.status, 'processing')
        self.assertEqual(order.tracking_number, 'GT123')

    def test_update_with_tracking(self):
        order = TestDataFactory.create_order(self.buyer, status='processing')
        data = {'status': 'shipped', 'tracking_number': 'GT999', 'estimated_delivery': '2024-06-15'}
        response = self.client.patch(f'/api/v1/admin/orders/{order.id}/status/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        order.refresh_from_db()
        self.assertEqual(order.status, 'shipped')
        self.assertEqual(order.tracking_number, 'GT999')
        self.assertEqual(order.estimated_delivery, date(2024, 6, 15))

    def test_invalid_status(self):
        order = TestDataFactory.create_order(self.buyer)
        response = self.client.post(f'/api/v1/admin/orders/{order.id}/status/', {'status': 'lost'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al actualizar el pedido')

    def test_unknown_order(self):
        response = self.client.post('/api/v1/admin/orders/999999/status/', {'status': 'shipped'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_status_change_visible_in_cached_list(self):
        order = TestDataFactory.create_order(self.buyer, status='pending')
        self.client.get('/api/v1/admin/orders/')
        self.client.post(f'/api/v1/admin/orders/{order.id}/status/', {'status': 'delivered'}, format='json')
        response = self.client.get('/api/v1/admin/orders/')
        self.assertEqual(response.data[0]['status'], 'delivered')

    def test_customers_cannot_list_orders(self):
        self.client.authenticate_user(self.buyer)
        response = self.client.get('/api/v1/admin/orders/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Order.objects.count(), 0)


class CustomerOrderAPITests(TestCase):
    """Test the customer's own order endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.buyer = TestDataFactory.create_user(email='ana@test.com')
        self.client.authenticate_user(self.buyer)
        self.product = TestDataFactory.create_product(name='Crema de Aloe', sku='CRM-001', price=Decimal('80.00'))

    def order_data(self, **extra):
        data = {
            'subtotal': '160.00',
            'shipping_cost': '25.00',
            'total': '185.00',
            'notes': 'Entregar por la tarde',
            'items': [{
                'product_id': self.product.id,
                'product_name': 'Crema de Aloe',
                'product_sku': 'CRM-001',
                'quantity': 2,
                'unit_price': '80.00',
                'total_price': '160.00',
            }],
        }
        data.update(extra)
        return data

    def test_create_order_with_items(self):
        response = self.client.post('/api/v1/orders/', self.order_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Pedido creado exitosamente')

        created = response.data['data']
        self.assertRegex(created['order_number'], r'^ORD-\d{8}-[0-9A-F]{8}$')
        self.assertEqual(created['status'], 'pending')
        self.assertEqual(Decimal(created['total']), Decimal('185.00'))
        self.assertEqual(Decimal(created['tax']), Decimal('0'))
        self.assertEqual(len(created['items']), 1)
        self.assertEqual(created['items'][0]['product_id'], self.product.id)
        self.assertEqual(created['items'][0]['quantity'], 2)

        order = Order.objects.get(pk=created['id'])
        self.assertEqual(order.user, self.buyer)
        self.assertEqual(order.items.count(), 1)

    def test_custom_cream_item_without_product(self):
        item = {'product_id': None, 'product_name': 'Crema personalizada', 'quantity': 1,
                'unit_price': '150.00', 'total_price': '150.00', 'is_custom_cream': True}
        response = self.client.post('/api/v1/orders/', self.order_data(subtotal='150.00', total='150.00',
                                                                       items=[item]), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        listed = response.data['data']['items'][0]
        self.assertIsNone(listed['product_id'])
        self.assertTrue(listed['is_custom_cream'])

    def test_create_order_validation(self):
        response = self.client.post('/api/v1/orders/', self.order_data(items=[]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al crear la orden')
        self.assertIn('items', response.data['errors'])

        bad_item = dict(self.order_data()['items'][0], quantity=0)
        response = self.client.post('/api/v1/orders/', self.order_data(items=[bad_item]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Order.objects.count(), 0)

    def test_status_is_not_client_controlled(self):
        response = self.client.post('/api/v1/orders/', self.order_data(status='delivered'), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['status'], 'pending')

    def test_list_only_own_orders_newest_first(self):
        last_week = timezone.now() - timedelta(days=7)
        older = TestDataFactory.create_order(self.buyer, total=Decimal('50.00'), created_at=last_week)
        newer = TestDataFactory.create_order(self.buyer, total=Decimal('90.00'))
        TestDataFactory.create_order_item(newer, self.product, quantity=3)
        TestDataFactory.create_order(TestDataFactory.create_user(), total=Decimal('999.00'))

        response = self.client.get('/api/v1/orders/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([o['id'] for o in response.data], [newer.id, older.id])
        self.assertEqual(response.data[0]['items'][0]['product_name'], 'Crema de Aloe')
        self.assertEqual(response.data[0]['items'][0]['quantity'], 3)
        self.assertEqual(response.data[1]['items'], [])

    def test_new_order_refreshes_cached_lists(self):
        self.assertEqual(self.client.get('/api/v1/orders/').data, [])
        admin = TestDataFactory.create_admin()
        self.client.authenticate_user(admin)
        self.assertEqual(self.client.get('/api/v1/admin/orders/').data, [])
        self.assertEqual(self.client.get('/api/v1/admin/analytics/').data['totalRevenue'], 0.0)

        self.client.authenticate_user(self.buyer)
        created = self.client.post('/api/v1/orders/', self.order_data(), format='json').data['data']
        self.assertEqual([o['id'] for o in self.client.get('/api/v1/orders/').data], [created['id']])

        self.client.authenticate_user(admin)
        listed = self.client.get('/api/v1/admin/orders/').data
        self.assertEqual([o['id'] for o in listed], [created['id']])
        self.assertEqual(len(listed[0]['items']), 1)
        self.assertEqual(self.client.get('/api/v1/admin/analytics/').data['totalRevenue'], 185.0)

    def test_status_update_visible_to_customer(self):
        order = TestDataFactory.create_order(self.buyer, status='pending')
        self.assertEqual(self.client.get('/api/v1/orders/').data[0]['status'], 'pending')

        self.client.authenticate_user(TestDataFactory.create_admin())
        self.client.post(f'/api/v1/admin/orders/{order.id}/status/', {'status': 'shipped'}, format='json')

        self.client.authenticate_user(self.buyer)
        self.assertEqual(self.client.get('/api/v1/orders/').data[0]['status'], 'shipped')

    def test_requires_authentication(self):
        self.client.logout()
        self.assertEqual(self.client.get('/api/v1/orders/').status_code, status.HTTP_401_UNAUTHORIZED)
        response = self.client.post('/api/v1/orders/', self.order_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
