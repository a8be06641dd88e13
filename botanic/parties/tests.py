"""
Test suite for the parties module
Tests: admin customer list/stats, customer CRUD, own profile, employee CRUD and filters
"""
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .customers import email_or_placeholder, search_customers
from .models import CustomerProfile, Employee
from .serializers import DUPLICATE_EMAIL_MESSAGE

User = get_user_model()


class CustomerAPITests(TestCase):
    """Test admin customer endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def test_list_includes_order_stats(self):
        buyer = TestDataFactory.create_user(email='ana@test.com')
        TestDataFactory.create_customer(buyer, first_name='Ana', last_name='López')
        last_week = timezone.now() - timedelta(days=7)
        TestDataFactory.create_order(buyer, total=Decimal('100.00'), created_at=last_week)
        latest = TestDataFactory.create_order(buyer, total=Decimal('50.50'))

        TestDataFactory.create_customer(first_name='Sin', last_name='Pedidos')

        response = self.client.get('/api/v1/admin/customers/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

        ana = next(c for c in response.data if c['email'] == 'ana@test.com')
        self.assertEqual(ana['total_orders'], 2)
        self.assertEqual(ana['total_spent'], 150.5)
        self.assertEqual(ana['last_order_date'], latest.created_at)

        no_orders = next(c for c in response.data if c['first_name'] == 'Sin')
        self.assertEqual(no_orders['total_orders'], 0)
        self.assertEqual(no_orders['total_spent'], 0.0)
        self.assertIsNone(no_orders['last_order_date'])

    def test_email_placeholder(self):
        profile = TestDataFactory.create_customer(TestDataFactory.create_user(email=''))
        self.assertEqual(email_or_placeholder(profile), f"{str(profile.user_id)[:8]}...")

    def test_search(self):
        customers = [
            {'user_id': 1, 'email': 'ana@test.com', 'first_name': 'Ana', 'last_name': 'López'},
            {'user_id': 2, 'email': 'luis@test.com', 'first_name': 'Luis', 'last_name': None},
        ]
        self.assertEqual(search_customers(customers, 'LÓPEZ'), [customers[0]])
        self.assertEqual(search_customers(customers, 'luis@'), [customers[1]])
        self.assertEqual(search_customers(customers, ''), customers)

        TestDataFactory.create_customer(first_name='Marta')
        TestDataFactory.create_customer(first_name='Julia')
        response = self.client.get('/api/v1/admin/customers/', {'search': 'mar'})
        self.assertEqual([c['first_name'] for c in response.data], ['Marta'])

    def test_create_customer(self):
        data = {'email': 'cliente@test.com', 'password': 'secreto1', 'first_name': 'Rosa', 'phone': '55550000'}
        response = self.client.post('/api/v1/admin/customers/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Cliente creado exitosamente')

        user = User.objects.get(email='cliente@test.com')
        self.assertEqual(user.role, 'cliente')
        self.assertTrue(user.check_password('secreto1'))
        self.assertEqual(user.profile.first_name, 'Rosa')

    def test_create_customer_duplicate_email(self):
        TestDataFactory.create_user(email='cliente@test.com')
        data = {'email': 'cliente@test.com', 'password': 'secreto1'}
        response = self.client.post('/api/v1/admin/customers/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al crear el cliente')
        self.assertEqual(response.data['errors']['email'][0], DUPLICATE_EMAIL_MESSAGE)

    def test_update_customer(self):
        profile = TestDataFactory.create_customer(first_name='Ana')
        response = self.client.patch(f'/api/v1/admin/customers/{profile.user_id}/', {'phone': '55559999'},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Cliente actualizado exitosamente')
        profile.refresh_from_db()
        self.assertEqual(profile.phone, '55559999')
        self.assertEqual(profile.first_name, 'Ana')

    def test_delete_customer_keeps_account(self):
        user = TestDataFactory.create_user(role='admin')
        TestDataFactory.create_customer(user)
        response = self.client.delete(f'/api/v1/admin/customers/{user.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Cliente eliminado exitosamente')
        self.assertFalse(CustomerProfile.objects.filter(user=user).exists())
        user.refresh_from_db()
        self.assertEqual(user.role, 'cliente')

    def test_list_refreshes_after_new_order(self):
        buyer = TestDataFactory.create_user()
        TestDataFactory.create_customer(buyer)
        response = self.client.get('/api/v1/admin/customers/')
        self.assertEqual(response.data[0]['total_orders'], 0)

        TestDataFactory.create_order(buyer)
        response = self.client.get('/api/v1/admin/customers/')
        self.assertEqual(response.data[0]['total_orders'], 1)


class MyProfileAPITests(TestCase):
    """Test the current user's profile endpoint"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.user = TestDataFactory.create_user(email='marta@test.com')
        self.client.authenticate_user(self.user)

    def test_profile_created_on_first_read(self):
        self.assertFalse(CustomerProfile.objects.filter(user=self.user).exists())
        response = self.client.get('/api/v1/auth/me/profile/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_id'], self.user.id)
        self.assertEqual(response.data['email'], 'marta@test.com')
        self.assertIsNone(response.data['first_name'])
        self.assertEqual(CustomerProfile.objects.filter(user=self.user).count(), 1)

        self.client.get('/api/v1/auth/me/profile/')
        self.assertEqual(CustomerProfile.objects.filter(user=self.user).count(), 1)

    def test_existing_profile_returned(self):
        TestDataFactory.create_customer(self.user, first_name='Marta', last_name='Ruiz')
        response = self.client.get('/api/v1/auth/me/profile/')
        self.assertEqual(response.data['first_name'], 'Marta')
        self.assertEqual(response.data['last_name'], 'Ruiz')

    def test_update_profile(self):
        TestDataFactory.create_customer(self.user, first_name='Marta', last_name='Ruiz', phone='55551234')
        response = self.client.patch('/api/v1/auth/me/profile/', {'phone': '55559999'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Perfil actualizado exitosamente')
        self.assertEqual(response.data['data']['phone'], '55559999')
        self.assertEqual(response.data['data']['first_name'], 'Marta')

        profile = CustomerProfile.objects.get(user=self.user)
        self.assertEqual(profile.phone, '55559999')
        self.assertEqual(profile.last_name, 'Ruiz')

    def test_update_creates_missing_profile(self):
        response = self.client.patch('/api/v1/auth/me/profile/', {'first_name': 'Marta'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(CustomerProfile.objects.get(user=self.user).first_name, 'Marta')

    def test_update_validation_error(self):
        response = self.client.patch('/api/v1/auth/me/profile/', {'phone': '5' * 30}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al actualizar perfil')

    def test_profile_update_visible_to_admin(self):
        TestDataFactory.create_customer(self.user, first_name='Marta')
        admin_client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        self.assertEqual(admin_client.get('/api/v1/admin/customers/').data[0]['first_name'], 'Marta')

        self.client.patch('/api/v1/auth/me/profile/', {'first_name': 'Martina'}, format='json')
        self.assertEqual(admin_client.get('/api/v1/admin/customers/').data[0]['first_name'], 'Martina')

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/auth/me/profile/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class EmployeeAPITests(TestCase):
    """Test admin employee endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def employee_data(self, **extra):
        data = {
            'first_name': 'Carla',
            'last_name': 'Méndez',
            'email': 'carla@test.com',
            'position': 'Vendedora',
            'hire_date': '2024-03-01',
        }
        data.update(extra)
        return data

    def test_create_generates_code(self):
        response = self.client.post('/api/v1/admin/employees/', self.employee_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Trabajador creado exitosamente')
        code = response.data['data']['employee_code']
        self.assertRegex(code, r'^EMP-\d{6}-[0-9A-F]{6}$')
        self.assertEqual(response.data['data']['status'], 'active')

    def test_create_with_explicit_code(self):
        response = self.client.post('/api/v1/admin/employees/', self.employee_data(employee_code='EMP-001'),
                                    format='json')
        self.assertEqual(response.data['data']['employee_code'], 'EMP-001')

        response = self.client.post('/api/v1/admin/employees/', self.employee_data(employee_code='EMP-001'),
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_with_blank_code_keeps_code(self):
        employee = TestDataFactory.create_employee('EMP-KEEP')
        response = self.client.patch(f'/api/v1/admin/employees/{employee.id}/',
                                     {'employee_code': '', 'status': 'on_leave'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Trabajador actualizado exitosamente')
        employee.refresh_from_db()
        self.assertEqual(employee.employee_code, 'EMP-KEEP')
        self.assertEqual(employee.status, 'on_leave')

    def test_filters(self):
        TestDataFactory.create_employee('EMP-A', position='Vendedor', department='Ventas')
        TestDataFactory.create_employee('EMP-B', position='Químico', department='Producción', status='inactive')
        TestDataFactory.create_employee('EMP-C', position='Vendedor', department='Ventas', first_name='Rocío')

        response = self.client.get('/api/v1/admin/employees/', {'status': 'inactive'})
        self.assertEqual([e['employee_code'] for e in response.data], ['EMP-B'])

        response = self.client.get('/api/v1/admin/employees/', {'status': 'all', 'department': 'Ventas'})
        self.assertEqual({e['employee_code'] for e in response.data}, {'EMP-A', 'EMP-C'})

        response = self.client.get('/api/v1/admin/employees/', {'search': 'rocío'})
        self.assertEqual([e['employee_code'] for e in response.data], ['EMP-C'])

    def test_delete(self):
        employee = TestDataFactory.create_employee()
        response = self.client.delete(f'/api/v1/admin/employees/{employee.id}/')
        self.assertEqual(response.data['message'], 'Trabajador eliminado exitosamente')
        self.assertFalse(Employee.objects.filter(pk=employee.pk).exists())
