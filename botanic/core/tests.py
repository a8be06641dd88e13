"""
Test suite for the core module
Tests: backend configuration, auth, store settings, admin settings, export, cached queries
"""
import json
from io import StringIO
from unittest import mock

from django.core import mail
from django.core.cache import cache
from django.core.management import call_command
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework import status

from botanic.core.backend_config import load_backend_config
from botanic.core.cache_signals import suspend_cache_signals
from botanic.core.cache_utils import cached_query, get_generation, invalidate_queries
from botanic.core.checks import check_backend_config
from botanic.core.models import AppSetting
from botanic.core.store_settings import infer_setting_type
from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from botanic.parties.models import CustomerProfile


class BackendConfigTests(SimpleTestCase):
    """Test validation of the backend connection variables"""

    def test_missing_variables(self):
        config = load_backend_config({})
        self.assertFalse(config.is_valid)
        self.assertEqual(len(config.errors), 2)
        self.assertIn('BOTANIC_DB_URL is not set', config.errors)
        self.assertIn('BOTANIC_DB_KEY is not set', config.errors)

    def test_missing_key_only(self):
        config = load_backend_config({'BOTANIC_DB_URL': 'postgres://shop@db.example.com:5432/botanic'})
        self.assertFalse(config.is_valid)
        self.assertEqual(config.errors, ['BOTANIC_DB_KEY is not set'])

    def test_valid_postgres_url(self):
        config = load_backend_config({
            'BOTANIC_DB_URL': 'postgresql://shop@db.example.com:6543/botanic',
            'BOTANIC_DB_KEY': 's3cret',
        })
        self.assertTrue(config.is_valid)
        db = config.database_settings()
        self.assertEqual(db['ENGINE'], 'django.db.backends.postgresql')
        self.assertEqual(db['NAME'], 'botanic')
        self.assertEqual(db['HOST'], 'db.example.com')
        self.assertEqual(db['PORT'], '6543')
        self.assertEqual(db['USER'], 'shop')
        self.assertEqual(db['PASSWORD'], 's3cret')

    def test_valid_sqlite_url(self):
        config = load_backend_config({'BOTANIC_DB_URL': 'sqlite:///local.db', 'BOTANIC_DB_KEY': 'x'})
        self.assertTrue(config.is_valid)
        self.assertEqual(config.database_settings(), {'ENGINE': 'django.db.backends.sqlite3', 'NAME': 'local.db'})

    def test_unsupported_scheme(self):
        config = load_backend_config({'BOTANIC_DB_URL': 'https://placeholder.example.com', 'BOTANIC_DB_KEY': 'x'})
        self.assertFalse(config.is_valid)
        self.assertIn('must use one of', config.errors[0])

    def test_url_without_database_name(self):
        config = load_backend_config({'BOTANIC_DB_URL': 'postgres://db.example.com', 'BOTANIC_DB_KEY': 'x'})
        self.assertFalse(config.is_valid)
        self.assertIn('BOTANIC_DB_URL has no database name', config.errors)

    def test_invalid_config_cannot_build_database_settings(self):
        with self.assertRaises(ValueError):
            load_backend_config({}).database_settings()

    def test_check_reports_error_when_strict(self):
        with override_settings(BACKEND_CONFIG=load_backend_config({}), BACKEND_CONFIG_STRICT=True):
            messages = check_backend_config()
        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0].id, 'botanic.E001')
        self.assertTrue(messages[0].is_serious())

    def test_check_reports_warning_when_not_strict(self):
        with override_settings(BACKEND_CONFIG=load_backend_config({}), BACKEND_CONFIG_STRICT=False):
            messages = check_backend_config()
        self.assertEqual(len(messages), 1)
        self.assertFalse(messages[0].is_serious())

    def test_check_silent_when_valid(self):
        config = load_backend_config({'BOTANIC_DB_URL': 'sqlite:///local.db', 'BOTANIC_DB_KEY': 'x'})
        with override_settings(BACKEND_CONFIG=config, BACKEND_CONFIG_STRICT=True):
            self.assertEqual(check_backend_config(), [])


class CachedQueryTests(TestCase):
    """Test query-key caching and invalidation"""

    def setUp(self):
        cache.clear()
        self.calls = 0

    def test_cached_until_invalidated(self):
        @cached_query('test-query', cache_ttl=60)
        def load(value):
            self.calls += 1
            return {'value': value}

        self.assertEqual(load(1), {'value': 1})
        self.assertEqual(load(1), {'value': 1})
        self.assertEqual(self.calls, 1)

        invalidate_queries('test-query')
        load(1)
        self.assertEqual(self.calls, 2)

    def test_invalidation_only_touches_named_keys(self):
        before = get_generation('other-query')
        invalidate_queries('test-query')
        self.assertEqual(get_generation('other-query'), before)

    def test_model_save_invalidates_related_queries(self):
        before = get_generation('store-settings')
        TestDataFactory.create_setting('general', 'storeName', 'Tienda')
        self.assertNotEqual(get_generation('store-settings'), before)

    def test_suspended_signals_do_not_invalidate(self):
        before = get_generation('store-settings')
        with suspend_cache_signals():
            TestDataFactory.create_setting('general', 'storeName', 'Tienda')
        self.assertEqual(get_generation('store-settings'), before)


class AuthAPITests(TestCase):
    """Test authentication endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()

    def test_register_creates_customer(self):
        data = {'email': 'nueva@test.com', 'password': 'Botanic-Care-2024', 'first_name': 'Nueva'}
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['role'], 'cliente')
        self.assertEqual(response.data['user']['username'], 'nueva@test.com')
        self.assertIn('access', response.data)

    def test_registered_customer_listed_for_admin(self):
        admin = TestDataFactory.create_admin()
        self.client.authenticate_user(admin)
        self.assertEqual(self.client.get('/api/v1/admin/customers/').data, [])

        self.client.logout()
        data = {'email': 'luisa@test.com', 'password': 'Botanic-Care-2024', 'first_name': 'Luisa',
                'last_name': 'Pérez'}
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(CustomerProfile.objects.filter(user_id=response.data['user']['id']).exists())

        self.client.authenticate_user(admin)
        response = self.client.get('/api/v1/admin/customers/')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['email'], 'luisa@test.com')
        self.assertEqual(response.data[0]['first_name'], 'Luisa')
        self.assertEqual(response.data[0]['last_name'], 'Pérez')
        self.assertEqual(response.data[0]['total_orders'], 0)

    def test_register_duplicate_email(self):
        TestDataFactory.create_user(email='dup@test.com')
        data = {'email': 'dup@test.com', 'password': 'Botanic-Care-2024'}
        response = self.client.post('/api/v1/auth/register/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al registrar la cuenta')
        self.assertIn('email', response.data['errors'])

    def test_login_returns_tokens_and_role(self):
        TestDataFactory.create_user(username='ana', password='testpass123', role='admin')
        response = self.client.post('/api/v1/auth/login/', {'username': 'ana', 'password': 'testpass123'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertEqual(response.data['user']['role'], 'admin')

    def test_me_reports_admin_flag(self):
        admin = TestDataFactory.create_admin()
        self.client.authenticate_user(admin)
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['is_admin'])

        customer = TestDataFactory.create_user()
        self.client.authenticate_user(customer)
        response = self.client.get('/api/v1/auth/me/')
        self.assertFalse(response.data['is_admin'])

    def test_me_requires_authentication(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class StoreSettingsAPITests(TestCase):
    """Test the public store settings endpoint"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()

    def test_defaults_without_settings(self):
        response = self.client.get('/api/v1/store-settings/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {
            'freeShippingThreshold': 50,
            'shippingCost': 25,
            'minOrderAmount': 50,
            'storeName': 'Botanic Care',
            'storeCurrency': 'GTQ',
        })

    def test_stored_values_override_defaults(self):
        TestDataFactory.create_setting('orders', 'shippingCost', 30, 'number')
        TestDataFactory.create_setting('general', 'storeName', 'Botanic Care Zona 10')
        response = self.client.get('/api/v1/store-settings/')
        self.assertEqual(response.data['shippingCost'], 30)
        self.assertEqual(response.data['storeName'], 'Botanic Care Zona 10')
        self.assertEqual(response.data['freeShippingThreshold'], 50)

    def test_empty_values_fall_back_to_defaults(self):
        TestDataFactory.create_setting('orders', 'minOrderAmount', 0, 'number')
        TestDataFactory.create_setting('general', 'storeCurrency', '')
        response = self.client.get('/api/v1/store-settings/')
        self.assertEqual(response.data['minOrderAmount'], 50)
        self.assertEqual(response.data['storeCurrency'], 'GTQ')

    def test_read_failure_returns_defaults(self):
        with mock.patch('botanic.core.store_settings.AppSetting.objects.filter',
                        side_effect=DatabaseError('connection refused')):
            response = self.client.get('/api/v1/store-settings/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['storeName'], 'Botanic Care')


class AdminSettingsAPITests(TestCase):
    """Test admin settings, test email and export"""

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_admin(email='admin@botanic.test')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_customers_cannot_access(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/settings/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_settings_grouped_by_category(self):
        TestDataFactory.create_setting('general', 'storeName', 'Botanic Care')
        TestDataFactory.create_setting('orders', 'shippingCost', 25, 'number')
        response = self.client.get('/api/v1/admin/settings/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['general']['storeName'], 'Botanic Care')
        self.assertEqual(response.data['orders']['shippingCost'], 25)

    def test_save_settings_upserts_and_infers_types(self):
        TestDataFactory.create_setting('orders', 'shippingCost', 25, 'number')
        data = {'category': 'orders', 'data': {
            'shippingCost': 35,
            'autoConfirmOrders': True,
            'note': 'Envíos 24h',
        }}
        response = self.client.post('/api/v1/admin/settings/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Configuración de orders guardada exitosamente')

        self.assertEqual(AppSetting.objects.filter(category='orders').count(), 3)
        shipping = AppSetting.objects.get(setting_key='orders.shippingCost')
        self.assertEqual(shipping.setting_value, 35)
        self.assertEqual(AppSetting.objects.get(setting_key='orders.autoConfirmOrders').setting_type, 'boolean')
        self.assertEqual(AppSetting.objects.get(setting_key='orders.note').setting_type, 'string')

        # Cached admin view reflects the save
        response = self.client.get('/api/v1/admin/settings/')
        self.assertEqual(response.data['orders']['shippingCost'], 35)

    def test_save_settings_requires_category(self):
        response = self.client.post('/api/v1/admin/settings/', {'data': {'a': 1}}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al guardar la configuración')

    def test_infer_setting_type(self):
        self.assertEqual(infer_setting_type(True), 'boolean')
        self.assertEqual(infer_setting_type(3.5), 'number')
        self.assertEqual(infer_setting_type([1]), 'array')
        self.assertEqual(infer_setting_type({'a': 1}), 'object')
        self.assertEqual(infer_setting_type('x'), 'string')

    @override_settings(EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend')
    def test_send_test_email(self):
        response = self.client.post('/api/v1/admin/settings/test-email/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['admin@botanic.test'])

    def test_send_test_email_without_address(self):
        self.client.authenticate_user(TestDataFactory.create_admin(email=''))
        response = self.client.post('/api/v1/admin/settings/test-email/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export_download(self):
        TestDataFactory.create_product(name='Crema de Aloe')
        TestDataFactory.create_inventory_item(name='Aceite de jojoba')
        response = self.client.get('/api/v1/admin/export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('attachment; filename="botanic-care-export-', response['Content-Disposition'])
        payload = json.loads(response.content)
        self.assertEqual(set(payload), {'products', 'orders', 'inventory_items'})
        self.assertEqual(payload['products'][0]['name'], 'Crema de Aloe')
        self.assertEqual(payload['orders'], [])

    def test_export_skips_failing_table(self):
        TestDataFactory.create_product()
        with mock.patch('botanic.orders.models.Order.objects.order_by', side_effect=DatabaseError('boom')):
            response = self.client.get('/api/v1/admin/export/')
        payload = json.loads(response.content)
        self.assertNotIn('orders', payload)
        self.assertEqual(len(payload['products']), 1)

    def test_export_command(self):
        TestDataFactory.create_product()
        out = StringIO()
        call_command('export_store_data', '--stdout', stdout=out)
        payload = json.loads(out.getvalue())
        self.assertEqual(len(payload['products']), 1)
