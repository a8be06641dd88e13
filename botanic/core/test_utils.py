"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from botanic.core.models import AppSetting
from botanic.catalog.models import ProductCategory, Product, NutrientCategory, Nutrient, ProductNutrient
from botanic.parties.models import CustomerProfile, Employee
from botanic.orders.models import Order, OrderItem
from botanic.orders.serializers import generate_order_number
from botanic.inventory.models import InventoryItem
from botanic.costs.models import Cost
from decimal import Decimal
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', role='cliente', is_staff=False,
                    is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if email is None:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            role=role,
            is_staff=is_staff,
            is_superuser=is_superuser
        )

    @staticmethod
    def create_admin(username=None, email=None):
        """Create a user with the admin role"""
        return TestDataFactory.create_user(username=username, email=email, role='admin')

    @staticmethod
    def create_setting(category, key, value, setting_type='string'):
        return AppSetting.objects.create(
            setting_key=f'{category}.{key}',
            setting_value=value,
            setting_type=setting_type,
            category=category
        )

    @staticmethod
    def create_product_category(slug=None, name=None, display_order=0, is_active=True):
        """Create a test product category"""
        if not slug:
            slug = f'cat-{TestDataFactory.random_string(6).lower()}'
        return ProductCategory.objects.create(
            id=slug,
            name=name or f'Category {slug}',
            display_order=display_order,
            is_active=is_active
        )

    @staticmethod
    def create_product(name=None, sku=None, category='cremas', price=None, in_stock=True, **extra):
        """Create a test product"""
        if not name:
            name = f'Product_{TestDataFactory.random_string(6)}'
        if not sku:
            sku = f'SKU_{TestDataFactory.random_string(8)}'
        if price is None:
            price = Decimal('100.00')
        extra.setdefault('description', f'Test product {name}')
        return Product.objects.create(
            name=name,
            sku=sku,
            category=category,
            price=price,
            in_stock=in_stock,
            **extra
        )

    @staticmethod
    def create_nutrient_category(slug=None, name=None):
        """Create a test nutrient category"""
        if not slug:
            slug = f'ncat-{TestDataFactory.random_string(6).lower()}'
        return NutrientCategory.objects.create(id=slug, name=name or f'Nutrient category {slug}')

    @staticmethod
    def create_nutrient(name=None, category=None):
        """Create a test nutrient"""
        if not name:
            name = f'Nutrient_{TestDataFactory.random_string(6)}'
        if not category:
            category = TestDataFactory.create_nutrient_category()
        return Nutrient.objects.create(
            name=name,
            category=category,
            description=f'Test nutrient {name}',
            benefits=['Hidratación'],
            sources=['Aloe vera']
        )

    @staticmethod
    def link_nutrient(product, nutrient):
        return ProductNutrient.objects.create(product=product, nutrient=nutrient)

    @staticmethod
    def create_customer(user=None, first_name='Ana', last_name='López', phone='55551234'):
        """Create a customer profile (and its account when not given)"""
        if not user:
            user = TestDataFactory.create_user()
        return CustomerProfile.objects.create(
            user=user,
            first_name=first_name,
            last_name=last_name,
            phone=phone
        )

    @staticmethod
    def create_employee(employee_code=None, position='Vendedor', department='Ventas', status='active', **extra):
        """Create a test employee"""
        if not employee_code:
            employee_code = f'EMP-{TestDataFactory.random_string(6).upper()}'
        first_name = extra.pop('first_name', 'Luis')
        return Employee.objects.create(
            employee_code=employee_code,
            first_name=first_name,
            last_name=extra.pop('last_name', 'Pérez'),
            email=extra.pop('email', f'{employee_code.lower()}@test.com'),
            position=position,
            department=department,
            hire_date=extra.pop('hire_date', timezone.localdate()),
            status=status,
            **extra
        )

    @staticmethod
    def create_order(user=None, total=None, status='delivered', created_at=None):
        """Create a test order; created_at can be back-dated"""
        if total is None:
            total = Decimal('150.00')
        order = Order.objects.create(
            user=user,
            order_number=generate_order_number(),
            status=status,
            subtotal=total,
            total=total
        )
        if created_at is not None:
            # auto_now_add ignores explicit values on create
            Order.objects.filter(pk=order.pk).update(created_at=created_at)
            order.refresh_from_db()
        return order

    @staticmethod
    def create_order_item(order, product=None, quantity=1, unit_price=None):
        if unit_price is None:
            unit_price = Decimal('50.00')
        return OrderItem.objects.create(
            order=order,
            product=product,
            product_name=product.name if product else 'Crema personalizada',
            product_sku=product.sku if product else None,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity
        )

    @staticmethod
    def create_inventory_item(name=None, sku=None, current_stock=None, min_stock=None, **extra):
        """Create a test inventory item"""
        if not name:
            name = f'Item_{TestDataFactory.random_string(6)}'
        if not sku:
            sku = f'INV_{TestDataFactory.random_string(8)}'
        return InventoryItem.objects.create(
            name=name,
            sku=sku,
            current_stock=current_stock if current_stock is not None else Decimal('10'),
            min_stock=min_stock if min_stock is not None else Decimal('5'),
            **extra
        )

    @staticmethod
    def create_cost(amount=None, category='otros', date=None, frequency='one_time', name=None):
        """Create a test cost"""
        if amount is None:
            amount = Decimal('50.00')
        return Cost.objects.create(
            name=name or f'Cost_{TestDataFactory.random_string(6)}',
            amount=amount,
            category=category,
            frequency=frequency,
            date=date or timezone.localdate()
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
