"""
Test suite for the catalog module
Tests: display conversion, nutrient picker, product/nutrient links, storefront and admin endpoints
"""
from decimal import Decimal
from types import SimpleNamespace

from django.core.cache import cache
from django.test import SimpleTestCase, TestCase
from rest_framework import status

from botanic.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from .display import product_to_display, FALLBACK_IMAGE_URL, FALLBACK_EMOJI
from .models import Product, ProductCategory, ProductNutrient
from .picker import (
    NutrientPicker, NO_SELECTION_LABEL, NO_MATCHES_MESSAGE, NO_NUTRIENTS_MESSAGE, SINGLE_SELECTION_LABEL,
)
from .services import link_nutrients, replace_nutrients, unique_ids


class ProductDisplayTests(TestCase):
    """Test conversion of stored products to the storefront shape"""

    def test_fallbacks_for_missing_fields(self):
        product = TestDataFactory.create_product(name='Crema de Aloe', price=Decimal('120.50'),
                                                 description='Hidratante ligera')
        display = product_to_display(product)

        self.assertEqual(display['realImage'], FALLBACK_IMAGE_URL)
        self.assertEqual(display['image'], FALLBACK_EMOJI)
        self.assertEqual(display['longDescription'], 'Hidratante ligera')
        self.assertEqual(display['ingredients'], [])
        self.assertEqual(display['benefits'], [])
        self.assertEqual(display['size'], 'N/A')
        self.assertEqual(display['price'], 120.5)
        self.assertIsNone(display['originalPrice'])
        self.assertTrue(display['inStock'])

    def test_stored_values_are_kept(self):
        product = TestDataFactory.create_product(
            original_price=Decimal('150.00'),
            image_url='https://cdn.example.com/aloe.jpg',
            emoji='🧴',
            long_description='Descripción completa',
            ingredients=['Aloe vera', 'Glicerina'],
            size='50ml',
            rating=Decimal('4.5'),
            reviews_count=12,
        )
        display = product_to_display(product)

        self.assertEqual(display['realImage'], 'https://cdn.example.com/aloe.jpg')
        self.assertEqual(display['image'], '🧴')
        self.assertEqual(display['longDescription'], 'Descripción completa')
        self.assertEqual(display['ingredients'], ['Aloe vera', 'Glicerina'])
        self.assertEqual(display['size'], '50ml')
        self.assertEqual(display['originalPrice'], 150.0)
        self.assertEqual(display['rating'], 4.5)
        self.assertEqual(display['reviews'], 12)


class NutrientPickerTests(SimpleTestCase):
    """Test the nutrient multi-select state"""

    def setUp(self):
        self.nutrients = [
            SimpleNamespace(id=1, name='Vitamina C'),
            SimpleNamespace(id=2, name='Vitamina E'),
            SimpleNamespace(id=3, name='Ácido hialurónico'),
        ]

    def test_toggle_twice_restores_selection(self):
        picker = NutrientPicker(self.nutrients, [1])
        picker.toggle(2)
        self.assertEqual(picker.selected_ids, [1, 2])
        picker.toggle(2)
        self.assertEqual(picker.selected_ids, [1])

    def test_filter_does_not_change_selection(self):
        picker = NutrientPicker(self.nutrients, [3], query='VITAMINA')
        self.assertEqual([n.id for n in picker.filtered()], [1, 2])
        self.assertEqual(picker.selected_ids, [3])
        self.assertTrue(picker.is_selected(3))

    def test_duplicate_initial_ids_are_dropped(self):
        picker = NutrientPicker(self.nutrients, [2, 2, 1])
        self.assertEqual(picker.selected_ids, [2, 1])

    def test_button_label(self):
        picker = NutrientPicker(self.nutrients)
        self.assertEqual(picker.button_label(), NO_SELECTION_LABEL)
        picker.toggle(1)
        self.assertEqual(picker.button_label(), 'Vitamina C')
        picker.toggle(3)
        self.assertEqual(picker.button_label(), '2 nutrientes seleccionados')

    def test_empty_messages(self):
        self.assertEqual(NutrientPicker([]).empty_message(), NO_NUTRIENTS_MESSAGE)
        self.assertEqual(NutrientPicker(self.nutrients, query='zinc').empty_message(), NO_MATCHES_MESSAGE)
        self.assertIsNone(NutrientPicker(self.nutrients, query='vit').empty_message())

    def test_button_label_with_unknown_single_id(self):
        picker = NutrientPicker(self.nutrients, [99])
        self.assertEqual(picker.button_label(), SINGLE_SELECTION_LABEL)
        picker.toggle(98)
        self.assertEqual(picker.button_label(), '2 nutrientes seleccionados')

    def test_query_whitespace_is_significant(self):
        nutrients = [SimpleNamespace(id=1, name='Vitamina C'), SimpleNamespace(id=2, name='Zinc')]
        self.assertEqual([n.name for n in NutrientPicker(nutrients, query=' c').filtered()], ['Vitamina C'])
        self.assertEqual(NutrientPicker(nutrients, query='   ').filtered(), [])

    def test_empty_message_follows_query(self):
        self.assertEqual(NutrientPicker([], query='x').empty_message(), NO_MATCHES_MESSAGE)
        self.assertEqual(NutrientPicker(self.nutrients, query='   ').empty_message(), NO_MATCHES_MESSAGE)

    def test_clear(self):
        picker = NutrientPicker(self.nutrients, [1, 2], query='vit')
        picker.clear()
        self.assertEqual(picker.selected_ids, [])
        self.assertEqual(picker.query, '')


class NutrientLinkTests(TestCase):
    """Test product/nutrient relationship maintenance"""

    def setUp(self):
        self.product = TestDataFactory.create_product()
        self.vitamin_c = TestDataFactory.create_nutrient('Vitamina C')
        self.vitamin_e = TestDataFactory.create_nutrient('Vitamina E')

    def test_unique_ids_keeps_order(self):
        self.assertEqual(unique_ids([3, 1, 3, 2, 1]), [3, 1, 2])
        self.assertEqual(unique_ids(None), [])

    def test_link_inserts_one_row_per_id(self):
        count = link_nutrients(self.product, [self.vitamin_c.id, self.vitamin_e.id, self.vitamin_c.id])
        self.assertEqual(count, 2)
        self.assertEqual(ProductNutrient.objects.filter(product=self.product).count(), 2)

    def test_unknown_id_skips_whole_batch(self):
        count = link_nutrients(self.product, [self.vitamin_c.id, 999999])
        self.assertEqual(count, 0)
        self.assertFalse(ProductNutrient.objects.filter(product=self.product).exists())

    def test_replace_with_empty_list_removes_links(self):
        TestDataFactory.link_nutrient(self.product, self.vitamin_c)
        replace_nutrients(self.product, [])
        self.assertFalse(ProductNutrient.objects.filter(product=self.product).exists())


class StorefrontAPITests(TestCase):
    """Test public storefront endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.cream = TestDataFactory.create_product(name='Crema de Aloe', category='cremas',
                                                    price=Decimal('80.00'), description='Hidratante')
        self.serum = TestDataFactory.create_product(name='Sérum Vitamina C', category='serums',
                                                    price=Decimal('200.00'), description='Antioxidante')
        self.out_of_stock = TestDataFactory.create_product(name='Jabón de avena', in_stock=False)

    def test_list_in_stock_products_newest_first(self):
        response = self.client.get('/api/v1/shop/products/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [p['name'] for p in response.data]
        self.assertEqual(names, ['Sérum Vitamina C', 'Crema de Aloe'])
        self.assertEqual(response.data[0]['realImage'], FALLBACK_IMAGE_URL)

    def test_filter_by_category(self):
        response = self.client.get('/api/v1/shop/products/', {'category': 'cremas'})
        self.assertEqual([p['name'] for p in response.data], ['Crema de Aloe'])

        response = self.client.get('/api/v1/shop/products/', {'category': 'all'})
        self.assertEqual(len(response.data), 2)

    def test_search_matches_name_or_description(self):
        response = self.client.get('/api/v1/shop/products/', {'search': 'antiOXIDANTE'})
        self.assertEqual([p['name'] for p in response.data], ['Sérum Vitamina C'])

    def test_price_range(self):
        response = self.client.get('/api/v1/shop/products/', {'min_price': '100', 'max_price': '250'})
        self.assertEqual([p['name'] for p in response.data], ['Sérum Vitamina C'])

    def test_invalid_price_rejected(self):
        response = self.client.get('/api/v1/shop/products/', {'min_price': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('min_price', response.data)

        response = self.client.get('/api/v1/shop/products/', {'max_price': '1O0'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_by_nutrient(self):
        nutrient = TestDataFactory.create_nutrient('Vitamina C')
        TestDataFactory.link_nutrient(self.serum, nutrient)
        response = self.client.get('/api/v1/shop/products/', {'nutrient': nutrient.id})
        self.assertEqual([p['name'] for p in response.data], ['Sérum Vitamina C'])

        unused = TestDataFactory.create_nutrient('Zinc')
        response = self.client.get('/api/v1/shop/products/', {'nutrient': unused.id})
        self.assertEqual(response.data, [])

    def test_product_detail(self):
        response = self.client.get(f'/api/v1/shop/products/{self.cream.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['sku'], self.cream.sku)

        response = self.client.get('/api/v1/shop/products/999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Producto no encontrado')

    def test_active_categories_ordered(self):
        TestDataFactory.create_product_category('serums', 'Serums', display_order=2)
        TestDataFactory.create_product_category('cremas', 'Cremas', display_order=1)
        TestDataFactory.create_product_category('ocultas', 'Ocultas', is_active=False)
        response = self.client.get('/api/v1/product-categories/active/')
        self.assertEqual([c['id'] for c in response.data], ['cremas', 'serums'])

    def test_nutrients_by_category(self):
        vitamins = TestDataFactory.create_nutrient_category('vitaminas', 'Vitaminas')
        minerals = TestDataFactory.create_nutrient_category('minerales', 'Minerales')
        TestDataFactory.create_nutrient('Vitamina E', vitamins)
        TestDataFactory.create_nutrient('Vitamina C', vitamins)
        TestDataFactory.create_nutrient('Zinc', minerals)

        response = self.client.get('/api/v1/nutrients/')
        self.assertEqual([n['name'] for n in response.data], ['Vitamina C', 'Vitamina E', 'Zinc'])

        response = self.client.get('/api/v1/nutrients/', {'category': 'vitaminas'})
        self.assertEqual([n['name'] for n in response.data], ['Vitamina C', 'Vitamina E'])
        self.assertEqual(response.data[0]['category_id'], 'vitaminas')

        response = self.client.get('/api/v1/nutrients/with-categories/')
        self.assertEqual(response.data[-1]['category']['name'], 'Minerales')

        response = self.client.get('/api/v1/nutrient-categories/')
        self.assertEqual([c['id'] for c in response.data], ['minerales', 'vitaminas'])

    def test_product_nutrients(self):
        nutrient = TestDataFactory.create_nutrient('Vitamina C')
        TestDataFactory.link_nutrient(self.serum, nutrient)
        response = self.client.get(f'/api/v1/products/{self.serum.id}/nutrients/')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['nutrient_id'], nutrient.id)
        self.assertEqual(response.data[0]['nutrient']['name'], 'Vitamina C')

    def test_nutrient_picker(self):
        vitamin_c = TestDataFactory.create_nutrient('Vitamina C')
        zinc = TestDataFactory.create_nutrient('Zinc')
        response = self.client.get('/api/v1/nutrients/picker/',
                                   {'q': 'vita', 'selected': str(zinc.id), 'toggle': str(vitamin_c.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['selected_ids'], [zinc.id, vitamin_c.id])
        self.assertEqual([o['name'] for o in response.data['options']], ['Vitamina C'])
        self.assertTrue(response.data['options'][0]['selected'])
        self.assertEqual(response.data['button_label'], '2 nutrientes seleccionados')
        self.assertIsNone(response.data['empty_message'])

    def test_nutrient_picker_rejects_bad_ids(self):
        response = self.client.get('/api/v1/nutrients/picker/', {'selected': '1,abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AdminProductAPITests(TestCase):
    """Test admin product and category management"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())
        self.vitamin_c = TestDataFactory.create_nutrient('Vitamina C')
        self.vitamin_e = TestDataFactory.create_nutrient('Vitamina E')

    def product_data(self, **extra):
        data = {
            'name': 'Sérum Vitamina C',
            'category': 'serums',
            'price': '200.00',
            'description': 'Antioxidante',
            'sku': 'SER-VITC-30',
        }
        data.update(extra)
        return data

    def test_requires_admin(self):
        self.client.logout()
        response = self.client.get('/api/v1/admin/products/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/admin/products/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_product_with_nutrients(self):
        data = self.product_data(nutrient_ids=[self.vitamin_c.id, self.vitamin_e.id])
        response = self.client.post('/api/v1/admin/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Producto creado exitosamente')
        self.assertEqual(response.data['description'], 'El producto ha sido agregado a la base de datos')

        product = Product.objects.get(sku='SER-VITC-30')
        self.assertEqual(set(product.nutrients.values_list('id', flat=True)), {self.vitamin_c.id, self.vitamin_e.id})

    def test_create_product_with_unknown_nutrient_keeps_product(self):
        data = self.product_data(nutrient_ids=[self.vitamin_c.id, 999999])
        response = self.client.post('/api/v1/admin/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = Product.objects.get(sku='SER-VITC-30')
        self.assertEqual(product.nutrients.count(), 0)

    def test_create_product_validation_error(self):
        response = self.client.post('/api/v1/admin/products/', {'name': 'Sin precio'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Error al crear producto')
        self.assertIn('price', response.data['errors'])

    def test_update_replaces_nutrients_only_when_given(self):
        product = TestDataFactory.create_product()
        TestDataFactory.link_nutrient(product, self.vitamin_c)

        response = self.client.patch(f'/api/v1/admin/products/{product.id}/', {'price': '99.90'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Producto actualizado exitosamente')
        self.assertEqual(list(product.nutrients.values_list('id', flat=True)), [self.vitamin_c.id])

        response = self.client.patch(f'/api/v1/admin/products/{product.id}/',
                                     {'nutrient_ids': [self.vitamin_e.id]}, format='json')
        self.assertEqual(list(product.nutrients.values_list('id', flat=True)), [self.vitamin_e.id])

        response = self.client.patch(f'/api/v1/admin/products/{product.id}/', {'nutrient_ids': []}, format='json')
        self.assertEqual(product.nutrients.count(), 0)

    def test_update_is_visible_in_cached_lists(self):
        product = TestDataFactory.create_product(name='Crema vieja')
        self.client.get('/api/v1/admin/products/')
        self.client.get('/api/v1/shop/products/')

        self.client.patch(f'/api/v1/admin/products/{product.id}/', {'name': 'Crema nueva'}, format='json')

        response = self.client.get('/api/v1/admin/products/')
        self.assertEqual(response.data[0]['name'], 'Crema nueva')
        response = self.client.get('/api/v1/shop/products/')
        self.assertEqual(response.data[0]['name'], 'Crema nueva')

    def test_delete_product(self):
        product = TestDataFactory.create_product()
        TestDataFactory.link_nutrient(product, self.vitamin_c)
        response = self.client.delete(f'/api/v1/admin/products/{product.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Producto eliminado exitosamente')
        self.assertFalse(Product.objects.filter(pk=product.pk).exists())
        self.assertFalse(ProductNutrient.objects.filter(product_id=product.pk).exists())

    def test_create_category_defaults(self):
        response = self.client.post('/api/v1/product-categories/', {'id': 'mascarillas', 'name': 'Mascarillas'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Categoría creada exitosamente')
        category = ProductCategory.objects.get(id='mascarillas')
        self.assertEqual(category.display_order, 0)
        self.assertTrue(category.is_active)

    def test_duplicate_category_rejected(self):
        TestDataFactory.create_product_category('cremas', 'Cremas')
        response = self.client.post('/api/v1/product-categories/', {'id': 'cremas', 'name': 'Otra'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_category_list_includes_inactive(self):
        TestDataFactory.create_product_category('cremas', 'Cremas', display_order=1)
        TestDataFactory.create_product_category('ocultas', 'Ocultas', display_order=0, is_active=False)
        response = self.client.get('/api/v1/product-categories/')
        self.assertEqual([c['id'] for c in response.data], ['ocultas', 'cremas'])

    def test_update_and_delete_category(self):
        TestDataFactory.create_product_category('cremas', 'Cremas')
        response = self.client.patch('/api/v1/product-categories/cremas/', {'is_active': False}, format='json')
        self.assertEqual(response.data['message'], 'Categoría actualizada exitosamente')
        self.assertFalse(ProductCategory.objects.get(id='cremas').is_active)

        response = self.client.delete('/api/v1/product-categories/cremas/')
        self.assertEqual(response.data['message'], 'Categoría eliminada exitosamente')
        self.assertFalse(ProductCategory.objects.filter(id='cremas').exists())
