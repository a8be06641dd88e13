import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from botanic.core.cache_utils import (
    cached_query, PRODUCTS_CACHE_TTL, PRODUCT_NUTRIENTS_CACHE_TTL, NUTRIENTS_CACHE_TTL, ADMIN_LIST_CACHE_TTL,
)
from botanic.core.filters import filter_queryset
from botanic.core.notifications import error_response, success_response, validation_error_response
from botanic.core.permissions import IsStoreAdmin
from .display import product_to_display
from .filters import ShopProductFilter, NutrientFilter
from .models import ProductCategory, Product, NutrientCategory, Nutrient, ProductNutrient
from .picker import NutrientPicker
from .serializers import (
    ProductCategorySerializer, ProductSerializer, NutrientCategorySerializer,
    NutrientSerializer, NutrientWithCategorySerializer, ProductNutrientSerializer,
)

logger = logging.getLogger(__name__)


def parse_id_list(raw):
    """'1,2, 3' -> [1, 2, 3]; raises ValueError on anything that is not an integer"""
    if not raw:
        return []
    return [int(part) for part in raw.split(',') if part.strip()]


# Cached reads

@cached_query('products', cache_ttl=PRODUCTS_CACHE_TTL)
def load_shop_products(params):
    queryset = Product.objects.filter(in_stock=True).order_by('-created_at', '-id')
    filterset = ShopProductFilter(dict(params), queryset=queryset)
    return [product_to_display(product) for product in filter_queryset(filterset)]


@cached_query('product', cache_ttl=PRODUCTS_CACHE_TTL)
def load_shop_product(pk):
    product = Product.objects.filter(pk=pk).first()
    return product_to_display(product) if product else None


@cached_query('active-product-categories', cache_ttl=NUTRIENTS_CACHE_TTL)
def load_active_product_categories():
    categories = ProductCategory.objects.filter(is_active=True).order_by('display_order', 'name')
    return ProductCategorySerializer(categories, many=True).data


@cached_query('product-categories', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_product_categories():
    categories = ProductCategory.objects.order_by('display_order', 'name')
    return ProductCategorySerializer(categories, many=True).data


@cached_query('nutrient-categories', cache_ttl=NUTRIENTS_CACHE_TTL)
def load_nutrient_categories():
    return NutrientCategorySerializer(NutrientCategory.objects.order_by('name'), many=True).data


@cached_query('nutrients', cache_ttl=NUTRIENTS_CACHE_TTL)
def load_nutrients(params):
    filterset = NutrientFilter(dict(params), queryset=Nutrient.objects.order_by('name'))
    return NutrientSerializer(filter_queryset(filterset), many=True).data


@cached_query('nutrients-with-categories', cache_ttl=NUTRIENTS_CACHE_TTL)
def load_nutrients_with_categories():
    nutrients = Nutrient.objects.select_related('category').order_by('name')
    return NutrientWithCategorySerializer(nutrients, many=True).data


@cached_query('product-nutrients', cache_ttl=PRODUCT_NUTRIENTS_CACHE_TTL)
def load_product_nutrients(product_id):
    links = ProductNutrient.objects.filter(product_id=product_id).select_related(
        'nutrient', 'nutrient__category'
    ).order_by('nutrient__name')
    return ProductNutrientSerializer(links, many=True).data


@cached_query('admin-products', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_admin_products():
    return ProductSerializer(Product.objects.order_by('-created_at', '-id'), many=True).data


# Storefront views

@api_view(['GET'])
@permission_classes([AllowAny])
def shop_product_list(request):
    """In-stock products for the storefront, newest first"""
    return Response(load_shop_products(sorted(request.query_params.items())))


@api_view(['GET'])
@permission_classes([AllowAny])
def shop_product_detail(request, pk):
    product = load_shop_product(pk)
    if product is None:
        return Response({'error': 'Producto no encontrado'}, status=status.HTTP_404_NOT_FOUND)
    return Response(product)


@api_view(['GET'])
@permission_classes([AllowAny])
def active_product_category_list(request):
    return Response(load_active_product_categories())


@api_view(['GET'])
@permission_classes([AllowAny])
def nutrient_category_list(request):
    return Response(load_nutrient_categories())


@api_view(['GET'])
@permission_classes([AllowAny])
def nutrient_list(request):
    """Nutrients ordered by name; ?category=<slug> restricts to one category"""
    return Response(load_nutrients(sorted(request.query_params.items())))


@api_view(['GET'])
@permission_classes([AllowAny])
def nutrient_with_categories_list(request):
    return Response(load_nutrients_with_categories())


@api_view(['GET'])
@permission_classes([AllowAny])
def product_nutrient_list(request, pk):
    """Nutrients linked to a product"""
    return Response(load_product_nutrients(pk))


@api_view(['GET'])
@permission_classes([AllowAny])
def nutrient_picker(request):
    """
    Multi-select nutrient picker state

    Query params:
        q: text filter over nutrient names
        selected: comma separated IDs already selected
        toggle: ID to add/remove from the selection
        clear: 'true' resets filter and selection
    """
    try:
        selected_ids = parse_id_list(request.query_params.get('selected'))
        toggle = request.query_params.get('toggle')
        toggle_id = int(toggle) if toggle else None
    except ValueError:
        return Response({'error': 'Los identificadores de nutrientes deben ser números enteros.'},
                        status=status.HTTP_400_BAD_REQUEST)

    nutrients = Nutrient.objects.order_by('name')
    picker = NutrientPicker(nutrients, selected_ids, query=request.query_params.get('q', ''))
    if request.query_params.get('clear', '').lower() == 'true':
        picker.clear()
    if toggle_id is not None:
        picker.toggle(toggle_id)

    return Response({
        'query': picker.query,
        'selected_ids': picker.selected_ids,
        'selected': [{'id': n.id, 'name': n.name} for n in picker.selected_nutrients()],
        'options': [
            {'id': n.id, 'name': n.name, 'category_id': n.category_id, 'selected': picker.is_selected(n.id)}
            for n in picker.filtered()
        ],
        'button_label': picker.button_label(),
        'empty_message': picker.empty_message(),
    })


# Admin product views

@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def admin_product_list_create(request):
    """List all products (newest first) or create a product"""
    if request.method == 'GET':
        return Response(load_admin_products())

    serializer = ProductSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear producto', serializer.errors)
    try:
        product = serializer.save()
    except DatabaseError as e:
        return error_response('Error al crear producto', e)
    return success_response(
        'Producto creado exitosamente',
        'El producto ha sido agregado a la base de datos',
        ProductSerializer(product).data,
        status.HTTP_201_CREATED,
    )


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def admin_product_detail(request, pk):
    """Retrieve, update or delete a product"""
    product = get_object_or_404(Product, pk=pk)

    if request.method == 'GET':
        return Response(ProductSerializer(product).data)

    if request.method == 'DELETE':
        try:
            product.delete()
        except DatabaseError as e:
            return error_response('Error al eliminar producto', e)
        return success_response('Producto eliminado exitosamente',
                                'El producto ha sido removido de la base de datos')

    serializer = ProductSerializer(product, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar producto', serializer.errors)
    try:
        product = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar producto', e)
    return success_response('Producto actualizado exitosamente', 'Los cambios han sido guardados',
                            ProductSerializer(product).data)


# Product category views

@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def product_category_list_create(request):
    """All categories (active or not) ordered for display, or create one"""
    if request.method == 'GET':
        return Response(load_product_categories())

    serializer = ProductCategorySerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear categoría', serializer.errors)
    try:
        category = serializer.save()
    except DatabaseError as e:
        return error_response('Error al crear categoría', e)
    return success_response(
        'Categoría creada exitosamente',
        'La categoría ha sido agregada a la base de datos',
        ProductCategorySerializer(category).data,
        status.HTTP_201_CREATED,
    )


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def product_category_detail(request, pk):
    category = get_object_or_404(ProductCategory, pk=pk)

    if request.method == 'GET':
        return Response(ProductCategorySerializer(category).data)

    if request.method == 'DELETE':
        try:
            category.delete()
        except DatabaseError as e:
            return error_response('Error al eliminar categoría', e)
        return success_response('Categoría eliminada exitosamente',
                                'La categoría ha sido removida de la base de datos')

    serializer = ProductCategorySerializer(category, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar categoría', serializer.errors)
    try:
        category = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar categoría', e)
    return success_response('Categoría actualizada exitosamente', 'Los cambios han sido guardados',
                            ProductCategorySerializer(category).data)
