from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from botanic.core.cache_utils import cached_query, invalidate_queries, ADMIN_LIST_CACHE_TTL, USER_ORDERS_CACHE_TTL
from botanic.core.notifications import error_response, success_response, validation_error_response
from botanic.core.permissions import IsStoreAdmin
from .models import Order
from .serializers import (
    AdminOrderSerializer, OrderStatusUpdateSerializer, CustomerOrderSerializer, OrderCreateSerializer,
)


@cached_query('admin-orders', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_admin_orders():
    orders = Order.objects.select_related('user', 'user__profile').prefetch_related('items').order_by(
        '-created_at', '-id'
    )
    return AdminOrderSerializer(orders, many=True).data


@api_view(['GET'])
@permission_classes([IsStoreAdmin])
def admin_order_list(request):
    """All orders, newest first, with items and customer info"""
    return Response(load_admin_orders())


@api_view(['POST', 'PATCH'])
@permission_classes([IsStoreAdmin])
def admin_order_status(request, pk):
    """Update an order's status (and optionally tracking number / estimated delivery)"""
    order = get_object_or_404(Order, pk=pk)
    serializer = OrderStatusUpdateSerializer(order, data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar el pedido', serializer.errors)
    try:
        order = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar el pedido', e)

    invalidate_queries('orders', 'admin-orders', 'admin-customers', 'admin-analytics')
    return success_response(
        'Estado del pedido actualizado',
        'El pedido ha sido actualizado exitosamente.',
        AdminOrderSerializer(order).data,
    )


@cached_query('orders', cache_ttl=USER_ORDERS_CACHE_TTL)
def load_user_orders(user_id):
    orders = Order.objects.filter(user_id=user_id).prefetch_related('items').order_by('-created_at', '-id')
    return CustomerOrderSerializer(orders, many=True).data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def my_order_list_create(request):
    """The current user's orders (newest first, with items), or place a new order"""
    if request.method == 'GET':
        return Response(load_user_orders(request.user.id))

    serializer = OrderCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear la orden', serializer.errors)
    try:
        order = serializer.save(user=request.user)
    except DatabaseError as e:
        return error_response('Error al crear la orden', e)

    # Items are bulk-created without post_save signals
    invalidate_queries('orders', 'admin-orders', 'admin-customers', 'admin-analytics')
    order = Order.objects.prefetch_related('items').get(pk=order.pk)
    return success_response('Pedido creado exitosamente', f'Tu pedido {order.order_number} ha sido registrado.',
                            CustomerOrderSerializer(order).data, status.HTTP_201_CREATED)
