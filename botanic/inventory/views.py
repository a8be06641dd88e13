from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from botanic.core.cache_utils import cached_query, ADMIN_LIST_CACHE_TTL
from botanic.core.filters import filter_queryset
from botanic.core.notifications import error_response, success_response, validation_error_response
from botanic.core.permissions import IsStoreAdmin
from .filters import InventoryItemFilter, InventoryMovementFilter
from .models import InventoryItem, InventoryMovement
from .serializers import InventoryItemSerializer, InventoryMovementSerializer
from .stock import record_movement


@cached_query('admin-inventory-items', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_inventory_items(params):
    filterset = InventoryItemFilter(dict(params), queryset=InventoryItem.objects.order_by('name'))
    return InventoryItemSerializer(filter_queryset(filterset), many=True).data


@cached_query('admin-inventory-movements', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_inventory_movements(params):
    queryset = InventoryMovement.objects.select_related('inventory_item').order_by('-movement_date', '-created_at')
    filterset = InventoryMovementFilter(dict(params), queryset=queryset)
    return InventoryMovementSerializer(filter_queryset(filterset), many=True).data


# InventoryItem views
@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def inventory_item_list_create(request):
    """List inventory items (?category=&active=&low_stock=&search=) or create one"""
    if request.method == 'GET':
        return Response(load_inventory_items(sorted(request.query_params.items())))

    serializer = InventoryItemSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear el item', serializer.errors)
    try:
        item = serializer.save(created_by=request.user)
    except DatabaseError as e:
        return error_response('Error al crear el item', e)
    return success_response('Item de inventario creado exitosamente', data=InventoryItemSerializer(item).data,
                            status_code=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def inventory_item_detail(request, pk):
    item = get_object_or_404(InventoryItem, pk=pk)

    if request.method == 'GET':
        return Response(InventoryItemSerializer(item).data)

    if request.method == 'DELETE':
        try:
            item.delete()
        except DatabaseError as e:
            return error_response('Error al eliminar el item', e)
        return success_response('Item de inventario eliminado exitosamente')

    serializer = InventoryItemSerializer(item, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar el item', serializer.errors)
    try:
        item = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar el item', e)
    return success_response('Item de inventario actualizado exitosamente', data=InventoryItemSerializer(item).data)


# InventoryMovement views
@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def inventory_movement_list_create(request):
    """List movements (?item=&movement_type=&date_from=&date_to=) or record one"""
    if request.method == 'GET':
        return Response(load_inventory_movements(sorted(request.query_params.items())))

    serializer = InventoryMovementSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al registrar el movimiento', serializer.errors)
    try:
        movement = record_movement(created_by=request.user, **serializer.validated_data)
    except DatabaseError as e:
        return error_response('Error al registrar el movimiento', e)
    return success_response('Movimiento de inventario registrado exitosamente',
                            data=InventoryMovementSerializer(movement).data,
                            status_code=status.HTTP_201_CREATED)
