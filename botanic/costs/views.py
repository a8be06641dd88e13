from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from botanic.core.cache_utils import cached_query, ADMIN_LIST_CACHE_TTL
from botanic.core.filters import filter_queryset
from botanic.core.notifications import error_response, success_response, validation_error_response
from botanic.core.permissions import IsStoreAdmin
from .filters import CostFilter
from .models import Cost
from .serializers import CostSerializer


@cached_query('admin-costs', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_costs(params):
    filterset = CostFilter(dict(params), queryset=Cost.objects.order_by('-date', '-id'))
    return CostSerializer(filter_queryset(filterset), many=True).data


@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def cost_list_create(request):
    """List costs (?start_date=&end_date=&category=&frequency=) or create one"""
    if request.method == 'GET':
        return Response(load_costs(sorted(request.query_params.items())))

    serializer = CostSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear el costo', serializer.errors)
    try:
        cost = serializer.save()
    except DatabaseError as e:
        return error_response('Error al crear el costo', e)
    return success_response('Costo creado exitosamente', data=CostSerializer(cost).data,
                            status_code=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def cost_detail(request, pk):
    cost = get_object_or_404(Cost, pk=pk)

    if request.method == 'GET':
        return Response(CostSerializer(cost).data)

    if request.method == 'DELETE':
        try:
            cost.delete()
        except DatabaseError as e:
            return error_response('Error al eliminar el costo', e)
        return success_response('Costo eliminado exitosamente')

    serializer = CostSerializer(cost, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar el costo', serializer.errors)
    try:
        cost = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar el costo', e)
    return success_response('Costo actualizado exitosamente', data=CostSerializer(cost).data)
