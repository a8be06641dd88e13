from django.db import DatabaseError, transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from botanic.core.cache_utils import cached_query, ADMIN_LIST_CACHE_TTL
from botanic.core.filters import filter_queryset
from botanic.core.notifications import error_response, success_response, validation_error_response
from botanic.core.permissions import IsStoreAdmin
from .customers import build_customer_rows, search_customers
from .filters import EmployeeFilter
from .models import CustomerProfile, Employee
from .serializers import CustomerCreateSerializer, CustomerProfileSerializer, EmployeeSerializer


@cached_query('admin-customers', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_customers(search):
    return search_customers(build_customer_rows(), search)


@cached_query('admin-employees', cache_ttl=ADMIN_LIST_CACHE_TTL)
def load_employees(params):
    filterset = EmployeeFilter(dict(params), queryset=Employee.objects.order_by('-created_at', '-id'))
    return EmployeeSerializer(filter_queryset(filterset), many=True).data


# Customer views
@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def customer_list_create(request):
    """List customers with order stats, or create a customer account"""
    if request.method == 'GET':
        return Response(load_customers(request.query_params.get('search', '')))

    serializer = CustomerCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear el cliente', serializer.errors)
    try:
        profile = serializer.save()
    except DatabaseError as e:
        return error_response('Error al crear el cliente', e)
    return success_response('Cliente creado exitosamente', data=CustomerProfileSerializer(profile).data,
                            status_code=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH', 'PUT', 'DELETE'])
@permission_classes([IsStoreAdmin])
def customer_detail(request, user_id):
    """Retrieve, update or remove a customer profile (by account id)"""
    profile = get_object_or_404(CustomerProfile.objects.select_related('user'), user_id=user_id)

    if request.method == 'GET':
        return Response(CustomerProfileSerializer(profile).data)

    if request.method == 'DELETE':
        # Only the profile goes away; the account stays, demoted to a plain customer
        try:
            with transaction.atomic():
                user = profile.user
                profile.delete()
                if user.role != 'cliente':
                    user.role = 'cliente'
                    user.save(update_fields=['role', 'updated_at'])
        except DatabaseError as e:
            return error_response('Error al eliminar el cliente', e)
        return success_response('Cliente eliminado exitosamente')

    serializer = CustomerProfileSerializer(profile, data=request.data, partial=True)
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar el cliente', serializer.errors)
    try:
        profile = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar el cliente', e)
    return success_response('Cliente actualizado exitosamente', data=CustomerProfileSerializer(profile).data)


@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def my_profile(request):
    """The current user's customer profile, created empty on first read"""
    profile, _ = CustomerProfile.objects.select_related('user').get_or_create(user=request.user)

    if request.method == 'GET':
        return Response(CustomerProfileSerializer(profile).data)

    serializer = CustomerProfileSerializer(profile, data=request.data, partial=True)
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar perfil', serializer.errors)
    try:
        profile = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar perfil', e)
    return success_response('Perfil actualizado exitosamente', data=CustomerProfileSerializer(profile).data)


# Employee views
@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def employee_list_create(request):
    """List employees (?search=&status=&position=&department=) or create one"""
    if request.method == 'GET':
        return Response(load_employees(sorted(request.query_params.items())))

    serializer = EmployeeSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al crear el trabajador', serializer.errors)
    try:
        employee = serializer.save()
    except DatabaseError as e:
        return error_response('Error al crear el trabajador', e)
    return success_response('Trabajador creado exitosamente', data=EmployeeSerializer(employee).data,
                            status_code=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsStoreAdmin])
def employee_detail(request, pk):
    employee = get_object_or_404(Employee, pk=pk)

    if request.method == 'GET':
        return Response(EmployeeSerializer(employee).data)

    if request.method == 'DELETE':
        try:
            employee.delete()
        except DatabaseError as e:
            return error_response('Error al eliminar el trabajador', e)
        return success_response('Trabajador eliminado exitosamente')

    serializer = EmployeeSerializer(employee, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return validation_error_response('Error al actualizar el trabajador', serializer.errors)
    try:
        employee = serializer.save()
    except DatabaseError as e:
        return error_response('Error al actualizar el trabajador', e)
    return success_response('Trabajador actualizado exitosamente', data=EmployeeSerializer(employee).data)
