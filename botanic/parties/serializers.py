from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework import serializers
import uuid

from .models import CustomerProfile, Employee

User = get_user_model()

DUPLICATE_EMAIL_MESSAGE = 'Este email ya está registrado. Usa la opción de editar para actualizar la información.'


class CustomerCreateSerializer(serializers.Serializer):
    """Creates the customer account and its profile"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    first_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=150)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists() or User.objects.filter(username=value).exists():
            raise serializers.ValidationError(DUPLICATE_EMAIL_MESSAGE)
        return value

    def create(self, validated_data):
        with transaction.atomic():
            user = User.objects.create_user(
                username=validated_data['email'],
                email=validated_data['email'],
                password=validated_data['password'],
                first_name=validated_data.get('first_name') or '',
                last_name=validated_data.get('last_name') or '',
                role='cliente',
            )
            profile, _ = CustomerProfile.objects.update_or_create(
                user=user,
                defaults={
                    'first_name': validated_data.get('first_name') or None,
                    'last_name': validated_data.get('last_name') or None,
                    'phone': validated_data.get('phone') or None,
                },
            )
        return profile


class CustomerProfileSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = CustomerProfile
        fields = ['user_id', 'email', 'first_name', 'last_name', 'phone', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class EmployeeSerializer(serializers.ModelSerializer):
    employee_code = serializers.CharField(required=False, allow_blank=True, max_length=50)

    class Meta:
        model = Employee
        fields = [
            'id', 'user', 'employee_code', 'first_name', 'last_name', 'email', 'phone', 'position',
            'department', 'hire_date', 'salary', 'status', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_employee_code(self, value):
        if not value:
            return value
        queryset = Employee.objects.filter(employee_code=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('Ya existe un trabajador con este código.')
        return value

    def create(self, validated_data):
        if not validated_data.get('employee_code'):
            validated_data['employee_code'] = generate_employee_code()
        return super().create(validated_data)

    def update(self, instance, validated_data):
        # A blank code on update keeps the current one
        if not validated_data.get('employee_code'):
            validated_data.pop('employee_code', None)
        return super().update(instance, validated_data)


def generate_employee_code():
    """EMP-YYYYMM-XXXXXX, unique among employees"""
    code = f"EMP-{timezone.now().strftime('%Y%m')}-{str(uuid.uuid4())[:6].upper()}"
    while Employee.objects.filter(employee_code=code).exists():
        code = f"EMP-{timezone.now().strftime('%Y%m')}-{str(uuid.uuid4())[:6].upper()}"
    return code
