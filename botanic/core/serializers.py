from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction

from botanic.parties.models import CustomerProfile

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'phone', 'role',
                  'is_active', 'date_joined']
        read_only_fields = ['id', 'role', 'is_active', 'date_joined']


class UserCreateSerializer(serializers.ModelSerializer):
    """Storefront registration; new accounts are always customers"""
    username = serializers.CharField(required=False, allow_blank=True, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, validators=[validate_password])

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'first_name', 'last_name', 'phone']

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('Este email ya está registrado.')
        return value

    def validate(self, attrs):
        username = attrs.get('username') or attrs['email']
        if User.objects.filter(username=username).exists():
            raise serializers.ValidationError({'username': 'Este nombre de usuario ya existe.'})
        attrs['username'] = username
        return attrs

    def create(self, validated_data):
        """Create the account and its customer profile together"""
        password = validated_data.pop('password')
        with transaction.atomic():
            user = User(role='cliente', **validated_data)
            user.set_password(password)
            user.save()
            CustomerProfile.objects.get_or_create(
                user=user,
                defaults={
                    'first_name': user.first_name or None,
                    'last_name': user.last_name or None,
                    'phone': user.phone or None,
                },
            )
        return user


class SettingsSaveSerializer(serializers.Serializer):
    category = serializers.RegexField(r'^[A-Za-z0-9_-]+$', max_length=50)
    data = serializers.DictField(child=serializers.JSONField(), allow_empty=False)
