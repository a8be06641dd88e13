import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.core.mail import send_mail
from django.db import DatabaseError
from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .exports import dump_export, export_filename, export_store_data
from .notifications import error_response, success_response, validation_error_response
from .permissions import IsStoreAdmin
from .serializers import UserSerializer, UserCreateSerializer, SettingsSaveSerializer
from .store_settings import get_grouped_settings, get_store_settings, save_settings

User = get_user_model()
logger = logging.getLogger(__name__)


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_active:
            raise AuthenticationFailed('La cuenta está desactivada.')
        data['user'] = UserSerializer(self.user).data
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        token['role'] = user.role
        return token


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer


class CustomTokenRefreshSerializer(TokenRefreshSerializer):
    """Token refresh that rejects tokens of deleted users cleanly"""
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except (InvalidToken, TokenError):
            raise InvalidToken('Token is invalid or expired.')
        except ObjectDoesNotExist:
            raise InvalidToken('Token is invalid. User no longer exists.')


class CustomTokenRefreshView(TokenRefreshView):
    serializer_class = CustomTokenRefreshSerializer


@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Customer registration endpoint"""
    serializer = UserCreateSerializer(data=request.data)
    if serializer.is_valid():
        user = serializer.save()
        token = CustomTokenObtainPairSerializer.get_token(user)
        return Response({
            'user': UserSerializer(user).data,
            'access': str(token.access_token),
            'refresh': str(token),
        }, status=status.HTTP_201_CREATED)
    return validation_error_response('Error al registrar la cuenta', serializer.errors)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current user with role flags"""
    user = request.user
    user_data = UserSerializer(user).data
    user_data['is_admin'] = user.is_store_admin
    return Response(user_data)


@api_view(['GET'])
@permission_classes([AllowAny])
def store_settings(request):
    """Public storefront settings (shipping, minimum order, store name/currency)"""
    return Response(get_store_settings())


@api_view(['GET', 'POST'])
@permission_classes([IsStoreAdmin])
def admin_settings(request):
    """All settings grouped by category, or save one category"""
    if request.method == 'GET':
        return Response(get_grouped_settings())

    serializer = SettingsSaveSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error_response('Error al guardar la configuración', serializer.errors)

    category = serializer.validated_data['category']
    try:
        saved = save_settings(category, serializer.validated_data['data'])
    except DatabaseError as e:
        return error_response('Error al guardar la configuración', e)

    return success_response(
        f'Configuración de {category} guardada exitosamente',
        data={setting.short_key: setting.setting_value for setting in saved},
    )


@api_view(['POST'])
@permission_classes([IsStoreAdmin])
def send_test_email(request):
    """Send a test email to the requesting admin with the configured mail settings"""
    recipient = request.data.get('to') or request.user.email
    if not recipient:
        return error_response(
            'Error al enviar el email de prueba',
            'Tu cuenta no tiene un email configurado.',
            status.HTTP_400_BAD_REQUEST,
        )

    store_name = get_store_settings()['storeName']
    try:
        send_mail(
            f'{store_name}: email de prueba',
            'Este es un email de prueba. La configuración de correo funciona correctamente.',
            settings.DEFAULT_FROM_EMAIL,
            [recipient],
        )
    except Exception as e:
        return error_response('Error al enviar el email de prueba', e)

    logger.info(f"Test email sent to {recipient}")
    return success_response('Email de prueba enviado exitosamente. Revisa tu bandeja de entrada.')


@api_view(['GET'])
@permission_classes([IsStoreAdmin])
def export_data(request):
    """Download products, orders and inventory items as a JSON file"""
    content = dump_export(export_store_data())
    response = HttpResponse(content, content_type='application/json; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{export_filename()}"'
    return response
