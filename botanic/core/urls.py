from django.urls import path
from .views import (
    CustomTokenObtainPairView, CustomTokenRefreshView, register, user_me,
    store_settings, admin_settings, send_test_email, export_data,
)

urlpatterns = [
    # Auth endpoints
    path('auth/register/', register, name='register'),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),

    # Settings endpoints
    path('store-settings/', store_settings, name='store-settings'),
    path('admin/settings/', admin_settings, name='admin-settings'),
    path('admin/settings/test-email/', send_test_email, name='admin-settings-test-email'),

    # Export
    path('admin/export/', export_data, name='admin-export'),
]
