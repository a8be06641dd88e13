from rest_framework.permissions import BasePermission


class IsStoreAdmin(BasePermission):
    """Allows access to accounts with the admin role (or staff/superusers)"""
    message = 'Se requieren permisos de administrador.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_store_admin)
