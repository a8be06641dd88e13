from django.urls import path
from .views import admin_order_list, admin_order_status, my_order_list_create

urlpatterns = [
    path('orders/', my_order_list_create, name='my-order-list-create'),
    path('admin/orders/', admin_order_list, name='admin-order-list'),
    path('admin/orders/<int:pk>/status/', admin_order_status, name='admin-order-status'),
]
