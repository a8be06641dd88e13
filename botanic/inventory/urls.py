from django.urls import path
from .views import inventory_item_list_create, inventory_item_detail, inventory_movement_list_create

urlpatterns = [
    path('admin/inventory/items/', inventory_item_list_create, name='inventory-item-list-create'),
    path('admin/inventory/items/<int:pk>/', inventory_item_detail, name='inventory-item-detail'),
    path('admin/inventory/movements/', inventory_movement_list_create, name='inventory-movement-list-create'),
]
