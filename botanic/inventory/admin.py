from django.contrib import admin
from .models import InventoryItem, InventoryMovement


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'sku', 'category', 'current_stock', 'min_stock', 'unit', 'active']
    list_filter = ['category', 'active', 'unit']
    search_fields = ['name', 'sku', 'supplier']
    ordering = ['name']
    readonly_fields = ['current_stock', 'created_at', 'updated_at']


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = ['inventory_item', 'movement_type', 'quantity', 'movement_date', 'created_by']
    list_filter = ['movement_type', 'movement_date']
    search_fields = ['inventory_item__name', 'inventory_item__sku', 'notes']
    ordering = ['-movement_date']
    readonly_fields = ['created_at']
