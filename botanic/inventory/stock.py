"""
Applying inventory movements to item stock
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F

from botanic.core.cache_utils import invalidate_queries

from .models import InventoryItem, InventoryMovement

logger = logging.getLogger(__name__)

INBOUND_TYPES = {'entrada'}
OUTBOUND_TYPES = {'salida', 'produccion', 'venta', 'perdida'}


def stock_delta(movement_type, quantity):
    """
    Signed change a movement makes to current stock.

    `entrada` adds, consumption types subtract, and `ajuste` carries its own
    sign (a negative adjustment lowers stock).
    """
    quantity = Decimal(quantity)
    if movement_type in INBOUND_TYPES:
        return abs(quantity)
    if movement_type in OUTBOUND_TYPES:
        return -abs(quantity)
    if movement_type == 'ajuste':
        return quantity
    raise ValueError(f"Unknown movement type: {movement_type}")


def record_movement(created_by=None, **movement_data):
    """
    Save a movement and apply it to its item's stock in one transaction.

    Returns:
        the saved InventoryMovement (with inventory_item refreshed)
    """
    with transaction.atomic():
        item = InventoryItem.objects.select_for_update().get(pk=movement_data['inventory_item'].pk)
        movement = InventoryMovement.objects.create(created_by=created_by, **movement_data)
        delta = stock_delta(movement.movement_type, movement.quantity)
        InventoryItem.objects.filter(pk=item.pk).update(current_stock=F('current_stock') + delta)
        item.refresh_from_db()
        movement.inventory_item = item

    # queryset.update() sends no post_save signal
    invalidate_queries('admin-inventory-items', 'admin-inventory-movements')

    logger.info(f"Inventory movement {movement.movement_type} {movement.quantity} on {item.sku}: "
                f"stock now {item.current_stock}")
    return movement
