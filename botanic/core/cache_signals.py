"""
Cache invalidation signals
Invalidate cached queries whenever the tables behind them change
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging
import threading
from contextlib import contextmanager

from .cache_utils import invalidate_queries

logger = logging.getLogger(__name__)

# Thread-local storage to track signal suspension
_thread_locals = threading.local()

# Query keys affected by writes to each model ("app_label.ModelName")
QUERY_KEYS_BY_MODEL = {
    'catalog.Product': ('products', 'product', 'admin-products', 'product-nutrients'),
    'catalog.ProductNutrient': ('product-nutrients', 'products'),
    'catalog.Nutrient': ('nutrients', 'nutrients-with-categories', 'product-nutrients'),
    'catalog.NutrientCategory': ('nutrient-categories', 'nutrients-with-categories'),
    'catalog.ProductCategory': ('product-categories', 'active-product-categories'),
    'core.AppSetting': ('admin-settings', 'store-settings'),
    'core.User': ('admin-customers', 'admin-orders'),
    'parties.CustomerProfile': ('admin-customers', 'admin-orders'),
    'parties.Employee': ('admin-employees',),
    'orders.Order': ('orders', 'admin-orders', 'admin-customers', 'admin-analytics'),
    'orders.OrderItem': ('orders', 'admin-orders'),
    'inventory.InventoryItem': ('admin-inventory-items', 'admin-inventory-movements'),
    'inventory.InventoryMovement': ('admin-inventory-items', 'admin-inventory-movements'),
    'costs.Cost': ('admin-costs', 'admin-analytics'),
}


@contextmanager
def suspend_cache_signals():
    """
    Context manager to temporarily suspend cache invalidation signals.
    Useful for bulk operations to prevent excessive invalidation.
    Remember to call invalidate_queries() after the block!
    """
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = False


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


def query_keys_for(model):
    """Query keys that depend on the given model class"""
    return QUERY_KEYS_BY_MODEL.get(model._meta.label, ())


@receiver([post_save, post_delete])
def invalidate_model_queries(sender, instance, **kwargs):
    """Invalidate the cached queries that read the changed table"""
    if is_suspended():
        return

    query_keys = query_keys_for(sender)
    if not query_keys:
        return

    try:
        invalidate_queries(*query_keys)
    except Exception as e:
        logger.warning(f"Error invalidating queries for {sender._meta.label}: {e}")
