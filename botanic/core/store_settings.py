"""
Store settings read/write helpers

Settings live in `app_settings` as one row per `<category>.<key>`.
"""
import logging

from django.db import DatabaseError, transaction

from .cache_utils import cached_query, STORE_SETTINGS_CACHE_TTL
from .models import AppSetting

logger = logging.getLogger(__name__)

# Public storefront settings: (category, key, response field, default)
STORE_SETTING_DEFAULTS = (
    ('orders', 'freeShippingThreshold', 'freeShippingThreshold', 50),
    ('orders', 'shippingCost', 'shippingCost', 25),
    ('orders', 'minOrderAmount', 'minOrderAmount', 50),
    ('general', 'storeName', 'storeName', 'Botanic Care'),
    ('general', 'storeCurrency', 'storeCurrency', 'GTQ'),
)


def default_store_settings():
    return {field: default for _, _, field, default in STORE_SETTING_DEFAULTS}


@cached_query('store-settings', cache_ttl=STORE_SETTINGS_CACHE_TTL)
def _load_store_settings():
    settings_data = default_store_settings()
    lookup = {(category, key): (field, default) for category, key, field, default in STORE_SETTING_DEFAULTS}

    for setting in AppSetting.objects.filter(category__in=['orders', 'general']):
        entry = lookup.get((setting.category, setting.short_key))
        if entry is None:
            continue
        field, default = entry
        # Empty values (None, 0, '') fall back to the default
        settings_data[field] = setting.setting_value or default

    return settings_data


def get_store_settings():
    """
    Public store settings with defaults.

    Never raises: when the settings table cannot be read the defaults are
    returned so checkout keeps working.
    """
    try:
        return _load_store_settings()
    except DatabaseError as e:
        logger.warning(f"Error loading store settings, using defaults: {e}")
        return default_store_settings()


@cached_query('admin-settings', cache_ttl=STORE_SETTINGS_CACHE_TTL)
def get_grouped_settings():
    """Every setting grouped by category and keyed by its short key"""
    grouped = {}
    for setting in AppSetting.objects.all():
        grouped.setdefault(setting.category, {})[setting.short_key] = setting.setting_value
    return grouped


def infer_setting_type(value):
    # bool is a subclass of int, so it has to be tested first
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return 'string'


def save_settings(category, data):
    """
    Upsert every `<category>.<key>` row in `data`.

    Returns:
        list of saved AppSetting instances
    """
    saved = []
    with transaction.atomic():
        for key, value in data.items():
            setting, _ = AppSetting.objects.update_or_create(
                setting_key=f"{category}.{key}",
                defaults={
                    'setting_value': value,
                    'setting_type': infer_setting_type(value),
                    'category': category,
                },
            )
            saved.append(setting)
    logger.info(f"Saved {len(saved)} settings in category '{category}'")
    return saved
