"""
Store data export

Dumps the main business tables to a JSON document for backups and
spreadsheets. A table that cannot be read is logged and left out; the
rest of the export still goes through.
"""
import json
import logging

from django.apps import apps
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError
from django.utils import timezone

logger = logging.getLogger(__name__)

# Export name -> model label
EXPORT_TABLES = (
    ('products', 'catalog.Product'),
    ('orders', 'orders.Order'),
    ('inventory_items', 'inventory.InventoryItem'),
)


def export_store_data(tables=EXPORT_TABLES):
    """Collect every row of each export table as plain dicts"""
    exported = {}
    for table_name, model_label in tables:
        try:
            model = apps.get_model(model_label)
            exported[table_name] = list(model.objects.order_by('pk').values())
        except (DatabaseError, LookupError) as e:
            logger.error(f"Error exporting {table_name}: {e}")
            continue
    return exported


def export_filename(date=None):
    date = date or timezone.localdate()
    return f"botanic-care-export-{date.isoformat()}.json"


def dump_export(data):
    """Serialize an export to pretty-printed JSON (dates, decimals and UUIDs included)"""
    return json.dumps(data, cls=DjangoJSONEncoder, indent=2, ensure_ascii=False)
