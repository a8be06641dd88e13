"""
Product/nutrient relationship maintenance

The product row is the primary record. Relationship rows are secondary:
failures here are logged and never undo the product save.
"""
import logging

from django.db import DatabaseError, transaction

from botanic.core.cache_utils import invalidate_queries

from .models import Nutrient, ProductNutrient

logger = logging.getLogger(__name__)


def unique_ids(nutrient_ids):
    """Drop duplicate IDs, keeping first-seen order"""
    seen = []
    for nutrient_id in nutrient_ids or []:
        if nutrient_id not in seen:
            seen.append(nutrient_id)
    return seen


def link_nutrients(product, nutrient_ids):
    """
    Insert one join row per nutrient ID.

    The batch is all-or-nothing: if any ID does not reference an existing
    nutrient nothing is inserted.

    Returns:
        number of rows inserted
    """
    ids = unique_ids(nutrient_ids)
    if not ids:
        return 0

    known = set(Nutrient.objects.filter(id__in=ids).values_list('id', flat=True))
    missing = [nutrient_id for nutrient_id in ids if nutrient_id not in known]
    if missing:
        logger.error(f"Error linking nutrients to product {product.pk}: unknown nutrient ids {missing}")
        return 0

    try:
        with transaction.atomic():
            ProductNutrient.objects.bulk_create([
                ProductNutrient(product=product, nutrient_id=nutrient_id) for nutrient_id in ids
            ])
    except DatabaseError as e:
        logger.error(f"Error linking nutrients to product {product.pk}: {e}")
        return 0

    # bulk_create sends no post_save signals
    invalidate_queries('product-nutrients', 'products')
    return len(ids)


def replace_nutrients(product, nutrient_ids):
    """Delete every join row of the product, then link the new set"""
    try:
        with transaction.atomic():
            ProductNutrient.objects.filter(product=product).delete()
    except DatabaseError as e:
        logger.error(f"Error removing nutrient links of product {product.pk}: {e}")

    return link_nutrients(product, nutrient_ids)
