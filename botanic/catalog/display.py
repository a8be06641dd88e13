"""
Storefront display shape for products
"""

FALLBACK_IMAGE_URL = 'https://images.unsplash.com/photo-1556228720-195a672e8a03?w=400&h=400&fit=crop'
FALLBACK_EMOJI = '🌿'


def _as_number(value):
    return float(value) if value is not None else None


def product_to_display(product):
    """
    Convert a stored product into the camelCase dict the storefront renders.

    Missing optional fields are filled in: the fallback image for `realImage`,
    the short description for `longDescription`, a leaf emoji for `image`,
    empty lists for ingredients/benefits and "N/A" for size.
    """
    return {
        'id': product.id,
        'name': product.name,
        'category': product.category,
        'price': _as_number(product.price),
        'originalPrice': _as_number(product.original_price),
        'image': product.emoji or FALLBACK_EMOJI,
        'realImage': product.image_url or FALLBACK_IMAGE_URL,
        'rating': _as_number(product.rating),
        'reviews': product.reviews_count,
        'badge': product.badge,
        'description': product.description,
        'longDescription': product.long_description or product.description,
        'ingredients': product.ingredients or [],
        'benefits': product.benefits or [],
        'size': product.size or 'N/A',
        'inStock': product.in_stock,
        'sku': product.sku,
    }
