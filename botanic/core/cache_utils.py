"""
Query result caching keyed by named query keys.

Every cached read belongs to a query key (e.g. "products", "admin-costs").
Each query key carries a generation token that is part of every cache entry
stored under it; invalidating the key swaps the token, so all entries cached
under the old token stop being reachable and the next read refetches.
Works the same on Redis and on the local-memory backend.
"""
from django.core.cache import cache
from functools import wraps
import hashlib
import logging
import uuid

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
PRODUCTS_CACHE_TTL = 300  # 5 minutes
PRODUCT_NUTRIENTS_CACHE_TTL = 300  # 5 minutes
NUTRIENTS_CACHE_TTL = 3600  # 1 hour, taxonomy rarely changes
ADMIN_LIST_CACHE_TTL = 120  # 2 minutes
STORE_SETTINGS_CACHE_TTL = 300  # 5 minutes
USER_ORDERS_CACHE_TTL = 60  # 1 minute, customers watch status changes
ANALYTICS_CACHE_TTL = 10  # analytics go stale quickly

GENERATION_KEY_PREFIX = 'querygen:'


def get_generation(query_key):
    """Current generation token for a query key (created on first use)"""
    generation_key = f"{GENERATION_KEY_PREFIX}{query_key}"
    token = cache.get(generation_key)
    if token is None:
        token = uuid.uuid4().hex
        # add() keeps a token another request may have set in between
        if not cache.add(generation_key, token, None):
            token = cache.get(generation_key) or token
    return token


def make_cache_key(query_key, *args, **kwargs):
    """Generate a unique cache key from the query key, its generation and the arguments"""
    key_data = f"{query_key}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{query_key}:{get_generation(query_key)}:{key_hash}"


def cached_query(query_key, cache_ttl=60):
    """
    Decorator to cache a read under a query key

    Usage:
        @cached_query('admin-costs', cache_ttl=120)
        def list_costs(filters):
            return data
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = make_cache_key(query_key, *args, **kwargs)

            cached_data = cache.get(cache_key)
            if cached_data is not None:
                logger.debug(f"Cache HIT for {query_key}: {cache_key}")
                return cached_data

            logger.debug(f"Cache MISS for {query_key}: {cache_key}")
            result = func(*args, **kwargs)
            cache.set(cache_key, result, cache_ttl)
            return result
        return wrapper
    return decorator


def invalidate_queries(*query_keys):
    """Mark every cached result under the given query keys as stale"""
    for query_key in query_keys:
        try:
            cache.set(f"{GENERATION_KEY_PREFIX}{query_key}", uuid.uuid4().hex, None)
        except Exception as e:
            logger.warning(f"Could not invalidate query key {query_key}: {str(e)}")
    if query_keys:
        logger.info(f"Invalidated cached queries: {', '.join(query_keys)}")
