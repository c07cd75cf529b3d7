"""
Caching helpers for public list endpoints
Uses Redis (django-redis) when configured, the default cache otherwise
"""
from django.conf import settings
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

# Cache key prefixes, one per public listing
PRODUCTS_LIST = "products_list"
PUMP_TYPES_LIST = "pump_types_list"
CUSTOMERS_LIST = "customers_list"
INDUSTRIES_LIST = "industries_list"
BUSINESS_TYPES_LIST = "business_types_list"
PROJECTS_LIST = "projects_list"
APPLICATIONS_LIST = "applications_list"


def list_cache_ttl():
    return getattr(settings, 'PUBLIC_LIST_CACHE_TTL', 120)


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def get_cached_list(prefix, params):
    """
    Look up a cached list response
    Returns tuple: (cached_data, cache_key)
    """
    cache_key = make_cache_key(prefix, **{k: str(v) for k, v in params.items()})
    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for {prefix}: {cache_key}")
    return cached_data, cache_key


def cache_list(cache_key, data, ttl=None):
    cache.set(cache_key, data, ttl if ttl is not None else list_cache_ttl())
    logger.debug(f"Cached list: {cache_key}")


def invalidate_cache_pattern(pattern):
    """
    Invalidate all cache keys matching a pattern
    django-redis scans for the keys; other backends are cleared entirely
    """
    try:
        if hasattr(cache, 'delete_pattern'):
            deleted = cache.delete_pattern(f"*{pattern}*")
            logger.info(f"Cache invalidation for pattern: {pattern} - Deleted {deleted} keys")
        else:
            cache.clear()
            logger.info(f"Cache invalidation for pattern: {pattern} - Cleared local cache")
    except Exception as e:
        logger.warning(f"Could not invalidate cache pattern {pattern}: {str(e)}")
