"""
Cache invalidation signals
Automatically invalidate cached public lists when data changes
"""
from django.db.models.signals import post_save, post_delete, m2m_changed
from django.dispatch import receiver
import logging
import threading
from contextlib import contextmanager

from .cache_utils import (
    invalidate_cache_pattern,
    PRODUCTS_LIST, PUMP_TYPES_LIST, CUSTOMERS_LIST, INDUSTRIES_LIST,
    BUSINESS_TYPES_LIST, PROJECTS_LIST, APPLICATIONS_LIST,
)

logger = logging.getLogger(__name__)

# Thread-local storage to track signal suspension
_thread_locals = threading.local()

# Model name -> cached lists that embed its data
MODEL_CACHE_PATTERNS = {
    'Product': [PRODUCTS_LIST],
    'Brand': [PRODUCTS_LIST],
    'ProductLine': [PRODUCTS_LIST],
    'PumpType': [PRODUCTS_LIST, PUMP_TYPES_LIST],
    'SubPumpType': [PRODUCTS_LIST, PUMP_TYPES_LIST],
    'Customer': [CUSTOMERS_LIST, INDUSTRIES_LIST],
    'BusinessType': [BUSINESS_TYPES_LIST, CUSTOMERS_LIST],
    'Industry': [INDUSTRIES_LIST, CUSTOMERS_LIST, APPLICATIONS_LIST],
    'Project': [PROJECTS_LIST],
    'Application': [APPLICATIONS_LIST, INDUSTRIES_LIST],
}


@contextmanager
def suspend_cache_signals():
    """
    Context manager to temporarily suspend cache invalidation signals.
    Useful for bulk operations such as seeding or usage sync.
    Remember to manually invalidate cache after the block!
    """
    try:
        _thread_locals.suspended = True
        yield
    finally:
        _thread_locals.suspended = False


def is_suspended():
    return getattr(_thread_locals, 'suspended', False)


def invalidate_model_caches(model_name):
    """Manually invalidate every cached list built from ``model_name`` rows"""
    for pattern in MODEL_CACHE_PATTERNS.get(model_name, []):
        invalidate_cache_pattern(pattern)


def invalidate_all_list_caches():
    patterns = {pattern for patterns in MODEL_CACHE_PATTERNS.values() for pattern in patterns}
    for pattern in sorted(patterns):
        invalidate_cache_pattern(pattern)


# --- Signal Handlers ---

@receiver([post_save, post_delete])
def invalidate_list_caches(sender, instance, **kwargs):
    """Invalidate cached lists when a catalog, party or portfolio record changes"""
    if is_suspended():
        return

    model_name = sender.__name__
    if model_name not in MODEL_CACHE_PATTERNS:
        return
    if sender._meta.app_label not in ('catalog', 'parties', 'portfolio'):
        return

    try:
        invalidate_model_caches(model_name)
    except Exception as e:
        logger.warning(f"Error in invalidate_list_caches signal: {e}")


@receiver(m2m_changed)
def invalidate_relation_caches(sender, instance, action, **kwargs):
    """Customer industries and application industries live in join tables"""
    if is_suspended() or action not in ('post_add', 'post_remove', 'post_clear'):
        return

    model_name = instance.__class__.__name__
    if model_name in ('Customer', 'Application', 'Industry'):
        try:
            invalidate_model_caches(model_name)
        except Exception as e:
            logger.warning(f"Error in invalidate_relation_caches signal: {e}")
