"""
Product usage tracking for brands and pump types

Each brand stores the names of the products that use it (``product_usage``)
and a map of product line id -> product names (``product_line_usage``);
pump types do the same for their sub pump types. The maps are refreshed by
product signals and can be rebuilt from scratch with ``sync_all_usage``.
Every sub-item has an entry, so an unused line maps to an empty list.
"""
import logging

from django.db import transaction

from backend.core.cache_signals import suspend_cache_signals, invalidate_model_caches
from .models import Brand, PumpType, Product

logger = logging.getLogger(__name__)


def build_brand_usage(brand):
    """Compute ``(product_usage, product_line_usage)`` for one brand from the products table"""
    line_usage = {str(line_id): [] for line_id in brand.product_lines.values_list('id', flat=True)}
    product_usage = []
    for name, line_id in Product.objects.filter(brand=brand).order_by('name').values_list('name', 'product_line_id'):
        product_usage.append(name)
        if line_id is not None:
            line_usage.setdefault(str(line_id), []).append(name)
    return product_usage, line_usage


def build_pump_type_usage(pump_type):
    sub_usage = {str(sub_id): [] for sub_id in pump_type.sub_pump_types.values_list('id', flat=True)}
    product_usage = []
    for name, sub_id in Product.objects.filter(pump_type=pump_type).order_by('name').values_list('name', 'sub_pump_type_id'):
        product_usage.append(name)
        if sub_id is not None:
            sub_usage.setdefault(str(sub_id), []).append(name)
    return product_usage, sub_usage


def refresh_brand_usage(brand):
    product_usage, line_usage = build_brand_usage(brand)
    if brand.product_usage != product_usage or brand.product_line_usage != line_usage:
        # update() keeps updated_at untouched and skips signals
        Brand.objects.filter(pk=brand.pk).update(product_usage=product_usage, product_line_usage=line_usage)
        brand.product_usage = product_usage
        brand.product_line_usage = line_usage
    return brand


def refresh_pump_type_usage(pump_type):
    product_usage, sub_usage = build_pump_type_usage(pump_type)
    if pump_type.product_usage != product_usage or pump_type.sub_pump_type_usage != sub_usage:
        PumpType.objects.filter(pk=pump_type.pk).update(product_usage=product_usage, sub_pump_type_usage=sub_usage)
        pump_type.product_usage = product_usage
        pump_type.sub_pump_type_usage = sub_usage
    return pump_type


def refresh_usage_for(brand_ids=(), pump_type_ids=()):
    """Refresh the usage maps of the given brands and pump types, ignoring None ids"""
    brand_ids = {pk for pk in brand_ids if pk is not None}
    pump_type_ids = {pk for pk in pump_type_ids if pk is not None}
    for brand in Brand.objects.filter(pk__in=brand_ids):
        refresh_brand_usage(brand)
    for pump_type in PumpType.objects.filter(pk__in=pump_type_ids):
        refresh_pump_type_usage(pump_type)


def sync_all_usage():
    """
    Rebuild the usage maps of every brand and pump type.

    Returns a dict with ``success``, ``message`` and per-collection counts.
    """
    try:
        with transaction.atomic(), suspend_cache_signals():
            brands = list(Brand.objects.all())
            for brand in brands:
                refresh_brand_usage(brand)
            pump_types = list(PumpType.objects.all())
            for pump_type in pump_types:
                refresh_pump_type_usage(pump_type)
    except Exception as e:
        logger.error(f"Usage sync failed: {str(e)}", exc_info=True)
        return {'success': False, 'message': f'Usage sync failed: {str(e)}'}

    invalidate_model_caches('Brand')
    invalidate_model_caches('PumpType')
    message = f'Synced usage for {len(brands)} brand(s) and {len(pump_types)} pump type(s)'
    logger.info(message)
    return {
        'success': True,
        'message': message,
        'brands': len(brands),
        'pump_types': len(pump_types),
    }
