"""
Keep brand and pump type usage maps in step with product writes
"""
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
import logging

from .models import Product
from .usage import refresh_usage_for

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Product)
def remember_previous_references(sender, instance, **kwargs):
    """Stash the brand/pump type a product pointed at before this save"""
    instance._previous_refs = (None, None)
    if instance.pk:
        previous = Product.objects.filter(pk=instance.pk).values_list('brand_id', 'pump_type_id').first()
        if previous:
            instance._previous_refs = previous


@receiver(post_save, sender=Product)
def update_usage_on_save(sender, instance, **kwargs):
    old_brand_id, old_pump_type_id = getattr(instance, '_previous_refs', (None, None))
    refresh_usage_for(
        brand_ids=[old_brand_id, instance.brand_id],
        pump_type_ids=[old_pump_type_id, instance.pump_type_id],
    )
    logger.debug(f"Refreshed usage after saving product {instance.pk}")


@receiver(post_delete, sender=Product)
def update_usage_on_delete(sender, instance, **kwargs):
    refresh_usage_for(brand_ids=[instance.brand_id], pump_type_ids=[instance.pump_type_id])
    logger.debug(f"Refreshed usage after deleting product {instance.pk}")
