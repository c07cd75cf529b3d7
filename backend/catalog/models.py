from django.core.exceptions import ValidationError
from django.db import models

from backend.core.validators import (
    validate_slug, validate_image_path, validate_year_established, validate_single_primary,
)


class Brand(models.Model):
    """Pump manufacturers and their product lines"""
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True, validators=[validate_slug])
    logo = models.CharField(max_length=500, blank=True, validators=[validate_image_path])
    country = models.CharField(max_length=100, blank=True)
    year_established = models.PositiveIntegerField(null=True, blank=True, validators=[validate_year_established])
    revenue = models.CharField(max_length=200, blank=True)  # not every brand discloses it
    description = models.TextField(blank=True)
    # Usage maps maintained by product signals, see catalog.usage
    product_usage = models.JSONField(default=list, blank=True)
    product_line_usage = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'brands'
        ordering = ['name']


class ProductLine(models.Model):
    """Product line/series of a brand (e.g. Busch R5 Series)"""
    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name='product_lines')
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    # [{title, url, image_url, description}]
    documents = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)

    def __str__(self):
        return f"{self.brand.name} - {self.name}"

    class Meta:
        db_table = 'product_lines'
        ordering = ['display_order', 'id']


class PumpType(models.Model):
    """Pump technology (rotary vane, dry screw, turbomolecular...)"""
    pump_type = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True, validators=[validate_slug])
    description = models.TextField(blank=True)
    image = models.CharField(max_length=500, blank=True, validators=[validate_image_path])
    product_usage = models.JSONField(default=list, blank=True)
    sub_pump_type_usage = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.pump_type

    class Meta:
        db_table = 'pump_types'
        ordering = ['pump_type']


class SubPumpType(models.Model):
    """Variant of a pump type (e.g. single stage rotary vane)"""
    pump_type = models.ForeignKey(PumpType, on_delete=models.CASCADE, related_name='sub_pump_types')
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, validators=[validate_slug])
    image = models.CharField(max_length=500, blank=True, validators=[validate_image_path])
    description = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)

    def __str__(self):
        return f"{self.pump_type.pump_type} - {self.name}"

    class Meta:
        db_table = 'sub_pump_types'
        ordering = ['display_order', 'id']
        unique_together = [['pump_type', 'slug']]


class Product(models.Model):
    """Catalog product"""
    CATEGORY_CHOICES = [
        ('rotary-vane', 'Rotary Vane'),
        ('scroll', 'Scroll'),
        ('diaphragm', 'Diaphragm'),
        ('turbomolecular', 'Turbomolecular'),
        ('other', 'Other'),
    ]

    name = models.CharField(max_length=200, db_index=True)
    slug = models.SlugField(max_length=200, unique=True, validators=[validate_slug])
    description = models.TextField()
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)
    brand = models.ForeignKey(Brand, on_delete=models.PROTECT, null=True, blank=True, related_name='products')
    product_line = models.ForeignKey(ProductLine, on_delete=models.PROTECT, null=True, blank=True, related_name='products')
    pump_type = models.ForeignKey(PumpType, on_delete=models.PROTECT, null=True, blank=True, related_name='products')
    sub_pump_type = models.ForeignKey(SubPumpType, on_delete=models.PROTECT, null=True, blank=True, related_name='products')
    # {flow_rate, vacuum_level, power, inlet_size, weight}
    specifications = models.JSONField(default=dict, blank=True)
    features = models.JSONField(default=list, blank=True)
    applications = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True, validators=[validate_single_primary])
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    in_stock = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def clean(self):
        errors = {}
        if self.product_line_id and self.product_line.brand_id != self.brand_id:
            errors['product_line'] = 'Product line does not belong to the selected brand'
        if self.sub_pump_type_id and self.sub_pump_type.pump_type_id != self.pump_type_id:
            errors['sub_pump_type'] = 'Sub pump type does not belong to the selected pump type'
        if errors:
            raise ValidationError(errors)

    @property
    def primary_image(self):
        for image in self.images or []:
            if image.get('is_primary'):
                return image.get('url')
        return self.images[0].get('url') if self.images else None

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
