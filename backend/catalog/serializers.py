from rest_framework import serializers

from backend.core.exceptions import ResourceInUse
from backend.core.serializers import (
    SlugFromNameMixin, DocumentListField, ImageListField, StringListField,
    TextBlockField, ImagePathField,
)
from backend.core.utils import generate_slug, renumber_display_order, usage_message
from .models import Brand, ProductLine, PumpType, SubPumpType, Product
from .usage import build_brand_usage, build_pump_type_usage, refresh_brand_usage, refresh_pump_type_usage

PRODUCT_SPEC_KEYS = ['flow_rate', 'vacuum_level', 'power', 'inlet_size', 'weight']


def clean_sub_items(items_data):
    """Drop rows without a name and number the rest in list order"""
    items = [
        dict(item) for item in items_data or []
        if isinstance(item, dict) and str(item.get('name', '')).strip()
    ]
    return renumber_display_order(items)


def validate_sub_items(serializer_class, items, field_name):
    serializer = serializer_class(data=items, many=True)
    if not serializer.is_valid():
        raise serializers.ValidationError({field_name: serializer.errors})
    return [dict(item) for item in serializer.validated_data]


def check_sub_item_removals(existing_items, incoming_items, usage_map):
    """Refuse to drop a sub-item that products still reference"""
    incoming_ids = {item.get('id') for item in incoming_items if item.get('id')}
    for child in existing_items:
        if child.id in incoming_ids:
            continue
        used_by = usage_map.get(str(child.id)) or []
        if used_by:
            raise ResourceInUse(usage_message(child.name, used_by), status_code=400)


def save_sub_items(parent, manager, model, parent_field, items):
    """
    Replace the children of ``parent`` with ``items``.

    Items carrying the id of an existing child update it in place, the
    rest are created; children missing from ``items`` are deleted.
    """
    existing = {child.id: child for child in manager.all()}
    keep_ids = set()
    for item in items:
        item = dict(item)
        item_id = item.pop('id', None)
        child = existing.get(item_id)
        if child is not None:
            for attr, value in item.items():
                setattr(child, attr, value)
            child.save()
            keep_ids.add(child.id)
        else:
            child = model.objects.create(**{parent_field: parent}, **item)
            keep_ids.add(child.id)
    for child_id, child in existing.items():
        if child_id not in keep_ids:
            child.delete()


class ProductLineSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(required=False)
    documents = DocumentListField(required=False)

    class Meta:
        model = ProductLine
        fields = ['id', 'name', 'description', 'documents', 'is_active', 'display_order']


class BrandSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    """
    Brand with nested product lines.

    Product lines are passed by the view through ``context['product_lines_data']``;
    ``None`` leaves the existing lines untouched.
    """
    product_lines = ProductLineSerializer(many=True, read_only=True)
    logo = ImagePathField()
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Brand
        fields = [
            'id', 'name', 'slug', 'logo', 'country', 'year_established', 'revenue', 'description',
            'product_lines', 'product_usage', 'product_line_usage', 'product_count',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['product_usage', 'product_line_usage', 'created_at', 'updated_at']

    def get_product_count(self, obj):
        return len(obj.product_usage or [])

    def validate_name(self, value):
        return value.strip()

    def validate(self, attrs):
        lines_data = self.context.get('product_lines_data')
        self._product_lines = None
        if lines_data is not None:
            items = clean_sub_items(lines_data)
            self._product_lines = validate_sub_items(ProductLineSerializer, items, 'product_lines')
            if self.instance is not None:
                _, line_usage = build_brand_usage(self.instance)
                check_sub_item_removals(self.instance.product_lines.all(), self._product_lines, line_usage)
        return attrs

    def create(self, validated_data):
        brand = super().create(validated_data)
        if self._product_lines:
            save_sub_items(brand, brand.product_lines, ProductLine, 'brand', self._product_lines)
        return refresh_brand_usage(brand)

    def update(self, instance, validated_data):
        brand = super().update(instance, validated_data)
        if self._product_lines is not None:
            save_sub_items(brand, brand.product_lines, ProductLine, 'brand', self._product_lines)
        return refresh_brand_usage(brand)


class SubPumpTypeSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(required=False)
    image = ImagePathField()

    class Meta:
        model = SubPumpType
        fields = ['id', 'name', 'slug', 'image', 'description', 'is_active', 'display_order']


class PumpTypeSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    """Pump type with nested sub pump types passed through ``context['sub_pump_types_data']``"""
    slug_source_field = 'pump_type'

    sub_pump_types = SubPumpTypeSerializer(many=True, read_only=True)
    image = ImagePathField()
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = PumpType
        fields = [
            'id', 'pump_type', 'slug', 'description', 'image', 'sub_pump_types',
            'product_usage', 'sub_pump_type_usage', 'product_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['product_usage', 'sub_pump_type_usage', 'created_at', 'updated_at']

    def get_product_count(self, obj):
        return len(obj.product_usage or [])

    def validate_pump_type(self, value):
        return value.strip()

    def validate(self, attrs):
        subs_data = self.context.get('sub_pump_types_data')
        self._sub_pump_types = None
        if subs_data is not None:
            items = clean_sub_items(subs_data)
            for item in items:
                item['slug'] = str(item.get('slug') or '').strip().lower() or generate_slug(item['name'])
            slugs = [item['slug'] for item in items]
            duplicates = sorted({slug for slug in slugs if slugs.count(slug) > 1})
            if duplicates:
                raise serializers.ValidationError({
                    'sub_pump_types': [f'Duplicate sub pump type slug: {", ".join(duplicates)}']
                })
            self._sub_pump_types = validate_sub_items(SubPumpTypeSerializer, items, 'sub_pump_types')
            if self.instance is not None:
                _, sub_usage = build_pump_type_usage(self.instance)
                check_sub_item_removals(self.instance.sub_pump_types.all(), self._sub_pump_types, sub_usage)
        return attrs

    def _save_sub_pump_types(self, pump_type):
        # Slugs are unique per pump type: free every slug that is about to move
        # before any row takes it, so swaps and add-then-rename edits save cleanly
        incoming_slugs = {item['id']: item['slug'] for item in self._sub_pump_types if item.get('id')}
        pump_type.sub_pump_types.exclude(id__in=incoming_slugs).filter(
            slug__in=[item['slug'] for item in self._sub_pump_types]
        ).delete()
        for sub in pump_type.sub_pump_types.filter(id__in=incoming_slugs):
            if sub.slug != incoming_slugs[sub.id]:
                # underscores never pass the slug pattern, so this cannot clash
                SubPumpType.objects.filter(pk=sub.pk).update(slug=f'_moving_{sub.pk}')
        save_sub_items(pump_type, pump_type.sub_pump_types, SubPumpType, 'pump_type', self._sub_pump_types)

    def create(self, validated_data):
        pump_type = super().create(validated_data)
        if self._sub_pump_types:
            self._save_sub_pump_types(pump_type)
        return refresh_pump_type_usage(pump_type)

    def update(self, instance, validated_data):
        pump_type = super().update(instance, validated_data)
        if self._sub_pump_types is not None:
            self._save_sub_pump_types(pump_type)
        return refresh_pump_type_usage(pump_type)


class ProductSerializer(SlugFromNameMixin, serializers.ModelSerializer):
    specifications = TextBlockField(PRODUCT_SPEC_KEYS)
    features = StringListField(required=False)
    applications = StringListField(required=False)
    images = ImageListField(required=False)
    brand_name = serializers.SerializerMethodField()
    product_line_name = serializers.SerializerMethodField()
    pump_type_name = serializers.SerializerMethodField()
    sub_pump_type_name = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'category',
            'brand', 'brand_name', 'product_line', 'product_line_name',
            'pump_type', 'pump_type_name', 'sub_pump_type', 'sub_pump_type_name',
            'specifications', 'features', 'applications', 'images', 'price', 'in_stock',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def get_brand_name(self, obj):
        return obj.brand.name if obj.brand else None

    def get_product_line_name(self, obj):
        return obj.product_line.name if obj.product_line else None

    def get_pump_type_name(self, obj):
        return obj.pump_type.pump_type if obj.pump_type else None

    def get_sub_pump_type_name(self, obj):
        return obj.sub_pump_type.name if obj.sub_pump_type else None

    def validate(self, attrs):
        def current(field):
            if field in attrs:
                return attrs[field]
            return getattr(self.instance, field, None) if self.instance else None

        brand = current('brand')
        product_line = current('product_line')
        if product_line is not None:
            if brand is None:
                attrs['brand'] = brand = product_line.brand
            elif product_line.brand_id != brand.id:
                raise serializers.ValidationError({
                    'product_line': ['Product line does not belong to the selected brand']
                })

        pump_type = current('pump_type')
        sub_pump_type = current('sub_pump_type')
        if sub_pump_type is not None:
            if pump_type is None:
                attrs['pump_type'] = pump_type = sub_pump_type.pump_type
            elif sub_pump_type.pump_type_id != pump_type.id:
                raise serializers.ValidationError({
                    'sub_pump_type': ['Sub pump type does not belong to the selected pump type']
                })
        return attrs


class ProductListSerializer(ProductSerializer):
    """Public listing payload with the primary image resolved"""
    primary_image = serializers.CharField(read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ['primary_image']
