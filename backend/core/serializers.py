from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .utils import clean_string_list, generate_slug
from .validators import (
    validate_image_path, validate_single_primary, validate_website,
)


def run_django_validator(validator, value):
    """Call a Django field validator and re-raise its error the DRF way"""
    try:
        validator(value)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.messages)
    return value


class ImageSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=500)
    alt = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    caption = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    is_primary = serializers.BooleanField(required=False, default=False)

    def validate_url(self, value):
        return run_django_validator(validate_image_path, value.strip())


class ImageListField(serializers.ListField):
    """List of image objects with at most one flagged primary"""
    child = ImageSerializer()

    def to_internal_value(self, data):
        data = [item for item in data or [] if isinstance(item, dict) and str(item.get('url') or '').strip()]
        images = [dict(image) for image in super().to_internal_value(data)]
        run_django_validator(validate_single_primary, images)
        return images


class LinkSerializer(serializers.Serializer):
    """Name plus optional URL, used for project/product/application references"""
    name = serializers.CharField(max_length=200)
    url = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class LinkListField(serializers.ListField):
    child = LinkSerializer()

    def to_internal_value(self, data):
        # Rows without a name are unfinished form entries
        data = [item for item in data or [] if isinstance(item, dict) and str(item.get('name', '')).strip()]
        return [dict(item) for item in super().to_internal_value(data)]


class DocumentSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    url = serializers.CharField(max_length=500)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class DocumentListField(serializers.ListField):
    child = DocumentSerializer()

    def to_internal_value(self, data):
        data = [
            item for item in data or []
            if isinstance(item, dict) and str(item.get('title', '')).strip() and str(item.get('url', '')).strip()
        ]
        return [dict(item) for item in super().to_internal_value(data)]


class StringListField(serializers.ListField):
    """List of strings with blank entries dropped"""
    child = serializers.CharField(allow_blank=True)

    def to_internal_value(self, data):
        return clean_string_list(super().to_internal_value(data))


class WebsiteField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('max_length', 200)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return run_django_validator(validate_website, value)


class ImagePathField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('max_length', 500)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return run_django_validator(validate_image_path, value)


class SlugFromNameMixin:
    """
    Fill a blank slug from the name field before validation.

    Serializers set ``slug_source_field`` to the attribute the slug is
    derived from; the ``slug`` field itself keeps its model validators
    (pattern and uniqueness).
    """
    slug_source_field = 'name'

    def to_internal_value(self, data):
        if hasattr(data, 'copy'):
            data = data.copy()
        slug = str(data.get('slug') or '').strip().lower()
        if not slug and not self.partial:
            slug = generate_slug(data.get(self.slug_source_field, ''))
        if slug or 'slug' in data:
            data['slug'] = slug
        return super().to_internal_value(data)



class TextBlockField(serializers.DictField):
    """Fixed set of optional text attributes stored as one JSON object"""

    def __init__(self, keys, **kwargs):
        self.keys = tuple(keys)
        kwargs.setdefault('child', serializers.CharField(allow_blank=True, max_length=500))
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, dict):
            data = {key: value for key, value in data.items() if key in self.keys and value is not None}
        values = super().to_internal_value(data)
        return {key: value.strip() for key, value in values.items() if value.strip()}


def validate_block(serializer_class, value):
    """Validate a JSON object against a plain serializer and return the cleaned dict"""
    if value in (None, ''):
        return {}
    serializer = serializer_class(data=value)
    if not serializer.is_valid():
        raise serializers.ValidationError(serializer.errors)
    return {key: val for key, val in serializer.validated_data.items() if val not in ('', [], None)}
