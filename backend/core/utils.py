"""Shared helpers for slugs, image lists, ordered sub-items and API errors"""
import logging
import re

from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r'[^a-z0-9\s-]')
_WHITESPACE_RE = re.compile(r'\s+')
_DASH_RUN_RE = re.compile(r'-+')


def generate_slug(text):
    """
    Build a URL slug from a display name.

    Lowercases and trims the text, drops everything except ASCII letters,
    digits, whitespace and hyphens, turns whitespace runs into single
    hyphens and strips hyphens from both ends.

    Examples:
    - "Rotary Vane Pump" -> "rotary-vane-pump"
    - "  Busch R5 -- Series! " -> "busch-r5-series"
    """
    if not text:
        return ''
    slug = str(text).lower().strip()
    slug = _SLUG_STRIP_RE.sub('', slug)
    slug = _WHITESPACE_RE.sub('-', slug)
    slug = _DASH_RUN_RE.sub('-', slug)
    return slug.strip('-')


def set_primary_image(images, index):
    """
    Toggle the primary flag of ``images[index]`` and clear it everywhere else.

    Toggling an image that is already primary leaves the list with no
    primary image. Returns a new list; the input is not modified.
    """
    if index < 0 or index >= len(images):
        raise IndexError(f"Image index {index} out of range")
    becomes_primary = not images[index].get('is_primary', False)
    updated = []
    for position, image in enumerate(images):
        image = dict(image)
        image['is_primary'] = becomes_primary if position == index else False
        updated.append(image)
    return updated


def count_primary_images(images):
    return sum(1 for image in images or [] if isinstance(image, dict) and image.get('is_primary'))


def move_item(items, from_index, to_index):
    """Move one element of an ordered list, returning a new list"""
    items = list(items)
    if not 0 <= from_index < len(items) or not 0 <= to_index < len(items):
        raise IndexError("Move index out of range")
    item = items.pop(from_index)
    items.insert(to_index, item)
    return items


def renumber_display_order(items):
    """Assign ``display_order`` 0..n-1 following list position"""
    renumbered = []
    for position, item in enumerate(items):
        item = dict(item)
        item['display_order'] = position
        renumbered.append(item)
    return renumbered


def clean_string_list(values):
    """Trim entries and drop the blank ones left behind by form rows"""
    return [str(value).strip() for value in values or [] if str(value).strip()]


def find_name_conflict(model, field, value, exclude_pk=None):
    """Case-insensitive lookup of another row already using ``value``"""
    if not value:
        return None
    queryset = model.objects.filter(**{f'{field}__iexact': value.strip()})
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    return queryset.first()


def usage_message(item_name, product_names):
    return (
        f'Cannot remove "{item_name}" because it\'s being used by '
        f'{len(product_names)} product(s): {", ".join(product_names)}'
    )


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, details=None):
    """JSON error body used by every endpoint: ``{"error": ..., "details": ...}``"""
    body = {'error': message}
    if details is not None:
        body['details'] = details
    return Response(body, status=status_code)


def validation_error_response(errors):
    return error_response('Validation failed', status.HTTP_400_BAD_REQUEST, details=errors)


def query_flag(request, name):
    """Read a ``?name=true`` style boolean query parameter"""
    return str(request.query_params.get(name, '')).lower() in ('1', 'true', 'yes')


def query_int(request, name, default, minimum=1, maximum=None):
    try:
        value = int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        value = default
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def parse_id(value):
    """Integer primary key from a query or body value, ``None`` when it is not one"""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None
