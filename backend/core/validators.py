"""
Field validators shared by models, admin forms and API serializers
"""
import re

from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils import timezone

from backend.core.utils import count_primary_images

SLUG_PATTERN = r'^[a-z0-9-]+$'

# http(s) URL, or an absolute or relative path ending in an image extension
IMAGE_PATH_RE = re.compile(
    r'^(https?://.+|/?[\w\-./]+\.(jpg|jpeg|png|gif|webp|svg))$',
    re.IGNORECASE,
)
WEBSITE_RE = re.compile(r'^https?://.+\..+$')

validate_slug = RegexValidator(
    regex=SLUG_PATTERN,
    message='Slug can only contain lowercase letters, numbers, and hyphens',
    code='invalid_slug',
)


def validate_image_path(value):
    if value and not IMAGE_PATH_RE.match(value):
        raise ValidationError(
            'Image must be a valid URL or a path to a jpg, jpeg, png, gif, webp or svg file',
            code='invalid_image',
        )


def validate_website(value):
    if value and not WEBSITE_RE.match(value):
        raise ValidationError('Website must be a valid URL', code='invalid_website')


def validate_year_established(value):
    if value is None:
        return
    current_year = timezone.now().year
    if value < 1800 or value > current_year:
        raise ValidationError(
            f'Year established must be between 1800 and {current_year}',
            code='invalid_year',
        )


def validate_single_primary(images):
    """Reject an image list that flags more than one image as primary"""
    if count_primary_images(images) > 1:
        raise ValidationError('Only one image can be marked as primary', code='multiple_primary')
