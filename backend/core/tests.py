"""
Tests for shared helpers: slugs, image lists, validators, error bodies and caching
"""
from io import StringIO
from django.core.cache import cache
from django.core.management import call_command
from django.core.exceptions import ValidationError
from django.test import TestCase, SimpleTestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.cache_utils import make_cache_key, get_cached_list, cache_list, PRODUCTS_LIST
from backend.core.serializers import ImageListField, LinkListField, TextBlockField
from backend.core.test_utils import TestDataFactory
from backend.core.utils import (
    generate_slug, set_primary_image, count_primary_images, move_item,
    renumber_display_order, clean_string_list, find_name_conflict, usage_message, parse_id,
)
from backend.core.validators import (
    validate_slug, validate_image_path, validate_website, validate_year_established,
    validate_single_primary,
)
from backend.catalog.models import Brand
import re


class SlugTests(TestCase):
    """Test slug generation and uniqueness helpers"""

    def test_generate_slug_basic(self):
        self.assertEqual(generate_slug('Rotary Vane Pump'), 'rotary-vane-pump')

    def test_generate_slug_strips_symbols_and_dashes(self):
        self.assertEqual(generate_slug('  Busch R5 -- Series! '), 'busch-r5-series')

    def test_generate_slug_empty(self):
        self.assertEqual(generate_slug(''), '')
        self.assertEqual(generate_slug(None), '')

    def test_generated_slugs_match_pattern(self):
        """Every ASCII name turns into a valid slug"""
        for name in ['Edwards Vacuum', 'HiPace 80 (Turbo)', 'Dry/Screw & Claw', 'A  B   C']:
            slug = generate_slug(name)
            self.assertRegex(slug, re.compile(r'^[a-z0-9-]+$'))
            validate_slug(slug)

    def test_find_name_conflict_is_case_insensitive(self):
        brand = TestDataFactory.create_brand(name='Busch')
        self.assertEqual(find_name_conflict(Brand, 'name', 'BUSCH'), brand)
        self.assertIsNone(find_name_conflict(Brand, 'name', 'busch', exclude_pk=brand.pk))
        self.assertIsNone(find_name_conflict(Brand, 'name', ''))


class ListHelperTests(SimpleTestCase):
    """Test image list and ordered sub-item helpers"""

    def setUp(self):
        self.images = [
            {'url': '/img/a.jpg', 'is_primary': True},
            {'url': '/img/b.jpg', 'is_primary': False},
            {'url': '/img/c.jpg'},
        ]

    def test_set_primary_moves_flag(self):
        updated = set_primary_image(self.images, 2)
        self.assertEqual([image['is_primary'] for image in updated], [False, False, True])
        self.assertEqual(count_primary_images(updated), 1)

    def test_set_primary_toggle_clears(self):
        updated = set_primary_image(self.images, 0)
        self.assertEqual(count_primary_images(updated), 0)

    def test_set_primary_does_not_mutate_input(self):
        set_primary_image(self.images, 1)
        self.assertTrue(self.images[0]['is_primary'])

    def test_set_primary_out_of_range(self):
        with self.assertRaises(IndexError):
            set_primary_image(self.images, 5)

    def test_move_item(self):
        self.assertEqual(move_item(['a', 'b', 'c'], 0, 2), ['b', 'c', 'a'])
        with self.assertRaises(IndexError):
            move_item(['a'], 0, 3)

    def test_renumber_display_order(self):
        items = renumber_display_order([{'name': 'x', 'display_order': 7}, {'name': 'y'}])
        self.assertEqual([item['display_order'] for item in items], [0, 1])

    def test_clean_string_list(self):
        self.assertEqual(clean_string_list([' Oil free ', '', '   ', 'Quiet']), ['Oil free', 'Quiet'])

    def test_parse_id(self):
        self.assertEqual(parse_id('42'), 42)
        self.assertEqual(parse_id(7), 7)
        self.assertIsNone(parse_id('abc'))
        self.assertIsNone(parse_id(None))

    def test_usage_message(self):
        self.assertEqual(
            usage_message('R5 Series', ['RA 0100', 'RA 0160']),
            'Cannot remove "R5 Series" because it\'s being used by 2 product(s): RA 0100, RA 0160',
        )


class ValidatorTests(SimpleTestCase):
    """Test field validators"""

    def test_slug_validator(self):
        validate_slug('rotary-vane-2')
        with self.assertRaises(ValidationError):
            validate_slug('Rotary Vane')

    def test_image_path_validator(self):
        for value in ['https://cdn.example.com/logo', '/images/pump.PNG', 'uploads/a-b_c.webp', '']:
            validate_image_path(value)
        for value in ['logo', '/images/pump.bmp', 'ftp://example.com/a.jpg']:
            with self.assertRaises(ValidationError):
                validate_image_path(value)

    def test_website_validator(self):
        validate_website('https://busch.de')
        validate_website('')
        with self.assertRaises(ValidationError):
            validate_website('busch.de')

    def test_year_established(self):
        validate_year_established(1963)
        validate_year_established(None)
        with self.assertRaises(ValidationError):
            validate_year_established(1799)
        with self.assertRaises(ValidationError):
            validate_year_established(3000)

    def test_single_primary(self):
        validate_single_primary([{'url': '/a.jpg', 'is_primary': True}, {'url': '/b.jpg'}])
        with self.assertRaises(ValidationError):
            validate_single_primary([
                {'url': '/a.jpg', 'is_primary': True},
                {'url': '/b.jpg', 'is_primary': True},
            ])


class SharedFieldTests(SimpleTestCase):
    """Test the JSON sub-document serializer fields"""

    def test_image_list_drops_rows_without_url(self):
        field = ImageListField()
        images = field.to_internal_value([{'url': '/a.jpg'}, {'url': ''}, {'alt': 'x'}])
        self.assertEqual(len(images), 1)
        self.assertFalse(images[0]['is_primary'])

    def test_image_list_rejects_two_primaries(self):
        from rest_framework.exceptions import ValidationError as DRFValidationError
        field = ImageListField()
        with self.assertRaises(DRFValidationError):
            field.to_internal_value([
                {'url': '/a.jpg', 'is_primary': True},
                {'url': '/b.jpg', 'is_primary': True},
            ])

    def test_link_list_drops_unnamed_rows(self):
        links = LinkListField().to_internal_value([{'name': 'RA 0100'}, {'name': '  ', 'url': '/x'}])
        self.assertEqual(links, [{'name': 'RA 0100', 'url': ''}])

    def test_text_block_keeps_known_keys(self):
        field = TextBlockField(['flow_rate', 'power'])
        block = field.to_internal_value({'flow_rate': ' 100 m3/h ', 'power': '', 'colour': 'red'})
        self.assertEqual(block, {'flow_rate': '100 m3/h'})


class CacheHelperTests(TestCase):
    """Test list caching and signal-driven invalidation"""

    def setUp(self):
        cache.clear()

    def test_cache_key_is_stable(self):
        self.assertEqual(
            make_cache_key(PRODUCTS_LIST, category='scroll', brand='1'),
            make_cache_key(PRODUCTS_LIST, brand='1', category='scroll'),
        )
        self.assertTrue(make_cache_key(PRODUCTS_LIST).startswith(f'{PRODUCTS_LIST}:'))

    def test_cache_roundtrip(self):
        data, key = get_cached_list(PRODUCTS_LIST, {'category': 'scroll'})
        self.assertIsNone(data)
        cache_list(key, {'products': []})
        data, _ = get_cached_list(PRODUCTS_LIST, {'category': 'scroll'})
        self.assertEqual(data, {'products': []})

    def test_product_save_invalidates_list(self):
        _, key = get_cached_list(PRODUCTS_LIST, {})
        cache_list(key, {'products': []})
        TestDataFactory.create_product()
        data, _ = get_cached_list(PRODUCTS_LIST, {})
        self.assertIsNone(data)


class ErrorFormatTests(TestCase):
    """Error bodies always carry an ``error`` key"""

    def setUp(self):
        self.client = APIClient()

    def test_not_found_message(self):
        response = self.client.get('/api/products/missing-product/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Product not found')

    def test_method_not_allowed(self):
        response = self.client.delete('/api/products/')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertIn('error', response.data)


class HealthCheckTests(TestCase):

    def test_health_check(self):
        TestDataFactory.create_product()
        response = APIClient().get('/api/health/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'ok')
        self.assertEqual(response.data['database'], 'connected')
        self.assertEqual(response.data['collections']['products'], 1)


class CheckCacheCommandTests(TestCase):

    def test_check_cache(self):
        out = StringIO()
        call_command('check_cache', stdout=out)
        self.assertIn('Pattern invalidation: OK', out.getvalue())
