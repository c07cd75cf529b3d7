"""
Test suite for the catalog module
Tests: brand and pump type admin CRUD, nested sub-items, usage tracking,
product admin and public listings, seeding commands
"""
from io import StringIO
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory
from backend.catalog.models import Brand, ProductLine, PumpType, SubPumpType
from backend.catalog.usage import sync_all_usage, build_brand_usage


class BrandAdminAPITests(TestCase):
    """Test /api/admin/brands/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()

    def test_create_brand_with_product_lines(self):
        data = {
            'name': 'Busch',
            'country': 'Germany',
            'year_established': 1963,
            'product_lines': [
                {'name': 'R5 Series', 'description': 'Rotary vane'},
                {'name': ''},
                {'name': 'Mink Claw'},
            ],
        }
        response = self.client.post('/api/admin/brands/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'busch')
        self.assertEqual([line['name'] for line in response.data['product_lines']], ['R5 Series', 'Mink Claw'])
        self.assertEqual([line['display_order'] for line in response.data['product_lines']], [0, 1])

        brand = Brand.objects.get(slug='busch')
        self.assertEqual(brand.product_usage, [])
        self.assertEqual(
            brand.product_line_usage,
            {str(line.id): [] for line in brand.product_lines.all()},
        )

    def test_create_brand_without_name(self):
        response = self.client.post('/api/admin/brands/', {'name': '  '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Brand name is required')

    def test_create_brand_name_conflict_is_case_insensitive(self):
        TestDataFactory.create_brand(name='Busch')
        response = self.client.post('/api/admin/brands/', {'name': 'BUSCH', 'slug': 'busch-2'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Brand with this name already exists')

    def test_create_brand_slug_conflict(self):
        TestDataFactory.create_brand(name='Busch', slug='busch-vacuum')
        response = self.client.post(
            '/api/admin/brands/', {'name': 'Busch Vietnam', 'slug': 'busch-vacuum'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Brand with this slug already exists')

    def test_create_brand_invalid_year(self):
        response = self.client.post(
            '/api/admin/brands/', {'name': 'Old Pumps', 'year_established': 1700}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('year_established', response.data['details'])

    def test_list_brands_includes_usage(self):
        brand = TestDataFactory.create_brand(name='Edwards', product_lines=['RV Series'])
        line = brand.product_lines.get()
        TestDataFactory.create_product(name='RV12', product_line=line)

        response = self.client.get('/api/admin/brands/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['product_usage'], ['RV12'])
        self.assertEqual(response.data[0]['product_line_usage'], {str(line.id): ['RV12']})
        self.assertEqual(response.data[0]['product_count'], 1)

    def test_update_requires_id(self):
        response = self.client.put('/api/admin/brands/', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Brand ID is required')

    def test_update_unknown_brand(self):
        response = self.client.put('/api/admin/brands/?id=9999', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Brand not found')

    def test_update_keeps_lines_when_not_sent(self):
        brand = TestDataFactory.create_brand(name='Busch', slug='busch', product_lines=['R5 Series'])
        response = self.client.put(
            f'/api/admin/brands/?id={brand.id}',
            {'name': 'Busch', 'slug': 'busch', 'country': 'Germany'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(brand.product_lines.count(), 1)

    def test_update_rejects_removing_line_in_use(self):
        brand = TestDataFactory.create_brand(name='Busch', slug='busch', product_lines=['R5 Series', 'Mink Claw'])
        r5 = brand.product_lines.get(name='R5 Series')
        mink = brand.product_lines.get(name='Mink Claw')
        TestDataFactory.create_product(name='RA 0100', product_line=r5)

        response = self.client.put(
            f'/api/admin/brands/?id={brand.id}',
            {'name': 'Busch', 'slug': 'busch', 'product_lines': [{'id': mink.id, 'name': 'Mink Claw'}]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data['error'],
            'Cannot remove "R5 Series" because it\'s being used by 1 product(s): RA 0100',
        )
        self.assertTrue(ProductLine.objects.filter(pk=r5.pk).exists())

    def test_update_removes_unused_line_and_reorders(self):
        brand = TestDataFactory.create_brand(name='Busch', slug='busch', product_lines=['R5 Series', 'Mink Claw'])
        r5 = brand.product_lines.get(name='R5 Series')
        mink = brand.product_lines.get(name='Mink Claw')
        TestDataFactory.create_product(name='RA 0100', product_line=r5)

        response = self.client.put(
            f'/api/admin/brands/?id={brand.id}',
            {
                'name': 'Busch',
                'slug': 'busch',
                'product_lines': [
                    {'name': 'Cobra'},
                    {'id': r5.id, 'name': 'R5 Series', 'description': 'Oil lubricated'},
                ],
            },
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(ProductLine.objects.filter(pk=mink.pk).exists())
        r5.refresh_from_db()
        self.assertEqual(r5.display_order, 1)
        self.assertEqual(r5.description, 'Oil lubricated')

        brand.refresh_from_db()
        cobra = brand.product_lines.get(name='Cobra')
        self.assertEqual(brand.product_line_usage, {str(r5.id): ['RA 0100'], str(cobra.id): []})

    def test_update_name_conflict(self):
        TestDataFactory.create_brand(name='Edwards')
        brand = TestDataFactory.create_brand(name='Busch', slug='busch')
        response = self.client.put(
            f'/api/admin/brands/?id={brand.id}', {'name': 'edwards', 'slug': 'busch'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_brand_in_use(self):
        brand = TestDataFactory.create_brand(name='Busch')
        TestDataFactory.create_product(name='RA 0100', brand=brand)
        response = self.client.delete(f'/api/admin/brands/?id={brand.id}')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Cannot delete brand. It is used by 1 product(s): RA 0100')
        self.assertTrue(Brand.objects.filter(pk=brand.pk).exists())

    def test_delete_brand(self):
        brand = TestDataFactory.create_brand(name='Busch', product_lines=['R5 Series'])
        response = self.client.delete(f'/api/admin/brands/?id={brand.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_brand']['name'], 'Busch')
        self.assertFalse(Brand.objects.filter(pk=brand.pk).exists())
        self.assertFalse(ProductLine.objects.exists())

    def test_invalid_id(self):
        response = self.client.put('/api/admin/brands/?id=abc', {'name': 'Busch'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid brand ID')

    def test_move_product_line(self):
        brand = TestDataFactory.create_brand(name='Busch', product_lines=['R5 Series', 'Mink Claw', 'Cobra'])
        response = self.client.post(
            f'/api/admin/brands/{brand.id}/product-lines/move/', {'from': 0, 'to': 2}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [line['name'] for line in response.data['product_lines']],
            ['Mink Claw', 'Cobra', 'R5 Series'],
        )
        self.assertEqual(brand.product_lines.get(name='R5 Series').display_order, 2)

    def test_move_product_line_requires_positions(self):
        brand = TestDataFactory.create_brand(name='Busch', product_lines=['R5 Series'])
        response = self.client.post(f'/api/admin/brands/{brand.id}/product-lines/move/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class PumpTypeAdminAPITests(TestCase):
    """Test /api/admin/pump-types/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()

    def test_create_pump_type_with_sub_types(self):
        data = {
            'pump_type': 'Rotary Vane Pump',
            'sub_pump_types': [{'name': 'Single Stage'}, {'name': 'Two Stage', 'slug': 'two-stage-rv'}],
        }
        response = self.client.post('/api/admin/pump-types/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'rotary-vane-pump')
        self.assertEqual(
            [sub['slug'] for sub in response.data['sub_pump_types']],
            ['single-stage', 'two-stage-rv'],
        )
        pump_type = PumpType.objects.get()
        self.assertEqual(len(pump_type.sub_pump_type_usage), 2)

    def test_duplicate_sub_type_slugs_rejected(self):
        data = {
            'pump_type': 'Rotary Vane Pump',
            'sub_pump_types': [{'name': 'Single Stage'}, {'name': 'Single  Stage!'}],
        }
        response = self.client.post('/api/admin/pump-types/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('sub_pump_types', response.data['details'])
        self.assertFalse(PumpType.objects.exists())

    def test_same_sub_slug_allowed_under_different_pump_types(self):
        TestDataFactory.create_pump_type(pump_type='Dry Screw Pump', sub_pump_types=['Standard Series'])
        response = self.client.post(
            '/api/admin/pump-types/',
            {'pump_type': 'Claw Pump', 'sub_pump_types': [{'name': 'Standard Series'}]},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(SubPumpType.objects.filter(slug='standard-series').count(), 2)

    def test_name_conflict(self):
        TestDataFactory.create_pump_type(pump_type='Rotary Vane Pump')
        response = self.client.post(
            '/api/admin/pump-types/', {'pump_type': 'rotary vane pump', 'slug': 'rv'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Pump type with this name already exists')

    def test_update_rejects_removing_sub_type_in_use(self):
        pump_type = TestDataFactory.create_pump_type(
            pump_type='Turbomolecular Pump', slug='turbo', sub_pump_types=['Magnetic Bearing', 'Hybrid Bearing'],
        )
        magnetic = pump_type.sub_pump_types.get(name='Magnetic Bearing')
        TestDataFactory.create_product(name='HiPace 80', sub_pump_type=magnetic, category='turbomolecular')

        response = self.client.put(
            f'/api/admin/pump-types/?id={pump_type.id}',
            {'pump_type': 'Turbomolecular Pump', 'slug': 'turbo', 'sub_pump_types': []},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Magnetic Bearing', response.data['error'])
        self.assertEqual(pump_type.sub_pump_types.count(), 2)

    def test_update_renames_sub_type_slug(self):
        pump_type = TestDataFactory.create_pump_type(pump_type='Rotary Vane Pump', slug='rv', sub_pump_types=['Single Stage'])
        sub = pump_type.sub_pump_types.get()
        response = self.client.put(
            f'/api/admin/pump-types/?id={pump_type.id}',
            {
                'pump_type': 'Rotary Vane Pump',
                'slug': 'rv',
                'sub_pump_types': [{'id': sub.id, 'name': 'Single Stage', 'slug': 'single'}],
            },
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sub.refresh_from_db()
        self.assertEqual(sub.slug, 'single')

    def test_new_sub_type_takes_slug_of_renamed_one(self):
        pump_type = TestDataFactory.create_pump_type(pump_type='Rotary Vane Pump', slug='rv', sub_pump_types=['Single Stage'])
        sub = pump_type.sub_pump_types.get()
        response = self.client.put(
            f'/api/admin/pump-types/?id={pump_type.id}',
            {
                'pump_type': 'Rotary Vane Pump',
                'slug': 'rv',
                'sub_pump_types': [
                    {'name': 'New', 'slug': 'single-stage'},
                    {'id': sub.id, 'name': 'Single Stage', 'slug': 'single-stage-v2'},
                ],
            },
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sub.refresh_from_db()
        self.assertEqual(sub.slug, 'single-stage-v2')
        self.assertEqual(sub.display_order, 1)
        self.assertEqual(
            [item['slug'] for item in response.data['sub_pump_types']],
            ['single-stage', 'single-stage-v2'],
        )

    def test_swap_sub_type_slugs(self):
        pump_type = TestDataFactory.create_pump_type(
            pump_type='Rotary Vane Pump', slug='rv', sub_pump_types=['Single Stage', 'Two Stage'],
        )
        single = pump_type.sub_pump_types.get(slug='single-stage')
        two = pump_type.sub_pump_types.get(slug='two-stage')
        response = self.client.put(
            f'/api/admin/pump-types/?id={pump_type.id}',
            {
                'pump_type': 'Rotary Vane Pump',
                'slug': 'rv',
                'sub_pump_types': [
                    {'id': single.id, 'name': 'Single Stage', 'slug': 'two-stage'},
                    {'id': two.id, 'name': 'Two Stage', 'slug': 'single-stage'},
                ],
            },
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        single.refresh_from_db()
        two.refresh_from_db()
        self.assertEqual(single.slug, 'two-stage')
        self.assertEqual(two.slug, 'single-stage')

    def test_invalid_id(self):
        response = self.client.delete('/api/admin/pump-types/?id=abc')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid pump type ID')

    def test_move_sub_pump_type(self):
        pump_type = TestDataFactory.create_pump_type(
            pump_type='Rotary Vane Pump', sub_pump_types=['Single Stage', 'Two Stage', 'Oil Free'],
        )
        response = self.client.post(
            f'/api/admin/pump-types/{pump_type.id}/sub-pump-types/move/', {'from': 2, 'to': 0}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [sub['name'] for sub in response.data['sub_pump_types']],
            ['Oil Free', 'Single Stage', 'Two Stage'],
        )
        self.assertEqual(
            list(pump_type.sub_pump_types.values_list('display_order', flat=True)), [0, 1, 2],
        )

    def test_move_sub_pump_type_out_of_range(self):
        pump_type = TestDataFactory.create_pump_type(sub_pump_types=['Single Stage'])
        response = self.client.post(
            f'/api/admin/pump-types/{pump_type.id}/sub-pump-types/move/', {'from': 0, 'to': 3}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_pump_type_in_use(self):
        pump_type = TestDataFactory.create_pump_type()
        TestDataFactory.create_product(name='RA 0100', pump_type=pump_type)
        response = self.client.delete(f'/api/admin/pump-types/?id={pump_type.id}')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_pump_type(self):
        pump_type = TestDataFactory.create_pump_type(pump_type='Scroll Pump')
        response = self.client.delete(f'/api/admin/pump-types/?id={pump_type.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_pump_type']['pump_type'], 'Scroll Pump')


class UsageTrackingTests(TestCase):
    """Usage maps follow product writes and are rebuilt by the sync"""

    def setUp(self):
        self.busch = TestDataFactory.create_brand(name='Busch', product_lines=['R5 Series', 'Mink Claw'])
        self.edwards = TestDataFactory.create_brand(name='Edwards', product_lines=['RV Series'])
        self.rotary = TestDataFactory.create_pump_type(pump_type='Rotary Vane Pump', sub_pump_types=['Single Stage'])
        self.r5 = self.busch.product_lines.get(name='R5 Series')
        self.single = self.rotary.sub_pump_types.get()

    def test_create_updates_maps(self):
        TestDataFactory.create_product(name='RA 0100', product_line=self.r5, sub_pump_type=self.single)
        self.busch.refresh_from_db()
        self.rotary.refresh_from_db()
        self.assertEqual(self.busch.product_usage, ['RA 0100'])
        self.assertEqual(self.busch.product_line_usage[str(self.r5.id)], ['RA 0100'])
        self.assertEqual(self.rotary.product_usage, ['RA 0100'])
        self.assertEqual(self.rotary.sub_pump_type_usage[str(self.single.id)], ['RA 0100'])

    def test_moving_product_updates_both_brands(self):
        product = TestDataFactory.create_product(name='RA 0100', product_line=self.r5)
        product.brand = self.edwards
        product.product_line = self.edwards.product_lines.get()
        product.save()

        self.busch.refresh_from_db()
        self.edwards.refresh_from_db()
        self.assertEqual(self.busch.product_usage, [])
        self.assertEqual(self.busch.product_line_usage[str(self.r5.id)], [])
        self.assertEqual(self.edwards.product_usage, ['RA 0100'])

    def test_delete_updates_maps(self):
        product = TestDataFactory.create_product(name='RA 0100', product_line=self.r5)
        product.delete()
        self.busch.refresh_from_db()
        self.assertEqual(self.busch.product_usage, [])

    def test_sync_rebuilds_maps(self):
        TestDataFactory.create_product(name='RA 0100', product_line=self.r5, sub_pump_type=self.single)
        TestDataFactory.create_product(name='RA 0160', brand=self.busch)
        self.busch.refresh_from_db()
        expected = (self.busch.product_usage, self.busch.product_line_usage)
        self.assertEqual(expected, build_brand_usage(self.busch))

        Brand.objects.update(product_usage=[], product_line_usage={})
        PumpType.objects.update(product_usage=[], sub_pump_type_usage={})
        result = sync_all_usage()

        self.assertTrue(result['success'])
        self.assertEqual(result['brands'], 2)
        self.assertEqual(result['pump_types'], 1)
        self.busch.refresh_from_db()
        self.rotary.refresh_from_db()
        self.assertEqual((self.busch.product_usage, self.busch.product_line_usage), expected)
        self.assertEqual(self.rotary.product_usage, ['RA 0100'])

    def test_sync_endpoint(self):
        TestDataFactory.create_product(name='RA 0100', product_line=self.r5)
        Brand.objects.update(product_usage=[])
        response = APIClient().post('/api/admin/sync-usage/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.busch.refresh_from_db()
        self.assertEqual(self.busch.product_usage, ['RA 0100'])

    def test_sync_command(self):
        Brand.objects.update(product_line_usage={})
        out = StringIO()
        call_command('sync_usage', stdout=out)
        self.assertIn('Synced usage', out.getvalue())
        self.busch.refresh_from_db()
        self.assertEqual(len(self.busch.product_line_usage), 2)


class ProductAdminAPITests(TestCase):
    """Test /api/admin/products/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()
        self.brand = TestDataFactory.create_brand(name='Busch', product_lines=['R5 Series'])
        self.line = self.brand.product_lines.get()
        self.pump_type = TestDataFactory.create_pump_type(pump_type='Rotary Vane Pump', sub_pump_types=['Single Stage'])
        self.sub = self.pump_type.sub_pump_types.get()

    def product_data(self, **overrides):
        data = {
            'name': 'RA 0100 F',
            'description': 'Oil-lubricated rotary vane pump',
            'category': 'rotary-vane',
            'product_line': self.line.id,
            'sub_pump_type': self.sub.id,
            'specifications': {'flow_rate': '100 m3/h', 'power': '2.2 kW', 'colour': 'blue'},
            'features': ['Quiet', '', '  '],
            'applications': ['Packaging'],
            'images': [{'url': '/images/ra0100.jpg', 'is_primary': True}],
            'price': '1500.00',
        }
        data.update(overrides)
        return data

    def test_create_product(self):
        response = self.client.post('/api/admin/products/', self.product_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'ra-0100-f')
        self.assertEqual(response.data['brand'], self.brand.id)
        self.assertEqual(response.data['pump_type'], self.pump_type.id)
        self.assertEqual(response.data['brand_name'], 'Busch')
        self.assertEqual(response.data['features'], ['Quiet'])
        self.assertEqual(response.data['specifications'], {'flow_rate': '100 m3/h', 'power': '2.2 kW'})

    def test_create_product_missing_fields(self):
        response = self.client.post('/api/admin/products/', {'name': 'RA 0100'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Missing required fields: description, category')

    def test_create_product_duplicate_slug(self):
        TestDataFactory.create_product(name='Existing', slug='ra-0100-f')
        response = self.client.post('/api/admin/products/', self.product_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('slug', response.data['details'])

    def test_create_product_line_from_other_brand(self):
        other = TestDataFactory.create_brand(name='Edwards')
        response = self.client.post(
            '/api/admin/products/', self.product_data(brand=other.id), format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('product_line', response.data['details'])

    def test_create_product_two_primary_images(self):
        images = [{'url': '/a.jpg', 'is_primary': True}, {'url': '/b.jpg', 'is_primary': True}]
        response = self.client.post('/api/admin/products/', self.product_data(images=images), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('images', response.data['details'])

    def test_update_product(self):
        product = TestDataFactory.create_product(name='RA 0100', product_line=self.line)
        response = self.client.put(
            f'/api/admin/products/{product.id}/',
            self.product_data(name='RA 0100', slug=product.slug, in_stock=False),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertFalse(product.in_stock)
        self.assertEqual(product.sub_pump_type, self.sub)

    def test_delete_product(self):
        product = TestDataFactory.create_product(name='RA 0100', product_line=self.line)
        response = self.client.delete(f'/api/admin/products/{product.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Product deleted successfully')
        self.brand.refresh_from_db()
        self.assertEqual(self.brand.product_usage, [])

    def test_admin_list_by_name(self):
        TestDataFactory.create_product(name='Zebra')
        TestDataFactory.create_product(name='Alpha')
        TestDataFactory.create_product(name='Mink')
        response = self.client.get('/api/admin/products/')
        self.assertEqual([item['name'] for item in response.data], ['Alpha', 'Mink', 'Zebra'])

    def test_toggle_primary_image(self):
        product = TestDataFactory.create_product(
            name='RA 0100',
            images=[{'url': '/a.jpg', 'is_primary': True}, {'url': '/b.jpg', 'is_primary': False}],
        )
        url = f'/api/admin/products/{product.id}/primary-image/'
        response = self.client.post(url, {'index': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([image['is_primary'] for image in response.data['images']], [False, True])

        response = self.client.post(url, {'index': 1}, format='json')
        product.refresh_from_db()
        self.assertEqual([image['is_primary'] for image in product.images], [False, False])

    def test_toggle_primary_image_bad_index(self):
        product = TestDataFactory.create_product(name='RA 0100', images=[{'url': '/a.jpg'}])
        url = f'/api/admin/products/{product.id}/primary-image/'
        self.assertEqual(self.client.post(url, {'index': 4}, format='json').status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.client.post(url, {}, format='json').status_code, status.HTTP_400_BAD_REQUEST)


class PublicCatalogAPITests(TestCase):
    """Test public catalog endpoints"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()
        self.brand = TestDataFactory.create_brand(name='Pfeiffer Vacuum', slug='pfeiffer-vacuum', product_lines=['HiPace Series'])
        self.turbo = TestDataFactory.create_pump_type(pump_type='Turbomolecular Pump', sub_pump_types=['Magnetic Bearing'])
        TestDataFactory.create_product(
            name='HiPace 80',
            category='turbomolecular',
            product_line=self.brand.product_lines.get(),
            sub_pump_type=self.turbo.sub_pump_types.get(),
            images=[{'url': '/a.jpg', 'is_primary': False}, {'url': '/b.jpg', 'is_primary': True}],
        )
        TestDataFactory.create_product(name='SV 65', category='rotary-vane')

    def test_product_list(self):
        response = self.client.get('/api/products/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['products']), 2)

    def test_product_list_by_category(self):
        response = self.client.get('/api/products/?category=turbomolecular')
        products = response.data['products']
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0]['brand_name'], 'Pfeiffer Vacuum')
        self.assertEqual(products[0]['pump_type_name'], 'Turbomolecular Pump')
        self.assertEqual(products[0]['primary_image'], '/b.jpg')

    def test_product_list_invalid_category(self):
        response = self.client.get('/api/products/?category=nuclear')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_product_list_reflects_new_products(self):
        self.client.get('/api/products/')
        TestDataFactory.create_product(name='Cobra NC')
        response = self.client.get('/api/products/')
        self.assertEqual(len(response.data['products']), 3)

    def test_product_list_sorted_by_name(self):
        TestDataFactory.create_product(name='Aardvark Scroll', category='scroll')
        names = [product['name'] for product in self.client.get('/api/products/').data['products']]
        self.assertEqual(names, sorted(names))
        self.assertEqual(names[0], 'Aardvark Scroll')

    def test_product_by_slug(self):
        response = self.client.get('/api/products/hipace-80/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['product_line_name'], 'HiPace Series')

    def test_brand_by_slug(self):
        response = self.client.get('/api/brands/pfeiffer-vacuum/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['product_usage'], ['HiPace 80'])

    def test_brand_by_slug_not_found(self):
        response = self.client.get('/api/brands/unknown/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Brand not found')

    def test_pump_type_list(self):
        response = self.client.get('/api/pump-types/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['pump_types']), 1)
        self.assertEqual(response.data['pump_types'][0]['sub_pump_types'][0]['name'], 'Magnetic Bearing')


class SeedCatalogCommandTests(TestCase):

    def test_seed_catalog(self):
        call_command('seed_catalog', stdout=StringIO())
        self.assertEqual(Brand.objects.count(), 3)
        self.assertEqual(PumpType.objects.count(), 3)
        busch = Brand.objects.get(slug='busch-vacuum')
        self.assertEqual(busch.product_lines.count(), 2)
        self.assertEqual(len(busch.product_line_usage), 2)

    def test_seed_catalog_is_idempotent(self):
        call_command('seed_catalog', stdout=StringIO())
        call_command('seed_catalog', stdout=StringIO())
        self.assertEqual(Brand.objects.count(), 3)
        self.assertEqual(SubPumpType.objects.count(), 5)

    def test_clear_skipped_while_products_exist(self):
        call_command('seed_catalog', stdout=StringIO())
        TestDataFactory.create_product(brand=Brand.objects.get(slug='busch-vacuum'))
        out = StringIO()
        call_command('seed_catalog', '--clear', stdout=out)
        self.assertIn('skipping --clear', out.getvalue())
        self.assertEqual(Brand.objects.count(), 3)
