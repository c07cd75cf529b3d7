"""
Test suite for the parties module
Tests: industries, business types, customers and the contact form
"""
from io import StringIO
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory
from backend.parties.models import Industry, BusinessType, Customer, Inquiry


class IndustryModelTests(TestCase):
    """Test Industry stats helpers"""

    def test_update_customer_count(self):
        industry = TestDataFactory.create_industry()
        TestDataFactory.create_customer(industries=[industry])
        TestDataFactory.create_customer(industries=[industry])
        industry.update_customer_count()
        industry.refresh_from_db()
        self.assertEqual(industry.stats['customer_count'], 2)
        self.assertIn('last_updated', industry.stats)

    def test_update_application_count(self):
        industry = TestDataFactory.create_industry()
        TestDataFactory.create_application(industries=[industry])
        industry.update_application_count()
        self.assertEqual(industry.stats['application_count'], 1)


class IndustryAPITests(TestCase):
    """Test /api/industries/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()

    def test_create_industry_generates_slug(self):
        data = {
            'name': 'Food Processing',
            'category': 'processing',
            'keywords': ['Packaging', '', 'VACUUM'],
            'characteristics': {'typical_vacuum_requirements': ['1 mbar', ''], 'common_applications': []},
        }
        response = self.client.post('/api/industries/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'food-processing')
        self.assertEqual(response.data['keywords'], ['packaging', 'vacuum'])
        self.assertEqual(response.data['characteristics'], {'typical_vacuum_requirements': ['1 mbar']})

    def test_create_industry_requires_name(self):
        response = self.client.post('/api/industries/', {'category': 'energy'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Industry name is required')

    def test_create_industry_conflict(self):
        TestDataFactory.create_industry(name='Semiconductor')
        response = self.client.post('/api/industries/', {'name': 'semiconductor'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Industry name or slug already exists')

    def test_list_industries_by_category(self):
        TestDataFactory.create_industry(name='Pharma', category='healthcare')
        TestDataFactory.create_industry(name='Solar', category='energy')
        response = self.client.get('/api/industries/?category=energy')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['name'] for item in response.data], ['Solar'])

        response = self.client.get('/api/industries/?category=all')
        self.assertEqual(len(response.data), 2)

    def test_list_industries_with_customers_and_stats(self):
        industry = TestDataFactory.create_industry(name='Pharma')
        TestDataFactory.create_customer(name='Imexpharm', industries=[industry])
        TestDataFactory.create_application(name='Freeze Drying', industries=[industry])

        response = self.client.get('/api/industries/?includeCustomers=true&includeApplications=true&updateStats=true')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        item = response.data[0]
        self.assertEqual([customer['name'] for customer in item['customers']], ['Imexpharm'])
        self.assertEqual([app['name'] for app in item['applications']], ['Freeze Drying'])
        self.assertEqual(item['stats']['customer_count'], 1)
        self.assertEqual(item['stats']['application_count'], 1)

    def test_get_industry_detail(self):
        industry = TestDataFactory.create_industry(name='Pharma')
        TestDataFactory.create_customer(industries=[industry])
        response = self.client.get(f'/api/industries/{industry.id}/?updateStats=true&includeCustomers=true')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['stats']['customer_count'], 1)
        self.assertEqual(len(response.data['customers']), 1)

    def test_get_unknown_industry(self):
        response = self.client.get('/api/industries/9999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Industry not found')

    def test_update_industry(self):
        industry = TestDataFactory.create_industry(name='Pharma', slug='pharma')
        response = self.client.put(
            f'/api/industries/{industry.id}/',
            {'name': 'Pharmaceutical', 'slug': 'pharma', 'category': 'healthcare'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        industry.refresh_from_db()
        self.assertEqual(industry.name, 'Pharmaceutical')

    def test_update_industry_conflict(self):
        TestDataFactory.create_industry(name='Energy')
        industry = TestDataFactory.create_industry(name='Pharma', slug='pharma')
        response = self.client.put(
            f'/api/industries/{industry.id}/', {'name': 'ENERGY', 'slug': 'pharma'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_industry_in_use(self):
        industry = TestDataFactory.create_industry()
        TestDataFactory.create_customer(industries=[industry])
        response = self.client.delete(f'/api/industries/{industry.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cannot delete industry')
        self.assertIn('1 customer(s)', response.data['message'])

    def test_delete_industry(self):
        industry = TestDataFactory.create_industry()
        response = self.client.delete(f'/api/industries/{industry.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Industry.objects.filter(pk=industry.pk).exists())

    def test_industry_customers_pagination(self):
        industry = TestDataFactory.create_industry()
        factory_type = TestDataFactory.create_business_type(name='Factory')
        for name in ['Alpha', 'Bravo', 'Charlie']:
            TestDataFactory.create_customer(name=name, business_type=factory_type, industries=[industry])
        TestDataFactory.create_customer(name='Delta', industries=[industry])

        response = self.client.get(f'/api/industries/{industry.id}/customers/?limit=2&page=2')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['pagination'], {'total': 4, 'page': 2, 'limit': 2, 'pages': 2})
        self.assertEqual([c['name'] for c in response.data['customers']], ['Charlie', 'Delta'])

        response = self.client.get(f'/api/industries/{industry.id}/customers/?businessType={factory_type.id}')
        self.assertEqual(response.data['pagination'], {'total': 3, 'page': 1, 'limit': 3, 'pages': 1})

    def test_industry_customers_invalid_business_type(self):
        industry = TestDataFactory.create_industry()
        response = self.client.get(f'/api/industries/{industry.id}/customers/?businessType=abc')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid business type ID')

    def test_admin_industry_options(self):
        TestDataFactory.create_industry(name='Pharma', slug='pharma')
        response = self.client.get('/api/admin/industries/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['industries'][0]['slug'], 'pharma')
        self.assertEqual(set(response.data['industries'][0]), {'id', 'name', 'slug'})


class BusinessTypeAPITests(TestCase):
    """Test /api/admin/business-types/ and /api/business-types/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()

    def test_create_business_type(self):
        response = self.client.post('/api/admin/business-types/', {'name': '  Machine Builder '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Machine Builder')
        self.assertEqual(response.data['customer_count'], 0)

    def test_create_business_type_conflict(self):
        TestDataFactory.create_business_type(name='Factory')
        response = self.client.post('/api/admin/business-types/', {'name': 'FACTORY'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Business type with this name already exists')

    def test_list_with_customer_counts(self):
        factory_type = TestDataFactory.create_business_type(name='Factory')
        TestDataFactory.create_business_type(name='Agent')
        TestDataFactory.create_customer(business_type=factory_type)
        response = self.client.get('/api/admin/business-types/')
        self.assertEqual([(item['name'], item['customer_count']) for item in response.data], [('Agent', 0), ('Factory', 1)])

    def test_update_requires_id(self):
        response = self.client.put('/api/admin/business-types/', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Business type ID is required')

    def test_update_invalid_id(self):
        response = self.client.put('/api/admin/business-types/?id=abc', {'name': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid business type ID')

    def test_update_business_type(self):
        business_type = TestDataFactory.create_business_type(name='Factory')
        response = self.client.put(
            f'/api/admin/business-types/?id={business_type.id}', {'name': 'Factory Owner'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        business_type.refresh_from_db()
        self.assertEqual(business_type.name, 'Factory Owner')

    def test_delete_business_type_in_use(self):
        business_type = TestDataFactory.create_business_type(name='Factory')
        TestDataFactory.create_customer(name='Vinamilk', business_type=business_type)
        response = self.client.delete(f'/api/admin/business-types/?id={business_type.id}')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data['error'],
            'Cannot delete business type. It is currently assigned to 1 customer(s): Vinamilk',
        )

    def test_delete_business_type(self):
        business_type = TestDataFactory.create_business_type(name='Factory')
        response = self.client.delete(f'/api/admin/business-types/?id={business_type.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_business_type']['name'], 'Factory')

    def test_public_list(self):
        TestDataFactory.create_business_type(name='Factory')
        response = self.client.get('/api/business-types/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['name'], 'Factory')

    def test_seed_business_types(self):
        call_command('seed_business_types', stdout=StringIO())
        call_command('seed_business_types', stdout=StringIO())
        self.assertEqual(BusinessType.objects.count(), 10)

    def test_seed_clear_keeps_types_in_use(self):
        used = TestDataFactory.create_business_type(name='Distributor')
        TestDataFactory.create_business_type(name='Unused')
        TestDataFactory.create_customer(business_type=used)
        call_command('seed_business_types', '--clear', stdout=StringIO())
        self.assertTrue(BusinessType.objects.filter(name='Distributor').exists())
        self.assertFalse(BusinessType.objects.filter(name='Unused').exists())


class CustomerAPITests(TestCase):
    """Test admin and public customer endpoints"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()
        self.business_type = TestDataFactory.create_business_type(name='Factory')
        self.industry = TestDataFactory.create_industry(name='Food')

    def customer_data(self, **overrides):
        data = {
            'name': 'Vinamilk',
            'business_type': self.business_type.id,
            'industry': [self.industry.id],
            'website': 'https://vinamilk.com.vn',
            'logo': '/logos/vinamilk.png',
            'nationality': 'Việt Nam',
            'projects': [{'name': 'Dairy line', 'url': '/projects/dairy'}, {'name': ''}],
        }
        data.update(overrides)
        return data

    def test_create_customer(self):
        response = self.client.post('/api/admin/customers/', self.customer_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'vinamilk')
        self.assertEqual(response.data['business_type_name'], 'Factory')
        self.assertEqual(response.data['industry'], [self.industry.id])
        self.assertEqual(response.data['industry_details'][0]['name'], 'Food')
        self.assertEqual(len(response.data['projects']), 1)

    def test_create_customer_missing_fields(self):
        response = self.client.post('/api/admin/customers/', {'name': 'Vinamilk'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Missing required fields', response.data['error'])

    def test_create_customer_duplicate_slug(self):
        TestDataFactory.create_customer(name='Vinamilk', slug='vinamilk')
        response = self.client.post('/api/admin/customers/', self.customer_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Customer slug already exists')

    def test_create_customer_invalid_business_type(self):
        response = self.client.post('/api/admin/customers/', self.customer_data(business_type=9999), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid business type ID')

    def test_create_customer_invalid_industry(self):
        response = self.client.post(
            '/api/admin/customers/', self.customer_data(industry=[self.industry.id, 9999]), format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'One or more invalid industry IDs')

    def test_create_customer_invalid_website(self):
        response = self.client.post('/api/admin/customers/', self.customer_data(website='vinamilk'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('website', response.data['details'])

    def test_update_customer(self):
        customer = TestDataFactory.create_customer(name='Vinamilk', slug='vinamilk', business_type=self.business_type)
        response = self.client.put(
            f'/api/admin/customers/{customer.id}/',
            self.customer_data(slug='vinamilk', featured=True),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        customer.refresh_from_db()
        self.assertTrue(customer.featured)
        self.assertEqual(list(customer.industries.all()), [self.industry])

    def test_delete_customer(self):
        customer = TestDataFactory.create_customer(name='Vinamilk')
        response = self.client.delete(f'/api/admin/customers/{customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_customer']['name'], 'Vinamilk')
        self.assertFalse(Customer.objects.exists())

    def test_public_list_ordering(self):
        TestDataFactory.create_customer(name='Plain VN', nationality='Việt Nam')
        TestDataFactory.create_customer(name='Plain JP', nationality='Nhật Bản')
        TestDataFactory.create_customer(name='Featured', featured=True, nationality='EU')
        response = self.client.get('/api/customers/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['name'] for c in response.data], ['Featured', 'Plain VN', 'Plain JP'])

    def test_public_list_filter_and_cache_refresh(self):
        TestDataFactory.create_customer(name='Vinamilk', business_type=self.business_type)
        response = self.client.get(f'/api/customers/?business_type={self.business_type.id}')
        self.assertEqual(len(response.data), 1)
        TestDataFactory.create_customer(name='Masan', business_type=self.business_type)
        response = self.client.get(f'/api/customers/?business_type={self.business_type.id}')
        self.assertEqual(len(response.data), 2)

    def test_customer_by_slug(self):
        TestDataFactory.create_customer(name='Vinamilk', slug='vinamilk')
        response = self.client.get('/api/customers/vinamilk/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.get('/api/customers/unknown/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Customer not found')


class ContactAPITests(TestCase):
    """Test /api/contact/"""

    def setUp(self):
        self.client = APIClient()

    def test_submit_contact(self):
        data = {
            'name': 'Nguyen Van A',
            'email': 'a@example.com',
            'message': 'Need a quote for 3 pumps',
            'inquiry_type': 'quote',
        }
        response = self.client.post('/api/contact/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['contact']['status'], 'new')
        self.assertEqual(Inquiry.objects.get().inquiry_type, 'quote')

    def test_submit_contact_missing_fields(self):
        response = self.client.post('/api/contact/', {'name': 'A', 'email': 'a@example.com'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Name, email, and message are required')

    def test_submit_contact_invalid_email(self):
        response = self.client.post(
            '/api/contact/', {'name': 'A', 'email': 'not-an-email', 'message': 'Hi'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data['details'])

    def test_list_contacts(self):
        Inquiry.objects.create(name='A', email='a@example.com', message='First')
        Inquiry.objects.create(name='B', email='b@example.com', message='Second')
        response = self.client.get('/api/contact/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['contacts']), 2)
