"""
Test suite for the portfolio module
Tests: project and application admin CRUD, public listings, maintenance commands
"""
from datetime import date
from io import StringIO
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from backend.core.test_utils import TestDataFactory
from backend.portfolio.models import Project, Application


class ProjectAdminAPITests(TestCase):
    """Test /api/admin/projects/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()

    def project_data(self, **overrides):
        data = {
            'title': 'Semiconductor Fab Vacuum Retrofit',
            'description': 'Dry pump retrofit for a wafer fab',
            'client': 'Intel Products Vietnam',
            'industry': 'semiconductor',
            'location': 'Ho Chi Minh City',
            'completion_date': '2024-03-01',
            'project_type': 'system-upgrade',
            'pump_types': ['turbomolecular', 'scroll', 'turbomolecular'],
            'images': [{'url': '/projects/fab.jpg', 'is_primary': True}, {'url': ''}],
            'pump_models': [{'name': 'HiPace 700'}, {'name': ' '}],
            'specifications': {'flow_rate': '700 l/s', 'quantity': '12 units', 'noise': 'low'},
            'challenges': 'Contamination',
            'solutions': 'Oil-free pumps',
            'results': 'Higher yield',
        }
        data.update(overrides)
        return data

    def test_create_project(self):
        response = self.client.post('/api/admin/projects/', self.project_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'semiconductor-fab-vacuum-retrofit')
        self.assertEqual(response.data['status'], 'completed')
        self.assertEqual(response.data['pump_types'], ['turbomolecular', 'scroll'])
        self.assertEqual(len(response.data['images']), 1)
        self.assertEqual(response.data['pump_models'], [{'name': 'HiPace 700', 'url': ''}])
        self.assertEqual(response.data['specifications'], {'flow_rate': '700 l/s', 'quantity': '12 units'})

    def test_create_project_missing_fields(self):
        response = self.client.post('/api/admin/projects/', {'title': 'Half done'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'].startswith('Missing required fields: description, client'))

    def test_create_project_invalid_pump_type(self):
        response = self.client.post(
            '/api/admin/projects/', self.project_data(pump_types=['ion-pump']), format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('pump_types', response.data['details'])

    def test_create_project_duplicate_slug(self):
        TestDataFactory.create_project(slug='semiconductor-fab-vacuum-retrofit')
        response = self.client.post('/api/admin/projects/', self.project_data(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('slug', response.data['details'])

    def test_admin_list_includes_every_status(self):
        TestDataFactory.create_project(title='Done')
        TestDataFactory.create_project(title='Planned', status='planned')
        response = self.client.get('/api/admin/projects/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_update_project(self):
        project = TestDataFactory.create_project(title='Retrofit', slug='retrofit', status='ongoing')
        response = self.client.put(
            f'/api/admin/projects/{project.id}/',
            self.project_data(title='Retrofit', slug='retrofit', status='completed'),
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        project.refresh_from_db()
        self.assertEqual(project.status, 'completed')
        self.assertEqual(project.completion_date, date(2024, 3, 1))

    def test_delete_project(self):
        project = TestDataFactory.create_project(title='Retrofit')
        response = self.client.delete(f'/api/admin/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted_project']['title'], 'Retrofit')
        self.assertFalse(Project.objects.exists())

    def test_get_unknown_project(self):
        response = self.client.get('/api/admin/projects/9999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Project not found')


class PublicProjectAPITests(TestCase):
    """Test /api/projects/"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()
        TestDataFactory.create_project(title='Old Plain', completion_date=date(2021, 1, 1))
        TestDataFactory.create_project(title='New Plain', completion_date=date(2024, 1, 1))
        TestDataFactory.create_project(title='Old Featured', featured=True, completion_date=date(2020, 1, 1))
        TestDataFactory.create_project(title='Still Running', status='ongoing')

    def test_completed_only_featured_first(self):
        response = self.client.get('/api/projects/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [project['title'] for project in response.data],
            ['Old Featured', 'New Plain', 'Old Plain'],
        )

    def test_project_by_slug(self):
        response = self.client.get('/api/projects/new-plain/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'New Plain')

    def test_project_by_slug_not_found(self):
        response = self.client.get('/api/projects/nothing-here/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Project not found')


class ApplicationAPITests(TestCase):
    """Test admin and public application endpoints"""

    def setUp(self):
        self.client = APIClient()
        cache.clear()
        self.pharma = TestDataFactory.create_industry(name='Pharmaceutical', slug='pharmaceutical')

    def test_create_application(self):
        data = {
            'name': 'Freeze Drying',
            'description': 'Lyophilisation of vaccines',
            'category': 'freeze-drying',
            'recommended_industries': [self.pharma.id],
            'vacuum_requirements': {'pressure_range': '0.01 - 1 mbar', 'ultimate_vacuum': ''},
            'benefits': ['Longer shelf life', ''],
            'keywords': ['Lyophilization'],
            'download_documents': [{'title': 'Guide', 'url': '/docs/guide.pdf'}, {'title': 'No url'}],
        }
        response = self.client.post('/api/admin/applications/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'freeze-drying')
        self.assertEqual(response.data['recommended_industries'], [self.pharma.id])
        self.assertEqual(response.data['recommended_industry_details'][0]['slug'], 'pharmaceutical')
        self.assertEqual(response.data['vacuum_requirements'], {'pressure_range': '0.01 - 1 mbar'})
        self.assertEqual(response.data['benefits'], ['Longer shelf life'])
        self.assertEqual(response.data['keywords'], ['lyophilization'])
        self.assertEqual(len(response.data['download_documents']), 1)

    def test_create_application_missing_fields(self):
        response = self.client.post('/api/admin/applications/', {'name': 'Coating'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Missing required fields: description, category')

    def test_create_application_unknown_industry(self):
        data = {
            'name': 'Coating',
            'description': 'Thin film coating',
            'category': 'coating',
            'recommended_industries': [9999],
        }
        response = self.client.post('/api/admin/applications/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('recommended_industries', response.data['details'])

    def test_update_and_delete_application(self):
        application = TestDataFactory.create_application(name='Degassing', slug='degassing', category='degassing')
        response = self.client.put(
            f'/api/admin/applications/{application.id}/',
            {'name': 'Degassing', 'slug': 'degassing', 'description': 'Resin degassing',
             'category': 'degassing', 'is_active': False},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        application.refresh_from_db()
        self.assertFalse(application.is_active)

        response = self.client.delete(f'/api/admin/applications/{application.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Application.objects.exists())

    def test_public_list_active_only_ordered(self):
        TestDataFactory.create_application(name='Zeta', display_order=0)
        TestDataFactory.create_application(name='Alpha', display_order=0)
        TestDataFactory.create_application(name='First', display_order=5, featured=True)
        TestDataFactory.create_application(name='Hidden', is_active=False)
        response = self.client.get('/api/applications/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([app['name'] for app in response.data], ['First', 'Alpha', 'Zeta'])

    def test_public_list_by_category(self):
        TestDataFactory.create_application(name='Freeze Drying', category='freeze-drying')
        TestDataFactory.create_application(name='Packaging', category='packaging')
        response = self.client.get('/api/applications/?category=packaging')
        self.assertEqual([app['name'] for app in response.data], ['Packaging'])

    def test_public_detail_counts_views(self):
        TestDataFactory.create_application(name='Freeze Drying', industries=[self.pharma])
        response = self.client.get('/api/applications/freeze-drying/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['stats']['view_count'], 1)
        self.assertEqual(response.data['recommended_industry_details'][0]['name'], 'Pharmaceutical')

        self.client.get('/api/applications/freeze-drying/')
        self.assertEqual(Application.objects.get().stats['view_count'], 2)

    def test_public_detail_hides_inactive(self):
        TestDataFactory.create_application(name='Hidden', is_active=False)
        response = self.client.get('/api/applications/hidden/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Application not found')


class PortfolioCommandTests(TestCase):

    def test_create_sample_project(self):
        call_command('create_sample_project', stdout=StringIO())
        call_command('create_sample_project', stdout=StringIO())
        project = Project.objects.get()
        self.assertEqual(project.slug, 'pharmaceutical-vacuum-system-upgrade')
        self.assertTrue(project.featured)
        self.assertEqual(project.specifications['flow_rate'], '1200 CFM')

    def test_delete_all_projects(self):
        TestDataFactory.create_project()
        TestDataFactory.create_project()
        out = StringIO()
        call_command('delete_all_projects', '--yes', stdout=out)
        self.assertFalse(Project.objects.exists())
        self.assertIn('Deleted 2 projects', out.getvalue())
