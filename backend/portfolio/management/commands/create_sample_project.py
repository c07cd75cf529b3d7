"""
Management command to add a sample completed project to the portfolio
"""
from datetime import date

from django.core.management.base import BaseCommand
from backend.portfolio.models import Project

SAMPLE_PROJECT = {
    'title': 'Pharmaceutical Vacuum System Upgrade',
    'slug': 'pharmaceutical-vacuum-system-upgrade',
    'description': (
        'Complete upgrade of vacuum systems for a major pharmaceutical manufacturing facility, '
        'improving efficiency and reducing energy consumption.'
    ),
    'client': 'PharmaLabs Inc.',
    'industry': 'pharmaceutical',
    'location': 'Boston, MA',
    'completion_date': date(2023, 6, 15),
    'project_type': 'system-upgrade',
    'pump_types': ['rotary-vane', 'liquid-ring'],
    'images': [
        {
            'url': 'https://example.com/images/pharma-project1.jpg',
            'alt': 'Upgraded vacuum skid',
            'caption': '',
            'is_primary': True,
        },
        {
            'url': 'https://example.com/images/pharma-project2.jpg',
            'alt': 'Control room',
            'caption': '',
            'is_primary': False,
        },
    ],
    'specifications': {
        'flow_rate': '1200 CFM',
        'vacuum_level': '10^-2 mbar',
        'power': '75 kW',
        'quantity': '6 units',
    },
    'challenges': (
        '<p>The client faced several challenges with their existing vacuum system:</p>'
        '<ul><li>High energy consumption</li><li>Frequent maintenance requirements</li>'
        '<li>Inconsistent vacuum levels affecting product quality</li></ul>'
    ),
    'solutions': (
        '<p>We implemented a comprehensive solution including:</p>'
        '<ul><li>Installation of energy-efficient rotary vane pumps</li>'
        '<li>Integration of liquid ring pumps for specific processes</li>'
        '<li>Advanced control system for optimal performance</li></ul>'
    ),
    'results': (
        '<p>The project delivered significant improvements:</p>'
        '<ul><li>30% reduction in energy consumption</li>'
        '<li>25% increase in production throughput</li>'
        '<li>Improved product quality and consistency</li></ul>'
    ),
    'featured': True,
    'status': 'completed',
}


class Command(BaseCommand):
    help = "Adds a sample completed project to the portfolio"

    def handle(self, *args, **options):
        defaults = {key: value for key, value in SAMPLE_PROJECT.items() if key != 'slug'}
        project, created = Project.objects.get_or_create(slug=SAMPLE_PROJECT['slug'], defaults=defaults)

        if created:
            self.stdout.write(self.style.SUCCESS(f'Created sample project: {project.title} ({project.pk})'))
        else:
            self.stdout.write(f'Skipped (already exists): {project.title}')
