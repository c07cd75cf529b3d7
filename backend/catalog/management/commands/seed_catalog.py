"""
Management command to add sample brands and pump types to the database
"""
from django.core.management.base import BaseCommand
from django.db import transaction
from backend.catalog.models import Brand, ProductLine, PumpType, SubPumpType, Product
from backend.catalog.usage import sync_all_usage
from backend.core.cache_signals import suspend_cache_signals, invalidate_all_list_caches
from backend.core.utils import generate_slug

BRANDS = [
    {
        'name': 'Busch',
        'slug': 'busch-vacuum',
        'country': 'Germany',
        'year_established': 1963,
        'revenue': '$1.5B+ annually',
        'description': 'Leading manufacturer of vacuum pumps and systems',
        'logo': 'https://example.com/busch-logo.png',
        'product_lines': [
            ('R5 Series', 'Rotary vane vacuum pumps'),
            ('Mink Claw', 'Dry claw vacuum pumps'),
        ],
    },
    {
        'name': 'Edwards',
        'slug': 'edwards-vacuum',
        'country': 'UK',
        'year_established': 1919,
        'revenue': '$800M+ annually',
        'description': 'Advanced vacuum and exhaust management solutions',
        'logo': 'https://example.com/edwards-logo.png',
        'product_lines': [
            ('RV Series', 'Rotary vane pumps'),
        ],
    },
    {
        'name': 'Pfeiffer Vacuum',
        'slug': 'pfeiffer-vacuum',
        'country': 'Germany',
        'year_established': 1890,
        'revenue': '$600M+ annually',
        'description': 'Vacuum solutions for industry and research',
        'logo': 'https://example.com/pfeiffer-logo.png',
        'product_lines': [
            ('HiPace Series', 'Turbomolecular pumps'),
        ],
    },
]

PUMP_TYPES = [
    {
        'pump_type': 'Rotary Vane Pump',
        'description': 'Oil-sealed rotary vane vacuum pumps for general industrial applications',
        'sub_pump_types': [
            ('Single Stage', 'Single stage rotary vane pumps'),
            ('Two Stage', 'Two stage rotary vane pumps for higher vacuum'),
        ],
    },
    {
        'pump_type': 'Dry Screw Pump',
        'description': 'Oil-free dry screw vacuum pumps',
        'sub_pump_types': [
            ('Standard Series', 'Standard dry screw pumps'),
        ],
    },
    {
        'pump_type': 'Turbomolecular Pump',
        'description': 'High vacuum turbomolecular pumps',
        'sub_pump_types': [
            ('Magnetic Bearing', 'Magnetic bearing turbo pumps'),
            ('Hybrid Bearing', 'Hybrid bearing turbo pumps'),
        ],
    },
]


class Command(BaseCommand):
    help = "Adds sample brands (with product lines) and pump types (with sub types) to the database"

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear all existing brands and pump types before adding new ones',
        )

    def handle(self, *args, **options):
        clear = options['clear']

        with transaction.atomic(), suspend_cache_signals():
            if clear:
                if Product.objects.exists():
                    self.stdout.write(self.style.WARNING(
                        'Products still reference the catalog, skipping --clear'
                    ))
                else:
                    Brand.objects.all().delete()
                    PumpType.objects.all().delete()
                    self.stdout.write(self.style.WARNING('Cleared all existing brands and pump types'))

            added_brands = 0
            for entry in BRANDS:
                entry = dict(entry)
                lines = entry.pop('product_lines')
                brand, created = Brand.objects.get_or_create(name=entry['name'], defaults=entry)
                if not created:
                    self.stdout.write(f'Skipped (already exists): {brand.name}')
                    continue
                for position, (name, description) in enumerate(lines):
                    ProductLine.objects.create(
                        brand=brand, name=name, description=description, display_order=position,
                    )
                added_brands += 1
                self.stdout.write(self.style.SUCCESS(f'Added brand: {brand.name} ({len(lines)} product lines)'))

            added_pump_types = 0
            for entry in PUMP_TYPES:
                entry = dict(entry)
                subs = entry.pop('sub_pump_types')
                entry['slug'] = generate_slug(entry['pump_type'])
                pump_type, created = PumpType.objects.get_or_create(pump_type=entry['pump_type'], defaults=entry)
                if not created:
                    self.stdout.write(f'Skipped (already exists): {pump_type.pump_type}')
                    continue
                for position, (name, description) in enumerate(subs):
                    SubPumpType.objects.create(
                        pump_type=pump_type, name=name, slug=generate_slug(name),
                        description=description, display_order=position,
                    )
                added_pump_types += 1
                self.stdout.write(self.style.SUCCESS(f'Added pump type: {pump_type.pump_type} ({len(subs)} sub types)'))

        sync_all_usage()
        invalidate_all_list_caches()

        self.stdout.write(
            self.style.SUCCESS(
                f'\nSummary: Added {added_brands} brands and {added_pump_types} pump types. '
                f'Total: {Brand.objects.count()} brands, {PumpType.objects.count()} pump types'
            )
        )
