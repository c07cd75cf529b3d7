"""
Management command to add the default customer business types to the database
"""
from django.core.management.base import BaseCommand
from backend.parties.models import BusinessType, Customer


class Command(BaseCommand):
    help = "Adds the default customer business types to the database"

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear all existing business types before adding new ones',
        )

    def handle(self, *args, **options):
        clear = options['clear']

        business_types = [
            'Machine Builder',
            'Factory',
            'Manufacturing',
            'Pharmaceutical',
            'Semiconductor',
            'Food Processing',
            'Chemical',
            'Automotive',
            'Aerospace',
            'Research',
        ]

        if clear:
            in_use = BusinessType.objects.filter(pk__in=Customer.objects.values('business_type'))
            deleted_count, _ = BusinessType.objects.exclude(pk__in=in_use).delete()
            self.stdout.write(self.style.WARNING(f'Cleared {deleted_count} unused business types'))

        added_count = 0
        skipped_count = 0

        for name in business_types:
            business_type, created = BusinessType.objects.get_or_create(name=name)
            if created:
                added_count += 1
                self.stdout.write(self.style.SUCCESS(f'Added: {name}'))
            else:
                skipped_count += 1
                self.stdout.write(f'Skipped (already exists): {name}')

        self.stdout.write(
            self.style.SUCCESS(
                f'\nSummary: Added {added_count} business types, Skipped {skipped_count} existing business types. '
                f'Total business types: {BusinessType.objects.count()}'
            )
        )
