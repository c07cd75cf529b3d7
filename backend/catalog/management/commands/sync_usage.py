"""
Management command to rebuild brand and pump type usage maps from the products table
"""
from django.core.management.base import BaseCommand, CommandError
from backend.catalog.usage import sync_all_usage


class Command(BaseCommand):
    help = "Rebuilds product usage tracking for every brand and pump type"

    def handle(self, *args, **options):
        result = sync_all_usage()
        if not result['success']:
            raise CommandError(result['message'])
        self.stdout.write(self.style.SUCCESS(result['message']))
