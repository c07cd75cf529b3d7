"""
Management command to delete every project from the portfolio
"""
from django.core.management.base import BaseCommand
from backend.portfolio.models import Project


class Command(BaseCommand):
    help = "Deletes all projects from the portfolio"

    def add_arguments(self, parser):
        parser.add_argument(
            '--yes',
            action='store_true',
            help='Delete without asking for confirmation',
        )

    def handle(self, *args, **options):
        count = Project.objects.count()
        if count == 0:
            self.stdout.write('No projects to delete')
            return

        if not options['yes']:
            answer = input(f'Delete all {count} projects? This cannot be undone. [y/N] ')
            if answer.strip().lower() not in ('y', 'yes'):
                self.stdout.write(self.style.WARNING('Aborted, no projects deleted'))
                return

        deleted_count, _ = Project.objects.all().delete()
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted_count} projects'))
