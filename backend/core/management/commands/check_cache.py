"""
Django management command to check the cache configuration.

Usage:
    python manage.py check_cache
"""
from django.core.management.base import BaseCommand
from django.core.cache import cache
from django.conf import settings

from backend.core.cache_utils import get_cached_list, cache_list, invalidate_cache_pattern, PRODUCTS_LIST


class Command(BaseCommand):
    help = 'Check cache configuration and verify list caching works'

    def handle(self, *args, **options):
        self.stdout.write("=" * 60)
        self.stdout.write(self.style.SUCCESS("Cache Configuration Check"))
        self.stdout.write("=" * 60)

        self.stdout.write(f"\n1. Cache Backend: {settings.CACHES['default']['BACKEND']}")
        self.stdout.write(f"2. Cache Location: {settings.CACHES['default'].get('LOCATION', 'N/A')}")
        self.stdout.write(f"3. Public list TTL: {getattr(settings, 'PUBLIC_LIST_CACHE_TTL', 120)}s")

        self.stdout.write("\n4. Basic operations:")
        self.stdout.write("-" * 60)

        try:
            cache.set('check_cache_key', 'check_value', 60)
            if cache.get('check_cache_key') == 'check_value':
                self.stdout.write(self.style.SUCCESS("Cache SET/GET: OK"))
            else:
                self.stdout.write(self.style.ERROR("Cache SET/GET: value mismatch"))
            cache.delete('check_cache_key')
            if cache.get('check_cache_key') is None:
                self.stdout.write(self.style.SUCCESS("Cache DELETE: OK"))
            else:
                self.stdout.write(self.style.ERROR("Cache DELETE: value still present"))

            self.stdout.write("\n5. List cache invalidation:")
            self.stdout.write("-" * 60)
            params = {'check': 'cache'}
            _, key = get_cached_list(PRODUCTS_LIST, params)
            cache_list(key, {'products': []}, ttl=60)
            invalidate_cache_pattern(PRODUCTS_LIST)
            cached, _ = get_cached_list(PRODUCTS_LIST, params)
            if cached is None:
                self.stdout.write(self.style.SUCCESS("Pattern invalidation: OK"))
            else:
                cache.delete(key)
                self.stdout.write(self.style.ERROR("Pattern invalidation: key survived"))

            self.stdout.write("\n" + "=" * 60)
            self.stdout.write(self.style.SUCCESS("Cache is working"))
            self.stdout.write("=" * 60)

        except Exception as e:
            self.stdout.write("\n" + "=" * 60)
            self.stdout.write(self.style.ERROR(f"ERROR: {str(e)}"))
            self.stdout.write("=" * 60)
            self.stdout.write(self.style.WARNING("\nTroubleshooting:"))
            self.stdout.write("   1. Check REDIS_URL in the environment")
            self.stdout.write("   2. Verify django-redis is installed")
            self.stdout.write("   3. Test the Redis connection from this server")
            raise
