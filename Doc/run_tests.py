#!/usr/bin/env python
"""
Test runner script for running every app's test suite
Usage: python Doc/run_tests.py (with the project installed)
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

if __name__ == "__main__":
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'backend.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner()
    failures = test_runner.run_tests([
        'backend.core',
        'backend.catalog',
        'backend.parties',
        'backend.portfolio',
    ])
    sys.exit(bool(failures))
