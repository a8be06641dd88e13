#!/usr/bin/env python
"""
Test runner script for the full test suite
Usage: python run_tests.py
"""
import os
import sys
import django
from django.conf import settings
from django.test.utils import get_runner

if __name__ == "__main__":
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'botanic.config.settings')
    django.setup()
    TestRunner = get_runner(settings)
    test_runner = TestRunner()
    failures = test_runner.run_tests([
        'botanic.core',
        'botanic.catalog',
        'botanic.parties',
        'botanic.orders',
        'botanic.inventory',
        'botanic.costs',
        'botanic.reports',
    ])
    sys.exit(bool(failures))
