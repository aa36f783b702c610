# -*- coding: utf-8 -*-
"""migrateprices

Fill defaults on legacy price records, i.e. blank commodity and blank years. Same as POST /api/migrate.

Usage:
    export DJANGO_SETTINGS_MODULE=price_portal.settings.local
    python manage.py help migrateprices
    python manage.py migrateprices
    python manage.py migrateprices --default-year 2024
"""
from django.core.management import BaseCommand, CommandParser

from price_processors.services import migration_srv
from utils import libjson


class Command(BaseCommand):

    def add_arguments(self, parser: CommandParser):
        parser.add_argument('--default-year', help="Year written to records without one")

    def handle(self, *args, **options):
        stats = migration_srv.migrate_legacy_records(options['default_year'])
        self.stdout.write(libjson.dumps(stats))
