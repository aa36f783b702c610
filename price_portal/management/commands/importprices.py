# -*- coding: utf-8 -*-
"""importprices

Import a monitoring workbook (.xlsx) or CSV export of it into the price record table.

Usage:
    export DJANGO_SETTINGS_MODULE=price_portal.settings.local
    python manage.py migrate
    python manage.py help importprices
    python manage.py importprices data/Price_Monitoring_March_2025.xlsx
    python manage.py importprices data/march.csv --category "BASIC NECESSITIES" --year 2025
    python manage.py importprices data/march.csv --dry-run
"""
import os

from django.core.management import BaseCommand, CommandParser, CommandError

from price_processors.domain import validation
from price_processors.exceptions import UnsupportedImportFormat, InvalidImportSheet
from price_processors.services import import_srv
from utils import libjson


class Command(BaseCommand):

    def add_arguments(self, parser: CommandParser):
        parser.add_argument('path', help="Path to .xlsx workbook or .csv file")
        parser.add_argument('--category', help="Category override", default=import_srv.AUTO_SORT_CATEGORY,
                            choices=[import_srv.AUTO_SORT_CATEGORY, *import_srv.CATEGORY_MAP.keys()])
        parser.add_argument('--year', help="Year to use when the sheet name carries none")
        parser.add_argument('--dry-run', help="Parse and validate only, nothing is saved", action="store_true")

    def handle(self, *args, **options):
        path = options['path']

        if not os.path.isfile(path):
            raise CommandError(f"No such file: {path}")

        try:
            with open(path, 'rb') as f:
                records = import_srv.import_file(f, os.path.basename(path), year=options['year'])
        except (UnsupportedImportFormat, InvalidImportSheet) as e:
            raise CommandError(str(e))

        records = import_srv.apply_category(records, options['category'])

        if options['dry_run']:
            valid, invalid = validation.validate_batch(records, normalize_names=False)
            self.stdout.write(libjson.dumps({
                'parsed_count': len(records),
                'valid_count': len(valid),
                'invalid_count': len(invalid),
            }))
            return

        self.stdout.write(libjson.dumps(import_srv.persist_records(records)))
