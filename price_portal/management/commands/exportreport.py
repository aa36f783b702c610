# -*- coding: utf-8 -*-
"""exportreport

Render the comparative analysis report to a file.

Usage:
    export DJANGO_SETTINGS_MODULE=price_portal.settings.local
    python manage.py help exportreport
    python manage.py exportreport --output xlsx
    python manage.py exportreport --output docx --month March --year 2025
    python manage.py exportreport --output pdf --commodity Sardines --out /tmp
"""
import os

from django.core.management import BaseCommand, CommandParser, CommandError

from price_processors.domain.normalizer import normalize_month
from price_processors.services import report_srv
from utils import libjson


class Command(BaseCommand):

    def add_arguments(self, parser: CommandParser):
        parser.add_argument('--output', help="Report format", default='xlsx', choices=report_srv.REPORT_FORMATS)
        parser.add_argument('--month', help="Month number, name or abbreviation")
        parser.add_argument('--year', help="4-digit year", type=int)
        parser.add_argument('--commodity', help="Commodity filter")
        parser.add_argument('--store', help="Store filter")
        parser.add_argument('--out', help="Output directory", default=".")

    def handle(self, *args, **options):
        month = None
        if options['month']:
            month = normalize_month(options['month'])
            if month is None:
                raise CommandError(f"Invalid month: {options['month']}")

        report = report_srv.build_report(
            month=month,
            year=options['year'],
            commodity=options['commodity'],
            store=options['store'],
        )
        content, filename, _ = report_srv.render_report(report, options['output'])

        out_path = os.path.join(options['out'], filename)
        if options['output'] == 'json':
            with open(out_path, 'w') as f:
                f.write(libjson.dumps(content))
        else:
            with open(out_path, 'wb') as f:
                f.write(content)

        self.stdout.write(f"Wrote {len(report.rows)} rows to {out_path}")
