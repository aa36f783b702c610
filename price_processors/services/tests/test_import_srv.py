import io
import logging

import pandas as pd
from django.test import override_settings

from price_portal.models import PriceRecord
from price_processors.exceptions import UnsupportedImportFormat, InvalidImportSheet
from price_processors.services import import_srv
from price_processors.tests.case import PriceUnitTestCase, logger

SHEET_ROWS = [
    ["PRICE MONITORING MARCH 2025", "", "", "", "", "", ""],
    ["BASIC NECESSITIES", "PRODUCT NAME", "UNIT", "SRP", "SAVEMORE", "ALTURAS MALL", "Remarks"],
    ["Canned Sardines", "", "", "", "", "", ""],
    ["", "Ligo Sardines in Tomato Sauce", "155g", "21.00", "20.50", "#N/A", ""],
    ["", "555 Sardines", "155g", "", "19.75", "20.00", "ok"],
    ["PRIME COMMODITIES", "PRODUCT NAME", "UNIT", "SRP", "SAVEMORE", "ALTURAS MALL", ""],
    ["", "Coffee", "50g", "", "80", "81", ""],
]


def _csv_file(rows) -> io.BytesIO:
    content = "\n".join(",".join(row) for row in rows)
    return io.BytesIO(content.encode('utf-8'))


def _xlsx_file(rows, sheet_name) -> io.BytesIO:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    buffer.seek(0)
    return buffer


class ImportSrvUnitTests(PriceUnitTestCase):

    def test_find_header_row(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_find_header_row
        """
        self.assertEqual(import_srv.find_header_row(SHEET_ROWS), (1, "BASIC NECESSITIES"))
        self.assertEqual(import_srv.find_header_row([["nothing", "here"]]), (-1, None))

    def test_find_store_columns(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_find_store_columns
        """
        self.assertEqual(import_srv.find_store_columns(SHEET_ROWS[1]), [(4, "SAVEMORE"), (5, "ALTURAS MALL")])

        header = ["BASIC NECESSITIES", "PRODUCT NAME", "UNIT", "SRP", "GAISANO", "MAR 2025", "GAISANO"]
        self.assertEqual(import_srv.find_store_columns(header), [(4, "GAISANO")])

    def test_sheet_period(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_sheet_period
        """
        self.assertEqual(import_srv.month_from_sheet_name("Feb 2024"), "February")
        self.assertEqual(import_srv.month_from_sheet_name("Sheet1"), "")
        self.assertEqual(import_srv.year_from_sheet_name("Feb 2024"), "2024")
        self.assertEqual(import_srv.year_from_sheet_name("Sheet1"), "")
        self.assertEqual(import_srv.month_from_rows(SHEET_ROWS), "March")

    def test_parse_rows(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_parse_rows
        """
        records = import_srv.parse_rows(SHEET_ROWS, year="2025")
        for r in records:
            logger.info(r)

        self.assertEqual(len(records), 3)

        ligo = records[0]
        self.assertEqual(ligo['commodity'], "Ligo Sardines in Tomato Sauce")
        self.assertEqual(ligo['variant'], "Canned Sardines")
        self.assertEqual(ligo['brand'], "BASIC NECESSITIES")
        self.assertEqual(ligo['size'], "155g")
        self.assertEqual(ligo['store'], "SAVEMORE")
        self.assertEqual(ligo['price'], 20.5)
        self.assertEqual(ligo['srp'], 21.0)
        self.assertEqual(ligo['month'], "March")
        self.assertEqual(ligo['years'], "2025")
        self.assertEqual(ligo['category'], "basic")

        self.assertEqual([r['store'] for r in records[1:]], ["SAVEMORE", "ALTURAS MALL"])
        self.assertEqual(records[1]['srp'], "")

        self.assertNotIn("Coffee", [r['commodity'] for r in records])

    @override_settings(PRICE_IMPORT_DEFAULT_YEAR="2024")
    def test_parse_rows_default_year(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_parse_rows_default_year
        """
        records = import_srv.parse_rows(SHEET_ROWS)
        self.assertEqual({r['years'] for r in records}, {"2024"})

        records = import_srv.parse_rows(SHEET_ROWS, sheet_name="Apr 2023", year="2025")
        self.assertEqual({(r['month'], r['years']) for r in records}, {("April", "2023")})

    def test_import_csv(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_import_csv
        """
        records = import_srv.import_file(_csv_file(SHEET_ROWS), "march.csv", year="2025")
        self.assertEqual(len(records), 3)
        self.assertEqual(records[2]['price'], 20.0)

    def test_import_xlsx(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_import_xlsx
        """
        records = import_srv.import_file(_xlsx_file(SHEET_ROWS, "Mar 2025"), "Monitoring.XLSX", year="2030")
        logger.info(records)
        self.assertEqual(len(records), 3)
        self.assertEqual({r['years'] for r in records}, {"2025"})
        self.assertEqual({r['month'] for r in records}, {"March"})

    def test_import_unsupported_format(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_import_unsupported_format
        """
        with self.assertRaises(UnsupportedImportFormat):
            import_srv.import_file(io.BytesIO(b""), "legacy.xls")

    def test_import_sheet_without_header(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_import_sheet_without_header
        """
        with self.assertRaises(InvalidImportSheet):
            import_srv.import_file(_csv_file([["a", "b"], ["1", "2"]]), "random.csv")

        with self.assertRaises(InvalidImportSheet):
            import_srv.import_file(_xlsx_file([["a", "b"], ["1", "2"]], "Sheet1"), "random.xlsx")

    def test_import_sheet_without_prices(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_import_sheet_without_prices
        """
        rows = [
            ["BASIC NECESSITIES", "PRODUCT NAME", "UNIT", "SRP", "SAVEMORE", "ALTURAS MALL"],
            ["", "Ligo Sardines in Tomato Sauce", "155g", "21.00", "", ""],
            ["", "555 Sardines", "155g", "", "0", "#N/A"],
        ]
        self.assertEqual(import_srv.import_file(_csv_file(rows), "blank.csv", year="2025"), [])
        self.assertEqual(import_srv.import_file(_xlsx_file(rows, "Mar 2025"), "blank.xlsx"), [])

    def test_apply_category(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_apply_category
        """
        records = import_srv.parse_rows(SHEET_ROWS, year="2025")
        self.assertEqual(import_srv.apply_category(records, 'BPCM'), records)

        overridden = import_srv.apply_category(records, 'NOCHE BUENA')
        self.assertEqual({r['category'] for r in overridden}, {"noche-buena"})
        self.assertEqual(records[0]['category'], "basic")

    def test_persist_records(self):
        """
        python manage.py test price_processors.services.tests.test_import_srv.ImportSrvUnitTests.test_persist_records
        """
        records = import_srv.parse_rows(SHEET_ROWS, year="2025")
        records.append(dict(records[0]))
        records.append({'commodity': "", 'price': 5})

        stats = import_srv.persist_records(records)
        logger.info(stats)

        self.assertEqual(stats['price_row_new_count'], 4)
        self.assertEqual(stats['price_row_invalid_count'], 1)
        self.assertEqual(stats['price_row_duplicate_count'], 1)
        self.assertEqual(PriceRecord.objects.count(), 4)

        ligo = PriceRecord.objects.filter(store="SAVEMORE", commodity="Ligo Sardines in Tomato Sauce").first()
        self.assertEqual(float(ligo.srp), 21.0)
        self.assertEqual(ligo.category, "basic")
        self.assertIsNone(PriceRecord.objects.filter(commodity="555 Sardines").first().srp)
