"""DTI price monitoring sheet import

Monitoring sheets follow the layout

    BASIC NECESSITIES | PRODUCT NAME | UNIT | SRP | Store1 | Store2 | ... | Remarks | ...
    Canned Sardines   |              |      |     |        |        |
                      | 555 Sardines | 155g | 21  | 20.50  | 21.00  |

i.e. one header row carrying the category label and store names, commodity group rows and product rows
with one price per store column. Each positive store price becomes one PriceRecord.
"""
import logging
import os
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

import pandas as pd
from django.conf import settings
from django.db import transaction

from price_portal.models import PriceRecord, PriceCategory
from price_portal.models.price import clear_analysis_cache
from price_processors import const
from price_processors.domain import validation
from price_processors.domain.normalizer import clean_text, to_price, parse_timestamp
from price_processors.exceptions import UnsupportedImportFormat, InvalidImportSheet
from utils import libjson

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

SHEET_MAX_COLUMNS = 512

CATEGORY_MAP = {
    'BASIC NECESSITIES': PriceCategory.BASIC.value,
    'PRIME COMMODITIES': PriceCategory.PRIME.value,
    'CONSTRUCTION MATERIALS': PriceCategory.CONSTRUCTION.value,
    'NOCHE BUENA': PriceCategory.NOCHE_BUENA.value,
    'SCHOOL SUPPLIES': PriceCategory.SCHOOL_SUPPLIES.value,
}

AUTO_SORT_CATEGORY = 'BPCM'

_YEAR_PATTERN = re.compile(r"\b(20\d{2})\b")
_DATE_HEADER_PATTERN = re.compile(r"\d{4}|^(%s)" % "|".join(const.MONTH_ABBREVIATIONS))


def month_from_sheet_name(sheet_name: str) -> str:
    name = str(sheet_name or "").upper()
    for idx, abbr in enumerate(const.MONTH_ABBREVIATIONS):
        if abbr in name:
            return const.MONTH_NAMES[idx]
    return ""


def month_from_rows(rows: List[list]) -> str:
    for row in rows[:const.SHEET_PERIOD_SCAN_ROWS]:
        for cell in row:
            value = clean_text(cell).upper()
            if not value:
                continue
            for name in const.MONTH_NAMES:
                if name.upper() in value:
                    return name
            for idx, abbr in enumerate(const.MONTH_ABBREVIATIONS):
                if abbr in value:
                    return const.MONTH_NAMES[idx]
    return ""


def year_from_sheet_name(sheet_name: str) -> str:
    match = _YEAR_PATTERN.search(str(sheet_name or ""))
    return match.group(1) if match else ""


def find_header_row(rows: List[list]) -> Tuple[int, Optional[str]]:
    """
    :return: tuple of (header row index, category label) or (-1, None) when the sheet has no monitoring header
    """
    for idx, row in enumerate(rows[:const.SHEET_HEADER_SCAN_ROWS]):
        cells = [clean_text(c).upper() for c in row]
        label = next((c for c in cells if c in const.SHEET_CATEGORY_HEADERS), None)
        if label and any('PRODUCT' in c for c in cells):
            return idx, label
    return -1, None


def find_store_columns(header_row: list) -> List[Tuple[int, str]]:
    stores = []
    for col in range(const.SHEET_FIRST_STORE_COL, len(header_row)):
        header = clean_text(header_row[col])
        if not header:
            break
        if any(marker in header for marker in const.SHEET_METADATA_HEADERS):
            break
        if _DATE_HEADER_PATTERN.search(header.upper()):
            break
        stores.append((col, header))
    return stores


def _cell(row: list, col: int) -> str:
    return clean_text(row[col]) if col < len(row) else ""


def parse_rows(rows: List[list], sheet_name: str = "", year: Optional[str] = None) -> List[dict]:
    header_idx, label = find_header_row(rows)
    if header_idx < 0:
        logger.warning(f"No monitoring sheet header found in '{sheet_name}'")
        return []

    month = month_from_sheet_name(sheet_name) or month_from_rows(rows) or const.DEFAULT_IMPORT_MONTH
    years = year_from_sheet_name(sheet_name) or year or getattr(
        settings, 'PRICE_IMPORT_DEFAULT_YEAR', const.DEFAULT_IMPORT_YEAR)

    stores = find_store_columns(rows[header_idx])
    logger.info(f"Sheet '{sheet_name}': {label}, {month} {years}, {len(stores)} store columns")

    timestamp = datetime.now(tz=timezone.utc).isoformat()
    category = CATEGORY_MAP.get(label, PriceCategory.GENERAL.value)

    records = []
    group = ""
    for row in rows[header_idx + 1:]:
        if not row:
            continue

        col0 = _cell(row, 0)
        product = _cell(row, const.SHEET_PRODUCT_COL)

        if col0 in const.SHEET_STOP_MARKERS:
            break

        if col0 and not product:
            group = col0
            continue

        if col0 and product and col0 != product and len(col0) > 10:
            group = col0

        if not product:
            continue

        unit = _cell(row, const.SHEET_UNIT_COL)
        srp = to_price(_cell(row, const.SHEET_SRP_COL))

        for col, store in stores:
            price = to_price(_cell(row, col))
            if price is None or price <= 0:
                continue

            records.append({
                'brand': label,
                'commodity': product,
                'variant': group,
                'size': unit,
                'store': store,
                'price': price,
                'srp': srp if srp else "",
                'month': month,
                'years': years,
                'category': category,
                'timestamp': timestamp,
            })

    return records


def _frame_rows(df: pd.DataFrame) -> List[list]:
    return df.fillna("").astype(str).values.tolist()


def _has_header(rows: List[list]) -> bool:
    return find_header_row(rows)[0] >= 0


def parse_csv(file, year: Optional[str] = None) -> List[dict]:
    df = pd.read_csv(
        file,
        header=None,
        names=list(range(SHEET_MAX_COLUMNS)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )
    rows = _frame_rows(df)
    if not _has_header(rows):
        raise InvalidImportSheet("no BASIC NECESSITIES or PRIME COMMODITIES header row found")

    return parse_rows(rows, year=year)


def parse_xlsx(file, year: Optional[str] = None) -> List[dict]:
    sheets = pd.read_excel(file, sheet_name=None, header=None, engine='openpyxl')

    header_found = False
    records = []
    for sheet_name, df in sheets.items():
        rows = _frame_rows(df)
        if not _has_header(rows):
            logger.info(f"Sheet '{sheet_name}': skipped, no monitoring header")
            continue

        header_found = True
        sheet_records = parse_rows(rows, sheet_name=sheet_name, year=year)
        logger.info(f"Sheet '{sheet_name}': {len(sheet_records)} records")
        records.extend(sheet_records)

    if not header_found:
        raise InvalidImportSheet("no BASIC NECESSITIES or PRIME COMMODITIES header row found in any sheet")

    return records


def import_file(file, filename: str, year: Optional[str] = None) -> List[dict]:
    ext = os.path.splitext(str(filename).lower())[1]

    if ext == '.csv':
        records = parse_csv(file, year=year)
    elif ext == '.xlsx':
        records = parse_xlsx(file, year=year)
    else:
        raise UnsupportedImportFormat(filename)

    if not records:
        logger.warning(f"No positive store prices found in {filename}")

    logger.info(f"Parsed {len(records)} records from {filename}")
    return records


def apply_category(records: List[dict], selected: str) -> List[dict]:
    """BPCM keeps the category parsed from each sheet header, any other selection overrides it"""
    if not selected or selected == AUTO_SORT_CATEGORY:
        return records

    category = CATEGORY_MAP.get(selected)
    if category is None:
        return records

    return [{**r, 'category': category} for r in records]


def _to_model_kwargs(record: dict) -> dict:
    category = record.get('category')
    if category not in PriceCategory.values:
        category = PriceCategory.GENERAL.value

    srp = record.get('srp')

    return {
        'commodity': record['commodity'],
        'brand': record['brand'],
        'variant': record['variant'],
        'size': record['size'],
        'store': record['store'],
        'category': category,
        'month': record['month'],
        'years': record['years'],
        'price': Decimal(str(record['price'])),
        'srp': Decimal(str(srp)) if srp else None,
        'timestamp': parse_timestamp(record['timestamp']),
    }


@transaction.atomic
def persist_records(records: List[dict]) -> dict:
    """
    Validate and bulk insert price records

    :param records: raw record dicts, e.g. from import_file()
    :return: result statistics - count of PriceRecord rows created, invalid and duplicated within the batch
    """
    logger.info(f"Start processing {len(records)} price records")

    valid, invalid = validation.validate_batch(records, normalize_names=False)
    duplicates = validation.find_duplicates(valid)

    for entry in invalid:
        logger.warning(f"Invalid record: {libjson.dumps(entry)}")

    PriceRecord.objects.bulk_create([PriceRecord(**_to_model_kwargs(r)) for r in valid])
    clear_analysis_cache()

    stats = {
        'price_row_new_count': len(valid),
        'price_row_invalid_count': len(invalid),
        'price_row_duplicate_count': len(duplicates),
    }
    logger.info(libjson.dumps(stats))

    return stats
