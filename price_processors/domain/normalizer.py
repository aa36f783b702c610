# -*- coding: utf-8 -*-
"""normalizer domain module

Price records arrive in many shapes: month as "March", "mar", "3" or 3, year under `year` or `years`,
brand as a string or a list under `brand` or `brands`, price with currency symbols or spreadsheet
error tokens. Functions here turn them into consistent values.
"""
import math
import re
from datetime import datetime, date, timezone
from decimal import Decimal
from typing import Optional, List, Any

from dateutil import parser as date_parser

from price_processors import const
from price_processors.dto import PriceObservation

_CURRENCY_PATTERN = re.compile("[%s,]" % re.escape(const.CURRENCY_SYMBOLS))


def clean_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def normalize_month(value) -> Optional[int]:
    """Month number 1..12 from int, numeric string, full month name or 3-letter abbreviation"""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            return None
        value = int(value)

    if isinstance(value, int):
        return value if 1 <= value <= 12 else None

    text = str(value).strip().lower()
    if not text:
        return None

    if text.isdigit():
        return normalize_month(int(text))

    for idx, name in enumerate(const.MONTH_NAMES, start=1):
        if text == name.lower() or text == name[:3].lower():
            return idx

    return None


def month_name(month: Optional[int]) -> str:
    if month is None or not 1 <= month <= 12:
        return ""
    return const.MONTH_NAMES[month - 1]


def _to_year(value) -> Optional[int]:
    text = clean_text(value)
    if not text:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def normalize_year(record: dict) -> Optional[int]:
    """Declared year of a record, `year` takes precedence over `years`"""
    year = _to_year(record.get('year'))
    if year is None:
        year = _to_year(record.get('years'))
    return year


def all_brands(record: dict) -> List[str]:
    brands = []
    for key in ('brand', 'brands'):
        value = record.get(key)
        if isinstance(value, (list, tuple)):
            brands.extend(clean_text(b) for b in value if clean_text(b))
        elif clean_text(value):
            brands.append(clean_text(value))
    return brands


def normalize_brand(record: dict) -> str:
    brands = all_brands(record)
    return brands[0] if brands else ""


def to_price(value) -> Optional[float]:
    """Parse a price to 2 decimal places float. None when the value carries no usable number."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        text = _CURRENCY_PATTERN.sub("", str(value)).strip()
        if not text or text.upper() in const.INVALID_PRICE_TOKENS:
            return None
        try:
            number = float(text)
        except ValueError:
            return None

    if math.isnan(number) or math.isinf(number):
        return None

    return round(number, 2)


def parse_price(value) -> float:
    price = to_price(value)
    return price if price is not None else 0.0


def parse_timestamp(value) -> Optional[datetime]:
    """Aware datetime from datetime, date, epoch milliseconds or a date string. None when unparseable."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            dt = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt


def to_observation(record: Any) -> PriceObservation:
    if isinstance(record, PriceObservation):
        return record

    year_raw = record.get('year')
    if not clean_text(year_raw):
        year_raw = record.get('years')

    return PriceObservation(
        id=record.get('id'),
        commodity=clean_text(record.get('commodity')),
        brand=normalize_brand(record),
        brands=all_brands(record),
        size=clean_text(record.get('size')),
        store=clean_text(record.get('store')),
        variant=clean_text(record.get('variant')),
        category=clean_text(record.get('category')),
        price=parse_price(record.get('price')),
        srp=parse_price(record.get('srp')),
        month=normalize_month(record.get('month')),
        year=normalize_year(record),
        month_label=clean_text(record.get('month')),
        year_label=clean_text(year_raw),
        timestamp=parse_timestamp(record.get('timestamp')),
    )


def to_observations(records) -> List[PriceObservation]:
    return [to_observation(r) for r in records if r]
