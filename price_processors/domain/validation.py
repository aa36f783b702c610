# -*- coding: utf-8 -*-
"""validation domain module

Clean, normalise and validate incoming price records before they are persisted.
"""
from collections import Counter
from datetime import datetime
from typing import Optional, List, Tuple, Dict

from price_processors.domain.normalizer import to_price, parse_price, parse_timestamp, clean_text
from utils import libdt

MISSING_FIELDS = ['brand', 'store', 'variant', 'month', 'years']


def normalize_commodity(value) -> str:
    text = clean_text(value)
    if not text:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def normalize_store(value) -> str:
    return clean_text(value).upper()


def normalize_price(value) -> float:
    return parse_price(value)


def normalize_date(value) -> str:
    dt = parse_timestamp(value)
    if dt is None:
        dt = libdt.get_utc_now()
    return libdt.serializable_datetime(dt)


def clean_record(record, normalize_names: bool = True) -> Optional[dict]:
    if not isinstance(record, dict):
        return None

    srp = to_price(record.get('srp'))

    return {
        'commodity': normalize_commodity(record.get('commodity')) if normalize_names else clean_text(record.get('commodity')),
        'brand': clean_text(record.get('brand')),
        'price': normalize_price(record.get('price')),
        'srp': srp if srp else None,
        'month': clean_text(record.get('month')),
        'years': clean_text(record.get('years') or record.get('year')) or str(datetime.now().year),
        'size': clean_text(record.get('size')),
        'store': normalize_store(record.get('store')) if normalize_names else clean_text(record.get('store')),
        'variant': clean_text(record.get('variant')),
        'category': clean_text(record.get('category')),
        'timestamp': normalize_date(record.get('timestamp')),
    }


def validate_record(record: dict) -> List[str]:
    """
    Validate a record as submitted, i.e. before clean_record() turns a missing price into zero

    :return: list of error messages, empty when the record is valid
    """
    errors = []

    if not normalize_commodity(record.get('commodity')):
        errors.append("Commodity is required")

    raw_price = record.get('price')
    if raw_price is None or clean_text(raw_price) == "":
        errors.append("Price is required")
    else:
        price = to_price(raw_price)
        if price is None:
            errors.append("Price must be a valid number")
        elif price < 0:
            errors.append("Price cannot be negative")

    return errors


def validate_batch(records, normalize_names: bool = True) -> Tuple[List[dict], List[dict]]:
    """
    :return: tuple of (valid cleaned records, invalid entries with 1-based row number and errors)
    """
    valid = []
    invalid = []

    if not isinstance(records, (list, tuple)):
        return valid, invalid

    for idx, record in enumerate(records, start=1):
        cleaned = clean_record(record, normalize_names)
        if cleaned is None:
            invalid.append({'row': idx, 'record': record, 'errors': ["Record is empty or invalid"]})
            continue

        errors = validate_record(record)
        if errors:
            invalid.append({'row': idx, 'record': cleaned, 'errors': errors})
        else:
            valid.append(cleaned)

    return valid, invalid


def _duplicate_key(record: dict) -> str:
    return "|".join(str(record.get(k, "")) for k in ('commodity', 'brand', 'store', 'variant', 'price'))


def find_duplicates(records: List[dict]) -> List[Dict]:
    seen = {}
    duplicates = []
    for idx, record in enumerate(records):
        key = _duplicate_key(record)
        if key in seen:
            prev_idx = seen[key]
            duplicates.append({
                'current': {**record, 'row_index': idx},
                'previous': {**records[prev_idx], 'row_index': prev_idx},
            })
        else:
            seen[key] = idx
    return duplicates


def quality_report(records: List[dict]) -> Dict:
    by_store = Counter()
    by_commodity = Counter()
    missing = {f: 0 for f in MISSING_FIELDS}
    prices = []

    for record in records:
        if record.get('store'):
            by_store[record['store']] += 1
        if record.get('commodity'):
            by_commodity[record['commodity']] += 1

        price = to_price(record.get('price'))
        if price:
            prices.append(price)

        for f in MISSING_FIELDS:
            if not record.get(f):
                missing[f] += 1

    return {
        'total_records': len(records),
        'by_store': dict(by_store),
        'by_commodity': dict(by_commodity),
        'price_range': {'min': min(prices), 'max': max(prices)} if prices else None,
        'missing_fields': missing,
    }
