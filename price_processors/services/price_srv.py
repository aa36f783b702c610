import logging
from typing import List

from django.conf import settings
from django.core.cache import cache

from price_portal.models import PriceRecord
from price_processors import const

logger = logging.getLogger(__name__)

RECORD_FIELDS = [
    'id', 'commodity', 'brand', 'variant', 'size', 'store', 'category', 'month', 'years', 'price', 'srp', 'timestamp',
]


def get_compliance_tolerance() -> float:
    return float(getattr(settings, 'PRICE_COMPLIANCE_TOLERANCE', const.DEFAULT_COMPLIANCE_TOLERANCE))


def get_all_records() -> List[dict]:
    """
    All price records as plain dicts, newest first. Served from cache when warm, the cache is dropped on
    every PriceRecord save/delete and after bulk import or migration.
    """
    records = cache.get(const.ANALYSIS_CACHE_KEY)
    if records is not None:
        return records

    records = list(PriceRecord.objects.order_by('-timestamp').values(*RECORD_FIELDS))

    timeout = getattr(settings, 'PRICE_ANALYSIS_CACHE_SECONDS', const.ANALYSIS_CACHE_SECONDS)
    cache.set(const.ANALYSIS_CACHE_KEY, records, timeout)
    logger.debug(f"Cached {len(records)} price records for {timeout}s")

    return records


def get_records_by_ids(ids) -> List[dict]:
    qs = PriceRecord.objects.filter(id__in=ids).order_by('store', 'commodity')
    return list(qs.values(*RECORD_FIELDS))
