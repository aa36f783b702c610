import logging
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.db.models import Q

from price_portal.models import PriceRecord
from price_portal.models.price import clear_analysis_cache
from price_processors import const
from utils import libjson

logger = logging.getLogger(__name__)


def default_migration_year() -> str:
    current_year = datetime.now().year
    return str(current_year) if current_year > const.MIGRATION_BASE_YEAR else str(const.MIGRATION_BASE_YEAR)


@transaction.atomic
def migrate_legacy_records(default_year: Optional[str] = None) -> dict:
    """
    Bring legacy rows up to the current record shape, i.e. fill a placeholder commodity and a year on rows
    that were saved without one. SRP is left untouched.

    :param default_year: year to stamp on rows without one, see default_migration_year()
    :return: result statistics - count of total, updated and unchanged rows
    """
    default_year = default_year or default_migration_year()

    total = PriceRecord.objects.count()

    blank_commodity = Q(commodity="") | Q(commodity__isnull=True)
    blank_years = Q(years="") | Q(years__isnull=True)

    touched_ids = set(PriceRecord.objects.filter(blank_commodity | blank_years).values_list('id', flat=True))

    PriceRecord.objects.filter(blank_commodity).update(commodity=const.UNKNOWN_COMMODITY)
    PriceRecord.objects.filter(blank_years).update(years=default_year)

    if touched_ids:
        clear_analysis_cache()

    stats = {
        'total': total,
        'updated': len(touched_ids),
        'unchanged': total - len(touched_ids),
        'default_year': default_year,
    }
    logger.info(f"Migration result: {libjson.dumps(stats)}")

    return stats
