# -*- coding: utf-8 -*-
"""prevailing price domain module

Prevailing price is the most representative price observed for a product:
  1. the single most frequent price, if it repeats and no other price ties with it
  2. otherwise the highest price at or below SRP, when an SRP is known
  3. otherwise the highest observed price
"""
from collections import Counter, OrderedDict
from typing import Iterable, Optional, List

from price_processors.domain.normalizer import to_price, to_observations
from price_processors.dto import PrevailingEntry


def compute_prevailing_price(prices: Iterable, srp=None) -> Optional[float]:
    values = [p for p in (to_price(v) for v in prices) if p is not None]
    if not values:
        return None

    frequency = Counter(values)
    max_freq = max(frequency.values())
    modes = [price for price, count in frequency.items() if count == max_freq]

    if max_freq > 1 and len(modes) == 1:
        return modes[0]

    srp_value = to_price(srp) or 0.0
    if srp_value > 0:
        at_or_below_srp = [p for p in values if p <= srp_value]
        if at_or_below_srp:
            return max(at_or_below_srp)

    return max(values)


def compute_prevailing_report(records, limit: Optional[int] = None) -> List[PrevailingEntry]:
    """
    Prevailing price per commodity, most observed commodities first

    :param records: record dicts or PriceObservation
    :param limit: keep only the first N commodities
    """
    grouped = OrderedDict()
    for obs in to_observations(records):
        if not obs.commodity:
            continue
        grouped.setdefault(obs.commodity, []).append(obs)

    report = []
    for commodity, items in grouped.items():
        prices = [o.price for o in items]
        srp = next((o.srp for o in items if o.srp > 0), 0.0)

        prevailing = compute_prevailing_price(prices, srp)
        if prevailing is None:
            continue

        report.append(PrevailingEntry(
            commodity=commodity,
            prevailing_price=prevailing,
            srp=srp,
            count=len(items),
            avg_price=round(sum(prices) / len(prices), 2),
        ))

    report.sort(key=lambda e: e.count, reverse=True)

    if limit is not None:
        report = report[:limit]

    return report
