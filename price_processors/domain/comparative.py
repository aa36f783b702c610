# -*- coding: utf-8 -*-
"""comparative analysis domain module

Group price observations by product and store, compare the latest price against the one before it,
against SRP and against the group prevailing price.
"""
from collections import OrderedDict
from typing import Optional, List

from price_processors import const
from price_processors.domain.normalizer import to_observations, normalize_month
from price_processors.domain.prevailing import compute_prevailing_price
from price_processors.dto import StatusType, ComparativeRow, PriceObservation


def is_compliant(price: float, srp: Optional[float], tolerance: float = const.DEFAULT_COMPLIANCE_TOLERANCE) -> bool:
    """Strictly inside the SRP tolerance band. A product without SRP is always compliant."""
    if not srp or srp <= 0:
        return True
    lower, upper = round(srp * (1 - tolerance), 2), round(srp * (1 + tolerance), 2)
    return lower < round(price, 2) < upper


def classify_status(current: float, previous: float, srp: Optional[float]) -> StatusType:
    if current > previous:
        return StatusType.HIGHER_THAN_PREVIOUS
    if srp and srp > 0 and current > srp:
        return StatusType.HIGHER_THAN_SRP
    return StatusType.DECREASED


def matches_period(obs: PriceObservation, month=None, year=None) -> bool:
    """Declared month/year win over the timestamp, which only fills in what is missing"""
    selected_month = normalize_month(month)
    selected_year = int(year) if year not in (None, "") else None

    if selected_month is None and selected_year is None:
        return True

    if selected_month is not None and obs.effective_month != selected_month:
        return False

    if selected_year is not None and obs.effective_year != selected_year:
        return False

    return True


def _group_key(obs: PriceObservation):
    return (
        obs.commodity,
        obs.brand or const.UNKNOWN_BRAND,
        obs.size,
        obs.store or const.UNKNOWN_STORE,
    )


def _sort_text(value) -> str:
    return str(value or "").strip().lower()


def build_comparative_rows(records, month=None, year=None, commodity: Optional[str] = None,
                           store: Optional[str] = None, search: Optional[str] = None,
                           tolerance: float = const.DEFAULT_COMPLIANCE_TOLERANCE) -> List[ComparativeRow]:
    groups = OrderedDict()
    for obs in to_observations(records):
        if not obs.commodity:
            continue
        if not matches_period(obs, month, year):
            continue

        key = _group_key(obs)
        group = groups.setdefault(key, {'entries': [], 'brands': []})
        group['entries'].append(obs)
        for b in obs.brands:
            if b not in group['brands']:
                group['brands'].append(b)

    rows = []
    for (g_commodity, _, g_size, g_store), group in groups.items():
        entries = sorted(group['entries'], key=lambda o: o.sort_ts, reverse=True)

        current = entries[0].price if entries else 0.0
        previous = entries[1].price if len(entries) > 1 and entries[1].price else current

        change = round(current - previous, 2)
        percent = (change / previous * 100) if previous != 0 else 0.0

        srp = entries[0].srp if entries else 0.0
        prevailing = compute_prevailing_price([o.price for o in entries], srp)

        with_year = next((o for o in entries if o.year_label), None)

        rows.append(ComparativeRow(
            commodity=g_commodity,
            brand=", ".join(group['brands']),
            size=g_size,
            store=g_store,
            current_price=current,
            previous_price=previous,
            price_change=change,
            percent_change=round(percent, 2),
            srp=srp,
            prevailing_price=prevailing,
            status_type=classify_status(current, previous, srp),
            is_compliant=is_compliant(current, srp, tolerance),
            month=with_year.month_label if with_year else "",
            year=with_year.year_label if with_year else "",
            entry_count=len(entries),
        ))

    if commodity:
        rows = [r for r in rows if r.commodity == commodity]

    if store:
        rows = [r for r in rows if r.store == store]

    if search:
        term = search.strip().lower()
        rows = [r for r in rows if term in r.commodity.lower() or term in r.store.lower()]

    rows.sort(key=lambda r: (_sort_text(r.store), _sort_text(r.commodity)))

    return rows


def deduplicate_prices(records) -> List[PriceObservation]:
    """Latest observation per commodity, store, brand and size"""
    latest = OrderedDict()
    for obs in to_observations(records):
        if not obs.commodity:
            continue
        key = (
            obs.commodity,
            obs.store or 'unknown',
            obs.brand or 'unknown',
            obs.size or 'unknown',
        )
        existing = latest.get(key)
        if existing is None or obs.sort_ts > existing.sort_ts:
            latest[key] = obs
    return list(latest.values())


def unique_values(records, field: str) -> List[str]:
    values = set()
    for record in records:
        value = record.get(field) if isinstance(record, dict) else getattr(record, field, None)
        if value:
            values.add(str(value))
    return sorted(values)
