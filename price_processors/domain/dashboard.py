# -*- coding: utf-8 -*-
"""dashboard domain module

Market situationer overview statistics. Unlike comparative analysis, the dashboard period filter
works on the observation timestamp only.
"""
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Optional, List

from price_processors import const
from price_processors.domain.comparative import is_compliant
from price_processors.domain.normalizer import to_observations, month_name
from price_processors.domain.prevailing import compute_prevailing_report
from price_processors.dto import DashboardStats, PriceObservation, MoverEntry, ComplianceType


def filter_label(commodity=None, store=None, month: Optional[int] = None, year: Optional[int] = None,
                 date_range: Optional[str] = None) -> str:
    parts = []
    if commodity:
        parts.append(f"Commodity: {commodity}")
    if store:
        parts.append(f"Store: {store}")
    if month:
        parts.append(f"Month: {month_name(month)}")
    if year:
        parts.append(f"Year: {year}")
    if not month and not year:
        if date_range in const.DASHBOARD_DATE_RANGES:
            parts.append(f"Range: Last {date_range}")
        else:
            parts.append("Range: All time")
    return " • ".join(parts) if parts else "All data"


def filter_observations(observations: List[PriceObservation], commodity=None, store=None,
                        month: Optional[int] = None, year: Optional[int] = None,
                        date_range: Optional[str] = None, now: Optional[datetime] = None) -> List[PriceObservation]:
    threshold = None
    if not month and not year and date_range in const.DASHBOARD_DATE_RANGES:
        now = now or datetime.now(tz=timezone.utc)
        threshold = now - timedelta(days=const.DASHBOARD_DATE_RANGES[date_range])

    filtered = []
    for obs in observations:
        if commodity and obs.commodity != commodity:
            continue
        if store and obs.store != store:
            continue
        ts = obs.timestamp
        if year and (ts is None or ts.year != int(year)):
            continue
        if month and (ts is None or ts.month != int(month)):
            continue
        if threshold and (ts is None or ts < threshold):
            continue
        filtered.append(obs)

    return filtered


def latest_per_commodity(observations: List[PriceObservation]) -> List[PriceObservation]:
    latest = OrderedDict()
    for obs in observations:
        if not obs.commodity:
            continue
        current = latest.get(obs.commodity)
        if current is None or obs.sort_ts >= current.sort_ts:
            latest[obs.commodity] = obs
    return list(latest.values())


def daily_average(observations: List[PriceObservation]) -> List[dict]:
    buckets = {}
    for obs in observations:
        if obs.timestamp is None:
            continue
        day = obs.timestamp.date().isoformat()
        bucket = buckets.setdefault(day, [0.0, 0])
        bucket[0] += obs.price
        bucket[1] += 1

    return [
        {'date': day, 'avg_price': round(total / count, 2)}
        for day, (total, count) in sorted(buckets.items())
    ]


def top_movers(observations: List[PriceObservation], limit: int = const.TOP_N):
    grouped = OrderedDict()
    for obs in observations:
        if not obs.commodity or not obs.store:
            continue
        grouped.setdefault((obs.commodity, obs.store), []).append(obs)

    deltas = []
    for (commodity, store), items in grouped.items():
        ordered = sorted(items, key=lambda o: o.sort_ts, reverse=True)
        latest = ordered[0].price
        previous = ordered[1].price if len(ordered) > 1 else latest
        deltas.append(MoverEntry(
            commodity=commodity,
            store=store,
            latest_price=latest,
            previous_price=previous,
            change=round(latest - previous, 2),
        ))

    up = sorted(deltas, key=lambda d: d.change, reverse=True)[:limit]
    down = sorted(deltas, key=lambda d: d.change)[:limit]
    return up, down


def build_dashboard(records, commodity=None, store=None, month: Optional[int] = None, year: Optional[int] = None,
                    date_range: Optional[str] = None, now: Optional[datetime] = None,
                    tolerance: float = const.DEFAULT_COMPLIANCE_TOLERANCE) -> DashboardStats:
    observations = filter_observations(
        to_observations(records),
        commodity=commodity,
        store=store,
        month=month,
        year=year,
        date_range=date_range,
        now=now,
    )

    by_price = sorted(observations, key=lambda o: o.price, reverse=True)
    latest = latest_per_commodity(observations)

    compliant = len([o for o in latest if is_compliant(o.price, o.srp, tolerance)])
    movers_up, movers_down = top_movers(observations)

    return DashboardStats(
        total_entries=len(observations),
        unique_commodities=len({o.commodity for o in observations if o.commodity}),
        unique_stores=len({o.store for o in observations if o.store}),
        prevailing=compute_prevailing_report(observations, limit=const.DASHBOARD_PREVAILING_LIMIT),
        highest=by_price[:const.TOP_N],
        lowest=list(reversed(by_price[-const.TOP_N:])) if by_price else [],
        compliance_breakdown={
            ComplianceType.COMPLIANT.value: compliant,
            ComplianceType.NON_COMPLIANT.value: len(latest) - compliant,
        },
        srp_vs_current=[
            {'commodity': o.commodity, 'current': o.price, 'srp': o.srp}
            for o in latest[:const.DASHBOARD_SRP_COMPARISON_LIMIT]
        ],
        time_series=daily_average(observations),
        movers_up=movers_up,
        movers_down=movers_down,
        filter_label=filter_label(commodity, store, month, year, date_range),
    )
