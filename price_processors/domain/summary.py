# -*- coding: utf-8 -*-
"""summary domain module

Aggregate comparative rows into compliance counts, top movers and the situationer narrative
that heads the comparative price analysis report.
"""
from collections import OrderedDict
from typing import List, Optional

from price_processors import const
from price_processors.domain.normalizer import normalize_month, month_name
from price_processors.dto import ComparativeRow, ComparativeSummary, StatusType, StoreSrpStat


def _distinct(values) -> int:
    return len({str(v).strip().lower() for v in values if str(v or "").strip()})


def stores_with_highest_srp(rows: List[ComparativeRow], limit: int = const.TOP_N) -> List[StoreSrpStat]:
    by_store = OrderedDict()
    for row in rows:
        if not row.srp:
            continue
        by_store.setdefault(row.store, []).append(row.srp)

    stats = [
        StoreSrpStat(
            store=store,
            avg_srp=round(sum(srps) / len(srps), 2),
            max_srp=max(srps),
            product_count=len(srps),
        )
        for store, srps in by_store.items()
    ]
    stats.sort(key=lambda s: s.avg_srp, reverse=True)
    return stats[:limit]


def report_header(month=None, year=None) -> str:
    m = normalize_month(month)
    if m is not None and year:
        return f"Report for {month_name(m)} {year}"
    if year:
        return f"Report for {year}"
    return "Report for all months/years"


def report_title(commodity: Optional[str] = None, brand: Optional[str] = None, month=None, year=None) -> str:
    title = "Comparative Price Analysis Report"
    if commodity:
        title += f" — {commodity}"
        if brand:
            title += f" ({brand})"
    m = normalize_month(month)
    period = " ".join(p for p in (month_name(m), str(year or "")) if p)
    if period:
        title += f" for {period}"
    return title


def _signed_peso(value: float) -> str:
    sign = "+" if value > 0 else "-" if value < 0 else ""
    return f"{sign}₱{abs(value):.2f}"


def build_narrative(summary: ComparativeSummary, month=None, year=None) -> str:
    counts = summary.status_counts

    top_increase = summary.top_increases[0] if summary.top_increases else None
    top_decrease = summary.top_decreases[0] if summary.top_decreases else None

    if top_increase:
        movers = (f"The highest increase was {top_increase.commodity} at {top_increase.store} "
                  f"(₱{top_increase.price_change:.2f}).")
    else:
        movers = "No data available"

    if top_decrease and top_decrease.price_change != 0:
        movers += (f" The largest decrease was {top_decrease.commodity} at {top_decrease.store} "
                   f"(₱{top_decrease.price_change:.2f}).")

    if summary.stores_highest_srp:
        top_store = summary.stores_highest_srp[0]
        landscape = f"The store with the highest average SRP is {top_store.store} at ₱{top_store.avg_srp:.2f}."
    else:
        landscape = "The store with the highest average SRP is N/A at ₱0.00."

    lines = [
        report_header(month, year),
        f"Price Movement Summary: Across {summary.total_records} monitored products, "
        f"the average price change is {_signed_peso(summary.avg_price_change)}.",
        f"Status breakdown: {counts.get(StatusType.HIGHER_THAN_PREVIOUS.value, 0)} higher than previous price, "
        f"{counts.get(StatusType.HIGHER_THAN_SRP.value, 0)} higher than SRP, "
        f"{counts.get(StatusType.DECREASED.value, 0)} decreased.",
        "",
        f"Top Movers: {movers}",
        "",
        f"SRP Landscape: {landscape}",
    ]
    return "\n".join(lines)


def summarize(rows: List[ComparativeRow], month=None, year=None) -> ComparativeSummary:
    total = len(rows)
    compliant = len([r for r in rows if r.is_compliant])

    summary = ComparativeSummary(
        total_records=total,
        compliant_count=compliant,
        non_compliant_count=total - compliant,
        compliance_rate=round(compliant / total * 100, 1) if total else 0.0,
        commodity_count=_distinct(r.commodity for r in rows),
        store_count=_distinct(r.store for r in rows),
        avg_price_change=round(sum(r.price_change for r in rows) / total, 2) if total else 0.0,
        status_counts={s.value: len([r for r in rows if r.status_type == s]) for s in StatusType},
        top_increases=sorted(rows, key=lambda r: r.price_change, reverse=True)[:const.TOP_N],
        top_decreases=sorted(rows, key=lambda r: r.price_change)[:const.TOP_N],
        stores_highest_srp=stores_with_highest_srp(rows),
    )

    non_compliant = [r for r in rows if not r.is_compliant]
    if non_compliant:
        summary.top_non_compliant = max(non_compliant, key=lambda r: (r.current_price - r.srp) if r.srp else 0)

    summary.narrative = build_narrative(summary, month, year)

    return summary
