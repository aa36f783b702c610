# -*- coding: utf-8 -*-
"""Data Transfer Object module contains pure data classes or POPO (Plain-Old-Python-Object)
Price analysis DTO data structure including enum for supplementing type definition
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any


class StatusType(Enum):
    HIGHER_THAN_PREVIOUS = "higher-than-previous"
    HIGHER_THAN_SRP = "higher-than-srp"
    DECREASED = "decreased"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @classmethod
    def label_of(cls, value) -> str:
        """Display label of a status value, UNKNOWN when it is not a known status"""
        try:
            return cls(value).label
        except ValueError:
            return "UNKNOWN"


STATUS_LABELS = {
    StatusType.HIGHER_THAN_PREVIOUS: "HIGHER THAN PREVIOUS PRICE",
    StatusType.HIGHER_THAN_SRP: "HIGHER THAN SRP",
    StatusType.DECREASED: "DECREASED",
}


class ComplianceType(Enum):
    COMPLIANT = "Compliant"
    NON_COMPLIANT = "Non-Compliant"


@dataclass
class PriceObservation(object):
    """One normalised price record. Declared month/year are kept both raw (label) and parsed."""
    commodity: str
    price: float
    srp: float = 0.0
    brand: str = ""
    brands: List[str] = field(default_factory=list)
    size: str = ""
    store: str = ""
    variant: str = ""
    category: str = ""
    month: Optional[int] = None
    year: Optional[int] = None
    month_label: str = ""
    year_label: str = ""
    timestamp: Optional[datetime] = None
    id: Optional[Any] = None

    @property
    def effective_month(self) -> Optional[int]:
        if self.month is not None:
            return self.month
        return self.timestamp.month if self.timestamp else None

    @property
    def effective_year(self) -> Optional[int]:
        if self.year is not None:
            return self.year
        return self.timestamp.year if self.timestamp else None

    @property
    def sort_ts(self) -> float:
        return self.timestamp.timestamp() if self.timestamp else 0


@dataclass
class PrevailingEntry(object):
    commodity: str
    prevailing_price: float
    srp: float
    count: int
    avg_price: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class ComparativeRow(object):
    commodity: str
    brand: str
    size: str
    store: str
    current_price: float
    previous_price: float
    price_change: float
    percent_change: float
    srp: float
    prevailing_price: Optional[float]
    status_type: StatusType
    is_compliant: bool
    month: str = ""
    year: str = ""
    entry_count: int = 0

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['status_type'] = self.status_type.value
        data['status_label'] = self.status_type.label
        return data


@dataclass
class StoreSrpStat(object):
    store: str
    avg_srp: float
    max_srp: float
    product_count: int


@dataclass
class ComparativeSummary(object):
    total_records: int = 0
    compliant_count: int = 0
    non_compliant_count: int = 0
    compliance_rate: float = 0.0
    commodity_count: int = 0
    store_count: int = 0
    avg_price_change: float = 0.0
    status_counts: Dict[str, int] = field(default_factory=dict)
    top_increases: List[ComparativeRow] = field(default_factory=list)
    top_decreases: List[ComparativeRow] = field(default_factory=list)
    top_non_compliant: Optional[ComparativeRow] = None
    stores_highest_srp: List[StoreSrpStat] = field(default_factory=list)
    narrative: str = ""

    def to_dict(self) -> Dict:
        return {
            'total_records': self.total_records,
            'compliant_count': self.compliant_count,
            'non_compliant_count': self.non_compliant_count,
            'compliance_rate': self.compliance_rate,
            'commodity_count': self.commodity_count,
            'store_count': self.store_count,
            'avg_price_change': self.avg_price_change,
            'status_counts': dict(self.status_counts),
            'top_increases': [r.to_dict() for r in self.top_increases],
            'top_decreases': [r.to_dict() for r in self.top_decreases],
            'top_non_compliant': self.top_non_compliant.to_dict() if self.top_non_compliant else None,
            'stores_highest_srp': [asdict(s) for s in self.stores_highest_srp],
            'narrative': self.narrative,
        }


@dataclass
class MoverEntry(object):
    commodity: str
    store: str
    latest_price: float
    previous_price: float
    change: float


@dataclass
class DashboardStats(object):
    total_entries: int = 0
    unique_commodities: int = 0
    unique_stores: int = 0
    prevailing: List[PrevailingEntry] = field(default_factory=list)
    highest: List[PriceObservation] = field(default_factory=list)
    lowest: List[PriceObservation] = field(default_factory=list)
    compliance_breakdown: Dict[str, int] = field(default_factory=dict)
    srp_vs_current: List[Dict] = field(default_factory=list)
    time_series: List[Dict] = field(default_factory=list)
    movers_up: List[MoverEntry] = field(default_factory=list)
    movers_down: List[MoverEntry] = field(default_factory=list)
    filter_label: str = ""

    def to_dict(self) -> Dict:
        def _obs(o: PriceObservation):
            return {
                'id': o.id,
                'commodity': o.commodity,
                'brand': o.brand,
                'store': o.store,
                'size': o.size,
                'price': o.price,
                'srp': o.srp,
                'timestamp': o.timestamp,
            }

        return {
            'total_entries': self.total_entries,
            'unique_commodities': self.unique_commodities,
            'unique_stores': self.unique_stores,
            'prevailing': [p.to_dict() for p in self.prevailing],
            'highest': [_obs(o) for o in self.highest],
            'lowest': [_obs(o) for o in self.lowest],
            'compliance_breakdown': dict(self.compliance_breakdown),
            'srp_vs_current': list(self.srp_vs_current),
            'time_series': list(self.time_series),
            'top_movers': {
                'up': [asdict(m) for m in self.movers_up],
                'down': [asdict(m) for m in self.movers_down],
            },
            'filter_label': self.filter_label,
        }
