"""Letter of inquiry to establishments observed selling above SRP"""
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Dict

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import timezone

from price_processors import const
from price_processors.domain.normalizer import to_observation, parse_price
from price_processors.exceptions import EmptyLetterSelection
from price_processors.services import report_srv
from utils import libdt

logger = logging.getLogger(__name__)


@dataclass
class LetterRow(object):
    commodity: str
    brand: str
    price_class: str
    srp: str
    monitored_price: str
    variance: str


@dataclass
class InquiryLetter(object):
    store: str
    letter_date: date
    date_observed: str
    subject: str
    office_name: str
    office_division: str
    office_email: str
    officer: str = ""
    response_days: int = const.LETTER_RESPONSE_WORKING_DAYS
    rows: List[LetterRow] = field(default_factory=list)
    blank_rows: int = const.LETTER_BLANK_ROWS


def is_flagged(record: dict) -> bool:
    srp = parse_price(record.get('srp'))
    return srp > 0 and parse_price(record.get('price')) > srp


def flagged_items(records) -> List[dict]:
    return [r for r in records if is_flagged(r)]


def flagged_by_store(records) -> Dict[str, List[dict]]:
    groups = OrderedDict()
    for record in flagged_items(records):
        groups.setdefault(record.get('store') or const.UNKNOWN_STORE, []).append(record)
    return groups


def format_long_date(value) -> str:
    return libdt.long_date(value)


def build_letter(records: List[dict], letter_date: Optional[date] = None, officer: str = "") -> InquiryLetter:
    if not records:
        raise EmptyLetterSelection()

    first = to_observation(records[0])
    observed_at = first.timestamp or timezone.now()

    rows = []
    for record in records:
        obs = to_observation(record)
        rows.append(LetterRow(
            commodity=obs.commodity,
            brand=obs.brand,
            price_class=obs.variant,
            srp=report_srv.format_currency(obs.srp),
            monitored_price=report_srv.format_currency(obs.price),
            variance=report_srv.format_currency(obs.price - obs.srp),
        ))

    commodities = ", ".join(r.commodity for r in rows)

    return InquiryLetter(
        store=first.store or "your store",
        letter_date=letter_date or timezone.now().date(),
        date_observed=format_long_date(observed_at),
        subject=f"Price Inquiry - {commodities}",
        office_name=settings.PRICE_OFFICE_NAME,
        office_division=settings.PRICE_OFFICE_DIVISION,
        office_email=settings.PRICE_OFFICE_EMAIL,
        officer=officer,
        rows=rows,
    )


def render_letter(letter: InquiryLetter) -> str:
    return render_to_string("price_portal/inquiry_letter.html", {
        'letter': letter,
        'blank_rows': range(letter.blank_rows),
    })


def render_letter_pdf(letter: InquiryLetter) -> bytes:
    pdf = report_srv.html_to_pdf(render_letter(letter))
    logger.info(f"Rendered inquiry letter for {letter.store} with {len(letter.rows)} items")
    return pdf


def letter_filename(letter: InquiryLetter, ext: str) -> str:
    store = "".join(c if c.isalnum() else "_" for c in letter.store).strip("_") or "store"
    return f"Letter_of_Inquiry_{store}_{letter.letter_date:%Y-%m-%d}.{ext}"
