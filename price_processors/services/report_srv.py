"""Comparative price analysis report and price data export

Formats:
    json  - comparative rows and summary as plain dict
    csv   - comparative rows table
    xlsx  - comparative rows table, one sheet
    docx  - Word document with situationer, top movers and SRP landscape tables
    pdf   - HTML template rendered through WeasyPrint
"""
import io
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import pandas as pd
from django.template.loader import render_to_string
from django.utils import timezone
from docx import Document
from docx.enum.section import WD_ORIENT
from docx.shared import Pt, Inches

from price_processors import const
from price_processors.domain.comparative import build_comparative_rows
from price_processors.domain.normalizer import normalize_month, month_name
from price_processors.domain.summary import summarize, report_title
from price_processors.dto import ComparativeRow, ComparativeSummary
from price_processors.exceptions import UnsupportedReportFormat
from price_processors.services import price_srv
from utils import libdt

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    'json': 'application/json',
    'csv': 'text/csv',
    'xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'pdf': 'application/pdf',
    'html': 'text/html',
}

REPORT_FORMATS = ['json', 'csv', 'xlsx', 'docx', 'pdf']
EXPORT_FORMATS = ['csv', 'xlsx']

MOVER_HEADERS = [
    "Brand", "Commodity", "Size", "Store", "Previous Price", "SRP", "Current Price",
    "Price Change (₱)", "Change (%)", "Status",
]
STORE_HEADERS = ["Store", "Average SRP", "Max SRP", "Products"]
ROW_HEADERS = [
    "Brand", "Commodity", "Size", "Store", "Month", "Year", "Prevailing Price", "SRP", "Previous Price",
    "Current Price", "Price Change", "Change (%)", "Status", "Compliant",
]

FOOTER = "This report summarizes prevailing prices and compliance status across monitored establishments."

_PESO_PATTERN = re.compile(r"[+-]?₱-?")


@dataclass
class ComparativeReport(object):
    title: str
    rows: List[ComparativeRow]
    summary: ComparativeSummary
    month: Optional[int] = None
    year: Optional[str] = None
    generated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'generated_at': self.generated_at,
            'rows': [r.to_dict() for r in self.rows],
            'summary': self.summary.to_dict(),
        }


def format_currency(value) -> str:
    value = float(value or 0)
    return f"{'-' if value < 0 else ''}Php {abs(value):,.2f}"


def format_percent(value) -> str:
    value = float(value or 0)
    return f"{'-' if value < 0 else ''}{abs(value):.1f}%"


def narrative_lines(narrative: str) -> List[str]:
    """Non-blank narrative lines with peso amounts spelled as Php, negative sign only"""
    def _php(match):
        return f"{'-' if '-' in match.group(0) else ''}Php "

    return [line for line in _PESO_PATTERN.sub(_php, narrative or "").splitlines() if line.strip()]


def report_filename(month=None, year=None, ext: str = 'pdf') -> str:
    month_part = month_name(normalize_month(month)) or "AllMonths"
    year_part = str(year) if year else "AllYears"
    return f"Comparative_Analysis_{year_part}_{month_part}.{ext}"


def build_report(month=None, year=None, commodity=None, store=None, search=None, brand=None) -> ComparativeReport:
    rows = build_comparative_rows(
        price_srv.get_all_records(),
        month=month,
        year=year,
        commodity=commodity,
        store=store,
        search=search,
        tolerance=price_srv.get_compliance_tolerance(),
    )
    summary = summarize(rows, month=month, year=year)

    return ComparativeReport(
        title=report_title(commodity, brand, month, year),
        rows=rows,
        summary=summary,
        month=normalize_month(month),
        year=year,
        generated_at=timezone.now(),
    )


def mover_table(rows: List[ComparativeRow]) -> List[list]:
    return [
        [
            r.brand or "--",
            r.commodity,
            r.size or "--",
            r.store or "--",
            format_currency(r.previous_price),
            format_currency(r.srp),
            format_currency(r.current_price),
            format_currency(r.price_change),
            format_percent(r.percent_change),
            r.status_type.label,
        ]
        for r in rows
    ]


def store_table(summary: ComparativeSummary) -> List[list]:
    return [
        [s.store, format_currency(s.avg_srp), format_currency(s.max_srp), s.product_count]
        for s in summary.stores_highest_srp
    ]


def rows_frame(rows: List[ComparativeRow]) -> pd.DataFrame:
    data = [
        [
            r.brand, r.commodity, r.size, r.store, r.month, r.year, r.prevailing_price, r.srp, r.previous_price,
            r.current_price, r.price_change, round(r.percent_change, 1), r.status_type.label,
            "Yes" if r.is_compliant else "No",
        ]
        for r in rows
    ]
    return pd.DataFrame(data, columns=ROW_HEADERS)


def frame_to_csv(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode('utf-8')


def frame_to_xlsx(df: pd.DataFrame, sheet_name: str) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    return buffer.getvalue()


def _add_table(document: Document, headers: list, rows: List[list]):
    table = document.add_table(rows=1, cols=len(headers))
    table.style = 'Table Grid'

    for idx, header in enumerate(headers):
        cell = table.rows[0].cells[idx]
        cell.text = ""
        run = cell.paragraphs[0].add_run(str(header).upper())
        run.bold = True
        run.font.size = Pt(8)

    for row in rows:
        cells = table.add_row().cells
        for idx, value in enumerate(row):
            cells[idx].text = str(value)

    return table


def render_docx(report: ComparativeReport) -> bytes:
    document = Document()

    section = document.sections[0]
    section.orientation = WD_ORIENT.LANDSCAPE
    section.page_width, section.page_height = section.page_height, section.page_width
    section.left_margin = section.right_margin = Inches(0.5)

    document.add_heading(report.title, level=1)
    document.add_paragraph(f"Generated: {report.generated_at:%B %d, %Y %I:%M %p}")

    document.add_heading("Situationer", level=2)
    for line in narrative_lines(report.summary.narrative):
        document.add_paragraph(line)

    document.add_heading("Top 5 Highest Price Increases", level=2)
    _add_table(document, MOVER_HEADERS, mover_table(report.summary.top_increases))

    document.add_heading("Top 5 Lowest Price Changes (Decreases)", level=2)
    _add_table(document, MOVER_HEADERS, mover_table(report.summary.top_decreases))

    document.add_heading("Stores with Highest Average SRP", level=2)
    _add_table(document, STORE_HEADERS, store_table(report.summary))

    document.add_paragraph(FOOTER)

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def html_to_pdf(html: str) -> bytes:
    from weasyprint import HTML
    return HTML(string=html).write_pdf()


def render_html(report: ComparativeReport) -> str:
    context = {
        'report': report,
        'summary': report.summary,
        'narrative_lines': narrative_lines(report.summary.narrative),
        'mover_headers': MOVER_HEADERS,
        'top_increases': mover_table(report.summary.top_increases),
        'top_decreases': mover_table(report.summary.top_decreases),
        'store_headers': STORE_HEADERS,
        'stores': store_table(report.summary),
        'footer': FOOTER,
    }
    return render_to_string("price_portal/comparative_report.html", context)


def render_report(report: ComparativeReport, fmt: str):
    """
    :return: tuple of (content, filename, content type), content is a dict for json and bytes otherwise
    """
    if fmt not in REPORT_FORMATS:
        raise UnsupportedReportFormat(fmt)

    filename = report_filename(report.month, report.year, fmt)

    if fmt == 'json':
        content = report.to_dict()
    elif fmt == 'csv':
        content = frame_to_csv(rows_frame(report.rows))
    elif fmt == 'xlsx':
        content = frame_to_xlsx(rows_frame(report.rows), "Comparative Analysis")
    elif fmt == 'docx':
        content = render_docx(report)
    else:
        content = html_to_pdf(render_html(report))

    logger.info(f"Rendered {fmt} report {filename} with {len(report.rows)} rows")

    return content, filename, CONTENT_TYPES[fmt]


def records_frame(records) -> pd.DataFrame:
    data = [
        [
            r.get('brand', ""), r.get('commodity', ""), r.get('month', ""), r.get('price'), r.get('size', ""),
            r.get('store', ""), r.get('variant', ""), r.get('years', ""),
        ]
        for r in records
    ]
    return pd.DataFrame(data, columns=const.EXPORT_COLUMNS)


def export_records(records, fmt: str):
    """
    Price data export of plain record dicts, e.g. queryset.values()

    :return: tuple of (content, filename, content type)
    """
    if fmt not in EXPORT_FORMATS:
        raise UnsupportedReportFormat(fmt)

    df = records_frame(records)
    filename = f"price_data_{libdt.folder_friendly_timestamp(timezone.now())}.{fmt}"

    if fmt == 'csv':
        content = frame_to_csv(df)
    else:
        content = frame_to_xlsx(df, "Price Data")

    return content, filename, CONTENT_TYPES[fmt]
