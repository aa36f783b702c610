# -*- coding: utf-8 -*-
"""module for price_processors package-level constants

Let's be Pythonic 💪 let's not mutate CAPITAL_VARIABLE elsewhere!
Consider Enum, if there's a need for un-mutable (name, value) and better protected tuple pair.
"""

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_ABBREVIATIONS = [m[:3].upper() for m in MONTH_NAMES]

CURRENCY_SYMBOLS = "₱$€¥"
INVALID_PRICE_TOKENS = ("#N/A", "#DIV/0!", "#VALUE!", "-", "N/A")

DEFAULT_COMPLIANCE_TOLERANCE = 0.10
DEFAULT_IMPORT_YEAR = "2023"
DEFAULT_IMPORT_MONTH = "January"
MIGRATION_BASE_YEAR = 2025

UNKNOWN_BRAND = "UnknownBrand"
UNKNOWN_STORE = "Unknown"
UNKNOWN_COMMODITY = "Unknown"

TOP_N = 5
DASHBOARD_PREVAILING_LIMIT = 8
DASHBOARD_SRP_COMPARISON_LIMIT = 10
DASHBOARD_DATE_RANGES = {
    '30d': 30,
    '90d': 90,
}

ANALYSIS_CACHE_KEY = "price_processors.analysis.records"
ANALYSIS_CACHE_SECONDS = 300

# DTI monitoring sheet layout
SHEET_HEADER_SCAN_ROWS = 50
SHEET_PERIOD_SCAN_ROWS = 10
SHEET_PRODUCT_COL = 1
SHEET_UNIT_COL = 2
SHEET_SRP_COL = 3
SHEET_FIRST_STORE_COL = 4
SHEET_CATEGORY_HEADERS = ("BASIC NECESSITIES", "PRIME COMMODITIES")
SHEET_STOP_MARKERS = ("PRIME COMMODITIES", "CONSTRUCTION MATERIALS")
SHEET_METADATA_HEADERS = ("Remarks", "No. of", "Average", "Modality", "Max Value", "PF", "vs. SRP", "SRP as of")

EXPORT_COLUMNS = ["Brand", "Commodity", "Month", "Price", "Size", "Store", "Variant", "Years"]

LETTER_RESPONSE_WORKING_DAYS = 5
LETTER_BLANK_ROWS = 3
