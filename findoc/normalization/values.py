"""Lenient parsers for untrusted model output.

Every function here returns a default instead of raising.
"""

import math
import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2}|\d{4})$")
_PARSER_ERRORS = (ValueError, OverflowError, TypeError)


def parse_money(raw: Any) -> float | None:
    """Parse a monetary value such as 1234.5, "$1,234.56" or "-45.00 USD".

    Returns None for missing, boolean, non-finite or unparseable input.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
        return number if math.isfinite(number) else None
    if not isinstance(raw, str):
        return None
    cleaned = _NON_NUMERIC.sub("", raw)
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_date(raw: Any, slash_order: str = "MDY") -> date | None:
    """Parse a date in any format dateutil understands. Returns None on failure.

    Slash dates follow slash_order, the same as transaction dates.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    iso = normalize_transaction_date(raw, slash_order)
    return date.fromisoformat(iso) if iso is not None else None


def normalize_transaction_date(raw: Any, slash_order: str = "MDY") -> str | None:
    """Normalize a transaction date to YYYY-MM-DD.

    Slash dates follow slash_order ("MDY" or "DMY"). Only the calendar date is
    kept, so no timezone conversion can shift the day.
    """
    if isinstance(raw, (date, datetime)):
        return parse_date(raw).isoformat()  # type: ignore[union-attr]
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if _ISO_DATE.match(text):
        return _iso_or_none(text)
    match = _SLASH_DATE.match(text)
    if match:
        return _slash_to_iso(match.groups(), slash_order)
    try:
        parsed = date_parser.parse(text, dayfirst=slash_order == "DMY")
    except _PARSER_ERRORS:
        return None
    return parsed.date().isoformat()


def normalize_statement_month(raw: Any) -> str | None:
    """Normalize a statement month to the ISO first day of that month."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    if _ISO_DATE.match(text):
        iso = _iso_or_none(text)
        return iso[:8] + "01" if iso is not None else None
    try:
        parsed = date_parser.parse(text, default=datetime(2000, 1, 1))
        # A year filled in from the default would be made up.
        if date_parser.parse(text, default=datetime(2001, 1, 1)).year != parsed.year:
            return None
    except _PARSER_ERRORS:
        return None
    return parsed.date().replace(day=1).isoformat()


def _iso_or_none(text: str) -> str | None:
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        return None


def _slash_to_iso(parts: tuple[str, ...], slash_order: str) -> str | None:
    first, second, year_text = parts
    month, day = (first, second) if slash_order == "MDY" else (second, first)
    year = int(year_text)
    if len(year_text) == 2:
        year += 2000
    try:
        return date(year, int(month), int(day)).isoformat()
    except ValueError:
        return None
