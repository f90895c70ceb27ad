# psl_api/parsing.py
from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from psl_api.config import TOURNAMENT_YEAR

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH_NAMES = {
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december", "sept",
} | set(_MONTHS)

# "May 5, 2025, 7:00 PM" / "Sat, May 11" / "Apr 26"
_MONTH_DAY_RE = re.compile(r"\b([A-Za-z]{3,9})\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b(?:\s*,\s*(\d{4})\b)?")
# "11 May 2025" / "26th April"
_DAY_MONTH_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\s+([A-Za-z]{3,9})\.?(?:\s*,?\s*(\d{4})\b)?")

_TIME_RE = re.compile(r"\b(\d{1,2}:\d{2})\s*([AaPp])\.?[Mm]\.?")

VENUE_CITIES = {
    "Gaddafi Stadium": "Lahore",
    "Lahore": "Lahore",
    "National Stadium": "Karachi",
    "National Bank Stadium": "Karachi",
    "Karachi": "Karachi",
    "Multan Cricket Stadium": "Multan",
    "Multan": "Multan",
    "Rawalpindi Cricket Stadium": "Rawalpindi",
    "Pindi Cricket Stadium": "Rawalpindi",
    "Rawalpindi": "Rawalpindi",
}


def month_number(name: str) -> Optional[int]:
    n = name.strip().lower().rstrip(".")
    if n not in _MONTH_NAMES:
        return None
    return _MONTHS.get(n[:3])


def _format_date(year: int, month: int, day: int) -> str:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return ""


def parse_match_date(text: Optional[str], default_year: int = TOURNAMENT_YEAR) -> str:
    """
    Free-text match date -> 'YYYY-MM-DD'.

    Accepts "Sat, May 11", "May 5, 2025, 7:00 PM" and "11 May 2025".
    A missing year defaults to the tournament year. Unmatched or impossible
    dates return "" (unknown date).
    """
    if not text:
        return ""
    s = str(text)

    for m in _MONTH_DAY_RE.finditer(s):
        month = month_number(m.group(1))
        if month is None:
            continue
        year = int(m.group(3)) if m.group(3) else default_year
        return _format_date(year, month, int(m.group(2)))

    for m in _DAY_MONTH_RE.finditer(s):
        month = month_number(m.group(2))
        if month is None:
            continue
        year = int(m.group(3)) if m.group(3) else default_year
        return _format_date(year, month, int(m.group(1)))

    return ""


def parse_match_time(text: Optional[str]) -> str:
    if not text:
        return ""
    m = _TIME_RE.search(str(text))
    if not m:
        return ""
    return f"{m.group(1)} {m.group(2).upper()}M"


def extract_venue_city(venue: Optional[str]) -> str:
    s = (venue or "").strip()
    for key, city in VENUE_CITIES.items():
        if re.search(r"\b" + re.escape(key) + r"\b", s, flags=re.IGNORECASE):
            return city
    first = s.split(" ")[0].strip(",") if s else ""
    return first or "Unknown"


def safe_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default

        m = re.match(r"^([+-]?\d+)", sx)
        if m:
            return int(m.group(1))

        return int(float(sx))
    except (TypeError, ValueError):
        return default


def clean_nrr(x: Any, default: str = "0.000") -> str:
    """NRR stays an opaque signed decimal string; only whitespace/minus glyphs are normalised."""
    if x is None:
        return default
    s = str(x).strip().replace("−", "-")
    if not s or s.lower() == "nan":
        return default
    return s
