"""Normalization helpers for scraped listings.

Sites publish pay and posting dates in whatever shape suits them. These
helpers turn them into the two things the store needs: integer pay bounds in
thousands, and a calendar date.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

AMOUNT_RE = re.compile(r"(\d+(?:[.,]\d+)*)\s*([kKmM])?(?![a-zA-Z])")

RELATIVE_RE = re.compile(
    r"^(\d+)\s*(h|hr|hrs|hours?|d|days?|w|wk|wks|weeks?|mo|mos|months?|y|yr|yrs|years?)(?:\s+ago)?$"
)

ISO_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

DATE_FORMATS = ("%d %b %Y", "%b %d, %Y", "%d-%m-%Y", "%Y/%m/%d")


def _amount_in_thousands(number: str, suffix: Optional[str]) -> Optional[int]:
    cleaned = number.replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if suffix and suffix.lower() == "k":
        return round(value)
    if suffix and suffix.lower() == "m":
        return round(value * 1000)
    if value >= 1000:
        return round(value / 1000)
    return round(value)


def parse_remuneration(text: Optional[str]) -> Tuple[int, int]:
    """Extract (lower, upper) pay bounds in thousands from a display string.

    Returns (0, 0) when nothing numeric can be found, so unknown pay never
    passes a ``rem_upper > 0`` filter.

    Examples:
        >>> parse_remuneration("$100k - $150k")
        (100, 150)
        >>> parse_remuneration("$120,000 - $140,000")
        (120, 140)
        >>> parse_remuneration("Competitive")
        (0, 0)
    """
    if not text:
        return 0, 0
    amounts = []
    for match in AMOUNT_RE.finditer(text):
        amount = _amount_in_thousands(match.group(1), match.group(2))
        if amount is not None:
            amounts.append(amount)
        if len(amounts) == 2:
            break
    if not amounts:
        return 0, 0
    return min(amounts), max(amounts)


def parse_relative_date(text: str, today: dt.date) -> Optional[dt.date]:
    """Resolve phrases like "3d", "2 weeks ago" or "today" against today."""
    t = text.strip().lower()
    if t in {"today", "new", "just now", "now"}:
        return today
    if t == "yesterday":
        return today - dt.timedelta(days=1)
    match = RELATIVE_RE.match(t)
    if not match:
        return None
    count = int(match.group(1))
    unit = match.group(2)
    if unit.startswith("h"):
        return today
    if unit.startswith("d"):
        return today - dt.timedelta(days=count)
    if unit.startswith("w"):
        return today - dt.timedelta(weeks=count)
    if unit.startswith("mo"):
        return today - dt.timedelta(days=30 * count)
    return today - dt.timedelta(days=365 * count)


def parse_date(value: Optional[str], today: Optional[dt.date] = None) -> Optional[dt.date]:
    """Best-effort parsing of the date strings found on job sites."""
    if not value:
        return None
    today = today or dt.date.today()
    text = value.strip()
    if not text:
        return None
    if ISO_PREFIX_RE.match(text):
        # "2024-05-01", "2024-05-01T10:00:00Z", "2024-05-01 10:00:00 +0000"
        try:
            return dt.date.fromisoformat(text[:10])
        except ValueError:
            return None
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return parse_relative_date(text, today)
