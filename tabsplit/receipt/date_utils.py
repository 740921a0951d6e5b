"""Date helpers for receipt parsing."""

import re

from dateutil import parser as date_parser

from tabsplit.runtime.logging import get_logger

logger = get_logger(__name__)

# Manual reordering formats, tried when calendar parsing fails.
_YEAR_FIRST = re.compile(r"(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})")
_YEAR_LAST = re.compile(r"(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})")


def _expand_year(year: str) -> str:
    if len(year) == 2:
        # Map 2-digit years to 2000s/1900s
        value = int(year)
        return str(2000 + value if value <= 69 else 1900 + value)
    return year


def _parse_calendar_date(token: str) -> str | None:
    try:
        parsed = date_parser.parse(token, dayfirst=False)
    except (ValueError, OverflowError):
        logger.debug("Calendar parsing failed for date token %r", token)
        return None
    return parsed.date().isoformat()


def normalize_date(token: str) -> str:
    """
    Normalize a matched date token to ``YYYY-MM-DD``.

    Ambiguous numeric dates are read month-first (North America). When
    calendar parsing fails, fields are reordered by the matched format without
    calendar validation; when nothing matches, the token is returned as-is.
    """
    if not token:
        return ""
    token = token.strip()

    parsed = _parse_calendar_date(token)
    if parsed:
        return parsed

    match = _YEAR_FIRST.search(token)
    if match:
        year, month, day = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    match = _YEAR_LAST.search(token)
    if match:
        first, second, year = match.groups()
        month, day = (second, first) if int(first) > 12 else (first, second)
        return f"{_expand_year(year)}-{month.zfill(2)}-{day.zfill(2)}"

    return token
