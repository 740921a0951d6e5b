"""Merchant/date/summary amount extraction helpers."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from functools import reduce

from tabsplit.domain.receipt import ZERO, ClassifiedLine, LineKind, Metadata, RawLine, Summary

from ..date_utils import normalize_date
from ..parser_rules import DEFAULT_PATTERNS, ReceiptPatterns

MERCHANT_SCAN_LINES = 5
MERCHANT_MIN_LENGTH = 3
MERCHANT_MAX_LENGTH = 49

_SUMMARY_FIELDS = {
    LineKind.TAX: "tax",
    LineKind.TIP: "tip",
    LineKind.TOTAL: "total",
    LineKind.SUBTOTAL: "subtotal",
}


def _line_text(line: str | RawLine) -> str:
    return line.text if isinstance(line, RawLine) else line.strip()


def _fold_summary(summary: Summary, classified: ClassifiedLine) -> Summary:
    """Reducer: a later summary line of the same kind replaces the earlier one."""
    field_name = _SUMMARY_FIELDS.get(classified.kind)
    if field_name is None:
        return summary
    return replace(summary, **{field_name: classified.amount})


def _infer_subtotal(summary: Summary) -> Summary:
    """Derive a missing subtotal from total - tax - tip (may go negative)."""
    if summary.subtotal == ZERO and summary.total > ZERO and summary.tax > ZERO:
        return replace(summary, subtotal=summary.total - summary.tax - summary.tip)
    return summary


def _extract_summary(classified_lines: Iterable[ClassifiedLine]) -> Summary:
    """Collapse tax/tip/total/subtotal lines into one Summary, last occurrence wins."""
    return _infer_subtotal(reduce(_fold_summary, classified_lines, Summary()))


def _extract_merchant(
    lines: Sequence[str | RawLine],
    patterns: ReceiptPatterns = DEFAULT_PATTERNS,
) -> str:
    """
    Extract merchant name from the first few unfiltered lines.

    Accepts the first proper-noun-like line (capitalized, letters/digits/&/'/-
    only, optional business suffix) that is neither a date nor a price line.
    """
    for line in lines[:MERCHANT_SCAN_LINES]:
        text = _line_text(line)
        if not MERCHANT_MIN_LENGTH <= len(text) <= MERCHANT_MAX_LENGTH:
            continue
        if not patterns.merchant.match(text):
            continue
        if patterns.date.search(text) or patterns.price_line.search(text):
            continue
        return text
    return ""


def _extract_date(
    lines: Sequence[str | RawLine],
    patterns: ReceiptPatterns = DEFAULT_PATTERNS,
) -> str:
    """Extract the first date token on any line as YYYY-MM-DD ("" if none)."""
    for line in lines:
        text = patterns.date_label.sub("", _line_text(line))
        match = patterns.date.search(text)
        if match:
            return normalize_date(match.group(1))
    return ""


def _extract_metadata(
    lines: Sequence[str | RawLine],
    patterns: ReceiptPatterns = DEFAULT_PATTERNS,
) -> Metadata:
    return Metadata(
        merchant=_extract_merchant(lines, patterns),
        date=_extract_date(lines, patterns),
    )
