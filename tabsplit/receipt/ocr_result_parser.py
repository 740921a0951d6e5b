"""Parse raw OCR text into structured ParsedReceipt data."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from tabsplit.domain.receipt import ClassifiedLine, Item, Metadata, ParsedReceipt, RawLine, Summary
from tabsplit.runtime.logging import get_logger

from .confidence import calculate_confidence
from .ocr_parser import (
    _extract_date,
    _extract_items,
    _extract_merchant,
    _extract_metadata,
    _extract_summary,
    classify_line,
    items_from_classified,
)
from .parser_rules import DEFAULT_PATTERNS, ReceiptPatterns

logger = get_logger(__name__)

LINE_BREAKS = re.compile(r"\r\n|\r")


@dataclass(frozen=True)
class PreprocessedText:
    """Receipt lines before and after boilerplate filtering."""

    all_lines: tuple[RawLine, ...]  # Feeds metadata; merchant is often line 1
    item_lines: tuple[RawLine, ...]  # Feeds item and summary classification


def preprocess_text(text: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> PreprocessedText:
    """Split text into trimmed non-empty lines and drop header/footer boilerplate."""
    if not isinstance(text, str):
        return PreprocessedText(all_lines=(), item_lines=())

    all_lines = tuple(
        RawLine(text=line.strip(), position=position)
        for position, line in enumerate(LINE_BREAKS.sub("\n", text).split("\n"))
        if line.strip()
    )
    item_lines = tuple(line for line in all_lines if not patterns.skip.match(line.text))
    return PreprocessedText(all_lines=all_lines, item_lines=item_lines)


def parse_receipt_text(text: str, patterns: ReceiptPatterns | None = None) -> ParsedReceipt:
    """
    Parse raw OCR text into a ParsedReceipt.

    Never raises for malformed input: missing structure shows up as empty
    fields, zero amounts, and a lower confidence.

    Args:
        text: Raw OCR text, lines separated by \\n, \\r\\n or \\r
        patterns: Compiled pattern set; defaults to the built-in rules
    """
    if patterns is None:
        patterns = DEFAULT_PATTERNS
    if not isinstance(text, str) or not text.strip():
        logger.debug("Empty or non-text receipt input")
        return ParsedReceipt.empty()

    preprocessed = preprocess_text(text, patterns)
    classified = [classify_line(line.text, patterns) for line in preprocessed.item_lines]

    items = items_from_classified(classified)
    summary = _extract_summary(classified)
    metadata = _extract_metadata(preprocessed.all_lines, patterns)
    confidence = calculate_confidence(items, summary)

    logger.debug(
        "Parsed %d lines: %d items, total %s, confidence %.2f",
        len(preprocessed.all_lines),
        len(items),
        summary.total,
        confidence,
    )
    return ParsedReceipt(
        merchant=metadata.merchant,
        date=metadata.date,
        items=tuple(items),
        tax=summary.tax,
        tip=summary.tip,
        total=summary.total,
        subtotal=summary.subtotal,
        confidence=confidence,
    )


def extract_items(lines: Sequence[str | RawLine], patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> list[Item]:
    """Classify lines and return the cleaned items among them."""
    return _extract_items(lines, patterns)


def extract_summary(classified_lines: Sequence[ClassifiedLine]) -> Summary:
    """Fold classified lines into tax/tip/total/subtotal, last occurrence wins."""
    return _extract_summary(classified_lines)


def extract_metadata(lines: Sequence[str | RawLine], patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> Metadata:
    """Merchant from the first lines, date from anywhere."""
    return _extract_metadata(lines, patterns)


def extract_merchant(lines: Sequence[str | RawLine], patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> str:
    return _extract_merchant(lines, patterns)


def extract_date(lines: Sequence[str | RawLine], patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> str:
    return _extract_date(lines, patterns)
