"""Structure noisy OCR receipt text into items, totals, and metadata.

Usage:
    from tabsplit import parse_receipt_text, merge_similar_items

    receipt = parse_receipt_text(ocr_text)
    items = merge_similar_items(receipt.items)
"""

from tabsplit.domain.receipt import ClassifiedLine, Item, LineKind, ParsedReceipt, Summary
from tabsplit.receipt.confidence import calculate_confidence
from tabsplit.receipt.matcher import calculate_similarity, find_best_match, merge_similar_items
from tabsplit.receipt.ocr_parser import classify_line, normalize_price
from tabsplit.receipt.ocr_result_parser import extract_items, parse_receipt_text

__all__ = [
    "ClassifiedLine",
    "Item",
    "LineKind",
    "ParsedReceipt",
    "Summary",
    "calculate_confidence",
    "calculate_similarity",
    "classify_line",
    "extract_items",
    "find_best_match",
    "merge_similar_items",
    "normalize_price",
    "parse_receipt_text",
]
