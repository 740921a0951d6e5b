"""Composable OCR receipt text parser components."""

from .common import (
    clean_item_name,
    extract_quantity,
    is_valid_item_name,
    looks_like_address,
    normalize_price,
    remove_quantity_from_name,
)
from .fields_parser import (
    _extract_date,
    _extract_merchant,
    _extract_metadata,
    _extract_summary,
)
from .items_text_parser import _extract_items, item_from_classified, items_from_classified
from .line_classifier import LINE_RULES, classify_line

__all__ = [
    "LINE_RULES",
    "_extract_date",
    "_extract_items",
    "_extract_merchant",
    "_extract_metadata",
    "_extract_summary",
    "classify_line",
    "clean_item_name",
    "extract_quantity",
    "is_valid_item_name",
    "item_from_classified",
    "items_from_classified",
    "looks_like_address",
    "normalize_price",
    "remove_quantity_from_name",
]
