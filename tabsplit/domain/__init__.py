"""Core domain models for receipt text structuring.

Usage:
    from tabsplit.domain import Item, ParsedReceipt
"""

from tabsplit.domain.receipt import (
    SUMMARY_KINDS,
    ClassifiedLine,
    Item,
    LineKind,
    Metadata,
    ParsedReceipt,
    RawLine,
    Summary,
)

__all__ = [
    "SUMMARY_KINDS",
    "ClassifiedLine",
    "Item",
    "LineKind",
    "Metadata",
    "ParsedReceipt",
    "RawLine",
    "Summary",
]
