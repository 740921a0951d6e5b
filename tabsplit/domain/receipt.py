"""Data models for receipt text structuring."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class LineKind(str, Enum):
    """Classification outcome for a single receipt line."""

    ITEM = "item"
    TAX = "tax"
    TIP = "tip"
    TOTAL = "total"
    SUBTOTAL = "subtotal"
    UNKNOWN = "unknown"


SUMMARY_KINDS = frozenset({LineKind.TAX, LineKind.TIP, LineKind.TOTAL, LineKind.SUBTOTAL})


@dataclass(frozen=True)
class RawLine:
    """A trimmed, non-empty line and its index in the normalized text."""

    text: str
    position: int


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of matching one line against the ordered rule set.

    Summary kinds carry ``amount``; ``ITEM`` carries name/price/quantity/confidence.
    The item ``name`` is the raw residual name; casing is cleaned when the Item is built.
    """

    kind: LineKind
    raw: str = ""
    amount: Decimal = ZERO
    name: str = ""
    price: Decimal = ZERO
    quantity: int = 1
    confidence: float = 0.0
    rule: str = ""  # Name of the matching rule, empty for UNKNOWN

    @property
    def is_summary(self) -> bool:
        return self.kind in SUMMARY_KINDS


@dataclass(frozen=True)
class Item:
    """A single line item on a receipt."""

    name: str
    price: Decimal
    quantity: int = 1
    confidence: float = 0.0
    raw: str = ""  # Source line, empty when built by a caller
    merged_from: tuple[str, ...] = ()  # Raw lines of a fuzzy-merged group

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
            "confidence": self.confidence,
        }
        if self.merged_from:
            data["merged_from"] = list(self.merged_from)
        return data


@dataclass(frozen=True)
class Summary:
    """Receipt-level monetary aggregates, zero when absent."""

    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO
    subtotal: Decimal = ZERO


@dataclass(frozen=True)
class Metadata:
    """Merchant name and canonical date (either may be empty)."""

    merchant: str = ""
    date: str = ""


@dataclass(frozen=True)
class ParsedReceipt:
    """Parsed receipt data returned by the top-level parse."""

    merchant: str = ""
    date: str = ""
    items: tuple[Item, ...] = field(default_factory=tuple)
    tax: Decimal = ZERO
    tip: Decimal = ZERO
    total: Decimal = ZERO
    subtotal: Decimal = ZERO
    confidence: float = 0.0

    @classmethod
    def empty(cls) -> ParsedReceipt:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-ready primitives; amounts are rendered as strings."""
        return {
            "merchant": self.merchant,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "tax": str(self.tax),
            "tip": str(self.tip),
            "total": str(self.total),
            "subtotal": str(self.subtotal),
            "confidence": self.confidence,
        }
