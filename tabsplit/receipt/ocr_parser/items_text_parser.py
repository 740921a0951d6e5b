"""Text-line based receipt item extraction."""

from collections.abc import Iterable, Sequence

from tabsplit.domain.receipt import ClassifiedLine, Item, LineKind, RawLine

from ..parser_rules import DEFAULT_PATTERNS, ReceiptPatterns
from .common import clean_item_name
from .line_classifier import classify_line


def item_from_classified(classified: ClassifiedLine) -> Item:
    """Build the final Item; name casing is cleaned here and only here."""
    return Item(
        name=clean_item_name(classified.name),
        price=classified.price,
        quantity=classified.quantity or 1,
        confidence=classified.confidence,
        raw=classified.raw,
    )


def items_from_classified(classified_lines: Iterable[ClassifiedLine]) -> list[Item]:
    return [item_from_classified(c) for c in classified_lines if c.kind is LineKind.ITEM]


def _extract_items(
    lines: Sequence[str | RawLine],
    patterns: ReceiptPatterns = DEFAULT_PATTERNS,
) -> list[Item]:
    """
    Extract line items from receipt lines.

    Each line is classified on its own; summary and unknown lines are dropped.
    Repeated identical lines stay separate items (two of the same drink).

    Args:
        lines: Receipt lines, already stripped of header/footer boilerplate
        patterns: Compiled pattern set to classify with
    """
    classified = (classify_line(line.text if isinstance(line, RawLine) else line, patterns) for line in lines)
    return items_from_classified(classified)
