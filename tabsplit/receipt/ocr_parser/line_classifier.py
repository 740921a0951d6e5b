"""Ordered rule set that classifies one receipt line.

Rules are tried in order and the first match wins, so more specific rules
(summary labels, dotted ledger rows) shadow the permissive trailing-price
fallback even when a later rule would report a different confidence.
"""

from collections.abc import Callable
from decimal import Decimal

from tabsplit.domain.receipt import ClassifiedLine, LineKind

from ..parser_rules import DEFAULT_PATTERNS, ReceiptPatterns
from .common import (
    extract_quantity,
    is_valid_item_name,
    looks_like_address,
    normalize_price,
    remove_quantity_from_name,
)

DOTTED_ITEM_CONFIDENCE = 0.92
EXPLICIT_QUANTITY_CONFIDENCE = 0.95
ITEM_LINE_CONFIDENCE = 0.85
FILLER_ITEM_LINE_CONFIDENCE = 0.90
TRAILING_PRICE_CONFIDENCE = 0.70

# Amounts in this range next to a street token read as house numbers
STREET_NUMBER_MIN = Decimal("100")
STREET_NUMBER_MAX = Decimal("99999")

LineRule = Callable[[str, ReceiptPatterns], ClassifiedLine | None]


def _item(
    line: str,
    rule: str,
    raw_name: str,
    price: Decimal,
    confidence: float,
    patterns: ReceiptPatterns,
    quantity: int | None = None,
) -> ClassifiedLine | None:
    """Build an ITEM classification if the residual name survives validation."""
    if price <= 0:
        return None
    raw_name = raw_name.strip()
    if quantity is None:
        quantity = extract_quantity(raw_name, patterns)
        name = remove_quantity_from_name(raw_name, patterns)
    else:
        name = raw_name.lstrip("@").strip()
    if patterns.street_start.match(name) and (
        looks_like_address(raw_name, patterns) or looks_like_address(line, patterns)
    ):
        # House number read as a quantity or a price
        return None
    if not is_valid_item_name(name, patterns):
        return None
    return ClassifiedLine(
        kind=LineKind.ITEM,
        raw=line,
        name=name,
        price=price,
        quantity=max(quantity, 1),
        confidence=confidence,
        rule=rule,
    )


def _match_summary(line: str, patterns: ReceiptPatterns) -> ClassifiedLine | None:
    for kind, pattern in patterns.summary:
        match = pattern.match(line)
        if match:
            return ClassifiedLine(kind=kind, raw=line, amount=normalize_price(match.group(1)), rule="summary")
    return None


def _match_dotted_item(line: str, patterns: ReceiptPatterns) -> ClassifiedLine | None:
    if not patterns.trailing_price.search(line):
        return None
    match = patterns.dotted_item.match(line)
    if not match:
        return None
    return _item(
        line,
        "dotted_item",
        match.group(1),
        normalize_price(match.group(2)),
        DOTTED_ITEM_CONFIDENCE,
        patterns,
    )


def _match_item_line(line: str, patterns: ReceiptPatterns) -> ClassifiedLine | None:
    if not patterns.trailing_price.search(line):
        return None
    match = patterns.item_line.match(line)
    if not match:
        return None
    qty_token, raw_name, price_token = match.groups()
    if patterns.filler_run.search(line):
        confidence = FILLER_ITEM_LINE_CONFIDENCE
    elif qty_token:
        confidence = EXPLICIT_QUANTITY_CONFIDENCE
    else:
        confidence = ITEM_LINE_CONFIDENCE
    return _item(
        line,
        "item_line",
        raw_name,
        normalize_price(price_token),
        confidence,
        patterns,
        quantity=int(qty_token) if qty_token else None,
    )


def _match_trailing_price(line: str, patterns: ReceiptPatterns) -> ClassifiedLine | None:
    match = patterns.trailing_price.search(line)
    if not match:
        return None
    price = normalize_price(match.group(1))
    raw_name = line[: match.start()].strip()
    if STREET_NUMBER_MIN <= price <= STREET_NUMBER_MAX and patterns.street_start.match(raw_name):
        return None
    return _item(line, "trailing_price", raw_name, price, TRAILING_PRICE_CONFIDENCE, patterns)


LINE_RULES: tuple[tuple[str, LineRule], ...] = (
    ("summary", _match_summary),
    ("dotted_item", _match_dotted_item),
    ("item_line", _match_item_line),
    ("trailing_price", _match_trailing_price),
)


def classify_line(line: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> ClassifiedLine:
    """Classify one line as an item, a summary amount, or unknown."""
    line = line.strip() if isinstance(line, str) else ""
    if line:
        for _name, rule in LINE_RULES:
            classified = rule(line, patterns)
            if classified is not None:
                return classified
    return ClassifiedLine(kind=LineKind.UNKNOWN, raw=line)
