"""Shared price, quantity, and item-name helpers for receipt text parsing."""

import re
from decimal import Decimal, InvalidOperation

from tabsplit.runtime.logging import get_logger

from ..parser_rules import DEFAULT_PATTERNS, ReceiptPatterns

logger = get_logger(__name__)

ZERO = Decimal("0")

CURRENCY_AND_SPACE = re.compile(r"[$€£¥\s]")
PRICE_SEPARATORS = re.compile(r"[.,]")


def normalize_price(text: str | None) -> Decimal:
    """
    Convert a numeric token such as "$1,234.56" or "24,00" into a Decimal.

    Separator handling:
    - More than one separator: the last one is the decimal point, the
      others are thousands groupings ("1.234,56" -> 1234.56)
    - One separator with 2 trailing digits: cents ("24,00" -> 24.00)
    - One separator with 1 trailing digit: truncated cents ("12.5" -> 12.50)
    - One separator with 3+ trailing digits: thousands ("1,234" -> 1234)

    Returns:
        Non-negative amount; 0 when the token cannot be parsed.
    """
    if not text or not isinstance(text, str):
        return ZERO

    clean = CURRENCY_AND_SPACE.sub("", text)
    parts = PRICE_SEPARATORS.split(clean)

    if len(parts) > 2:
        decimals = parts.pop()
        whole = "".join(parts)
    elif len(parts) == 2:
        whole, decimals = parts
        if len(decimals) == 1:
            decimals += "0"
        elif len(decimals) > 2:
            whole, decimals = whole + decimals, ""
    else:
        whole, decimals = parts[0], ""

    if not (whole + decimals).isascii() or not (whole + decimals).isdigit():
        logger.debug("Unparseable price token %r", text)
        return ZERO

    try:
        value = Decimal(f"{whole or '0'}.{decimals}" if decimals else whole)
    except InvalidOperation:
        logger.debug("Unparseable price token %r", text)
        return ZERO
    return value


def _match_quantity(text: str, patterns: ReceiptPatterns) -> re.Match[str] | None:
    for pattern in patterns.quantity:
        match = pattern.match(text)
        if match:
            return match
    return None


def extract_quantity(text: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> int:
    """Return the leading quantity ("2x", "2*", "@ 2", "qty: 2", "2 Wings"), default 1."""
    if not text:
        return 1
    match = _match_quantity(text.strip(), patterns)
    if match is None:
        return 1
    return max(int(match.group(1)), 1)


def remove_quantity_from_name(name: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> str:
    """Strip a leading quantity indicator and any leading "@" unit-price marker."""
    name = name.strip()
    match = _match_quantity(name, patterns)
    if match:
        name = name[match.end() :]
    name = re.sub(r"^@\s*", "", name)
    return name.strip()


def clean_item_name(name: str) -> str:
    """Collapse whitespace, trim dashes and dotted leaders, and title-case words."""
    name = re.sub(r"\s+", " ", name).lstrip(" -").rstrip(" -.:_")
    return " ".join(word[:1].upper() + word[1:] for word in name.lower().split(" "))


def looks_like_address(text: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> bool:
    """Return True for "123 Main St" or "Main St 123" style fragments."""
    text = text.strip()
    return bool(patterns.address_leading.search(text) or patterns.address_trailing.search(text))


def is_valid_item_name(name: str, patterns: ReceiptPatterns = DEFAULT_PATTERNS) -> bool:
    """Return True if name can stand as a receipt item description."""
    if not name:
        return False
    name = name.strip()
    if len(name) < 2:
        return False

    # Digits and punctuation only
    if re.fullmatch(r"[\d\W_]+", name):
        return False

    # Financial keywords, alone or combined ("Total Tax", "Amount Due")
    words = re.findall(r"[a-z]+", name.lower())
    if words and all(word in patterns.non_item_words for word in words):
        return False

    if looks_like_address(name, patterns):
        return False

    if patterns.order_label.match(name):
        return False

    return True
