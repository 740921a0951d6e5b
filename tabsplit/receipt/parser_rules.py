"""Keyword vocabulary and compiled regex set used by the receipt text parser.

The vocabulary lives in ``ParserRules`` (plain keyword tuples) so it can be
extended from TOML without touching the parser. ``build_receipt_patterns``
compiles one read-only ``ReceiptPatterns`` that every parse call shares.

To extend the vocabulary:
1. Add a TOML file with any ``ParserRules`` field as a key
2. A list value extends the built-in keywords
3. A table ``{keywords = [...], replace = true}`` replaces them
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, replace
from re import Pattern
from typing import Any

from tabsplit.domain.receipt import LineKind


class ParserRulesError(ValueError):
    """Raised when a parser rules config is malformed."""


@dataclass(frozen=True)
class ParserRules:
    """Keyword lists driving line skipping, classification, and validation."""

    skip_prefixes: tuple[str, ...] = (
        "receipt",
        "invoice",
        "order",
        "ticket",
        "cashier",
        "server",
        "table",
        "guest",
        "guests",
        "thank",
        "thanks",
        "call",
        "visit",
        "www.",
        "http",
        "https",
        "tel",
        "telephone",
        "phone",
        "fax",
        "email",
        "e-mail",
        "date:",
    )
    tax_labels: tuple[str, ...] = ("tax", "vat", "gst", "hst", "pst", "sales tax")
    tip_labels: tuple[str, ...] = ("tip", "gratuity", "service charge")
    total_labels: tuple[str, ...] = ("total", "amount due", "balance due", "grand total")
    subtotal_labels: tuple[str, ...] = ("subtotal", "sub total", "sub-total", "subttl", "before tax", "net", "pre-tax")
    non_item_keywords: tuple[str, ...] = (
        "total",
        "subtotal",
        "tax",
        "tip",
        "change",
        "cash",
        "credit",
        "debit",
        "card",
        "payment",
        "balance",
        "amount",
        "due",
        "check",
        "bill",
        "date",
    )
    street_tokens: tuple[str, ...] = (
        "main",
        "street",
        "st",
        "avenue",
        "ave",
        "boulevard",
        "blvd",
        "road",
        "rd",
        "drive",
        "dr",
        "lane",
        "ln",
        "way",
        "court",
        "ct",
    )
    business_suffixes: tuple[str, ...] = ("LLC", "Inc", "Ltd", "Corp", "Co")
    order_labels: tuple[str, ...] = ("order", "ticket", "table", "check", "receipt")


RULE_FIELDS = frozenset(f.name for f in fields(ParserRules))

CURRENCY = r"[$€£¥]"
# Must end on a digit so trailing punctuation never lands in the amount.
AMOUNT = r"(\d(?:[\d,.]*\d)?)"
PERCENT_NOTE = r"(?:\s*(?:\(\s*)?\d+(?:[.,]\d+)?\s*%(?:\s*\))?)?"
LABEL_SEPARATOR = r"[\s:.\-_]*"
MONTHS = r"Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"


@dataclass(frozen=True)
class ReceiptPatterns:
    """Compiled, read-only pattern set shared by all parse calls."""

    rules: ParserRules
    skip: Pattern[str]
    summary: tuple[tuple[LineKind, Pattern[str]], ...]
    dotted_item: Pattern[str]
    item_line: Pattern[str]
    trailing_price: Pattern[str]
    filler_run: Pattern[str]
    quantity: tuple[Pattern[str], ...]
    street_start: Pattern[str]
    address_leading: Pattern[str]
    address_trailing: Pattern[str]
    order_label: Pattern[str]
    non_item_words: frozenset[str]
    merchant: Pattern[str]
    price_line: Pattern[str]
    date_label: Pattern[str]
    date: Pattern[str]


def _keyword_pattern(keyword: str) -> str:
    """Regex for one keyword: words may be joined by spaces or hyphens."""
    words = [w for w in re.split(r"[\s\-]+", keyword.strip()) if w]
    body = r"[-\s]*".join(re.escape(w) for w in words)
    body = body.replace(":", r"\s*:")
    if keyword[-1:].isalnum():
        body += r"\b"
    return body


def _alternation(keywords: Sequence[str]) -> str:
    # Longest first so "grand total" wins over "total".
    ordered = sorted({k for k in keywords if k.strip()}, key=len, reverse=True)
    return "|".join(_keyword_pattern(k) for k in ordered)


def _summary_pattern(labels: Sequence[str]) -> Pattern[str]:
    return re.compile(
        rf"^(?:{_alternation(labels)}){PERCENT_NOTE}{LABEL_SEPARATOR}"
        rf"(?:{CURRENCY}\s*)?{AMOUNT}\s*(?:[A-Za-z]{{3}}\s*)?$",
        re.IGNORECASE,
    )


def _normalize_keywords(raw: Any, key: str) -> tuple[str, ...]:
    """Normalize a keywords value from TOML into a tuple of strings."""
    if isinstance(raw, str):
        value = raw.strip()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip() for v in raw if str(v).strip())
    raise ParserRulesError(f"{key}: expected a string or list of strings, got {type(raw).__name__}")


def build_parser_rules(configs: Sequence[Mapping[str, Any]] | None = None) -> ParserRules:
    """Layer in-memory rule configs (later configs win) over the built-in defaults."""
    rules = ParserRules()
    for config in configs or ():
        for key, raw in config.items():
            if key not in RULE_FIELDS:
                raise ParserRulesError(f"unknown parser rules key: {key}")
            replace_existing = False
            if isinstance(raw, Mapping):
                replace_existing = bool(raw.get("replace", False))
                raw = raw.get("keywords", [])
            keywords = _normalize_keywords(raw, key)
            if not replace_existing:
                keywords = getattr(rules, key) + tuple(k for k in keywords if k not in getattr(rules, key))
            rules = replace(rules, **{key: keywords})
    return rules


def build_receipt_patterns(rules: ParserRules | None = None) -> ReceiptPatterns:
    """Compile the pattern set for a rules vocabulary."""
    if rules is None:
        rules = ParserRules()

    street = _alternation(rules.street_tokens)
    single_word_labels = {
        label.lower()
        for label in rules.tax_labels + rules.tip_labels + rules.total_labels + rules.subtotal_labels
        if re.fullmatch(r"[A-Za-z]+", label)
    }

    return ReceiptPatterns(
        rules=rules,
        skip=re.compile(rf"^(?:{_alternation(rules.skip_prefixes)})", re.IGNORECASE),
        summary=(
            (LineKind.TAX, _summary_pattern(rules.tax_labels)),
            (LineKind.TIP, _summary_pattern(rules.tip_labels)),
            (LineKind.TOTAL, _summary_pattern(rules.total_labels)),
            (LineKind.SUBTOTAL, _summary_pattern(rules.subtotal_labels)),
        ),
        # "CHICKEN WINGS..............$24.00"
        dotted_item=re.compile(rf"^(.*?[^.\s\-_])[.\s\-_]{{3,}}(?:{CURRENCY}\s*)?{AMOUNT}\s*$"),
        # "2x Chicken Wings $24.00", "Soda 3.00"
        item_line=re.compile(
            rf"^(?:(\d+)\s*(?:[x×]\s+|[*@]\s*)(?=\S))?(.*?\S)\s+(?:{CURRENCY}\s*)?{AMOUNT}\s*$",
            re.IGNORECASE,
        ),
        trailing_price=re.compile(rf"(?:{CURRENCY}\s*)?(?<!\d){AMOUNT}\s*$"),
        filler_run=re.compile(r"\.{3,}|-{3,}"),
        quantity=(
            # "2x ", "2 x ", "2*", "2@"
            re.compile(r"^(\d+)\s*(?:[x×]\s+|[*@]\s*)", re.IGNORECASE),
            # "@ 2 ", "@2:"
            re.compile(r"^@\s*(\d+)\s*[:\-]?\s*"),
            # "qty: 2", "Qty 2"
            re.compile(r"^qty\s*[:#]?\s*(\d+)\s*[:\-]?\s*", re.IGNORECASE),
            # "2: ", "2 - ", "2 Chicken"
            re.compile(r"^(\d+)(?:\s*[:\-]\s*|\s+(?=[^\W\d_]))"),
        ),
        street_start=re.compile(rf"^(?:{street})", re.IGNORECASE),
        address_leading=re.compile(
            rf"^\d+\s+(?:[A-Za-z']+\s+){{0,3}}?(?:{street})\.?(?=\s*(?:,|#|\d|$))",
            re.IGNORECASE,
        ),
        address_trailing=re.compile(rf"(?:^|\s)(?:{street})\.?,?\s+\d+$", re.IGNORECASE),
        order_label=re.compile(
            rf"^(?:{_alternation(rules.order_labels)})\s*(?:(?:#|no\.?|num(?:ber)?\.?)\s*)?(?::\s*)?(?:#\s*)?\d+",
            re.IGNORECASE,
        ),
        non_item_words=frozenset(k.lower() for k in rules.non_item_keywords) | frozenset(single_word_labels),
        merchant=re.compile(
            rf"^[A-Z][A-Za-z0-9&'’\- ]*(?:\s+(?i:{_alternation(rules.business_suffixes)})\.?)?$"
        ),
        price_line=re.compile(rf"{CURRENCY}|\d\s*$"),
        date_label=re.compile(r"^date\s*:\s*", re.IGNORECASE),
        date=re.compile(
            r"((?<!\d)\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2}(?!\d)"
            r"|(?<!\d)\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}(?!\d)"
            rf"|\b(?:{MONTHS})[a-z]*\.?\s*\d{{1,2}}(?:st|nd|rd|th)?,?\s*\d{{4}}(?!\d))",
            re.IGNORECASE,
        ),
    )


DEFAULT_PATTERNS = build_receipt_patterns()
