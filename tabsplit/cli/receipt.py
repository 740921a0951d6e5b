"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from tabsplit.domain.receipt import Item
from tabsplit.receipt.matcher import calculate_similarity, merge_similar_items
from tabsplit.receipt.ocr_parser import classify_line, normalize_price
from tabsplit.receipt.ocr_result_parser import parse_receipt_text
from tabsplit.receipt.parser_rules import ParserRulesError, ReceiptPatterns
from tabsplit.runtime import get_logger, load_receipt_patterns

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def _load_patterns(args: argparse.Namespace) -> ReceiptPatterns:
    rules = getattr(args, "rules", None)
    return load_receipt_patterns(tuple(rules) if rules else None)


def _display_item(item: Item) -> dict[str, Any]:
    data = item.to_dict()
    if item.merged_from:
        # Merged prices are exact means; show cents
        data["price"] = str(item.price.quantize(CENTS, rounding=ROUND_HALF_UP))
    return data


def _read_text(source: str | None) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse receipt text from a file or stdin and print it as JSON."""
    try:
        patterns = _load_patterns(args)
        text = _read_text(args.file)
    except ParserRulesError as exc:
        print(f"Invalid parser rules: {exc}")
        return 1
    except OSError as exc:
        logger.error("Failed to read %s: %s", args.file, exc)
        print(f"Error: cannot read {args.file}: {exc.strerror or exc}")
        return 1

    receipt = parse_receipt_text(text, patterns)
    data = receipt.to_dict()
    if args.merge is not None:
        data["items"] = [_display_item(item) for item in merge_similar_items(receipt.items, args.merge)]

    print(json.dumps(data, indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    """Print the classification of a single line."""
    try:
        patterns = _load_patterns(args)
    except ParserRulesError as exc:
        print(f"Invalid parser rules: {exc}")
        return 1

    classified = classify_line(args.line, patterns)
    data: dict[str, object] = {"kind": classified.kind.value, "rule": classified.rule}
    if classified.is_summary:
        data["amount"] = str(classified.amount)
    elif classified.name:
        data.update(
            name=classified.name,
            price=str(classified.price),
            quantity=classified.quantity,
            confidence=classified.confidence,
        )
    print(json.dumps(data, ensure_ascii=False))
    return 0


def cmd_price(args: argparse.Namespace) -> int:
    """Print the normalized amount of a price token."""
    print(normalize_price(args.text))
    return 0


def cmd_similarity(args: argparse.Namespace) -> int:
    """Print the similarity score of two names."""
    print(f"{calculate_similarity(args.first, args.second):.4f}")
    return 0
