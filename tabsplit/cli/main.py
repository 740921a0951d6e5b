#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence

from tabsplit.receipt.matcher import DEFAULT_MERGE_THRESHOLD
from tabsplit.runtime import set_log_level


def _threshold(value: str) -> float:
    threshold = float(value)
    if not 0.0 <= threshold <= 1.0:
        raise argparse.ArgumentTypeError(f"threshold must be between 0 and 1, got {value}")
    return threshold


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tabsplit",
        description="Receipt text structuring utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse [file]               Parse OCR receipt text (stdin if omitted) to JSON
  classify <line>            Classify a single receipt line
  price <text>               Normalize a price token
  similarity <a> <b>         Fuzzy similarity of two item names

Rules:
  --rules PATH (repeatable) layers TOML parser rules over the built-in ones;
  TABSPLIT_PARSER_RULES is used when no --rules is given.
""",
    )

    parser.add_argument("--debug", action="store_true", help="Log parser decisions to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse OCR receipt text to JSON")
    parse_parser.add_argument("file", nargs="?", help="Text file to parse (default: stdin)")
    parse_parser.add_argument(
        "--merge",
        nargs="?",
        type=_threshold,
        const=DEFAULT_MERGE_THRESHOLD,
        default=None,
        metavar="THRESHOLD",
        help=f"Merge near-duplicate items (default threshold: {DEFAULT_MERGE_THRESHOLD})",
    )
    parse_parser.add_argument("--pretty", action="store_true", help="Indent JSON output")
    parse_parser.add_argument("--rules", action="append", metavar="PATH", help="Parser rules TOML file")

    classify_parser = subparsers.add_parser("classify", help="Classify a single receipt line")
    classify_parser.add_argument("line", help="Receipt line text")
    classify_parser.add_argument("--rules", action="append", metavar="PATH", help="Parser rules TOML file")

    price_parser = subparsers.add_parser("price", help="Normalize a price token")
    price_parser.add_argument("text", help="Price text, e.g. '1.234,56'")

    similarity_parser = subparsers.add_parser("similarity", help="Fuzzy similarity of two names")
    similarity_parser.add_argument("first")
    similarity_parser.add_argument("second")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.debug:
        set_log_level(logging.DEBUG)

    if args.command == "parse":
        from tabsplit.cli.receipt import cmd_parse

        return cmd_parse(args)
    elif args.command == "classify":
        from tabsplit.cli.receipt import cmd_classify

        return cmd_classify(args)
    elif args.command == "price":
        from tabsplit.cli.receipt import cmd_price

        return cmd_price(args)
    elif args.command == "similarity":
        from tabsplit.cli.receipt import cmd_similarity

        return cmd_similarity(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
