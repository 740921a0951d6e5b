"""Runtime loader for receipt parser rules."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from tabsplit.receipt.parser_rules import (
    DEFAULT_PATTERNS,
    ParserRulesError,
    ReceiptPatterns,
    build_parser_rules,
    build_receipt_patterns,
)
from tabsplit.runtime.logging import get_logger

logger = get_logger(__name__)

RULES_ENV_VAR = "TABSPLIT_PARSER_RULES"


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        logger.warning("Parser rules file not found: %s", path)
        return {}

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ParserRulesError(f"{path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _default_rule_paths() -> tuple[str, ...]:
    env_value = os.environ.get(RULES_ENV_VAR, "").strip()
    if not env_value:
        return tuple()
    return tuple(part for part in env_value.split(os.pathsep) if part)


@lru_cache(maxsize=8)
def load_receipt_patterns(config_paths: tuple[str, ...] | None = None) -> ReceiptPatterns:
    """
    Load parser rule layers from TOML files and compile them.

    Args:
        config_paths: TOML files layered in order over the built-in rules.
            If None, uses the paths in TABSPLIT_PARSER_RULES (os.pathsep separated).

    Returns:
        Compiled pattern set; the shared default set when no files are configured.
    """
    if config_paths is None:
        config_paths = _default_rule_paths()
    if not config_paths:
        return DEFAULT_PATTERNS

    configs = tuple(_load_toml(Path(path)) for path in config_paths)
    rules = build_parser_rules(configs)
    logger.debug("Loaded parser rules from %d file(s)", len(configs))
    return build_receipt_patterns(rules)
