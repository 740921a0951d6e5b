"""Runtime infrastructure for tabsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Parser rule loading via load_receipt_patterns()

Usage:
    from tabsplit.runtime import get_logger, load_receipt_patterns

    logger = get_logger(__name__)
    patterns = load_receipt_patterns(("my_rules.toml",))
"""

from tabsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from tabsplit.runtime.parser_rules import RULES_ENV_VAR, load_receipt_patterns

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_receipt_patterns",
    "RULES_ENV_VAR",
]
