"""Package logger namespace and level switching."""

from __future__ import annotations

import logging

from tabsplit.runtime import LOG_FORMAT, LOG_FORMAT_DEBUG, get_logger, set_log_level
from tabsplit.runtime.logging import LOGGER_NAMESPACE


def test_get_logger_places_loggers_under_package_namespace() -> None:
    assert get_logger("tabsplit.receipt.matcher").name == "tabsplit.receipt.matcher"
    assert get_logger("plugins.extra").name == "tabsplit.plugins.extra"


def test_set_log_level_switches_format() -> None:
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    original_level = package_logger.level
    try:
        set_log_level(logging.DEBUG)

        assert package_logger.level == logging.DEBUG
        assert package_logger.handlers
        assert all(h.formatter is not None and h.formatter._fmt == LOG_FORMAT_DEBUG for h in package_logger.handlers)

        set_log_level(logging.WARNING)

        assert package_logger.level == logging.WARNING
        assert all(h.formatter is not None and h.formatter._fmt == LOG_FORMAT for h in package_logger.handlers)
    finally:
        set_log_level(original_level)
