"""Shared pytest fixtures for tabsplit tests."""

from __future__ import annotations

import pytest
from tabsplit.runtime import load_receipt_patterns

SIMPLE_RECEIPT = """Joe's Restaurant
123 Main St
Date: 2024-01-15

2x Chicken Wings $24.00
Caesar Salad $12.50
Soda $3.00

Subtotal: $39.50
Tax (8%): $3.16
Tip: $8.00
Total: $50.66"""


@pytest.fixture
def simple_receipt_text() -> str:
    return SIMPLE_RECEIPT


@pytest.fixture(autouse=True)
def _clear_rule_cache():
    """Rule loading is cached per path tuple; keep tests independent."""
    load_receipt_patterns.cache_clear()
    yield
    load_receipt_patterns.cache_clear()
