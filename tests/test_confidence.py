from decimal import Decimal

import pytest
from tabsplit.domain.receipt import Item, Summary
from tabsplit.receipt.confidence import calculate_confidence


def _item(price: str, confidence: float = 1.0, quantity: int = 1) -> Item:
    return Item(name="Item", price=Decimal(price), quantity=quantity, confidence=confidence)


def test_no_items_scores_zero() -> None:
    assert calculate_confidence([], Summary(total=Decimal("10.00"))) == 0.0


def test_items_matching_total_within_tolerance() -> None:
    items = [_item("24.00", 0.95, quantity=2), _item("12.50", 0.85), _item("3.00", 0.85)]
    summary = Summary(tax=Decimal("3.16"), tip=Decimal("8.00"), total=Decimal("50.66"))

    assert calculate_confidence(items, summary) == pytest.approx(0.93)


def test_unit_price_reading_is_also_accepted() -> None:
    items = [_item("12.00", quantity=2)]
    summary = Summary(total=Decimal("24.00"))

    assert calculate_confidence(items, summary) == pytest.approx(1.0)


def test_missing_total_counts_as_consistent() -> None:
    assert calculate_confidence([_item("5.00", 0.5)], Summary()) == pytest.approx(0.7)


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        ("96.00", 1.0),  # within 5%
        ("92.00", 0.92),  # within 10%
        ("50.00", 0.8),  # further off
    ],
)
def test_totals_consistency_bands(price: str, expected: float) -> None:
    summary = Summary(total=Decimal("100.00"))

    assert calculate_confidence([_item(price)], summary) == pytest.approx(expected)


def test_item_confidences_are_clamped() -> None:
    items = [_item("10.00", 1.5), _item("10.00", -0.5)]
    summary = Summary(total=Decimal("20.00"))

    # mean of 1.0 and 0.0
    assert calculate_confidence(items, summary) == pytest.approx(0.7)


def test_score_is_rounded_to_two_places() -> None:
    items = [_item("10.00", 0.91), _item("10.00", 0.85), _item("10.00", 0.70)]

    score = calculate_confidence(items, Summary())

    assert score == round(score, 2)
    assert 0.0 <= score <= 1.0
