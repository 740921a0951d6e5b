"""Overall confidence score for a parsed receipt."""

from collections.abc import Sequence
from decimal import Decimal

from tabsplit.domain.receipt import ZERO, Item, Summary

ITEM_WEIGHT = 0.6
TOTALS_WEIGHT = 0.4
TOTAL_TOLERANCE_PERCENT = Decimal("0.05")  # 5% of the declared total


def _totals_consistency(items: Sequence[Item], summary: Summary) -> float:
    """
    Score how well the items add up to the declared total.

    A printed item price may be a unit price ("2x Wings 12.00" each) or the
    line total ("2x Wings 24.00"); whichever reading lands closer is used.
    """
    if summary.total <= ZERO:
        # Nothing to cross-check against
        return 1.0

    extras = summary.tax + summary.tip
    unit_reading = sum((item.price * item.quantity for item in items), ZERO) + extras
    line_reading = sum((item.price for item in items), ZERO) + extras
    # "2x Chicken Wings $24.00" prints the line total; the unit reading alone scores that receipt 0.73
    diff = min(abs(unit_reading - summary.total), abs(line_reading - summary.total))
    tolerance = summary.total * TOTAL_TOLERANCE_PERCENT

    if diff <= tolerance:
        return 1.0
    if diff <= tolerance * 2:
        return 0.8
    return 0.5


def calculate_confidence(items: Sequence[Item], summary: Summary) -> float:
    """
    Combine mean item confidence with a totals cross-check.

    Returns:
        0.0 when no items were extracted, otherwise a score in [0, 1]
        rounded to 2 decimal places.
    """
    if not items:
        return 0.0

    item_confidence = sum(min(max(item.confidence, 0.0), 1.0) for item in items) / len(items)
    score = item_confidence * ITEM_WEIGHT + _totals_consistency(items, summary) * TOTALS_WEIGHT
    return round(min(max(score, 0.0), 1.0), 2)
