"""Fuzzy matching of receipt item names.

Similarity is normalized Levenshtein distance: 1 - distance / max(len(a), len(b)),
compared case-insensitively on trimmed names.

Supports:
- Catalog lookup: find the catalog entry closest to an OCR'd item name
- De-duplication: merge items whose names are OCR variants of each other
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from rapidfuzz.distance import Levenshtein

from tabsplit.domain.receipt import Item
from tabsplit.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.8
DEFAULT_MERGE_THRESHOLD = 0.85
MERGE_CONFIDENCE_PENALTY = 0.95


@dataclass(frozen=True)
class FuzzyMatch:
    """Result of looking a name up in a catalog."""

    match: str | None
    score: float  # 0.0 to 1.0

    @property
    def is_fuzzy(self) -> bool:
        return self.score < 1.0


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance (insert/delete/substitute, each cost 1)."""
    return Levenshtein.distance(a, b)


def calculate_similarity(a: str, b: str) -> float:
    """Similarity score in [0, 1]; symmetric, and 1.0 for identical names."""
    s1 = a.lower().strip()
    s2 = b.lower().strip()
    if s1 == s2:
        return 1.0

    max_length = max(len(s1), len(s2))
    return 1 - levenshtein_distance(s1, s2) / max_length


def find_best_match(
    name: str,
    catalog: Sequence[str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> FuzzyMatch:
    """Return the highest-scoring catalog entry at or above threshold (first wins ties)."""
    best_match: str | None = None
    best_score = 0.0
    for candidate in catalog:
        score = calculate_similarity(name, candidate)
        if score > best_score and score >= threshold:
            best_match = candidate
            best_score = score
    return FuzzyMatch(match=best_match, score=best_score)


def _merge_group(group: list[Item]) -> Item:
    seed = group[0]
    mean_price = sum((item.price for item in group), Decimal("0")) / len(group)
    return Item(
        name=seed.name,
        price=mean_price,
        quantity=sum(item.quantity for item in group),
        confidence=max(item.confidence for item in group) * MERGE_CONFIDENCE_PENALTY,
        raw=seed.raw,
        merged_from=tuple(item.raw for item in group),
    )


def merge_similar_items(
    items: Sequence[Item],
    similarity_threshold: float = DEFAULT_MERGE_THRESHOLD,
) -> list[Item]:
    """
    Merge items whose names are near-duplicates.

    Greedy single pass: the first unassigned item seeds a group and every later
    unassigned item similar enough to the seed joins it. Members are only
    compared to the seed, so chains of similar names may stay split.

    Args:
        items: Items in receipt order
        similarity_threshold: Minimum similarity to the seed for joining a group

    Returns:
        Items in seed order; single-item groups are returned unchanged.
    """
    merged: list[Item] = []
    used: set[int] = set()

    for i, seed in enumerate(items):
        if i in used:
            continue
        used.add(i)
        group = [seed]

        for j in range(i + 1, len(items)):
            if j in used:
                continue
            if calculate_similarity(seed.name, items[j].name) >= similarity_threshold:
                group.append(items[j])
                used.add(j)

        if len(group) == 1:
            merged.append(seed)
            continue

        logger.debug("Merging %d items similar to %r", len(group), seed.name)
        merged.append(_merge_group(group))

    return merged
