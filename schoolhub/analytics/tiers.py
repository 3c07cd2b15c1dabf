# schoolhub/analytics/tiers.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List, Sequence, TypeVar

from schoolhub.analytics.models import PerformanceTier

# Lower bounds are inclusive
EXCELLING_MIN = 4.5
GOOD_MIN = 3.5
STRUGGLING_MIN = 2.5

# Size of the ranked top / struggling lists
RANKED_LIST_LIMIT = 5

T = TypeVar("T")


def classify_tier(average: float) -> PerformanceTier:
    """Map a mean rating onto its tier. Anything under 2.5 counts as no data."""
    if average >= EXCELLING_MIN:
        return PerformanceTier.EXCELLING
    if average >= GOOD_MIN:
        return PerformanceTier.GOOD
    if average >= STRUGGLING_MIN:
        return PerformanceTier.STRUGGLING
    return PerformanceTier.NO_DATA


def round_half_up(value: float, places: int = 1) -> float:
    """Round like a dashboard would (2.25 -> 2.3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def ranked(
    items: Sequence[T],
    tier: PerformanceTier,
    *,
    key: Callable[[T], float],
    descending: bool,
    limit: int = RANKED_LIST_LIMIT,
) -> List[T]:
    """Items of one tier, sorted by *key* and capped at *limit*.

    The sort is stable, so ties keep their input order.
    """
    matching = [it for it in items if it.tier == tier]
    matching.sort(key=key, reverse=descending)
    return matching[:limit]
