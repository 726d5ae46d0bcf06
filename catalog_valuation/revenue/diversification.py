"""Revenue diversification scoring."""

from typing import Iterable

from .types import REVENUE_TYPE_COUNT

# A fully diversified portfolio earns at most a 20% valuation bonus
MAX_DIVERSIFICATION_BONUS = 0.2


def calculate_diversification_score(revenue_types: Iterable[str]) -> float:
    """
    Score revenue diversification on a 0-1 scale.

    Args:
        revenue_types: Revenue type of each source (duplicates allowed)

    Returns:
        Distinct type count over the nine categories, capped at 1.0
    """
    unique_types = set(revenue_types)
    return min(len(unique_types) / REVENUE_TYPE_COUNT, 1.0)


def calculate_diversification_bonus(diversification_score: float) -> float:
    """Valuation bonus (as a fraction) earned by a diversification score."""
    return diversification_score * MAX_DIVERSIFICATION_BONUS
