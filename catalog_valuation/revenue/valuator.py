"""
Additional-revenue valuator.

Capitalizes discrete revenue streams into a lump-sum valuation using the
revenue type multipliers, discounting uncertain and one-off income.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..models import ConfidenceLevel, RevenueSource
from .diversification import calculate_diversification_score
from .types import lookup_revenue_type

logger = logging.getLogger(__name__)

CONFIDENCE_ADJUSTMENTS: Dict[ConfidenceLevel, float] = {
    ConfidenceLevel.HIGH: 1.1,    # +10% for verified, steady income
    ConfidenceLevel.MEDIUM: 1.0,
    ConfidenceLevel.LOW: 0.8,     # -20% for uncertain income
}

# One-time revenue keeps 60% of its capitalized value
NON_RECURRING_ADJUSTMENT = 0.6


@dataclass
class AdditionalRevenueValuation:
    """Capitalized value of a set of revenue sources."""

    total_valuation: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    average_multiplier: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_valuation": self.total_valuation,
            "breakdown": dict(self.breakdown),
            "average_multiplier": self.average_multiplier,
        }


@dataclass
class RevenueMetrics:
    """Raw revenue totals for a set of revenue sources."""

    total_additional_revenue: float
    diversification_score: float
    revenue_breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_additional_revenue": self.total_additional_revenue,
            "diversification_score": self.diversification_score,
            "revenue_breakdown": dict(self.revenue_breakdown),
        }


def value_revenue_source(source: RevenueSource) -> Optional[float]:
    """
    Capitalize a single revenue source.

    valuation = annual_revenue x multiplier x confidence adjustment
                x recurrence adjustment

    Args:
        source: Revenue source with a validated confidence level

    Returns:
        Valuation in currency units, or None if the revenue type is unknown
    """
    info = lookup_revenue_type(source.revenue_type)
    if info is None:
        return None

    valuation = source.annual_revenue * info.multiplier
    valuation *= CONFIDENCE_ADJUSTMENTS[source.confidence_level]
    if not source.is_recurring:
        valuation *= NON_RECURRING_ADJUSTMENT

    return valuation


def calculate_additional_revenue_valuation(
    revenue_sources: Iterable[RevenueSource],
) -> AdditionalRevenueValuation:
    """
    Calculate the valuation contribution of additional revenue sources.

    Sources with an unrecognized revenue type are skipped and contribute
    nothing. Their revenue still counts towards the average multiplier
    denominator.

    Args:
        revenue_sources: Revenue sources to value

    Returns:
        AdditionalRevenueValuation with per-type breakdown
    """
    sources: List[RevenueSource] = list(revenue_sources)

    total_valuation = 0.0
    breakdown: Dict[str, float] = {}

    for source in sources:
        source_valuation = value_revenue_source(source)
        if source_valuation is None:
            logger.debug("Skipping unknown revenue type %r", source.revenue_type)
            continue

        total_valuation += source_valuation
        breakdown[source.revenue_type] = breakdown.get(source.revenue_type, 0.0) + source_valuation

    total_revenue = sum(s.annual_revenue for s in sources)
    average_multiplier = total_valuation / total_revenue if total_revenue > 0 else 0.0

    return AdditionalRevenueValuation(
        total_valuation=total_valuation,
        breakdown=breakdown,
        average_multiplier=average_multiplier,
    )


def calculate_revenue_metrics(revenue_sources: Iterable[RevenueSource]) -> RevenueMetrics:
    """
    Summarize raw revenue and diversification for a set of revenue sources.

    Args:
        revenue_sources: Revenue sources to summarize

    Returns:
        RevenueMetrics with total revenue and revenue per type
    """
    sources = list(revenue_sources)

    revenue_breakdown: Dict[str, float] = {}
    for source in sources:
        revenue_breakdown[source.revenue_type] = (
            revenue_breakdown.get(source.revenue_type, 0.0) + source.annual_revenue
        )

    return RevenueMetrics(
        total_additional_revenue=sum(s.annual_revenue for s in sources),
        diversification_score=calculate_diversification_score(s.revenue_type for s in sources),
        revenue_breakdown=revenue_breakdown,
    )


# Confidence boost, in score points, earned from corroborating revenue data
POINTS_PER_SOURCE = 5.0
MAX_SOURCE_POINTS = 25.0
HIGH_CONFIDENCE_POINTS = 3.0
MEDIUM_CONFIDENCE_POINTS = 1.5
MAX_CONFIDENCE_BOOST = 30.0


def calculate_confidence_boost(revenue_sources: Iterable[RevenueSource]) -> float:
    """
    Points added to a base confidence score for each documented revenue source.

    Every source adds 5 points (capped at 25), high-confidence sources add
    3 more and medium-confidence sources 1.5. The total is capped at 30.
    """
    sources = list(revenue_sources)
    high = sum(1 for s in sources if s.confidence_level == ConfidenceLevel.HIGH)
    medium = sum(1 for s in sources if s.confidence_level == ConfidenceLevel.MEDIUM)

    data_points = min(len(sources) * POINTS_PER_SOURCE, MAX_SOURCE_POINTS)
    quality_points = high * HIGH_CONFIDENCE_POINTS + medium * MEDIUM_CONFIDENCE_POINTS
    return min(data_points + quality_points, MAX_CONFIDENCE_BOOST)
