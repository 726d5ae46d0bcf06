"""
Portfolio risk assessment for a set of revenue sources.

Risk blends the inherent risk of each revenue category with how reliably
its figure was reported, weighted by revenue, then relieved by up to 30%
for a diversified portfolio.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..models import ConfidenceLevel, RevenueSource, RiskLevel, round_half_up
from .types import REVENUE_TYPE_COUNT, lookup_revenue_type

RISK_WEIGHTS: Dict[RiskLevel, int] = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}

# Inverted: poorly evidenced income carries more risk
CONFIDENCE_RISK_WEIGHTS: Dict[ConfidenceLevel, int] = {
    ConfidenceLevel.LOW: 3,
    ConfidenceLevel.MEDIUM: 2,
    ConfidenceLevel.HIGH: 1,
}

# Highest possible risk weight + confidence weight
MAX_COMBINED_WEIGHT = 6

MAX_DIVERSIFICATION_RELIEF = 0.3

LOW_RISK_CUTOFF = 0.3
MEDIUM_RISK_CUTOFF = 0.6

# Diversification below these levels triggers an extra recommendation
MEDIUM_TIER_DIVERSIFICATION_WARNING = 0.4
HIGH_TIER_DIVERSIFICATION_WARNING = 0.3


@dataclass
class PortfolioRisk:
    """Risk assessment for a revenue portfolio."""

    risk_level: RiskLevel
    score: int  # 0-100, higher is safer
    recommendations: List[str] = field(default_factory=list)
    diversification_score: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "risk_level": self.risk_level.value,
            "score": self.score,
            "recommendations": list(self.recommendations),
        }
        if self.diversification_score is not None:
            result["diversification_score"] = self.diversification_score
        return result


def _empty_portfolio_risk() -> PortfolioRisk:
    return PortfolioRisk(risk_level=RiskLevel.HIGH, score=0, recommendations=[])


def classify_risk(final_risk_score: float) -> RiskLevel:
    """Map a normalized 0-1 risk score to a risk tier."""
    if final_risk_score < LOW_RISK_CUTOFF:
        return RiskLevel.LOW
    if final_risk_score < MEDIUM_RISK_CUTOFF:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def build_recommendations(risk_level: RiskLevel, diversification: float) -> List[str]:
    """Advisory text for a risk tier and diversification level."""
    recommendations: List[str] = []

    if risk_level == RiskLevel.LOW:
        recommendations.append("Excellent diversification and revenue quality")
    elif risk_level == RiskLevel.MEDIUM:
        recommendations.append("Consider diversifying into more stable revenue types")
        if diversification < MEDIUM_TIER_DIVERSIFICATION_WARNING:
            recommendations.append("Add more revenue source types to reduce risk")
    else:
        recommendations.append(
            "High risk portfolio - consider adding more stable revenue sources"
        )
        recommendations.append("Focus on publishing and mechanical revenue for stability")
        if diversification < HIGH_TIER_DIVERSIFICATION_WARNING:
            recommendations.append(
                "Critically low diversification - add multiple revenue types"
            )

    return recommendations


def assess_portfolio_risk(revenue_sources: Iterable[RevenueSource]) -> PortfolioRisk:
    """
    Assess the risk of a portfolio of revenue sources.

    An empty portfolio, or one with no revenue at all, is maximally risky.
    Sources with an unknown revenue type add to total revenue but carry no
    risk weight and do not count towards diversification.

    Args:
        revenue_sources: Revenue sources with validated confidence levels

    Returns:
        PortfolioRisk with tier, 0-100 score and recommendations
    """
    sources = list(revenue_sources)
    if not sources:
        return _empty_portfolio_risk()

    total_revenue = 0.0
    weighted_risk_score = 0.0
    type_counts: Dict[str, int] = {}

    for source in sources:
        total_revenue += source.annual_revenue

        info = lookup_revenue_type(source.revenue_type)
        if info is None:
            continue

        risk_weight = RISK_WEIGHTS[info.risk_level]
        confidence_weight = CONFIDENCE_RISK_WEIGHTS[source.confidence_level]
        weighted_risk_score += (risk_weight + confidence_weight) * source.annual_revenue
        type_counts[source.revenue_type] = type_counts.get(source.revenue_type, 0) + 1

    if total_revenue <= 0:
        return _empty_portfolio_risk()

    avg_risk_score = weighted_risk_score / total_revenue / MAX_COMBINED_WEIGHT
    diversification = len(type_counts) / REVENUE_TYPE_COUNT

    final_risk_score = avg_risk_score * (1 - diversification * MAX_DIVERSIFICATION_RELIEF)
    risk_level = classify_risk(final_risk_score)

    return PortfolioRisk(
        risk_level=risk_level,
        score=round_half_up((1 - final_risk_score) * 100),
        recommendations=build_recommendations(risk_level, diversification),
        diversification_score=diversification,
    )
