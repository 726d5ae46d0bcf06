"""
Revenue type catalog.

Capitalization multiples and risk levels for each revenue category, ordered
roughly by income stability (publishing highest, touring lowest).
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models import RiskLevel


@dataclass(frozen=True)
class RevenueTypeInfo:
    """Valuation metadata for one revenue category."""

    type: str
    label: str
    multiplier: float
    description: str
    risk_level: RiskLevel
    examples: Tuple[str, ...] = ()


REVENUE_TYPE_MULTIPLIERS: Dict[str, RevenueTypeInfo] = {
    "publishing": RevenueTypeInfo(
        type="publishing",
        label="Publishing Revenue",
        multiplier=18,
        description="Highest multiplier - stable, long-term income from publishing rights",
        risk_level=RiskLevel.LOW,
        examples=("BMI/ASCAP collections", "Publisher advances", "Songwriter royalties", "Co-publishing deals"),
    ),
    "mechanical": RevenueTypeInfo(
        type="mechanical",
        label="Mechanical Royalties",
        multiplier=15,
        description="High multiplier - mechanical reproduction rights",
        risk_level=RiskLevel.LOW,
        examples=("CD sales", "Digital downloads", "Streaming mechanicals", "Physical sales"),
    ),
    "streaming": RevenueTypeInfo(
        type="streaming",
        label="Streaming Revenue",
        multiplier=12,
        description="Moderate multiplier - ongoing streaming income",
        risk_level=RiskLevel.MEDIUM,
        examples=("Spotify", "Apple Music", "YouTube Music", "Amazon Music"),
    ),
    "master_licensing": RevenueTypeInfo(
        type="master_licensing",
        label="Master Licensing",
        multiplier=12,
        description="Moderate multiplier - master recording rights licensing",
        risk_level=RiskLevel.MEDIUM,
        examples=("Record label deals", "Distribution agreements", "Master use licenses"),
    ),
    "performance": RevenueTypeInfo(
        type="performance",
        label="Live Performance",
        multiplier=10,
        description="Moderate multiplier - live performance income",
        risk_level=RiskLevel.MEDIUM,
        examples=("Concert revenue", "Festival fees", "Live streaming", "Venue performances"),
    ),
    "sync": RevenueTypeInfo(
        type="sync",
        label="Sync/Licensing",
        multiplier=8,
        description="Lower multiplier - synchronization and licensing deals",
        risk_level=RiskLevel.MEDIUM,
        examples=("TV shows", "Movies", "Commercials", "Video games"),
    ),
    "other": RevenueTypeInfo(
        type="other",
        label="Other Revenue",
        multiplier=6,
        description="Lower multiplier - miscellaneous revenue sources",
        risk_level=RiskLevel.HIGH,
        examples=("Samples", "Cover versions", "Licensing fees", "Miscellaneous royalties"),
    ),
    "merchandise": RevenueTypeInfo(
        type="merchandise",
        label="Merchandise",
        multiplier=5,
        description="Lower multiplier - merchandise and product sales",
        risk_level=RiskLevel.HIGH,
        examples=("T-shirts", "Albums", "Branded products", "Fan merchandise"),
    ),
    "touring": RevenueTypeInfo(
        type="touring",
        label="Touring Revenue",
        multiplier=3,
        description="Lowest multiplier - most volatile income stream",
        risk_level=RiskLevel.HIGH,
        examples=("Tour income", "Booking fees", "Travel-based revenue", "Meet & greets"),
    ),
}

# Number of categories a fully diversified portfolio spans
REVENUE_TYPE_COUNT = len(REVENUE_TYPE_MULTIPLIERS)


def lookup_revenue_type(revenue_type: str) -> Optional[RevenueTypeInfo]:
    """
    Look up valuation metadata for a revenue type.

    Args:
        revenue_type: Category key, e.g. "publishing"

    Returns:
        RevenueTypeInfo, or None for an unrecognized key (callers skip it)
    """
    return REVENUE_TYPE_MULTIPLIERS.get(revenue_type)


def list_revenue_types() -> List[RevenueTypeInfo]:
    """Return all revenue types, highest multiplier first."""
    return sorted(REVENUE_TYPE_MULTIPLIERS.values(), key=lambda info: -info.multiplier)
