"""
Unified facade for catalog valuation - combines pipeline and revenue functionality.

This module brings together the song-level pipeline estimate and the
additional-revenue valuation into one result:

1. Pipeline estimate from song registration metadata
2. Capitalized value of additional revenue sources
3. Portfolio risk and diversification bonus
4. Blended valuation: base x 0.7 + additional x 0.3, times (1 + bonus)
5. Confidence boost from documented revenue sources
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging

from .config import Settings, settings as default_settings
from .models import RevenueSource, SongMeta
from .pipeline import CatalogPipelineResult, compute_catalog_pipeline
from .revenue import (
    AdditionalRevenueValuation,
    PortfolioRisk,
    RevenueMetrics,
    assess_portfolio_risk,
    calculate_additional_revenue_valuation,
    calculate_confidence_boost,
    calculate_diversification_bonus,
    calculate_revenue_metrics,
)

logger = logging.getLogger(__name__)

SongInput = Union[SongMeta, Mapping[str, Any]]
RevenueSourceInput = Union[RevenueSource, Mapping[str, Any]]


@dataclass
class CatalogValuationResult:
    """Complete catalog valuation result."""

    analysis_timestamp: str

    # Song metadata side
    pipeline: CatalogPipelineResult

    # Additional revenue side
    additional_revenue: AdditionalRevenueValuation
    revenue_metrics: RevenueMetrics
    risk: PortfolioRisk

    # Blended valuation
    base_value: float
    diversification_bonus: float
    blended_value: float

    # Confidence
    confidence_boost: float = 0.0
    enhanced_confidence: float = 0.0
    config_version: Optional[str] = None

    @property
    def additional_value(self) -> float:
        return self.additional_revenue.total_valuation

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "analysis_timestamp": self.analysis_timestamp,
            "config_version": self.config_version,
            "pipeline": self.pipeline.to_dict(),
            "additional_revenue": self.additional_revenue.to_dict(),
            "revenue_metrics": self.revenue_metrics.to_dict(),
            "risk": self.risk.to_dict(),
            "base_value": self.base_value,
            "additional_value": self.additional_value,
            "diversification_bonus": self.diversification_bonus,
            "blended_value": self.blended_value,
            "confidence_boost": self.confidence_boost,
            "enhanced_confidence": self.enhanced_confidence,
        }


def _to_songs(songs: Iterable[SongInput]) -> List[SongMeta]:
    return [s if isinstance(s, SongMeta) else SongMeta.from_dict(s) for s in songs]


def _to_revenue_sources(sources: Iterable[RevenueSourceInput]) -> List[RevenueSource]:
    return [s if isinstance(s, RevenueSource) else RevenueSource.from_dict(s) for s in sources]


class CatalogValuator:
    """Unified catalog valuator combining pipeline and revenue valuation."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the valuator.

        Args:
            settings: Policy and blending weights, defaults to loaded settings
        """
        self.settings = settings or default_settings

    def blend(self, base_value: float, additional_value: float, diversification_bonus: float) -> float:
        """Weighted blend of base and additional value, then the diversification bonus."""
        weights = self.settings.valuation
        blended = base_value * weights.base_weight + additional_value * weights.additional_weight
        return blended * (1 + diversification_bonus)

    def analyze(
        self,
        songs: Iterable[SongInput],
        revenue_sources: Iterable[RevenueSourceInput] = (),
        base_valuation: float = 0.0,
        base_confidence: Optional[float] = None,
    ) -> CatalogValuationResult:
        """
        Perform complete catalog valuation.

        Raw dictionaries are validated into records first; invalid input
        raises ValidationError before any computation runs.

        Args:
            songs: Song metadata records or raw rows
            revenue_sources: Revenue source records or raw rows
            base_valuation: Existing catalog valuation to blend with
            base_confidence: Confidence score (0-100) of the base valuation

        Returns:
            Complete catalog valuation result
        """
        song_records = _to_songs(songs)
        source_records = _to_revenue_sources(revenue_sources)

        pipeline = compute_catalog_pipeline(song_records, self.settings.pipeline)
        additional = calculate_additional_revenue_valuation(source_records)
        metrics = calculate_revenue_metrics(source_records)
        risk = assess_portfolio_risk(source_records)

        bonus = calculate_diversification_bonus(metrics.diversification_score)
        blended = self.blend(base_valuation, additional.total_valuation, bonus)

        boost = calculate_confidence_boost(source_records)
        enhanced_confidence = min((base_confidence or 0.0) + boost, 100.0)

        logger.info(
            "Catalog valuation: %d songs, %d revenue sources, pipeline $%s, blended $%s",
            len(song_records),
            len(source_records),
            f"{pipeline.total:,.0f}",
            f"{blended:,.0f}",
        )

        return CatalogValuationResult(
            analysis_timestamp=datetime.now().isoformat(),
            pipeline=pipeline,
            additional_revenue=additional,
            revenue_metrics=metrics,
            risk=risk,
            base_value=base_valuation,
            diversification_bonus=bonus,
            blended_value=blended,
            confidence_boost=boost,
            enhanced_confidence=enhanced_confidence,
            config_version=self.settings.pipeline.version,
        )


# Global valuator instance
_valuator: Optional[CatalogValuator] = None


def get_valuator() -> CatalogValuator:
    """Get or create the global catalog valuator instance."""
    global _valuator
    if _valuator is None:
        _valuator = CatalogValuator()
    return _valuator


def analyze_catalog(
    songs: Iterable[SongInput],
    revenue_sources: Iterable[RevenueSourceInput] = (),
    base_valuation: float = 0.0,
    settings: Optional[Settings] = None,
    base_confidence: Optional[float] = None,
) -> CatalogValuationResult:
    """
    Convenience function to value a catalog.

    Args:
        songs: Song metadata records or raw rows
        revenue_sources: Revenue source records or raw rows
        base_valuation: Existing catalog valuation to blend with
        settings: Optional settings overriding the loaded configuration
        base_confidence: Confidence score (0-100) of the base valuation

    Returns:
        Complete catalog valuation result
    """
    valuator = CatalogValuator(settings) if settings is not None else get_valuator()
    return valuator.analyze(songs, revenue_sources, base_valuation, base_confidence)
