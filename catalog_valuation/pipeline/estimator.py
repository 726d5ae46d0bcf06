"""
Catalog pipeline estimator.

Estimates the royalties already "in the pipe" for a catalog: income earned
but not yet paid out by societies, projected over the domestic and
international collection lags. Each song's base estimate is discounted by
its registration gaps, and the difference is reported as the missing
registrations impact.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from ..config import ConfidenceWeights, PipelineConfig, default_pipeline_config
from ..models import ConfidenceLevel, RegistrationGap, SongMeta, clamp, round_half_up
from .gaps import collectability_factor, detect_registration_gaps, is_verified

INCOME_TYPES = ("performance", "mechanical", "sync")


def _zero_breakdown() -> Dict[str, float]:
    return {income_type: 0.0 for income_type in INCOME_TYPES}


@dataclass
class SongPipelineResult:
    """Pipeline estimate for a single song."""

    id: str
    title: str
    monthly_net_r0: float
    k: float
    base_pipeline: float
    collectability: float
    adjusted_pipeline: float
    breakdown: Dict[str, float]
    confidence: ConfidenceLevel
    gaps: List[RegistrationGap] = field(default_factory=list)

    @property
    def missing_impact(self) -> float:
        return self.base_pipeline - self.adjusted_pipeline

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "monthly_net_r0": self.monthly_net_r0,
            "k": self.k,
            "base_pipeline": self.base_pipeline,
            "collectability": self.collectability,
            "adjusted_pipeline": self.adjusted_pipeline,
            "breakdown": dict(self.breakdown),
            "confidence": self.confidence.value,
            "gaps": [gap.value for gap in self.gaps],
        }


@dataclass
class RegistrationGapSummary:
    """Catalog-wide counts of the headline registration gaps."""

    missing_iswc: int = 0
    missing_pro: int = 0
    incomplete_metadata: int = 0

    @property
    def total(self) -> int:
        return self.missing_iswc + self.missing_pro + self.incomplete_metadata

    def to_dict(self) -> Dict[str, int]:
        return {
            "missing_iswc": self.missing_iswc,
            "missing_pro": self.missing_pro,
            "incomplete_metadata": self.incomplete_metadata,
            "total": self.total,
        }


@dataclass
class CatalogPipelineResult:
    """Aggregated pipeline estimate for a catalog."""

    total: float
    breakdown: Dict[str, float]
    scenario: Dict[str, float]
    confidence_score: int
    song_results: List[SongPipelineResult] = field(default_factory=list)
    base_total: float = 0.0
    missing_impact: float = 0.0
    missing_impact_breakdown: Dict[str, float] = field(default_factory=_zero_breakdown)
    potential_upside: float = 0.0
    registration_gaps: RegistrationGapSummary = field(default_factory=RegistrationGapSummary)
    confidence_level: ConfidenceLevel = ConfidenceLevel.LOW
    config_version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "breakdown": dict(self.breakdown),
            "scenario": dict(self.scenario),
            "confidence_score": self.confidence_score,
            "confidence_level": self.confidence_level.value,
            "song_results": [r.to_dict() for r in self.song_results],
            "base_total": self.base_total,
            "missing_impact": self.missing_impact,
            "missing_impact_breakdown": dict(self.missing_impact_breakdown),
            "potential_upside": self.potential_upside,
            "registration_gaps": self.registration_gaps.to_dict(),
            "config_version": self.config_version,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """One row per song, for tabular export."""
        columns = [
            "id",
            "title",
            "base_pipeline",
            "collectability",
            "adjusted_pipeline",
            *INCOME_TYPES,
            "confidence",
            "gaps",
        ]
        rows = []
        for r in self.song_results:
            rows.append({
                "id": r.id,
                "title": r.title,
                "base_pipeline": r.base_pipeline,
                "collectability": r.collectability,
                "adjusted_pipeline": r.adjusted_pipeline,
                **r.breakdown,
                "confidence": r.confidence.value,
                "gaps": ", ".join(gap.value for gap in r.gaps),
            })
        return pd.DataFrame(rows, columns=columns)


def classify_confidence(score: float, weights: Optional[ConfidenceWeights] = None) -> ConfidenceLevel:
    """Map a 0-100 confidence score to a tier (>=80 high, >=60 medium)."""
    weights = weights or ConfidenceWeights()
    if score >= weights.high_threshold:
        return ConfidenceLevel.HIGH
    if score >= weights.medium_threshold:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def estimate_annual_gross(completeness: float, verified: bool, config: PipelineConfig) -> float:
    """
    Annual gross income heuristic anchored to metadata quality.

    Args:
        completeness: Metadata completeness 0-1
        verified: Whether registrations are PRO-verified
        config: Pipeline policy with completeness tiers (highest first)

    Returns:
        Estimated annual gross in currency units
    """
    for tier in config.completeness_tiers:
        if completeness >= tier.min_score:
            return tier.verified_gross if verified else tier.unverified_gross
    lowest = config.completeness_tiers[-1]
    return lowest.verified_gross if verified else lowest.unverified_gross


def decay_rate(song: SongMeta, verified: bool, config: PipelineConfig) -> float:
    """Monthly decay rate k, adjusted by metadata and clamped to policy bounds."""
    decay = config.decay
    k = decay.base_k
    if verified:
        k += decay.verified_adjustment
    if not song.has_iswc:
        k += decay.missing_iswc_adjustment
    if song.completeness < decay.low_completeness_threshold:
        k += decay.low_completeness_adjustment
    return clamp(k, decay.min_k, decay.max_k)


def _lag_window_sum(k: float, months: int) -> float:
    """Sum of e^(-k*m) for m = 1..months."""
    if months <= 0:
        return 0.0
    return float(np.exp(-k * np.arange(1, months + 1)).sum())


def song_confidence(song: SongMeta, config: PipelineConfig) -> ConfidenceLevel:
    """Confidence tier for a single song's estimate."""
    weights = config.confidence
    if is_verified(song, config) and song.completeness >= weights.song_high_completeness:
        return ConfidenceLevel.HIGH
    if song.completeness >= weights.song_medium_completeness:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def compute_song_pipeline(
    song: SongMeta, config: Optional[PipelineConfig] = None
) -> SongPipelineResult:
    """
    Estimate the collectible pipeline for one song.

    Args:
        song: Song metadata (absent completeness reads as 0)
        config: Pipeline policy, defaults to the built-in policy

    Returns:
        SongPipelineResult with base and gap-adjusted estimates
    """
    config = config or default_pipeline_config()

    verified = is_verified(song, config)
    annual_gross = estimate_annual_gross(song.completeness, verified, config)

    # Monthly net publishing revenue after platform fee and publishing share
    monthly_net_r0 = annual_gross / 12 * (1 - config.platform_fee) * config.publishing_share_factor

    k = decay_rate(song, verified, config)

    base_pipeline = monthly_net_r0 * (
        _lag_window_sum(k, config.lag_months.domestic) * config.territory_weights.domestic
        + _lag_window_sum(k, config.lag_months.intl) * config.territory_weights.intl
    )

    collectability = collectability_factor(song, config)
    adjusted_pipeline = base_pipeline * collectability

    breakdown = {
        income_type: adjusted_pipeline * weight
        for income_type, weight in config.stream_weights.as_dict().items()
    }

    return SongPipelineResult(
        id=song.id,
        title=song.title,
        monthly_net_r0=monthly_net_r0,
        k=k,
        base_pipeline=base_pipeline,
        collectability=collectability,
        adjusted_pipeline=adjusted_pipeline,
        breakdown=breakdown,
        confidence=song_confidence(song, config),
        gaps=detect_registration_gaps(song, config),
    )


def catalog_confidence_score(songs: List[SongMeta], config: PipelineConfig) -> int:
    """
    Catalog confidence 0-100.

    Starts from a base and adds points for average completeness, catalog
    depth and the share of songs that are verified, carry an ISWC or have
    splits. An empty catalog scores 0.
    """
    if not songs:
        return 0

    weights = config.confidence
    n = len(songs)

    avg_completeness = sum(s.completeness for s in songs) / n
    verified_share = sum(1 for s in songs if is_verified(s, config)) / n
    iswc_share = sum(1 for s in songs if s.has_iswc) / n
    splits_share = sum(1 for s in songs if s.has_splits) / n

    score = weights.base
    score += round_half_up(avg_completeness * weights.completeness_points)
    score += min(weights.depth_points, n // weights.songs_per_depth_point)
    score += round_half_up(verified_share * weights.verified_points)
    score += round_half_up(iswc_share * weights.iswc_points)
    score += round_half_up(splits_share * weights.splits_points)

    return int(clamp(score, 0, 100))


def summarize_registration_gaps(
    songs: Iterable[SongMeta], config: PipelineConfig
) -> RegistrationGapSummary:
    """Count songs missing an ISWC, a PRO registration, or complete metadata."""
    summary = RegistrationGapSummary()
    for song in songs:
        if not song.has_iswc:
            summary.missing_iswc += 1
        if not song.has_pro_registrations:
            summary.missing_pro += 1
        if song.completeness < config.completeness_threshold:
            summary.incomplete_metadata += 1
    return summary


def compute_catalog_pipeline(
    songs: Iterable[SongMeta], config: Optional[PipelineConfig] = None
) -> CatalogPipelineResult:
    """
    Estimate the collectible pipeline for a whole catalog.

    Args:
        songs: Song metadata records
        config: Pipeline policy, defaults to the built-in policy

    Returns:
        CatalogPipelineResult with totals, income-type breakdown, scenario
        bands, confidence and the missing registrations impact
    """
    config = config or default_pipeline_config()
    songs = list(songs)

    results = [compute_song_pipeline(song, config) for song in songs]

    total = sum((r.adjusted_pipeline for r in results), 0.0)
    base_total = sum((r.base_pipeline for r in results), 0.0)

    breakdown = _zero_breakdown()
    for r in results:
        for income_type in INCOME_TYPES:
            breakdown[income_type] += r.breakdown.get(income_type, 0.0)

    missing_impact = max(0.0, base_total - total)
    weights = config.stream_weights.as_dict()
    missing_impact_breakdown = {
        income_type: missing_impact * weights[income_type] for income_type in INCOME_TYPES
    }

    band = config.scenario_band
    scenario = {
        "low": total * (1 - band),
        "base": total,
        "high": total * (1 + band),
    }

    confidence_score = catalog_confidence_score(songs, config)

    return CatalogPipelineResult(
        total=total,
        breakdown=breakdown,
        scenario=scenario,
        confidence_score=confidence_score,
        confidence_level=classify_confidence(confidence_score, config.confidence),
        song_results=results,
        base_total=base_total,
        missing_impact=missing_impact,
        missing_impact_breakdown=missing_impact_breakdown,
        potential_upside=missing_impact * config.upside_factor,
        registration_gaps=summarize_registration_gaps(songs, config),
        config_version=config.version,
    )
