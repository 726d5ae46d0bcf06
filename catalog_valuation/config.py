"""Configuration management for the catalog valuation engine.

The pipeline estimator is driven by a versioned policy object rather than
hard-coded constants so commercial assumptions can change without touching
the algorithm. Defaults below are overridden by ``config/settings.yaml``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "CATALOG_VALUATION_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class ConfigError(ValueError):
    """Raised when a policy file describes an unusable configuration."""


@dataclass
class TerritoryWeights:
    """Share of collections arriving from domestic vs international societies."""
    domestic: float = 0.7
    intl: float = 0.3


@dataclass
class LagMonths:
    """Months of royalties in the collection pipeline per territory."""
    domestic: int = 4
    intl: int = 6


@dataclass
class DecaySettings:
    """Monthly exponential decay rate and its metadata adjustments."""
    base_k: float = 0.12
    min_k: float = 0.06
    max_k: float = 0.25
    verified_adjustment: float = -0.02
    missing_iswc_adjustment: float = 0.04
    low_completeness_adjustment: float = 0.03
    low_completeness_threshold: float = 0.6


@dataclass
class StreamWeights:
    """Split of pipeline income across income types. Should sum to 1."""
    performance: float = 0.6
    mechanical: float = 0.3
    sync: float = 0.1

    def as_dict(self) -> Dict[str, float]:
        return {
            "performance": self.performance,
            "mechanical": self.mechanical,
            "sync": self.sync,
        }


@dataclass
class CompletenessTier:
    """Annual gross estimate for songs at or above ``min_score`` completeness."""
    min_score: float
    verified_gross: float
    unverified_gross: float


def _default_tiers() -> List[CompletenessTier]:
    return [
        CompletenessTier(min_score=0.85, verified_gross=1400.0, unverified_gross=1200.0),
        CompletenessTier(min_score=0.7, verified_gross=800.0, unverified_gross=600.0),
        CompletenessTier(min_score=0.5, verified_gross=300.0, unverified_gross=250.0),
        CompletenessTier(min_score=0.0, verified_gross=150.0, unverified_gross=100.0),
    ]


@dataclass
class GapDiscounts:
    """Collectability multipliers applied per registration gap (1.0 = no discount)."""
    missing_pro: float = 0.7
    missing_iswc: float = 0.8
    missing_splits: float = 1.0
    missing_publishers: float = 1.0
    incomplete_metadata: float = 1.0
    # Extra leakage when the work was never verified and has no ISWC
    unverified_without_iswc: float = 0.8
    verified_boost: float = 1.1


@dataclass
class ConfidenceWeights:
    """Point weights for the catalog confidence score and per-song tiers."""
    base: int = 50
    completeness_points: int = 20
    depth_points: int = 10
    songs_per_depth_point: int = 10
    verified_points: int = 10
    iswc_points: int = 8
    splits_points: int = 8
    high_threshold: int = 80
    medium_threshold: int = 60
    song_high_completeness: float = 0.75
    song_medium_completeness: float = 0.6


@dataclass
class PipelineConfig:
    """Versioned policy for the catalog pipeline estimator."""
    version: str = "2024.1"
    platform_fee: float = 0.30
    publishing_share_factor: float = 0.25
    completeness_threshold: float = 0.7
    collectability_floor: float = 0.1
    scenario_band: float = 0.2
    # Multiple of the uncollected amount recoverable once gaps are fixed
    upside_factor: float = 1.8
    verified_statuses: Tuple[str, ...] = ("pro_verified", "bmi_verified")
    unverified_statuses: Tuple[str, ...] = ("discovered", "unknown")
    territory_weights: TerritoryWeights = field(default_factory=TerritoryWeights)
    lag_months: LagMonths = field(default_factory=LagMonths)
    decay: DecaySettings = field(default_factory=DecaySettings)
    stream_weights: StreamWeights = field(default_factory=StreamWeights)
    completeness_tiers: List[CompletenessTier] = field(default_factory=_default_tiers)
    gap_discounts: GapDiscounts = field(default_factory=GapDiscounts)
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check internal consistency of the policy."""
        if not 0.0 <= self.platform_fee < 1.0:
            raise ConfigError(f"platform_fee must be in [0, 1), got {self.platform_fee}")
        if self.publishing_share_factor < 0:
            raise ConfigError("publishing_share_factor must be non-negative")
        if not 0.0 < self.collectability_floor <= 1.0:
            raise ConfigError("collectability_floor must be in (0, 1]")
        if self.upside_factor < 0:
            raise ConfigError("upside_factor must be non-negative")
        if self.decay.min_k > self.decay.max_k:
            raise ConfigError(
                f"decay.min_k ({self.decay.min_k}) exceeds decay.max_k ({self.decay.max_k})"
            )
        if self.lag_months.domestic < 0 or self.lag_months.intl < 0:
            raise ConfigError("lag_months must be non-negative")

        weight_sum = sum(self.stream_weights.as_dict().values())
        if abs(weight_sum - 1.0) > 1e-6:
            raise ConfigError(f"stream_weights must sum to 1.0, got {weight_sum}")
        if min(self.stream_weights.as_dict().values()) < 0:
            raise ConfigError("stream_weights must be non-negative")

        territory_sum = self.territory_weights.domestic + self.territory_weights.intl
        if abs(territory_sum - 1.0) > 1e-6:
            raise ConfigError(f"territory_weights must sum to 1.0, got {territory_sum}")
        if self.territory_weights.domestic < 0 or self.territory_weights.intl < 0:
            raise ConfigError("territory_weights must be non-negative")

        for name, value in vars(self.gap_discounts).items():
            if value <= 0:
                raise ConfigError(f"gap_discounts.{name} must be positive, got {value}")

        if not self.completeness_tiers:
            raise ConfigError("completeness_tiers must not be empty")
        for tier in self.completeness_tiers:
            if tier.verified_gross < 0 or tier.unverified_gross < 0:
                raise ConfigError(
                    f"completeness tier at {tier.min_score} has a negative gross estimate"
                )
        # Tiers are matched top-down, so keep them sorted by threshold
        self.completeness_tiers = sorted(
            self.completeness_tiers, key=lambda t: t.min_score, reverse=True
        )


@dataclass
class ValuationSettings:
    """Weights used when blending a base valuation with additional revenue."""
    base_weight: float = 0.7
    additional_weight: float = 0.3


@dataclass
class Settings:
    """Application settings."""
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    valuation: ValuationSettings = field(default_factory=ValuationSettings)


def default_pipeline_config() -> PipelineConfig:
    """Return a fresh copy of the built-in pipeline policy."""
    return PipelineConfig()


def _build_pipeline_config(data: Dict[str, Any]) -> PipelineConfig:
    """Build a PipelineConfig from the ``pipeline`` section of a YAML file."""
    data = dict(data)
    nested = {
        "territory_weights": TerritoryWeights,
        "lag_months": LagMonths,
        "decay": DecaySettings,
        "stream_weights": StreamWeights,
        "gap_discounts": GapDiscounts,
        "confidence": ConfidenceWeights,
    }
    kwargs: Dict[str, Any] = {}
    try:
        for key, cls in nested.items():
            if key in data:
                kwargs[key] = cls(**(data.pop(key) or {}))

        if "completeness_tiers" in data:
            kwargs["completeness_tiers"] = [
                CompletenessTier(**tier) for tier in data.pop("completeness_tiers") or []
            ]
        for key in ("verified_statuses", "unverified_statuses"):
            if key in data:
                kwargs[key] = tuple(str(s).lower() for s in data.pop(key) or [])

        if "version" in data:
            kwargs["version"] = str(data.pop("version"))

        return PipelineConfig(**kwargs, **data)
    except TypeError as e:
        raise ConfigError(f"Invalid pipeline configuration: {e}") from e


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from YAML configuration file."""
    if config_path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        logger.warning("Config file %s not found, using built-in defaults", config_path)
        return Settings()

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    pipeline_data = data.get("pipeline", {}) or {}
    valuation_data = data.get("valuation", {}) or {}

    try:
        valuation = ValuationSettings(**valuation_data)
    except TypeError as e:
        raise ConfigError(f"Invalid valuation configuration: {e}") from e

    settings = Settings(
        pipeline=_build_pipeline_config(pipeline_data),
        valuation=valuation,
    )
    logger.info(
        "Loaded pipeline policy version %s from %s", settings.pipeline.version, config_path
    )
    return settings


# Global settings instance
settings = load_settings()
