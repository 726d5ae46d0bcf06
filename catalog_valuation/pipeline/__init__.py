"""
Pipeline module for catalog royalty pipeline estimates.

Provides registration gap detection, collectability and the per-song and
catalog pipeline estimators.
"""

from .gaps import (
    collectability_factor,
    detect_registration_gaps,
    is_verified,
)
from .estimator import (
    INCOME_TYPES,
    CatalogPipelineResult,
    RegistrationGapSummary,
    SongPipelineResult,
    catalog_confidence_score,
    classify_confidence,
    compute_catalog_pipeline,
    compute_song_pipeline,
    decay_rate,
    estimate_annual_gross,
    song_confidence,
    summarize_registration_gaps,
)

__version__ = "1.0.0"

__all__ = [
    # gaps.py
    "collectability_factor",
    "detect_registration_gaps",
    "is_verified",
    # estimator.py
    "INCOME_TYPES",
    "CatalogPipelineResult",
    "RegistrationGapSummary",
    "SongPipelineResult",
    "catalog_confidence_score",
    "classify_confidence",
    "compute_catalog_pipeline",
    "compute_song_pipeline",
    "decay_rate",
    "estimate_annual_gross",
    "song_confidence",
    "summarize_registration_gaps",
]
