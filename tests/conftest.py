"""Shared fixtures for catalog valuation tests."""

import pytest

from catalog_valuation.config import PipelineConfig
from catalog_valuation.models import ConfidenceLevel, RevenueSource, SongMeta


@pytest.fixture
def config():
    return PipelineConfig()


@pytest.fixture
def registered_song():
    """Fully registered song: ISWC, PRO registration, complete metadata."""
    return SongMeta(
        id="song-1",
        title="Registered Song",
        metadata_completeness_score=1.0,
        iswc="T-123.456.789-0",
        pro_registrations={"BMI": "12345678"},
    )


@pytest.fixture
def bare_song():
    """Song with no registration signals at all."""
    return SongMeta(id="song-2", title="Bare Song")


@pytest.fixture
def publishing_source():
    return RevenueSource(
        revenue_type="publishing",
        annual_revenue=75000,
        confidence_level=ConfidenceLevel.HIGH,
        is_recurring=True,
    )


@pytest.fixture
def sync_source():
    return RevenueSource(
        revenue_type="sync",
        annual_revenue=50000,
        confidence_level=ConfidenceLevel.MEDIUM,
        is_recurring=False,
    )
