"""Tests for the catalog valuation facade."""

import pytest

from catalog_valuation.config import Settings, ValuationSettings
from catalog_valuation.models import RiskLevel, ValidationError
from catalog_valuation.valuation import CatalogValuator, analyze_catalog, get_valuator

SONG_ROWS = [
    {
        "id": "s1",
        "song_title": "Registered Song",
        "metadata_completeness_score": 1.0,
        "iswc": "T-123.456.789-0",
        "pro_registrations": {"BMI": "123"},
    },
    {"id": "s2", "song_title": "Bare Song"},
]

SOURCE_ROWS = [
    {"revenue_type": "publishing", "annual_revenue": 75000, "confidence_level": "high", "is_recurring": True},
    {"revenue_type": "sync", "annual_revenue": 50000, "confidence_level": "medium", "is_recurring": False},
]


class TestAnalyzeCatalog:

    def test_blended_value(self):
        result = analyze_catalog(SONG_ROWS, SOURCE_ROWS, base_valuation=1_000_000, settings=Settings())

        assert result.additional_value == pytest.approx(1_725_000)
        assert result.revenue_metrics.diversification_score == pytest.approx(2 / 9)
        assert result.diversification_bonus == pytest.approx(2 / 9 * 0.2)

        expected = (1_000_000 * 0.7 + 1_725_000 * 0.3) * (1 + 2 / 9 * 0.2)
        assert result.blended_value == pytest.approx(expected)

    def test_components_attached(self):
        result = analyze_catalog(SONG_ROWS, SOURCE_ROWS, settings=Settings())
        assert len(result.pipeline.song_results) == 2
        assert result.pipeline.missing_impact > 0
        assert result.risk.risk_level == RiskLevel.MEDIUM
        assert result.config_version == Settings().pipeline.version

    def test_no_revenue_sources(self):
        result = analyze_catalog(SONG_ROWS, settings=Settings())
        assert result.additional_value == 0
        assert result.blended_value == 0
        assert result.risk.risk_level == RiskLevel.HIGH
        assert result.risk.score == 0

    def test_custom_weights(self):
        settings = Settings(valuation=ValuationSettings(base_weight=1.0, additional_weight=0.0))
        result = analyze_catalog([], [], base_valuation=500_000, settings=settings)
        assert result.blended_value == pytest.approx(500_000)

    def test_invalid_input_fails_fast(self):
        with pytest.raises(ValidationError):
            analyze_catalog(SONG_ROWS, [{"revenue_type": "sync", "confidence_level": "maybe"}])

    def test_confidence_boost(self):
        result = analyze_catalog(SONG_ROWS, SOURCE_ROWS, base_confidence=60, settings=Settings())
        # 2 sources x 5 + high 3 + medium 1.5
        assert result.confidence_boost == pytest.approx(14.5)
        assert result.enhanced_confidence == pytest.approx(74.5)

    def test_enhanced_confidence_capped(self):
        result = analyze_catalog(SONG_ROWS, SOURCE_ROWS, base_confidence=95, settings=Settings())
        assert result.enhanced_confidence == 100

    def test_confidence_without_base_score(self):
        result = analyze_catalog(SONG_ROWS, SOURCE_ROWS, settings=Settings())
        assert result.enhanced_confidence == pytest.approx(14.5)

    def test_to_dict(self):
        d = analyze_catalog(SONG_ROWS, SOURCE_ROWS, settings=Settings()).to_dict()
        assert set(d) >= {"pipeline", "additional_revenue", "risk", "blended_value", "analysis_timestamp",
                          "confidence_boost", "enhanced_confidence"}
        assert d["risk"]["risk_level"] == "medium"
        assert d["pipeline"]["breakdown"]["performance"] > 0


class TestCatalogValuator:

    def test_global_instance_reused(self):
        assert get_valuator() is get_valuator()

    def test_blend(self):
        valuator = CatalogValuator(Settings())
        assert valuator.blend(100, 200, 0.1) == pytest.approx((70 + 60) * 1.1)
