"""Tests for portfolio risk assessment."""

import pytest

from catalog_valuation.models import ConfidenceLevel, RevenueSource, RiskLevel
from catalog_valuation.revenue import assess_portfolio_risk, classify_risk


def source(revenue_type, annual_revenue, confidence):
    return RevenueSource(
        revenue_type=revenue_type,
        annual_revenue=annual_revenue,
        confidence_level=ConfidenceLevel(confidence),
    )


class TestEmptyPortfolio:

    def test_empty_is_high_risk(self):
        risk = assess_portfolio_risk([])
        assert risk.risk_level == RiskLevel.HIGH
        assert risk.score == 0
        assert risk.recommendations == []
        assert risk.to_dict() == {"risk_level": "high", "score": 0, "recommendations": []}

    def test_zero_revenue_treated_as_empty(self):
        risk = assess_portfolio_risk([source("publishing", 0, "high")])
        assert risk.risk_level == RiskLevel.HIGH
        assert risk.score == 0
        assert risk.recommendations == []


class TestRiskTiers:

    def test_single_touring_low_confidence(self):
        risk = assess_portfolio_risk([source("touring", 40000, "low")])
        # (3 + 3) / 6 = 1.0, relieved by 1/9 x 0.3
        assert risk.risk_level == RiskLevel.HIGH
        assert 0 <= risk.score <= 30
        assert risk.score == 3
        assert risk.diversification_score == pytest.approx(1 / 9)
        assert "Critically low diversification - add multiple revenue types" in risk.recommendations
        assert len(risk.recommendations) == 3

    def test_single_publishing_high_confidence_is_medium(self):
        risk = assess_portfolio_risk([source("publishing", 75000, "high")])
        # (1 + 1) / 6 x (1 - 1/9 x 0.3) = 0.3222
        assert risk.risk_level == RiskLevel.MEDIUM
        assert risk.score == 68
        assert risk.recommendations == [
            "Consider diversifying into more stable revenue types",
            "Add more revenue source types to reduce risk",
        ]

    def test_diversified_publishing_heavy_is_low(self):
        sources = [source("publishing", 1_000_000, "high")]
        sources += [source(t, 1, "high") for t in (
            "mechanical", "streaming", "master_licensing", "performance",
            "sync", "other", "merchandise", "touring",
        )]
        risk = assess_portfolio_risk(sources)
        assert risk.risk_level == RiskLevel.LOW
        assert risk.diversification_score == pytest.approx(1.0)
        assert risk.recommendations == ["Excellent diversification and revenue quality"]
        assert risk.score == 77

    def test_high_risk_with_moderate_diversification(self):
        sources = [
            source("other", 10000, "low"),
            source("merchandise", 10000, "low"),
            source("touring", 10000, "low"),
        ]
        risk = assess_portfolio_risk(sources)
        assert risk.risk_level == RiskLevel.HIGH
        assert risk.score == 10
        assert risk.recommendations == [
            "High risk portfolio - consider adding more stable revenue sources",
            "Focus on publishing and mechanical revenue for stability",
        ]

    def test_unknown_type_dilutes_but_does_not_diversify(self):
        risk = assess_portfolio_risk([
            source("publishing", 1000, "high"),
            source("bitcoin", 1000, "low"),
        ])
        assert risk.diversification_score == pytest.approx(1 / 9)
        assert risk.risk_level == RiskLevel.LOW

    def test_score_bounds(self):
        for conf in ("low", "medium", "high"):
            for revenue_type in ("publishing", "sync", "touring"):
                risk = assess_portfolio_risk([source(revenue_type, 100, conf)])
                assert 0 <= risk.score <= 100


class TestClassifyRisk:

    def test_cutoffs(self):
        assert classify_risk(0.0) == RiskLevel.LOW
        assert classify_risk(0.2999) == RiskLevel.LOW
        assert classify_risk(0.3) == RiskLevel.MEDIUM
        assert classify_risk(0.5999) == RiskLevel.MEDIUM
        assert classify_risk(0.6) == RiskLevel.HIGH
        assert classify_risk(1.0) == RiskLevel.HIGH
