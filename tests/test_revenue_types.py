"""Tests for the revenue type catalog."""

from catalog_valuation.models import RiskLevel
from catalog_valuation.revenue import (
    REVENUE_TYPE_COUNT,
    REVENUE_TYPE_MULTIPLIERS,
    list_revenue_types,
    lookup_revenue_type,
)


class TestRevenueTypeCatalog:
    """Static multiplier table."""

    def test_nine_categories(self):
        assert REVENUE_TYPE_COUNT == 9
        assert set(REVENUE_TYPE_MULTIPLIERS) == {
            "publishing",
            "mechanical",
            "streaming",
            "master_licensing",
            "performance",
            "sync",
            "other",
            "merchandise",
            "touring",
        }

    def test_keys_match_entries(self):
        for key, info in REVENUE_TYPE_MULTIPLIERS.items():
            assert info.type == key
            assert info.multiplier > 0

    def test_multipliers(self):
        expected = {
            "publishing": 18,
            "mechanical": 15,
            "streaming": 12,
            "master_licensing": 12,
            "performance": 10,
            "sync": 8,
            "other": 6,
            "merchandise": 5,
            "touring": 3,
        }
        assert {k: v.multiplier for k, v in REVENUE_TYPE_MULTIPLIERS.items()} == expected

    def test_risk_levels(self):
        assert lookup_revenue_type("publishing").risk_level == RiskLevel.LOW
        assert lookup_revenue_type("sync").risk_level == RiskLevel.MEDIUM
        assert lookup_revenue_type("touring").risk_level == RiskLevel.HIGH

    def test_unknown_type_returns_none(self):
        assert lookup_revenue_type("crypto") is None
        assert lookup_revenue_type("") is None

    def test_list_ordered_by_multiplier(self):
        multipliers = [info.multiplier for info in list_revenue_types()]
        assert multipliers == sorted(multipliers, reverse=True)
        assert list_revenue_types()[0].type == "publishing"
        assert list_revenue_types()[-1].type == "touring"
