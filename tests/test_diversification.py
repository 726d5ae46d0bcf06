"""Tests for diversification scoring."""

import pytest

from catalog_valuation.revenue import (
    REVENUE_TYPE_MULTIPLIERS,
    calculate_diversification_bonus,
    calculate_diversification_score,
)


class TestDiversificationScore:

    def test_empty(self):
        assert calculate_diversification_score([]) == 0

    @pytest.mark.parametrize("n", range(1, 9))
    def test_partial(self, n):
        types = list(REVENUE_TYPE_MULTIPLIERS)[:n]
        assert calculate_diversification_score(types) == pytest.approx(n / 9)

    def test_duplicates_ignored(self):
        assert calculate_diversification_score(["sync", "sync", "sync"]) == pytest.approx(1 / 9)

    def test_all_nine(self):
        assert calculate_diversification_score(list(REVENUE_TYPE_MULTIPLIERS)) == 1.0

    def test_capped_at_one(self):
        types = list(REVENUE_TYPE_MULTIPLIERS) + ["extra_a", "extra_b"]
        assert calculate_diversification_score(types) == 1.0

    def test_accepts_generator(self):
        assert calculate_diversification_score(t for t in ("sync", "touring")) == pytest.approx(2 / 9)


class TestDiversificationBonus:

    def test_bonus_scale(self):
        assert calculate_diversification_bonus(0) == 0
        assert calculate_diversification_bonus(0.5) == pytest.approx(0.1)
        assert calculate_diversification_bonus(1.0) == pytest.approx(0.2)
