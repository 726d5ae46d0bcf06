"""Tests for revenue source spreadsheet import."""

import io

import pandas as pd
import pytest

from catalog_valuation.models import ConfidenceLevel
from catalog_valuation.revenue import (
    generate_csv_template,
    load_revenue_sources,
    validate_revenue_source_row,
)
from catalog_valuation.revenue.csv_import import TEMPLATE_HEADERS


def valid_row(**overrides):
    row = {
        "revenue_type": "publishing",
        "revenue_source": "BMI Performance Royalties",
        "annual_revenue": "75000",
        "currency": "USD",
        "growth_rate": "8",
        "confidence_level": "high",
        "start_date": "2024-01-01",
        "end_date": "",
        "is_recurring": "true",
        "notes": "",
    }
    row.update(overrides)
    return row


class TestTemplate:

    def test_template(self):
        template = generate_csv_template()
        assert template.headers == TEMPLATE_HEADERS
        assert len(template.sample_data) == 5
        lines = template.csv_content.split("\n")
        assert len(lines) == 6
        assert lines[0] == ",".join(f'"{h}"' for h in TEMPLATE_HEADERS)
        assert lines[1].startswith('"publishing","BMI Performance Royalties","75000"')

    def test_template_rows_are_valid(self):
        for idx, row in enumerate(generate_csv_template().sample_data, start=1):
            assert validate_revenue_source_row(row, idx).is_valid


class TestValidateRow:

    def test_valid(self):
        result = validate_revenue_source_row(valid_row(), 1)
        assert result.is_valid
        assert result.errors == []

    def test_every_problem_reported(self):
        row = valid_row(
            revenue_source="",
            annual_revenue="-10",
            revenue_type="lottery",
            confidence_level="sure",
            start_date="not-a-date",
            end_date="also-bad",
            is_recurring="sometimes",
        )
        result = validate_revenue_source_row(row, 7)
        assert not result.is_valid
        assert len(result.errors) == 7
        assert all(e.startswith("Row 7:") for e in result.errors)
        assert any('Invalid revenue type "lottery"' in e for e in result.errors)

    @pytest.mark.parametrize("revenue", ["0", "", "abc"])
    def test_revenue_must_be_positive(self, revenue):
        result = validate_revenue_source_row(valid_row(annual_revenue=revenue), 1)
        assert result.errors == ["Row 1: Annual revenue must be a positive number"]

    def test_missing_optional_fields(self):
        row = valid_row(start_date="", end_date="", is_recurring="")
        assert validate_revenue_source_row(row, 1).is_valid


class TestLoadRevenueSources:

    def test_load_template(self):
        buffer = io.StringIO(generate_csv_template().csv_content)
        result = load_revenue_sources(buffer)
        assert result.errors == []
        assert len(result.sources) == 5
        sync = [s for s in result.sources if s.revenue_type == "sync"][0]
        assert sync.is_recurring is False
        assert sync.annual_revenue == 50000
        assert sync.confidence_level == ConfidenceLevel.MEDIUM

    def test_invalid_rows_excluded(self, tmp_path):
        path = tmp_path / "sources.csv"
        pd.DataFrame([
            valid_row(),
            valid_row(revenue_type="unknown_type"),
            valid_row(revenue_type="touring", confidence_level="low", annual_revenue="12,000"),
        ]).to_csv(path, index=False)

        result = load_revenue_sources(path)
        assert [s.revenue_type for s in result.sources] == ["publishing", "touring"]
        assert result.sources[1].annual_revenue == 12000
        assert result.rejected_rows == 1
        assert result.errors[0].startswith("Row 2:")

    def test_load_excel(self, tmp_path):
        path = tmp_path / "sources.xlsx"
        pd.DataFrame([valid_row(), valid_row(revenue_type="mechanical")]).to_excel(path, index=False)
        result = load_revenue_sources(path)
        assert [s.revenue_type for s in result.sources] == ["publishing", "mechanical"]
