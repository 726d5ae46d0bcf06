"""
Revenue module for additional-revenue valuation.

Provides the revenue type catalog, multiplier valuation, diversification
scoring, portfolio risk assessment and spreadsheet import.
"""

from .types import (
    REVENUE_TYPE_COUNT,
    REVENUE_TYPE_MULTIPLIERS,
    RevenueTypeInfo,
    list_revenue_types,
    lookup_revenue_type,
)
from .valuator import (
    CONFIDENCE_ADJUSTMENTS,
    NON_RECURRING_ADJUSTMENT,
    AdditionalRevenueValuation,
    RevenueMetrics,
    MAX_CONFIDENCE_BOOST,
    calculate_additional_revenue_valuation,
    calculate_confidence_boost,
    calculate_revenue_metrics,
    value_revenue_source,
)
from .diversification import (
    MAX_DIVERSIFICATION_BONUS,
    calculate_diversification_bonus,
    calculate_diversification_score,
)
from .risk import (
    PortfolioRisk,
    assess_portfolio_risk,
    build_recommendations,
    classify_risk,
)
from .csv_import import (
    CsvTemplate,
    ImportResult,
    RowValidation,
    generate_csv_template,
    load_revenue_sources,
    validate_revenue_source_row,
)

__version__ = "1.0.0"

__all__ = [
    # types.py
    "REVENUE_TYPE_COUNT",
    "REVENUE_TYPE_MULTIPLIERS",
    "RevenueTypeInfo",
    "list_revenue_types",
    "lookup_revenue_type",
    # valuator.py
    "CONFIDENCE_ADJUSTMENTS",
    "NON_RECURRING_ADJUSTMENT",
    "AdditionalRevenueValuation",
    "RevenueMetrics",
    "MAX_CONFIDENCE_BOOST",
    "calculate_additional_revenue_valuation",
    "calculate_confidence_boost",
    "calculate_revenue_metrics",
    "value_revenue_source",
    # diversification.py
    "MAX_DIVERSIFICATION_BONUS",
    "calculate_diversification_bonus",
    "calculate_diversification_score",
    # risk.py
    "PortfolioRisk",
    "assess_portfolio_risk",
    "build_recommendations",
    "classify_risk",
    # csv_import.py
    "CsvTemplate",
    "ImportResult",
    "RowValidation",
    "generate_csv_template",
    "load_revenue_sources",
    "validate_revenue_source_row",
]
