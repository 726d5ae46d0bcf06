"""
Revenue source import from CSV or Excel spreadsheets.

Provides a downloadable template, per-row validation and a loader that
turns valid rows into RevenueSource records.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, IO, List, Mapping, Union

import pandas as pd

from ..models import (
    FALSE_STRINGS,
    TRUE_STRINGS,
    ConfidenceLevel,
    RevenueSource,
    ValidationError,
)
from .types import REVENUE_TYPE_MULTIPLIERS

logger = logging.getLogger(__name__)

TEMPLATE_HEADERS = [
    "revenue_type",
    "revenue_source",
    "annual_revenue",
    "currency",
    "growth_rate",
    "confidence_level",
    "start_date",
    "end_date",
    "is_recurring",
    "notes",
]

TEMPLATE_SAMPLE_ROWS: List[Dict[str, str]] = [
    {
        "revenue_type": "publishing",
        "revenue_source": "BMI Performance Royalties",
        "annual_revenue": "75000",
        "currency": "USD",
        "growth_rate": "8",
        "confidence_level": "high",
        "start_date": "2024-01-01",
        "end_date": "",
        "is_recurring": "true",
        "notes": "Quarterly collections from BMI for radio/TV performances",
    },
    {
        "revenue_type": "streaming",
        "revenue_source": "Spotify Streaming Revenue",
        "annual_revenue": "45000",
        "currency": "USD",
        "growth_rate": "15",
        "confidence_level": "high",
        "start_date": "2024-01-01",
        "end_date": "",
        "is_recurring": "true",
        "notes": "Monthly streaming revenue from Spotify platform",
    },
    {
        "revenue_type": "sync",
        "revenue_source": "Netflix Original Series License",
        "annual_revenue": "50000",
        "currency": "USD",
        "growth_rate": "0",
        "confidence_level": "medium",
        "start_date": "2024-06-01",
        "end_date": "2025-06-01",
        "is_recurring": "false",
        "notes": "One-time sync license fee for Netflix original series",
    },
    {
        "revenue_type": "mechanical",
        "revenue_source": "Digital Download Mechanicals",
        "annual_revenue": "25000",
        "currency": "USD",
        "growth_rate": "5",
        "confidence_level": "medium",
        "start_date": "2024-01-01",
        "end_date": "",
        "is_recurring": "true",
        "notes": "Mechanical royalties from iTunes, Amazon, etc.",
    },
    {
        "revenue_type": "performance",
        "revenue_source": "Live Concert Revenue",
        "annual_revenue": "120000",
        "currency": "USD",
        "growth_rate": "20",
        "confidence_level": "medium",
        "start_date": "2024-03-01",
        "end_date": "2024-12-31",
        "is_recurring": "true",
        "notes": "Revenue from scheduled live performances and tours",
    },
]

EXCEL_SUFFIXES = {".xlsx", ".xls"}


@dataclass
class CsvTemplate:
    """Import template: headers, sample rows and rendered CSV text."""

    headers: List[str]
    sample_data: List[Dict[str, str]]
    csv_content: str


@dataclass
class RowValidation:
    """Outcome of validating one spreadsheet row."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class ImportResult:
    """Revenue sources built from a spreadsheet plus errors for rejected rows."""

    sources: List[RevenueSource] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def rejected_rows(self) -> int:
        return len({e.split(":", 1)[0] for e in self.errors})


def generate_csv_template() -> CsvTemplate:
    """Build the revenue source import template with every cell quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    for row in TEMPLATE_SAMPLE_ROWS:
        writer.writerow([row[h] for h in TEMPLATE_HEADERS])

    return CsvTemplate(
        headers=list(TEMPLATE_HEADERS),
        sample_data=[dict(row) for row in TEMPLATE_SAMPLE_ROWS],
        csv_content=buffer.getvalue().rstrip("\n"),
    )


def _cell(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def _is_valid_date(value: str) -> bool:
    try:
        pd.to_datetime(value)
    except (ValueError, TypeError):
        return False
    return True


def validate_revenue_source_row(row: Mapping[str, Any], row_index: int) -> RowValidation:
    """
    Validate one spreadsheet row against the import template.

    Args:
        row: Column name -> cell value
        row_index: Row number used in error messages

    Returns:
        RowValidation listing every problem found
    """
    errors: List[str] = []

    if not _cell(row, "revenue_source"):
        errors.append(f"Row {row_index}: Revenue source name is required")

    revenue_text = _cell(row, "annual_revenue").replace(",", "").replace("$", "")
    try:
        revenue_ok = float(revenue_text) > 0
    except ValueError:
        revenue_ok = False
    if not revenue_ok:
        errors.append(f"Row {row_index}: Annual revenue must be a positive number")

    revenue_type = _cell(row, "revenue_type")
    if revenue_type not in REVENUE_TYPE_MULTIPLIERS:
        errors.append(
            f'Row {row_index}: Invalid revenue type "{revenue_type}". '
            f"Valid types: {', '.join(REVENUE_TYPE_MULTIPLIERS)}"
        )

    confidence = _cell(row, "confidence_level")
    if confidence not in {level.value for level in ConfidenceLevel}:
        errors.append(
            f'Row {row_index}: Invalid confidence level "{confidence}". '
            "Valid levels: low, medium, high"
        )

    start_date = _cell(row, "start_date")
    if start_date and not _is_valid_date(start_date):
        errors.append(f'Row {row_index}: Invalid start date format "{start_date}"')

    end_date = _cell(row, "end_date")
    if end_date and not _is_valid_date(end_date):
        errors.append(f'Row {row_index}: Invalid end date format "{end_date}"')

    is_recurring = _cell(row, "is_recurring")
    if is_recurring and is_recurring.lower() not in TRUE_STRINGS | FALSE_STRINGS:
        errors.append(f'Row {row_index}: is_recurring must be "true" or "false"')

    return RowValidation(is_valid=not errors, errors=errors)


def _read_frame(source: Union[str, Path, IO]) -> pd.DataFrame:
    if isinstance(source, (str, Path)) and Path(source).suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(source, sheet_name=0, dtype=str)
        return df.fillna("")
    return pd.read_csv(source, dtype=str, keep_default_na=False, skipinitialspace=True)


def load_revenue_sources(source: Union[str, Path, IO]) -> ImportResult:
    """
    Load revenue sources from a CSV or Excel file.

    Rows failing validation are logged and left out of the result.

    Args:
        source: Path to a .csv/.xlsx file, or an open CSV buffer

    Returns:
        ImportResult with valid sources and per-row error messages
    """
    df = _read_frame(source)
    df.columns = [str(c).strip().lower() for c in df.columns]

    result = ImportResult()
    for idx, row in enumerate(df.to_dict(orient="records"), start=1):
        validation = validate_revenue_source_row(row, idx)
        if not validation.is_valid:
            logger.warning("Rejected revenue source row %d: %s", idx, "; ".join(validation.errors))
            result.errors.extend(validation.errors)
            continue

        try:
            result.sources.append(RevenueSource.from_dict(row))
        except ValidationError as e:
            logger.warning("Rejected revenue source row %d: %s", idx, e)
            result.errors.append(f"Row {idx}: {e}")

    logger.info(
        "Imported %d revenue sources (%d rows rejected)",
        len(result.sources),
        result.rejected_rows,
    )
    return result
