"""Data models for the catalog valuation engine."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class ValidationError(ValueError):
    """Raised when raw input cannot be turned into a valuation record."""


class ConfidenceLevel(str, Enum):
    """How much the reported figure can be trusted."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Risk tier for a revenue category or a whole portfolio."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RegistrationGap(str, Enum):
    """A missing piece of metadata that reduces collectible royalties."""

    MISSING_ISWC = "missing_iswc"
    MISSING_PRO = "missing_pro"
    MISSING_SPLITS = "missing_splits"
    MISSING_PUBLISHERS = "missing_publishers"
    INCOMPLETE_METADATA = "incomplete_metadata"


TRUE_STRINGS = {"true", "yes", "1", "y"}
FALSE_STRINGS = {"false", "no", "0", "n"}


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive scores."""
    return int(math.floor(value + 0.5))


def parse_amount(value: Any, field_name: str = "annual_revenue") -> float:
    """
    Parse a monetary amount such as ``75000``, ``"75,000"`` or ``" $ 75000.00"``.

    Missing values (None, empty string, NaN) are treated as zero.

    Raises:
        ValidationError: if the value is not numeric or is negative
    """
    if value is None:
        return 0.0

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")

    if isinstance(value, (int, float)):
        amount = float(value)
        if math.isnan(amount):
            return 0.0
    else:
        cleaned = re.sub(r"[$,\s]", "", str(value).strip())
        if not cleaned:
            return 0.0
        try:
            amount = float(cleaned)
        except ValueError:
            raise ValidationError(f"{field_name} must be a number, got {value!r}")

    if math.isinf(amount):
        raise ValidationError(f"{field_name} must be finite, got {value!r}")
    if amount < 0:
        raise ValidationError(f"{field_name} must be non-negative, got {amount}")
    return amount


def parse_bool(value: Any, field_name: str, default: bool) -> bool:
    """Parse a boolean flag given as a bool or a true/false string."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ValidationError(f'{field_name} must be "true" or "false", got {value!r}')


def parse_confidence(value: Any) -> ConfidenceLevel:
    """Parse a confidence level, failing fast on anything outside low/medium/high."""
    if isinstance(value, ConfidenceLevel):
        return value
    try:
        return ConfidenceLevel(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            f'Invalid confidence level "{value}". Valid levels: low, medium, high'
        )


def _parse_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f'Invalid {field_name} format "{value}"')


def _parse_mapping(value: Any, field_name: str) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ValidationError(
            f"{field_name} must be a mapping, got {type(value).__name__}"
        )
    return dict(value)


@dataclass(frozen=True)
class RevenueSource:
    """A single income stream reported for an artist or catalog."""

    revenue_type: str
    annual_revenue: float = 0.0
    confidence_level: ConfidenceLevel = ConfidenceLevel.MEDIUM
    is_recurring: bool = True
    # Descriptive fields carried through from imports
    revenue_source: Optional[str] = None
    currency: str = "USD"
    growth_rate: Optional[float] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RevenueSource":
        """
        Build a RevenueSource from untyped input (user entry, CSV row, DB row).

        Unknown revenue types are accepted: the valuation core skips them.

        Raises:
            ValidationError: for invalid confidence level, amount or flags
        """
        revenue_type = str(data.get("revenue_type") or "").strip().lower()
        if not revenue_type:
            raise ValidationError("revenue_type is required")

        growth_rate = data.get("growth_rate")
        if growth_rate in (None, ""):
            growth_rate = None
        else:
            try:
                growth_rate = float(growth_rate)
            except (TypeError, ValueError):
                raise ValidationError(f"growth_rate must be a number, got {growth_rate!r}")

        return cls(
            revenue_type=revenue_type,
            annual_revenue=parse_amount(data.get("annual_revenue")),
            confidence_level=parse_confidence(data.get("confidence_level", "medium")),
            is_recurring=parse_bool(data.get("is_recurring"), "is_recurring", default=True),
            revenue_source=(str(data["revenue_source"]).strip() or None)
            if data.get("revenue_source") else None,
            currency=str(data.get("currency") or "USD").strip().upper(),
            growth_rate=growth_rate,
            start_date=_parse_date(data.get("start_date"), "start date"),
            end_date=_parse_date(data.get("end_date"), "end date"),
            notes=data.get("notes") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "revenue_type": self.revenue_type,
            "revenue_source": self.revenue_source,
            "annual_revenue": self.annual_revenue,
            "currency": self.currency,
            "growth_rate": self.growth_rate,
            "confidence_level": self.confidence_level.value,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "is_recurring": self.is_recurring,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class SongMeta:
    """Registration metadata for one catalog work."""

    id: str
    title: str = ""
    metadata_completeness_score: Optional[float] = None
    verification_status: Optional[str] = None
    iswc: Optional[str] = None
    publishers: Optional[Dict[str, float]] = None
    estimated_splits: Optional[Dict[str, float]] = None
    pro_registrations: Optional[Dict[str, Any]] = None

    @property
    def completeness(self) -> float:
        """Completeness score with an absent value read as zero."""
        return self.metadata_completeness_score or 0.0

    @property
    def status(self) -> str:
        return (self.verification_status or "unknown").strip().lower()

    @property
    def has_iswc(self) -> bool:
        return bool(self.iswc and self.iswc.strip())

    @property
    def has_pro_registrations(self) -> bool:
        return bool(self.pro_registrations)

    @property
    def has_splits(self) -> bool:
        return bool(self.estimated_splits)

    @property
    def has_publishers(self) -> bool:
        return bool(self.publishers)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SongMeta":
        """
        Build a SongMeta from a song metadata row.

        Every field except ``id`` may be missing; missing data is a
        registration gap, not an error.

        Raises:
            ValidationError: if a field is present but structurally invalid
        """
        song_id = data.get("id")
        if song_id is None or str(song_id).strip() == "":
            raise ValidationError("song id is required")

        score = data.get("metadata_completeness_score")
        if score is not None:
            try:
                score = float(score)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"metadata_completeness_score must be a number, got {score!r}"
                )
            if math.isnan(score):
                score = None
            elif not 0.0 <= score <= 1.0:
                raise ValidationError(
                    f"metadata_completeness_score must be between 0 and 1, got {score}"
                )

        iswc = data.get("iswc")
        status = data.get("verification_status")

        return cls(
            id=str(song_id),
            title=str(data.get("title") or data.get("song_title") or ""),
            metadata_completeness_score=score,
            verification_status=str(status) if status else None,
            iswc=str(iswc).strip() if iswc else None,
            publishers=_parse_mapping(data.get("publishers"), "publishers"),
            estimated_splits=_parse_mapping(data.get("estimated_splits"), "estimated_splits"),
            pro_registrations=_parse_mapping(data.get("pro_registrations"), "pro_registrations"),
        )
