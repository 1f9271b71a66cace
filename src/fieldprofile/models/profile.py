"""Field profile models.

Immutable pydantic records returned by the profiler and consumed by the
script generator, the summary renderer and the report file helpers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValueKind(str, Enum):
    """Kind assigned to a raw cell value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    DATE = "date"
    STRING = "string"


class CardinalityClass(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DistributionType(str, Enum):
    VERY_EVEN = "Very Even"
    EVEN = "Even"
    MODERATE = "Moderate"
    SKEWED = "Skewed"
    HIGHLY_SKEWED = "Highly Skewed"


class QualityLevel(str, Enum):
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class TrendType(str, Enum):
    STRONG_GROWTH = "Strong Growth"
    MODERATE_GROWTH = "Moderate Growth"
    CONSTANT = "Constant"
    MODERATE_DECLINE = "Moderate Decline"
    STRONG_DECLINE = "Strong Decline"
    INSUFFICIENT_DATA = "Insufficient Data"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DistributionEntry(_Record):
    """One distinct value of a field with its occurrence count."""

    value: str | None = Field(description="Canonical value, None for the null bucket")
    count: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)


# Statistics


class DescriptiveStats(_Record):
    min: float
    max: float
    mean: float
    median: float
    mode: list[float] = Field(default_factory=list)
    sum: float
    count: int


class SpreadStats(_Record):
    range: float
    std_dev: float
    variance: float
    iqr: float


class Quartiles(_Record):
    q1: float
    q2: float
    q3: float


class Percentiles(_Record):
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


class DistributionShape(_Record):
    quartiles: Quartiles
    percentiles: Percentiles
    skewness: float | None = Field(
        default=None, description="Third standardized moment, None when std_dev is 0"
    )
    kurtosis: float | None = Field(
        default=None, description="Excess kurtosis, None when std_dev is 0"
    )


class OutlierSummary(_Record):
    count: int = Field(ge=0)
    percentage: float
    values: list[float] = Field(default_factory=list)
    lower_bound: float
    upper_bound: float


class Statistics(_Record):
    """Numeric summary of a field."""

    descriptive: DescriptiveStats
    spread: SpreadStats
    distribution: DistributionShape
    outliers: OutlierSummary


# Temporal


class DetectedFormat(_Record):
    name: str
    description: str
    confidence: float = Field(ge=0.0, le=100.0, description="Percent of sampled values")


class DateGap(_Record):
    start: datetime
    end: datetime
    days: int


class GapAnalysis(_Record):
    has_gaps: bool
    gap_count: int = Field(ge=0)
    largest_gap_days: int | None = None
    coverage_percentage: float
    granularity: str = Field(description="day, week or month")
    expected_dates: int
    actual_dates: int
    top_gaps: list[DateGap] = Field(default_factory=list)


class TrendAnalysis(_Record):
    type: TrendType
    description: str
    slope: float | None = None
    period_unit: str | None = None
    period_count: int = 0


class TemporalDistributions(_Record):
    yearly: dict[str, int]
    monthly: dict[str, int]
    quarterly: dict[str, int]
    day_of_week: dict[str, int]


class TemporalProfile(_Record):
    """Range, format, gap and trend analysis of a date-like field."""

    earliest: datetime
    latest: datetime
    span_days: int
    time_span_description: str
    detected_format: DetectedFormat
    valid_count: int
    invalid_count: int
    valid_percentage: float = Field(
        description="Percent of non-null, non-blank values that parse"
    )
    gaps: GapAnalysis
    trend: TrendAnalysis
    distributions: TemporalDistributions


# Text


class LengthStats(_Record):
    min: int
    max: int
    average: float
    most_common: int
    most_common_count: int


class CharacterComposition(_Record):
    alphabetic_percentage: float
    numeric_percentage: float
    whitespace_percentage: float
    special_char_percentage: float
    non_ascii_count: int
    leading_whitespace_count: int
    trailing_whitespace_count: int


class CaseComposition(_Record):
    uppercase_count: int
    lowercase_count: int
    mixed_case_count: int
    title_case_count: int


class FormatMatch(_Record):
    count: int
    percentage: float
    samples: list[str] = Field(default_factory=list)


class TextProfile(_Record):
    """Shape of the string values of a field."""

    value_count: int
    lengths: LengthStats
    characters: CharacterComposition
    case: CaseComposition
    formats: dict[str, FormatMatch] = Field(default_factory=dict)


# Quality


class Completeness(_Record):
    non_null_percentage: float
    fill_rate: float = Field(description="Percent of rows neither null nor empty")
    missing_count: int
    empty_string_count: int


class Cardinality(_Record):
    ratio: float
    classification: CardinalityClass
    recommendation: str


class Uniqueness(_Record):
    unique_value_percentage: float
    duplicate_count: int = Field(description="Occurrences of values seen more than once")
    duplicated_distinct_value_count: int
    top_duplicates: list[DistributionEntry] = Field(default_factory=list)


class DistributionQuality(_Record):
    evenness_score: float = Field(ge=0.0, le=100.0, description="Pielou evenness, 0-100")
    shannon_entropy: float
    max_entropy: float
    distribution_type: DistributionType


class QualityProfile(_Record):
    """Advisory data quality assessment of a field."""

    completeness: Completeness
    cardinality: Cardinality
    uniqueness: Uniqueness
    distribution_quality: DistributionQuality
    overall_score: float = Field(ge=0.0, le=100.0)
    quality_level: QualityLevel
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class FieldProfile(_Record):
    """Complete profiling result for one field."""

    field_name: str
    total_rows: int = Field(ge=0)
    unique_value_count: int = Field(ge=0)
    null_count: int = Field(ge=0)
    non_null_count: int = Field(ge=0)
    distributions: list[DistributionEntry]
    other_count: int = Field(
        default=0, ge=0, description="Rows whose value fell beyond the distribution cap"
    )
    truncated: bool = False
    truncated_at: int
    inferred_kind: ValueKind
    kind_counts: dict[str, int] = Field(default_factory=dict)
    is_numeric: bool = False
    statistics: Statistics | None = None
    temporal: TemporalProfile | None = None
    text: TextProfile | None = None
    quality: QualityProfile

    @model_validator(mode="after")
    def counts_are_consistent(self) -> FieldProfile:
        """Validate the row accounting invariants."""
        if self.null_count + self.non_null_count != self.total_rows:
            msg = (
                f"null_count ({self.null_count}) + non_null_count "
                f"({self.non_null_count}) != total_rows ({self.total_rows})"
            )
            raise ValueError(msg)
        listed = sum(entry.count for entry in self.distributions)
        if listed + self.other_count != self.total_rows:
            msg = (
                f"Distribution counts ({listed}) + other_count ({self.other_count}) "
                f"!= total_rows ({self.total_rows})"
            )
            raise ValueError(msg)
        return self

    @property
    def distinct_values_dropped(self) -> int:
        """Number of distinct values not listed because of the cap."""
        if not self.truncated:
            return 0
        listed = sum(1 for entry in self.distributions if entry.value is not None)
        return max(0, self.unique_value_count - listed)


def save_profiles_to_yaml(
    profiles: list[FieldProfile],
    yaml_path: str | Path,
    source_file: str | None = None,
) -> None:
    """Save field profiles to a YAML report file.

    Args:
        profiles: Profiles to save
        yaml_path: Output YAML file path
        source_file: Name of the profiled source, recorded in the metadata

    """
    report_file = Path(yaml_path)
    report_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "profiling_metadata": {
            "profiled_at": datetime.now(UTC).isoformat(),
            "source_file": source_file,
            "field_count": len(profiles),
        },
        "fields": [profile.model_dump(mode="json") for profile in profiles],
    }

    with report_file.open("w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def load_profiles_from_yaml(yaml_path: str | Path) -> list[FieldProfile]:
    """Load field profiles from a YAML report file.

    Raises:
        ValidationError: If a stored profile is invalid
        FileNotFoundError: If file doesn't exist

    """
    report_file = Path(yaml_path)
    if not report_file.exists():
        msg = f"Profile report not found: {report_file}"
        raise FileNotFoundError(msg)

    with report_file.open(encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    return [FieldProfile(**field) for field in data.get("fields", [])]


__all__ = [
    "CardinalityClass",
    "DistributionEntry",
    "DistributionType",
    "FieldProfile",
    "QualityLevel",
    "QualityProfile",
    "Statistics",
    "TemporalProfile",
    "TextProfile",
    "TrendType",
    "ValueKind",
    "load_profiles_from_yaml",
    "save_profiles_to_yaml",
]
