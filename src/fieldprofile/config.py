"""Profiling configuration.

Every threshold and cap used by the engine lives on ``ProfilingConfig`` and is
passed explicitly into each entry point, so callers and tests can vary them
without touching module state.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QualityWeights(BaseModel):
    """Weights of the four terms blended into the overall quality score."""

    completeness: float = Field(default=0.40, ge=0.0, le=1.0)
    cardinality: float = Field(default=0.20, ge=0.0, le=1.0)
    uniqueness: float = Field(default=0.15, ge=0.0, le=1.0)
    evenness: float = Field(default=0.25, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> QualityWeights:
        """Validate that the weights form a convex blend."""
        total = self.completeness + self.cardinality + self.uniqueness + self.evenness
        if abs(total - 1.0) > 1e-9:
            msg = f"Quality weights must sum to 1.0, got {total:.4f}"
            raise ValueError(msg)
        return self


class ProfilingConfig(BaseModel):
    """Caps and thresholds for a profiling request."""

    # Distribution
    max_unique_values: int = Field(
        default=1000, ge=1, description="Maximum distribution buckets kept per field"
    )
    percentage_precision: int = Field(
        default=2, ge=0, le=10, description="Decimal places for percentages"
    )

    # Classification
    sample_size: int = Field(
        default=1000, ge=1, description="Values sampled for type detection"
    )
    numeric_threshold: float = Field(
        default=0.9,
        gt=0.0,
        le=1.0,
        description="Share of non-null sampled values that must be numeric",
    )
    date_confidence_threshold: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Minimum share of sampled values a date format must parse",
    )

    # Statistics
    outlier_iqr_multiplier: float = Field(default=1.5, gt=0.0)
    max_outlier_values: int = Field(
        default=100, ge=0, description="Outlier values listed per field"
    )

    # Temporal
    gap_multiplier: float = Field(
        default=1.5, gt=1.0, description="Interval multiple of the median that is a gap"
    )
    max_reported_gaps: int = Field(default=10, ge=0)
    trend_constant_threshold: float = Field(default=0.05, ge=0.0)
    trend_strong_threshold: float = Field(default=0.2, ge=0.0)

    # Quality
    cardinality_low_threshold: float = Field(default=0.05, ge=0.0, lt=1.0)
    cardinality_high_threshold: float = Field(default=0.80, gt=0.0, le=1.0)
    top_duplicates_limit: int = Field(default=10, ge=0)
    quality_weights: QualityWeights = Field(default_factory=QualityWeights)

    # Execution
    large_dataset_warning_rows: int = Field(
        default=100_000, ge=1, description="Row count above which a warning is logged"
    )
    max_workers: int = Field(
        default=1, ge=1, description="Worker threads used to profile fields"
    )
    analyze_text: bool = Field(
        default=True, description="Run text analysis on string fields"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("trend_strong_threshold")
    @classmethod
    def strong_above_constant(cls, v, info) -> float:
        """Validate that the strong-trend band starts above the constant band."""
        constant = info.data.get("trend_constant_threshold")
        if constant is not None and v < constant:
            msg = "trend_strong_threshold must not be below trend_constant_threshold"
            raise ValueError(msg)
        return v

    @field_validator("cardinality_high_threshold")
    @classmethod
    def high_above_low(cls, v, info) -> float:
        """Validate that the cardinality bands do not overlap."""
        low = info.data.get("cardinality_low_threshold")
        if low is not None and v <= low:
            msg = "cardinality_high_threshold must be above cardinality_low_threshold"
            raise ValueError(msg)
        return v


DEFAULT_CONFIG = ProfilingConfig()


def load_config_from_yaml(yaml_path: str | Path) -> ProfilingConfig:
    """Load and validate a profiling configuration from a YAML file.

    Args:
        yaml_path: Path to the configuration file

    Returns:
        Validated ProfilingConfig

    Raises:
        ValidationError: If the configuration is invalid
        FileNotFoundError: If the file doesn't exist

    """
    config_file = Path(yaml_path)
    if not config_file.exists():
        msg = f"Profiling config not found: {config_file}"
        raise FileNotFoundError(msg)

    with config_file.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ProfilingConfig(**data)


def save_config_to_yaml(config: ProfilingConfig, yaml_path: str | Path) -> None:
    """Save a profiling configuration to a YAML file."""
    config_file = Path(yaml_path)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with config_file.open("w", encoding="utf-8") as f:
        yaml.dump(
            config.model_dump(),
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
