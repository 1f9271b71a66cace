"""Profile data models for fieldprofile."""

from fieldprofile.models.profile import (
    CardinalityClass,
    DistributionEntry,
    DistributionType,
    FieldProfile,
    QualityLevel,
    QualityProfile,
    Statistics,
    TemporalProfile,
    TextProfile,
    TrendType,
    ValueKind,
    load_profiles_from_yaml,
    save_profiles_to_yaml,
)

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
