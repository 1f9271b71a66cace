"""Data quality scoring.

The overall score blends four 0-100 terms with the weights from
``ProfilingConfig.quality_weights``:

- completeness: the fill rate (rows neither null nor empty)
- cardinality: 100 for low and medium cardinality, 60 for high cardinality
  unless the field looks like an identifier, 0 for a constant field
- uniqueness: for identifier-like fields the unique value percentage,
  otherwise 100 (repeated values are expected)
- evenness: the Pielou evenness score

Scores 81-100 are Good, 61-80 Fair, 0-60 Poor. Scoring is advisory and never
raises.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from fieldprofile.models.profile import (
    Cardinality,
    CardinalityClass,
    Completeness,
    DistributionEntry,
    DistributionQuality,
    DistributionType,
    QualityLevel,
    QualityProfile,
    Uniqueness,
)
from fieldprofile.profiling.distribution import percentage

if TYPE_CHECKING:
    from fieldprofile.config import ProfilingConfig
    from fieldprofile.profiling.types import FrequencyDistribution

logger = logging.getLogger(__name__)

IDENTIFIER_NAME_PATTERN = re.compile(
    r"(^[Ii][Dd]$|^[Ii][Dd]_|_[Ii][Dd]$|[a-z0-9](Id|ID)$"
    r"|[Kk]ey$|[Cc]ode$|[Nn]umber$|_[Nn]o$|[Uu][Uu][Ii][Dd]|[Gg][Uu][Ii][Dd])"
)

HIGH_CARDINALITY_SCORE = 60.0

CARDINALITY_RECOMMENDATIONS = {
    CardinalityClass.HIGH: (
        "Potential identifier/key field. Consider using as a primary key or "
        "unique identifier."
    ),
    CardinalityClass.MEDIUM: (
        "Good for filtering and grouping operations. Balanced selectivity for analysis."
    ),
    CardinalityClass.LOW: (
        "Good dimension candidate. Suitable for filtering, grouping, and "
        "categorical analysis."
    ),
}

# (lower bound of evenness score, type), checked top down
DISTRIBUTION_BANDS = (
    (80.0, DistributionType.VERY_EVEN),
    (60.0, DistributionType.EVEN),
    (40.0, DistributionType.MODERATE),
    (20.0, DistributionType.SKEWED),
)


def classify_cardinality(ratio: float, config: ProfilingConfig) -> CardinalityClass:
    """Band the cardinality ratio; each band includes its lower boundary."""
    if ratio > config.cardinality_high_threshold:
        return CardinalityClass.HIGH
    if ratio >= config.cardinality_low_threshold:
        return CardinalityClass.MEDIUM
    return CardinalityClass.LOW


def shannon_entropy(counts: list[int]) -> float:
    """Shannon entropy in nats of a frequency list."""
    total = sum(counts)
    if total == 0:
        return 0.0
    entropy = 0.0
    for count in counts:
        if count > 0:
            p = count / total
            entropy -= p * math.log(p)
    return entropy


def classify_distribution(evenness_score: float) -> DistributionType:
    for lower_bound, distribution_type in DISTRIBUTION_BANDS:
        if evenness_score >= lower_bound:
            return distribution_type
    return DistributionType.HIGHLY_SKEWED


def distribution_quality(value_counts: dict[str, int]) -> DistributionQuality:
    """Entropy and Pielou evenness over the full frequency map."""
    counts = list(value_counts.values())
    entropy = shannon_entropy(counts)
    unique = len(counts)

    if unique <= 1:
        max_entropy = 0.0
        evenness = 100.0
    else:
        max_entropy = math.log(unique)
        evenness = min(100.0, max(0.0, entropy / max_entropy * 100))

    return DistributionQuality(
        evenness_score=round(evenness, 2),
        shannon_entropy=round(entropy, 6),
        max_entropy=round(max_entropy, 6),
        distribution_type=classify_distribution(evenness),
    )


def looks_like_identifier(field_name: str, distribution: FrequencyDistribution) -> bool:
    """Identifier-like: an id-style name, or every row holds a distinct value."""
    if IDENTIFIER_NAME_PATTERN.search(field_name.strip()):
        return True
    return distribution.total > 1 and distribution.unique_count == distribution.total


def _quality_level(score: float) -> QualityLevel:
    if score > 80:
        return QualityLevel.GOOD
    if score > 60:
        return QualityLevel.FAIR
    return QualityLevel.POOR


def score_quality(
    distribution: FrequencyDistribution,
    field_name: str,
    config: ProfilingConfig,
) -> QualityProfile:
    """Assess completeness, cardinality, uniqueness and evenness of a field.

    Args:
        distribution: Full frequency scan of the field
        field_name: Name of the field, used for identifier detection
        config: Thresholds and score weights

    Returns:
        QualityProfile with the composite score, issues and warnings

    """
    precision = config.percentage_precision
    total = distribution.total
    unique = distribution.unique_count

    populated = distribution.non_null_count - distribution.empty_string_count
    completeness = Completeness(
        non_null_percentage=percentage(distribution.non_null_count, total, precision),
        fill_rate=percentage(populated, total, precision),
        missing_count=distribution.null_count,
        empty_string_count=distribution.empty_string_count,
    )

    ratio = unique / total if total else 0.0
    cardinality_class = classify_cardinality(ratio, config)
    cardinality = Cardinality(
        ratio=ratio,
        classification=cardinality_class,
        recommendation=CARDINALITY_RECOMMENDATIONS[cardinality_class],
    )

    duplicated = [
        (value, count) for value, count in distribution.value_counts.items() if count > 1
    ]
    top_duplicates = sorted(duplicated, key=lambda item: -item[1])
    uniqueness = Uniqueness(
        unique_value_percentage=percentage(unique, total, precision),
        duplicate_count=sum(count for _, count in duplicated),
        duplicated_distinct_value_count=len(duplicated),
        top_duplicates=[
            DistributionEntry(
                value=value, count=count, percentage=percentage(count, total, precision)
            )
            for value, count in top_duplicates[: config.top_duplicates_limit]
        ],
    )

    evenness = distribution_quality(distribution.value_counts)

    is_identifier = looks_like_identifier(field_name, distribution)
    if unique <= 1:
        cardinality_term = 0.0
    elif cardinality_class == CardinalityClass.HIGH and not is_identifier:
        cardinality_term = HIGH_CARDINALITY_SCORE
    else:
        cardinality_term = 100.0
    uniqueness_term = uniqueness.unique_value_percentage if is_identifier else 100.0

    weights = config.quality_weights
    score = (
        weights.completeness * completeness.fill_rate
        + weights.cardinality * cardinality_term
        + weights.uniqueness * uniqueness_term
        + weights.evenness * evenness.evenness_score
    )
    score = round(min(100.0, max(0.0, score)), 2)

    issues: list[str] = []
    warnings: list[str] = []

    if total == 0 or distribution.non_null_count == 0:
        issues.append("Field contains no values")
    elif unique == 1:
        issues.append("All values are identical")

    missing_pct = 100.0 - completeness.non_null_percentage
    if completeness.non_null_percentage < 50:
        issues.append("High null rate: more than 50% of values are missing")
    elif completeness.non_null_percentage < 90:
        warnings.append(f"{missing_pct:.1f}% of values are missing")

    if completeness.fill_rate < 50:
        issues.append("Low fill rate: most values are null or empty")
    elif completeness.fill_rate < 80:
        warnings.append(f"Fill rate is {completeness.fill_rate:.1f}% (many empty values)")

    if is_identifier and unique > 0 and uniqueness.duplicate_count > 0:
        warnings.append(
            f"Identifier-like field has {uniqueness.duplicated_distinct_value_count} "
            "duplicated values"
        )
    elif cardinality_class == CardinalityClass.HIGH and not is_identifier:
        warnings.append("High cardinality field without an identifier-like name")

    if unique > 1 and evenness.evenness_score < 30:
        warnings.append(
            f"Distribution is {evenness.distribution_type.value.lower()} "
            f"(evenness {evenness.evenness_score:.1f}%)"
        )

    if score <= 60:
        issues.insert(0, f"Overall quality score is {score:.1f} (poor)")
    elif score <= 80:
        warnings.insert(0, f"Overall quality score is {score:.1f} (fair)")

    logger.debug(
        f"Quality for {field_name}: score={score}, issues={len(issues)}, "
        f"warnings={len(warnings)}"
    )
    return QualityProfile(
        completeness=completeness,
        cardinality=cardinality,
        uniqueness=uniqueness,
        distribution_quality=evenness,
        overall_score=score,
        quality_level=_quality_level(score),
        issues=issues,
        warnings=warnings,
    )
