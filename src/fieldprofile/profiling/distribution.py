"""Value frequency distribution for a single field."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from fieldprofile.models.profile import DistributionEntry
from fieldprofile.profiling.classifier import is_null
from fieldprofile.profiling.types import FrequencyDistribution

logger = logging.getLogger(__name__)

NULL_KEY = None


def canonical_value(value: Any) -> str | None:
    """Stringify a value so equal-looking cells share one bucket."""
    if is_null(value):
        return NULL_KEY
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def percentage(count: int, total: int, precision: int = 2) -> float:
    """``count / total * 100`` rounded to ``precision`` places, 0 for no rows."""
    if total <= 0:
        return 0.0
    return round(count / total * 100, precision)


def distribute(
    values: Sequence[Any],
    cap: int = 1000,
    precision: int = 2,
) -> FrequencyDistribution:
    """Count occurrences of each distinct value.

    Buckets are ordered by count descending, ties keep first-appearance
    order. When there are more buckets than ``cap`` only the top ``cap`` are
    listed; unique counts and percentages still come from the full scan and
    the rows of the dropped buckets are reported as ``other_count``.

    Args:
        values: Raw values of the field, one per row
        cap: Maximum number of buckets listed
        precision: Decimal places for percentages

    Returns:
        FrequencyDistribution with the listed entries and the full counts

    """
    counts: dict[str | None, int] = {}
    empty_strings = 0
    for value in values:
        key = canonical_value(value)
        counts[key] = counts.get(key, 0) + 1
        if key == "":
            empty_strings += 1

    total = len(values)
    null_count = counts.get(NULL_KEY, 0)
    value_counts = {key: count for key, count in counts.items() if key is not NULL_KEY}

    ranked = sorted(counts.items(), key=lambda item: -item[1])
    truncated = len(ranked) > cap
    kept = ranked[:cap]
    other_count = sum(count for _, count in ranked[cap:])

    if truncated:
        logger.debug(
            f"Distribution truncated to {cap} of {len(ranked)} buckets "
            f"({other_count} rows beyond the cap)"
        )

    entries = [
        DistributionEntry(
            value=key, count=count, percentage=percentage(count, total, precision)
        )
        for key, count in kept
    ]

    return FrequencyDistribution(
        entries=entries,
        value_counts=value_counts,
        unique_count=len(value_counts),
        null_count=null_count,
        empty_string_count=empty_strings,
        total=total,
        truncated=truncated,
        truncated_at=cap,
        other_count=other_count,
    )
