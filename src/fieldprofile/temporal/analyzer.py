"""Temporal profiling of date-like fields."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from fieldprofile.models.profile import (
    DetectedFormat,
    TemporalDistributions,
    TemporalProfile,
)
from fieldprofile.profiling.classifier import is_null
from fieldprofile.profiling.distribution import percentage
from fieldprofile.temporal.detection import detect_date_format
from fieldprofile.temporal.gaps import detect_gaps
from fieldprofile.temporal.trend import analyze_trend

if TYPE_CHECKING:
    from fieldprofile.config import ProfilingConfig

logger = logging.getLogger(__name__)

MONTH_NAMES = list(calendar.month_name)[1:]
DAY_NAMES = list(calendar.day_name)
QUARTERS = ("Q1", "Q2", "Q3", "Q4")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def describe_span(span_days: int) -> str:
    """Approximate human phrase for a span (30-day months, 365-day years)."""
    if span_days <= 0:
        return "Single day"
    if span_days < 7:
        return _plural(span_days, "day")
    if span_days < 31:
        weeks, days = divmod(span_days, 7)
        description = _plural(weeks, "week")
        if days:
            description += f", {_plural(days, 'day')}"
        return description
    if span_days < 365:
        return _plural(span_days // 30, "month")

    years, remainder = divmod(span_days, 365)
    description = _plural(years, "year")
    months = remainder // 30
    if months:
        description += f", {_plural(months, 'month')}"
    return description


def temporal_distributions(dates: Sequence[datetime]) -> TemporalDistributions:
    """Occurrence counts by year, month, quarter and day of week.

    Every bucket is present: each year between the earliest and latest date,
    all twelve months, all four quarters and all seven weekdays.
    """
    first_year = min(d.year for d in dates)
    last_year = max(d.year for d in dates)
    yearly = {str(year): 0 for year in range(first_year, last_year + 1)}
    monthly = dict.fromkeys(MONTH_NAMES, 0)
    quarterly = dict.fromkeys(QUARTERS, 0)
    day_of_week = dict.fromkeys(DAY_NAMES, 0)

    for value in dates:
        yearly[str(value.year)] += 1
        monthly[MONTH_NAMES[value.month - 1]] += 1
        quarterly[QUARTERS[(value.month - 1) // 3]] += 1
        day_of_week[DAY_NAMES[value.weekday()]] += 1

    return TemporalDistributions(
        yearly=yearly,
        monthly=monthly,
        quarterly=quarterly,
        day_of_week=day_of_week,
    )


def analyze_temporal(
    values: Sequence[Any], config: ProfilingConfig
) -> TemporalProfile | None:
    """Profile a field as dates.

    Returns None when no supported format parses at least
    ``date_confidence_threshold`` of the sampled values.
    """
    detected = detect_date_format(
        values,
        threshold=config.date_confidence_threshold,
        sample_size=config.sample_size,
    )
    if detected is None:
        return None
    date_format, confidence = detected

    parsed: list[datetime] = []
    invalid = 0
    for value in values:
        if is_null(value) or (isinstance(value, str) and not value.strip()):
            continue
        result = date_format.parse(value)
        if result is None:
            invalid += 1
        else:
            parsed.append(result)

    if not parsed:
        return None

    earliest = min(parsed)
    latest = max(parsed)
    span_days = (latest - earliest).days

    logger.debug(
        f"Temporal analysis: {len(parsed)} valid, {invalid} invalid, "
        f"format={date_format.name}, span={span_days} days"
    )
    return TemporalProfile(
        earliest=earliest,
        latest=latest,
        span_days=span_days,
        time_span_description=describe_span(span_days),
        detected_format=DetectedFormat(
            name=date_format.name,
            description=date_format.description,
            confidence=round(confidence * 100, config.percentage_precision),
        ),
        valid_count=len(parsed),
        invalid_count=invalid,
        valid_percentage=percentage(
            len(parsed), len(parsed) + invalid, config.percentage_precision
        ),
        gaps=detect_gaps(
            parsed,
            multiplier=config.gap_multiplier,
            max_reported=config.max_reported_gaps,
        ),
        trend=analyze_trend(
            parsed,
            constant_threshold=config.trend_constant_threshold,
            strong_threshold=config.trend_strong_threshold,
        ),
        distributions=temporal_distributions(parsed),
    )
