"""Trend classification of record counts over time."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import numpy as np

from fieldprofile.models.profile import TrendAnalysis, TrendType

DESCRIPTIONS = {
    TrendType.STRONG_GROWTH: "Strong growth trend detected",
    TrendType.MODERATE_GROWTH: "Moderate growth trend detected",
    TrendType.CONSTANT: "Relatively constant over time",
    TrendType.MODERATE_DECLINE: "Moderate decline trend detected",
    TrendType.STRONG_DECLINE: "Strong decline trend detected",
    TrendType.INSUFFICIENT_DATA: "Insufficient data for trend analysis",
}


def period_size(span_days: int) -> tuple[str, int]:
    """Bucket width for the trend: daily up to a month, weekly up to a year."""
    if span_days <= 31:
        return "day", 1
    if span_days <= 365:
        return "week", 7
    return "month", 30


def linear_slope(counts: Sequence[float]) -> float:
    """Least-squares slope of counts against their period index."""
    y = np.asarray(counts, dtype=float)
    x = np.arange(y.size, dtype=float)
    dx = x - x.mean()
    denominator = float(np.sum(dx**2))
    if denominator == 0:
        return 0.0
    return float(np.sum(dx * (y - y.mean())) / denominator)


def analyze_trend(
    dates: Sequence[datetime],
    constant_threshold: float = 0.05,
    strong_threshold: float = 0.2,
) -> TrendAnalysis:
    """Fit a line through per-period record counts and band its relative slope.

    The slope is divided by the mean count per period; below
    ``constant_threshold`` the trend is constant, above ``strong_threshold``
    it is strong.
    """
    if len(dates) < 3:
        return TrendAnalysis(
            type=TrendType.INSUFFICIENT_DATA,
            description=DESCRIPTIONS[TrendType.INSUFFICIENT_DATA],
        )

    base = min(dates).date()
    span_days = (max(dates).date() - base).days
    unit, size = period_size(span_days)

    period_count = span_days // size + 1
    counts = [0] * period_count
    for value in dates:
        counts[(value.date() - base).days // size] += 1

    if period_count < 2:
        return TrendAnalysis(
            type=TrendType.CONSTANT,
            description="Constant distribution over time",
            slope=0.0,
            period_unit=unit,
            period_count=period_count,
        )

    slope = linear_slope(counts)
    mean_count = sum(counts) / period_count
    relative = abs(slope) / mean_count if mean_count else 0.0

    if relative < constant_threshold:
        trend_type = TrendType.CONSTANT
    elif slope > 0:
        strong = relative > strong_threshold
        trend_type = TrendType.STRONG_GROWTH if strong else TrendType.MODERATE_GROWTH
    else:
        strong = relative > strong_threshold
        trend_type = TrendType.STRONG_DECLINE if strong else TrendType.MODERATE_DECLINE

    return TrendAnalysis(
        type=trend_type,
        description=DESCRIPTIONS[trend_type],
        slope=round(slope, 6),
        period_unit=unit,
        period_count=period_count,
    )
