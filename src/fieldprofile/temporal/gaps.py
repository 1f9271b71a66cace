"""Gap detection over the distinct calendar dates of a field."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, time

import numpy as np

from fieldprofile.models.profile import DateGap, GapAnalysis

# (minimum median interval in days, granularity, step in days)
GRANULARITIES = (
    (28, "month", 30),
    (7, "week", 7),
    (0, "day", 1),
)


def infer_granularity(median_interval: float) -> tuple[str, int]:
    """Granularity implied by the typical spacing between dates."""
    for lower_bound, name, step in GRANULARITIES:
        if median_interval >= lower_bound:
            return name, step
    return "day", 1


def detect_gaps(
    dates: Sequence[datetime],
    multiplier: float = 1.5,
    max_reported: int = 10,
) -> GapAnalysis:
    """Flag consecutive distinct dates spaced more than ``multiplier`` times the median.

    Coverage compares the distinct dates present with the number expected
    between the earliest and latest date at the inferred granularity.
    """
    distinct = sorted({d.date() for d in dates})
    if len(distinct) < 2:
        return GapAnalysis(
            has_gaps=False,
            gap_count=0,
            largest_gap_days=None,
            coverage_percentage=100.0,
            granularity="day",
            expected_dates=len(distinct),
            actual_dates=len(distinct),
        )

    intervals = [(later - earlier).days for earlier, later in zip(distinct, distinct[1:])]
    median_interval = float(np.median(intervals))
    threshold = multiplier * median_interval

    gaps = [
        DateGap(
            start=datetime.combine(earlier, time()),
            end=datetime.combine(later, time()),
            days=days,
        )
        for (earlier, later), days in zip(zip(distinct, distinct[1:]), intervals)
        if days > threshold
    ]

    granularity, step = infer_granularity(median_interval)
    span_days = (distinct[-1] - distinct[0]).days
    expected = span_days // step + 1
    coverage = min(100.0, len(distinct) / expected * 100)

    largest_first = sorted(gaps, key=lambda gap: -gap.days)
    return GapAnalysis(
        has_gaps=bool(gaps),
        gap_count=len(gaps),
        largest_gap_days=largest_first[0].days if gaps else None,
        coverage_percentage=round(coverage, 2),
        granularity=granularity,
        expected_dates=expected,
        actual_dates=len(distinct),
        top_gaps=largest_first[:max_reported],
    )
