"""Descriptive statistics for numeric fields."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

from fieldprofile.models.profile import (
    DescriptiveStats,
    DistributionShape,
    OutlierSummary,
    Percentiles,
    Quartiles,
    SpreadStats,
    Statistics,
)
from fieldprofile.profiling.classifier import numeric_value
from fieldprofile.profiling.distribution import percentage

if TYPE_CHECKING:
    from fieldprofile.config import ProfilingConfig

logger = logging.getLogger(__name__)

PERCENTILE_POINTS = (10, 25, 50, 75, 90)


def extract_numeric(values: Sequence[Any]) -> list[float]:
    """Numeric values of a field in row order, non-numbers skipped."""
    numbers = []
    for value in values:
        number = numeric_value(value)
        if number is not None:
            numbers.append(number)
    return numbers


def calculate_mode(values: Sequence[float]) -> list[float]:
    """All values sharing the highest frequency, ascending.

    Empty when every value occurs exactly once.
    """
    if not values:
        return []
    frequency = Counter(values)
    max_freq = max(frequency.values())
    if max_freq == 1:
        return []
    return sorted(value for value, count in frequency.items() if count == max_freq)


def _standardized_moments(
    data: np.ndarray, mean: float, std_dev: float
) -> tuple[float | None, float | None]:
    """Skewness and excess kurtosis, undefined for a zero spread."""
    if std_dev == 0:
        return None, None
    z = (data - mean) / std_dev
    skewness = float(np.mean(z**3))
    kurtosis = float(np.mean(z**4)) - 3.0
    return skewness, kurtosis


def detect_outliers(
    data: np.ndarray,
    q1: float,
    q3: float,
    multiplier: float = 1.5,
    max_values: int = 100,
    precision: int = 2,
) -> OutlierSummary:
    """Flag values outside ``[q1 - k*iqr, q3 + k*iqr]``."""
    iqr = q3 - q1
    lower_bound = q1 - multiplier * iqr
    upper_bound = q3 + multiplier * iqr

    mask = (data < lower_bound) | (data > upper_bound)
    outliers = data[mask]

    return OutlierSummary(
        count=int(outliers.size),
        percentage=percentage(int(outliers.size), int(data.size), precision),
        values=[float(v) for v in outliers[:max_values]],
        lower_bound=lower_bound,
        upper_bound=upper_bound,
    )


def compute_statistics(
    values: Sequence[Any], config: ProfilingConfig
) -> Statistics | None:
    """Compute descriptive, spread and shape statistics.

    Non-numeric values are ignored. Returns None when fewer than two numeric
    values exist, since spread and shape are undefined.
    """
    numbers = extract_numeric(values)
    if len(numbers) < 2:
        logger.debug(f"Statistics undefined for {len(numbers)} numeric value(s)")
        return None

    data = np.sort(np.asarray(numbers, dtype=float))
    count = int(data.size)
    total = float(np.sum(data))
    mean = total / count

    p10, p25, p50, p75, p90 = (
        float(p) for p in np.percentile(data, PERCENTILE_POINTS, method="linear")
    )

    variance = float(np.mean((data - mean) ** 2))
    std_dev = float(np.sqrt(variance))
    skewness, kurtosis = _standardized_moments(data, mean, std_dev)

    minimum = float(data[0])
    maximum = float(data[-1])

    return Statistics(
        descriptive=DescriptiveStats(
            min=minimum,
            max=maximum,
            mean=mean,
            median=p50,
            mode=calculate_mode(numbers),
            sum=total,
            count=count,
        ),
        spread=SpreadStats(
            range=maximum - minimum,
            std_dev=std_dev,
            variance=variance,
            iqr=p75 - p25,
        ),
        distribution=DistributionShape(
            quartiles=Quartiles(q1=p25, q2=p50, q3=p75),
            percentiles=Percentiles(p10=p10, p25=p25, p50=p50, p75=p75, p90=p90),
            skewness=skewness,
            kurtosis=kurtosis,
        ),
        outliers=detect_outliers(
            data,
            p25,
            p75,
            multiplier=config.outlier_iqr_multiplier,
            max_values=config.max_outlier_values,
            precision=config.percentage_precision,
        ),
    )
