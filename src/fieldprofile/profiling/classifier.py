"""Value classification.

Assigns every raw cell value a ``ValueKind``. The empty string is a value, not
a null: fill-rate metrics tell "absent" and "empty" apart.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from fieldprofile.models.profile import ValueKind
from fieldprofile.profiling.types import FieldClassification

if TYPE_CHECKING:
    from fieldprofile.config import ProfilingConfig

logger = logging.getLogger(__name__)

BOOLEAN_LITERALS = {"true", "false"}
NUMERIC_KINDS = {ValueKind.INTEGER, ValueKind.REAL}


def is_null(value: Any) -> bool:
    """Return True for the absence marker (None) and float NaN."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _parse_number(text: str) -> float | None:
    """Parse a whole string as a finite number, or return None."""
    stripped = text.strip()
    # float() accepts digit separators, cell values with them are text
    if not stripped or "_" in stripped:
        return None
    try:
        number = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def numeric_value(value: Any) -> float | None:
    """Numeric value of a cell, or None when it is not a number."""
    if is_null(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        return _parse_number(value)
    return None


def classify(value: Any) -> ValueKind:
    """Classify a single raw value. Never raises."""
    if is_null(value):
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, date):
        return ValueKind.DATE
    if isinstance(value, str) and value.strip().lower() in BOOLEAN_LITERALS:
        return ValueKind.BOOLEAN

    number = numeric_value(value)
    if number is not None:
        return ValueKind.INTEGER if number.is_integer() else ValueKind.REAL
    return ValueKind.STRING


def sample_values(values: Sequence[Any], sample_size: int) -> list[Any]:
    """Pick up to ``sample_size`` values spread evenly across the sequence."""
    if len(values) <= sample_size:
        return list(values)
    step = len(values) / sample_size
    return [values[int(i * step)] for i in range(sample_size)]


def classify_field(
    values: Sequence[Any], config: ProfilingConfig
) -> FieldClassification:
    """Classify a field from an even sample of its values.

    The field is numeric when at least ``numeric_threshold`` of the non-null,
    non-blank sampled values are numbers, and date-like when a date format
    parses at least ``date_confidence_threshold`` of them.
    """
    from fieldprofile.temporal.detection import detect_date_format

    sample = sample_values(values, config.sample_size)
    kind_counts: Counter[ValueKind] = Counter(classify(v) for v in sample)
    # blank strings are left out of the numeric share
    blanks = sum(1 for v in sample if isinstance(v, str) and not v.strip())
    non_null = len(sample) - kind_counts.get(ValueKind.NULL, 0) - blanks

    numeric = sum(kind_counts.get(kind, 0) for kind in NUMERIC_KINDS)
    is_numeric = non_null > 0 and numeric / non_null >= config.numeric_threshold

    is_date_like = (
        detect_date_format(
            values,
            threshold=config.date_confidence_threshold,
            sample_size=config.sample_size,
        )
        is not None
    )

    non_null_kinds = [
        (kind, count) for kind, count in kind_counts.most_common() if kind != ValueKind.NULL
    ]
    if is_date_like:
        dominant = ValueKind.DATE
    elif is_numeric:
        dominant = ValueKind.REAL if kind_counts.get(ValueKind.REAL) else ValueKind.INTEGER
    elif non_null_kinds:
        dominant = non_null_kinds[0][0]
    else:
        dominant = ValueKind.NULL

    logger.debug(
        f"Classified {len(sample)} sampled values: dominant={dominant.value}, "
        f"numeric={is_numeric}, date_like={is_date_like}"
    )
    return FieldClassification(
        kind_counts=dict(kind_counts),
        sampled=len(sample),
        is_numeric=is_numeric,
        is_date_like=is_date_like,
        dominant_kind=dominant,
    )
