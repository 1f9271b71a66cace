"""Date format detection and parsing.

Formats are tried in priority order. For a field, each format's confidence is
the share of sampled non-null values it parses; the most confident format
above the threshold wins and ties go to the earlier format.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Any

from fieldprofile.profiling.classifier import is_null, sample_values

logger = logging.getLogger(__name__)

ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:?\d{2})?)?$"
)
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EPOCH_MS_PATTERN = re.compile(r"^\d{13}$")
EPOCH_S_PATTERN = re.compile(r"^\d{10}$")
COMPACT_PATTERN = re.compile(r"^\d{8}$")
SLASH_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
DOT_PATTERN = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")


def _normalize(value: datetime) -> datetime:
    """Convert aware datetimes to naive UTC so all parsed values compare."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def _as_text(value: Any) -> str | None:
    """Text form of a scalar for string-based formats; None for date objects."""
    if isinstance(value, bool | date):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else None
    if isinstance(value, str):
        return value.strip()
    return None


def _parse_native(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return _normalize(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    return None


def _parse_iso_datetime(value: Any) -> datetime | None:
    text = _as_text(value)
    if text is None or not ISO_DATETIME_PATTERN.match(text):
        return None
    try:
        return _normalize(datetime.fromisoformat(text))
    except ValueError:
        return None


def _parse_iso_date(value: Any) -> datetime | None:
    text = _as_text(value)
    if text is None or not ISO_DATE_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return None


def _from_epoch(seconds: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_epoch_ms(value: Any) -> datetime | None:
    text = _as_text(value)
    if text is None or not EPOCH_MS_PATTERN.match(text):
        return None
    return _from_epoch(int(text) / 1000)


def _parse_epoch_s(value: Any) -> datetime | None:
    text = _as_text(value)
    if text is None or not EPOCH_S_PATTERN.match(text):
        return None
    return _from_epoch(int(text))


def _parse_compact(value: Any) -> datetime | None:
    text = _as_text(value)
    if text is None or not COMPACT_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, "%Y%m%d")
    except ValueError:
        return None


def _build_date(year: str, month: str, day: str) -> datetime | None:
    try:
        return datetime(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_us(value: Any) -> datetime | None:
    text = _as_text(value)
    match = SLASH_PATTERN.match(text) if text else None
    if not match:
        return None
    month, day, year = match.groups()
    return _build_date(year, month, day)


def _parse_eu(value: Any) -> datetime | None:
    text = _as_text(value)
    match = SLASH_PATTERN.match(text) if text else None
    if not match:
        return None
    day, month, year = match.groups()
    return _build_date(year, month, day)


def _parse_eu_dotted(value: Any) -> datetime | None:
    text = _as_text(value)
    match = DOT_PATTERN.match(text) if text else None
    if not match:
        return None
    day, month, year = match.groups()
    return _build_date(year, month, day)


@dataclass(frozen=True)
class DateFormat:
    """A supported date representation."""

    name: str
    description: str
    parse: Callable[[Any], datetime | None]


DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("NATIVE", "Native date/time values", _parse_native),
    DateFormat("ISO_DATE", "ISO 8601 date (YYYY-MM-DD)", _parse_iso_date),
    DateFormat("ISO_8601", "ISO 8601 with optional time", _parse_iso_datetime),
    DateFormat("TIMESTAMP_MS", "Unix timestamp (milliseconds)", _parse_epoch_ms),
    DateFormat("TIMESTAMP_S", "Unix timestamp (seconds)", _parse_epoch_s),
    DateFormat("YYYYMMDD", "Compact format (YYYYMMDD)", _parse_compact),
    DateFormat("US_DATE", "US format (MM/DD/YYYY)", _parse_us),
    DateFormat("EU_DATE", "EU format (DD/MM/YYYY)", _parse_eu),
    DateFormat("EU_DOTTED", "EU format (DD.MM.YYYY)", _parse_eu_dotted),
)


def parse_date(value: Any) -> datetime | None:
    """Parse a value with the first format that accepts it."""
    if is_null(value):
        return None
    for date_format in DATE_FORMATS:
        parsed = date_format.parse(value)
        if parsed is not None:
            return parsed
    return None


def detect_date_format(
    values: Sequence[Any],
    threshold: float = 0.8,
    sample_size: int = 1000,
) -> tuple[DateFormat, float] | None:
    """Find the format that parses the largest share of sampled values.

    Args:
        values: Raw field values, nulls included
        threshold: Minimum parsed share (0-1) for a format to qualify
        sample_size: Maximum number of values inspected

    Returns:
        ``(format, confidence)`` with confidence in 0-1, or None when no
        format reaches the threshold

    """
    sample = [v for v in sample_values(values, sample_size) if not is_null(v)]
    sample = [v for v in sample if not (isinstance(v, str) and not v.strip())]
    if not sample:
        return None

    best: tuple[DateFormat, float] | None = None
    for date_format in DATE_FORMATS:
        parsed = sum(1 for v in sample if date_format.parse(v) is not None)
        confidence = parsed / len(sample)
        if best is None or confidence > best[1]:
            best = (date_format, confidence)

    if best is None or best[1] < threshold:
        return None

    logger.debug(
        f"Detected date format {best[0].name} with confidence {best[1]:.2%} "
        f"over {len(sample)} sampled values"
    )
    return best
