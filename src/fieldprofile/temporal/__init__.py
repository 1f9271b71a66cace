"""Temporal analysis of date and timestamp fields."""

from fieldprofile.temporal.analyzer import analyze_temporal, describe_span
from fieldprofile.temporal.detection import (
    DATE_FORMATS,
    DateFormat,
    detect_date_format,
    parse_date,
)
from fieldprofile.temporal.gaps import detect_gaps
from fieldprofile.temporal.trend import analyze_trend

__all__ = [
    "DATE_FORMATS",
    "DateFormat",
    "analyze_temporal",
    "analyze_trend",
    "describe_span",
    "detect_date_format",
    "detect_gaps",
    "parse_date",
]
