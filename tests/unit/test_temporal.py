"""Unit tests for temporal analysis."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from fieldprofile.config import ProfilingConfig
from fieldprofile.models.profile import TrendType
from fieldprofile.temporal import (
    analyze_temporal,
    analyze_trend,
    describe_span,
    detect_date_format,
    detect_gaps,
    parse_date,
)
from fieldprofile.temporal.analyzer import temporal_distributions
from fieldprofile.temporal.trend import period_size

START = datetime(2024, 1, 1)


def days_from_start(*offsets: int) -> list[datetime]:
    return [START + timedelta(days=offset) for offset in offsets]


def dates_with_counts(counts: list[int]) -> list[datetime]:
    dates = []
    for offset, count in enumerate(counts):
        dates.extend([START + timedelta(days=offset)] * count)
    return dates


class TestParseDate:
    """Test parsing of supported date formats."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-03-01", datetime(2024, 3, 1)),
            ("2024-03-01T10:15:00", datetime(2024, 3, 1, 10, 15)),
            ("2024-03-01 10:15", datetime(2024, 3, 1, 10, 15)),
            ("2024-03-01T10:00:00Z", datetime(2024, 3, 1, 10, 0)),
            ("2024-03-01T12:00:00+02:00", datetime(2024, 3, 1, 10, 0)),
            (1700000000, datetime(2023, 11, 14, 22, 13, 20)),
            ("1700000000000", datetime(2023, 11, 14, 22, 13, 20)),
            ("20240301", datetime(2024, 3, 1)),
            ("03/15/2024", datetime(2024, 3, 15)),
            ("15/03/2024", datetime(2024, 3, 15)),
            ("15.03.2024", datetime(2024, 3, 15)),
            (date(2024, 3, 1), datetime(2024, 3, 1)),
        ],
    )
    def test_parses_supported_formats(self, value, expected):
        assert parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-01", "31/31/2024", True])
    def test_rejects_unparseable_values(self, value):
        assert parse_date(value) is None


class TestDetectDateFormat:
    """Test field level format detection."""

    def test_detects_iso_dates(self):
        date_format, confidence = detect_date_format(["2024-01-01", "2024-01-02"])
        assert date_format.name == "ISO_DATE"
        assert confidence == 1.0

    def test_dates_mixed_with_datetimes(self):
        """Test plain dates count toward the ISO datetime format."""
        values = ["2024-01-01", "2024-01-02T10:00:00", "2024-01-03", "2024-01-04 08:30"]
        date_format, confidence = detect_date_format(values)
        assert date_format.name == "ISO_8601"
        assert confidence == 1.0

    def test_ambiguous_slash_dates_prefer_us(self):
        date_format, _ = detect_date_format(["01/02/2024", "03/04/2024"])
        assert date_format.name == "US_DATE"

    def test_day_first_values_select_eu(self):
        date_format, confidence = detect_date_format(["13/01/2024", "25/12/2024", "01/02/2024"])
        assert date_format.name == "EU_DATE"
        assert confidence == 1.0

    def test_below_threshold(self):
        assert detect_date_format(["2024-01-01", "x", "y"]) is None

    def test_threshold_is_configurable(self):
        result = detect_date_format(["2024-01-01", "x"], threshold=0.5)
        assert result is not None
        assert result[1] == 0.5

    def test_nulls_and_blanks_are_ignored(self):
        _, confidence = detect_date_format(["2024-01-01", "", "  ", None])
        assert confidence == 1.0

    def test_native_dates(self):
        date_format, _ = detect_date_format([date(2024, 1, 1), datetime(2024, 1, 2)])
        assert date_format.name == "NATIVE"

    def test_no_values(self):
        assert detect_date_format([None, ""]) is None


class TestDetectGaps:
    """Test gap detection over distinct dates."""

    def test_ten_day_jump(self):
        dates = days_from_start(0, 1, 2, 3, 4, 14, 15, 16)
        gaps = detect_gaps(dates)
        assert gaps.has_gaps is True
        assert gaps.gap_count == 1
        assert gaps.largest_gap_days == 10
        assert gaps.top_gaps[0].start == START + timedelta(days=4)
        assert gaps.top_gaps[0].end == START + timedelta(days=14)
        assert gaps.granularity == "day"
        assert gaps.expected_dates == 17
        assert gaps.actual_dates == 8
        assert gaps.coverage_percentage == 47.06

    def test_consecutive_days(self):
        gaps = detect_gaps(days_from_start(0, 1, 2, 3, 4))
        assert gaps.has_gaps is False
        assert gaps.largest_gap_days is None
        assert gaps.coverage_percentage == 100.0

    def test_repeated_dates_collapse(self):
        gaps = detect_gaps(days_from_start(0, 0, 0))
        assert gaps.has_gaps is False
        assert gaps.actual_dates == 1

    def test_weekly_granularity(self):
        gaps = detect_gaps(days_from_start(0, 7, 14, 21, 28))
        assert gaps.granularity == "week"
        assert gaps.expected_dates == 5
        assert gaps.has_gaps is False

    def test_monthly_granularity(self):
        dates = [datetime(2024, month, 1) for month in range(1, 7)]
        gaps = detect_gaps(dates)
        assert gaps.granularity == "month"
        assert gaps.has_gaps is False
        assert gaps.coverage_percentage == 100.0

    def test_reported_gaps_are_largest_first_and_capped(self):
        dates = days_from_start(0, 1, 2, 3, 4, 5, 6, 16, 17, 18, 38, 39, 40, 70, 71, 72)
        gaps = detect_gaps(dates, max_reported=2)
        assert gaps.gap_count == 3
        assert gaps.largest_gap_days == 30
        assert [gap.days for gap in gaps.top_gaps] == [30, 20]


class TestAnalyzeTrend:
    """Test trend classification."""

    def test_insufficient_data(self):
        trend = analyze_trend(days_from_start(0, 1))
        assert trend.type == TrendType.INSUFFICIENT_DATA

    def test_single_period_is_constant(self):
        trend = analyze_trend(days_from_start(0, 0, 0))
        assert trend.type == TrendType.CONSTANT
        assert trend.period_count == 1

    @pytest.mark.parametrize(
        ("counts", "expected"),
        [
            ([1, 2, 4, 8, 16], TrendType.STRONG_GROWTH),
            ([16, 8, 4, 2, 1], TrendType.STRONG_DECLINE),
            (list(range(1, 11)), TrendType.MODERATE_GROWTH),
            (list(range(10, 0, -1)), TrendType.MODERATE_DECLINE),
            ([5, 5, 5, 5, 5], TrendType.CONSTANT),
        ],
    )
    def test_classification(self, counts, expected):
        trend = analyze_trend(dates_with_counts(counts))
        assert trend.type == expected
        assert trend.period_unit == "day"
        assert trend.period_count == len(counts)

    def test_empty_periods_count_as_zero(self):
        trend = analyze_trend(days_from_start(0, 0, 0, 3))
        assert trend.period_count == 4
        assert trend.slope < 0

    @pytest.mark.parametrize(
        ("span_days", "expected"),
        [(0, "day"), (31, "day"), (32, "week"), (365, "week"), (366, "month")],
    )
    def test_period_size(self, span_days, expected):
        assert period_size(span_days)[0] == expected


class TestDescribeSpan:
    """Test span wording."""

    @pytest.mark.parametrize(
        ("span_days", "expected"),
        [
            (0, "Single day"),
            (1, "1 day"),
            (6, "6 days"),
            (7, "1 week"),
            (10, "1 week, 3 days"),
            (14, "2 weeks"),
            (45, "1 month"),
            (90, "3 months"),
            (365, "1 year"),
            (400, "1 year, 1 month"),
            (800, "2 years, 2 months"),
        ],
    )
    def test_wording(self, span_days, expected):
        assert describe_span(span_days) == expected


class TestTemporalDistributions:
    """Test calendar breakdowns."""

    def test_buckets_are_zero_filled(self):
        dist = temporal_distributions([datetime(2022, 12, 31), datetime(2024, 1, 1)])
        assert dist.yearly == {"2022": 1, "2023": 0, "2024": 1}
        assert len(dist.monthly) == 12
        assert dist.monthly["December"] == 1
        assert dist.monthly["January"] == 1
        assert dist.monthly["June"] == 0
        assert dist.quarterly == {"Q1": 1, "Q2": 0, "Q3": 0, "Q4": 1}
        assert list(dist.day_of_week)[0] == "Monday"
        assert dist.day_of_week["Saturday"] == 1
        assert dist.day_of_week["Monday"] == 1


class TestAnalyzeTemporal:
    """Test the temporal profile of a field."""

    @pytest.fixture
    def config(self):
        return ProfilingConfig()

    def test_profiles_date_strings(self, config):
        valid = [d.strftime("%Y-%m-%d") for d in days_from_start(0, 1, 2, 3, 4, 14, 15, 16)]
        values = [*valid, "not a date", None, ""]
        profile = analyze_temporal(values, config)
        assert profile is not None
        assert profile.detected_format.name == "ISO_DATE"
        assert profile.detected_format.confidence == 88.89
        assert profile.valid_count == 8
        assert profile.invalid_count == 1
        assert profile.valid_percentage == 88.89
        assert profile.earliest == START
        assert profile.latest == START + timedelta(days=16)
        assert profile.span_days == 16
        assert profile.time_span_description == "2 weeks, 2 days"
        assert profile.gaps.largest_gap_days == 10
        assert profile.distributions.yearly == {"2024": 8}

    def test_profiles_mixed_dates_and_datetimes(self, config):
        values = ["2024-01-01", "2024-01-02T10:00:00", "2024-01-03", None]
        profile = analyze_temporal(values, config)
        assert profile is not None
        assert profile.detected_format.name == "ISO_8601"
        assert profile.valid_count == 3
        assert profile.invalid_count == 0
        assert profile.valid_percentage == 100.0
        assert profile.latest == datetime(2024, 1, 3)

    def test_non_date_field(self, config):
        assert analyze_temporal(["apple", "pear", "plum"], config) is None
