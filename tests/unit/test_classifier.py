"""Unit tests for value classification."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from fieldprofile.config import ProfilingConfig
from fieldprofile.models.profile import ValueKind
from fieldprofile.profiling.classifier import (
    classify,
    classify_field,
    is_null,
    numeric_value,
    sample_values,
)


class TestClassify:
    """Test single value classification."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ValueKind.NULL),
            (float("nan"), ValueKind.NULL),
            (True, ValueKind.BOOLEAN),
            ("false", ValueKind.BOOLEAN),
            (" TRUE ", ValueKind.BOOLEAN),
            (42, ValueKind.INTEGER),
            ("42", ValueKind.INTEGER),
            (3.0, ValueKind.INTEGER),
            (3.5, ValueKind.REAL),
            ("-0.25", ValueKind.REAL),
            ("1e3", ValueKind.INTEGER),
            (date(2024, 1, 1), ValueKind.DATE),
            (datetime(2024, 1, 1, 12, 30), ValueKind.DATE),
            ("hello", ValueKind.STRING),
            ("", ValueKind.STRING),
            ("   ", ValueKind.STRING),
            ("1_000", ValueKind.STRING),
            ("inf", ValueKind.STRING),
            ("NaN", ValueKind.STRING),
        ],
    )
    def test_classifies_values(self, value, expected):
        """Test each raw value lands in the expected kind."""
        assert classify(value) == expected

    def test_empty_string_is_not_null(self):
        """Test the empty string is a value, not an absence."""
        assert not is_null("")
        assert classify("") != ValueKind.NULL

    def test_never_raises_on_unusual_objects(self):
        """Test arbitrary objects classify as strings."""
        assert classify(object()) == ValueKind.STRING
        assert classify([1, 2]) == ValueKind.STRING

    def test_integer_beyond_float_range_is_string(self):
        """Test an integer too large for a float classifies without raising."""
        assert classify(10**400) == ValueKind.STRING
        assert classify(-(10**400)) == ValueKind.STRING


class TestNumericValue:
    """Test numeric extraction."""

    def test_extracts_numbers_from_strings(self):
        assert numeric_value(" 12.5 ") == 12.5
        assert numeric_value("7") == 7.0

    def test_booleans_are_not_numbers(self):
        assert numeric_value(True) is None
        assert numeric_value("true") is None

    def test_non_finite_values_are_rejected(self):
        assert numeric_value(float("inf")) is None
        assert numeric_value("-Infinity") is None

    def test_integer_overflow_is_not_a_number(self):
        assert numeric_value(10**400) is None
        assert numeric_value(10**300) == 1e300


class TestSampleValues:
    """Test even sampling."""

    def test_returns_everything_when_small(self):
        assert sample_values([1, 2, 3], 10) == [1, 2, 3]

    def test_spreads_sample_across_values(self):
        values = list(range(100))
        sample = sample_values(values, 10)
        assert sample == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]


class TestClassifyField:
    """Test field level classification."""

    @pytest.fixture
    def config(self):
        return ProfilingConfig()

    def test_numeric_field(self, config):
        """Test a field of integers is numeric with integer dominant kind."""
        result = classify_field([1, 2, "3", None], config)
        assert result.is_numeric is True
        assert result.is_date_like is False
        assert result.dominant_kind == ValueKind.INTEGER
        assert result.kind_counts[ValueKind.NULL] == 1
        assert result.non_null_sampled == 3

    def test_blank_strings_do_not_count_against_numeric_share(self, config):
        """Test blank cells are left out of the numeric share like nulls."""
        result = classify_field([1, 2, 3, 4, 5, "", "", " "], config)
        assert result.is_numeric is True
        assert result.dominant_kind == ValueKind.INTEGER

    def test_all_blank_field_is_not_numeric(self, config):
        assert classify_field(["", "  "], config).is_numeric is False

    def test_huge_integers_do_not_raise(self, config):
        result = classify_field([10**400, 10**401], config)
        assert result.is_numeric is False
        assert result.dominant_kind == ValueKind.STRING

    def test_mixed_numbers_prefer_real(self, config):
        result = classify_field([1, 2.5, 3], config)
        assert result.dominant_kind == ValueKind.REAL

    def test_numeric_threshold(self, config):
        """Test a field below the numeric share threshold is not numeric."""
        values = [1, 2, 3, 4, 5, 6, 7, 8, "x", "y"]
        assert classify_field(values, config).is_numeric is False
        lenient = ProfilingConfig(numeric_threshold=0.8)
        assert classify_field(values, lenient).is_numeric is True

    def test_date_field(self, config):
        values = ["2024-01-01", "2024-01-02", "2024-01-03"]
        result = classify_field(values, config)
        assert result.is_date_like is True
        assert result.dominant_kind == ValueKind.DATE

    def test_string_field(self, config):
        result = classify_field(["a", "b", "b"], config)
        assert result.is_numeric is False
        assert result.dominant_kind == ValueKind.STRING

    def test_all_null_field(self, config):
        result = classify_field([None, None], config)
        assert result.is_numeric is False
        assert result.is_date_like is False
        assert result.dominant_kind == ValueKind.NULL
