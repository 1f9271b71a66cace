"""Unit tests for the Markdown profile summary."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from fieldprofile import FieldProfiler
from fieldprofile.reports import format_date, format_number, render_profile_summary


class TestFormatNumber:
    """Test number formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "N/A"),
            (float("nan"), "N/A"),
            (float("inf"), "N/A"),
            (0, "0.00"),
            (1234.5, "1,234.50"),
            (0.001, "1.00e-03"),
            (-2.5, "-2.50"),
        ],
    )
    def test_formatting(self, value, expected):
        assert format_number(value) == expected

    def test_decimals(self):
        assert format_number(3.14159, 1) == "3.1"


class TestFormatDate:
    """Test date formatting."""

    def test_missing(self):
        assert format_date(None) == "N/A"

    def test_datetime_drops_time(self):
        assert format_date(datetime(2024, 1, 5, 10, 30)) == "2024-01-05"

    def test_date(self):
        assert format_date(date(2024, 1, 5)) == "2024-01-05"


class TestRenderProfileSummary:
    """Test the rendered summary."""

    def test_sections(self, orders_profiles):
        summary = render_profile_summary(orders_profiles, "orders.qvd")
        assert summary.startswith("# Field Profile Summary: orders.qvd\n")
        assert "Fields profiled: 4" in summary
        for name in ("order_id", "status", "amount", "order_date"):
            assert f"## {name}\n" in summary

    def test_value_table(self, orders_profiles):
        summary = render_profile_summary(orders_profiles)
        assert summary.startswith("# Field Profile Summary\n")
        assert "| shipped | 3 | 50.00% |" in summary
        assert "| (null) | 1 | 16.67% |" in summary

    def test_value_table_lists_top_values_only(self, orders_profiles):
        """Test only the five most frequent values of a field are listed."""
        summary = render_profile_summary(orders_profiles)
        assert "| ORD000 | 1 | 16.67% |" in summary
        assert "| ORD004 | 1 | 16.67% |" in summary
        assert "| ORD005 |" not in summary

    def test_empty_string_bucket(self):
        (profile,) = FieldProfiler().profile_fields([{"note": v} for v in ["", "", "x"]], ["note"])
        summary = render_profile_summary([profile])
        assert "| (empty) | 2 | 66.67% |" in summary
        assert "| x | 1 | 33.33% |" in summary

    def test_statistics_and_temporal(self, orders_profiles):
        summary = render_profile_summary(orders_profiles)
        assert "### Statistics" in summary
        assert "- **Min / Max**: 10.50 / 40.25" in summary
        assert "### Temporal" in summary
        assert "- **Range**: 2024-01-01 to 2024-01-14 (1 week, 6 days)" in summary
        assert "- **Gaps**: 1, largest 10 days" in summary

    def test_empty(self):
        assert "Fields profiled: 0" in render_profile_summary([])
