"""Summary renderer - Markdown overview of profiled fields."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, datetime

from fieldprofile.models.profile import FieldProfile

NOT_AVAILABLE = "N/A"
TOP_VALUES_SHOWN = 5


def format_number(value: float | None, decimals: int = 2) -> str:
    """Format a number for display, "N/A" when missing or not finite."""
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    if value != 0 and abs(value) < 0.01:
        return f"{value:.2e}"
    return f"{value:,.{decimals}f}"


def format_date(value: date | datetime | None) -> str:
    """Format a date as YYYY-MM-DD, "N/A" when missing."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _display_value(value: str | None) -> str:
    if value is None:
        return "(null)"
    if value == "":
        return "(empty)"
    return value.replace("|", "\\|")


def _field_section(profile: FieldProfile) -> str:
    quality = profile.quality
    completeness = quality.completeness

    section = f"## {profile.field_name}\n\n"
    section += f"- **Type**: {profile.inferred_kind.value}\n"
    section += f"- **Rows**: {profile.total_rows:,}\n"
    section += f"- **Unique Values**: {profile.unique_value_count:,}\n"
    section += (
        f"- **Completeness**: {format_number(completeness.non_null_percentage)}% non-null, "
        f"{format_number(completeness.fill_rate)}% filled\n"
    )
    section += (
        f"- **Quality**: {format_number(quality.overall_score, 1)} "
        f"({quality.quality_level.value})\n"
    )
    if profile.truncated:
        section += (
            f"- **Truncated**: distribution capped at {profile.truncated_at:,} values, "
            f"{profile.other_count:,} rows not listed\n"
        )

    if profile.distributions:
        section += "\n| Value | Count | Percentage |\n|---|---:|---:|\n"
        for entry in profile.distributions[:TOP_VALUES_SHOWN]:
            section += (
                f"| {_display_value(entry.value)} | {entry.count:,} "
                f"| {format_number(entry.percentage)}% |\n"
            )

    stats = profile.statistics
    if stats is not None:
        section += "\n### Statistics\n\n"
        section += f"- **Min / Max**: {format_number(stats.descriptive.min)} / "
        section += f"{format_number(stats.descriptive.max)}\n"
        section += f"- **Mean**: {format_number(stats.descriptive.mean)}\n"
        section += f"- **Median**: {format_number(stats.descriptive.median)}\n"
        section += f"- **Std Dev**: {format_number(stats.spread.std_dev)}\n"
        section += f"- **Skewness**: {format_number(stats.distribution.skewness)}\n"
        section += f"- **Outliers**: {stats.outliers.count:,}\n"

    temporal = profile.temporal
    if temporal is not None:
        section += "\n### Temporal\n\n"
        section += (
            f"- **Range**: {format_date(temporal.earliest)} to "
            f"{format_date(temporal.latest)} ({temporal.time_span_description})\n"
        )
        section += f"- **Format**: {temporal.detected_format.description}\n"
        section += f"- **Trend**: {temporal.trend.type.value}\n"
        if temporal.gaps.has_gaps:
            section += (
                f"- **Gaps**: {temporal.gaps.gap_count:,}, largest "
                f"{temporal.gaps.largest_gap_days} days\n"
            )

    if quality.issues or quality.warnings:
        section += "\n### Findings\n\n"
        for issue in quality.issues:
            section += f"- Issue: {issue}\n"
        for warning in quality.warnings:
            section += f"- Warning: {warning}\n"

    return section


def render_profile_summary(
    profiles: Sequence[FieldProfile], source_file: str | None = None
) -> str:
    """Render a Markdown summary of profiled fields.

    Args:
        profiles: Field profiles in display order
        source_file: Name of the profiled file, shown in the title when given

    Returns:
        Markdown text

    """
    title = "# Field Profile Summary"
    if source_file:
        title += f": {source_file}"

    summary = f"{title}\n\n"
    summary += f"Fields profiled: {len(profiles)}\n\n"
    summary += "\n".join(_field_section(profile) for profile in profiles)
    return summary
