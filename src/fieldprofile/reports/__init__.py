"""Human-readable reports over field profiles."""

from fieldprofile.reports.summary import format_date, format_number, render_profile_summary

__all__ = [
    "format_date",
    "format_number",
    "render_profile_summary",
]
