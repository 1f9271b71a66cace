"""Field-level profiling of tabular data with load script export."""

from fieldprofile.config import (
    DEFAULT_CONFIG,
    ProfilingConfig,
    QualityWeights,
    load_config_from_yaml,
    save_config_to_yaml,
)
from fieldprofile.exceptions import (
    InputError,
    ProfilingError,
    ReportValidationError,
    UpstreamReadError,
)
from fieldprofile.models import (
    CardinalityClass,
    DistributionEntry,
    DistributionType,
    FieldProfile,
    QualityLevel,
    QualityProfile,
    Statistics,
    TemporalProfile,
    TextProfile,
    TrendType,
    ValueKind,
    load_profiles_from_yaml,
    save_profiles_to_yaml,
)
from fieldprofile.profiler import DatasetReader, FieldProfiler, profile_fields
from fieldprofile.profiling import ReadResult, classify, distribute
from fieldprofile.report_validator import ProfileReportValidator
from fieldprofile.reports import format_date, format_number, render_profile_summary
from fieldprofile.scripts import Delimiter, ScriptOptions, generate_script, parse_script
from fieldprofile.temporal import analyze_temporal

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "CardinalityClass",
    "DatasetReader",
    "Delimiter",
    "DistributionEntry",
    "DistributionType",
    "FieldProfile",
    "FieldProfiler",
    "InputError",
    "ProfileReportValidator",
    "ProfilingConfig",
    "ProfilingError",
    "QualityLevel",
    "QualityProfile",
    "QualityWeights",
    "ReadResult",
    "ReportValidationError",
    "ScriptOptions",
    "Statistics",
    "TemporalProfile",
    "TextProfile",
    "TrendType",
    "UpstreamReadError",
    "ValueKind",
    "analyze_temporal",
    "classify",
    "distribute",
    "format_date",
    "format_number",
    "generate_script",
    "load_config_from_yaml",
    "load_profiles_from_yaml",
    "parse_script",
    "profile_fields",
    "render_profile_summary",
    "save_config_to_yaml",
    "save_profiles_to_yaml",
]
