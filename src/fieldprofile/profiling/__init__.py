"""Per-field profiling pipeline.

Classification, frequency distribution, numeric statistics, text analysis
and quality scoring. Each step is a pure function over one field's values.
"""

from fieldprofile.profiling.classifier import (
    classify,
    classify_field,
    is_null,
    numeric_value,
)
from fieldprofile.profiling.distribution import canonical_value, distribute
from fieldprofile.profiling.quality import score_quality
from fieldprofile.profiling.statistics import compute_statistics
from fieldprofile.profiling.text import analyze_text
from fieldprofile.profiling.types import (
    FieldClassification,
    FrequencyDistribution,
    ReadResult,
)

__all__ = [
    "FieldClassification",
    "FrequencyDistribution",
    "ReadResult",
    "analyze_text",
    "canonical_value",
    "classify",
    "classify_field",
    "compute_statistics",
    "distribute",
    "is_null",
    "numeric_value",
    "score_quality",
]
