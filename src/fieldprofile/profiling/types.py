"""Intermediate data types shared by the profiling pipeline."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fieldprofile.models.profile import DistributionEntry, ValueKind


@dataclass
class FieldClassification:
    """Kind breakdown of a field's sampled values."""

    kind_counts: dict[ValueKind, int]
    sampled: int
    is_numeric: bool
    is_date_like: bool
    dominant_kind: ValueKind

    @property
    def non_null_sampled(self) -> int:
        return self.sampled - self.kind_counts.get(ValueKind.NULL, 0)


@dataclass
class FrequencyDistribution:
    """Result of a full frequency scan over one field.

    ``value_counts`` covers every distinct non-null value seen, even when
    ``entries`` was cut down to the cap.
    """

    entries: list[DistributionEntry]
    value_counts: dict[str, int]
    unique_count: int
    null_count: int
    empty_string_count: int
    total: int
    truncated: bool
    truncated_at: int
    other_count: int = 0

    @property
    def non_null_count(self) -> int:
        return self.total - self.null_count


@dataclass
class ReadResult:
    """What a dataset reader hands back to the profiler."""

    rows: Sequence[Mapping[str, Any]] = field(default_factory=list)
    schema: list[str] | None = None
    error: str | None = None
