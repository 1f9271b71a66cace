"""Field profiler - runs the profiling pipeline over requested fields.

Each field goes through classify -> distribute -> statistics / temporal /
text -> quality. Fields are independent: no step reads another field's
result, so fields may be profiled on worker threads.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

from fieldprofile.config import DEFAULT_CONFIG, ProfilingConfig
from fieldprofile.exceptions import InputError, UpstreamReadError
from fieldprofile.models.profile import FieldProfile, ValueKind
from fieldprofile.profiling import (
    ReadResult,
    analyze_text,
    classify_field,
    compute_statistics,
    distribute,
    score_quality,
)
from fieldprofile.temporal import analyze_temporal

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


class DatasetReader(Protocol):
    """Collaborator that loads rows from a source file."""

    def read(self, source: str, max_rows: int | None = None) -> ReadResult: ...


def should_warn_large_dataset(row_count: int, threshold: int = 100_000) -> bool:
    """Return True when a dataset is large enough to warrant a warning."""
    return row_count > threshold


class FieldProfiler:
    """Profile fields of an in-memory dataset."""

    def __init__(self, config: ProfilingConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def profile_field(
        self,
        rows: Sequence[Row],
        field_name: str,
        max_unique_values: int | None = None,
    ) -> FieldProfile:
        """Profile a single field. Does not validate the request."""
        config = self.config
        cap = max_unique_values or config.max_unique_values
        values = [row.get(field_name) for row in rows]

        classification = classify_field(values, config)
        distribution = distribute(values, cap=cap, precision=config.percentage_precision)

        statistics = compute_statistics(values, config) if classification.is_numeric else None
        temporal = analyze_temporal(values, config) if classification.is_date_like else None
        text = None
        if config.analyze_text and classification.dominant_kind == ValueKind.STRING:
            text = analyze_text(values)

        quality = score_quality(distribution, field_name, config)

        if distribution.truncated:
            logger.warning(
                f"Field {field_name}: distribution truncated at {cap} of "
                f"{distribution.unique_count} distinct values"
            )

        return FieldProfile(
            field_name=field_name,
            total_rows=distribution.total,
            unique_value_count=distribution.unique_count,
            null_count=distribution.null_count,
            non_null_count=distribution.non_null_count,
            distributions=distribution.entries,
            other_count=distribution.other_count,
            truncated=distribution.truncated,
            truncated_at=cap,
            inferred_kind=classification.dominant_kind,
            kind_counts={kind.value: count for kind, count in classification.kind_counts.items()},
            is_numeric=classification.is_numeric,
            statistics=statistics,
            temporal=temporal,
            text=text,
            quality=quality,
        )

    def _validate_request(
        self,
        rows: Sequence[Row],
        field_names: Sequence[str],
        max_unique_values: int | None,
        schema: Sequence[str] | None = None,
    ) -> None:
        if not rows:
            msg = "No data available for profiling"
            raise InputError(msg)
        if not field_names:
            msg = "No fields requested for profiling"
            raise InputError(msg)
        if max_unique_values is not None and max_unique_values < 1:
            msg = f"max_unique_values must be at least 1, got {max_unique_values}"
            raise InputError(msg)

        known = set(schema) if schema is not None else set(rows[0].keys())
        missing = [name for name in field_names if name not in known]
        if missing:
            msg = f"Fields not found in dataset: {', '.join(missing)}"
            raise InputError(msg, fields=missing)

        if should_warn_large_dataset(len(rows), self.config.large_dataset_warning_rows):
            logger.warning(
                f"Profiling {fields_label(field_names)} over {len(rows):,} rows; "
                "this may take a while"
            )

    def iter_profiles(
        self,
        rows: Sequence[Row],
        field_names: Sequence[str],
        max_unique_values: int | None = None,
        schema: Sequence[str] | None = None,
    ) -> Iterator[FieldProfile]:
        """Validate the request, then yield one profile per field in order.

        Control returns to the caller between fields, never inside a field's
        scan. Validation errors are raised before the iterator is returned.
        """
        self._validate_request(rows, field_names, max_unique_values, schema)

        def _generate() -> Iterator[FieldProfile]:
            for field_name in field_names:
                logger.debug(f"Profiling field {field_name}")
                yield self.profile_field(rows, field_name, max_unique_values)

        return _generate()

    def profile_fields(
        self,
        rows: Sequence[Row],
        field_names: Sequence[str],
        max_unique_values: int | None = None,
        schema: Sequence[str] | None = None,
    ) -> list[FieldProfile]:
        """Profile the requested fields.

        Args:
            rows: Dataset rows sharing one set of field names
            field_names: Fields to profile, in output order
            max_unique_values: Distribution cap, overrides the config
            schema: Field names of the dataset when known up front

        Returns:
            One FieldProfile per requested field

        Raises:
            InputError: Empty dataset, empty field list or unknown field

        """
        if self.config.max_workers > 1 and len(field_names) > 1:
            self._validate_request(rows, field_names, max_unique_values, schema)
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                profiles = list(
                    executor.map(
                        lambda name: self.profile_field(rows, name, max_unique_values),
                        field_names,
                    )
                )
        else:
            profiles = list(self.iter_profiles(rows, field_names, max_unique_values, schema))

        logger.info(f"Profiled {fields_label(field_names)} over {len(rows):,} rows")
        return profiles

    async def profile_fields_async(
        self,
        rows: Sequence[Row],
        field_names: Sequence[str],
        max_unique_values: int | None = None,
        schema: Sequence[str] | None = None,
    ) -> list[FieldProfile]:
        """Profile fields, yielding to the event loop between fields."""
        profiles = []
        for profile in self.iter_profiles(rows, field_names, max_unique_values, schema):
            profiles.append(profile)
            await asyncio.sleep(0)
        return profiles

    def profile_source(
        self,
        reader: DatasetReader,
        source: str,
        field_names: Sequence[str],
        max_rows: int | None = None,
        max_unique_values: int | None = None,
    ) -> list[FieldProfile]:
        """Read a dataset through ``reader`` and profile it.

        Raises:
            UpstreamReadError: The reader raised or reported an error
            InputError: See ``profile_fields``

        """
        try:
            result = reader.read(source, max_rows)
        except Exception as e:
            msg = f"Failed to read {source}: {e}"
            raise UpstreamReadError(msg, source=source) from e

        if result.error:
            msg = f"Failed to read {source}: {result.error}"
            raise UpstreamReadError(msg, source=source)

        logger.info(f"Read {len(result.rows):,} rows from {source}")
        return self.profile_fields(
            result.rows, field_names, max_unique_values, schema=result.schema
        )


def fields_label(field_names: Sequence[str]) -> str:
    count = len(field_names)
    return f"{count} field{'s' if count != 1 else ''}"


def profile_fields(
    rows: Sequence[Row],
    field_names: Sequence[str],
    max_unique_values: int | None = None,
    config: ProfilingConfig | None = None,
) -> list[FieldProfile]:
    """Profile fields with a one-off FieldProfiler."""
    return FieldProfiler(config).profile_fields(rows, field_names, max_unique_values)
