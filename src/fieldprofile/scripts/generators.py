"""Load script generator - renders field profiles as inline data blocks."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fieldprofile.models.profile import FieldProfile

logger = logging.getLogger(__name__)

NULL_TOKEN = "(NULL)"
HEADER = ("Value", "Count", "Percentage")


class Delimiter(str, Enum):
    TAB = "tab"
    PIPE = "pipe"
    COMMA = "comma"
    SEMICOLON = "semicolon"

    @property
    def char(self) -> str:
        return {"tab": "\t", "pipe": "|", "comma": ",", "semicolon": ";"}[self.value]

    @property
    def script_token(self) -> str:
        """How the delimiter is spelled inside the ``Delimiter is`` clause."""
        return "\\t" if self is Delimiter.TAB else self.char

    @property
    def description(self) -> str:
        return {
            "tab": "Tab",
            "pipe": "Pipe (|)",
            "comma": "Comma (,)",
            "semicolon": "Semicolon (;)",
        }[self.value]

    @classmethod
    def from_token(cls, token: str) -> Delimiter:
        for delimiter in cls:
            if token in (delimiter.script_token, delimiter.char):
                return delimiter
        msg = f"Unknown delimiter: {token!r}"
        raise ValueError(msg)


class ScriptOptions(BaseModel):
    """Export options for the generated load script."""

    delimiter: Delimiter = Field(default=Delimiter.TAB)
    max_rows_per_field: int = Field(
        default=0, ge=0, description="Value rows per field, 0 exports every retained row"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


def sanitize_value(value: str | None, delimiter: Delimiter) -> str:
    """Make a value safe inside an inline block on a single line.

    The null bucket is written as the bare ``(NULL)`` token. A real value
    that reads as that token, or that starts with a double quote, is written
    double-quoted with embedded quotes doubled.
    """
    if value is None:
        return NULL_TOKEN
    cleaned = (
        value.replace(delimiter.char, " ")
        .replace("\r", "")
        .replace("\n", " ")
        .replace("]", ")")
    )
    if cleaned == NULL_TOKEN or cleaned.startswith('"'):
        return '"' + cleaned.replace('"', '""') + '"'
    return cleaned


def read_value(text: str) -> str | None:
    """Undo the null token and quoting applied by ``sanitize_value``."""
    if text == NULL_TOKEN:
        return None
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1].replace('""', '"')
    return text


def table_label(field_name: str) -> str:
    """Label of a field's inline table."""
    cleaned = re.sub(r"[\[\]\r\n]", "_", field_name)
    return f"{cleaned}_Distribution"


def _field_block(
    profile: FieldProfile, options: ScriptOptions, source_file_name: str
) -> list[str]:
    delimiter = options.delimiter
    lines = [
        f"// Field: {profile.field_name}",
        f"// Total Rows: {profile.total_rows:,}",
        f"// Unique Values: {profile.unique_value_count:,}",
    ]

    if profile.truncated:
        lines.append(
            f"// WARNING: Distribution was capped at {profile.truncated_at} values "
            f"during profiling; {profile.distinct_values_dropped:,} distinct values "
            f"({profile.other_count:,} rows) are not included"
        )
        logger.warning(
            f"Exporting {profile.field_name} from {source_file_name}: its distribution "
            f"was capped at {profile.truncated_at} values during profiling"
        )

    entries = profile.distributions
    if options.max_rows_per_field and options.max_rows_per_field < len(entries):
        lines.append(
            f"// NOTE: Exporting top {options.max_rows_per_field} values out of "
            f"{len(entries)} total"
        )
        entries = entries[: options.max_rows_per_field]

    lines.append("")
    lines.append(f"[{table_label(profile.field_name)}]:")
    lines.append("LOAD * INLINE [")
    lines.append(delimiter.char.join(HEADER))
    for entry in entries:
        lines.append(
            delimiter.char.join(
                (
                    sanitize_value(entry.value, delimiter),
                    str(entry.count),
                    f"{entry.percentage:.2f}",
                )
            )
        )
    lines.append(f"] (Delimiter is '{delimiter.script_token}');")
    lines.append("")
    return lines


def generate_script(
    profiles: Sequence[FieldProfile],
    source_file_name: str,
    options: ScriptOptions | None = None,
    generated_at: datetime | None = None,
) -> str:
    """Generate a load script with one inline distribution table per field.

    The output depends only on the profiles and options, apart from the
    generation timestamp in the header comment.

    Args:
        profiles: Previously computed field profiles
        source_file_name: Name of the profiled file, recorded in the header
        options: Delimiter and row limit, defaults to tab and no limit
        generated_at: Timestamp for the header, defaults to now

    Returns:
        Script text

    """
    options = options or ScriptOptions()
    timestamp = (generated_at or datetime.now(tz=UTC)).strftime("%Y-%m-%d %H:%M:%S")

    lines = [
        "// Field Profiling Data Export",
        f"// Generated: {timestamp}",
        f"// Source: {source_file_name}",
        f"// Delimiter: {options.delimiter.description}",
    ]
    if options.max_rows_per_field:
        lines.append(f"// Max rows per field: {options.max_rows_per_field}")
    lines.extend(
        ["//", "// This script loads value distribution data for analyzed fields", "//", ""]
    )

    for profile in profiles:
        lines.extend(_field_block(profile, options, source_file_name))

    logger.info(f"Generated load script for {len(profiles)} field(s) from {source_file_name}")
    return "\n".join(lines)


BLOCK_PATTERN = re.compile(
    r"^\[(?P<label>[^\]\n]+)_Distribution\]:\nLOAD \* INLINE \[\n"
    r"(?P<body>.*?)\n?\] \(Delimiter is '(?P<token>[^']+)'\);",
    re.MULTILINE | re.DOTALL,
)


def parse_script(script: str) -> dict[str, list[tuple[str | None, int]]]:
    """Read the value/count pairs back out of a generated script.

    Returns:
        Mapping of table label (field name) to ``(value, count)`` pairs in
        script order. The null bucket comes back as ``None``.

    """
    tables: dict[str, list[tuple[str | None, int]]] = {}
    for match in BLOCK_PATTERN.finditer(script):
        delimiter = Delimiter.from_token(match.group("token"))
        rows = match.group("body").split("\n")
        pairs = []
        for row in rows[1:]:
            if not row:
                continue
            value, count, _ = row.rsplit(delimiter.char, 2)
            pairs.append((read_value(value), int(count)))
        tables[match.group("label")] = pairs
    return tables
