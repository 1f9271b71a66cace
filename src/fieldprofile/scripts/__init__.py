"""Load script generation from field profiles."""

from fieldprofile.scripts.generators import (
    Delimiter,
    ScriptOptions,
    generate_script,
    parse_script,
)

__all__ = [
    "Delimiter",
    "ScriptOptions",
    "generate_script",
    "parse_script",
]
