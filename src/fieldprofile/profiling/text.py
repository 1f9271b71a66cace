"""Text analysis for string fields."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from typing import Any

from fieldprofile.models.profile import (
    CaseComposition,
    CharacterComposition,
    FormatMatch,
    LengthStats,
    TextProfile,
)
from fieldprofile.profiling.distribution import percentage

FORMAT_PATTERNS = {
    "email": re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
    "url": re.compile(r"^(https?://|www\.)[^\s]+\.[a-z]{2,}[^\s]*$", re.IGNORECASE),
    "phone": re.compile(
        r"^(\+\d{1,3}[-.\s]?)?\(?\d{2,4}\)?[-.\s]\d{2,4}([-.\s]\d{2,4}){0,3}$|^\+\d{7,15}$"
    ),
}
MAX_FORMAT_SAMPLES = 5


def _lengths(texts: list[str]) -> LengthStats:
    lengths = [len(text) for text in texts]
    most_common, most_common_count = Counter(lengths).most_common(1)[0]
    return LengthStats(
        min=min(lengths),
        max=max(lengths),
        average=round(sum(lengths) / len(lengths), 2),
        most_common=most_common,
        most_common_count=most_common_count,
    )


def _characters(texts: list[str]) -> CharacterComposition:
    total = alphabetic = numeric = whitespace = special = non_ascii = 0
    for text in texts:
        total += len(text)
        for char in text:
            if char.isalpha():
                alphabetic += 1
            elif char.isdigit():
                numeric += 1
            elif char.isspace():
                whitespace += 1
            else:
                special += 1
            if ord(char) > 127:
                non_ascii += 1

    return CharacterComposition(
        alphabetic_percentage=percentage(alphabetic, total, 1),
        numeric_percentage=percentage(numeric, total, 1),
        whitespace_percentage=percentage(whitespace, total, 1),
        special_char_percentage=percentage(special, total, 1),
        non_ascii_count=non_ascii,
        leading_whitespace_count=sum(1 for t in texts if t[:1].isspace()),
        trailing_whitespace_count=sum(1 for t in texts if t[-1:].isspace()),
    )


def _is_title_case(text: str) -> bool:
    words = [word for word in text.split() if any(c.isalpha() for c in word)]
    return bool(words) and all(
        word[0].isupper() and not any(c.isupper() for c in word[1:]) for word in words
    )


def _case(texts: list[str]) -> CaseComposition:
    upper = lower = mixed = title = 0
    for text in texts:
        has_upper = any(c.isupper() for c in text)
        has_lower = any(c.islower() for c in text)
        if has_upper and not has_lower:
            upper += 1
        elif has_lower and not has_upper:
            lower += 1
        elif has_upper and has_lower:
            mixed += 1
            if _is_title_case(text):
                title += 1
    return CaseComposition(
        uppercase_count=upper,
        lowercase_count=lower,
        mixed_case_count=mixed,
        title_case_count=title,
    )


def _formats(texts: list[str]) -> dict[str, FormatMatch]:
    matches: dict[str, list[str]] = {name: [] for name in FORMAT_PATTERNS}
    for text in texts:
        stripped = text.strip()
        for name, pattern in FORMAT_PATTERNS.items():
            if pattern.match(stripped):
                matches[name].append(stripped)
                break

    return {
        name: FormatMatch(
            count=len(found),
            percentage=percentage(len(found), len(texts), 1),
            samples=found[:MAX_FORMAT_SAMPLES],
        )
        for name, found in matches.items()
        if found
    }


def analyze_text(values: Sequence[Any]) -> TextProfile | None:
    """Length, character, case and format breakdown of the string values.

    Returns None when the field holds no non-empty strings.
    """
    texts = [value for value in values if isinstance(value, str) and value != ""]
    if not texts:
        return None

    return TextProfile(
        value_count=len(texts),
        lengths=_lengths(texts),
        characters=_characters(texts),
        case=_case(texts),
        formats=_formats(texts),
    )
