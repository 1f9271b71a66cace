"""Exception types raised by the profiling engine."""

from __future__ import annotations


class ProfilingError(Exception):
    """Base class for profiling failures surfaced to the caller."""


class InputError(ProfilingError):
    """Raised for an empty dataset, an empty field list, or an unknown field."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class UpstreamReadError(ProfilingError):
    """Raised when the dataset reader fails; there is nothing to profile."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class ReportValidationError(ProfilingError):
    """Raised when a saved profile report does not match the report schema."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
