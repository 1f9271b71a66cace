"""Profile Report Validation

Validates saved field profile reports against the packaged JSON Schema and
the row accounting rules a report must satisfy.
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema import ValidationError

from fieldprofile.exceptions import ReportValidationError


class ProfileReportValidator:
    """Validates profile report files against the JSON Schema."""

    def __init__(self, schema_path: Path | None = None) -> None:
        """Initialize validator with schema.

        Args:
        ----
            schema_path: Path to the report JSON Schema. If None, uses default.

        """
        self.logger = logging.getLogger(self.__class__.__name__)

        if schema_path is None:
            schema_path = Path(__file__).parent / "schemas" / "profile_report.schema.json"

        if not schema_path.exists():
            msg = f"Report schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        with schema_path.open(encoding="utf-8") as f:
            self.schema = json.load(f)

        self.validator = jsonschema.Draft7Validator(self.schema)

        self.logger.debug(f"Report validator initialized with schema: {schema_path}")

    def validate_file(self, report_path: Path, raise_on_error: bool = True) -> bool:
        """Validate a profile report YAML file.

        Raises:
        ------
            ReportValidationError: If validation fails and raise_on_error=True
            FileNotFoundError: If file doesn't exist

        """
        if not report_path.exists():
            msg = f"Profile report not found: {report_path}"
            raise FileNotFoundError(msg)

        try:
            with report_path.open(encoding="utf-8") as f:
                report_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in {report_path}: {e}"
            if raise_on_error:
                raise ReportValidationError(error_msg) from e
            self.logger.exception(error_msg)
            return False

        return self.validate_data(report_data, raise_on_error, str(report_path))

    def validate_data(
        self,
        report_data: dict[str, Any],
        raise_on_error: bool = True,
        source_name: str = "profile report",
    ) -> bool:
        """Validate report data against the schema and the accounting rules.

        Args:
        ----
            report_data: Report as dictionary
            raise_on_error: Whether to raise exception on validation errors
            source_name: Name/path for error messages

        Returns:
        -------
            True if valid, False if invalid (when raise_on_error=False)

        """
        try:
            self.validator.validate(report_data)
        except ValidationError as e:
            error_msg = f"Schema validation failed for {source_name}: {e.message}"
            if e.absolute_path:
                error_msg += f" at path: {'.'.join(str(p) for p in e.absolute_path)}"
            if raise_on_error:
                raise ReportValidationError(error_msg, [error_msg]) from e
            self.logger.error(error_msg)
            return False

        errors = self._check_row_accounting(report_data)
        if errors:
            error_msg = f"Row accounting errors in {source_name}"
            if raise_on_error:
                raise ReportValidationError(error_msg, errors)
            self.logger.error(f"{error_msg}: {'; '.join(errors)}")
            return False

        self.logger.debug(f"Report validation passed for {source_name}")
        return True

    def _check_row_accounting(self, report_data: dict[str, Any]) -> list[str]:
        """Check that null/non-null and distribution counts add up per field."""
        errors = []
        for field in report_data.get("fields", []):
            name = field["field_name"]
            total = field["total_rows"]
            if field["null_count"] + field["non_null_count"] != total:
                errors.append(f"{name}: null and non-null counts do not sum to total_rows")
            listed = sum(entry["count"] for entry in field["distributions"])
            if listed + field.get("other_count", 0) != total:
                errors.append(f"{name}: distribution counts do not sum to total_rows")
        return errors
