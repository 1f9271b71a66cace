"""Unit tests for profile report validation."""

from __future__ import annotations

import pytest
import yaml

from fieldprofile.exceptions import ReportValidationError
from fieldprofile.models.profile import save_profiles_to_yaml
from fieldprofile.report_validator import ProfileReportValidator


@pytest.fixture
def validator():
    return ProfileReportValidator()


@pytest.fixture
def report_path(orders_profiles, tmp_path):
    path = tmp_path / "orders.profile.yaml"
    save_profiles_to_yaml(orders_profiles, path, source_file="orders.qvd")
    return path


class TestProfileReportValidator:
    """Test report schema and accounting checks."""

    def test_valid_report_file(self, validator, report_path):
        assert validator.validate_file(report_path) is True

    def test_missing_fields_key(self, validator):
        with pytest.raises(ReportValidationError, match="Schema validation failed"):
            validator.validate_data({"profiling_metadata": {}})

    def test_schema_error_includes_path(self, validator, report_path):
        data = yaml.safe_load(report_path.read_text())
        data["fields"][0]["inferred_kind"] = "text"
        with pytest.raises(ReportValidationError) as exc_info:
            validator.validate_data(data)
        assert "fields.0.inferred_kind" in str(exc_info.value)
        assert len(exc_info.value.errors) == 1

    def test_row_accounting_errors(self, validator, report_path):
        data = yaml.safe_load(report_path.read_text())
        data["fields"][1]["null_count"] += 1
        data["fields"][1]["distributions"].pop()
        with pytest.raises(ReportValidationError) as exc_info:
            validator.validate_data(data)
        assert exc_info.value.errors == [
            "status: null and non-null counts do not sum to total_rows",
            "status: distribution counts do not sum to total_rows",
        ]

    def test_returns_false_without_raising(self, validator, report_path):
        data = yaml.safe_load(report_path.read_text())
        data["fields"][0]["total_rows"] = -1
        assert validator.validate_data(data, raise_on_error=False) is False

    def test_invalid_yaml(self, validator, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("fields: [unclosed\n")
        with pytest.raises(ReportValidationError, match="Invalid YAML"):
            validator.validate_file(path)
        assert validator.validate_file(path, raise_on_error=False) is False

    def test_missing_report(self, validator, tmp_path):
        with pytest.raises(FileNotFoundError):
            validator.validate_file(tmp_path / "missing.yaml")

    def test_missing_schema(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProfileReportValidator(tmp_path / "missing.schema.json")
