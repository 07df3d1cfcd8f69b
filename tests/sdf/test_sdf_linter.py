"""
Tests for the SDF linter: file naming, character set and JSON schema checks.
"""

import json

import pytest
from jsonschema.exceptions import SchemaError

from dtdl_sdf.sdf import LintResult, SDFLinter
from dtdl_sdf.sdf.sdf_linter import LintIssue, load_schema
from dtdl_sdf.translation import DTDLToSDFConverter


@pytest.fixture(scope="module")
def linter():
    return SDFLinter()


class TestLintChecks:
    """Tests for the individual lint checks."""

    def test_valid_document(self, linter, sdf_object_document):
        result = linter.lint(sdf_object_document, file_name="sdfobject-switch.sdf.json")

        assert result.is_valid
        assert result.to_dict() == {"errorCount": 0, "errors": {}}

    def test_valid_thing_document(self, linter, sdf_thing_document):
        assert linter.lint(sdf_thing_document, file_name="sdfthing-controller.sdf.json").is_valid

    @pytest.mark.parametrize("file_name", [
        "sdfobject-switch.sdf.json",
        "sdfthing-room_controller.sdf.json",
        "sdfdata-levels.v2.sdf.json",
    ])
    def test_accepted_file_names(self, file_name):
        assert SDFLinter.check_file_name(file_name) is None

    @pytest.mark.parametrize("file_name", [
        "switch.sdf.json",
        "sdfobject-Switch.sdf.json",
        "sdfobject-switch.json",
    ])
    def test_rejected_file_names(self, file_name):
        message = SDFLinter.check_file_name(file_name)
        assert message.startswith(f"File name {file_name} does not match")

    def test_directory_is_ignored_in_file_name(self):
        assert SDFLinter.check_file_name("models/sdfobject-switch.sdf.json") is None

    def test_non_ascii_character(self, linter, sdf_object_document):
        sdf_object_document["sdfObject"]["Switch"]["description"] = "Schalter für Licht"

        result = linter.lint(sdf_object_document)

        assert result.valid_chars_error == "File contains unexpected character: ü"
        assert result.error_count == 1

    def test_unknown_type_is_a_schema_error(self, linter):
        document = {
            "info": {"title": "Sensor"},
            "sdfObject": {"Sensor": {"sdfProperty": {"p": {"type": "unknown (uuid4)"}}}},
        }

        result = linter.lint(document)

        assert [issue.path for issue in result.schema_errors] == ["/sdfObject/Sensor/sdfProperty/p/type"]
        assert result.schema_errors[0].validator == "enum"

    def test_document_without_definitions(self, linter):
        result = linter.lint({"info": {"title": "Empty"}})
        assert result.schema_errors[0].path == "/"
        assert result.schema_errors[0].validator == "anyOf"

    def test_unknown_top_level_keyword(self, linter, sdf_object_document):
        sdf_object_document["sdfThings"] = {}
        result = linter.lint(sdf_object_document)
        assert any(issue.validator == "additionalProperties" for issue in result.schema_errors)

    def test_failed_checks_count_once_each(self, linter):
        document = {
            "info": {"title": "Bad"},
            "sdfObject": {"A": {"sdfProperty": {"p": {"type": "x"}, "q": {"type": "y"}}}},
        }

        result = linter.lint(document, file_name="bad.json")

        assert len(result.schema_errors) == 2
        assert result.error_count == 2
        assert set(result.to_dict()["errors"]) == {"fileName", "schema"}

    def test_converted_output_passes(self, linter, simple_dtdl_interface, dtdl_with_component):
        converter = DTDLToSDFConverter()
        assert linter.lint(converter.convert(simple_dtdl_interface)).is_valid
        assert linter.lint(converter.convert(dtdl_with_component)).is_valid


class TestLintFile:
    """Tests for SDFLinter.lint_file."""

    def test_lint_file(self, linter, temp_sdf_file):
        assert linter.lint_file(temp_sdf_file).is_valid

    def test_invalid_json_is_reported(self, linter, tmp_path):
        path = tmp_path / "sdfobject-broken.sdf.json"
        path.write_text("{")

        result = linter.lint_file(path)

        assert result.parse_error.startswith("Invalid JSON")
        assert result.file_name_error is None
        assert result.error_count == 1

    def test_missing_file_raises(self, linter, tmp_path):
        with pytest.raises(FileNotFoundError):
            linter.lint_file(tmp_path / "sdfobject-absent.sdf.json")


class TestSchemaLoading:
    """Tests for schema selection."""

    def test_bundled_schema(self):
        schema = load_schema()
        assert schema["$schema"] == "http://json-schema.org/draft-07/schema#"

    def test_custom_schema(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"type": "object", "required": ["info"]}))

        linter = SDFLinter(load_schema(path))

        assert linter.lint({"info": {}}).is_valid
        assert not linter.lint({}).is_valid

    def test_invalid_schema_raises(self):
        with pytest.raises(SchemaError):
            SDFLinter({"type": "no-such-type"})


class TestLintResult:
    """Tests for LintResult reporting."""

    def test_summary(self):
        result = LintResult(
            file_name_error="File name x does not match",
            schema_errors=[LintIssue("/sdfObject", "is not valid", "type")],
        )

        summary = result.get_summary()

        assert "Errors: 2" in summary
        assert "File name: File name x does not match" in summary
        assert "/sdfObject: is not valid" in summary

    def test_issue_to_dict(self):
        assert LintIssue("/a", "bad").to_dict() == {"path": "/a", "message": "bad"}
        assert str(LintIssue("", "bad")) == "/: bad"
