"""
SDF Linter

Checks an SDF document against:

- the file naming convention ``sdf(object|thing|data)-<name>.sdf.json``
- the ASCII-only character rule
- a JSON schema (the bundled ``schemas/sdf-validation.json`` by default)

Every failed check counts as one error, whatever the number of schema
violations it reports. The result serialises as
``{"errorCount": n, "errors": {"fileName": ..., "validChars": ..., "schema": [...]}}``.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator, FormatChecker

from ..constants import FileNames

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"

_FILENAME_RE = re.compile(FileNames.SDF_FILENAME_PATTERN)
_INVALID_CHARS_RE = re.compile(FileNames.INVALID_CHARS_PATTERN)


@dataclass
class LintIssue:
    """One schema violation."""
    path: str
    message: str
    validator: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.path or '/'}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        result = {"path": self.path, "message": self.message}
        if self.validator:
            result["validator"] = self.validator
        return result


@dataclass
class LintResult:
    """Result of linting one SDF document."""
    file_name_error: Optional[str] = None
    valid_chars_error: Optional[str] = None
    parse_error: Optional[str] = None
    schema_errors: List[LintIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum([
            self.file_name_error is not None,
            self.valid_chars_error is not None,
            self.parse_error is not None,
            bool(self.schema_errors),
        ])

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    def to_dict(self) -> Dict[str, Any]:
        errors: Dict[str, Any] = {}
        if self.file_name_error:
            errors["fileName"] = self.file_name_error
        if self.valid_chars_error:
            errors["validChars"] = self.valid_chars_error
        if self.parse_error:
            errors["parse"] = self.parse_error
        if self.schema_errors:
            errors["schema"] = [e.to_dict() for e in self.schema_errors]
        return {"errorCount": self.error_count, "errors": errors}

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = ["Lint Summary:", f"  Errors: {self.error_count}"]
        for label, message in (
            ("File name", self.file_name_error),
            ("Characters", self.valid_chars_error),
            ("Parse", self.parse_error),
        ):
            if message:
                lines.append(f"  - {label}: {message}")
        if self.schema_errors:
            lines.append(f"  - Schema: {len(self.schema_errors)} violation(s)")
            for issue in self.schema_errors[:10]:
                lines.append(f"      {issue}")
            if len(self.schema_errors) > 10:
                lines.append(f"      ... and {len(self.schema_errors) - 10} more")
        return "\n".join(lines)


def load_schema(schema_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load a JSON schema file, defaulting to the bundled SDF schema."""
    path = Path(schema_path) if schema_path else SCHEMA_DIR / FileNames.DEFAULT_SCHEMA
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class SDFLinter:
    """
    Lint SDF documents.

    Example usage:
        linter = SDFLinter()
        result = linter.lint(document, file_name="sdfobject-thermostat.sdf.json")
        if not result.is_valid:
            print(result.get_summary())
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None):
        self.schema = schema if schema is not None else load_schema()
        Draft7Validator.check_schema(self.schema)
        self._validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def lint(self, document: Any, file_name: Optional[str] = None) -> LintResult:
        """
        Run all checks on a decoded SDF document.

        The file name check only runs when ``file_name`` is given.
        """
        result = LintResult()
        if file_name is not None:
            result.file_name_error = self.check_file_name(file_name)
        result.valid_chars_error = self.check_characters(document)
        result.schema_errors = self.check_schema(document)
        logger.debug(f"Linted {file_name or '<document>'}: {result.error_count} error(s)")
        return result

    def lint_file(self, file_path: Union[str, Path]) -> LintResult:
        """Read and lint an SDF file; unreadable JSON is reported, not raised."""
        path = Path(file_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            result = LintResult(parse_error=f"Invalid JSON: {e}")
            result.file_name_error = self.check_file_name(path.name)
            return result
        return self.lint(document, file_name=path.name)

    @staticmethod
    def check_file_name(file_name: str) -> Optional[str]:
        base_name = Path(file_name).name
        if _FILENAME_RE.match(base_name):
            return None
        return f"File name {base_name} does not match {FileNames.SDF_FILENAME_PATTERN}"

    @staticmethod
    def check_characters(document: Any) -> Optional[str]:
        text = json.dumps(document, ensure_ascii=False)
        match = _INVALID_CHARS_RE.search(text)
        if match is None:
            return None
        return f"File contains unexpected character: {match.group(0)}"

    def check_schema(self, document: Any) -> List[LintIssue]:
        errors = sorted(self._validator.iter_errors(document), key=lambda e: list(map(str, e.path)))
        return [
            LintIssue(
                path="/" + "/".join(str(p) for p in error.path),
                message=error.message,
                validator=error.validator,
            )
            for error in errors
        ]
