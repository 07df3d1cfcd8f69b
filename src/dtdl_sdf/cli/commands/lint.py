"""
Lint command.
"""

import argparse
import json
import logging

from jsonschema.exceptions import SchemaError

from ...constants import ExitCode
from ...sdf.sdf_linter import SDFLinter, load_schema
from ..helpers import status, write_json
from .base import BaseCommand


logger = logging.getLogger(__name__)


class LintCommand(BaseCommand):
    """
    Lint one SDF file and print the result as JSON.

    Exit code is VALIDATION_ERROR when any check fails.
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            linter = SDFLinter(load_schema(args.schema) if args.schema else None)
        except FileNotFoundError as e:
            status(f"✗ Schema file not found: {e.filename}")
            return ExitCode.FILE_NOT_FOUND
        except (json.JSONDecodeError, SchemaError) as e:
            status(f"✗ Invalid JSON schema: {e}")
            return ExitCode.CONFIG_ERROR

        try:
            result = linter.lint_file(args.file)
        except FileNotFoundError as e:
            status(f"✗ File not found: {e.filename}")
            return ExitCode.FILE_NOT_FOUND

        write_json(result.to_dict())
        if result.is_valid:
            status(f"✓ {args.file}: no errors")
            return ExitCode.SUCCESS

        logger.debug(result.get_summary())
        status(f"✗ {args.file}: {result.error_count} error(s)")
        return ExitCode.VALIDATION_ERROR
