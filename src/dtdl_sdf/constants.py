"""
Centralized configuration constants for the DTDL/SDF converter.

This module provides a single source of truth for the default values,
identifier prefixes and naming rules used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 5


# ============================================================================
# SDF Output Defaults
# ============================================================================

class SDFDefaults:
    """Header and namespace defaults for generated SDF documents."""

    TITLE_PREFIX: Final[str] = "DTDL"
    """Prefix of info.title; the Interface short name follows it."""

    VERSION: Final[str] = "TBD"

    COPYRIGHT: Final[str] = "Copyright 2022"

    LICENSE: Final[str] = ""

    NAMESPACE_HEAD: Final[str] = "https://onedm.example.com/"
    """URI head that namespace paths are appended to."""

    TERMS_PREFIX: Final[str] = "terms"

    TERMS_NAMESPACE: Final[str] = "https://example.com/relations-terms"

    RELATION_TYPE: Final[str] = "relatedTo"
    """Term (in the terms namespace) used for every translated Relationship."""


# ============================================================================
# DTDL Output Defaults
# ============================================================================

class DTDLDefaults:
    """Header defaults for generated DTDL Interfaces."""

    CONTEXT: Final[str] = "dtmi:dtdl:context;2"

    ID_PREFIX: Final[str] = "dtmi:org:onedm:playground:"

    VERSION: Final[str] = "1"

    INTERFACE_TYPE: Final[str] = "Interface"

    MAX_DESCRIPTION_LENGTH: Final[int] = 511
    """DTDL limits description strings to 512 characters."""

    OBJECT_SEGMENT: Final[str] = "sdfobject"

    THING_SEGMENT: Final[str] = "sdfthing"

    NAME_FIX_PATTERN: Final[str] = r"\W"

    NAME_FIX_CHAR: Final[str] = "_"


# ============================================================================
# File Naming
# ============================================================================

class FileNames:
    """SDF file naming conventions."""

    THING_PREFIX: Final[str] = "sdfthing-"

    SDF_SUFFIX: Final[str] = ".sdf.json"

    SDF_FILENAME_PATTERN: Final[str] = r"^sdf(object|thing|data)-[a-z0-9_.-]*\.sdf\.json$"

    INVALID_CHARS_PATTERN: Final[str] = r"[^\x00-\x7F]"

    DEFAULT_SCHEMA: Final[str] = "sdf-validation.json"
    """Bundled JSON Schema used by the linter."""


# ============================================================================
# Logging Configuration
# ============================================================================

class LoggingConfig:
    """Logging configuration constants."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

    DEFAULT_FORMAT_STYLE: Final[str] = "text"

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")

    DEFAULT_LOG_FILENAME: Final[str] = "dtdl_sdf.log"

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5

    ROTATION_ENABLED: Final[bool] = True
