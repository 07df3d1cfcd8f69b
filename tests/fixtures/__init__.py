"""
Centralized test fixtures for the DTDL/SDF converter test suite.

This package provides reusable fixtures for testing, including:
- DTDL Interface documents
- SDF object and thing documents
- Configuration dictionaries

Usage:
    from fixtures import SIMPLE_DTDL_INTERFACE, SDF_OBJECT_DOCUMENT

Or use the pytest fixtures in conftest.py which import from here.
"""

from .dtdl_fixtures import (
    SIMPLE_DTDL_INTERFACE,
    DEVICE_INFORMATION_INTERFACE,
    DTDL_WITH_COMPONENT,
    DTDL_WITH_SINGLE_COMPONENT,
    DTDL_WITH_RELATIONSHIP,
    DTDL_WITH_INHERITANCE,
    DTDL_WITH_MULTIPLE_EXTENDS,
    DTDL_WITH_ENUM,
    DTDL_WITH_TELEMETRY,
    DTDL_WITH_MAP,
)

from .sdf_fixtures import (
    SDF_OBJECT_DOCUMENT,
    SDF_CHOICE_DOCUMENT,
    SDF_INTEGER_CHOICE_DOCUMENT,
    SDF_WITH_UNKNOWN_UNIT,
    SDF_WITH_RELATIONS,
    SDF_THING_DOCUMENT,
    THING_SKELETON,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    MINIMAL_CONFIG,
)

__all__ = [
    # DTDL
    'SIMPLE_DTDL_INTERFACE',
    'DEVICE_INFORMATION_INTERFACE',
    'DTDL_WITH_COMPONENT',
    'DTDL_WITH_SINGLE_COMPONENT',
    'DTDL_WITH_RELATIONSHIP',
    'DTDL_WITH_INHERITANCE',
    'DTDL_WITH_MULTIPLE_EXTENDS',
    'DTDL_WITH_ENUM',
    'DTDL_WITH_TELEMETRY',
    'DTDL_WITH_MAP',
    # SDF
    'SDF_OBJECT_DOCUMENT',
    'SDF_CHOICE_DOCUMENT',
    'SDF_INTEGER_CHOICE_DOCUMENT',
    'SDF_WITH_UNKNOWN_UNIT',
    'SDF_WITH_RELATIONS',
    'SDF_THING_DOCUMENT',
    'THING_SKELETON',
    # Config
    'SAMPLE_CONFIG',
    'MINIMAL_CONFIG',
]
