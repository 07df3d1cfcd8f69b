"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Multi-module and CLI tests

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import copy
import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    # DTDL fixtures
    SIMPLE_DTDL_INTERFACE,
    DEVICE_INFORMATION_INTERFACE,
    DTDL_WITH_COMPONENT,
    DTDL_WITH_RELATIONSHIP,
    DTDL_WITH_INHERITANCE,
    DTDL_WITH_ENUM,
    DTDL_WITH_TELEMETRY,

    # SDF fixtures
    SDF_OBJECT_DOCUMENT,
    SDF_THING_DOCUMENT,
    THING_SKELETON,

    # Config fixtures
    SAMPLE_CONFIG,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Multi-module and CLI tests")


# =============================================================================
# DTDL Fixtures
# =============================================================================

@pytest.fixture
def simple_dtdl_interface():
    """Thermostat Interface with telemetry, properties and a command."""
    return copy.deepcopy(SIMPLE_DTDL_INTERFACE)


@pytest.fixture
def device_information_interface():
    """Plain Interface used as a Component target."""
    return copy.deepcopy(DEVICE_INFORMATION_INTERFACE)


@pytest.fixture
def dtdl_with_component():
    """Interface embedding two Components."""
    return copy.deepcopy(DTDL_WITH_COMPONENT)


@pytest.fixture
def dtdl_with_relationship():
    """Interface with relationships into two namespaces."""
    return copy.deepcopy(DTDL_WITH_RELATIONSHIP)


@pytest.fixture
def dtdl_with_inheritance():
    """Interface with a single extends."""
    return copy.deepcopy(DTDL_WITH_INHERITANCE)


@pytest.fixture
def dtdl_with_enum():
    """Interface with described and undescribed enums."""
    return copy.deepcopy(DTDL_WITH_ENUM)


@pytest.fixture
def dtdl_with_telemetry():
    """Interface with semantic-typed telemetry."""
    return copy.deepcopy(DTDL_WITH_TELEMETRY)


@pytest.fixture
def temp_dtdl_file(tmp_path, simple_dtdl_interface):
    """Create a temporary DTDL JSON file for testing."""
    dtdl_file = tmp_path / "thermostat.json"
    dtdl_file.write_text(json.dumps(simple_dtdl_interface, indent=2))
    return str(dtdl_file)


# =============================================================================
# SDF Fixtures
# =============================================================================

@pytest.fixture
def sdf_object_document():
    """sdfObject document with properties, actions, events and data."""
    return copy.deepcopy(SDF_OBJECT_DOCUMENT)


@pytest.fixture
def sdf_thing_document():
    """sdfThing with objects and a nested thing."""
    return copy.deepcopy(SDF_THING_DOCUMENT)


@pytest.fixture
def thing_skeleton():
    """Header-only document for the composer."""
    return copy.deepcopy(THING_SKELETON)


@pytest.fixture
def temp_sdf_file(tmp_path, sdf_object_document):
    """Create a temporary, correctly named SDF file for testing."""
    sdf_file = tmp_path / "sdfobject-switch.sdf.json"
    sdf_file.write_text(json.dumps(sdf_object_document, indent=2))
    return str(sdf_file)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample converter configuration dictionary."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)
