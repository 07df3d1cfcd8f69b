"""
Tests for configuration loading.
"""

import json

import pytest

from dtdl_sdf.config import ConverterConfig, load_config, load_converter_config
from dtdl_sdf.constants import DTDLDefaults, SDFDefaults
from fixtures import MINIMAL_CONFIG, SAMPLE_CONFIG


class TestConverterConfig:
    """Tests for ConverterConfig."""

    def test_defaults(self):
        config = ConverterConfig()
        assert config.title_prefix == SDFDefaults.TITLE_PREFIX
        assert config.namespace_head == SDFDefaults.NAMESPACE_HEAD
        assert config.id_prefix == DTDLDefaults.ID_PREFIX
        assert config.dtdl_version == DTDLDefaults.VERSION
        assert config.logging == {}

    def test_from_dict(self):
        config = ConverterConfig.from_dict(SAMPLE_CONFIG)

        assert config.title_prefix == "Converted"
        assert config.sdf_version == "1.0"
        assert config.copyright == "Copyright 2024 Example"
        assert config.license == "BSD-3-Clause"
        assert config.id_prefix == "dtmi:com:example:generated:"
        assert config.dtdl_version == "2"
        assert config.dtdl_context == DTDLDefaults.CONTEXT
        assert config.logging == {"level": "DEBUG", "format": "json"}

    def test_from_empty_dict(self):
        assert ConverterConfig.from_dict(MINIMAL_CONFIG) == ConverterConfig()

    def test_unknown_sections_are_ignored(self):
        config = ConverterConfig.from_dict({"fabric": {"workspace": "x"}, "sdf": {"license": "MIT"}})
        assert config.license == "MIT"


class TestLoadConfig:
    """Tests for load_config and load_converter_config."""

    def test_load(self, temp_config_file):
        assert load_config(temp_config_file) == SAMPLE_CONFIG

    def test_empty_path(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            load_config("")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"sdf": ')
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)

    def test_load_converter_config(self, temp_config_file):
        assert load_converter_config(temp_config_file).title_prefix == "Converted"

    def test_load_converter_config_defaults(self):
        assert load_converter_config() == ConverterConfig()
