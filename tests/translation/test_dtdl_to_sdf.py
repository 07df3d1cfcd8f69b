"""
Tests for DTDL -> SDF conversion of single Interfaces.
"""

import json
import logging

import pytest

from dtdl_sdf.config import ConverterConfig
from dtdl_sdf.constants import SDFDefaults
from dtdl_sdf.dtdl import DTDLParser
from dtdl_sdf.exceptions import DocumentParseError, MalformedIdentifier, UnsupportedSchemaKind
from dtdl_sdf.sdf import SDFDocument
from dtdl_sdf.translation import DTDLToSDFConverter
from fixtures import (
    DTDL_WITH_MAP,
    DTDL_WITH_MULTIPLE_EXTENDS,
    DTDL_WITH_SINGLE_COMPONENT,
)

HEAD = SDFDefaults.NAMESPACE_HEAD


@pytest.fixture
def converter():
    return DTDLToSDFConverter()


class TestSingleInterface:
    """Tests for converting a plain Interface to one sdfObject."""

    def test_header(self, converter, simple_dtdl_interface):
        result = converter.convert(simple_dtdl_interface)

        assert result["info"] == {
            "title": "DTDL Thermostat",
            "version": "TBD",
            "copyright": "Copyright 2022",
            "license": "",
        }
        assert result["namespace"] == {
            "terms": SDFDefaults.TERMS_NAMESPACE,
            "example": HEAD + "dtmi/com/example",
        }
        assert result["defaultNamespace"] == "example"
        assert "sdfThing" not in result

    def test_affordances(self, converter, simple_dtdl_interface):
        thermostat = converter.convert(simple_dtdl_interface)["sdfObject"]["Thermostat"]

        assert thermostat["description"].startswith("Reports current temperature")
        assert thermostat["sdfProperty"]["targetTemperature"] == {
            "label": "targetTemperature",
            "description": "Allows to remotely specify the desired target temperature.",
            "type": "number",
            "unit": "Cel",
            "writable": True,
        }
        assert thermostat["sdfProperty"]["maxTempSinceLastReboot"]["writable"] is False
        assert thermostat["sdfEvent"]["temperature"] == {
            "label": "temperature",
            "description": "Temperature in degrees Celsius.",
            "type": "number",
            "unit": "Cel",
        }
        assert thermostat["sdfAction"]["getMaxMinReport"]["sdfInputData"] == ["#/sdfData/since"]
        assert list(thermostat["sdfData"]) == ["since", "maxTemp", "minTemp", "startTime"]

    def test_accepts_text_and_models(self, converter, simple_dtdl_interface):
        from_text = converter.convert(json.dumps(simple_dtdl_interface))
        interface = DTDLParser().load_interface(simple_dtdl_interface)
        from_model = converter.convert(interface)
        assert from_text == from_model

    def test_translate_returns_model(self, converter, simple_dtdl_interface):
        interface = DTDLParser().load_interface(simple_dtdl_interface)
        document = converter.translate(interface)
        assert isinstance(document, SDFDocument)
        assert list(document.objects) == ["Thermostat"]

    def test_telemetry_units_and_arrays(self, converter, dtdl_with_telemetry):
        events = converter.convert(dtdl_with_telemetry)["sdfObject"]["WeatherStation"]["sdfEvent"]

        assert events["humidity"]["unit"] == "%RH"
        assert "unit" not in events["pressure"]
        assert events["observedAt"] == {
            "label": "observedAt",
            "description": "Time of the last observation",
            "type": "string",
            "format": "date-time",
        }
        assert events["readings"] == {
            "label": "readings",
            "type": "array",
            "items": {"type": "number"},
        }

    def test_enums(self, converter, dtdl_with_enum):
        properties = converter.convert(dtdl_with_enum)["sdfObject"]["Fan"]["sdfProperty"]

        assert properties["state"] == {
            "label": "state", "type": "string", "enum": ["on", "off"], "writable": False,
        }
        assert properties["speed"]["sdfChoice"] == {
            "low": {},
            "high": {"description": "Maximum air flow"},
        }
        assert "enum" not in properties["speed"]

    def test_config_changes_header(self, simple_dtdl_interface):
        config = ConverterConfig(title_prefix="Converted", sdf_version="1.0", license="MIT")
        info = DTDLToSDFConverter(config).convert(simple_dtdl_interface)["info"]
        assert info["title"] == "Converted Thermostat"
        assert info["version"] == "1.0"
        assert info["license"] == "MIT"

    def test_empty_title_prefix(self, simple_dtdl_interface):
        info = DTDLToSDFConverter(ConverterConfig(title_prefix="")).convert(simple_dtdl_interface)["info"]
        assert info["title"] == "Thermostat"

    def test_command_data_clash_warns(self, converter, caplog):
        document = {
            "@id": "dtmi:com:example:Valve;1",
            "@type": "Interface",
            "contents": [
                {"@type": "Command", "name": "open", "request": {"name": "delay", "schema": "integer"}},
                {"@type": "Command", "name": "close", "request": {"name": "delay", "schema": "double"}},
            ],
        }

        with caplog.at_level(logging.WARNING):
            result = converter.convert(document)

        assert result["sdfObject"]["Valve"]["sdfData"]["delay"]["type"] == "number"
        assert "replaces an earlier definition" in caplog.text


class TestComposition:
    """Tests for Components, Relationships and extends."""

    def test_two_components_make_a_thing(self, converter, dtdl_with_component):
        result = converter.convert(dtdl_with_component)

        assert "sdfObject" not in result
        thing = result["sdfThing"]["TemperatureController"]
        assert thing["label"] == "Temperature Controller"
        assert thing["description"] == "Device with two thermostats and remote reboot."
        assert list(thing["sdfObject"]) == ["TemperatureController", "thermostat1", "deviceInformation"]
        assert thing["sdfObject"]["thermostat1"] == {
            "label": "thermostat1",
            "description": "Thermostat One of Two.",
            "sdfRef": "#/sdfObject/Thermostat",
        }
        assert thing["sdfObject"]["deviceInformation"] == {
            "label": "deviceInformation",
            "sdfRef": "#/sdfObject/DeviceInformation",
        }
        assert "reboot" in thing["sdfObject"]["TemperatureController"]["sdfAction"]

    def test_single_component_is_not_embedded(self, converter, caplog):
        with caplog.at_level(logging.INFO):
            result = converter.convert(DTDL_WITH_SINGLE_COMPONENT)

        assert list(result["sdfObject"]) == ["Room"]
        assert "sdfThing" not in result
        assert "single Component 'thermostat' is not embedded" in caplog.text

    def test_component_named_like_interface_is_renamed(self, converter, caplog):
        document = {
            "@id": "dtmi:com:example:Pump;1",
            "@type": "Interface",
            "contents": [
                {"@type": "Property", "name": "rate", "schema": "double"},
                {"@type": "Component", "name": "Pump", "schema": "dtmi:com:example:Motor;1"},
                {"@type": "Component", "name": "valve", "schema": "dtmi:com:example:Valve;1"},
            ],
        }

        with caplog.at_level(logging.WARNING):
            objects = converter.convert(document)["sdfThing"]["Pump"]["sdfObject"]

        assert list(objects) == ["Pump", "Pump_component", "valve"]
        assert "rate" in objects["Pump"]["sdfProperty"]
        assert objects["Pump_component"] == {"label": "Pump", "sdfRef": "#/sdfObject/Motor"}
        assert "emitting it as 'Pump_component'" in caplog.text

    def test_relationships(self, converter, dtdl_with_relationship):
        result = converter.convert(dtdl_with_relationship)
        relations = result["sdfObject"]["Building"]["sdfRelation"]

        assert relations["hasThermostat"] == {
            "description": "Thermostats installed in the building.",
            "relationType": "terms:relatedTo",
            "target": "#/sdfObject/Thermostat",
        }
        assert relations["servedBy"]["target"] == "utility:#/sdfObject/GridConnection"
        assert result["namespace"]["utility"] == HEAD + "dtmi/org/utility"

    def test_relationship_without_target(self, converter):
        document = {
            "@id": "dtmi:com:example:Node;1",
            "@type": "Interface",
            "contents": [{"@type": "Relationship", "name": "linkedTo"}],
        }
        relation = converter.convert(document)["sdfObject"]["Node"]["sdfRelation"]["linkedTo"]
        assert relation == {}

    def test_single_extends(self, converter, dtdl_with_inheritance):
        result = converter.convert(dtdl_with_inheritance)
        assert result["sdfObject"]["SmartThermostat"]["sdfRef"] == "#/sdfObject/Thermostat"

    def test_multiple_extends(self, converter):
        result = converter.convert(DTDL_WITH_MULTIPLE_EXTENDS)

        assert result["sdfObject"]["ComboSensor"]["sdfRef"] == [
            "#/sdfObject/Thermostat",
            "sensors:#/sdfObject/Hygrometer",
        ]
        assert list(result["namespace"]) == ["terms", "example", "sensors"]


class TestErrors:
    """Tests for conversion failures."""

    def test_map_schema(self, converter):
        with pytest.raises(UnsupportedSchemaKind, match="Map"):
            converter.convert(DTDL_WITH_MAP)

    def test_malformed_id(self, converter):
        with pytest.raises(MalformedIdentifier):
            converter.convert({"@id": "Thermostat", "@type": "Interface", "contents": []})

    def test_invalid_json(self, converter):
        with pytest.raises(DocumentParseError):
            converter.convert("not json", source="bad.json")

    def test_malformed_relationship_target(self, converter):
        document = {
            "@id": "dtmi:com:example:Node;1",
            "@type": "Interface",
            "contents": [{"@type": "Relationship", "name": "r", "target": "nowhere"}],
        }
        with pytest.raises(MalformedIdentifier):
            converter.convert(document)
