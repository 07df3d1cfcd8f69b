"""
Round-trip tests across both conversion directions.

Each test converts a model into the other dialect and back, checking the
properties that survive the trip and the documented losses.
"""

import pytest

from dtdl_sdf.exceptions import UnsupportedSchemaKind
from dtdl_sdf.translation import DTDLToSDFConverter, SDFToDTDLConverter
from fixtures import SDF_CHOICE_DOCUMENT, SDF_INTEGER_CHOICE_DOCUMENT, SDF_WITH_UNKNOWN_UNIT


pytestmark = pytest.mark.integration


@pytest.fixture
def to_sdf():
    return DTDLToSDFConverter()


@pytest.fixture
def to_dtdl():
    return SDFToDTDLConverter()


def _single_property(body):
    """SDF document with one Object holding one Property."""
    return {
        "info": {"title": "Sensor", "version": "1", "copyright": "", "license": ""},
        "sdfObject": {"Sensor": {"sdfProperty": {"p": body}}},
    }


def _sdf_round_trip(document, to_sdf, to_dtdl):
    interfaces = to_dtdl.convert(document)
    assert len(interfaces) == 1
    return to_sdf.convert(interfaces[0])


class TestSDFRoundTrip:
    """SDF -> DTDL -> SDF."""

    @pytest.mark.parametrize("qualities", [
        {"type": "boolean"},
        {"type": "number"},
        {"type": "integer"},
        {"type": "string"},
        {"type": "string", "format": "date-time"},
        {"type": "string", "format": "uuid"},
        {"type": "string", "sdfType": "byte-string"},
    ])
    def test_primitive_type_survives(self, to_sdf, to_dtdl, qualities):
        result = _sdf_round_trip(_single_property(dict(qualities)), to_sdf, to_dtdl)

        prop = result["sdfObject"]["Sensor"]["sdfProperty"]["p"]
        assert {k: prop[k] for k in ("type", "format", "sdfType") if k in prop} == qualities

    def test_implicit_writable_becomes_explicit(self, to_sdf, to_dtdl):
        interface = to_dtdl.convert(_single_property({"type": "number"}))[0]
        assert interface["contents"][0]["writable"] is True

        result = to_sdf.convert(interface)
        assert result["sdfObject"]["Sensor"]["sdfProperty"]["p"]["writable"] is True

    def test_read_only_survives(self, to_sdf, to_dtdl):
        result = _sdf_round_trip(_single_property({"type": "number", "writable": False}), to_sdf, to_dtdl)
        assert result["sdfObject"]["Sensor"]["sdfProperty"]["p"]["writable"] is False

    def test_described_choice_survives(self, to_sdf, to_dtdl):
        result = _sdf_round_trip(SDF_CHOICE_DOCUMENT, to_sdf, to_dtdl)
        speed = result["sdfObject"]["Fan"]["sdfProperty"]["speed"]

        assert speed["type"] == "string"
        assert speed["sdfChoice"] == {"low": {}, "high": {"description": "Maximum air flow"}}

    def test_undescribed_values_stay_enum(self, to_sdf, to_dtdl):
        result = _sdf_round_trip(SDF_CHOICE_DOCUMENT, to_sdf, to_dtdl)
        state = result["sdfObject"]["Fan"]["sdfProperty"]["state"]

        assert state["enum"] == ["on", "off"]
        assert "sdfChoice" not in state

    def test_integer_choice_does_not_return(self, to_sdf, to_dtdl):
        interface = to_dtdl.convert(SDF_INTEGER_CHOICE_DOCUMENT)[0]
        assert interface["contents"][0]["schema"]["valueSchema"] == "integer"

        with pytest.raises(UnsupportedSchemaKind, match="integer"):
            to_sdf.convert(interface)

    def test_unknown_unit_is_omitted(self, to_sdf, to_dtdl):
        interface = to_dtdl.convert(SDF_WITH_UNKNOWN_UNIT)[0]
        distance, temperature = interface["contents"]

        assert distance["@type"] == "Property"
        assert "unit" not in distance
        assert temperature["unit"] == "degreeCelsius"

        properties = to_sdf.convert(interface)["sdfObject"]["Meter"]["sdfProperty"]
        assert "unit" not in properties["distance"]
        assert properties["temperature"]["unit"] == "Cel"

    def test_array_property_is_flattened(self, to_sdf, to_dtdl):
        body = {"type": "array", "items": {"type": "integer"}}
        result = _sdf_round_trip(_single_property(body), to_sdf, to_dtdl)
        assert result["sdfObject"]["Sensor"]["sdfProperty"]["p"]["type"] == "integer"


class TestDTDLRoundTrip:
    """DTDL -> SDF -> DTDL."""

    def test_identifier_survives(self, to_sdf, to_dtdl, simple_dtdl_interface):
        interfaces = to_dtdl.convert(to_sdf.convert(simple_dtdl_interface))
        assert [i["@id"] for i in interfaces] == ["dtmi:com:example:Thermostat;1"]

    def test_contents_survive(self, to_sdf, to_dtdl, simple_dtdl_interface):
        interface = to_dtdl.convert(to_sdf.convert(simple_dtdl_interface))[0]
        by_name = {c["name"]: c for c in interface["contents"]}

        assert by_name["targetTemperature"] == {
            "@type": ["Property", "Temperature"],
            "name": "targetTemperature",
            "description": "Allows to remotely specify the desired target temperature.",
            "schema": "double",
            "unit": "degreeCelsius",
            "writable": True,
        }
        assert "writable" not in by_name["maxTempSinceLastReboot"]
        assert by_name["temperature"]["@type"] == ["Telemetry", "Temperature"]
        assert by_name["getMaxMinReport"]["request"]["schema"] == "dateTime"

    def test_object_response_fields_survive(self, to_sdf, to_dtdl, simple_dtdl_interface):
        interface = to_dtdl.convert(to_sdf.convert(simple_dtdl_interface))[0]
        command = next(c for c in interface["contents"] if c["@type"] == "Command")

        fields = command["response"]["schema"]["fields"]
        assert [(f["name"], f["schema"]) for f in fields] == [
            ("maxTemp", "double"), ("minTemp", "double"), ("startTime", "dateTime"),
        ]

    def test_enum_kinds_survive(self, to_sdf, to_dtdl, dtdl_with_enum):
        interface = to_dtdl.convert(to_sdf.convert(dtdl_with_enum))[0]
        state, speed = interface["contents"]

        assert state["schema"]["enumValues"] == [
            {"name": "on", "enumValue": "on"},
            {"name": "off", "enumValue": "off"},
        ]
        assert "writable" not in state
        assert speed["schema"]["enumValues"][1]["description"] == "Maximum air flow"
        assert speed["writable"] is True

    def test_relationship_targets_survive(self, to_sdf, to_dtdl, dtdl_with_relationship):
        interface = to_dtdl.convert(to_sdf.convert(dtdl_with_relationship))[0]
        targets = [c["target"] for c in interface["contents"] if c["@type"] == "Relationship"]

        assert targets == ["dtmi:com:example:Thermostat;1", "dtmi:org:utility:GridConnection;1"]

    def test_extends_survives(self, to_sdf, to_dtdl, dtdl_with_inheritance):
        interface = to_dtdl.convert(to_sdf.convert(dtdl_with_inheritance))[0]
        assert interface["extends"] == "dtmi:com:example:Thermostat;1"

    def test_components_survive(self, to_sdf, to_dtdl, dtdl_with_component):
        interfaces = to_dtdl.convert(to_sdf.convert(dtdl_with_component))
        controller = interfaces[0]

        components = [c for c in controller["contents"] if c["@type"] == "Component"]
        assert [c["name"] for c in components] == [
            "TemperatureController", "thermostat1", "deviceInformation",
        ]

    def test_interface_ids_are_unique(self, to_sdf, to_dtdl, dtdl_with_component):
        interfaces = to_dtdl.convert(to_sdf.convert(dtdl_with_component))
        ids = [i["@id"] for i in interfaces]

        assert len(ids) == len(set(ids))
        assert ids[0] == "dtmi:org:onedm:playground:sdfthing:TemperatureController;1"
        assert "dtmi:com:example:TemperatureController;1" in ids
