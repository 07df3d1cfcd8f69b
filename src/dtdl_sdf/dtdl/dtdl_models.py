"""
DTDL Data Models

This module defines the data classes representing DTDL elements.
These classes provide a typed, in-memory representation of parsed DTDL
documents and are also used to build the Interfaces produced from SDF.

Based on DTDL v2 specification:
https://github.com/Azure/opendigitaltwins-dtdl/blob/master/DTDL/v2/dtdlv2.md
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Union


LocalizedText = Union[str, Dict[str, str]]


def resolve_localized(value: Optional[LocalizedText]) -> Optional[str]:
    """
    Reduce a DTDL localizable string to plain text.

    Language maps resolve to their English entry, falling back to the
    first listed language.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if not value:
        return None
    return value.get("en", next(iter(value.values())))


# =============================================================================
# DTDL Context
# =============================================================================

@dataclass
class DTDLContext:
    """The @context of an Interface: DTDL version plus extension contexts."""
    dtdl_version: int
    extensions: List[str] = field(default_factory=list)
    raw_context: Union[str, List[str]] = ""

    @classmethod
    def from_json(cls, context: Union[str, List[str]]) -> 'DTDLContext':
        """Parse @context from JSON (string or array of strings)."""
        contexts = [context] if isinstance(context, str) else list(context)

        version = 0
        extensions = []
        for ctx in contexts:
            if not isinstance(ctx, str):
                continue
            if ctx.startswith("dtmi:dtdl:context;"):
                version_str = ctx.split(";")[-1].split("#")[0]
                version = int(version_str) if version_str.isdigit() else 0
            elif ctx.startswith("dtmi:"):
                extensions.append(ctx)

        return cls(dtdl_version=version, extensions=extensions, raw_context=context)


# =============================================================================
# Complex Schema Types
# =============================================================================

@dataclass
class DTDLEnumValue:
    """One enum member. ``value`` is the on-the-wire value; SDF only carries strings."""
    name: str
    value: Union[int, str]
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "enumValue": self.value,
        }
        if self.display_name:
            result["displayName"] = self.display_name
        if self.description:
            result["description"] = self.description
        return result


@dataclass
class DTDLEnum:
    """
    An Enum schema.

    ``value_schema`` is kept as written; only ``string`` enums can be
    expressed in SDF and the translator rejects the others.
    """
    value_schema: str
    enum_values: List[DTDLEnumValue] = field(default_factory=list)
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "Enum",
            "valueSchema": self.value_schema,
            "enumValues": [ev.to_dict() for ev in self.enum_values],
        }


@dataclass
class DTDLField:
    """A Field in a DTDL Object schema. ``schema`` may be absent."""
    name: str
    schema: Optional['DTDLSchema'] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.schema is not None:
            result["schema"] = schema_to_json(self.schema)
        if self.description:
            result["description"] = self.description
        return result


@dataclass
class DTDLObject:
    """An Object schema; fields become sdfData items of a Command."""
    fields: List[DTDLField] = field(default_factory=list)
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "Object",
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class DTDLArray:
    """An Array schema."""
    element_schema: 'DTDLSchema'
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "Array",
            "elementSchema": schema_to_json(self.element_schema),
        }


@dataclass
class DTDLMap:
    """
    A Map schema.

    Maps are parsed so they can be reported precisely; SDF has no
    equivalent construct.
    """
    key_name: str
    value_name: str
    value_schema: 'DTDLSchema'
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@type": "Map",
            "mapKey": {"name": self.key_name, "schema": "string"},
            "mapValue": {"name": self.value_name, "schema": schema_to_json(self.value_schema)},
        }


# Type alias for any schema
DTDLSchema = Union[str, DTDLObject, DTDLArray, DTDLEnum, DTDLMap]


def schema_to_json(schema: DTDLSchema) -> Union[str, Dict[str, Any]]:
    """Serialize a schema: primitives stay strings, complex schemas become dicts."""
    if isinstance(schema, str):
        return schema
    return schema.to_dict()


def _type_value(base_type: str, semantic_types: List[str]) -> Union[str, List[str]]:
    """@type is a plain string unless semantic types are attached."""
    if semantic_types:
        return [base_type, *semantic_types]
    return base_type


# =============================================================================
# Interface Content Types
# =============================================================================

@dataclass
class DTDLProperty:
    """
    A Property: device state, read-only unless ``writable``. Maps to sdfProperty.

    Attributes:
        name: The programming name (required)
        schema: The data type (``None`` when the source declared none)
        writable: Whether the property is writable (default: False)
        semantic_types: Extra @type entries such as ``Temperature``
        unit: DTDL unit name, only meaningful with a semantic type
    """
    name: str
    schema: Optional[DTDLSchema]
    writable: bool = False
    dtmi: Optional[str] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None
    semantic_types: List[str] = field(default_factory=list)
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@type": _type_value("Property", self.semantic_types),
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.schema is not None:
            result["schema"] = schema_to_json(self.schema)
        if self.unit:
            result["unit"] = self.unit
        if self.writable:
            result["writable"] = True
        return result


@dataclass
class DTDLTelemetry:
    """A Telemetry stream. Maps to sdfEvent."""
    name: str
    schema: Optional[DTDLSchema]
    dtmi: Optional[str] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None
    semantic_types: List[str] = field(default_factory=list)
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@type": _type_value("Telemetry", self.semantic_types),
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.schema is not None:
            result["schema"] = schema_to_json(self.schema)
        if self.unit:
            result["unit"] = self.unit
        return result


@dataclass
class DTDLRelationship:
    """A Relationship to another Interface (``target`` DTMI, any when unset). Maps to sdfRelation."""
    name: str
    target: Optional[str] = None
    dtmi: Optional[str] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@type": "Relationship",
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.target:
            result["target"] = self.target
        return result


@dataclass
class DTDLComponent:
    """
    A Component embedding the Interface named by ``schema``.

    Two or more Components turn the converted Interface into an sdfThing.
    """
    name: str
    schema: str
    dtmi: Optional[str] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@type": "Component",
            "name": self.name,
            "schema": self.schema,
        }
        if self.description:
            result["description"] = self.description
        return result


@dataclass
class DTDLCommandPayload:
    """Command request or response."""
    name: str
    schema: Optional[DTDLSchema]
    nullable: bool = False
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.display_name:
            result["displayName"] = self.display_name
        if self.description:
            result["description"] = self.description
        if self.schema is not None:
            result["schema"] = schema_to_json(self.schema)
        if self.nullable:
            result["nullable"] = True
        return result


@dataclass
class DTDLCommand:
    """A Command with optional request and response payloads. Maps to sdfAction."""
    name: str
    request: Optional[DTDLCommandPayload] = None
    response: Optional[DTDLCommandPayload] = None
    dtmi: Optional[str] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None
    semantic_types: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "@type": _type_value("Command", self.semantic_types),
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.request:
            result["request"] = self.request.to_dict()
        if self.response:
            result["response"] = self.response.to_dict()
        return result


# Type alias for Interface contents
DTDLContent = Union[DTDLProperty, DTDLTelemetry, DTDLRelationship, DTDLComponent, DTDLCommand]


# =============================================================================
# Interface (Top-level DTDL Element)
# =============================================================================

@dataclass
class DTDLInterface:
    """
    A DTDL Interface, the unit of conversion in both directions.

    Attributes:
        dtmi: The @id
        contents: Properties, Telemetries, Commands, Relationships and Components
        extends: DTMIs of parent Interfaces, in declaration order
        source_file: Where the Interface was read from, for messages
    """
    dtmi: str
    contents: List[DTDLContent] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    context: Optional[DTDLContext] = None
    display_name: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    comment: Optional[str] = None
    source_file: Optional[str] = None

    @property
    def components(self) -> List[DTDLComponent]:
        """Embedded Interfaces, in declaration order."""
        return [c for c in self.contents if isinstance(c, DTDLComponent)]

    @property
    def name(self) -> str:
        """Short name of the DTMI: ``dtmi:com:example:Thermostat;1`` -> ``Thermostat``."""
        return self.dtmi.split(";")[0].split(":")[-1]

    @property
    def resolved_display_name(self) -> str:
        """displayName as plain text, else the short name."""
        return resolve_localized(self.display_name) or self.name

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.context:
            result["@context"] = self.context.raw_context
        result["@id"] = self.dtmi
        result["@type"] = "Interface"
        if self.display_name:
            result["displayName"] = self.display_name
        if self.description:
            result["description"] = self.description
        if self.comment:
            result["comment"] = self.comment
        if self.extends:
            result["extends"] = self.extends if len(self.extends) > 1 else self.extends[0]
        result["contents"] = [c.to_dict() for c in self.contents]
        return result

    def __repr__(self) -> str:
        return f"DTDLInterface(dtmi='{self.dtmi}', name='{self.name}')"
