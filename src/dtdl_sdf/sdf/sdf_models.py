"""
SDF Data Models

Typed, in-memory representation of Semantic Definition Format documents.

Type information is held in a closed set of descriptor variants
(``TypeDescriptor``). The parser decides the variant once, from the
presence of ``sdfChoice``/``enum``/``type`` keywords, so translation code
dispatches on the variant class instead of probing raw dictionaries.

Reference: https://ietf-wg-asdf.github.io/SDF/sdf.html
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# =============================================================================
# Type Descriptors
# =============================================================================

@dataclass
class PrimitiveType:
    """
    A primitive data type.

    Attributes:
        type: boolean, number, integer or string (other names are kept so
            they can be reported as unknown)
        format: JSON-schema string format such as ``date-time``
        sdf_type: SDF semantic sub-type (``byte-string`` or ``unix-time``)
    """
    type: str
    format: Optional[str] = None
    sdf_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type}
        if self.format:
            result["format"] = self.format
        if self.sdf_type:
            result["sdfType"] = self.sdf_type
        return result


@dataclass
class EnumerationType:
    """Ordered list of allowed values with no per-value descriptions."""
    values: List[Union[str, int]]
    base: str = "string"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.base, "enum": list(self.values)}


@dataclass
class ChoiceType:
    """Allowed values, each with an optional description."""
    choices: Dict[str, Optional[str]]
    base: str = "string"

    @property
    def has_descriptions(self) -> bool:
        return any(self.choices.values())

    def to_dict(self) -> Dict[str, Any]:
        choices: Dict[str, Any] = {}
        for value, description in self.choices.items():
            choices[value] = {"description": description} if description else {}
        return {"type": self.base, "sdfChoice": choices}


@dataclass
class ObjectField:
    """One named member of an object type. ``type`` is None for label-only fields."""
    name: str
    type: Optional['TypeDescriptor'] = None
    label: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.type is not None:
            result.update(self.type.to_dict())
        elif self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        return result


@dataclass
class ObjectType:
    """Named map of field name to field type."""
    fields: List[ObjectField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {f.name: f.to_dict() for f in self.fields},
        }


@dataclass
class ReferenceType:
    """A type given by reference to another definition (``sdfRef``)."""
    ref: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sdfRef": self.ref}


@dataclass
class ArrayType:
    """Array of primitive or referenced elements; nested arrays are not modelled."""
    items: Union[PrimitiveType, ReferenceType]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "array", "items": self.items.to_dict()}


TypeDescriptor = Union[PrimitiveType, EnumerationType, ChoiceType, ObjectType, ArrayType, ReferenceType]


# =============================================================================
# Affordances
# =============================================================================

@dataclass
class SDFData:
    """
    An sdfData item: a named, reusable data definition.

    Also the base of the other affordances, which share its qualities.
    """
    name: str
    label: Optional[str] = None
    description: Optional[str] = None
    unit: Optional[str] = None
    data_type: Optional[TypeDescriptor] = None

    def _common_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        if self.data_type is not None:
            result.update(self.data_type.to_dict())
        if self.unit:
            result["unit"] = self.unit
        return result

    def to_dict(self) -> Dict[str, Any]:
        return self._common_dict()


@dataclass
class SDFProperty(SDFData):
    """
    An sdfProperty.

    ``writable`` is None when the source omits it; SDF reads that as true.
    """
    writable: Optional[bool] = None

    @property
    def is_writable(self) -> bool:
        return self.writable is None or self.writable

    def to_dict(self) -> Dict[str, Any]:
        result = self._common_dict()
        if self.writable is not None:
            result["writable"] = self.writable
        return result


@dataclass
class SDFEvent(SDFData):
    """An sdfEvent; its data qualities describe the emitted value."""


@dataclass
class SDFAction:
    """
    An sdfAction.

    Input and output data are either references (``#/sdfData/<name>``) or
    inline data definitions.
    """
    name: str
    label: Optional[str] = None
    description: Optional[str] = None
    input_data: List[Union[str, SDFData]] = field(default_factory=list)
    output_data: List[Union[str, SDFData]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        if self.input_data:
            result["sdfInputData"] = [_slot_to_json(d) for d in self.input_data]
        if self.output_data:
            result["sdfOutputData"] = [_slot_to_json(d) for d in self.output_data]
        return result


def _slot_to_json(slot: Union[str, SDFData]) -> Any:
    return slot if isinstance(slot, str) else slot.to_dict()


@dataclass
class SDFRelation:
    """An sdfRelation pointing at another definition."""
    name: str
    relation_type: Optional[str] = None
    target: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        if self.relation_type:
            result["relationType"] = self.relation_type
        if self.target:
            result["target"] = self.target
        return result


# =============================================================================
# Composition Nodes
# =============================================================================

def _refs_to_json(refs: List[str]) -> Union[str, List[str]]:
    return refs[0] if len(refs) == 1 else list(refs)


@dataclass
class SDFObject:
    """
    An sdfObject.

    ``sdf_ref`` lists inherited definitions; a Thing's component entries
    are Objects holding only a label and a reference.
    """
    name: str
    label: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, SDFProperty] = field(default_factory=dict)
    actions: Dict[str, SDFAction] = field(default_factory=dict)
    events: Dict[str, SDFEvent] = field(default_factory=dict)
    data: Dict[str, SDFData] = field(default_factory=dict)
    relations: Dict[str, SDFRelation] = field(default_factory=dict)
    sdf_ref: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        if self.sdf_ref:
            result["sdfRef"] = _refs_to_json(self.sdf_ref)
        if self.properties:
            result["sdfProperty"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.actions:
            result["sdfAction"] = {k: v.to_dict() for k, v in self.actions.items()}
        if self.events:
            result["sdfEvent"] = {k: v.to_dict() for k, v in self.events.items()}
        if self.relations:
            result["sdfRelation"] = {k: v.to_dict() for k, v in self.relations.items()}
        if self.data:
            result["sdfData"] = {k: v.to_dict() for k, v in self.data.items()}
        return result


@dataclass
class SDFThing:
    """
    An sdfThing: a group of Objects and nested Things.

    Nesting is a tree. Nothing checks for cycles; a cyclic structure
    cannot be produced by the parser, which only reads JSON trees.
    """
    name: str
    label: Optional[str] = None
    description: Optional[str] = None
    objects: Dict[str, SDFObject] = field(default_factory=dict)
    things: Dict[str, 'SDFThing'] = field(default_factory=dict)
    properties: Dict[str, SDFProperty] = field(default_factory=dict)
    actions: Dict[str, SDFAction] = field(default_factory=dict)
    events: Dict[str, SDFEvent] = field(default_factory=dict)
    data: Dict[str, SDFData] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.label:
            result["label"] = self.label
        if self.description:
            result["description"] = self.description
        if self.properties:
            result["sdfProperty"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.actions:
            result["sdfAction"] = {k: v.to_dict() for k, v in self.actions.items()}
        if self.events:
            result["sdfEvent"] = {k: v.to_dict() for k, v in self.events.items()}
        if self.data:
            result["sdfData"] = {k: v.to_dict() for k, v in self.data.items()}
        if self.objects:
            result["sdfObject"] = {k: v.to_dict() for k, v in self.objects.items()}
        if self.things:
            result["sdfThing"] = {k: v.to_dict() for k, v in self.things.items()}
        return result


CompositionNode = Union[SDFObject, SDFThing]


# =============================================================================
# Document
# =============================================================================

@dataclass
class SDFInfo:
    """The ``info`` block of an SDF document."""
    title: str = ""
    version: str = ""
    copyright: str = ""
    license: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "version": self.version,
            "copyright": self.copyright,
            "license": self.license,
        }


@dataclass
class SDFDocument:
    """A complete SDF document."""
    info: SDFInfo = field(default_factory=SDFInfo)
    namespace: Dict[str, str] = field(default_factory=dict)
    default_namespace: Optional[str] = None
    objects: Dict[str, SDFObject] = field(default_factory=dict)
    things: Dict[str, SDFThing] = field(default_factory=dict)
    data: Dict[str, SDFData] = field(default_factory=dict)
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"info": self.info.to_dict()}
        if self.namespace:
            result["namespace"] = dict(self.namespace)
        if self.default_namespace:
            result["defaultNamespace"] = self.default_namespace
        if self.things:
            result["sdfThing"] = {k: v.to_dict() for k, v in self.things.items()}
        if self.objects:
            result["sdfObject"] = {k: v.to_dict() for k, v in self.objects.items()}
        if self.data:
            result["sdfData"] = {k: v.to_dict() for k, v in self.data.items()}
        return result
