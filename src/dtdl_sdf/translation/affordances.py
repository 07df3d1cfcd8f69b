"""
Affordance Translator

Converts one leaf definition between the dialects: a DTDL Property,
Telemetry or Command into an sdfProperty, sdfEvent or sdfAction (plus its
sdfData items), and back.

Documented losses:
- Arrays inside an SDF Property collapse to their item schema, because
  DTDL Properties only take the flattened element type here.
- Enumerations whose members carry no description come back from DTDL as
  a bare ``enum`` list; any description forces ``sdfChoice``.
- Unmapped units are dropped; unmapped primitive names become
  ``unknown (<name>)``.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from ..config import ConverterConfig
from ..constants import DTDLDefaults
from ..exceptions import UnsupportedSchemaKind
from ..dtdl.dtdl_models import (
    DTDLArray,
    DTDLCommand,
    DTDLCommandPayload,
    DTDLEnum,
    DTDLEnumValue,
    DTDLField,
    DTDLMap,
    DTDLObject,
    DTDLProperty,
    DTDLSchema,
    DTDLTelemetry,
    LocalizedText,
    resolve_localized,
)
from ..sdf.sdf_models import (
    ArrayType,
    ChoiceType,
    EnumerationType,
    ObjectField,
    ObjectType,
    PrimitiveType,
    ReferenceType,
    SDFAction,
    SDFData,
    SDFEvent,
    SDFProperty,
    TypeDescriptor,
)
from .identifiers import fix_name, parse_reference
from .type_tables import (
    SDF_TYPE_TO_DTDL_SCHEMA,
    dtdl_schema_to_sdf,
    dtdl_unit_to_sdf,
    is_unknown,
    sdf_type_to_dtdl,
    sdf_unit_to_dtdl,
    unknown_type,
)

logger = logging.getLogger(__name__)

# DTDL Enum valueSchema values an SDF choice/enumeration can map to
_DTDL_ENUM_BASES = ("string", "integer")


def _description(description: Optional[LocalizedText], comment: Optional[str] = None) -> Optional[str]:
    """DTDL description, falling back to the comment."""
    return resolve_localized(description) or resolve_localized(comment)


class AffordanceTranslator:
    """
    Translate single affordances in both directions.

    The translator is stateless apart from its configuration; both graph
    walkers share one instance.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    # =========================================================================
    # DTDL -> SDF
    # =========================================================================

    def property_to_sdf(self, prop: DTDLProperty) -> SDFProperty:
        """A DTDL Property becomes an sdfProperty with an explicit writable flag."""
        return SDFProperty(
            name=prop.name,
            label=prop.name,
            description=_description(prop.description, prop.comment),
            unit=self.unit_to_sdf(prop.unit, prop.semantic_types),
            data_type=self._required_schema_to_sdf(prop.schema, f"Property '{prop.name}'"),
            writable=bool(prop.writable),
        )

    def telemetry_to_sdf(self, telemetry: DTDLTelemetry) -> SDFEvent:
        """A DTDL Telemetry becomes an sdfEvent."""
        return SDFEvent(
            name=telemetry.name,
            label=telemetry.name,
            description=_description(telemetry.description, telemetry.comment),
            unit=self.unit_to_sdf(telemetry.unit, telemetry.semantic_types),
            data_type=self._required_schema_to_sdf(telemetry.schema, f"Telemetry '{telemetry.name}'"),
        )

    def command_to_sdf(self, command: DTDLCommand) -> Tuple[SDFAction, Dict[str, SDFData]]:
        """
        A DTDL Command becomes an sdfAction plus the sdfData items it refers to.

        The request payload becomes one data item. An Object response
        contributes one data item per field; any other response one item.
        """
        action = SDFAction(
            name=command.name,
            label=resolve_localized(command.display_name) or command.name,
            description=_description(command.description, command.comment),
        )
        data: Dict[str, SDFData] = {}

        if command.request:
            item = self._payload_to_data(command.request)
            data[item.name] = item
            action.input_data.append(f"#/sdfData/{item.name}")

        if command.response:
            response = command.response
            if isinstance(response.schema, DTDLObject):
                items = [
                    SDFData(
                        name=f.name,
                        label=resolve_localized(f.display_name) or f.name,
                        description=_description(f.description, f.comment),
                        data_type=self._field_to_sdf(f).type,
                    )
                    for f in response.schema.fields
                ]
            else:
                items = [self._payload_to_data(response)]
            for item in items:
                if item.name in data:
                    logger.warning(
                        f"Command '{command.name}': data item '{item.name}' defined twice, keeping the last"
                    )
                data[item.name] = item
                action.output_data.append(f"#/sdfData/{item.name}")

        return action, data

    def _payload_to_data(self, payload: DTDLCommandPayload) -> SDFData:
        return SDFData(
            name=payload.name,
            label=resolve_localized(payload.display_name) or payload.name,
            description=_description(payload.description, payload.comment),
            data_type=None if payload.schema is None else self.schema_to_sdf(payload.schema),
        )

    def _required_schema_to_sdf(self, schema: Optional[DTDLSchema], owner: str) -> TypeDescriptor:
        if schema is None:
            raise UnsupportedSchemaKind(f"{owner} has no schema")
        return self.schema_to_sdf(schema)

    def schema_to_sdf(self, schema: DTDLSchema) -> TypeDescriptor:
        """
        Map a DTDL schema to an SDF type descriptor.

        Raises:
            UnsupportedSchemaKind: non-string Enum, Enum without values,
                Map, or an Array whose elements are not primitive.
        """
        if isinstance(schema, str):
            return dtdl_schema_to_sdf(schema)

        if isinstance(schema, DTDLEnum):
            return self._enum_to_sdf(schema)

        if isinstance(schema, DTDLObject):
            return ObjectType(fields=[self._field_to_sdf(f) for f in schema.fields])

        if isinstance(schema, DTDLArray):
            element = schema.element_schema
            if not isinstance(element, str):
                kind = type(element).__name__.replace("DTDL", "") if element is not None else "unspecified"
                raise UnsupportedSchemaKind(f"Array with {kind} elements")
            return ArrayType(items=dtdl_schema_to_sdf(element))

        if isinstance(schema, DTDLMap):
            raise UnsupportedSchemaKind("Map")

        raise UnsupportedSchemaKind(type(schema).__name__)

    def _enum_to_sdf(self, enum: DTDLEnum) -> Union[EnumerationType, ChoiceType]:
        if enum.value_schema != "string":
            raise UnsupportedSchemaKind(f"Enum with valueSchema {enum.value_schema!r}")
        if not enum.enum_values:
            raise UnsupportedSchemaKind("Enum without enumValues")

        sdf_base = dtdl_schema_to_sdf(enum.value_schema).type
        descriptions = {
            str(ev.value): resolve_localized(ev.description) for ev in enum.enum_values
        }
        if any(descriptions.values()):
            return ChoiceType(choices=descriptions, base=sdf_base)
        return EnumerationType(values=[ev.value for ev in enum.enum_values], base=sdf_base)

    def _field_to_sdf(self, dtdl_field: DTDLField) -> ObjectField:
        description = _description(dtdl_field.description, dtdl_field.comment)
        schema = dtdl_field.schema
        field_type: Optional[TypeDescriptor] = None
        if isinstance(schema, str):
            mapped = dtdl_schema_to_sdf(schema)
            if not is_unknown(mapped.type):
                field_type = mapped
        elif schema is not None:
            field_type = self.schema_to_sdf(schema)
        return ObjectField(
            name=dtdl_field.name,
            type=field_type,
            label=dtdl_field.name if field_type is None else None,
            description=description,
        )

    def unit_to_sdf(self, unit: Optional[str], semantic_types: List[str]) -> Optional[str]:
        semantic_type = semantic_types[0] if semantic_types else None
        return dtdl_unit_to_sdf(unit, semantic_type)

    # =========================================================================
    # SDF -> DTDL
    # =========================================================================

    def truncate(self, text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        return text[:DTDLDefaults.MAX_DESCRIPTION_LENGTH]

    def property_to_dtdl(
        self,
        prop: SDFProperty,
        definitions: Optional[Dict[str, SDFData]] = None,
    ) -> DTDLProperty:
        """
        An sdfProperty becomes a DTDL Property.

        SDF reads a missing ``writable`` as true while DTDL reads it as
        false, so the result is writable unless the source says otherwise.
        """
        unit, semantic_types = self.unit_to_dtdl(prop.unit)
        return DTDLProperty(
            name=fix_name(prop.name),
            schema=self.type_to_dtdl(prop.data_type, "Property", definitions),
            writable=prop.is_writable,
            description=self.truncate(prop.description),
            semantic_types=semantic_types,
            unit=unit,
        )

    def event_to_dtdl(
        self,
        event: SDFEvent,
        definitions: Optional[Dict[str, SDFData]] = None,
    ) -> DTDLTelemetry:
        """An sdfEvent becomes a DTDL Telemetry."""
        unit, semantic_types = self.unit_to_dtdl(event.unit)
        return DTDLTelemetry(
            name=fix_name(event.name),
            schema=self.type_to_dtdl(event.data_type, "Telemetry", definitions),
            description=self.truncate(event.description),
            semantic_types=semantic_types,
            unit=unit,
        )

    def action_to_dtdl(
        self,
        action: SDFAction,
        definitions: Optional[Dict[str, SDFData]] = None,
    ) -> DTDLCommand:
        """
        An sdfAction becomes a DTDL Command.

        The first input data item is the request. A single output item is
        the response; several outputs are combined into an Object response
        with one field per item.
        """
        definitions = definitions or {}
        command = DTDLCommand(
            name=fix_name(action.name),
            description=self.truncate(action.description),
        )

        inputs = self._resolve_slots(action.input_data, definitions, action.name)
        if len(inputs) > 1:
            logger.warning(
                f"Action '{action.name}' has {len(inputs)} input data items; "
                f"DTDL Commands take one request, using '{inputs[0].name}'"
            )
        if inputs:
            command.request = self._data_to_payload(inputs[0], definitions)

        outputs = self._resolve_slots(action.output_data, definitions, action.name)
        if len(outputs) == 1:
            command.response = self._data_to_payload(outputs[0], definitions)
        elif outputs:
            command.response = DTDLCommandPayload(
                name=f"{fix_name(action.name)}Response",
                schema=DTDLObject(fields=[
                    DTDLField(
                        name=fix_name(item.name),
                        schema=self.type_to_dtdl(item.data_type, "Field", definitions),
                        description=self.truncate(item.description),
                    )
                    for item in outputs
                ]),
            )
        return command

    def _resolve_slots(
        self,
        slots: List[Union[str, SDFData]],
        definitions: Dict[str, SDFData],
        action_name: str,
    ) -> List[SDFData]:
        resolved = []
        for slot in slots:
            if isinstance(slot, SDFData):
                resolved.append(slot)
                continue
            data = self._lookup_data(slot, definitions)
            if data is None:
                logger.warning(f"Action '{action_name}': cannot resolve data reference '{slot}', skipping")
            else:
                resolved.append(data)
        return resolved

    @staticmethod
    def _lookup_data(reference: str, definitions: Dict[str, SDFData]) -> Optional[SDFData]:
        """Resolve ``#/sdfData/<name>`` (or a pointer ending in a data name) locally."""
        _, segments = parse_reference(reference)
        if not segments:
            return None
        return definitions.get(segments[-1])

    def _data_to_payload(self, data: SDFData, definitions: Dict[str, SDFData]) -> DTDLCommandPayload:
        return DTDLCommandPayload(
            name=fix_name(data.name),
            schema=self.type_to_dtdl(data.data_type, "Command", definitions),
            display_name=data.label,
            description=self.truncate(data.description),
        )

    def type_to_dtdl(
        self,
        data_type: Optional[TypeDescriptor],
        kind: str,
        definitions: Optional[Dict[str, SDFData]] = None,
    ) -> Optional[DTDLSchema]:
        """
        Map an SDF type descriptor to a DTDL schema.

        ``kind`` is the owning DTDL element (Property, Telemetry, Command,
        Field); only Properties flatten arrays to their element schema.

        Raises:
            UnsupportedSchemaKind: a choice or enumeration whose base type
                is neither string nor integer.
        """
        definitions = definitions or {}

        if data_type is None:
            return None

        if isinstance(data_type, PrimitiveType):
            return sdf_type_to_dtdl(data_type)

        if isinstance(data_type, EnumerationType):
            value_schema = self._enum_base(data_type.base)
            return DTDLEnum(
                value_schema=value_schema,
                enum_values=[
                    DTDLEnumValue(name=fix_name(str(v)), value=v) for v in data_type.values
                ],
            )

        if isinstance(data_type, ChoiceType):
            value_schema = self._enum_base(data_type.base)
            return DTDLEnum(
                value_schema=value_schema,
                enum_values=[
                    DTDLEnumValue(
                        name=fix_name(value),
                        value=self._enum_value(value, value_schema),
                        description=self.truncate(description),
                    )
                    for value, description in data_type.choices.items()
                ],
            )

        if isinstance(data_type, ObjectType):
            return DTDLObject(fields=[
                DTDLField(
                    name=fix_name(f.name),
                    schema=self.type_to_dtdl(f.type, "Field", definitions),
                    display_name=f.label if f.type is None else None,
                    description=self.truncate(f.description),
                )
                for f in data_type.fields
            ])

        if isinstance(data_type, ArrayType):
            element = self.type_to_dtdl(data_type.items, "Field", definitions)
            if kind == "Property":
                return element
            return DTDLArray(element_schema=element)

        if isinstance(data_type, ReferenceType):
            target = self._lookup_data(data_type.ref, definitions)
            if target is None or target.data_type is None:
                logger.debug(f"Cannot resolve type reference '{data_type.ref}'")
                return unknown_type(data_type.ref)
            return self.type_to_dtdl(target.data_type, kind, definitions)

        raise UnsupportedSchemaKind(type(data_type).__name__)

    @staticmethod
    def _enum_base(base: str) -> str:
        value_schema = SDF_TYPE_TO_DTDL_SCHEMA.get(base)
        if value_schema not in _DTDL_ENUM_BASES:
            raise UnsupportedSchemaKind(
                f"choice of type {base!r}; DTDL Enums can only be string or integer"
            )
        return value_schema

    @staticmethod
    def _enum_value(value: str, value_schema: str) -> Union[int, str]:
        if value_schema == "integer":
            try:
                return int(value)
            except ValueError:
                return value
        return value

    def unit_to_dtdl(self, unit: Optional[str]) -> Tuple[Optional[str], List[str]]:
        """Return the DTDL unit and the semantic types to add to @type."""
        entry = sdf_unit_to_dtdl(unit)
        if entry is None:
            return None, []
        return entry.dtdl_unit, [entry.semantic_type] if entry.semantic_type else []
