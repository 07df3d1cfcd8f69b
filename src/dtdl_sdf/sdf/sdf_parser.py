"""
SDF Parser

Turns SDF JSON into the typed model in ``sdf_models``. Shape decisions
(enumeration vs. choice vs. object, reference vs. inline data) are made
here, once, so that the translators only see closed variants.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import DocumentParseError, UnsupportedSchemaKind
from .sdf_models import (
    ArrayType,
    ChoiceType,
    EnumerationType,
    ObjectField,
    ObjectType,
    PrimitiveType,
    ReferenceType,
    SDFAction,
    SDFData,
    SDFDocument,
    SDFEvent,
    SDFInfo,
    SDFObject,
    SDFProperty,
    SDFRelation,
    SDFThing,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_map(value: Any, keyword: str, source: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentParseError(f"'{keyword}' must be a JSON object", source)
    return value


class SDFParser:
    """
    Parse SDF documents.

    Example usage:
        parser = SDFParser()
        document = parser.load_document(json_text)
        for name, obj in document.objects.items():
            print(name, list(obj.properties))
    """

    def __init__(self, source: str = "<input>"):
        self.source = source

    def load_file(self, file_path: Union[str, Path]) -> SDFDocument:
        """Read and parse an SDF file."""
        path = Path(file_path)
        self.source = str(path)
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
        return self.load_document(text)

    def load_document(self, document: Union[str, bytes, Dict[str, Any]]) -> SDFDocument:
        """
        Parse an SDF document from JSON text or a decoded dictionary.

        Raises:
            DocumentParseError: invalid JSON, non-object top level, or
                neither ``sdfObject`` nor ``sdfThing`` present.
            UnsupportedSchemaKind: array items that are themselves complex.
        """
        data = document
        if isinstance(document, (str, bytes)):
            try:
                data = json.loads(document)
            except json.JSONDecodeError as e:
                raise DocumentParseError(f"Invalid JSON: {e}", self.source) from e

        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Expected a JSON object, got {type(data).__name__}", self.source
            )
        if "sdfObject" not in data and "sdfThing" not in data:
            raise DocumentParseError(
                "Document has neither an 'sdfObject' nor an 'sdfThing' block", self.source
            )

        info = data.get("info") or {}
        namespace = _as_map(data.get("namespace"), "namespace", self.source)

        return SDFDocument(
            info=SDFInfo(
                title=_text(info.get("title")) or "",
                version=_text(info.get("version")) or "",
                copyright=_text(info.get("copyright")) or "",
                license=_text(info.get("license")) or "",
            ),
            namespace={str(k): str(v) for k, v in namespace.items()},
            default_namespace=data.get("defaultNamespace"),
            objects=self._parse_objects(data.get("sdfObject")),
            things=self._parse_things(data.get("sdfThing")),
            data=self._parse_data_map(data.get("sdfData"), "sdfData", SDFData),
            source=self.source,
        )

    # ------------------------------------------------------------------
    # Composition nodes
    # ------------------------------------------------------------------

    def _parse_objects(self, value: Any) -> Dict[str, SDFObject]:
        return {
            name: self._parse_object(name, body)
            for name, body in _as_map(value, "sdfObject", self.source).items()
        }

    def _parse_things(self, value: Any) -> Dict[str, SDFThing]:
        return {
            name: self._parse_thing(name, body)
            for name, body in _as_map(value, "sdfThing", self.source).items()
        }

    def _parse_object(self, name: str, body: Dict[str, Any]) -> SDFObject:
        body = _as_map(body, f"sdfObject/{name}", self.source)
        refs = body.get("sdfRef")
        if isinstance(refs, str):
            refs = [refs]
        return SDFObject(
            name=name,
            label=_text(body.get("label")),
            description=_text(body.get("description")),
            properties=self._parse_data_map(body.get("sdfProperty"), "sdfProperty", SDFProperty),
            actions=self._parse_actions(body.get("sdfAction")),
            events=self._parse_data_map(body.get("sdfEvent"), "sdfEvent", SDFEvent),
            data=self._parse_data_map(body.get("sdfData"), "sdfData", SDFData),
            relations=self._parse_relations(body.get("sdfRelation")),
            sdf_ref=[r for r in refs or [] if isinstance(r, str)],
        )

    def _parse_thing(self, name: str, body: Dict[str, Any]) -> SDFThing:
        body = _as_map(body, f"sdfThing/{name}", self.source)
        return SDFThing(
            name=name,
            label=_text(body.get("label")),
            description=_text(body.get("description")),
            objects=self._parse_objects(body.get("sdfObject")),
            things=self._parse_things(body.get("sdfThing")),
            properties=self._parse_data_map(body.get("sdfProperty"), "sdfProperty", SDFProperty),
            actions=self._parse_actions(body.get("sdfAction")),
            events=self._parse_data_map(body.get("sdfEvent"), "sdfEvent", SDFEvent),
            data=self._parse_data_map(body.get("sdfData"), "sdfData", SDFData),
        )

    # ------------------------------------------------------------------
    # Affordances
    # ------------------------------------------------------------------

    def _parse_data_map(self, value: Any, keyword: str, cls: type) -> Dict[str, Any]:
        return {
            name: self._parse_data(name, _as_map(body, f"{keyword}/{name}", self.source), cls)
            for name, body in _as_map(value, keyword, self.source).items()
        }

    def _parse_data(self, name: str, body: Dict[str, Any], cls: type = SDFData) -> SDFData:
        kwargs: Dict[str, Any] = dict(
            name=name,
            label=_text(body.get("label")),
            description=_text(body.get("description")),
            unit=_text(body.get("unit")),
            data_type=self.parse_type(body),
        )
        if cls is SDFProperty and "writable" in body:
            kwargs["writable"] = bool(body["writable"])
        if cls is SDFEvent and kwargs["data_type"] is None and isinstance(body.get("sdfOutputData"), dict):
            # SDF 1.1 events describe their value in sdfOutputData
            output = body["sdfOutputData"]
            kwargs["data_type"] = self.parse_type(output)
            kwargs["unit"] = kwargs["unit"] or _text(output.get("unit"))
        return cls(**kwargs)

    def _parse_actions(self, value: Any) -> Dict[str, SDFAction]:
        actions = {}
        for name, body in _as_map(value, "sdfAction", self.source).items():
            body = _as_map(body, f"sdfAction/{name}", self.source)
            actions[name] = SDFAction(
                name=name,
                label=_text(body.get("label")),
                description=_text(body.get("description")),
                input_data=self._parse_slots(body.get("sdfInputData"), f"{name}Input"),
                output_data=self._parse_slots(body.get("sdfOutputData"), f"{name}Output"),
            )
        return actions

    def _parse_slots(self, value: Any, inline_name: str) -> List[Union[str, SDFData]]:
        """Input/output data: a reference, a list of references, or inline qualities."""
        if value is None:
            return []
        items = value if isinstance(value, list) else [value]
        slots: List[Union[str, SDFData]] = []
        for item in items:
            if isinstance(item, str):
                slots.append(item)
            elif isinstance(item, dict):
                if isinstance(item.get("sdfRef"), str) and len(item) == 1:
                    slots.append(item["sdfRef"])
                else:
                    slots.append(self._parse_data(inline_name, item))
            else:
                logger.warning(f"{self.source}: Ignoring data slot of type {type(item).__name__}")
        return slots

    def _parse_relations(self, value: Any) -> Dict[str, SDFRelation]:
        relations = {}
        for name, body in _as_map(value, "sdfRelation", self.source).items():
            body = _as_map(body, f"sdfRelation/{name}", self.source)
            relations[name] = SDFRelation(
                name=name,
                relation_type=_text(body.get("relationType") or body.get("type")),
                target=_text(body.get("target")),
                label=_text(body.get("label")),
                description=_text(body.get("description")),
            )
        return relations

    # ------------------------------------------------------------------
    # Type descriptors
    # ------------------------------------------------------------------

    def parse_type(self, body: Dict[str, Any]) -> Optional[TypeDescriptor]:
        """
        Classify the data qualities of ``body`` into one descriptor variant.

        Returns None when the definition carries no type information.
        """
        type_name = body.get("type")

        if isinstance(body.get("sdfChoice"), dict):
            choices: Dict[str, Optional[str]] = {}
            for value, quality in body["sdfChoice"].items():
                description = quality.get("description") if isinstance(quality, dict) else None
                choices[str(value)] = _text(description)
            return ChoiceType(choices=choices, base=type_name or "string")

        if isinstance(body.get("enum"), list):
            return EnumerationType(values=list(body["enum"]), base=type_name or "string")

        if type_name == "object":
            fields = []
            for field_name, field_body in (body.get("properties") or {}).items():
                if not isinstance(field_body, dict):
                    field_body = {}
                fields.append(ObjectField(
                    name=field_name,
                    type=self.parse_type(field_body),
                    label=_text(field_body.get("label")),
                    description=_text(field_body.get("description")),
                ))
            return ObjectType(fields=fields)

        if type_name == "array":
            items = body.get("items") if isinstance(body.get("items"), dict) else {}
            return ArrayType(items=self._parse_item_type(items))

        if type_name is None and isinstance(body.get("sdfRef"), str) and "format" not in body:
            return ReferenceType(ref=body["sdfRef"])

        if type_name is None and not body.get("format") and not body.get("sdfType"):
            return None

        return PrimitiveType(
            type=_text(type_name) or "string",
            format=_text(body.get("format")),
            sdf_type=_text(body.get("sdfType")),
        )

    def _parse_item_type(self, items: Dict[str, Any]) -> Union[PrimitiveType, ReferenceType]:
        """
        Reduce array item qualities to a primitive or reference element type.

        Enumerated and object items keep only their bare ``type``.

        Raises:
            UnsupportedSchemaKind: nested arrays or items without a type.
        """
        if items.get("type") == "array":
            raise UnsupportedSchemaKind("nested arrays", self.source)

        item_type = self.parse_type(items)
        if isinstance(item_type, (PrimitiveType, ReferenceType)):
            return item_type
        if item_type is None:
            raise UnsupportedSchemaKind("array items without a type", self.source)

        logger.debug(f"{self.source}: Dropping array item detail of {type(item_type).__name__}")
        if isinstance(item_type, (EnumerationType, ChoiceType)):
            return PrimitiveType(type=item_type.base)
        return PrimitiveType(type="object")
