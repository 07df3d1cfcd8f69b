"""
DTDL Parser

This module provides functionality to parse DTDL JSON files into
structured Python objects.

Supports:
- Single Interface files (.json)
- Array of Interfaces in a single file
- Directory traversal with recursive option
- Strict single-document loading for the converters (``load_interface``)
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Any, Optional, Union

from ..constants import DTDLDefaults
from ..exceptions import (
    ConversionError,
    DocumentParseError,
    MultipleInterfacesUnsupported,
    UnsupportedSchemaKind,
)
from .dtdl_models import (
    DTDLInterface,
    DTDLProperty,
    DTDLTelemetry,
    DTDLRelationship,
    DTDLComponent,
    DTDLCommand,
    DTDLCommandPayload,
    DTDLContent,
    DTDLContext,
    DTDLEnum,
    DTDLEnumValue,
    DTDLObject,
    DTDLArray,
    DTDLMap,
    DTDLField,
    DTDLSchema,
)

logger = logging.getLogger(__name__)


@dataclass
class ParseError:
    """A problem that stopped one file or Interface from loading."""
    file_path: str
    message: str

    def __str__(self) -> str:
        return f"{self.file_path}: {self.message}"


@dataclass
class ParseResult:
    """Interfaces and problems collected over one or more inputs."""
    interfaces: List[DTDLInterface] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    files_parsed: int = 0

    @property
    def success(self) -> bool:
        return not self.errors

    def merge(self, other: 'ParseResult') -> None:
        self.interfaces.extend(other.interfaces)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.files_parsed += other.files_parsed

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Parse Summary:",
            f"  Files parsed: {self.files_parsed}",
            f"  Interfaces found: {len(self.interfaces)}",
        ]
        if self.errors:
            lines.append(f"  Errors: {len(self.errors)}")
            lines.extend(f"    - {err}" for err in self.errors[:5])
            if len(self.errors) > 5:
                lines.append(f"    ... and {len(self.errors) - 5} more")
        if self.warnings:
            lines.append(f"  Warnings: {len(self.warnings)}")
        return "\n".join(lines)


class DTDLParser:
    """
    Parse DTDL JSON into the dataclasses of ``dtdl_models``.

    ``load_interface`` expects exactly one Interface and raises on the first
    problem; the converters use it. ``parse_file``, ``parse_directory`` and
    ``parse_string`` collect problems into a ParseResult instead, so that a
    folder of models can be inspected in one pass.

    Example usage:
        parser = DTDLParser()
        result = parser.parse_directory("models/")
        for interface in result.interfaces:
            print(interface.dtmi)
    """

    DTDL_EXTENSIONS = {".json", ".dtdl"}

    def __init__(self, strict_mode: bool = False):
        """
        Args:
            strict_mode: Collecting parsers fail the whole Interface on a
                malformed content entry instead of skipping the entry with
                a warning. ``load_interface`` is always strict.
        """
        self.strict_mode = strict_mode
        self._content_parsers = {
            "Property": self._parse_property,
            "Telemetry": self._parse_telemetry,
            "Command": self._parse_command,
            "Relationship": self._parse_relationship,
            "Component": self._parse_component,
        }
        self._schema_parsers = {
            "Enum": self._parse_enum,
            "Object": self._parse_object,
            "Array": self._parse_array,
            "Map": self._parse_map,
        }

    # ------------------------------------------------------------------
    # Strict loading
    # ------------------------------------------------------------------

    def load_interface(
        self,
        document: Union[str, bytes, Dict[str, Any], List[Any]],
        source: str = "<input>",
    ) -> DTDLInterface:
        """
        Load exactly one Interface from JSON text or an already-decoded value.

        Raises:
            DocumentParseError: invalid JSON, wrong top-level type, missing
                ``@id`` or ``contents``.
            MultipleInterfacesUnsupported: an array input whose length is not 1.
            UnsupportedSchemaKind: a content schema with no known shape.
        """
        data = document
        if isinstance(document, (str, bytes)):
            try:
                data = json.loads(document)
            except json.JSONDecodeError as e:
                raise DocumentParseError(f"Invalid JSON: {e}", source) from e

        if isinstance(data, list):
            if len(data) != 1:
                raise MultipleInterfacesUnsupported(len(data), source)
            data = data[0]

        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Expected a JSON object, got {type(data).__name__}", source
            )
        if not isinstance(data.get("contents"), list):
            problem = "must be an array" if "contents" in data else "is missing"
            raise DocumentParseError(f"Interface 'contents' block {problem}", source)

        try:
            return self._parse_interface(data, source, strict=True)
        except ConversionError:
            raise
        except ValueError as e:
            raise DocumentParseError(str(e), source) from e

    # ------------------------------------------------------------------
    # Collecting parsers
    # ------------------------------------------------------------------

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """Parse one DTDL file holding an Interface or an array of them."""
        path = Path(file_path)
        result = ParseResult()

        if not path.is_file():
            message = "Not a file" if path.exists() else "File not found"
            result.errors.append(ParseError(str(path), message))
            return result
        if path.suffix.lower() not in self.DTDL_EXTENSIONS:
            result.warnings.append(f"Unexpected file extension: {path.suffix}")

        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            result.errors.append(ParseError(str(path), f"Encoding error: {e}"))
            return result

        result.merge(self.parse_string(text, str(path)))
        return result

    def parse_directory(
        self,
        dir_path: Union[str, Path],
        recursive: bool = True
    ) -> ParseResult:
        """
        Parse every DTDL file under a directory, in path order.

        Args:
            dir_path: Directory to scan
            recursive: Also scan subdirectories
        """
        path = Path(dir_path)
        result = ParseResult()

        if not path.is_dir():
            result.errors.append(ParseError(str(path), "Directory not found"))
            return result

        pattern = "**/*" if recursive else "*"
        files = sorted(f for ext in self.DTDL_EXTENSIONS for f in path.glob(pattern + ext))
        if not files:
            result.warnings.append(f"No DTDL files found in {path}")
            return result

        logger.info(f"Found {len(files)} DTDL files in {path}")
        for file_path in files:
            result.merge(self.parse_file(file_path))
        return result

    def parse_string(self, content: str, source_name: str = "<string>") -> ParseResult:
        """Parse DTDL from a JSON string, collecting errors."""
        result = ParseResult()
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            result.errors.append(ParseError(source_name, f"Invalid JSON: {e}"))
            return result

        result.files_parsed = 1
        if isinstance(data, dict):
            data = [data]
        elif not isinstance(data, list):
            result.errors.append(ParseError(
                source_name, f"Expected object or array, got {type(data).__name__}"
            ))
            return result

        for index, item in enumerate(data):
            if not isinstance(item, dict):
                result.warnings.append(f"{source_name}: item {index} is not an object")
                continue
            try:
                result.interfaces.append(
                    self._parse_interface(item, source_name, strict=self.strict_mode)
                )
            except (ValueError, ConversionError) as e:
                result.errors.append(ParseError(source_name, f"Interface {index}: {e}"))
        return result

    # ------------------------------------------------------------------
    # Element parsers
    # ------------------------------------------------------------------

    @staticmethod
    def _annotations(data: Dict[str, Any]) -> Dict[str, Any]:
        """displayName, description and comment, shared by most elements."""
        return {
            "display_name": data.get("displayName"),
            "description": data.get("description"),
            "comment": data.get("comment"),
        }

    @staticmethod
    def _require_name(data: Dict[str, Any], kind: str) -> str:
        name = data.get("name")
        if not name:
            raise ValueError(f"{kind} missing required 'name' field")
        return name

    def _parse_interface(self, data: Dict[str, Any], source: str, strict: bool) -> DTDLInterface:
        dtmi = data.get("@id")
        if not dtmi:
            raise ValueError("Interface missing required @id field")
        if not isinstance(dtmi, str):
            raise ValueError(f"Interface @id must be a string, got {type(dtmi).__name__}")

        declared = data.get("@type", DTDLDefaults.INTERFACE_TYPE)
        if declared != DTDLDefaults.INTERFACE_TYPE:
            raise ValueError(f"Expected @type='{DTDLDefaults.INTERFACE_TYPE}', got '{declared}'")

        extends = data.get("extends") or []
        if isinstance(extends, str):
            extends = [extends]

        return DTDLInterface(
            dtmi=dtmi,
            contents=self._parse_contents(data.get("contents") or [], source, strict),
            extends=[e for e in extends if isinstance(e, str)],
            context=DTDLContext.from_json(data["@context"]) if "@context" in data else None,
            source_file=source,
            **self._annotations(data),
        )

    def _parse_contents(self, contents: List[Any], source: str, strict: bool) -> List[DTDLContent]:
        parsed: List[DTDLContent] = []

        for item in contents:
            if not isinstance(item, dict):
                continue

            # "@type": "Property" or ["Property", "Temperature", ...]
            types = item.get("@type")
            if isinstance(types, list) and types:
                kind, semantic_types = types[0], [t for t in types[1:] if isinstance(t, str)]
            else:
                kind, semantic_types = types, []

            content_parser = self._content_parsers.get(kind)
            if content_parser is None:
                logger.warning(f"{source}: Unknown content type: {kind}")
                continue
            try:
                parsed.append(content_parser(item, semantic_types))
            except (ValueError, ConversionError) as e:
                if strict:
                    raise
                logger.warning(f"{source}: Skipping {kind}: {e}")

        return parsed

    def _parse_property(self, data: Dict[str, Any], semantic_types: List[str]) -> DTDLProperty:
        return DTDLProperty(
            name=self._require_name(data, "Property"),
            schema=self._parse_schema(data.get("schema")),
            writable=bool(data.get("writable", False)),
            dtmi=data.get("@id"),
            semantic_types=semantic_types,
            unit=data.get("unit"),
            **self._annotations(data),
        )

    def _parse_telemetry(self, data: Dict[str, Any], semantic_types: List[str]) -> DTDLTelemetry:
        return DTDLTelemetry(
            name=self._require_name(data, "Telemetry"),
            schema=self._parse_schema(data.get("schema")),
            dtmi=data.get("@id"),
            semantic_types=semantic_types,
            unit=data.get("unit"),
            **self._annotations(data),
        )

    def _parse_command(self, data: Dict[str, Any], semantic_types: List[str]) -> DTDLCommand:
        request, response = (
            self._parse_payload(data[key]) if isinstance(data.get(key), dict) else None
            for key in ("request", "response")
        )
        return DTDLCommand(
            name=self._require_name(data, "Command"),
            request=request,
            response=response,
            dtmi=data.get("@id"),
            semantic_types=semantic_types,
            **self._annotations(data),
        )

    def _parse_payload(self, data: Dict[str, Any]) -> DTDLCommandPayload:
        return DTDLCommandPayload(
            name=data.get("name", "payload"),
            schema=self._parse_schema(data.get("schema")),
            nullable=bool(data.get("nullable", False)),
            **self._annotations(data),
        )

    def _parse_relationship(self, data: Dict[str, Any], _semantic_types: List[str]) -> DTDLRelationship:
        return DTDLRelationship(
            name=self._require_name(data, "Relationship"),
            target=data.get("target"),
            dtmi=data.get("@id"),
            **self._annotations(data),
        )

    def _parse_component(self, data: Dict[str, Any], _semantic_types: List[str]) -> DTDLComponent:
        name = self._require_name(data, "Component")
        schema = data.get("schema")
        if not isinstance(schema, str) or not schema:
            raise ValueError(f"Component '{name}' schema must be a DTMI string")
        return DTDLComponent(name=name, schema=schema, dtmi=data.get("@id"), **self._annotations(data))

    # ------------------------------------------------------------------
    # Schema parsers
    # ------------------------------------------------------------------

    def _parse_schema(self, schema: Union[str, Dict[str, Any], None]) -> Optional[DTDLSchema]:
        """
        Strings (primitive names or DTMIs) pass through unchanged; complex
        schemas become model objects. ``None`` means no schema was given.
        """
        if schema is None or isinstance(schema, str):
            return schema
        if not isinstance(schema, dict):
            raise UnsupportedSchemaKind(f"schema value of JSON type {type(schema).__name__}")

        schema_parser = self._schema_parsers.get(schema.get("@type"))
        if schema_parser is None:
            raise UnsupportedSchemaKind(f"complex schema of @type {schema.get('@type')!r}")
        return schema_parser(schema)

    def _parse_enum(self, data: Dict[str, Any]) -> DTDLEnum:
        values = [
            DTDLEnumValue(
                name=item.get("name", ""),
                value=item.get("enumValue", item.get("name", "")),
                **self._annotations(item),
            )
            for item in data.get("enumValues") or []
            if isinstance(item, dict)
        ]
        return DTDLEnum(
            value_schema=data.get("valueSchema"),
            enum_values=values,
            display_name=data.get("displayName"),
            description=data.get("description"),
        )

    def _parse_object(self, data: Dict[str, Any]) -> DTDLObject:
        fields = [
            DTDLField(
                name=item.get("name", ""),
                schema=self._parse_schema(item.get("schema")),
                **self._annotations(item),
            )
            for item in data.get("fields") or []
            if isinstance(item, dict)
        ]
        return DTDLObject(
            fields=fields,
            display_name=data.get("displayName"),
            description=data.get("description"),
        )

    def _parse_array(self, data: Dict[str, Any]) -> DTDLArray:
        return DTDLArray(
            element_schema=self._parse_schema(data.get("elementSchema")),
            display_name=data.get("displayName"),
            description=data.get("description"),
        )

    def _parse_map(self, data: Dict[str, Any]) -> DTDLMap:
        map_key = data.get("mapKey") or {}
        map_value = data.get("mapValue") or {}
        return DTDLMap(
            key_name=map_key.get("name", "key"),
            value_name=map_value.get("name", "value"),
            value_schema=self._parse_schema(map_value.get("schema")),
            display_name=data.get("displayName"),
            description=data.get("description"),
        )
