"""
DTDL (Digital Twins Definition Language) Module

Key Components:
- dtdl_models: typed dataclasses for Interfaces, contents and schemas
- dtdl_parser: parse DTDL files (single, array, directory) or load one
  Interface strictly for conversion

Usage:
    from dtdl_sdf.dtdl import DTDLParser

    parser = DTDLParser()
    interface = parser.load_interface(json_text)
"""

from .dtdl_models import (
    DTDLInterface,
    DTDLProperty,
    DTDLTelemetry,
    DTDLRelationship,
    DTDLComponent,
    DTDLCommand,
    DTDLCommandPayload,
    DTDLContent,
    DTDLEnum,
    DTDLEnumValue,
    DTDLObject,
    DTDLField,
    DTDLArray,
    DTDLMap,
    DTDLContext,
    DTDLSchema,
    resolve_localized,
    schema_to_json,
)
from .dtdl_parser import DTDLParser, ParseError, ParseResult

__all__ = [
    'DTDLInterface',
    'DTDLProperty',
    'DTDLTelemetry',
    'DTDLRelationship',
    'DTDLComponent',
    'DTDLCommand',
    'DTDLCommandPayload',
    'DTDLContent',
    'DTDLEnum',
    'DTDLEnumValue',
    'DTDLObject',
    'DTDLField',
    'DTDLArray',
    'DTDLMap',
    'DTDLContext',
    'DTDLSchema',
    'resolve_localized',
    'schema_to_json',
    'DTDLParser',
    'ParseError',
    'ParseResult',
]
