"""
DTDL <-> SDF model converter.

Translates Digital Twins Definition Language Interfaces into Semantic
Definition Format documents and back.

Usage:
    from dtdl_sdf import DTDLToSDFConverter, SDFToDTDLConverter

    sdf = DTDLToSDFConverter().convert(dtdl_text)
    interfaces = SDFToDTDLConverter().convert(sdf)
"""

from .config import ConverterConfig, load_config, load_converter_config
from .exceptions import (
    ConversionError,
    DocumentParseError,
    MalformedIdentifier,
    MultipleInterfacesUnsupported,
    UnsupportedSchemaKind,
)
from .sdf import LintResult, SDFLinter, compose_thing
from .translation import ConversionContext, DTDLToSDFConverter, SDFToDTDLConverter

__version__ = "0.1.0"

__all__ = [
    'ConverterConfig',
    'load_config',
    'load_converter_config',
    'ConversionError',
    'DocumentParseError',
    'MalformedIdentifier',
    'MultipleInterfacesUnsupported',
    'UnsupportedSchemaKind',
    'LintResult',
    'SDFLinter',
    'compose_thing',
    'ConversionContext',
    'DTDLToSDFConverter',
    'SDFToDTDLConverter',
]
