"""
Translation Module

Key Components:
- dtdl_to_sdf: DTDL Interface -> SDF document (single or batch)
- sdf_to_dtdl: SDF document -> list of DTDL Interfaces
- affordances: leaf-level mapping of properties, telemetry and commands
- identifiers: DTMI splitting, namespace table, reference building
- type_tables: primitive type and unit correspondence tables
- context: batch state for multi-document conversion

Usage:
    from dtdl_sdf.translation import DTDLToSDFConverter, SDFToDTDLConverter

    sdf = DTDLToSDFConverter().convert(dtdl_text)
    interfaces = SDFToDTDLConverter().convert(sdf)
"""

from .affordances import AffordanceTranslator
from .context import BatchOutcome, BatchStatus, ConversionContext
from .dtdl_to_sdf import DTDLToSDFConverter
from .identifiers import (
    NamespaceTable,
    QualifiedIdentifier,
    build_reference,
    identifier_from_reference,
    parse_reference,
    resolve_extensions,
    split_qualified_id,
)
from .sdf_to_dtdl import SDFToDTDLConverter

__all__ = [
    'AffordanceTranslator',
    'BatchOutcome',
    'BatchStatus',
    'ConversionContext',
    'DTDLToSDFConverter',
    'SDFToDTDLConverter',
    'NamespaceTable',
    'QualifiedIdentifier',
    'build_reference',
    'identifier_from_reference',
    'parse_reference',
    'resolve_extensions',
    'split_qualified_id',
]
