"""
SDF (Semantic Definition Format) Module

Key Components:
- sdf_models: typed dataclasses for documents, objects, things,
  affordances and type descriptors
- sdf_parser: parse SDF JSON into the models
- sdf_linter: file name, character set and JSON schema checks
- sdf_composer: assemble an sdfThing from object documents
"""

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
from .sdf_parser import SDFParser
from .sdf_linter import LintIssue, LintResult, SDFLinter
from .sdf_composer import compose_thing, thing_file_name

__all__ = [
    'ArrayType',
    'ChoiceType',
    'EnumerationType',
    'ObjectField',
    'ObjectType',
    'PrimitiveType',
    'ReferenceType',
    'SDFAction',
    'SDFData',
    'SDFDocument',
    'SDFEvent',
    'SDFInfo',
    'SDFObject',
    'SDFProperty',
    'SDFRelation',
    'SDFThing',
    'TypeDescriptor',
    'SDFParser',
    'LintIssue',
    'LintResult',
    'SDFLinter',
    'compose_thing',
    'thing_file_name',
]
