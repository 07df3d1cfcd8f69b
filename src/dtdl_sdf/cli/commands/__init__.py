"""
CLI command implementations.

- base.py: BaseCommand (config loading, logging setup)
- convert.py: DTDLToSDFCommand, SDFToDTDLCommand
- lint.py: LintCommand
- compose.py: ComposeCommand
"""

from .base import BaseCommand
from .compose import ComposeCommand
from .convert import DTDLToSDFCommand, SDFToDTDLCommand
from .lint import LintCommand


__all__ = [
    'BaseCommand',
    'ComposeCommand',
    'DTDLToSDFCommand',
    'SDFToDTDLCommand',
    'LintCommand',
]
