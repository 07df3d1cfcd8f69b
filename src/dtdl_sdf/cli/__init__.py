"""
Command-line interface for the DTDL/SDF converter.
"""

from .helpers import JSONFormatter, setup_logging
from .parsers import create_argument_parser

__all__ = ['JSONFormatter', 'setup_logging', 'create_argument_parser']
