"""
CLI argument parser configuration.

Command Structure:
    - dtdl2sdf FILE [FILE ...]   (first file is the root of a batch; directories expand)
    - sdf2dtdl FILE [FILE ...]
    - lint FILE [--schema SCHEMA]
    - compose SKELETON FILE [FILE ...] [-f BASENAME]
"""

import argparse

from ..constants import LoggingConfig


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_global_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging flags shared by all commands."""
    parser.add_argument(
        '--config', '-c',
        help='Path to a JSON configuration file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help=f'Log level (default: {LoggingConfig.DEFAULT_LOG_LEVEL})'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )
    parser.add_argument(
        '--log-format',
        choices=list(LoggingConfig.SUPPORTED_FORMATS),
        help='Log record format (default: text)'
    )


def add_input_flags(parser: argparse.ArgumentParser) -> None:
    """Add the positional input file list."""
    parser.add_argument(
        'files',
        nargs='+',
        metavar='FILE',
        help="Input files; '-' reads standard input"
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add the output file flag."""
    parser.add_argument(
        '--output', '-o',
        help='Output file path (default: standard output)'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='dtdl-sdf',
        description="DTDL <-> SDF model converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Convert a DTDL Interface and the Interfaces it embeds as Components
    %(prog)s dtdl2sdf TemperatureController.json Thermostat.json -o controller.sdf.json

    # Same, picking the Components out of a folder of models
    %(prog)s dtdl2sdf TemperatureController.json models/ -o controller.sdf.json

    # Convert SDF to DTDL (reads stdin)
    cat sdfobject-thermostat.sdf.json | %(prog)s sdf2dtdl -

    # Lint an SDF file
    %(prog)s lint sdfobject-thermostat.sdf.json

    # Build an sdfThing from a skeleton and object files
    %(prog)s compose skeleton.json sdfobject-a.sdf.json sdfobject-b.sdf.json -f controller
        """,
    )
    add_global_flags(parser)

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_dtdl2sdf_parser(subparsers)
    _add_sdf2dtdl_parser(subparsers)
    _add_lint_parser(subparsers)
    _add_compose_parser(subparsers)

    return parser


def _add_dtdl2sdf_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the dtdl2sdf command parser."""
    parser = subparsers.add_parser(
        'dtdl2sdf',
        help='Convert DTDL Interfaces to an SDF document'
    )
    add_input_flags(parser)
    add_output_flags(parser)


def _add_sdf2dtdl_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the sdf2dtdl command parser."""
    parser = subparsers.add_parser(
        'sdf2dtdl',
        help='Convert SDF documents to a list of DTDL Interfaces'
    )
    add_input_flags(parser)
    add_output_flags(parser)


def _add_lint_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the lint command parser."""
    parser = subparsers.add_parser(
        'lint',
        help='Check an SDF file against the naming rules and JSON schema'
    )
    parser.add_argument('file', help='SDF file to lint')
    parser.add_argument(
        '--schema',
        help='JSON schema file (default: bundled SDF validation schema)'
    )


def _add_compose_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the compose command parser."""
    parser = subparsers.add_parser(
        'compose',
        help='Build an sdfThing from a skeleton and SDF object files'
    )
    parser.add_argument('skeleton', help='Skeleton file with the info/namespace header')
    add_input_flags(parser)
    parser.add_argument(
        '--file-base', '-f',
        dest='file_base',
        metavar='BASENAME',
        help='Write to sdfthing-<BASENAME>.sdf.json instead of standard output'
    )
