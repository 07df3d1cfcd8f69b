#!/usr/bin/env python3
"""
DTDL <-> SDF converter entry point.

Usage:
    dtdl-sdf dtdl2sdf <root.json> [component.json ...] [-o out.sdf.json]
    dtdl-sdf sdf2dtdl <file.sdf.json> [...] [-o out.json]
    dtdl-sdf lint <file.sdf.json> [--schema schema.json]
    dtdl-sdf compose <skeleton.json> <object.sdf.json> [...] [-f basename]
"""

import logging
import sys
from typing import Dict, List, Optional, Type

from .cli.commands import (
    BaseCommand,
    ComposeCommand,
    DTDLToSDFCommand,
    LintCommand,
    SDFToDTDLCommand,
)
from .cli.helpers import status
from .cli.parsers import create_argument_parser
from .constants import ExitCode

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Type[BaseCommand]] = {
    'dtdl2sdf': DTDLToSDFCommand,
    'sdf2dtdl': SDFToDTDLCommand,
    'lint': LintCommand,
    'compose': ComposeCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=args.config)

    try:
        command.setup_logging_from_args(args)
    except FileNotFoundError as e:
        status(f"✗ {e}")
        return ExitCode.CONFIG_ERROR
    except ValueError as e:
        status(f"✗ Invalid configuration: {e}")
        return ExitCode.CONFIG_ERROR

    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        status("\nInterrupted")
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
