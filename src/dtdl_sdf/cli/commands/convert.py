"""
Conversion commands: dtdl2sdf and sdf2dtdl.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from tqdm import tqdm

from ...constants import ExitCode
from ...dtdl import DTDLParser
from ...exceptions import ConversionError, DocumentParseError
from ...translation import ConversionContext, DTDLToSDFConverter, SDFToDTDLConverter
from ..helpers import input_name, read_text, status, write_json
from .base import BaseCommand


logger = logging.getLogger(__name__)


class DTDLToSDFCommand(BaseCommand):
    """
    Convert DTDL Interfaces to one SDF document.

    The first Interface is the root; later ones are merged only when the
    root (or a merged Interface) embeds them as Components. A directory
    argument stands for every DTDL file below it, in path order.

    Usage:
        dtdl2sdf root.json [component.json | models/ ...] [-o out.sdf.json]
    """

    def execute(self, args: argparse.Namespace) -> int:
        converter = DTDLToSDFConverter(self.config)
        context = ConversionContext()

        try:
            inputs = self._collect_inputs(args.files)
            for document, source in tqdm(inputs, desc="Converting DTDL", unit="interface",
                                         disable=len(inputs) < 10):
                converter.convert(document, context, source=source)
        except FileNotFoundError as e:
            status(f"✗ File not found: {e.filename}")
            return ExitCode.FILE_NOT_FOUND
        except ConversionError as e:
            logger.error(f"Conversion failed: {e}")
            status(f"✗ {e}")
            return ExitCode.ERROR

        if not context.has_root:
            status("✗ No DTDL Interfaces to convert")
            return ExitCode.ERROR
        if len(inputs) > 1:
            logger.info("\n" + context.get_summary())

        write_json(context.root.to_dict(), args.output)
        if args.output:
            status(f"✓ Saved SDF document to: {args.output}")
        return ExitCode.SUCCESS

    def _collect_inputs(self, paths: List[str]) -> List[Tuple[Any, str]]:
        """
        Read the file arguments in order, expanding directories.

        Raises:
            FileNotFoundError: a file argument does not exist.
            DocumentParseError: a file inside a directory does not parse.
        """
        parser = DTDLParser(strict_mode=True)
        inputs: List[Tuple[Any, str]] = []

        for path in paths:
            if path == "-" or not Path(path).is_dir():
                inputs.append((read_text(path), input_name(path)))
                continue

            result = parser.parse_directory(path)
            for warning in result.warnings:
                logger.warning(warning)
            if not result.success:
                logger.error("\n" + result.get_summary())
                raise DocumentParseError(str(result.errors[0]))
            logger.debug(f"{path}: {result.files_parsed} file(s), {len(result.interfaces)} Interface(s)")
            inputs.extend((interface, interface.source_file or path) for interface in result.interfaces)

        return inputs


class SDFToDTDLCommand(BaseCommand):
    """
    Convert SDF documents to DTDL Interfaces.

    The Interfaces of all input files are written as one JSON array.

    Usage:
        sdf2dtdl file.sdf.json [more.sdf.json ...] [-o out.json]
    """

    def execute(self, args: argparse.Namespace) -> int:
        converter = SDFToDTDLConverter(self.config)
        interfaces: List[Dict[str, Any]] = []

        try:
            for path in tqdm(args.files, desc="Converting SDF", unit="file",
                             disable=len(args.files) < 10):
                converter.convert(read_text(path), interfaces, source=input_name(path))
        except FileNotFoundError as e:
            status(f"✗ File not found: {e.filename}")
            return ExitCode.FILE_NOT_FOUND
        except ConversionError as e:
            logger.error(f"Conversion failed: {e}")
            status(f"✗ {e}")
            return ExitCode.ERROR

        write_json(interfaces, args.output)
        if args.output:
            status(f"✓ Saved {len(interfaces)} Interface(s) to: {args.output}")
        return ExitCode.SUCCESS
