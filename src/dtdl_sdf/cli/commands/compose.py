"""
Compose command: build an sdfThing from SDF object files.
"""

import argparse
import logging

from tqdm import tqdm

from ...constants import ExitCode
from ...exceptions import ConversionError
from ...sdf.sdf_composer import compose_thing, thing_file_name
from ..helpers import read_json, status, write_json
from .base import BaseCommand


logger = logging.getLogger(__name__)


class ComposeCommand(BaseCommand):
    """
    Combine the sdfObject blocks of several files under one sdfThing.

    Usage:
        compose skeleton.json a.sdf.json b.sdf.json [-f BASENAME]
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            skeleton = read_json(args.skeleton)
            documents = [
                read_json(path)
                for path in tqdm(args.files, desc="Reading objects", unit="file",
                                 disable=len(args.files) < 10)
            ]
            composed = compose_thing(skeleton, documents)
        except FileNotFoundError as e:
            status(f"✗ File not found: {e.filename}")
            return ExitCode.FILE_NOT_FOUND
        except (ValueError, ConversionError) as e:
            logger.error(f"Compose failed: {e}")
            status(f"✗ {e}")
            return ExitCode.ERROR

        output = thing_file_name(args.file_base) if args.file_base else None
        write_json(composed, output)
        if output:
            status(f"✓ Saved sdfThing to: {output}")
        return ExitCode.SUCCESS
