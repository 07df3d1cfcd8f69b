"""
Base command class.

All CLI commands inherit from BaseCommand, which resolves the converter
configuration and sets up logging from the config file and the global
command-line overrides.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ...config import ConverterConfig, load_config
from ..helpers import setup_logging


logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Subclasses implement execute() and return an ExitCode value.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[ConverterConfig] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to a JSON configuration file.
            config: Ready-made configuration (for dependency injection);
                takes precedence over ``config_path``.
        """
        self.config_path = config_path
        self._config = config
        self._raw_config: Optional[Dict[str, Any]] = None

    @property
    def raw_config(self) -> Dict[str, Any]:
        """The parsed configuration file, or {} when none was given."""
        if self._raw_config is None:
            self._raw_config = load_config(self.config_path) if self.config_path else {}
        return self._raw_config

    @property
    def config(self) -> ConverterConfig:
        """Lazy-load configuration."""
        if self._config is None:
            self._config = ConverterConfig.from_dict(self.raw_config)
        return self._config

    def setup_logging_from_args(self, args: argparse.Namespace) -> None:
        """Configure logging from the config file, overridden by --log-* flags."""
        log_config = dict(self.config.logging)
        if getattr(args, 'log_level', None):
            log_config['level'] = args.log_level
        if getattr(args, 'log_format', None):
            log_config['format'] = args.log_format
        setup_logging(log_file=getattr(args, 'log_file', None), config=log_config)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
