"""
Converter configuration.

Values default to the constants in ``constants.py`` and can be overridden
from a JSON configuration file::

    {
        "sdf": {"title_prefix": "DTDL", "version": "1.0", "copyright": "...", "license": "BSD-3-Clause"},
        "dtdl": {"id_prefix": "dtmi:org:onedm:playground:", "context": "dtmi:dtdl:context;2"},
        "logging": {"level": "INFO", "file": "dtdl_sdf.log", "format": "text"}
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import DTDLDefaults, SDFDefaults

logger = logging.getLogger(__name__)


@dataclass
class ConverterConfig:
    """Settings shared by both conversion directions."""
    title_prefix: str = SDFDefaults.TITLE_PREFIX
    sdf_version: str = SDFDefaults.VERSION
    copyright: str = SDFDefaults.COPYRIGHT
    license: str = SDFDefaults.LICENSE
    namespace_head: str = SDFDefaults.NAMESPACE_HEAD
    dtdl_context: str = DTDLDefaults.CONTEXT
    id_prefix: str = DTDLDefaults.ID_PREFIX
    dtdl_version: str = DTDLDefaults.VERSION
    logging: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConverterConfig':
        """
        Build a configuration from a parsed config dictionary.

        Unknown keys are ignored so that one config file can be shared
        with other tools.
        """
        sdf = data.get("sdf") or {}
        dtdl = data.get("dtdl") or {}
        defaults = cls()
        return cls(
            title_prefix=str(sdf.get("title_prefix", defaults.title_prefix)),
            sdf_version=str(sdf.get("version", defaults.sdf_version)),
            copyright=str(sdf.get("copyright", defaults.copyright)),
            license=str(sdf.get("license", defaults.license)),
            namespace_head=str(sdf.get("namespace_head", defaults.namespace_head)),
            dtdl_context=str(dtdl.get("context", defaults.dtdl_context)),
            id_prefix=str(dtdl.get("id_prefix", defaults.id_prefix)),
            dtdl_version=str(dtdl.get("version", defaults.dtdl_version)),
            logging=dict(data.get("logging") or {}),
        )


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty or the file is not a JSON object.
        FileNotFoundError: If the configuration file doesn't exist.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a config file or omit --config"
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

    logger.debug(f"Loaded configuration from {path}")
    return config


def load_converter_config(config_path: Optional[Union[str, Path]] = None) -> ConverterConfig:
    """Load a ConverterConfig, using defaults when no path is given."""
    if not config_path:
        return ConverterConfig()
    return ConverterConfig.from_dict(load_config(config_path))
