"""
Converter Configuration - Rendering switches for notebook conversion.

Two independent toggles control what the renderer emits:

- include_outputs: code cell outputs after each source block
- include_metadata: a document-level metadata block before the first cell

Defaults can be stored in a jupyter2llm_config.json file. CLI flags only
ever turn a switch on, never off.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "jupyter2llm_config.json"

# Default configuration - used when no config file is present
DEFAULT_CONFIG = {
    "include_outputs": False,
    "include_metadata": False,
}


@dataclass(frozen=True)
class ConverterConfig:
    """Rendering configuration. Immutable once built."""
    include_outputs: bool = False
    include_metadata: bool = False

    @classmethod
    def llm_ready(cls) -> "ConverterConfig":
        """Outputs and metadata both on."""
        return cls(include_outputs=True, include_metadata=True)

    def with_outputs(self, include: bool = True) -> "ConverterConfig":
        return replace(self, include_outputs=include)

    def with_metadata(self, include: bool = True) -> "ConverterConfig":
        return replace(self, include_metadata=include)

    def merged(self, include_outputs: bool = False, include_metadata: bool = False,
               llm_ready: bool = False) -> "ConverterConfig":
        """
        Switch on the requested toggles, keeping any already enabled.

        Args:
            include_outputs: Turn outputs on
            include_metadata: Turn metadata on
            llm_ready: Turn both on

        Returns:
            A new ConverterConfig
        """
        return ConverterConfig(
            include_outputs=self.include_outputs or include_outputs or llm_ready,
            include_metadata=self.include_metadata or include_metadata or llm_ready,
        )


def _parse_config(raw: Dict[str, Any]) -> ConverterConfig:
    """Parse raw JSON config into ConverterConfig, ignoring non-boolean values."""
    values = {}
    for key, default in DEFAULT_CONFIG.items():
        value = raw.get(key, default)
        if not isinstance(value, bool):
            logger.error(f"Ignoring {key}={value!r} in {CONFIG_FILENAME}: expected true/false")
            value = default
        values[key] = value
    return ConverterConfig(**values)


def load_config(config_path: Optional[Path] = None) -> ConverterConfig:
    """
    Load converter configuration from a JSON file.

    Falls back to defaults when the file is missing or unreadable. A missing
    file is only worth a warning when the path was given explicitly.

    Args:
        config_path: Path to config file. Defaults to ./jupyter2llm_config.json

    Returns:
        Parsed ConverterConfig
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
    config_path = Path(config_path)

    if not config_path.exists():
        if explicit:
            logger.warning(f"Config file {config_path} does not exist, using defaults")
        else:
            logger.debug(f"No {config_path.name} found at {config_path}, using defaults")
        return ConverterConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        logger.info(f"Loaded {config_path.name} from {config_path}")
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {config_path.name}: {e}")
        return ConverterConfig()
    except OSError as e:
        logger.error(f"Failed to load {config_path.name}: {e}")
        return ConverterConfig()

    if not isinstance(raw, dict):
        logger.error(f"Ignoring {config_path.name}: top level must be an object")
        return ConverterConfig()

    return _parse_config(raw)
