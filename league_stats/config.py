#!/usr/bin/env python3
"""
Configuration loading for the league stats pipeline.

Defaults live in the packaged ``stats_config.yaml``; a user supplied YAML file
and explicit overrides (usually CLI arguments) are layered on top of them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "stats_config.yaml"

# Keys that must hold positive integers
POSITIVE_INT_KEYS = ("WINDOW_SIZE", "BIG_RESULT_MARGIN", "EXPECTED_SEGMENTS")


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load the pipeline configuration.

    Args:
        path: Optional YAML file whose keys replace the packaged defaults
        overrides: Optional mapping applied last; keys with a None value are ignored

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If a numeric setting is not a positive integer
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        logger.info(f"Loading configuration from {path}")
        config.update(_read_yaml(path))

    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value

    for key in POSITIVE_INT_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")

    return config
