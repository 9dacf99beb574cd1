"""
Configuration handling with dictionary path access and YAML loading.
Path: context_bucket/config.py
"""
import collections.abc
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
import yaml

logger = structlog.get_logger()

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "WARNING",
        "format": "console",
    },
    "bucket": {
        "marks": [],
    },
}


def get_by_path(data: Dict[str, Any], path: List[str]) -> Any:
    """
    Access dictionary data using a path list.

    Args:
        data: Dictionary to traverse
        path: List of keys forming the path

    Returns:
        Value at path or None if not found
    """
    current = data
    for key in path:
        if not isinstance(current, collections.abc.Mapping) or key not in current:
            return None
        current = current[key]
    return current


def get_value(data: Dict[str, Any], path_str: str) -> Any:
    """
    Access dictionary data using a hierarchical path string (e.g. "bucket.marks").
    Supports both dots (.) and slashes (/) as path separators.
    """
    if '/' in path_str:
        path_list = path_str.split('/')
    else:
        path_list = path_str.split('.')

    return get_by_path(data, path_list)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], _path: str = "") -> Dict[str, Any]:
    """
    Deep merge dictionaries preserving hierarchical structure.
    Rules:
    1. Override values take precedence.
    2. Dictionaries merged recursively.
    3. Lists from override replace lists from base.
    4. None values in override delete keys from base.

    Neither argument is modified.
    """
    result = deepcopy(base)
    current_path_prefix = f"{_path}." if _path else ""

    for key, value in override.items():
        current_key_path = f"{current_path_prefix}{key}"
        if value is None:
            if key in result:
                logger.debug("config.deep_merge.delete", key_path=current_key_path)
                result.pop(key, None)
            continue

        if key in result and isinstance(result.get(key), collections.abc.Mapping) \
                and isinstance(value, collections.abc.Mapping):
            result[key] = deep_merge(result[key], value, _path=current_key_path)
        else:
            if key in result and result.get(key) != value:
                logger.debug("config.deep_merge.override", key_path=current_key_path,
                             old_value=result.get(key), new_value=value)
            result[key] = deepcopy(value)

    return result


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a YAML file, returning {} when it cannot be read"""
    path = Path(path)
    try:
        logger.info("config.load.starting", path=str(path))
        if not path.exists():
            logger.error("config.load.file_not_found", path=str(path))
            return {}
        with open(path) as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            logger.error("config.load.not_a_mapping", path=str(path), found_type=type(config).__name__)
            return {}
        logger.info("config.load.success", path=str(path), keys=list(config.keys()))
        return config
    except yaml.YAMLError as e:
        logger.error("config.load.yaml_error", path=str(path), error=str(e))
        return {}
    except OSError as e:
        logger.error("config.load.failed", path=str(path), error=str(e), error_type=type(e).__name__)
        return {}


def load_with_defaults(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load a config file and merge it over DEFAULT_CONFIG"""
    if path is None:
        return deepcopy(DEFAULT_CONFIG)
    return deep_merge(DEFAULT_CONFIG, load_config(path))
