"""
YAML Configuration Loading Module for featurematch

This module provides functionality to load configuration from .featurematch.yml
files with fallback to environment variables and defaults. A project directory
can carry its own .featurematch.yml to point the server at a custom catalog.

Example usage:
    from featurematch.yaml_config import load_yaml_config

    # Load config from current directory's .featurematch.yml
    config_data = load_yaml_config()

    # Load config from specific directory
    config_data = load_yaml_config("/path/to/project")

    # Get a specific config value with fallback
    catalog_dir = get_config_value(config_data, "catalog.directory", None, "FEATUREMATCH_CATALOG_DIR")
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".featurematch.yml"

VALID_SECTIONS = {"catalog", "logging"}


class YAMLConfigError(Exception):
    """Exception raised when YAML configuration loading fails."""

    pass


def find_config_file(directory: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Find .featurematch.yml configuration file in the specified directory.

    Args:
        directory: Directory to search in. Defaults to current working directory.

    Returns:
        Path to .featurematch.yml file if found, None otherwise.
    """
    config_file = get_config_file_path(directory)

    if config_file.exists() and config_file.is_file():
        return config_file

    return None


def load_yaml_config(directory: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load YAML configuration from .featurematch.yml file.

    Args:
        directory: Directory containing .featurematch.yml. Defaults to current directory.

    Returns:
        Dictionary containing parsed YAML configuration, or empty dict if no file found.

    Raises:
        YAMLConfigError: If YAML file exists but cannot be parsed.
    """
    config_file = find_config_file(directory)

    if config_file is None:
        logger.debug("No .featurematch.yml file found, using environment variables and defaults")
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise YAMLConfigError(f"Failed to parse YAML configuration file {config_file}: {e}") from e
    except OSError as e:
        raise YAMLConfigError(f"Failed to read configuration file {config_file}: {e}") from e

    if not isinstance(config_data, dict):
        raise YAMLConfigError(f"Configuration file {config_file} must contain a mapping at the top level")

    logger.info(f"Loaded YAML configuration from {config_file}")
    return config_data


def get_config_value(
    config_data: Dict[str, Any], key_path: str, default: Any = None, env_var: Optional[str] = None
) -> Any:
    """
    Get configuration value with fallback chain: environment -> YAML -> default.

    Args:
        config_data: Parsed YAML configuration data
        key_path: Dot-separated path to config value (e.g., "catalog.directory")
        default: Default value if not found in environment or YAML
        env_var: Environment variable name to check first

    Returns:
        Configuration value from environment, YAML, or default (in that order)
    """
    if env_var:
        env_value = os.getenv(env_var)
        if env_value is not None:
            return env_value

    yaml_value = _get_nested_value(config_data, key_path)
    if yaml_value is not None:
        return yaml_value

    return default


def _get_nested_value(data: Dict[str, Any], key_path: str) -> Any:
    """
    Get a nested value from a dictionary using dot notation.

    Args:
        data: Dictionary to search
        key_path: Dot-separated path (e.g., "logging.level")

    Returns:
        Value if found, None otherwise
    """
    if not key_path:
        return None

    current = data
    for key in key_path.split("."):
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]

    return current


def validate_yaml_structure(config_data: Dict[str, Any]) -> bool:
    """
    Validate that the YAML configuration has the expected structure.

    Unknown sections only produce a warning; a known section that is not a
    mapping makes the whole file invalid.
    """
    if not isinstance(config_data, dict):
        return False

    for key in config_data.keys():
        if key not in VALID_SECTIONS:
            logger.warning(f"Unknown configuration section: {key}")

    for key, value in config_data.items():
        if key in VALID_SECTIONS and not isinstance(value, dict):
            logger.error(f"Configuration section '{key}' must be a dictionary")
            return False

    return True


def create_sample_config() -> str:
    """
    Create a sample .featurematch.yml configuration file content.

    Returns:
        String containing sample YAML configuration with comments
    """
    return """# featurematch Configuration File
# All settings are optional - if not specified, environment variables
# (FEATUREMATCH_*) and built-in defaults will be used.

# Static catalog location
catalog:
  directory: null                  # Directory with categories.json and features.json (null = bundled)

# Logging configuration
logging:
  level: "INFO"                    # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
  file: null                       # Log file path (null for console only)
"""


def get_config_file_path(directory: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the path where the .featurematch.yml configuration file should be located.

    Args:
        directory: Directory path. Defaults to current working directory.

    Returns:
        Path to .featurematch.yml file (may or may not exist)
    """
    if directory is None:
        directory = Path.cwd()
    else:
        directory = Path(directory)

    return directory / CONFIG_FILE_NAME
