"""
Configuration Management for Analytic MEG

Loads sphere model and evaluation parameters from YAML config files with
fallback to hardcoded defaults in physics.constants.

Usage:
    from analytic_meg.config import load_config, get_config_path

    cfg = load_config()  # Load default config
    cfg = load_config("configs/custom.yaml")  # Load custom config

    # Access parameters
    center = cfg["sphere"]["center"]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# File is at: src/analytic_meg/config.py
# Project root: src/analytic_meg -> src -> project_root
_THIS_FILE = Path(__file__)
PROJECT_ROOT = _THIS_FILE.parent.parent.parent

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "default_meg.yaml"


def get_config_path(config_name: str = "default_meg.yaml") -> Path:
    """
    Get the full path to a config file.

    Parameters
    ----------
    config_name : str
        Name of the config file (with or without .yaml extension).

    Returns
    -------
    Path
        Full path to the config file.
    """
    if not config_name.endswith(".yaml"):
        config_name = f"{config_name}.yaml"
    return PROJECT_ROOT / "configs" / config_name


def get_default_config() -> dict[str, Any]:
    """
    Return hardcoded default configuration.

    Used as fallback when config file is missing.
    """
    # Import here to avoid circular imports
    from analytic_meg.physics.constants import (
        DEFAULT_SCALING_FACTOR,
        DEFAULT_SPHERE_CENTER,
        DEGENERACY_TOLERANCE,
    )

    return {
        "sphere": {
            "center": list(DEFAULT_SPHERE_CENTER),
            "scaling_factor": DEFAULT_SCALING_FACTOR,
        },
        "evaluation": {
            "component": "total",
            "degeneracy_tolerance": DEGENERACY_TOLERANCE,
        },
        "logging": {
            "level": "INFO",
        },
    }


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file. If None, uses default_meg.yaml.
        If file doesn't exist, falls back to hardcoded defaults.

    Returns
    -------
    dict
        Configuration dictionary.

    Raises
    ------
    None
        This function never raises; it gracefully falls back to defaults.

    Examples
    --------
    >>> cfg = load_config()
    >>> cfg["sphere"]["scaling_factor"]
    1.0
    """
    config, errors = load_config_safe(config_path)
    for message in errors:
        logger.warning(message)
    return config


def load_config_safe(
    config_path: str | Path | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Load configuration with detailed error reporting.

    Unlike load_config(), this function returns error messages
    for debugging and user feedback.

    Parameters
    ----------
    config_path : str or Path, optional
        Path to YAML config file.

    Returns
    -------
    tuple[dict, list[str]]
        (config_dict, error_messages). Config is always valid (defaults used on error).
        error_messages is empty if load succeeded.
    """
    errors = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        errors.append(f"Config file not found: {config_path}. Using defaults.")
        return get_default_config(), errors

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
        if config is None:
            errors.append(f"Config file is empty: {config_path}. Using defaults.")
            return get_default_config(), errors
        if not isinstance(config, dict):
            errors.append(
                f"Config file {config_path} must contain a mapping of sections, "
                f"got {type(config).__name__}. Using defaults."
            )
            return get_default_config(), errors
        defaults = get_default_config()
        for section, values in defaults.items():
            if not isinstance(config.get(section), dict):
                if section in config:
                    errors.append(
                        f"Config section '{section}' must be a mapping, "
                        f"got {type(config[section]).__name__}. Using defaults."
                    )
                config[section] = values
        return config, errors
    except yaml.YAMLError as e:
        errors.append(
            f"YAML parse error in {config_path}: {e}. "
            "Check indentation and syntax. Using defaults."
        )
        return get_default_config(), errors
    except IOError as e:
        errors.append(f"Cannot read {config_path}: {e}. Using defaults.")
        return get_default_config(), errors
