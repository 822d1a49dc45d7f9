"""
Input Validators for Analytic MEG

Provides validation for:
- 3-vectors (coordinates, moments, directions) given as lists or buffers
- 6-vectors describing a dipole, split or concatenated
- YAML configuration file parsing

Every parser fails fast with a descriptive error before any object
is built from the data.
"""

from __future__ import annotations

import array
import logging
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml

logger = logging.getLogger(__name__)

_BUFFER_TYPES = (np.ndarray, memoryview, array.array)


# =============================================================================
# Vector Parsing
# =============================================================================


def _is_buffer(values: Any) -> bool:
    return isinstance(values, _BUFFER_TYPES)


def parse_vector(values: Any, size: int, name: str = "values") -> np.ndarray:
    """
    Validate a list or raw numeric buffer and return it as a float64 array.

    Parameters
    ----------
    values : sequence of float or buffer
        Either a list/tuple of real numbers or a contiguous buffer
        (numpy array, ``array.array``, ``memoryview``) of floating point
        elements.
    size : int
        Required number of elements.
    name : str
        Argument name used in error messages.

    Returns
    -------
    np.ndarray
        A new one-dimensional float64 array of length ``size``.

    Raises
    ------
    TypeError
        If list elements are not real numbers or the buffer element type
        is not floating point.
    ValueError
        If the input is not one-dimensional or has the wrong element count.

    Examples
    --------
    >>> parse_vector([1, 2, 3], 3)
    array([1., 2., 3.])
    >>> parse_vector(np.zeros(4), 3)
    Traceback (most recent call last):
    ...
    ValueError: values must have exactly 3 elements, got 4
    """
    if _is_buffer(values):
        arr = np.asarray(values)
        if arr.dtype.kind != "f":
            raise TypeError(
                f"{name} buffer must hold floating point elements, got dtype {arr.dtype}"
            )
        if arr.ndim != 1:
            raise ValueError(
                f"{name} buffer must be one-dimensional, got shape {arr.shape}"
            )
        if arr.shape[0] != size:
            raise ValueError(
                f"{name} must have exactly {size} elements, got {arr.shape[0]}"
            )
        return np.array(arr, dtype=np.float64)

    if isinstance(values, (str, bytes)) or not hasattr(values, "__len__"):
        raise TypeError(
            f"{name} must be a sequence or buffer of {size} real numbers, "
            f"got {type(values).__name__}"
        )

    items = list(values)
    for i, item in enumerate(items):
        # bool is a numbers.Real subclass but never a coordinate
        if isinstance(item, bool) or not isinstance(item, numbers.Real):
            raise TypeError(
                f"{name}[{i}] must be a real number, got {type(item).__name__}"
            )
    if len(items) != size:
        raise ValueError(
            f"{name} must have exactly {size} elements, got {len(items)}"
        )
    return np.array(items, dtype=np.float64)


def parse_coordinate(values: Any, name: str = "coordinate") -> np.ndarray:
    """Parse a 3-vector. See :func:`parse_vector`."""
    return parse_vector(values, 3, name)


def parse_dipole_split(
    position: Any,
    moment: Any,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Parse a dipole given as separate position and moment 3-vectors.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        (position, moment), each of shape (3,).
    """
    return (
        parse_vector(position, 3, "position"),
        parse_vector(moment, 3, "moment"),
    )


def parse_dipole_combined(values: Any) -> tuple[np.ndarray, np.ndarray]:
    """
    Parse a dipole given as one concatenated 6-vector.

    The layout is ``[px, py, pz, mx, my, mz]``.

    Examples
    --------
    >>> pos, mom = parse_dipole_combined([0, 0, 0.07, 1, 0, 0])
    >>> pos
    array([0.  , 0.  , 0.07])
    >>> mom
    array([1., 0., 0.])
    """
    flat = parse_vector(values, 6, "dipole")
    return flat[:3].copy(), flat[3:].copy()


# =============================================================================
# Configuration File Validation
# =============================================================================


@dataclass
class ConfigValidationResult:
    """Result of YAML configuration file validation.

    Attributes
    ----------
    is_valid : bool
        True if config loaded and validated successfully.
    config : dict | None
        Loaded configuration (None if load failed).
    file_path : Path | None
        Path to the config file (None if using defaults).
    warnings : list[str]
        Non-fatal warnings (e.g., missing optional fields).
    errors : list[str]
        Fatal errors (e.g., parse failures).
    recovery_suggestions : list[str]
        Actionable suggestions for fixing issues.
    """

    is_valid: bool
    config: dict[str, Any] | None
    file_path: Path | None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recovery_suggestions: list[str] = field(default_factory=list)


REQUIRED_CONFIG_SECTIONS = ["sphere", "evaluation"]

# (expected type, min, max) per scalar parameter
CONFIG_TYPE_SPECS = {
    "sphere": {
        "scaling_factor": (float, -1e12, 1e12),
    },
    "evaluation": {
        "degeneracy_tolerance": (float, 0.0, 1.0),
    },
}


def _check_sphere_center(
    config: dict[str, Any],
    strict: bool,
    warnings: list[str],
    errors: list[str],
    suggestions: list[str],
) -> None:
    center = config.get("sphere", {}).get("center")
    if center is None:
        return
    try:
        config["sphere"]["center"] = parse_coordinate(center, "sphere.center").tolist()
    except (TypeError, ValueError) as e:
        message = f"INVALID SPHERE CENTER: {e}."
        if strict:
            errors.append(message)
        else:
            from analytic_meg.config import get_default_config

            warnings.append(f"{message} Using default center.")
            config["sphere"]["center"] = get_default_config()["sphere"]["center"]
        suggestions.append("Write sphere.center as a list of three numbers, e.g. [0.0, 0.0, 0.0].")


def _check_component(
    config: dict[str, Any],
    warnings: list[str],
    errors: list[str],
) -> None:
    from analytic_meg.physics.constants import FIELD_COMPONENTS

    component = config.get("evaluation", {}).get("component")
    if component is not None and component not in FIELD_COMPONENTS:
        errors.append(
            f"UNKNOWN COMPONENT: evaluation.component='{component}', "
            f"expected one of {list(FIELD_COMPONENTS)}."
        )


def validate_config_file(
    config_path: Path | str | None = None,
    strict: bool = False,
) -> ConfigValidationResult:
    """
    Load and validate a YAML configuration file.

    Provides graceful error handling with helpful messages for:
    - Missing files (falls back to defaults)
    - Malformed YAML (syntax errors)
    - Invalid parameter values (type/range checks, sphere center shape)

    Parameters
    ----------
    config_path : Path or str, optional
        Path to YAML config file. If None, uses default_meg.yaml.
    strict : bool
        If True, treat warnings as errors. Default False.

    Returns
    -------
    ConfigValidationResult
        Validation result with loaded config and any issues found.

    Examples
    --------
    >>> result = validate_config_file("nonexistent.yaml")
    >>> result.is_valid  # Falls back to defaults
    True
    >>> len(result.warnings) > 0
    True
    """
    from analytic_meg.config import DEFAULT_CONFIG_PATH, get_default_config

    warnings = []
    errors = []
    suggestions = []

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    config = None
    file_exists = config_path.exists()

    if not file_exists:
        warnings.append(
            f"CONFIG FILE NOT FOUND: '{config_path}' does not exist. "
            "Using built-in defaults."
        )
        suggestions.append(
            f"Create config file at '{config_path}' or use load_config() without path."
        )
        config = get_default_config()
    else:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is None:
                warnings.append(
                    f"CONFIG FILE EMPTY: '{config_path}' contains no data. "
                    "Using built-in defaults."
                )
                config = get_default_config()
        except yaml.YAMLError as e:
            errors.append(f"YAML PARSE ERROR in '{config_path}': {str(e)}")
            suggestions.append(
                "Check YAML syntax: proper indentation (2 spaces), "
                "colons after keys, no tabs."
            )
            config = get_default_config()
        except IOError as e:
            errors.append(f"FILE READ ERROR for '{config_path}': {str(e)}")
            suggestions.append("Check file permissions and path.")
            config = get_default_config()

    if not isinstance(config, dict):
        errors.append(
            f"INVALID STRUCTURE: top level of '{config_path}' must be a mapping, "
            f"got {type(config).__name__}."
        )
        config = get_default_config()

    for section in REQUIRED_CONFIG_SECTIONS:
        if section not in config:
            if strict:
                errors.append(f"MISSING REQUIRED SECTION: '{section}' not found in config.")
            else:
                warnings.append(f"MISSING SECTION: '{section}' not found. Using defaults.")
            config[section] = get_default_config()[section]
        elif not isinstance(config[section], dict):
            errors.append(
                f"INVALID SECTION: '{section}' must be a mapping, "
                f"got {type(config[section]).__name__}."
            )
            config[section] = get_default_config()[section]

    for section, specs in CONFIG_TYPE_SPECS.items():
        if section not in config:
            continue
        for param, (expected_type, min_val, max_val) in specs.items():
            if param not in config[section]:
                continue
            value = config[section][param]

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                if strict:
                    errors.append(
                        f"TYPE ERROR: {section}.{param} should be {expected_type.__name__}, "
                        f"got {type(value).__name__}."
                    )
                    continue
                warnings.append(
                    f"TYPE WARNING: {section}.{param} should be {expected_type.__name__}, "
                    f"got {type(value).__name__}. Attempting conversion."
                )
                try:
                    value = expected_type(value)
                    config[section][param] = value
                except (ValueError, TypeError):
                    errors.append(
                        f"CONVERSION FAILED: Cannot convert {section}.{param} "
                        f"value '{value}' to {expected_type.__name__}."
                    )
                    continue

            if value < min_val or value > max_val:
                warnings.append(
                    f"RANGE WARNING: {section}.{param}={value} is outside "
                    f"expected range [{min_val}, {max_val}]."
                )

    _check_sphere_center(config, strict, warnings, errors, suggestions)
    _check_component(config, warnings, errors)

    is_valid = len(errors) == 0
    if strict:
        is_valid = is_valid and len(warnings) == 0

    for message in warnings:
        logger.warning(message)

    return ConfigValidationResult(
        is_valid=is_valid,
        config=config,
        file_path=config_path if file_exists else None,
        warnings=warnings,
        errors=errors,
        recovery_suggestions=suggestions,
    )
