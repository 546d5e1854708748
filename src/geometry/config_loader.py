"""
Configuration loader for the Geometry module.

Loads and validates configuration from config.yaml file.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml

from src.geometry.types import DetectionConfig, GeometryConfig, NormalizationConfig

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

VALID_INTERPOLATIONS = ["linear", "cubic", "nearest", "area", "lanczos"]


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> GeometryConfig:
    """
    Load geometry configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated GeometryConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.detection.canny_low, config.detection.canny_high)
        30.0 100.0
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading geometry config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded geometry configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


@lru_cache(maxsize=1)
def get_default_config() -> GeometryConfig:
    """Load the bundled configuration once per process."""
    return load_config(DEFAULT_CONFIG_PATH)


def _parse_config(raw: Dict[str, Any]) -> GeometryConfig:
    """Parse raw dictionary into structured config objects."""
    det = raw["detection"]
    norm = raw["normalization"]

    return GeometryConfig(
        detection=DetectionConfig(
            blur_kernel_size=int(det["blur_kernel_size"]),
            canny_low=float(det["canny_low"]),
            canny_high=float(det["canny_high"]),
            dilate_kernel_size=int(det["dilate_kernel_size"]),
            dilate_iterations=int(det["dilate_iterations"]),
            min_area_ratio=float(det["min_area_ratio"]),
            approx_epsilon_ratio=float(det["approx_epsilon_ratio"]),
            aspect_ratio_min=float(det["aspect_ratio_min"]),
            aspect_ratio_max=float(det["aspect_ratio_max"]),
            full_confidence_area_ratio=float(det["full_confidence_area_ratio"]),
        ),
        normalization=NormalizationConfig(
            target_width=int(norm["target_width"]),
            target_height=int(norm["target_height"]),
            interpolation=str(norm["interpolation"]),
        ),
    )


def _validate_config(config: GeometryConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    det = config.detection

    if det.blur_kernel_size < 1 or det.blur_kernel_size % 2 == 0:
        raise ValueError(
            f"blur_kernel_size must be a positive odd number, got {det.blur_kernel_size}"
        )

    if det.canny_low < 0 or det.canny_low >= det.canny_high:
        raise ValueError(
            f"canny_low ({det.canny_low}) must be non-negative and less than "
            f"canny_high ({det.canny_high})"
        )

    if det.dilate_kernel_size < 1:
        raise ValueError("dilate_kernel_size must be at least 1")

    if det.dilate_iterations < 0:
        raise ValueError("dilate_iterations cannot be negative")

    if not 0.0 <= det.min_area_ratio < 1.0:
        raise ValueError(f"min_area_ratio must be in [0, 1), got {det.min_area_ratio}")

    if det.approx_epsilon_ratio <= 0:
        raise ValueError("approx_epsilon_ratio must be positive")

    if det.aspect_ratio_min <= 0 or det.aspect_ratio_min >= det.aspect_ratio_max:
        raise ValueError(
            f"aspect_ratio_min ({det.aspect_ratio_min}) must be positive and less "
            f"than aspect_ratio_max ({det.aspect_ratio_max})"
        )

    if det.full_confidence_area_ratio <= 0:
        raise ValueError("full_confidence_area_ratio must be positive")

    norm = config.normalization
    if norm.target_width < 2 or norm.target_height < 2:
        raise ValueError(
            f"Target size too small: {norm.target_width}x{norm.target_height}"
        )

    if norm.interpolation not in VALID_INTERPOLATIONS:
        raise ValueError(
            f"Invalid interpolation: {norm.interpolation}. "
            f"Must be one of {VALID_INTERPOLATIONS}"
        )

    logger.debug("Configuration validation passed")
