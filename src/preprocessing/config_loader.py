"""Configuration loader with Pydantic validation for the preprocessing module.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values. Defaults reproduce the
tuned binarization profiles, so the bundled config.yaml is optional.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator


def _odd_block(v: int) -> int:
    """Adaptive threshold block sizes must be odd."""
    if v % 2 == 0:
        raise ValueError(f"block size must be odd, got {v}")
    return v


class OCRProfileConfig(BaseModel):
    """General-purpose OCR binarization profile (whole card).

    Attributes:
        clahe_clip_limit: CLAHE clip limit
        clahe_tile_size: CLAHE tile grid size (square)
        denoise_strength: Non-local means filter strength (h)
        denoise_template_window: Non-local means template window size
        denoise_search_window: Non-local means search window size
        threshold_block_size: Adaptive threshold block size (odd)
        threshold_c: Adaptive threshold constant
        close_kernel_size: Morphological close kernel (1 keeps the image as is)
        median_blur_size: Median blur aperture for speckle removal (odd)
    """

    clahe_clip_limit: float = Field(default=2.0, gt=0.0)
    clahe_tile_size: int = Field(default=8, ge=1)
    denoise_strength: float = Field(default=10.0, ge=0.0)
    denoise_template_window: int = Field(default=7, ge=1)
    denoise_search_window: int = Field(default=21, ge=1)
    threshold_block_size: int = Field(default=15, ge=3)
    threshold_c: int = 10
    close_kernel_size: int = Field(default=1, ge=1)
    median_blur_size: int = Field(default=3, ge=1)

    @field_validator("threshold_block_size", "median_blur_size")
    @classmethod
    def _check_odd(cls, v: int) -> int:
        return _odd_block(v)


class MRZProfileConfig(BaseModel):
    """Light MRZ binarization profile.

    Skips CLAHE and denoising, which erode the thin OCR-B strokes.

    Attributes:
        top_ratio: MRZ band starts at this fraction of the card height
        blur_kernel_size: Gaussian blur kernel (odd)
        threshold_block_size: Adaptive threshold block size (odd)
        threshold_c: Adaptive threshold constant
    """

    top_ratio: float = Field(default=0.72, ge=0.0, lt=1.0)
    blur_kernel_size: int = Field(default=3, ge=1)
    threshold_block_size: int = Field(default=13, ge=3)
    threshold_c: int = 10

    @field_validator("blur_kernel_size", "threshold_block_size")
    @classmethod
    def _check_odd(cls, v: int) -> int:
        return _odd_block(v)


class RegionProfileConfig(BaseModel):
    """Field region binarization profile.

    Block size and constant come from each region definition; these are the
    shared contrast parameters.

    Attributes:
        clahe_clip_limit: CLAHE clip limit
        clahe_tile_size: CLAHE tile grid size (square)
        close_kernel_size: Morphological close kernel
    """

    clahe_clip_limit: float = Field(default=3.0, gt=0.0)
    clahe_tile_size: int = Field(default=4, ge=1)
    close_kernel_size: int = Field(default=1, ge=1)


class ContrastConfig(BaseModel):
    """Standalone contrast enhancement.

    Attributes:
        clahe_clip_limit: CLAHE clip limit
        clahe_tile_size: CLAHE tile grid size (square)
    """

    clahe_clip_limit: float = Field(default=2.0, gt=0.0)
    clahe_tile_size: int = Field(default=8, ge=1)


class PreprocessingModuleConfig(BaseModel):
    """Complete preprocessing module configuration.

    Attributes:
        ocr_profile: Whole-card binarization
        mrz_profile: MRZ band binarization
        region_profile: Field region binarization
        contrast: Standalone contrast enhancement
    """

    ocr_profile: OCRProfileConfig = Field(default_factory=OCRProfileConfig)
    mrz_profile: MRZProfileConfig = Field(default_factory=MRZProfileConfig)
    region_profile: RegionProfileConfig = Field(default_factory=RegionProfileConfig)
    contrast: ContrastConfig = Field(default_factory=ContrastConfig)


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

_default_config: Optional[PreprocessingModuleConfig] = None


def load_config(config_path: Path) -> PreprocessingModuleConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated PreprocessingModuleConfig

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("src/preprocessing/config.yaml"))
        >>> print(config.mrz_profile.threshold_block_size)
        13
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    return PreprocessingModuleConfig(**config_dict)


def get_default_config() -> PreprocessingModuleConfig:
    """Get default configuration from bundled config.yaml file.

    Falls back to the hardcoded defaults if the file is missing. The result
    is loaded once and shared; callers must treat it as read-only.

    Example:
        >>> config = get_default_config()
        >>> print(config.ocr_profile.threshold_block_size)
        15
    """
    global _default_config
    if _default_config is None:
        if DEFAULT_CONFIG_PATH.exists():
            _default_config = load_config(DEFAULT_CONFIG_PATH)
        else:
            _default_config = PreprocessingModuleConfig()
    return _default_config
