"""Unit tests for preprocessing configuration loader."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.preprocessing.config_loader import (
    DEFAULT_CONFIG_PATH,
    MRZProfileConfig,
    OCRProfileConfig,
    PreprocessingModuleConfig,
    RegionProfileConfig,
    get_default_config,
    load_config,
)


class TestOCRProfileConfig:
    """Test OCRProfileConfig model."""

    def test_default_values(self):
        """Test default OCR profile."""
        config = OCRProfileConfig()
        assert config.clahe_clip_limit == 2.0
        assert config.clahe_tile_size == 8
        assert config.denoise_strength == 10.0
        assert config.denoise_template_window == 7
        assert config.denoise_search_window == 21
        assert config.threshold_block_size == 15
        assert config.threshold_c == 10
        assert config.median_blur_size == 3

    def test_even_block_size_rejected(self):
        """Test that an even threshold block size is rejected."""
        with pytest.raises(ValidationError, match="block size must be odd"):
            OCRProfileConfig(threshold_block_size=16)

    def test_non_positive_clip_limit_rejected(self):
        """Test that clip limit must be positive."""
        with pytest.raises(ValidationError):
            OCRProfileConfig(clahe_clip_limit=0.0)


class TestMRZProfileConfig:
    """Test MRZProfileConfig model."""

    def test_default_values(self):
        """Test default MRZ profile."""
        config = MRZProfileConfig()
        assert config.top_ratio == 0.72
        assert config.blur_kernel_size == 3
        assert config.threshold_block_size == 13
        assert config.threshold_c == 10

    def test_top_ratio_bounds(self):
        """Test that top_ratio must lie in [0, 1)."""
        with pytest.raises(ValidationError):
            MRZProfileConfig(top_ratio=1.0)

    def test_even_blur_kernel_rejected(self):
        """Test that an even blur kernel is rejected."""
        with pytest.raises(ValidationError, match="block size must be odd"):
            MRZProfileConfig(blur_kernel_size=4)


class TestRegionProfileConfig:
    """Test RegionProfileConfig model."""

    def test_default_values(self):
        """Test default region profile."""
        config = RegionProfileConfig()
        assert config.clahe_clip_limit == 3.0
        assert config.clahe_tile_size == 4
        assert config.close_kernel_size == 1


class TestLoadConfig:
    """Test configuration loading from YAML."""

    def test_bundled_config_matches_defaults(self):
        """Test that config.yaml reproduces the model defaults."""
        assert load_config(DEFAULT_CONFIG_PATH) == PreprocessingModuleConfig()

    def test_get_default_config(self):
        """Test that the default config is loaded once and shared."""
        config = get_default_config()
        assert isinstance(config, PreprocessingModuleConfig)
        assert get_default_config() is config

    def test_partial_config_uses_defaults(self, tmp_path):
        """Test that omitted keys fall back to defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"mrz_profile": {"top_ratio": 0.7}}))

        config = load_config(path)

        assert config.mrz_profile.top_ratio == 0.7
        assert config.mrz_profile.threshold_block_size == 13
        assert config.ocr_profile.threshold_block_size == 15

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test that an empty YAML file yields the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path) == PreprocessingModuleConfig()

    def test_invalid_value_raises(self, tmp_path):
        """Test that invalid values raise ValidationError."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"ocr_profile": {"threshold_block_size": 2}}))

        with pytest.raises(ValidationError):
            load_config(path)

    def test_missing_file_raises(self):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config(Path("nonexistent_preprocessing.yaml"))
