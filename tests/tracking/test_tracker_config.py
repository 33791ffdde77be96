"""
Unit tests for tracker config_loader module.

Tests configuration loading, validation, saving and default values.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.markers.types import ColorThresholds, DetectionConfig
from src.orientation.types import ToleranceConfig
from src.tracking.config_loader import (
    CameraConfig,
    DisplayConfig,
    TrackerConfig,
    get_default_config,
    load_config,
    save_config,
)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_default_config(self):
        """Test loading the bundled configuration file."""
        config = get_default_config()

        assert isinstance(config, TrackerConfig)
        assert config.detection.cluster_radius == 100.0
        assert config.detection.stride == 2
        assert config.detection.colors.brightness_floor == 110
        assert config.detection.colors.dominance_ratio == 0.5
        assert config.detection.colors.pink_blue_floor == 80
        assert config.tolerance.collinearity_threshold == 50.0
        assert config.tolerance.order_threshold == 50.0
        assert config.tolerance.interval_tolerance == 0.8
        assert config.camera.index == 0
        assert config.camera.width is None

    def test_load_custom_config(self, tmp_path):
        """Test loading a custom configuration file."""
        custom_config = {
            "detection": {"cluster_radius": 60, "stride": 1},
            "tolerance": {
                "collinearity_threshold": 20,
                "order_threshold": 10,
                "interval_tolerance": 0.3,
            },
            "camera": {"index": 2, "width": 1280, "height": 720},
        }

        config_file = tmp_path / "tracker.yaml"
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.dump(custom_config, f)

        config = load_config(config_file)

        assert config.detection.cluster_radius == 60.0
        assert config.detection.stride == 1
        assert config.tolerance.order_threshold == 10.0
        assert config.tolerance.interval_tolerance == 0.3
        assert config.camera.width == 1280
        # Sections and fields not in the file keep their defaults
        assert config.detection.colors == ColorThresholds()
        assert config.display == DisplayConfig()

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test that an empty YAML file yields the default configuration."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_config(config_file) == TrackerConfig()

    def test_missing_file_raises_error(self):
        """Test that missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(Path("nonexistent_config.yaml"))

    def test_invalid_tolerance_rejected(self, tmp_path):
        """Test that an interval tolerance above 1 is rejected."""
        config_file = tmp_path / "bad.yaml"
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.dump({"tolerance": {"interval_tolerance": 1.5}}, f)

        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_invalid_stride_rejected(self, tmp_path):
        """Test that a zero stride is rejected."""
        config_file = tmp_path / "bad.yaml"
        with open(config_file, "w", encoding="utf-8") as f:
            yaml.dump({"detection": {"stride": 0}}, f)

        with pytest.raises(ValidationError):
            load_config(config_file)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip_runtime_change(self, tmp_path):
        """Test that a runtime tolerance change survives save and load."""
        config = TrackerConfig()
        config.tolerance.interval_tolerance = 0.35

        config_file = tmp_path / "nested" / "tracker.yaml"
        save_config(config, config_file)
        reloaded = load_config(config_file)

        assert reloaded.tolerance.interval_tolerance == 0.35
        assert reloaded == config

    def test_writes_plain_yaml(self, tmp_path):
        """Test that the saved file is readable YAML with all sections."""
        config_file = tmp_path / "tracker.yaml"
        save_config(TrackerConfig(), config_file)

        with open(config_file, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        assert set(raw) == {"detection", "tolerance", "camera", "display"}
        assert raw["tolerance"]["interval_tolerance"] == 0.8


class TestConfigModels:
    """Tests for individual configuration models."""

    def test_default_sections(self):
        """Test default section types."""
        config = TrackerConfig()

        assert isinstance(config.detection, DetectionConfig)
        assert isinstance(config.tolerance, ToleranceConfig)
        assert isinstance(config.camera, CameraConfig)

    def test_negative_camera_index_rejected(self):
        """Test camera index validation."""
        with pytest.raises(ValidationError):
            CameraConfig(index=-1)

    def test_dominance_ratio_bounds(self):
        """Test color threshold validation."""
        with pytest.raises(ValidationError):
            ColorThresholds(dominance_ratio=0.0)
