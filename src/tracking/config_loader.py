"""Configuration loader with Pydantic validation for the tracker.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values, and saving of settings
adjusted at runtime.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from src.markers.types import DetectionConfig
from src.orientation.types import ToleranceConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class DisplayConfig(BaseModel):
    """Display window configuration for the interactive driver.

    Attributes:
        window_name: Title of the OpenCV window.
        frame_delay_ms: Delay passed to cv2.waitKey between ticks.
        draw_status: Overlay the status and steering text on the frame.
    """

    window_name: str = "Marker Heading"
    frame_delay_ms: int = Field(default=30, ge=1)
    draw_status: bool = True


class CameraConfig(BaseModel):
    """Camera capture configuration.

    Attributes:
        index: OpenCV device index.
        width: Requested capture width (None keeps the device default).
        height: Requested capture height (None keeps the device default).
    """

    index: int = Field(default=0, ge=0)
    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)


class TrackerConfig(BaseModel):
    """Complete tracker configuration.

    Attributes:
        detection: Clustering and color threshold configuration.
        tolerance: Geometric validation tolerances.
        camera: Capture device configuration.
        display: Interactive window configuration.
    """

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def load_config(config_path: Path) -> TrackerConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file.

    Returns:
        Validated TrackerConfig object with all settings.

    Raises:
        FileNotFoundError: If config file does not exist.
        yaml.YAMLError: If YAML parsing fails.
        pydantic.ValidationError: If configuration validation fails.

    Example:
        >>> config = load_config(Path("src/tracking/config.yaml"))
        >>> print(config.tolerance.interval_tolerance)
        0.8
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading tracker config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    config = TrackerConfig(**config_dict)
    logger.info(f"Loaded tracker configuration from {config_path}")
    return config


def get_default_config() -> TrackerConfig:
    """Get default configuration from bundled config.yaml file.

    Returns:
        TrackerConfig loaded from src/tracking/config.yaml, or the model
        defaults if the bundled file is missing.
    """
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return TrackerConfig()


def save_config(config: TrackerConfig, config_path: Path) -> None:
    """Persist configuration to a YAML file.

    Used to keep runtime adjustments (e.g. the interval tolerance slider)
    across sessions.

    Args:
        config: Configuration to write.
        config_path: Destination YAML file. Parent directories are created.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config.model_dump(mode="json"),
            f,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info(f"Saved tracker configuration to {config_path}")
