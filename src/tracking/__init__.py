"""
Tracking: per-frame orchestration and the collaborators around the core.

Provides frame sources (camera, still image), the pointer target provider,
the OpenCV overlay renderer, configuration loading/saving, and the
FrameOrchestrator that ties detection, validation and heading together.
"""

from src.tracking.config_loader import (
    TrackerConfig,
    get_default_config,
    load_config,
    save_config,
)
from src.tracking.frame_sources import (
    CameraFrameSource,
    ImageFrameSource,
    SourceUnavailableError,
)
from src.tracking.orchestrator import (
    FrameOrchestrator,
    TickContext,
    TickOutcome,
    TickStatus,
    process_frame,
)
from src.tracking.target_provider import TargetProvider

__all__ = [
    "FrameOrchestrator",
    "TickContext",
    "TickOutcome",
    "TickStatus",
    "process_frame",
    "CameraFrameSource",
    "ImageFrameSource",
    "SourceUnavailableError",
    "TargetProvider",
    "TrackerConfig",
    "get_default_config",
    "load_config",
    "save_config",
]
