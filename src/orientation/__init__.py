"""
Orientation: marker pattern validation and heading computation.

Pipeline stages:
1. Geometric validation (presence, collinearity, ordering, equal intervals)
2. Pivot and rotation toward the target
3. Steering classification (direction, magnitude, mode)
"""

from src.orientation.geometric_validator import validate_markers
from src.orientation.heading import compute_heading, normalize_angle
from src.orientation.types import (
    HeadingResult,
    InvalidReason,
    SteeringDirection,
    SteeringMode,
    ToleranceConfig,
    ValidationResult,
    ValidationStatus,
)

__all__ = [
    "validate_markers",
    "compute_heading",
    "normalize_angle",
    "HeadingResult",
    "InvalidReason",
    "SteeringDirection",
    "SteeringMode",
    "ToleranceConfig",
    "ValidationResult",
    "ValidationStatus",
]
