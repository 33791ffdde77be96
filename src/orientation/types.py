"""
Data types and structures for the Orientation module.

Provides type-safe containers for tolerance configuration, geometric
validation verdicts and heading results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.common.types import Point


class ToleranceConfig(BaseModel):
    """Tolerances for geometric validation.

    The model validates on assignment so the interval tolerance can be
    adjusted at runtime without bypassing its bounds.

    Attributes:
        collinearity_threshold: Max distance (px) of pink from the red-green line.
        order_threshold: Max slack (px) of dRP + dPG - dRG for pink to count as
            lying between red and green.
        interval_tolerance: Relative slack for pink sitting at the midpoint.
    """

    collinearity_threshold: float = Field(default=50.0, gt=0.0)
    order_threshold: float = Field(default=50.0, gt=0.0)
    interval_tolerance: float = Field(default=0.8, ge=0.0, le=1.0)

    model_config = {"validate_assignment": True}


class ValidationStatus(Enum):
    """Geometric validation outcomes."""

    VALID = "VALID"
    INVALID = "INVALID"


class InvalidReason(Enum):
    """Specific reasons for an invalid marker set."""

    INSUFFICIENT_MARKERS = "Insufficient Markers"  # At least one color missing
    NOT_COLLINEAR = "Not Collinear"  # Pink too far from the red-green line
    WRONG_ORDER = "Wrong Order"  # Pink not between red and green
    UNEQUAL_INTERVALS = "Unequal Intervals"  # Pink not near the midpoint
    NONE = "None"  # No rejection (passed all checks)


@dataclass
class ValidationResult:
    """
    Output from geometric validation.

    Attributes:
        status: VALID or INVALID.
        reason: Specific reason if invalid, NONE otherwise.
        line_distance: Distance of pink from the red-green line (None if not computed).
        dist_red_pink: dRP (None if not computed).
        dist_pink_green: dPG (None if not computed).
        dist_red_green: dRG (None if not computed).
    """

    status: ValidationStatus
    reason: InvalidReason
    line_distance: Optional[float] = None
    dist_red_pink: Optional[float] = None
    dist_pink_green: Optional[float] = None
    dist_red_green: Optional[float] = None

    def is_valid(self) -> bool:
        """Check if the marker set passed validation."""
        return self.status == ValidationStatus.VALID

    def get_error_message(self) -> str:
        """Get human-readable status message."""
        if self.is_valid():
            return "Markers aligned"

        reason_messages = {
            InvalidReason.INSUFFICIENT_MARKERS: "Not all dots detected.",
            InvalidReason.NOT_COLLINEAR: (
                f"Detected points are not collinear "
                f"(offset {self.line_distance:.1f}px)."
                if self.line_distance is not None
                else "Detected points are not collinear."
            ),
            InvalidReason.WRONG_ORDER: "Detected points are not in the correct order.",
            InvalidReason.UNEQUAL_INTERVALS: (
                "Center dot is not midway between front and rear dots."
            ),
        }

        return reason_messages.get(self.reason, f"Invalid: {self.reason.value}")


class SteeringDirection(Enum):
    """Which way the object has to turn."""

    LEFT = "left"
    RIGHT = "right"


class SteeringMode(Enum):
    """Rotate in place, or turn first and then rotate."""

    SIMPLE = "simple"  # |rotation| < 90
    COMBINED = "combined"  # |rotation| >= 90


@dataclass(frozen=True)
class HeadingResult:
    """
    Steering correction toward the target.

    Attributes:
        pivot: Midpoint of pink and red, the reference for rotation.
        rotation_degrees: Signed rotation in (-180, 180]; positive turns right
            in image coordinates (y grows downwards).
        direction: LEFT or RIGHT.
        magnitude_percent: Steering strength in [0, 100].
        mode: SIMPLE or COMBINED.
    """

    pivot: Point
    rotation_degrees: float
    direction: SteeringDirection
    magnitude_percent: int
    mode: SteeringMode

    def describe(self) -> str:
        """Operator-facing steering instruction."""
        side = self.direction.value
        if self.mode == SteeringMode.SIMPLE:
            return f"Rotate {side} with factor {self.magnitude_percent}%"
        return f"Turn {side}, then rotate {side} with factor {self.magnitude_percent}%"

    def rotation_text(self) -> str:
        """Signed rotation readout."""
        return f"Rotation toward target: {self.rotation_degrees:.2f} deg"
